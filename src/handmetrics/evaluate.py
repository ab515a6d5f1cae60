from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from handmetrics.distance import honitsu_distance_for_suit, tanyao_distance
from handmetrics.shanten import calc_chitoi, calc_kokushi, calc_normal
from handmetrics.tables import ShantenTables, get_tables
from handmetrics.tiles import MAX_COPIES, MAX_HAND, NUM_SUITS, NUM_TILES

HonitsuTuple = Tuple[int, int, int]
HandTuple = Tuple[int, int, int, int, HonitsuTuple]
DiscardTuple = Tuple[int, int, int, int, int, HonitsuTuple]


class HandValidationError(ValueError):
    """Input is not a 34-slot count vector this engine can evaluate."""


@dataclass(frozen=True)
class HandMetrics:
    normal_shanten: int
    chiitoi_shanten: int
    kokushi_shanten: int
    tanyao_distance: int
    honitsu_distance: HonitsuTuple  # (man, pin, sou)

    def as_tuple(self) -> HandTuple:
        return (self.normal_shanten, self.chiitoi_shanten, self.kokushi_shanten,
                self.tanyao_distance, self.honitsu_distance)


@dataclass(frozen=True)
class DiscardMetrics:
    tile_index: int  # 0..33
    normal_shanten: int
    chiitoi_shanten: int
    kokushi_shanten: int
    tanyao_distance: int
    honitsu_distance: HonitsuTuple  # (man, pin, sou)

    def as_tuple(self) -> DiscardTuple:
        return (self.tile_index, self.normal_shanten, self.chiitoi_shanten, self.kokushi_shanten,
                self.tanyao_distance, self.honitsu_distance)


def _metrics(tiles: Sequence[int], tables: ShantenTables) -> HandMetrics:
    len_div3 = sum(tiles) // 3
    return HandMetrics(
        normal_shanten=calc_normal(tiles, len_div3, tables),
        chiitoi_shanten=calc_chitoi(tiles),
        kokushi_shanten=calc_kokushi(tiles),
        tanyao_distance=tanyao_distance(tiles, tables),
        honitsu_distance=tuple(honitsu_distance_for_suit(tiles, s, tables) for s in range(NUM_SUITS)),
    )


def eval_hand(tiles: Sequence[int], tables: Optional[ShantenTables] = None) -> HandMetrics:
    """Metric bundle for `tiles` as given (meld target = tile count // 3)."""
    tiles = [int(c) for c in tiles]
    return _metrics(tiles, tables or get_tables())


def eval_discards(tiles: Sequence[int], tables: Optional[ShantenTables] = None) -> List[DiscardMetrics]:
    """Metric bundle after discarding one copy of each held kind, by kind index."""
    tiles = [int(c) for c in tiles]
    tables = tables or get_tables()
    result = []
    for i in range(NUM_TILES):
        if tiles[i] == 0:
            continue
        tmp = list(tiles)
        tmp[i] -= 1
        m = _metrics(tmp, tables)
        result.append(DiscardMetrics(
            tile_index=i,
            normal_shanten=m.normal_shanten,
            chiitoi_shanten=m.chiitoi_shanten,
            kokushi_shanten=m.kokushi_shanten,
            tanyao_distance=m.tanyao_distance,
            honitsu_distance=m.honitsu_distance,
        ))
    return result


# ----------------------------
# Validating entry points
# ----------------------------
def validate_hand(hand: Sequence[int]) -> List[int]:
    """Return `hand` as a list of ints, or raise HandValidationError."""
    try:
        counts = list(hand)
    except TypeError as e:
        raise HandValidationError("hand must be a sequence of 34 tile counts") from e
    if len(counts) != NUM_TILES:
        raise HandValidationError(f"hand must be length {NUM_TILES} (0..33 tile counts), got {len(counts)}")

    out = []
    for i, raw in enumerate(counts):
        try:
            c = int(raw)
        except (TypeError, ValueError):
            c = None
        if c is None or isinstance(raw, bool) or c != raw:
            raise HandValidationError(f"tile count at index {i} must be an integer, got {raw!r}")
        if not 0 <= c <= MAX_COPIES:
            raise HandValidationError(f"tile count at index {i} must be within [0, {MAX_COPIES}], got {c}")
        out.append(c)

    if sum(out) > MAX_HAND:
        raise HandValidationError(f"hand holds {sum(out)} tiles, at most {MAX_HAND} are supported")
    return out


def evaluate_hand(hand: Sequence[int]) -> HandTuple:
    """(normal, chiitoi, kokushi, tanyao, (honitsu_man, honitsu_pin, honitsu_sou))"""
    return eval_hand(validate_hand(hand)).as_tuple()


def evaluate_discards(hand: Sequence[int]) -> List[DiscardTuple]:
    """[(tile_index, normal, chiitoi, kokushi, tanyao, (h_man, h_pin, h_sou)), ...]"""
    return [d.as_tuple() for d in eval_discards(validate_hand(hand))]
