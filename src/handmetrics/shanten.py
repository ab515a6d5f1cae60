from __future__ import annotations
from typing import Optional, Sequence

from handmetrics.merge import PAIR, add_honor, add_suit
from handmetrics.tables import ShantenTables, get_tables
from handmetrics.tiles import TERMINALS_AND_HONORS, base5_index, group_slices

AGARI = -1


def calc_normal(tiles: Sequence[int], len_div3: int, tables: Optional[ShantenTables] = None) -> int:
    """Standard (4 melds + pair) shanten; -1 means the hand is complete.

    `len_div3` is the number of melds evaluated against, 0..4. Table values
    are "tiles still to draw", i.e. shanten + 1.
    """
    if not 0 <= len_div3 <= 4:
        raise ValueError(f"len_div3 must be within [0, 4], got {len_div3}")
    tables = tables or get_tables()

    man, pin, sou, honors = group_slices()
    ret = tables.suit_entry(base5_index(tiles[man]))
    add_suit(ret, tables.suit_entry(base5_index(tiles[pin])), len_div3)
    add_suit(ret, tables.suit_entry(base5_index(tiles[sou])), len_div3)
    add_honor(ret, tables.honor_entry(base5_index(tiles[honors])), len_div3)

    return ret[PAIR + len_div3] - 1


def calc_chitoi(tiles: Sequence[int]) -> int:
    """Seven pairs shanten: 6 - pairs, plus one per missing distinct kind."""
    kinds = sum(1 for c in tiles if c > 0)
    pairs = sum(1 for c in tiles if c >= 2)
    return 6 - pairs + max(0, 7 - kinds)


def calc_kokushi(tiles: Sequence[int]) -> int:
    """Thirteen orphans shanten over the 13 terminal/honor kinds."""
    kinds = sum(1 for i in TERMINALS_AND_HONORS if tiles[i] > 0)
    has_pair = any(tiles[i] >= 2 for i in TERMINALS_AND_HONORS)
    return 13 - kinds - (1 if has_pair else 0)


def calc_all(tiles: Sequence[int], len_div3: int, tables: Optional[ShantenTables] = None) -> int:
    """Minimum of standard, seven pairs and thirteen orphans shanten.

    The special shapes only exist for a full hand (len_div3 == 4). They are
    skipped only when the standard shanten is already negative, so a tenpai
    standard hand (0) still checks seven pairs and thirteen orphans rather
    than stopping at 0.
    """
    shanten = calc_normal(tiles, len_div3, tables)
    if shanten < 0 or len_div3 < 4:
        return shanten

    shanten = min(shanten, calc_chitoi(tiles))
    if shanten >= 0:
        shanten = min(shanten, calc_kokushi(tiles))
    return shanten
