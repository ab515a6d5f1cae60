"""
Restriction distances.

Heuristic "how far from a hand of this kind" numbers, built by stripping the
tiles a restriction forbids (each one costs a discard) and measuring the
shanten of what is left at its own meld target. Smaller is closer.
"""
from __future__ import annotations
from typing import Optional, Sequence

from handmetrics.shanten import calc_all
from handmetrics.tables import ShantenTables
from handmetrics.tiles import NUM_TILES, is_honor, is_main_suit, is_terminal_or_honor

# Added when nothing usable for the restriction is left in hand. A tuning
# value kept as is; it only needs to be larger than any real shanten.
UNREACHABLE_PENALTY = 8


def tanyao_distance(tiles: Sequence[int], tables: Optional[ShantenTables] = None) -> int:
    """All-simples: terminals/honors to throw + shanten of the 2..8 tiles."""
    middle = [0] * NUM_TILES
    t_count = 0
    for i, c in enumerate(tiles):
        if c == 0:
            continue
        if is_terminal_or_honor(i):
            t_count += int(c)
        else:
            middle[i] = c

    count_mid = sum(middle)
    if count_mid == 0:
        return t_count + UNREACHABLE_PENALTY
    return t_count + calc_all(middle, count_mid // 3, tables)


def honitsu_distance_for_suit(tiles: Sequence[int], suit: int, tables: Optional[ShantenTables] = None) -> int:
    """Half-flush in `suit` (0=m, 1=p, 2=s): off-colour tiles + shanten of suit+honors."""
    filtered = [0] * NUM_TILES
    off_color = 0
    for i, c in enumerate(tiles):
        if c == 0:
            continue
        if is_main_suit(i, suit) or is_honor(i):
            filtered[i] = c
        else:
            off_color += int(c)

    count_f = sum(filtered)
    if count_f == 0:
        return off_color + UNREACHABLE_PENALTY
    return off_color + calc_all(filtered, count_f // 3, tables)
