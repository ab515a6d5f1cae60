"""
Group merge
-----------

A 4-melds-plus-pair hand splits into independent groups (three suits, one
honor group), so the best cost for the whole hand is the best way to share
the melds, and the pair, between groups. Each group's options are one table
entry; `add_suit` / `add_honor` fold one more entry into a running 10-slot
accumulator for a meld budget `m` (0..4).

Slot layout (both for entries and the accumulator):
    acc[j]     best cost with j melds, no pair      (j = 0..4)
    acc[5 + j] best cost with j melds and the pair  (j = 0..4)
"""
from __future__ import annotations
from typing import List, Sequence

PAIR = 5


def _pair_slot(acc: Sequence[int], new: Sequence[int], j: int) -> int:
    # the pair comes from either side; melds are split at every k
    best = min(acc[j] + new[0], acc[0] + new[j])
    for k in range(PAIR, j):
        best = min(best, acc[k] + new[j - k], acc[j - k] + new[k])
    return best


def add_suit(acc: List[int], new: Sequence[int], m: int) -> List[int]:
    """Merge a suit group's entry into `acc` in place and return it."""
    # pair slots first: they read the non-pair slots before those are updated
    for j in range(PAIR + m, PAIR - 1, -1):
        acc[j] = _pair_slot(acc, new, j)

    for j in range(m, -1, -1):
        best = acc[j] + new[0]
        for k in range(j):
            best = min(best, acc[k] + new[j - k])
        acc[j] = best
    return acc


def add_honor(acc: List[int], new: Sequence[int], m: int) -> List[int]:
    """Merge the honor group, the last group, so only the final slot matters."""
    j = PAIR + m
    acc[j] = _pair_slot(acc, new, j)
    return acc
