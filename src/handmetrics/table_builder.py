"""
Offline generator for the shanten lookup assets.

Slot j of an entry is how many tiles a group must still draw to become j
melds (slots 0..4), or j melds plus a pair (slots 5..9). A target is any
complete shape that holds at most four copies of each kind, and drawing
towards it costs sum(max(0, target - hand)) over the kinds.

Targets are built kind by kind, left to right. The state after a kind is
(melds, pair, runs started one kind back, runs started at this kind), and
the hand's digits are walked in the same order, so the whole table is one
numpy pass per kind over every base-5 prefix at once. Suit groups form
triplets and runs, the honor group only triplets.
"""
from __future__ import annotations
import gzip
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np
from tqdm import tqdm

from handmetrics.tables import ENTRY_SLOTS, HONOR_TABLE_SIZE, SUIT_TABLE_SIZE
from handmetrics.tiles import HONOR_SIZE, MAX_COPIES, SUIT_SIZE

MAX_MELDS = 4
# larger than any real cost, small enough that adding costs stays in int16
_UNSET = 0x100

State = Tuple[int, int, int, int]  # melds, pair, runs from kind-1, runs from kind


def _step(states: List[State], allow_run: bool) -> Tuple[List[State], List[Tuple[int, int, int]]]:
    """Next layer of states and the (src, dst, target count) moves into it."""
    nxt: Dict[State, int] = {}
    moves = []
    for src, (m, p, a, b) in enumerate(states):
        for trip in (0, 1):
            for pair in range(2 - p):
                for r in range(MAX_MELDS - m - trip + 1 if allow_run else 1):
                    t = 3 * trip + 2 * pair + a + b + r
                    if t > MAX_COPIES:
                        continue
                    dst = nxt.setdefault((m + trip + r, p + pair, b, r), len(nxt))
                    moves.append((src, dst, t))
    return list(nxt), moves


def build_table(num_pos: int, runs: bool, size: int, progress: bool = False) -> np.ndarray:
    draws = np.arange(MAX_COPIES + 1, dtype=np.int16)
    states: List[State] = [(0, 0, 0, 0)]
    # cost[state, prefix]: cheapest target prefix for every hand prefix
    cost = np.zeros((1, 1), dtype=np.int16)

    for pos in tqdm(range(num_pos), desc=f"table[{num_pos}]", disable=not progress):
        # a run started here must still fit in the group
        new_states, moves = _step(states, allow_run=runs and pos + 2 < num_pos)
        nxt = np.full((len(new_states), cost.shape[1], MAX_COPIES + 1), _UNSET, dtype=np.int16)
        for src, dst, t in moves:
            cand = cost[src][:, None] + np.maximum(0, t - draws)[None, :]
            np.minimum(nxt[dst], cand, out=nxt[dst])
        states = new_states
        cost = nxt.reshape(len(states), -1)

    final = {s: i for i, s in enumerate(states)}
    slots = []
    for pair in (0, 1):
        for m in range(MAX_MELDS + 1):
            i = final.get((m, pair, 0, 0))
            if i is None or cost[i].min() >= _UNSET:
                raise ValueError(f"a group of {num_pos} kinds cannot hold {m} melds" + (" and a pair" if pair else ""))
            slots.append(cost[i])

    table = np.stack(slots, axis=1)[:size]
    if table.max() > 0x0F:
        raise ValueError("entry values must fit in a nibble")
    return table.astype(np.uint8)


def build_suit_table(progress: bool = False) -> np.ndarray:
    return build_table(SUIT_SIZE, runs=True, size=SUIT_TABLE_SIZE, progress=progress)


def build_honor_table(progress: bool = False) -> np.ndarray:
    return build_table(HONOR_SIZE, runs=False, size=HONOR_TABLE_SIZE, progress=progress)


def pack_table(entries: np.ndarray) -> bytes:
    """(n, 10) entries -> gzip blob, two values per byte, low nibble first."""
    entries = np.asarray(entries, dtype=np.uint8)
    packed = (entries[:, 0::2] & 0x0F) | ((entries[:, 1::2] & 0x0F) << 4)
    return gzip.compress(np.ascontiguousarray(packed, dtype=np.uint8).tobytes(), compresslevel=6)


def write_table(path: Path | str, entries: np.ndarray) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    blob = pack_table(entries)
    # write to tmp then rename for atomicity
    with tempfile.NamedTemporaryFile(dir=path.parent, delete=False) as tmp:
        tmp.write(blob)
        tmp.flush()
        os.fsync(tmp.fileno())
    os.replace(tmp.name, path)
    return path
