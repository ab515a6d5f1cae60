from __future__ import annotations
from typing import List, Optional, Sequence

# ----------------------------
# Tile system helpers (34-tile)
# ----------------------------
# Indexing convention:
# 0..8:  m1-m9 (characters/manzu)
# 9..17: p1-p9 (dots/pinzu)
# 18..26: s1-s9 (bamboo/souzu)
# 27..33: winds+dragons [East,South,West,North,White,Green,Red]

NUM_TILES = 34
NUM_SUITS = 3
SUIT_SIZE = 9
HONOR_SIZE = 7
HONOR_START = 27
MAX_COPIES = 4
MAX_HAND = 14

# 1m, 9m, 1p, 9p, 1s, 9s, E, S, W, N, Wh, Gr, Rd
TERMINALS_AND_HONORS = (0, 8, 9, 17, 18, 26, 27, 28, 29, 30, 31, 32, 33)


def suit_of(tile: int) -> Optional[int]:
    """Return suit id for numbered tiles: 0=m,1=p,2=s ; None for honors."""
    if 0 <= tile <= 8:
        return 0
    if 9 <= tile <= 17:
        return 1
    if 18 <= tile <= 26:
        return 2
    return None


def is_honor(tile: int) -> bool:
    return tile >= HONOR_START


def is_terminal_or_honor(tile: int) -> bool:
    return tile >= HONOR_START or tile % SUIT_SIZE in (0, 8)


def is_main_suit(tile: int, suit: int) -> bool:
    """True when `tile` is a numbered tile of `suit` (unknown suits match nothing)."""
    return suit in (0, 1, 2) and suit_of(tile) == suit


def group_slices() -> List[slice]:
    """The three suit groups followed by the honor group."""
    return [slice(s * SUIT_SIZE, (s + 1) * SUIT_SIZE) for s in range(NUM_SUITS)] + [
        slice(HONOR_START, NUM_TILES)
    ]


def base5_index(counts: Sequence[int]) -> int:
    """Encode a group's counts as a base-5 number, first position most significant."""
    idx = 0
    for c in counts:
        idx = idx * 5 + int(c)
    return idx


def parse_hand(text: str) -> List[int]:
    """Parse compact notation like ``"123m456p789s11z"`` into a count vector.

    Honors are 1z..7z (E, S, W, N, white, green, red).
    """
    offsets = {"m": 0, "p": 9, "s": 18, "z": HONOR_START}
    counts = [0] * NUM_TILES
    pending: List[int] = []
    for ch in text.replace(" ", ""):
        if ch.isdigit():
            pending.append(int(ch))
            continue
        if ch not in offsets or not pending:
            raise ValueError(f"Malformed hand string: {text!r}")
        limit = HONOR_SIZE if ch == "z" else SUIT_SIZE
        for rank in pending:
            if not 1 <= rank <= limit:
                raise ValueError(f"Rank {rank} out of range for suit {ch!r}")
            counts[offsets[ch] + rank - 1] += 1
        pending = []
    if pending:
        raise ValueError(f"Dangling ranks without suit in {text!r}")
    return counts
