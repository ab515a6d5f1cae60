"""
Shanten lookup tables
---------------------

Two precomputed assets back the standard shanten calculation: one for a
9-rank suit group and one for the 7-kind honor group. Each entry holds ten
costs (tiles still to draw): slots 0..4 for 0..4 melds without a pair, slots
5..9 for 0..4 melds plus a pair. Entries are indexed by the base-5 encoding of
the group's counts.

On disk an asset is a gzip stream where every byte packs two entry values
(low nibble first) and every 5 bytes make one entry.

The tables are loaded once per process, lazily, behind a lock, and are
read-only afterwards.
"""
from __future__ import annotations
import gzip
import threading
import time
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import numpy as np

from handmetrics.config import Cfg, default_config
from handmetrics.logger import get_logger

SUIT_TABLE_SIZE = 1_940_777
HONOR_TABLE_SIZE = 78_032
ENTRY_SLOTS = 10
BYTES_PER_ENTRY = ENTRY_SLOTS // 2

log = get_logger("tables")


class TableIntegrityError(RuntimeError):
    """A lookup asset is missing, unreadable or has the wrong entry count."""


@dataclass(frozen=True)
class ShantenTables:
    suit: np.ndarray   # (SUIT_TABLE_SIZE, 10) uint8, read-only
    honor: np.ndarray  # (HONOR_TABLE_SIZE, 10) uint8, read-only

    def suit_entry(self, index: int) -> List[int]:
        return _entry(self.suit, index)

    def honor_entry(self, index: int) -> List[int]:
        return _entry(self.honor, index)


def _entry(table: np.ndarray, index: int) -> List[int]:
    # impossible distributions fall outside the table and contribute nothing
    if 0 <= index < table.shape[0]:
        return table[index].tolist()
    return [0] * ENTRY_SLOTS


def read_table(gzipped: bytes, length: int) -> np.ndarray:
    """Decompress and unpack one asset into a read-only (length, 10) uint8 array."""
    try:
        raw = np.frombuffer(gzip.decompress(gzipped), dtype=np.uint8)
    except (OSError, EOFError, zlib.error) as e:
        raise TableIntegrityError(f"Cannot decompress shanten table: {e}") from e

    n = raw.size // BYTES_PER_ENTRY
    raw = raw[: n * BYTES_PER_ENTRY]
    nibbles = np.empty((raw.size, 2), dtype=np.uint8)
    nibbles[:, 0] = raw & 0x0F
    nibbles[:, 1] = raw >> 4
    entries = nibbles.reshape(n, ENTRY_SLOTS)

    if n != length:
        raise TableIntegrityError(f"Shanten table has {n} entries, expected {length}")
    entries.setflags(write=False)
    return entries


def _load_one(path: Path, length: int, build: Optional[Callable[[], np.ndarray]]) -> np.ndarray:
    if not path.exists():
        if build is None:
            raise TableIntegrityError(
                f"Shanten table asset not found: {path} (run scripts/build_tables.py)"
            )
        from handmetrics.table_builder import write_table

        log.info("Building missing table %s", path.name)
        entries = build()
        try:
            write_table(path, entries)
        except OSError as e:
            # read-only install: serve the freshly built table from memory
            log.warning("Cannot cache %s (%s), keeping it in memory", path, e)
            if entries.shape != (length, ENTRY_SLOTS):
                raise TableIntegrityError(f"Built table has shape {entries.shape}, expected ({length}, {ENTRY_SLOTS})")
            entries.setflags(write=False)
            return entries

    t0 = time.perf_counter()
    table = read_table(path.read_bytes(), length)
    log.info("Loaded %s: %d entries in %.2fs", path.name, table.shape[0], time.perf_counter() - t0)
    return table


def load_tables(cfg: Cfg) -> ShantenTables:
    build_suit = build_honor = None
    if cfg.tables.build_if_missing:
        from handmetrics.table_builder import build_honor_table, build_suit_table

        build_suit, build_honor = build_suit_table, build_honor_table

    try:
        suit = _load_one(cfg.tables.suit_path, SUIT_TABLE_SIZE, build_suit)
        honor = _load_one(cfg.tables.honor_path, HONOR_TABLE_SIZE, build_honor)
    except TableIntegrityError as e:
        log.critical("Shanten tables unusable: %s", e)
        raise
    return ShantenTables(suit=suit, honor=honor)


_TABLES: Optional[ShantenTables] = None
_TABLES_LOCK = threading.Lock()


def get_tables() -> ShantenTables:
    """Process-wide tables, loaded from the default config on first use."""
    global _TABLES
    tables = _TABLES
    if tables is not None:
        return tables
    with _TABLES_LOCK:
        if _TABLES is None:
            _TABLES = load_tables(default_config())
        return _TABLES


def init_tables(cfg: Optional[Cfg] = None) -> ShantenTables:
    """Load the tables eagerly from `cfg`, replacing any already loaded."""
    global _TABLES
    with _TABLES_LOCK:
        _TABLES = load_tables(cfg if cfg is not None else default_config())
        return _TABLES


def ensure_init() -> None:
    """Load the tables now and check both have the declared shape."""
    tables = get_tables()
    for name, table, length in (("suit", tables.suit, SUIT_TABLE_SIZE), ("honor", tables.honor, HONOR_TABLE_SIZE)):
        if table.shape != (length, ENTRY_SLOTS):
            raise TableIntegrityError(f"{name} table has shape {table.shape}, expected ({length}, {ENTRY_SLOTS})")
