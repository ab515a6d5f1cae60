#!/usr/bin/env python
"""Regenerate the shanten lookup assets into the configured table directory."""
from __future__ import annotations
import argparse, sys, pathlib, time

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from handmetrics.config import load_config
from handmetrics.logger import setup_logger
from handmetrics.table_builder import build_honor_table, build_suit_table, write_table
from handmetrics.tables import init_tables


def parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Build shanten_suhai/shanten_jihai lookup tables")
    ap.add_argument("--config", type=str, default="configs/default.yaml", help="Path to YAML config")
    ap.add_argument("--out", type=str, default=None, help="Output directory (overrides tables.dir)")
    ap.add_argument("--no-verify", action="store_true", help="Skip reloading the written assets")
    return ap.parse_args()


def main():
    args = parse_args()
    cfg = load_config(args.config)
    if args.out:
        cfg.tables.dir = str(pathlib.Path(args.out).resolve())
    log = setup_logger(cfg.logging.level, cfg.logging.log_file)

    for path, build in ((cfg.tables.suit_path, build_suit_table), (cfg.tables.honor_path, build_honor_table)):
        t0 = time.perf_counter()
        table = build(progress=True)
        write_table(path, table)
        log.info("Wrote %s (%d entries) in %.1fs", path, table.shape[0], time.perf_counter() - t0)

    if not args.no_verify:
        init_tables(cfg)
        log.info("Verified tables in %s", cfg.tables.dir)


if __name__ == "__main__":
    main()
