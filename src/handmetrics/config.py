from __future__ import annotations
import os
from dataclasses import dataclass, field, is_dataclass, asdict
from pathlib import Path
from typing import Literal, Optional
import yaml

CONFIG_ENV = "HANDMETRICS_CONFIG"
DEFAULT_TABLE_DIR = str(Path(__file__).resolve().parent / "data")

@dataclass
class TablesCfg:
    dir: str = DEFAULT_TABLE_DIR
    suit_file: str = "shanten_suhai.bin.gz"
    honor_file: str = "shanten_jihai.bin.gz"
    build_if_missing: bool = True

    @property
    def suit_path(self) -> Path:
        return Path(self.dir) / self.suit_file

    @property
    def honor_path(self) -> Path:
        return Path(self.dir) / self.honor_file

@dataclass
class LoggingCfg:
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None

@dataclass
class Cfg:
    tables: TablesCfg = field(default_factory=TablesCfg)
    logging: LoggingCfg = field(default_factory=LoggingCfg)


def load_config(path: str) -> Cfg:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    tables = dict(raw.get("tables") or {})
    if tables.get("dir"):
        # relative table dirs are resolved against the config file location
        tables["dir"] = str((Path(path).resolve().parent / tables["dir"]).resolve())
    cfg = Cfg(
        tables=TablesCfg(**tables),
        logging=LoggingCfg(**(raw.get("logging") or {})),
    )
    return cfg


def default_config() -> Cfg:
    """Config named by $HANDMETRICS_CONFIG, or the built-in defaults."""
    path = os.environ.get(CONFIG_ENV)
    if path:
        return load_config(path)
    return Cfg()


def cfg_to_dict(obj):
    """
    Recursively convert nested config objects into plain Python dicts/lists/primitives.
    """
    if is_dataclass(obj):
        return {k: cfg_to_dict(v) for k, v in asdict(obj).items()}

    if isinstance(obj, dict):
        return {k: cfg_to_dict(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [cfg_to_dict(v) for v in obj]

    return obj
