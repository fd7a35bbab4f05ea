# hanoi/config.py
from dataclasses import dataclass, field
import logging
import os
import tomllib  # python >=3.11
from typing import Optional


@dataclass
class GameConfig:
    min_disks: int = 3
    max_disks: int = 10
    default_disks: int = 3


@dataclass
class RecordsConfig:
    default_limit: int = 50  # leaderboard / recent list size


@dataclass
class UIConfig:
    app_name: str = "Hanoi Tower"
    app_author: str = "Hanoi Tower contributors"
    api_port: int = 8000


@dataclass
class Config:
    game: GameConfig = field(default_factory=GameConfig)
    records: RecordsConfig = field(default_factory=RecordsConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("game", "records", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg


def configure_logging(level: Optional[str] = None):
    """Apply the configured log level to the root logger."""
    level = (level or CONFIG.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("HANOI_CONFIG_TOML", "config.toml"))
# allow env override of the default disk count
override_disks = os.environ.get("HANOI_DEFAULT_DISKS")
if override_disks:
    try:
        CONFIG.game.default_disks = int(override_disks)
    except ValueError:
        pass
