from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from platformdirs import user_data_dir

logger = logging.getLogger(__name__)

APP_NAME = "Trash Dash"

ENV_SAVE_DIR = "DASHSAVE_SAVE_DIR"
ENV_LOG_LEVEL = "DASHSAVE_LOG_LEVEL"


@dataclass
class StoreConfig:
    """
    Save store configuration.

    Resolution order: packaged defaults (defaults/default_config.yaml), then an
    optional user YAML file, then environment variables:
      - DASHSAVE_SAVE_DIR: directory holding the save record
      - DASHSAVE_LOG_LEVEL: logging level name
    """

    save_dir: str = ""
    file_name: str = "save.bin"
    rng_seed: Optional[int] = None
    log_level: str = "INFO"

    @property
    def record_path(self) -> Path:
        base = Path(self.save_dir).expanduser() if self.save_dir else Path(user_data_dir(APP_NAME, appauthor=False))
        return base / self.file_name

    @staticmethod
    def _load_yaml(path: Path) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "StoreConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        cfg = cls(**{k: v for k, v in data.items() if k in known})
        cfg.save_dir = str(cfg.save_dir or "")
        cfg.file_name = str(cfg.file_name)
        cfg.rng_seed = None if cfg.rng_seed is None else int(cfg.rng_seed)
        cfg.log_level = str(cfg.log_level).upper()
        return cfg

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "StoreConfig":
        """Load packaged defaults, overlay ``user_path`` and the environment."""
        try:
            text = resources.files("dashsave.defaults").joinpath("default_config.yaml").read_text(encoding="utf-8")
            data: Dict[str, Any] = yaml.safe_load(text) or {}
        except FileNotFoundError:
            logger.warning("Default config not found; falling back to dataclass defaults.")
            data = {}

        if user_path is not None:
            if user_path.exists():
                data.update(cls._load_yaml(user_path))
                logger.info("Loaded user config from %s", user_path)
            else:
                logger.warning("User config file not found: %s", user_path)

        if os.getenv(ENV_SAVE_DIR):
            data["save_dir"] = os.environ[ENV_SAVE_DIR]
        if os.getenv(ENV_LOG_LEVEL):
            data["log_level"] = os.environ[ENV_LOG_LEVEL]

        cfg = cls._from_dict(data)
        logger.debug("Store config: %s", cfg)
        return cfg
