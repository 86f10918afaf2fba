"""
Configuration loader for stylish-mapped.

Loads settings (source_maps, color, cwd) from:
  - explicit path via --config, or
  - one of: .stylish-mapped.toml, stylish-mapped.toml,
            .stylish-mapped.yaml/yml, stylish-mapped.yaml/yml,
            pyproject.toml ([tool.stylish_mapped]),
            setup.cfg ([tool:stylish_mapped] or [stylish_mapped]).
"""

import configparser
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import toml
import yaml

from stylish_mapped.utils.logger import get_logger
from stylish_mapped.utils.settings import COLOR_MODES, CONFIG_FILES, CONFIG_SECTION

LOG = get_logger(__name__)

_FALSE_STRINGS = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    pass


@dataclass
class Config:
    source_maps: bool = True
    color: str = "auto"
    cwd: Optional[str] = None

    @classmethod
    def load(cls, path: str = None) -> "Config":
        if path and not os.path.isfile(path):
            raise ConfigError(f"Config file not found: {path}")
        cfg_path = path or cls._find_config_file(os.getcwd())
        if not cfg_path:
            return cls()
        LOG.debug("Reading configuration from %s", cfg_path)

        ext = os.path.splitext(cfg_path)[1].lower()
        if ext == ".toml":
            raw = toml.load(cfg_path)
            if os.path.basename(cfg_path) == "pyproject.toml":
                cfg = raw.get("tool", {}).get(CONFIG_SECTION, {})
            else:
                cfg = raw.get("tool", {}).get(CONFIG_SECTION, raw)
        elif ext in (".yaml", ".yml"):
            with open(cfg_path, "r", encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}
        elif os.path.basename(cfg_path) == "setup.cfg":
            parser = configparser.ConfigParser()
            parser.read(cfg_path)
            if parser.has_section(f"tool:{CONFIG_SECTION}"):
                cfg = dict(parser.items(f"tool:{CONFIG_SECTION}"))
            elif parser.has_section(CONFIG_SECTION):
                cfg = dict(parser.items(CONFIG_SECTION))
            else:
                cfg = {}
        else:
            cfg = {}
        if not isinstance(cfg, dict):
            raise ConfigError(f"Configuration in {cfg_path} must be a table/mapping")
        return cls._from_dict(cfg)

    @staticmethod
    def _find_config_file(start_dir: str) -> str:
        for fname in CONFIG_FILES:
            candidate = os.path.join(start_dir, fname)
            if os.path.isfile(candidate):
                return candidate
        return ""

    @staticmethod
    def _ensure_bool(val: Any) -> bool:
        if isinstance(val, bool):
            return val
        return str(val).strip().lower() not in _FALSE_STRINGS

    @classmethod
    def _from_dict(cls, raw: Dict[str, Any]) -> "Config":
        def get(key, default=None):
            for k in raw:
                if k.lower().replace("-", "_") == key:
                    return raw[k]
            return default

        color = str(get("color", "auto")).strip().lower()
        if color not in COLOR_MODES:
            raise ConfigError(f"Invalid color mode {color!r}, expected one of {COLOR_MODES}")
        cwd = get("cwd")

        return cls(
            source_maps=cls._ensure_bool(get("source_maps", True)),
            color=color,
            cwd=str(cwd) if cwd else None,
        )
