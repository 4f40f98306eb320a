from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


CONFIG_FILENAME = "castaway.yaml"
CONFIG_ENV = "CASTAWAY_CONFIG"
DEFAULT_WORLD = Path(__file__).resolve().parent.parent / "adventure" / "data" / "island.json"


@dataclass(frozen=True)
class CastawayConfig:
    world_path: str
    log_level: str = "WARNING"
    log_file: str | None = None
    transcript_path: str | None = None


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _resolve_relative(base: Path, value: str | None) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"expected a path, got {value!r}")
    if not Path(value).is_absolute():
        return str((base / value).resolve())
    return value


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"config section '{name}' must be a mapping")
    return section


def default_config() -> CastawayConfig:
    return CastawayConfig(world_path=str(DEFAULT_WORLD))


def load_config(path: str | Path) -> CastawayConfig:
    config_path = Path(path).resolve()
    raw = load_yaml(config_path)
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must hold a mapping")
    base = config_path.parent

    world_path = _resolve_relative(base, _section(raw, "world").get("path")) or str(DEFAULT_WORLD)
    logging_cfg = _section(raw, "logging")
    transcript_cfg = _section(raw, "transcript")

    return CastawayConfig(
        world_path=world_path,
        log_level=str(logging_cfg.get("level", "WARNING")).upper(),
        log_file=_resolve_relative(base, logging_cfg.get("file")),
        transcript_path=_resolve_relative(base, transcript_cfg.get("path")),
    )


def find_config(config_path: str | None = None) -> Path | None:
    """Locate the config file: explicit path, then $CASTAWAY_CONFIG, then castaway.yaml upwards from cwd."""
    if config_path:
        return Path(config_path)

    env_path = os.getenv(CONFIG_ENV)
    if env_path:
        env_candidate = Path(env_path)
        if env_candidate.exists():
            return env_candidate

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate

    return None


def resolve_config(config_path: str | None = None) -> CastawayConfig:
    found = find_config(config_path)
    if found is None:
        return default_config()
    return load_config(found)
