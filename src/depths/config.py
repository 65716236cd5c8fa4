from __future__ import annotations

import argparse
import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import yaml

from . import __version__
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DEPTHS_"
SETTINGS_FILE_ENV = "DEPTHS_SETTINGS_FILE"


def _as_seed(value: Any) -> Union[int, str, None]:
    """Interpret a seed value: ints stay ints, numeric strings become ints, anything else is a string."""
    if value is None or isinstance(value, int):
        return value
    s = str(value).strip()
    if s == "":
        return None
    try:
        return int(s)
    except ValueError:
        return s


@dataclass
class Settings:
    """Generation and visibility parameters for a dungeon run.

    Settings can be constructed/overridden from:
    - A YAML file (path argument or env DEPTHS_SETTINGS_FILE)
    - Environment variables (prefix: DEPTHS_)

    Precedence, lowest to highest: defaults < file < env.
    """

    # Floor size (tiles)
    width: int = 80
    height: int = 40

    # Room count is sampled from [rooms_min, rooms_max)
    rooms_min: int = 12
    rooms_max: int = 26

    # Room side length is sampled from [room_min_size, room_size_limit]
    room_min_size: int = 3
    room_size_limit: int = 10

    # Number of unit steps each FOV ray takes
    light_radius: int = 15

    # Random probes before falling back to a scan for empty tiles
    empty_coords_attempts: int = 1000

    seed: Union[int, str, None] = None

    def __post_init__(self) -> None:
        self.validate()

    # ------------------------ Core API ------------------------
    def validate(self) -> "Settings":
        """Validate settings; raises ConfigError on values that cannot be recovered."""
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Invalid floor size {self.width}x{self.height}")
        if self.rooms_min < 1:
            raise ConfigError(f"rooms_min must be >= 1, got {self.rooms_min}")
        if self.rooms_max <= self.rooms_min:
            raise ConfigError(f"rooms_max must be > rooms_min, got [{self.rooms_min}, {self.rooms_max})")
        if self.room_min_size < 1:
            raise ConfigError(f"room_min_size must be >= 1, got {self.room_min_size}")
        if self.room_size_limit < self.room_min_size:
            logger.warning(
                "room_size_limit %d below room_min_size %d; clamping",
                self.room_size_limit,
                self.room_min_size,
            )
            self.room_size_limit = self.room_min_size
        if self.light_radius < 0:
            raise ConfigError(f"light_radius must be >= 0, got {self.light_radius}")
        if self.empty_coords_attempts <= 0:
            raise ConfigError(f"empty_coords_attempts must be > 0, got {self.empty_coords_attempts}")
        return self

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    # ------------------------ Loading & Overrides ------------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        fields = {f.name: f for f in dataclasses.fields(cls)}
        unknown = sorted(k for k in data if k not in fields)
        if unknown:
            logger.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            if key not in fields:
                continue
            if key == "seed":
                values[key] = _as_seed(raw)
                continue
            try:
                values[key] = int(raw)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"Setting {key!r} must be an integer, got {raw!r}") from exc
        return cls(**values)

    @classmethod
    def env_overrides(cls, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        out: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            env_key = ENV_PREFIX + f.name.upper()
            if env_key in env and env[env_key] != "":
                out[f.name] = env[env_key]
        return out

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        return cls.from_dict(cls.env_overrides(env))

    @classmethod
    def read_yaml_file(cls, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigError(f"Settings file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            try:
                doc = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Failed to parse settings YAML {path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise ConfigError(f"Settings YAML {path} must contain a mapping")
        # Keys may sit at the top level or under a "dungeon:" mapping
        flat: Dict[str, Any] = {}
        if isinstance(doc.get("dungeon"), dict):
            flat.update(doc["dungeon"])
        for k, v in doc.items():
            if not isinstance(v, dict):
                flat[k] = v
        logger.debug("Loaded settings from %s: %s", path, flat)
        return flat

    @classmethod
    def from_yaml_file(cls, path: Union[Path, str]) -> "Settings":
        return cls.from_dict(cls.read_yaml_file(Path(path)))

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Mapping[str, str]] = None,
        file_path: Optional[Union[Path, str]] = None,
    ) -> "Settings":
        env = os.environ if env is None else env
        data: Dict[str, Any] = {}
        if file_path is None and env.get(SETTINGS_FILE_ENV):
            file_path = env[SETTINGS_FILE_ENV]
        if file_path is not None:
            data.update(cls.read_yaml_file(Path(file_path).expanduser()))
        data.update(cls.env_overrides(env))
        return cls.from_dict(data)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="depths", description="Generate a dungeon floor and print it as ASCII")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file")
    parser.add_argument("--seed", default=None, help="Master seed (int or string)")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--depth", type=int, default=0, help="Descend to this depth before printing")
    parser.add_argument("--fov", action="store_true", help="Mark tiles lit from the spawn point")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace, env: Optional[Mapping[str, str]] = None) -> Settings:
    settings = Settings.from_sources(env=env, file_path=args.config)
    overrides = {k: getattr(args, k) for k in ("seed", "width", "height") if getattr(args, k) is not None}
    if overrides:
        merged = settings.as_dict()
        merged.update(overrides)
        settings = Settings.from_dict(merged)
    return settings
