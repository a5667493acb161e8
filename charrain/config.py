# charrain/config.py
"""
Configuration for the rain.

Values are layered, later layers winning:

  1. built-in defaults
  2. TOML file: $CHARRAIN_CONFIG or ~/.config/charrain/config.toml
  3. environment: CHARRAIN_SPEED, CHARRAIN_DROPS, CHARRAIN_ERROR,
     CHARRAIN_SEED, CHARRAIN_BG
  4. command line options

A factor of 0 means "use the default". `resolve()` then caps every factor
into its allowed range, the same way the command line always has.
"""

from __future__ import annotations

import logging
import os
import time
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .engine.cell import TSIZE_MAX
from .errors import ConfigError

logger = logging.getLogger(__name__)

# 8 bit terminal colors. Index 0 is the drop, the rest are used for the tail,
# starting at index 1 for the cell closest to the drop; the last color is the
# cell furthest away.
# https://en.wikipedia.org/wiki/ANSI_escape_code#8-bit
PALETTE: Tuple[int, ...] = (231, 48, 41, 35, 29, 238)

SPEED_FACTOR_MIN = 0.01
SPEED_FACTOR_MAX = 1.00
SPEED_FACTOR_DEF = 0.10

DROPS_FACTOR_MIN = 0.01
DROPS_FACTOR_MAX = 0.10
DROPS_FACTOR_DEF = 0.0001

ERROR_FACTOR_MIN = 0.01
ERROR_FACTOR_MAX = 0.10
ERROR_FACTOR_DEF = 0.02

# Frame delay is BASE_DELAY minus up to SPEED_DELAY, scaled by the speed factor.
BASE_DELAY = 0.100
SPEED_DELAY = 0.090

ENV_PREFIX = "CHARRAIN_"
DEFAULT_CONFIG_PATH = Path("~/.config/charrain/config.toml")


def cap_float(value: float, lo: float, hi: float) -> float:
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


@dataclass(frozen=True)
class RainConfig:
    speed: float = 0.0
    drops: float = 0.0
    error: float = 0.0
    seed: int = 0
    bg_color: Optional[int] = None
    palette: Tuple[int, ...] = field(default=PALETTE)

    @property
    def frame_delay(self) -> float:
        """Seconds to wait between frames."""
        return BASE_DELAY - SPEED_DELAY * self.speed

    def with_overrides(self, **overrides: Any) -> "RainConfig":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def resolve(self) -> "RainConfig":
        """Fill in defaults, cap every factor and pick a seed if none was given."""
        speed = self.speed or SPEED_FACTOR_DEF
        drops = self.drops or DROPS_FACTOR_DEF
        error = self.error or ERROR_FACTOR_DEF
        seed = self.seed or int(time.time())

        resolved = replace(
            self,
            speed=cap_float(speed, SPEED_FACTOR_MIN, SPEED_FACTOR_MAX),
            drops=cap_float(drops, DROPS_FACTOR_MIN, DROPS_FACTOR_MAX),
            error=cap_float(error, ERROR_FACTOR_MIN, ERROR_FACTOR_MAX),
            seed=seed,
            palette=tuple(self.palette),
        )
        resolved.validate()
        return resolved

    def validate(self) -> None:
        if not 0.0 < self.drops < 1.0:
            raise ConfigError(f"drops must be within (0, 1), got {self.drops}")
        if not 0.0 <= self.error < 1.0:
            raise ConfigError(f"error must be within [0, 1), got {self.error}")
        if not 0.0 <= self.speed <= 1.0:
            raise ConfigError(f"speed must be within [0, 1], got {self.speed}")
        if self.bg_color is not None and not 0 <= self.bg_color <= 255:
            raise ConfigError(f"background color must be 0-255, got {self.bg_color}")
        # tail color indexes share the 6 bit aux field with tail lengths
        if not 2 <= len(self.palette) <= TSIZE_MAX + 1:
            raise ConfigError(
                f"palette needs between 2 and {TSIZE_MAX + 1} colors, got {len(self.palette)}"
            )
        for color in self.palette:
            if not isinstance(color, int) or not 0 <= color <= 255:
                raise ConfigError(f"palette colors must be 0-255, got {color!r}")


# ---- loading ---------------------------------------------------------------- #

_FILE_KEYS = {
    "speed": float,
    "drops": float,
    "error": float,
    "seed": int,
    "bg": int,
    "bg_color": int,
    "palette": tuple,
}

_ENV_KEYS = {
    "SPEED": ("speed", float),
    "DROPS": ("drops", float),
    "ERROR": ("error", float),
    "SEED": ("seed", int),
    "BG": ("bg_color", int),
}


def _convert(name: str, raw: Any, kind: type) -> Any:
    try:
        if kind is tuple:
            return tuple(int(v) for v in raw)
        return kind(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from exc


def config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    raw = env.get(f"{ENV_PREFIX}CONFIG")
    return Path(raw).expanduser() if raw else DEFAULT_CONFIG_PATH.expanduser()


def _from_file(path: Path, required: bool = False) -> Dict[str, Any]:
    if not path.is_file():
        if required:
            raise ConfigError(f"Config file {path} not found")
        return {}
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}") from exc

    # accept both a flat file and a [charrain] table
    table = data.get("charrain", data)
    values: Dict[str, Any] = {}
    for key, kind in _FILE_KEYS.items():
        if key in table:
            name = "bg_color" if key == "bg" else key
            values[name] = _convert(key, table[key], kind)
    logger.debug("Loaded %s from %s", sorted(values), path)
    return values


def _from_env(env: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for suffix, (name, kind) in _ENV_KEYS.items():
        raw = env.get(f"{ENV_PREFIX}{suffix}")
        if raw is None or raw.strip() == "":
            continue
        values[name] = _convert(f"{ENV_PREFIX}{suffix}", raw.strip(), kind)
    return values


def load_config(
    path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None
) -> RainConfig:
    """
    Build a config from the file and environment layers.

    Only the implicit default file may be missing; a file named through
    `path` or $CHARRAIN_CONFIG has to exist.

    The result is unresolved: apply command line overrides with
    `with_overrides` and call `resolve()` before use.
    """
    env = os.environ if env is None else env
    required = path is not None or bool(env.get(f"{ENV_PREFIX}CONFIG"))
    values = _from_file(path or config_path(env), required=required)
    values.update(_from_env(env))
    return RainConfig(**values)
