"""
charrain - digital rain for the terminal.

Basic usage:
    from charrain import RainEngine, Event

    engine = RainEngine(24, 80, drop_ratio=0.01, glitch_fraction=0.02, seed=42)
    engine.tick(print_frame)
"""

__version__ = "0.1.0"

PROGRAM_NAME = "charrain"
PROGRAM_URL = "https://github.com/domsson/charrain"

from .engine import Event, Frame, Grid, RainEngine  # noqa: E402
from .errors import CharrainError, ConfigError, GridAllocationError  # noqa: E402

__all__ = [
    "__version__",
    "PROGRAM_NAME",
    "PROGRAM_URL",
    "Event",
    "Frame",
    "Grid",
    "RainEngine",
    "CharrainError",
    "ConfigError",
    "GridAllocationError",
]
