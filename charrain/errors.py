# charrain/errors.py
from __future__ import annotations


class CharrainError(Exception):
    """Base class for every error raised by charrain."""


class ConfigError(CharrainError, ValueError):
    """Invalid configuration: bad ratios, dimensions or unparseable values."""


class GridAllocationError(CharrainError, MemoryError):
    """The grid's backing buffer could not be allocated. Not recoverable."""
