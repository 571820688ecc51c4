from __future__ import annotations


class HemiwireError(Exception):
    """Base class for errors raised by hemiwire."""


class InvalidDimension(HemiwireError, ValueError):
    """A vector was built from, or combined with, the wrong number of components."""


class InvalidGridSpec(HemiwireError, ValueError):
    """A parameter grid whose start/stop/step yields no cells."""
