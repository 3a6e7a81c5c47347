class SightError(Exception):
    """Base class for visibility computation errors."""


class InvalidGeometryError(SightError, ValueError):
    """An obstacle segment is degenerate (zero length) or malformed."""

    def __init__(self, message, index=None):
        super().__init__(message)
        self.index = index


class DegenerateObserverError(SightError):
    """A ray would have zero length: the observer sits on its target point."""
