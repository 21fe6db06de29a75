"""Exception and warning classes for polyconflate."""


class PolyconflateError(Exception):
    """Base class for all polyconflate errors."""
    pass


class ConfigurationError(PolyconflateError, ValueError):
    """Raised when tolerances or mode parameters are invalid."""
    pass


class UnresolvedOverlapWarning(UserWarning):
    """Emitted when no indicator could be computed for an overlapping pair.

    The overlap itself is still recorded; only the indicators are missing.
    """

    def __init__(self, message: str, geometry_a=None, geometry_b=None):
        super().__init__(message)
        self.geometry_a = geometry_a
        self.geometry_b = geometry_b


__all__ = [
    'PolyconflateError',
    'ConfigurationError',
    'UnresolvedOverlapWarning',
]
