"""Exceptions raised while decoding and loading airspace data."""


class AirspaceError(Exception):
    """Base class for airspace errors."""


class FormatError(AirspaceError, ValueError):
    """Raised when a coordinate literal is not in the expected notation."""


class AirspaceDecodeError(AirspaceError):
    """Raised when an airspace document cannot be decoded.

    Decoding is all-or-nothing: when this is raised no features are returned.
    """


class LoaderError(AirspaceError):
    """Raised when the airspace byte stream cannot be obtained."""
