"""Exception taxonomy shared by the codec adapter, the tiler and the color model."""


class TilerError(Exception):
    """Base class for every failure raised by worldviz-tiler."""


class IOFailure(TilerError, OSError):
    """Raised when a source or destination file cannot be opened or created."""


class FormatFailure(TilerError, ValueError):
    """Raised when the codec cannot parse a file as a raster image."""


class InvalidParameter(TilerError, ValueError):
    """Raised for out-of-range arguments (tile sizes, ramp indices, channels)."""
