class BandsawError(Exception):
    """Base class for per-image trim failures."""


class DecodeError(BandsawError):
    """Input bytes are not a PNG we can read."""


class EncodeError(BandsawError):
    """Pixel buffer could not be serialized to PNG."""


class EmptyImageError(BandsawError):
    """No pixel with alpha > 0, nothing to crop to."""


class DegenerateCropError(EmptyImageError):
    """Padding/clamping left a zero-area crop box."""


class WriteError(BandsawError):
    """Cropped bytes could not be written back to disk."""


class ReadError(BandsawError):
    """Source file vanished or could not be read after path resolution."""
