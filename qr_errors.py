"""
Error classes raised by the QR code codec.

A missing QR code in an image is not an error: the localizer and the
decode driver return None in that case.
"""


class QRError(Exception):
    """Base error for all QR code operations."""
    pass


class InvalidContentError(QRError):
    """The text contains characters the chosen mode cannot encode."""
    pass


class UnsupportedModeError(QRError):
    """Unknown mode indicator, or a version outside the supported range."""
    pass


class UncorrectableError(QRError):
    """The symbol was found but holds more errors than can be corrected."""
    pass


class StructuralOverwriteError(QRError):
    """A placement tried to overwrite an already placed function module."""
    pass
