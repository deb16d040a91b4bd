"""Exception classes for RasterStag."""


class RasterStagError(Exception):
    """Base exception for all RasterStag errors."""

    pass


class ChannelRangeError(RasterStagError, ValueError):
    """Raised when a color channel lies outside of 0..255."""

    def __init__(self, channel: str, value):
        super().__init__(
            f"{value} is not a valid value, must be 0 <= {channel} <= 255"
        )
        self.channel = channel
        self.value = value


class SizeMismatchError(RasterStagError, ValueError):
    """Raised when samples and weights differ in length."""

    pass


class KernelShapeError(RasterStagError, ValueError):
    """Raised for empty kernels or kernels with an even width or height."""

    pass


class DegenerateKernelError(RasterStagError, ZeroDivisionError):
    """Raised when the absolute weights of a kernel sum up to zero."""

    pass


class DegenerateRangeError(RasterStagError, ZeroDivisionError):
    """Raised when a max-range stretch finds a single intensity level."""

    def __init__(self, level: int):
        super().__init__(
            f"Can not stretch an image with a single intensity level ({level})"
        )
        self.level = level


class EmptyImageError(RasterStagError, ValueError):
    """Raised when pixels are sampled from an image without any pixels."""

    pass


class ImageLoadError(RasterStagError, OSError):
    """Raised when an image file can not be found or decoded."""

    pass


class ImageWriteError(RasterStagError, OSError):
    """Raised when an image could not be encoded or written."""

    pass


__all__ = [
    "RasterStagError",
    "ChannelRangeError",
    "SizeMismatchError",
    "KernelShapeError",
    "DegenerateKernelError",
    "DegenerateRangeError",
    "EmptyImageError",
    "ImageLoadError",
    "ImageWriteError",
]
