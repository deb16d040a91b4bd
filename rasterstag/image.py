"""
Implements the class :class:`.Image`, RasterStag's in-memory pixel buffer.

Pixels are kept as numpy uint8 array of shape (height, width, 4) in RGBA
order. Single pixels can be read and written in packed ``0xAARRGGBB`` form.
"""

from __future__ import annotations

import numpy as np
import PIL.Image

from .color import Color, Colors
from .errors import ChannelRangeError

CHANNEL_NAMES = ("r", "g", "b", "a")
"Channel order of the pixel buffer"


def _validated_pixels(pixels: np.ndarray) -> np.ndarray:
    """
    Validates a raw RGBA array and returns an owned uint8 copy of it.

    :param pixels: Array of shape (height, width, 4)
    :return: The copied pixel data
    """
    if not isinstance(pixels, np.ndarray):
        raise TypeError(f"Expected numpy array, got {type(pixels).__name__}")
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected RGBA image (H, W, 4), got shape {pixels.shape}")
    if pixels.dtype == np.uint8:
        return pixels.copy()
    if not np.issubdtype(pixels.dtype, np.integer):
        raise TypeError(f"Expected integer dtype, got {pixels.dtype}")
    if pixels.size:
        for index, name in enumerate(CHANNEL_NAMES):
            channel = pixels[:, :, index]
            low, high = int(channel.min()), int(channel.max())
            if low < 0:
                raise ChannelRangeError(name, low)
            if high > 255:
                raise ChannelRangeError(name, high)
    return pixels.astype(np.uint8)


class Image:
    """
    An RGBA raster image with 8 bits per channel.

    Images behave like values: the constructor copies its source and every
    filter returns a newly allocated image instead of modifying its input.
    """

    def __init__(self, pixels: np.ndarray):
        """
        :param pixels: RGBA pixel data of shape (height, width, 4). Any
            integer dtype is accepted as long as all values are in 0..255.

        Raises a ChannelRangeError if a value is out of range.
        """
        self._pixels = _validated_pixels(pixels)
        self.height, self.width = self._pixels.shape[0:2]
        self._read_only = {"width", "height"}

    def __setattr__(self, key, value):
        if "_read_only" in self.__dict__ and key in self._read_only:
            raise ValueError(f"{key} can not be modified after initialization")
        self.__dict__[key] = value

    @classmethod
    def blank(cls, width: int, height: int, color: Color | None = None) -> Image:
        """
        Creates an image filled with a single color.

        :param width: The width in pixels
        :param height: The height in pixels
        :param color: The fill color. Transparent black by default.
        :return: The new image
        """
        if width < 0 or height < 0:
            raise ValueError(f"Invalid image size {width}x{height}")
        color = color if color is not None else Colors.TRANSPARENT
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = color.to_rgba()
        return cls(pixels)

    @classmethod
    def from_argb(cls, argb) -> Image:
        """
        Creates an image from packed ``0xAARRGGBB`` values.

        :param argb: 2D array-like of packed integers, one row per y
        :return: The new image
        """
        packed = np.asarray(argb, dtype=np.int64)
        if packed.ndim != 2:
            raise ValueError(f"Expected 2D array of packed pixels, got shape {packed.shape}")
        packed = packed & 0xFFFFFFFF
        pixels = np.stack(
            [
                (packed >> 16) & 0xFF,
                (packed >> 8) & 0xFF,
                packed & 0xFF,
                (packed >> 24) & 0xFF,
            ],
            axis=2,
        ).astype(np.uint8)
        return cls(pixels)

    @classmethod
    def from_pil(cls, image: PIL.Image.Image) -> Image:
        """
        Creates an image from a Pillow image of any mode.

        :param image: The Pillow image
        :return: The new image
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.asarray(image))

    def to_pil(self) -> PIL.Image.Image:
        """
        Returns a Pillow RGBA copy of this image
        """
        return PIL.Image.fromarray(self._pixels.copy())

    def to_argb(self) -> np.ndarray:
        """
        Returns the packed ``0xAARRGGBB`` values as uint32 array of shape
        (height, width)
        """
        px = self._pixels.astype(np.uint32)
        return px[:, :, 3] << 24 | px[:, :, 0] << 16 | px[:, :, 1] << 8 | px[:, :, 2]

    @property
    def size(self) -> tuple[int, int]:
        """
        The image's size in pixels as (width, height)
        """
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """
        A read-only view of the RGBA pixel data
        """
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def blue_plane(self) -> np.ndarray:
        """
        Returns the low byte of every packed pixel, i.e. the blue channel, as
        read-only array of shape (height, width).

        For grayscale images this is the luminance.
        """
        view = self._pixels[:, :, 2]
        view.flags.writeable = False
        return view

    def contains(self, x: int, y: int) -> bool:
        """
        Returns if (x, y) is a valid pixel coordinate
        """
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_coordinate(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside of the {self.width}x{self.height} image"
            )

    def get_argb(self, x: int, y: int) -> int:
        """
        Returns the packed ``0xAARRGGBB`` value of a single pixel.

        :param x: The x coordinate
        :param y: The y coordinate
        :return: The packed pixel
        """
        self._check_coordinate(x, y)
        r, g, b, a = (int(value) for value in self._pixels[y, x])
        return a << 24 | r << 16 | g << 8 | b

    def set_argb(self, x: int, y: int, argb: int) -> None:
        """
        Sets a single pixel from its packed ``0xAARRGGBB`` value.

        :param x: The x coordinate
        :param y: The y coordinate
        :param argb: The packed pixel
        """
        self.set_color(x, y, Color.from_argb(argb))

    def get_color(self, x: int, y: int) -> Color:
        """
        Returns a single pixel as :class:`.Color`
        """
        return Color.from_argb(self.get_argb(x, y))

    def set_color(self, x: int, y: int, color: Color) -> None:
        """
        Sets a single pixel to the given :class:`.Color`
        """
        self._check_coordinate(x, y)
        self._pixels[y, x] = color.to_rgba()

    def copy(self) -> Image:
        """
        Returns an independent copy of this image
        """
        return Image(self._pixels)

    def __eq__(self, other):
        if not isinstance(other, Image):
            return NotImplemented
        return self.size == other.size and bool(np.all(self._pixels == other._pixels))

    __hash__ = None

    def __str__(self):
        return f"Image ({self.width}x{self.height} RGBA)"


__all__ = ["Image", "CHANNEL_NAMES"]
