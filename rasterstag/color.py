"""
Implements the class :class:`.Color` which stores a single 8-bit ARGB pixel
value and converts it from and to its packed 32-bit integer representation.
"""

from __future__ import annotations

from .errors import ChannelRangeError

ALPHA_SHIFT = 24
RED_SHIFT = 16
GREEN_SHIFT = 8
BLUE_SHIFT = 0


def _check_channel(name: str, value: int) -> None:
    try:
        as_int = int(value)
    except (TypeError, ValueError):
        raise ChannelRangeError(name, value) from None
    if as_int != value or as_int & ~0xFF:
        raise ChannelRangeError(name, value)


class Color:
    """
    A single pixel's alpha, red, green and blue channel, each in 0..255,
    together with the packed form ``0xAARRGGBB``.

    Colors are immutable: assigning an attribute after construction raises a
    RuntimeError.
    """

    __slots__ = ("a", "r", "g", "b", "argb")

    def __init__(self, a: int, r: int, g: int, b: int):
        """
        :param a: The alpha channel (0..255)
        :param r: The red channel (0..255)
        :param g: The green channel (0..255)
        :param b: The blue channel (0..255)

        Raises a ChannelRangeError naming the first channel out of range.
        """
        _check_channel("a", a)
        _check_channel("r", r)
        _check_channel("g", g)
        _check_channel("b", b)
        a, r, g, b = int(a), int(r), int(g), int(b)
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "r", r)
        object.__setattr__(self, "g", g)
        object.__setattr__(self, "b", b)
        object.__setattr__(
            self,
            "argb",
            a << ALPHA_SHIFT | r << RED_SHIFT | g << GREEN_SHIFT | b << BLUE_SHIFT,
        )

    def __setattr__(self, key, value):
        raise RuntimeError("Colors can not be modified after initialization")

    @classmethod
    def from_channels(cls, a: int, r: int, g: int, b: int) -> Color:
        """
        Creates a color from four separate channels.

        :param a: Alpha
        :param r: Red
        :param g: Green
        :param b: Blue
        :return: The color
        """
        return cls(a, r, g, b)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> Color:
        """
        Creates a fully opaque color.

        :param r: Red
        :param g: Green
        :param b: Blue
        :return: The color with an alpha of 255
        """
        return cls(0xFF, r, g, b)

    @classmethod
    def from_argb(cls, argb: int) -> Color:
        """
        Unpacks a color from a packed ``0xAARRGGBB`` integer. Never fails as
        every channel is masked to 8 bits.

        :param argb: The packed value
        :return: The color
        """
        argb = int(argb)
        return cls(
            (argb >> ALPHA_SHIFT) & 0xFF,
            (argb >> RED_SHIFT) & 0xFF,
            (argb >> GREEN_SHIFT) & 0xFF,
            (argb >> BLUE_SHIFT) & 0xFF,
        )

    def to_argb(self) -> int:
        """
        Returns the packed ``0xAARRGGBB`` representation
        """
        return self.argb

    def to_tuple(self) -> tuple[int, int, int, int]:
        """
        Returns the channels as (alpha, red, green, blue)
        """
        return self.a, self.r, self.g, self.b

    def to_rgba(self) -> tuple[int, int, int, int]:
        """
        Returns the channels in numpy pixel order (red, green, blue, alpha)
        """
        return self.r, self.g, self.b, self.a

    def to_hex(self) -> str:
        """
        Returns the color as ``#AARRGGBB`` hex string
        """
        return f"#{self.argb:08X}"

    def is_gray(self) -> bool:
        """
        Returns if all three color channels carry the same value
        """
        return self.r == self.g == self.b

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self.argb == other.argb

    def __hash__(self):
        return hash(self.argb)

    def __str__(self):
        return f"Color({self.a},{self.r},{self.g},{self.b})"

    def __repr__(self):
        return f"Color(a={self.a}, r={self.r}, g={self.g}, b={self.b})"


class Colors:
    """
    Predefined colors
    """

    BLACK = Color(255, 0, 0, 0)
    WHITE = Color(255, 255, 255, 255)
    GRAY = Color(255, 128, 128, 128)
    TRANSPARENT = Color(0, 0, 0, 0)


__all__ = ["Color", "Colors"]
