"""
Boundary policies define which value a windowed sampling operation such as a
convolution reads when the window reaches beyond the image bounds.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from .errors import EmptyImageError


class BoundaryPolicy(Enum):
    """Rule for resolving pixel coordinates outside of the image."""

    WRAP = "wrap"
    "Wrap around, taking pixels from the opposite side of the image"
    STRETCH = "stretch"
    "Use the nearest edge pixel for everything out of bounds"
    BLACK = "black"
    "Every pixel out of bounds is treated as black"
    WHITE = "white"
    "Every pixel out of bounds is treated as white"
    GRAY = "gray"
    "Every pixel out of bounds is treated as 50% gray"

    @property
    def fill_value(self) -> int | None:
        """
        The constant sample value for out of bounds pixels or None if the
        policy samples the image itself
        """
        return _FILL_VALUES.get(self)

    @classmethod
    def parse(cls, value: BoundaryPolicy | str) -> BoundaryPolicy:
        """
        Converts a policy name such as "wrap" or "STRETCH" to a policy.

        :param value: The policy or its case-insensitive name
        :return: The policy
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown boundary policy: {value}") from None


_FILL_VALUES = {
    BoundaryPolicy.BLACK: 0x00,
    BoundaryPolicy.WHITE: 0xFF,
    BoundaryPolicy.GRAY: 0x80,
}


def resolve_indices(indices: np.ndarray, size: int, policy: BoundaryPolicy) -> np.ndarray:
    """
    Maps indices along one axis onto valid source indices.

    Only defined for the sampling policies WRAP and STRETCH.

    :param indices: The requested indices, may be negative or >= size
    :param size: The axis length, must be positive
    :param policy: The boundary policy
    :return: Indices in 0..size-1
    """
    if policy is BoundaryPolicy.WRAP:
        # numpy's modulo already yields non-negative values for a positive size
        return np.mod(indices, size)
    if policy is BoundaryPolicy.STRETCH:
        return np.clip(indices, 0, size - 1)
    raise ValueError(f"{policy} does not sample the image")


def sample_grid(plane: np.ndarray, xs, ys, policy: BoundaryPolicy) -> np.ndarray:
    """
    Samples a single channel plane at every combination of the given x and y
    coordinates.

    In-bounds coordinates always read the plane directly, out of bounds
    coordinates are resolved via the boundary policy.

    :param plane: Single channel uint8 array of shape (height, width)
    :param xs: The x coordinates (columns of the result)
    :param ys: The y coordinates (rows of the result)
    :param policy: The boundary policy
    :return: uint8 array of shape (len(ys), len(xs))
    """
    plane = np.asarray(plane)
    xs = np.asarray(xs, dtype=np.intp).reshape(-1)
    ys = np.asarray(ys, dtype=np.intp).reshape(-1)
    policy = BoundaryPolicy.parse(policy)
    height, width = plane.shape
    if len(xs) == 0 or len(ys) == 0:
        return np.empty((len(ys), len(xs)), dtype=plane.dtype)

    fill = policy.fill_value
    if fill is not None:
        result = np.full((len(ys), len(xs)), fill, dtype=plane.dtype)
        inside_x = (xs >= 0) & (xs < width)
        inside_y = (ys >= 0) & (ys < height)
        result[np.ix_(inside_y, inside_x)] = plane[np.ix_(ys[inside_y], xs[inside_x])]
        return result

    if width == 0 or height == 0:
        raise EmptyImageError(
            f"Can not {policy.value} coordinates into an empty {width}x{height} image"
        )
    source_x = resolve_indices(xs, width, policy)
    source_y = resolve_indices(ys, height, policy)
    return plane[np.ix_(source_y, source_x)]


def resolve_sample(plane: np.ndarray, x: int, y: int, policy: BoundaryPolicy) -> int:
    """
    Returns the sample value at a single, possibly out of bounds, coordinate.

    :param plane: Single channel uint8 array of shape (height, width)
    :param x: The x coordinate
    :param y: The y coordinate
    :param policy: The boundary policy
    :return: The sample value in 0..255
    """
    return int(sample_grid(plane, [x], [y], policy)[0, 0])


__all__ = ["BoundaryPolicy", "resolve_indices", "resolve_sample", "sample_grid"]
