"""
Tests the Image pixel buffer
"""

import numpy as np
import PIL.Image
import pytest

from rasterstag import Color, ChannelRangeError, Image
from rasterstag.color import Colors


def test_image_basics():
    """
    Tests size and pixel access
    """
    image = Image.blank(3, 2)
    assert image.size == (3, 2)
    assert image.width == 3 and image.height == 2
    assert image.get_argb(2, 1) == 0
    image.set_argb(2, 1, 0xFF102030)
    assert image.get_argb(2, 1) == 0xFF102030
    assert image.get_color(2, 1) == Color.from_rgb(0x10, 0x20, 0x30)
    assert tuple(image.pixels[1, 2]) == (0x10, 0x20, 0x30, 0xFF)
    assert str(image) == "Image (3x2 RGBA)"
    with pytest.raises(ValueError):
        image.width = 5


def test_out_of_range_access():
    """
    Coordinates outside of the image raise an IndexError
    """
    image = Image.blank(2, 2, Colors.WHITE)
    for x, y in [(-1, 0), (0, -1), (2, 0), (0, 2)]:
        with pytest.raises(IndexError):
            image.get_argb(x, y)
        with pytest.raises(IndexError):
            image.set_color(x, y, Colors.BLACK)


def test_construction_validation():
    """
    Invalid buffers are rejected
    """
    with pytest.raises(ValueError):
        Image(np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(TypeError):
        Image(np.zeros((2, 2, 4), dtype=np.float32))
    too_bright = np.zeros((2, 2, 4), dtype=np.int32)
    too_bright[1, 1, 1] = 256
    with pytest.raises(ChannelRangeError) as excinfo:
        Image(too_bright)
    assert excinfo.value.channel == "g"
    in_range = np.full((1, 1, 4), 255, dtype=np.int64)
    assert Image(in_range).get_argb(0, 0) == 0xFFFFFFFF


def test_no_aliasing():
    """
    Images copy their source and hand out read-only views
    """
    data = np.zeros((2, 2, 4), dtype=np.uint8)
    image = Image(data)
    data[0, 0] = 255
    assert image.get_argb(0, 0) == 0
    with pytest.raises(ValueError):
        image.pixels[0, 0, 0] = 1
    with pytest.raises(ValueError):
        image.blue_plane()[0, 0] = 1
    copy = image.copy()
    copy.set_argb(0, 0, 0xFFFFFFFF)
    assert image.get_argb(0, 0) == 0
    assert copy != image


def test_argb_conversion():
    """
    Tests packed array conversion
    """
    packed = [[0xFF000000, 0xFFFFFFFF], [0x80123456, 0x00000000]]
    image = Image.from_argb(packed)
    assert image.size == (2, 2)
    assert image.get_argb(0, 1) == 0x80123456
    assert image.to_argb().dtype == np.uint32
    assert image.to_argb().tolist() == packed
    assert image.blue_plane().tolist() == [[0x00, 0xFF], [0x56, 0x00]]


def test_empty_image():
    """
    Zero sized images are valid
    """
    image = Image.blank(0, 3)
    assert image.size == (0, 3)
    assert image.to_argb().shape == (3, 0)
    with pytest.raises(ValueError):
        Image.blank(-1, 1)


def test_pil_conversion():
    """
    Tests conversion from and to Pillow
    """
    pil_image = PIL.Image.new("RGB", (4, 3), (10, 20, 30))
    image = Image.from_pil(pil_image)
    assert image.size == (4, 3)
    assert image.get_color(3, 2).to_tuple() == (255, 10, 20, 30)
    back = image.to_pil()
    assert back.mode == "RGBA"
    assert back.size == (4, 3)
    assert Image.from_pil(back) == image
