"""
Raw byte -> RGBA mapping, including padding of short buffers.

Run from project root: pytest tests/test_decode_service.py -v
"""

import numpy as np
import pytest

from rawconv.models.layout import ChannelLayout
from rawconv.models.raw_model import DecodeRequest
from rawconv.services.decode_service import DecodeService


@pytest.fixture
def decoder():
    return DecodeService()


def test_grayscale_replicates_value(decoder):
    """100 grayscale bytes, pixel 0 = (b0, b0, b0, 255)."""
    data = bytes(range(100))
    buf = decoder.decode(data, ChannelLayout.GRAYSCALE, 10, 10)
    assert buf.size == (10, 10)
    assert buf.pixels.shape == (10, 10, 4)
    assert buf.pixel(0) == (0, 0, 0, 255)
    assert buf.pixel(37) == (37, 37, 37, 255)
    assert buf.pixel(99) == (99, 99, 99, 255)


def test_rgb_exact_fit(decoder):
    """12 RGB bytes into 2x2: bytes 0-11 consumed, alpha 255."""
    data = bytes([10, 20, 30, 40, 50, 60, 70, 80, 90, 100, 110, 120])
    buf = decoder.decode(data, ChannelLayout.RGB, 2, 2)
    assert buf.pixel_count == 4
    assert [buf.pixel(i) for i in range(4)] == [
        (10, 20, 30, 255),
        (40, 50, 60, 255),
        (70, 80, 90, 255),
        (100, 110, 120, 255),
    ]
    # row-major: pixel 2 is row 1, column 0
    assert tuple(buf.pixels[1, 0]) == (70, 80, 90, 255)


def test_rgba_short_buffer_padding(decoder):
    """10 RGBA bytes into 2x2: missing RGB -> 0, missing alpha -> 255."""
    data = bytes([1, 2, 3, 4, 5, 6, 7, 8, 9, 10])
    buf = decoder.decode(data, ChannelLayout.RGBA, 2, 2)
    assert buf.pixel(0) == (1, 2, 3, 4)
    assert buf.pixel(1) == (5, 6, 7, 8)
    assert buf.pixel(2) == (9, 10, 0, 255)
    assert buf.pixel(3) == (0, 0, 0, 255)


def test_rgba_present_zero_alpha_is_kept(decoder):
    data = bytes([255, 0, 0, 0, 0, 255, 0, 128])
    buf = decoder.decode(data, ChannelLayout.RGBA, 2, 1)
    assert buf.pixel(0) == (255, 0, 0, 0)
    assert buf.pixel(1) == (0, 255, 0, 128)


def test_rgb_short_buffer_padding(decoder):
    buf = decoder.decode(bytes([9, 8, 7, 6]), ChannelLayout.RGB, 3, 1)
    assert buf.pixel(0) == (9, 8, 7, 255)
    assert buf.pixel(1) == (6, 0, 0, 255)
    assert buf.pixel(2) == (0, 0, 0, 255)


def test_empty_input_still_yields_full_buffer(decoder):
    buf = decoder.decode(b"", ChannelLayout.GRAYSCALE, 3, 2)
    assert buf.pixels.shape == (2, 3, 4)
    assert np.all(buf.pixels[..., :3] == 0)
    assert np.all(buf.pixels[..., 3] == 255)


@pytest.mark.parametrize("width,height", [(0, 0), (0, 5), (5, 0), (-3, 4), (4, -1)])
def test_non_positive_dimensions_give_empty_buffer(decoder, width, height):
    buf = decoder.decode(bytes(64), ChannelLayout.RGB, width, height)
    assert buf.is_empty
    assert buf.pixel_count == 0
    assert buf.pixels.size == 0


def test_extra_bytes_are_ignored(decoder):
    data = bytes(range(50))
    buf = decoder.decode(data, ChannelLayout.GRAYSCALE, 4, 4)
    assert buf.pixel_count == 16
    assert buf.pixel(15) == (15, 15, 15, 255)


@pytest.mark.parametrize("layout", list(ChannelLayout))
@pytest.mark.parametrize("size", [0, 1, 5, 17, 48, 200])
def test_pixel_count_and_alpha_invariants(decoder, layout, size):
    """w*h quads always; alpha 255 unless RGBA with a present alpha byte."""
    rng = np.random.default_rng(size)
    data = rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()
    width, height = 5, 3
    buf = decoder.decode(data, layout, width, height)
    assert buf.pixels.shape == (height, width, 4)
    flat = buf.pixels.reshape(-1, 4)
    for i in range(width * height):
        alpha_offset = i * 4 + 3
        if layout is ChannelLayout.RGBA and alpha_offset < size:
            assert flat[i, 3] == data[alpha_offset]
        else:
            assert flat[i, 3] == 255


def test_decode_is_pure(decoder):
    data = bytes(range(256)) * 3
    first = decoder.decode(data, ChannelLayout.RGB, 16, 17)
    second = decoder.decode(data, ChannelLayout.RGB, 16, 17)
    assert first.tobytes() == second.tobytes()
    assert first.pixels is not second.pixels


def test_result_is_read_only(decoder):
    buf = decoder.decode(bytes(4), ChannelLayout.GRAYSCALE, 2, 2)
    with pytest.raises(ValueError):
        buf.pixels[0, 0, 0] = 1


def test_accepts_bytearray_and_memoryview(decoder):
    raw = bytearray([1, 2, 3, 4])
    a = decoder.decode(raw, ChannelLayout.GRAYSCALE, 2, 2)
    b = decoder.decode(memoryview(raw), ChannelLayout.GRAYSCALE, 2, 2)
    assert a.tobytes() == b.tobytes()


def test_decode_request_matches_decode(decoder):
    data = bytes(range(30))
    request = DecodeRequest(layout=ChannelLayout.RGB, width=3, height=3)
    assert request.byte_count == 27
    via_request = decoder.decode_request(data, request)
    direct = decoder.decode(data, ChannelLayout.RGB, 3, 3)
    assert via_request.tobytes() == direct.tobytes()


@pytest.mark.parametrize("size", range(0, 20))
def test_rgba_alpha_present_only_for_complete_pixels(decoder, size):
    """Alpha is taken from the data for exactly the first len(data) // 4 pixels."""
    data = bytes([7]) * size
    buf = decoder.decode(data, ChannelLayout.RGBA, 3, 2)
    alphas = [buf.pixel(i)[3] for i in range(6)]
    complete = min(size // 4, 6)
    assert alphas == [7] * complete + [255] * (6 - complete)
