import pytest

from sgraph.color import Color, FloatColor
from sgraph.vectors import Vector4

SAMPLES = [
    Color(0, 0, 0, 0),
    Color(255, 255, 255, 255),
    Color(12, 34, 56, 78),
    Color(200, 1, 128, 254),
]


def test_constants():
    assert Color.zero() == Color(0, 0, 0, 0)
    assert Color.black() == Color(0, 0, 0, 0xFF)
    assert Color.white() == Color(0xFF, 0xFF, 0xFF, 0xFF)
    assert Color.white_transparent() == Color(0xFF, 0xFF, 0xFF, 0)


def test_packed_value_layout():
    assert Color.white().value() == 0xFFFFFFFF
    assert Color.zero().value() == 0
    assert Color.black().value() == 0xFF000000


@pytest.mark.parametrize("c", SAMPLES)
def test_value_round_trip(c):
    assert Color.from_value(c.value()) == c


@pytest.mark.parametrize("c", SAMPLES)
def test_vector4_round_trip(c):
    assert Color.from_vector4(c.to_vector4()) == c


def test_from_vector4_clamps():
    assert Color.from_vector4(Vector4(1, 1, 1, 1)) == Color.white()
    assert Color.from_vector4(Vector4(2, -1, 1, 0)) == Color(255, 0, 255, 0)


def test_invalid_channel_rejected():
    with pytest.raises(ValueError):
        Color(256, 0, 0, 0)
    with pytest.raises(ValueError):
        Color(0, -1, 0, 0)
    with pytest.raises(ValueError):
        Color.from_value(1 << 32)


def test_multiply():
    a = Color(12, 34, 56, 78)
    b = Color(200, 1, 128, 254)
    assert a.multiply(b) == b.multiply(a)
    assert a.multiply(Color.zero()) == Color.zero()
    product = a.multiply(b)
    assert all(p <= min(x, y) for p, x, y in zip(
        (product.r, product.g, product.b, product.a), (a.r, a.g, a.b, a.a), (b.r, b.g, b.b, b.a)))


def test_scale():
    c = Color(12, 34, 56, 78)
    assert c.scale(0) == Color.zero()
    scaled = c.scale(200)
    assert (scaled.r, scaled.g, scaled.b, scaled.a) <= (c.r, c.g, c.b, c.a)
    with pytest.raises(ValueError):
        c.scale(256)


def test_float_color_constants():
    assert FloatColor.zero() == FloatColor(0, 0, 0, 0)
    assert FloatColor.black() == FloatColor(0, 0, 0, 1)
    assert FloatColor.white() == FloatColor(1, 1, 1, 1)
    assert FloatColor.white_transparent() == FloatColor(1, 1, 1, 0)


def test_float_color_from_color_and_vector():
    assert FloatColor.from_color(Color.white()) == FloatColor.white()
    assert FloatColor.from_color(Color.black()) == FloatColor.black()
    assert FloatColor.from_vector4(Vector4(2, -1, 0.25, 1)) == FloatColor(1, 0, 0.25, 1)
    c = FloatColor(0.1, 0.2, 0.3, 0.4)
    assert FloatColor.from_vector4(c.to_vector4()) == c


def test_float_color_multiply_and_scale():
    c = FloatColor(0.1, 0.2, 0.3, 0.4)
    assert c.multiply(FloatColor.white()) == c
    assert c.multiply(FloatColor.zero()) == FloatColor.zero()
    assert c.scale(2.0) == c.scale(1.0) == c
    assert c.scale(-3.0) == FloatColor.zero()