"""
Color and Gradient tests.
"""

import math

import numpy as np
import pytest

from mandelzoom.gradient import Color, Gradient, GradientError, Stop


BLUE = Color(0.0, 0.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
YELLOW = Color(1.0, 1.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
CYAN = Color(0.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


def make_gradient(period=100.0, falloff=10.0):
    return Gradient(period, BLUE, [
        Stop(0.3, RED),
        Stop(0.5, YELLOW),
        Stop(0.7, GREEN),
        Stop(0.9, CYAN),
    ], BLACK, falloff)


def assert_color_close(a, b, tol=1e-9):
    for x, y in zip(a, b):
        assert x == pytest.approx(y, abs=tol)


def test_mix_endpoints_are_exact():
    """mix(a, b, 0) == a and mix(a, b, 1) == b"""
    a = Color(0.2, 0.4, 0.9)
    b = Color(1.0, 0.1, 0.3)
    assert Color.mix(a, b, 0.0) == a
    assert Color.mix(a, b, 1.0) == b


def test_mix_is_affine():
    """mix at t is a + t * (b - a), also outside [0, 1]"""
    a = Color(0.2, 0.4, 0.8)
    b = Color(1.0, 0.0, 0.4)
    for t in [0.25, 0.5, 0.75, -0.5, 1.5]:
        expected = Color(*(x + t * (y - x) for x, y in zip(a, b)))
        assert_color_close(Color.mix(a, b, t), expected)


def test_write_bgra_order():
    """Bytes are written blue, green, red, then alpha 255"""
    buf = bytearray(8)
    Color(1.0, 0.5, 0.0).write(buf, offset=4)
    assert list(buf) == [0, 0, 0, 0, 0, 128, 255, 255]


def test_write_without_alpha_and_clamping():
    """Out-of-range and NaN channels clamp instead of failing"""
    buf = bytearray(3)
    Color(2.0, math.nan, -1.0).write(buf, alpha=False)
    assert list(buf) == [0, 0, 255]
    assert Color(0.0, 0.0, 1.0).to_bytes() == bytes([255, 0, 0, 255])


def test_write_into_numpy_buffer():
    """numpy uint8 arrays are valid destinations"""
    buf = np.zeros(4, dtype=np.uint8)
    Color(0.0, 1.0, 0.0).write(buf)
    assert buf.tolist() == [0, 255, 0, 255]


def test_write_is_bounds_checked():
    """A write that does not fit raises IndexError"""
    buf = bytearray(6)
    with pytest.raises(IndexError):
        Color(1.0, 1.0, 1.0).write(buf, offset=4)
    with pytest.raises(IndexError):
        Color(1.0, 1.0, 1.0).write(buf, offset=-1)
    assert buf == bytearray(6)


def test_interior_is_final_exactly():
    """Reaching the cap gives the final color, for any configuration"""
    for gradient in [make_gradient(), make_gradient(7.0, 3.0),
                     Gradient(1.0, RED, [], Color(0.3, 0.6, 0.9), 0.5)]:
        for max_iter in [0, 1, 10, 100, 1000]:
            assert gradient.get_color(max_iter, max_iter) == gradient.final


def test_stop_colors_hit_exactly_at_offsets():
    """At a stop's offset the color is that stop's color"""
    gradient = make_gradient()
    assert_color_close(gradient.get_color(30, 1000), RED)
    assert_color_close(gradient.get_color(50, 1000), YELLOW)
    assert_color_close(gradient.get_color(90, 1000), CYAN)
    assert_color_close(gradient.get_color(0, 1000), BLUE)


def test_blend_between_stops():
    """Halfway between two stops is the midpoint color"""
    gradient = make_gradient()
    assert_color_close(gradient.get_color(40, 1000), Color(1.0, 0.5, 0.0))
    # first span: initial (offset 0) to the first stop (0.3)
    assert_color_close(gradient.get_color(15, 1000), Color(0.5, 0.0, 0.5))


def test_wraps_back_to_initial():
    """After the last stop the gradient blends back to initial"""
    gradient = make_gradient()
    assert_color_close(gradient.get_color(95, 1000), Color.mix(CYAN, BLUE, 0.5))
    assert_color_close(gradient.get_color(100, 1000), BLUE)
    assert_color_close(gradient.get_color(130, 1000), RED)


def test_continuous_across_period_boundary():
    """Colors just below and just above k * period converge"""
    gradient = Gradient(1000.0, BLUE, [Stop(0.5, RED)], BLACK, 10.0)
    for k in [1, 2, 3]:
        below = gradient.get_color(k * 1000 - 1, 100000)
        above = gradient.get_color(k * 1000 + 1, 100000)
        for x, y in zip(below, above):
            assert abs(x - y) < 0.005


def test_falloff_fades_to_final():
    """Inside the falloff window the color approaches final linearly"""
    gradient = make_gradient(falloff=10.0)
    max_iter = 1000
    # 995 % 100 = 95 -> halfway between cyan and blue
    period_color = Color.mix(CYAN, BLUE, 0.5)
    expected = Color.mix(period_color, BLACK, 0.5)
    assert_color_close(gradient.get_color(995, max_iter), expected)
    # At the window edge the falloff has no effect
    assert_color_close(gradient.get_color(990, max_iter), gradient.period_color(0.9))
    # One below the cap is almost final
    assert_color_close(gradient.get_color(999, max_iter),
                       Color.mix(gradient.period_color(0.99), BLACK, 0.9))


def test_cache_matches_uncached_within_quantization():
    """Cached lookups stay within one table step of the exact color"""
    gradient = make_gradient()
    exact = [gradient.get_color(i, 10000) for i in range(300)]
    gradient.create_cache(1000)
    assert gradient.cache.shape == (1000, 3)
    for i, expected in enumerate(exact):
        # integer iterations land exactly on table entries here
        assert_color_close(gradient.get_color(i, 10000), expected)


def test_cache_quantizes_offsets():
    """A small cache snaps offsets down to table entries"""
    gradient = make_gradient()
    gradient.create_cache(10)
    # offset 0.35 -> entry 3 (offset 0.3, pure red)
    assert_color_close(gradient.get_color(35, 10000), RED)
    gradient.clear_cache()
    assert gradient.cache is None
    assert_color_close(gradient.get_color(35, 10000), Color.mix(RED, YELLOW, 0.25))


def test_cache_still_applies_falloff():
    """The falloff blend is applied on top of the cached color"""
    gradient = make_gradient()
    uncached = gradient.get_color(995, 1000)
    gradient.create_cache(100)
    assert_color_close(gradient.get_color(995, 1000), uncached)
    assert gradient.get_color(1000, 1000) == BLACK


def test_negative_cap_is_defined():
    """A negative cap gives a color instead of failing"""
    gradient = make_gradient()
    color = gradient.get_color(0, -5)
    assert len(color) == 3


def test_rejects_bad_period_and_falloff():
    """period and final_falloff must be positive"""
    with pytest.raises(GradientError):
        Gradient(0.0, BLUE, [], BLACK, 10.0)
    with pytest.raises(GradientError):
        Gradient(-5.0, BLUE, [], BLACK, 10.0)
    with pytest.raises(GradientError):
        Gradient(100.0, BLUE, [], BLACK, 0.0)
    with pytest.raises(ValueError):
        Gradient(100.0, BLUE, [], BLACK, -1.0)


def test_rejects_bad_stops():
    """Stops must be strictly ascending and inside (0, 1)"""
    with pytest.raises(GradientError):
        Gradient(100.0, BLUE, [Stop(0.5, RED), Stop(0.3, GREEN)], BLACK, 10.0)
    with pytest.raises(GradientError):
        Gradient(100.0, BLUE, [Stop(0.5, RED), Stop(0.5, GREEN)], BLACK, 10.0)
    with pytest.raises(GradientError):
        Gradient(100.0, BLUE, [Stop(0.0, RED)], BLACK, 10.0)
    with pytest.raises(GradientError):
        Gradient(100.0, BLUE, [Stop(1.0, RED)], BLACK, 10.0)
    with pytest.raises(GradientError):
        Gradient(100.0, BLUE, [Stop(0.5, (1.0, 0.0))], BLACK, 10.0)


def test_rejects_bad_cache_size():
    """Cache needs at least one entry"""
    with pytest.raises(GradientError):
        make_gradient().create_cache(0)


def test_from_dict():
    """Settings dictionaries build the same gradient"""
    gradient = Gradient.from_dict({
        'period': 50,
        'initial': [0, 0, 1],
        'stops': [{'offset': 0.5, 'color': [1, 0, 0]}],
        'final': [0, 0, 0],
        'final_falloff': 5,
    })
    assert gradient.period == 50.0
    assert gradient.stops == (Stop(0.5, RED),)
    assert_color_close(gradient.get_color(25, 1000), RED)
    with pytest.raises(GradientError):
        Gradient.from_dict({'period': 50})
