"""
Mandelbrot and gradient computation functions using Numba JIT compilation.

This module contains all the performance-critical per-pixel code. The
scalar kernels are shared by the Python-facing API (evaluate,
Gradient.get_color, Color.write) and by the parallel frame pass, so a
pixel computed one at a time and a pixel computed inside render_frame
go through exactly the same arithmetic.

Kernels:
- escape_time: iteration count for z <- z² + c starting at z0 = c
- period_color: color at an offset within one gradient period
- gradient_color: full color lookup (interior, period, cache, falloff)
- quantize_channel: [0, 1] channel to an 8-bit value, NaN/Inf safe
- render_frame: whole BGRA frame, rows in parallel
"""

import math

import numpy as np
from numba import jit, prange

from .complex_math import Complex


ESCAPE_RADIUS_SQUARED = 4.0  # |z|² above this always diverges

# Placeholder table meaning "no cache" (numba wants an array, not None)
NO_CACHE = np.zeros((0, 3), dtype=np.float64)


@jit(nopython=True, cache=True)
def escape_time(cr, ci, max_iter):
    """
    Count iterations of z <- z² + c until |z|² > 4 or max_iter is reached.

    The orbit starts at z0 = c, so a point already outside the bailout
    radius returns 0. The squared terms of the bailout test are reused
    for the next iterate.

    Args:
        cr, ci: Real and imaginary parts of c
        max_iter: Iteration cap (values <= 0 return 0)

    Returns:
        Iteration count in [0, max(max_iter, 0)]
    """
    iteration = 0
    zr = cr
    zi = ci
    while iteration < max_iter:
        zr2 = zr * zr
        zi2 = zi * zi
        if zr2 + zi2 > ESCAPE_RADIUS_SQUARED:
            break
        zi = 2.0 * zr * zi + ci
        zr = zr2 - zi2 + cr
        iteration += 1
    return iteration


@jit(nopython=True, cache=True)
def mix_rgb(ar, ag, ab, br, bg, bb, amount):
    """Linear blend of two colors given as separate channels."""
    af = 1.0 - amount
    return ar * af + br * amount, ag * af + bg * amount, ab * af + bb * amount


@jit(nopython=True, cache=True)
def period_color(offset, initial, offsets, colors):
    """
    Color at a given offset (0.0 to 1.0) within one gradient period.

    Walks the stops in ascending order, blending from the previous
    boundary (initial at offset 0) to the next stop. Past the last stop
    the gradient blends back to initial at offset 1, so the period
    boundary is continuous.

    Args:
        offset: Position within the period
        initial: (3,) float64 array, color at offset 0 (and 1)
        offsets: (n,) float64 array of stop offsets, strictly ascending
        colors: (n, 3) float64 array of stop colors

    Returns:
        (r, g, b) tuple of floats
    """
    pr = initial[0]
    pg = initial[1]
    pb = initial[2]
    prev_offset = 0.0
    for i in range(offsets.shape[0]):
        next_offset = offsets[i]
        if offset < next_offset:
            t = (offset - prev_offset) / (next_offset - prev_offset)
            return mix_rgb(pr, pg, pb, colors[i, 0], colors[i, 1], colors[i, 2], t)
        pr = colors[i, 0]
        pg = colors[i, 1]
        pb = colors[i, 2]
        prev_offset = next_offset
    t = (offset - prev_offset) / (1.0 - prev_offset)
    return mix_rgb(pr, pg, pb, initial[0], initial[1], initial[2], t)


@jit(nopython=True, cache=True)
def gradient_color(iterations, max_iter, period, initial, offsets, colors,
                   final, falloff, table):
    """
    Map an iteration count to a color.

    Points that hit the cap get the final (interior) color. Everything
    else gets the periodic gradient color, blended toward final over the
    last `falloff` iterations below the cap to avoid a hard edge.

    Args:
        iterations: Iteration count from escape_time
        max_iter: The cap that was used for escape_time
        period: Iterations per gradient period (> 0)
        initial, offsets, colors: Gradient definition (see period_color)
        final: (3,) float64 array, interior color
        falloff: Width of the fade into final, in iterations (> 0)
        table: (N, 3) precomputed period colors, or an empty array

    Returns:
        (r, g, b) tuple of floats
    """
    if iterations == max_iter:
        return final[0], final[1], final[2]

    phase = iterations % period
    size = table.shape[0]
    if size > 0:
        index = int(phase * size / period)
        if index >= size:
            index = size - 1
        r = table[index, 0]
        g = table[index, 1]
        b = table[index, 2]
    else:
        r, g, b = period_color(phase / period, initial, offsets, colors)

    if iterations > max_iter - falloff:
        amount = (iterations - max_iter + falloff) / falloff
        r, g, b = mix_rgb(r, g, b, final[0], final[1], final[2], amount)
    return r, g, b


@jit(nopython=True, cache=True)
def quantize_channel(value):
    """
    Convert a channel value to 0-255, rounding half up.

    Out-of-range values are clamped; NaN maps to 0 so a broken camera
    state shows up as black pixels instead of an exception.
    """
    scaled = value * 255.0
    if not scaled > 0.0:
        return 0
    if scaled >= 255.0:
        return 255
    return int(math.floor(scaled + 0.5))


@jit(nopython=True, parallel=True, cache=True)
def render_frame(left, top, pixel_size, plane_scale, max_iter, period,
                 initial, offsets, colors, final, falloff, table, out):
    """
    Render a full frame into a BGRA buffer.

    Pixel (px, py) samples the plane at
    ((left + pixel_size * px) * plane_scale, (top + pixel_size * py) * plane_scale),
    which is Camera.pixel_to_point(px, py, ...) * plane_scale.

    Args:
        left, top: Real/imag parts of the top-left pixel center
        pixel_size: Plane distance between adjacent pixel centers
        plane_scale: Multiplier applied to every sample point
        max_iter: Iteration cap
        period, initial, offsets, colors, final, falloff, table:
            Gradient parameters (see gradient_color)
        out: (height, width, 4) uint8 array, modified in place
    """
    height, width = out.shape[0], out.shape[1]
    for py in prange(height):
        ci = (top + pixel_size * py) * plane_scale
        for px in range(width):
            cr = (left + pixel_size * px) * plane_scale
            iterations = escape_time(cr, ci, max_iter)
            r, g, b = gradient_color(iterations, max_iter, period, initial,
                                     offsets, colors, final, falloff, table)
            out[py, px, 0] = quantize_channel(b)
            out[py, px, 1] = quantize_channel(g)
            out[py, px, 2] = quantize_channel(r)
            out[py, px, 3] = 255


def evaluate(point, max_iterations):
    """
    Evaluate the Mandelbrot set at a point.

    Args:
        point: Complex (or builtin complex) point c
        max_iterations: Iteration cap

    Returns:
        Iterations until escape, or max_iterations for points treated as
        inside the set. Always 0 for max_iterations <= 0.
    """
    return escape_time(float(point.real), float(point.imag), int(max_iterations))


def warmup_jit(gradient):
    """
    Warm up JIT compilation with a tiny dummy frame.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real frame.

    Args:
        gradient: A Gradient whose kernel arguments are used for typing
    """
    period, initial, offsets, colors, final, falloff, table = gradient.kernel_args()
    dummy = np.zeros((4, 4, 4), dtype=np.uint8)
    render_frame(-2.0, -2.0, 1.0, 1.0, 10, period, initial, offsets, colors,
                 final, falloff, table, dummy)
    evaluate(Complex(0.0, 0.0), 10)
    quantize_channel(0.5)
