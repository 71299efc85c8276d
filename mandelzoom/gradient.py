"""
Color gradients for escape-time coloring.

A Gradient repeats every `period` iterations. Inside one period the
color runs from `initial` (offset 0) through the stops and back to
`initial` (offset 1). Points that reach the iteration cap get the
`final` color, and the last `final_falloff` iterations below the cap
fade toward it.

The arithmetic itself lives in the JIT kernels of compute.py; the
classes here validate input, hold the parameters as numpy arrays and
wrap results back into Color values.
"""

from collections import namedtuple

import numpy as np

from .compute import NO_CACHE, gradient_color, period_color, quantize_channel


class GradientError(ValueError):
    """Raised for an invalid gradient definition."""


class Color(namedtuple('Color', ['r', 'g', 'b'])):
    """
    An RGB color with channels nominally in [0, 1].

    Values outside that range are allowed (interpolation can produce
    them); they are only clamped when written out as bytes.
    """

    __slots__ = ()

    @staticmethod
    def mix(a, b, amount):
        """
        Mix color a with color b by the given amount.

        amount is not clamped: 0.0 gives a, 1.0 gives b, anything else
        is the affine blend between them.
        """
        af = 1.0 - amount
        return Color(
            a.r * af + b.r * amount,
            a.g * af + b.g * amount,
            a.b * af + b.b * amount)

    def to_bytes(self, alpha=True):
        """Quantized BGR(A) bytes for this color."""
        out = bytearray(4 if alpha else 3)
        self.write(out, alpha=alpha)
        return bytes(out)

    def write(self, destination, offset=0, alpha=True):
        """
        Write the color into a byte buffer in B, G, R (, A) order.

        Args:
            destination: Writable sequence of bytes (bytearray,
                memoryview, 1-D uint8 numpy array)
            offset: Index of the first byte to write
            alpha: Also write a fixed 255 alpha byte

        Raises:
            IndexError if the bytes would not fit in destination
        """
        size = 4 if alpha else 3
        if offset < 0 or offset + size > len(destination):
            raise IndexError(
                f"pixel write at {offset} (+{size}) outside buffer of {len(destination)} bytes")
        destination[offset] = quantize_channel(self.b)
        destination[offset + 1] = quantize_channel(self.g)
        destination[offset + 2] = quantize_channel(self.r)
        if alpha:
            destination[offset + 3] = 255


# A named point within one gradient period
Stop = namedtuple('Stop', ['offset', 'color'])


def _as_color(value, what):
    try:
        r, g, b = value
    except (TypeError, ValueError):
        raise GradientError(f"{what} must have exactly 3 channels, got {value!r}") from None
    return Color(float(r), float(g), float(b))


class Gradient:
    """
    Periodic color gradient with a smooth fade into an interior color.

    Usage:
        gradient = Gradient(100.0, Color(0, 0, 1), [
            Stop(0.3, Color(1, 0, 0)),
            Stop(0.7, Color(0, 1, 0)),
        ], Color(0, 0, 0), 10.0)
        color = gradient.get_color(iterations, max_iterations)

    Attributes:
        period: Iterations per period
        initial: Color at the start (and end) of each period
        stops: Tuple of Stop, strictly ascending offsets in (0, 1)
        final: Interior color, used at the iteration cap
        final_falloff: Number of iterations below the cap over which
            colors fade into final
    """

    def __init__(self, period, initial, stops, final, final_falloff):
        period = float(period)
        final_falloff = float(final_falloff)
        if not period > 0.0:
            raise GradientError(f"period must be > 0, got {period}")
        if not final_falloff > 0.0:
            raise GradientError(f"final_falloff must be > 0, got {final_falloff}")

        checked = []
        prev_offset = 0.0
        for stop in stops:
            offset, color = stop
            offset = float(offset)
            if not 0.0 < offset < 1.0:
                raise GradientError(f"stop offset {offset} is outside (0, 1)")
            if offset <= prev_offset:
                raise GradientError(
                    f"stop offsets must be strictly ascending ({offset} after {prev_offset})")
            checked.append(Stop(offset, _as_color(color, "stop color")))
            prev_offset = offset

        self._period = period
        self._initial = _as_color(initial, "initial color")
        self._stops = tuple(checked)
        self._final = _as_color(final, "final color")
        self._final_falloff = final_falloff

        # Array form handed to the JIT kernels
        self._initial_array = np.array(self._initial, dtype=np.float64)
        self._final_array = np.array(self._final, dtype=np.float64)
        self._offsets = np.array([s.offset for s in self._stops], dtype=np.float64)
        self._colors = np.array([s.color for s in self._stops], dtype=np.float64).reshape(-1, 3)
        self._cache = NO_CACHE

    @classmethod
    def from_dict(cls, data):
        """
        Build a gradient from a settings dictionary.

        Expected keys: period, initial, stops (list of {offset, color}),
        final, final_falloff. Colors are [r, g, b] lists in [0, 1].
        """
        try:
            stops = [(s['offset'], s['color']) for s in data.get('stops', [])]
            return cls(data['period'], data['initial'], stops,
                       data['final'], data['final_falloff'])
        except KeyError as e:
            raise GradientError(f"gradient setting missing key {e}") from None

    @property
    def period(self):
        return self._period

    @property
    def initial(self):
        return self._initial

    @property
    def stops(self):
        return self._stops

    @property
    def final(self):
        return self._final

    @property
    def final_falloff(self):
        return self._final_falloff

    @property
    def cache(self):
        """The precomputed color table, or None when uncached."""
        if self._cache.shape[0] == 0:
            return None
        return self._cache

    def create_cache(self, size):
        """
        Precompute `size` colors spanning one period.

        Lookups then quantize the period offset to 1/size of a period
        instead of walking the stops. The falloff blend is still applied
        on top of the table color.
        """
        size = int(size)
        if size < 1:
            raise GradientError(f"cache size must be >= 1, got {size}")
        table = np.empty((size, 3), dtype=np.float64)
        step = 1.0 / size
        for t in range(size):
            table[t] = period_color(t * step, self._initial_array,
                                    self._offsets, self._colors)
        self._cache = table

    def clear_cache(self):
        self._cache = NO_CACHE

    def period_color(self, offset):
        """Color at an offset (0.0 to 1.0) within one period, ignoring the cache."""
        return Color(*period_color(float(offset), self._initial_array,
                                   self._offsets, self._colors))

    def get_color(self, iterations, max_iterations):
        """
        Get the color for a pixel with the given iteration count.

        Args:
            iterations: Iteration count from evaluate()
            max_iterations: The cap that was passed to evaluate()

        Returns:
            Color; exactly `final` when iterations == max_iterations
        """
        if iterations == max_iterations:
            return self._final
        return Color(*gradient_color(
            int(iterations), int(max_iterations), self._period,
            self._initial_array, self._offsets, self._colors,
            self._final_array, self._final_falloff, self._cache))

    def kernel_args(self):
        """
        Gradient parameters in the order compute.render_frame expects:
        (period, initial, offsets, colors, final, falloff, table).
        """
        return (self._period, self._initial_array, self._offsets, self._colors,
                self._final_array, self._final_falloff, self._cache)

    def __repr__(self):
        return (f"Gradient(period={self._period}, initial={self._initial}, "
                f"stops={list(self._stops)}, final={self._final}, "
                f"final_falloff={self._final_falloff})")
