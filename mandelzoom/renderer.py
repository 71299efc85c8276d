"""
Frame renderer: turns a camera view into a BGRA pixel buffer.

The FrameRenderer class handles:
- Owning the output buffer and reallocating it when the size changes
- Sampling the camera once per frame (top-left point and pixel size)
- Running the parallel JIT frame pass from compute.py

The buffer is packed 32-bit BGRA, row-major, stride 4 * width, exposed
as a (height, width, 4) uint8 numpy array.
"""

import logging

import numpy as np

from .compute import render_frame, warmup_jit


logger = logging.getLogger(__name__)


class FrameRenderer:
    """
    Renders Mandelbrot frames for a camera and gradient.

    Usage:
        renderer = FrameRenderer(gradient, max_iterations=100)
        camera.update(elapsed, damping, zoom_damping)
        pixels = renderer.render(camera, 400, 400)
        # pixels is (400, 400, 4) uint8 in B, G, R, A order

    Attributes:
        gradient: Gradient used for coloring
        max_iterations: Iteration cap for the escape-time kernel
        plane_scale: Every sample point is multiplied by this before
            evaluation (4.0 by default, giving the classic overview at
            zoom 0.5)
    """

    DEFAULT_PLANE_SCALE = 4.0

    def __init__(self, gradient, max_iterations, plane_scale=None):
        """
        Initialize the renderer.

        Args:
            gradient: Gradient for coloring
            max_iterations: Iteration cap
            plane_scale: Sample point multiplier (default 4.0)
        """
        self.gradient = gradient
        self.max_iterations = int(max_iterations)
        self.plane_scale = self.DEFAULT_PLANE_SCALE if plane_scale is None else float(plane_scale)
        self.buffer = np.zeros((0, 0, 4), dtype=np.uint8)

    def _ensure_buffer(self, width, height):
        """Make sure the buffer exists and has the right size."""
        if self.buffer.shape[0] != height or self.buffer.shape[1] != width:
            logger.debug("Allocating %dx%d frame buffer", width, height)
            self.buffer = np.zeros((height, width, 4), dtype=np.uint8)
        return self.buffer

    def render(self, camera, width, height):
        """
        Render the view of `camera` at the given size.

        The camera is read once, before the pixel pass starts, so it is
        safe to update it again as soon as this returns.

        Args:
            camera: Camera to sample
            width, height: Output size in pixels

        Returns:
            The (height, width, 4) uint8 BGRA buffer. It is reused by the
            next call of the same size; copy it to keep a frame.
        """
        width = max(int(width), 0)
        height = max(int(height), 0)
        out = self._ensure_buffer(width, height)
        if width == 0 or height == 0:
            return out

        top_left, pixel_size = camera.top_left_and_step(width, height)
        period, initial, offsets, colors, final, falloff, table = self.gradient.kernel_args()
        render_frame(
            top_left.real, top_left.imag, pixel_size, self.plane_scale,
            self.max_iterations, period, initial, offsets, colors,
            final, falloff, table, out
        )
        return out

    def warmup(self):
        """Compile the JIT kernels on a tiny frame."""
        logger.info("Compiling render kernels (first run only)...")
        warmup_jit(self.gradient)
        logger.debug("Render kernels ready")

    def update_settings(self, max_iterations=None, gradient=None, plane_scale=None):
        """
        Update rendering settings.

        Args:
            max_iterations: New iteration cap (or None to keep current)
            gradient: New Gradient (or None to keep current)
            plane_scale: New sample multiplier (or None to keep current)

        Returns:
            True if any setting changed, False otherwise
        """
        changed = False
        if max_iterations is not None and int(max_iterations) != self.max_iterations:
            self.max_iterations = int(max_iterations)
            changed = True
        if gradient is not None and gradient is not self.gradient:
            self.gradient = gradient
            changed = True
        if plane_scale is not None and float(plane_scale) != self.plane_scale:
            self.plane_scale = float(plane_scale)
            changed = True
        return changed
