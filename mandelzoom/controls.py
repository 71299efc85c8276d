"""
Pointer and wheel handling for the camera.

Translates raw input (already in pixel coordinates) into camera
changes. Kept free of pygame so it can be driven from tests or from a
different windowing layer.

- Wheel: adds to zoom_velocity; when not dragging, also pushes the
  camera toward the point under the cursor so zooming heads there.
- Drag: the plane point grabbed on press stays under the cursor, and
  the last drag delta becomes the camera velocity (fling on release).
"""

import logging

from .complex_math import Complex


logger = logging.getLogger(__name__)


class CameraController:
    """
    Applies wheel and drag gestures to a Camera.

    Attributes:
        camera: The Camera being controlled
        wheel_step: Zoom velocity added per wheel notch
        drag_point: Plane point grabbed by the current drag, or None
    """

    DEFAULT_WHEEL_STEP = 120.0 / 500.0

    def __init__(self, camera, wheel_step=None):
        self.camera = camera
        self.wheel_step = self.DEFAULT_WHEEL_STEP if wheel_step is None else wheel_step
        self.drag_point = None

    @property
    def dragging(self):
        return self.drag_point is not None

    def wheel(self, x, y, notches, width, height):
        """
        Handle a wheel movement at pixel (x, y).

        Args:
            x, y: Cursor position in pixels
            notches: Wheel delta, positive to zoom in
            width, height: View size in pixels
        """
        target = self.camera.pixel_to_point(x, y, width, height)
        amount = notches * self.wheel_step

        self.camera.zoom_velocity += amount
        if self.drag_point is None:
            self.camera.velocity = self.camera.velocity + (target - self.camera.center) * amount

    def press(self, x, y, width, height):
        """Start a drag at pixel (x, y)."""
        self.drag_point = self.camera.pixel_to_point(x, y, width, height)

    def move(self, x, y, width, height):
        """
        Handle pointer motion; only has an effect while dragging.

        Moves the camera so the grabbed point is back under the cursor
        and sets velocity to the negated delta.
        """
        if self.drag_point is None:
            return
        point = self.camera.pixel_to_point(x, y, width, height)
        diff = point - self.drag_point
        self.camera.center = self.camera.center - diff
        self.camera.velocity = -diff

    def release(self):
        """End the current drag, keeping the camera's velocity."""
        self.drag_point = None

    def reset(self, center=Complex(0.0, 0.0), zoom=0.0):
        """Cancel any drag and reset the camera to the given view."""
        self.drag_point = None
        self.camera.reset(center, zoom)
        logger.info("Camera reset to center=%r zoom=%s", center, zoom)
