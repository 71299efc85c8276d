"""
Camera model for the Mandelbrot view.

The camera is a small mutable record: where it looks (center), how far
it is zoomed in (zoom, logarithmic), and how fast both are changing.
It converts pixel coordinates to points of the complex plane and
advances itself over time with exponential damping.
"""

from .complex_math import Complex, ZERO


class Camera:
    """
    View state for the complex plane.

    The visible edge length is proportional to 2 ** (-zoom), so each
    unit of zoom halves the view. Pixels are always square: the larger
    screen dimension spans the full view and the smaller one is cropped.

    Attributes:
        center: Complex point at the center of the view
        zoom: Logarithmic zoom level
        velocity: Change of center per second
        zoom_velocity: Change of zoom per second
    """

    def __init__(self, center=ZERO, zoom=0.0, velocity=ZERO, zoom_velocity=0.0):
        self.center = center
        self.zoom = float(zoom)
        self.velocity = velocity
        self.zoom_velocity = float(zoom_velocity)

    def copy(self):
        """Independent copy, e.g. a snapshot of the state for one frame."""
        return Camera(self.center, self.zoom, self.velocity, self.zoom_velocity)

    def reset(self, center=ZERO, zoom=0.0):
        """Jump to the given view and stop all motion."""
        self.center = center
        self.zoom = float(zoom)
        self.velocity = ZERO
        self.zoom_velocity = 0.0

    def top_left_and_step(self, width, height):
        """
        Find the top-left pixel center and the pixel size for an image.

        Args:
            width, height: Image dimensions in pixels

        Returns:
            (top_left, pixel_size) where pixel (x, y) is at
            top_left + Complex(pixel_size * x, pixel_size * y)
        """
        half_extent = 0.5 ** self.zoom
        pixel_size = half_extent * 2.0 / max(width, height)
        top_left = self.center + Complex(
            (pixel_size - width * pixel_size) * 0.5,
            (pixel_size - height * pixel_size) * 0.5)
        return top_left, pixel_size

    def pixel_to_point(self, x, y, width, height):
        """
        Transform the center of pixel (x, y) to a point in the plane.

        Built on top_left_and_step so a per-pixel lookup and a scan of
        the whole image always agree.
        """
        top_left, pixel_size = self.top_left_and_step(width, height)
        return top_left + Complex(pixel_size * x, pixel_size * y)

    def update(self, elapsed, damping, zoom_damping):
        """
        Advance the camera by `elapsed` seconds.

        Position and zoom move by their velocities, then the velocities
        decay by damping ** elapsed. Because the decay is exponential,
        two short updates damp exactly as much as one long one.

        Args:
            elapsed: Time step in seconds
            damping: Fraction of velocity left after one second, in (0, 1]
            zoom_damping: Same for zoom_velocity
        """
        self.center = self.center + self.velocity * elapsed
        self.zoom += self.zoom_velocity * elapsed

        self.velocity = self.velocity * (damping ** elapsed)
        self.zoom_velocity *= zoom_damping ** elapsed

    def __repr__(self):
        return (f"Camera(center={self.center!r}, zoom={self.zoom!r}, "
                f"velocity={self.velocity!r}, zoom_velocity={self.zoom_velocity!r})")
