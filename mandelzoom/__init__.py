"""
MandelZoom

A real-time Mandelbrot set viewer with physically smooth pan and zoom,
using Pygame for display and Numba for JIT-compiled computation.

Quick Start:
    from mandelzoom import run
    run()

Or from command line:
    python -m mandelzoom

Package Structure:
    - complex_math.py: Immutable complex value type
    - compute.py: JIT-compiled escape-time, gradient and frame kernels
    - gradient.py: Color, Stop and Gradient (periodic, with falloff and cache)
    - camera.py: View state, pixel <-> plane transforms, damped motion
    - controls.py: Wheel and drag handling for the camera
    - renderer.py: BGRA frame rendering
    - settings.py: settings.json loading
    - app.py: Main application and event loop

Controls:
    - Scroll: Zoom toward the mouse position
    - Drag: Pan around (release while moving to fling)
    - R: Reset to default view
    - ESC: Quit
"""

from .app import run, MandelZoomApp
from .camera import Camera
from .complex_math import Complex
from .compute import evaluate
from .controls import CameraController
from .gradient import Color, Gradient, GradientError, Stop
from .renderer import FrameRenderer
from .settings import load_settings

__version__ = "1.0.0"
__all__ = [
    "run",
    "MandelZoomApp",
    "Camera",
    "CameraController",
    "Color",
    "Complex",
    "FrameRenderer",
    "Gradient",
    "GradientError",
    "Stop",
    "evaluate",
    "load_settings",
]
