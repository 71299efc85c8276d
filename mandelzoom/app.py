"""
Main application module for the MandelZoom viewer.

Contains the MandelZoomApp class which handles:
- Window setup and main loop
- User input (wheel zoom, drag pan, keyboard)
- Advancing the camera once per frame
- Rendering and display
"""

import logging

import pygame

from .controls import CameraController
from .renderer import FrameRenderer
from .settings import build_camera, build_gradient, initial_view, load_settings


logger = logging.getLogger(__name__)


class MandelZoomApp:
    """
    Main application class for the MandelZoom viewer.

    Handles the pygame window, event loop and frame timing, and
    coordinates between the camera, its controller and the renderer.
    """

    TITLE = "MandelZoom"
    SPF_SMOOTHING = 20.0  # Weight of the previous seconds-per-frame estimate

    def __init__(self, width=None, height=None, max_iterations=None, settings=None,
                 settings_path=None):
        """
        Initialize the application.

        Args:
            width: Window width in pixels (default from settings)
            height: Window height in pixels (default from settings)
            max_iterations: Iteration cap (default from settings)
            settings: Settings dict from load_settings() (default: loaded
                from settings_path)
            settings_path: User settings file, re-read when F5 is pressed
        """
        self.settings_path = settings_path
        self.settings = settings if settings is not None else load_settings(settings_path)
        window = self.settings['window']

        self.width = width or window['width']
        self.height = height or window['height']
        self.fps = window.get('fps', 60)
        self.max_iterations_override = max_iterations

        # Components
        self.camera = build_camera(self.settings)
        self.controller = CameraController(self.camera)
        render = self.settings['render']
        self.renderer = FrameRenderer(
            build_gradient(self.settings),
            max_iterations or render['max_iterations'],
            plane_scale=render['plane_scale'])
        self._apply_settings()

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        # Estimate of seconds per frame, for the titlebar
        self.spf = 1.0 / self.fps

        self.running = False

    def _apply_settings(self, gradient=None):
        """
        Push the current settings into the controller and renderer.

        Returns:
            True if the rendered image changes
        """
        render = self.settings['render']
        camera = self.settings['camera']
        self.damping = camera['damping']
        self.zoom_damping = camera['zoom_damping']
        self.controller.wheel_step = self.settings['input']['wheel_step']
        return self.renderer.update_settings(
            max_iterations=self.max_iterations_override or render['max_iterations'],
            gradient=gradient,
            plane_scale=render['plane_scale'])

    def reload_settings(self):
        """
        Re-read the settings file and apply it without restarting.

        Window size and camera position are left alone. Returns True if
        the rendered image changes.
        """
        self.settings = load_settings(self.settings_path)
        changed = self._apply_settings(gradient=build_gradient(self.settings))
        logger.info("Settings reloaded from %s", self.settings_path or "defaults")
        return changed

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._warmup()
        # Don't count compile time as the first frame
        self.clock.tick()

        self.running = True
        while self.running:
            elapsed = self.clock.tick(self.fps) / 1000.0

            self._handle_events()
            self.update(elapsed)
            self._draw()

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.RESIZABLE
        )
        pygame.display.set_caption(self.TITLE)
        self.clock = pygame.time.Clock()

    def _warmup(self):
        """Warm up JIT before the first frame."""
        pygame.display.set_caption("Compiling (first run only)...")
        self.renderer.warmup()
        pygame.display.set_caption(self.TITLE)

    def update(self, elapsed):
        """
        Advance the view state by `elapsed` seconds.

        Updates the frame time estimate and moves the camera. Must run
        before the frame is rendered.
        """
        self.spf = (self.spf * self.SPF_SMOOTHING + elapsed) / (self.SPF_SMOOTHING + 1.0)
        self.camera.update(elapsed, self.damping, self.zoom_damping)

    def fps_caption(self):
        """Titlebar text with the current frame rate."""
        if self.spf <= 0.0:
            return self.TITLE
        return f"{self.TITLE} ({1.0 / self.spf:.0f} fps)"

    def _handle_events(self):
        """Process all pending pygame events."""
        width, height = self.screen.get_size()
        for event in pygame.event.get():
            self.handle_event(event, width, height)

    def handle_event(self, event, width, height, mouse_pos=None):
        """
        Dispatch one pygame event.

        Args:
            event: The pygame event
            width, height: Current view size in pixels
            mouse_pos: Cursor position for wheel events (default: asks pygame)
        """
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEWHEEL:
            mx, my = mouse_pos if mouse_pos is not None else pygame.mouse.get_pos()
            self.controller.wheel(mx, my, event.y, width, height)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1:  # Left click
                self.controller.press(event.pos[0], event.pos[1], width, height)
        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1:
                self.controller.release()
        elif event.type == pygame.MOUSEMOTION:
            self.controller.move(event.pos[0], event.pos[1], width, height)
        elif event.type == pygame.VIDEORESIZE:
            logger.debug("Window resized to %dx%d", event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event)

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            # Reset to default view
            center, zoom = initial_view(self.settings)
            self.controller.reset(center, zoom)
        elif event.key == pygame.K_F5:
            self.reload_settings()
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _draw(self):
        """Render the current camera view and show it."""
        width, height = self.screen.get_size()
        pixels = self.renderer.render(self.camera, width, height)
        if width > 0 and height > 0:
            surface = pygame.image.frombuffer(pixels, (width, height), 'BGRA')
            self.screen.blit(surface, (0, 0))
        pygame.display.set_caption(self.fps_caption())
        pygame.display.flip()


def run(width=None, height=None, max_iterations=None, settings_path=None):
    """
    Run the MandelZoom viewer.

    Args:
        width: Window width (default from settings)
        height: Window height (default from settings)
        max_iterations: Maximum iterations (default from settings)
        settings_path: Optional user settings JSON file
    """
    app = MandelZoomApp(width, height, max_iterations, settings_path=settings_path)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
