# visualization.py
"""
Handles the visualization of the particle simulation using Pygame.

Particle positions are in world coordinates: the origin is the window
center and y points up. The Visualizer owns the window and the frame
clock, and reports the current half-extents the motion update bounces
against.
"""
import logging
import pygame
import numpy as np
from particle import ParticleSystem
from constants import (
    FPS, WINDOW_TITLE, DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT,
    BACKGROUND_COLOR, PARTICLE_COLOR, PARTICLE_SIZE, LOGO_RADIUS, LOGO_COLOR
)
from typing import Tuple, Optional

# --- Data Contracts ---
#
# world_to_screen(positions: np.ndarray, width: int, height: int) -> np.ndarray:
#   - Inputs: (N, 2) world positions, window size in pixels.
#   - Outputs: (N, 2) screen positions (origin top-left, y down).
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[dict] = None, particle_size: float = PARTICLE_SIZE):
#     - Side Effects: Initializes Pygame and creates a resizable display surface.
#
#   - tick(self) -> float:
#     - Outputs: Seconds elapsed since the previous frame, capped at FPS.
#
#   - half_extents(self) -> Tuple[float, float]:
#     - Outputs: Current window (width / 2, height / 2).
#
#   - draw(self, particles: ParticleSystem) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Handles Pygame events and renders one frame.


def world_to_screen(positions: np.ndarray, width: int, height: int) -> np.ndarray:
    """Converts centered, y-up world coordinates to Pygame screen pixels."""
    screen = np.empty_like(positions, dtype=np.float64)
    screen[:, 0] = width / 2.0 + positions[:, 0]
    screen[:, 1] = height / 2.0 - positions[:, 1]
    return screen


class Visualizer:
    """
    Owns the Pygame window and renders each particle as a scaled square.
    """
    def __init__(self, vis_params: Optional[dict] = None, particle_size: float = PARTICLE_SIZE):
        """
        Initializes Pygame and the display window.
        """
        params = vis_params if vis_params is not None else {}
        pygame.init()

        if params.get('fullscreen', False):
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width = int(params.get('window_width', DEFAULT_WINDOW_WIDTH))
            height = int(params.get('window_height', DEFAULT_WINDOW_HEIGHT))
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        self.background_color = self._parse_color(params.get('background_color'), BACKGROUND_COLOR)
        self.particle_color = self._parse_color(params.get('particle_color'), PARTICLE_COLOR)
        self.particle_size = float(particle_size)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def _parse_color(self, value, fallback: Tuple[int, int, int]) -> pygame.Color:
        """Builds a pygame.Color from a config RGB list, falling back on bad input."""
        if not value:
            return pygame.Color(fallback)
        try:
            if isinstance(value, str):
                return pygame.Color(value)
            return pygame.Color(*value)
        except (ValueError, TypeError) as e:
            logging.error(f"Could not parse color {value!r} from config: {e}. Using default.")
            return pygame.Color(fallback)

    def tick(self) -> float:
        """Waits for the next frame and returns the elapsed time in seconds."""
        return self.clock.tick(FPS) / 1000.0

    def half_extents(self) -> Tuple[float, float]:
        width, height = self.screen.get_size()
        return width / 2.0, height / 2.0

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

            if event.type == pygame.VIDEORESIZE:
                logging.debug(f"Window resized to {event.w}x{event.h}.")
        return True

    def draw(self, particles: ParticleSystem) -> bool:
        """
        Draws all particles and handles events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        if not self._handle_events():
            return False

        width, height = self.screen.get_size()
        self.screen.fill(self.background_color)

        # Placeholder for the logo sprite at the world origin.
        pygame.draw.circle(self.screen, LOGO_COLOR, (width // 2, height // 2), LOGO_RADIUS)

        centers = world_to_screen(particles.positions, width, height)
        sizes = self.particle_size * particles.scales
        for (cx, cy), size in zip(centers, sizes):
            side = max(int(round(size)), 1)
            rect = pygame.Rect(0, 0, side, side)
            rect.center = (int(round(cx)), int(round(cy)))
            pygame.draw.rect(self.screen, self.particle_color, rect)

        pygame.display.flip()
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
