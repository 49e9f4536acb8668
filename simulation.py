# simulation.py
"""
Handles the per-frame motion update of the particle system.

This module defines the RepeatTimer, which gates periodic velocity
randomization, and the Simulation class, which advances the particles
by one frame: reflecting velocities at the window edges, optionally
blending from the previous velocity toward the current one, and moving
each particle by its velocity times the frame time.
"""
import logging
import numpy as np
from typing import Dict, Any
from particle import ParticleSystem
from numba import jit

# --- Data Contracts ---
#
# class RepeatTimer:
#   - __init__(self, interval: float):
#     - Inputs: interval, seconds between firings. Must be > 0.
#   - tick(self, dt: float) -> bool:
#     - Side Effects: Accumulates dt. On reaching the interval, marks the
#       timer finished and resets elapsed to 0.
#     - Outputs: True if the timer fired on this tick.
#
# class Simulation:
#   - __init__(self, particles: ParticleSystem, params: Dict[str, Any]):
#     - Inputs:
#       - particles: An initialized ParticleSystem object.
#       - params: Dictionary of simulation parameters from config.json.
#         - "particle_size": float
#         - "smoothing_duration": float
#         - "velocity_smoothing": bool
#         - "boundary_margin": bool
#
#   - step(self, dt, half_width, half_height, timer) -> bool:
#     - Inputs: frame time in seconds (>= 0), window half-extents, and the
#       RepeatTimer owned by the caller.
#     - Outputs: True if velocities were randomized this frame.
#     - Side Effects: Modifies the ParticleSystem arrays in place.
#     - Invariants: Particle count remains constant. Blend factors stay in
#       [0, 1]. Reflection flips signs and never changes magnitudes.


class RepeatTimer:
    """
    A repeating countdown that fires every `interval` seconds.
    """
    def __init__(self, interval: float):
        if interval <= 0:
            msg = f"Configuration error: repeat interval must be > 0, got {interval}."
            logging.critical(msg)
            raise ValueError(msg)
        self.interval = float(interval)
        self.elapsed = 0.0
        self.finished = False

    def tick(self, dt: float) -> bool:
        self.elapsed += dt
        self.finished = self.elapsed >= self.interval
        if self.finished:
            self.elapsed = 0.0
        return self.finished


@jit(nopython=True)
def _reflect_numba(positions, velocities, half_width, half_height, margin):
    """
    Numba-jitted boundary check. Flips the sign of a velocity component
    when the matching position component lies strictly outside the usable
    half-extent. Returns the number of flips performed.
    """
    flips = 0
    x_min = -half_width + margin
    x_max = half_width - margin
    y_min = -half_height + margin
    y_max = half_height - margin

    for i in range(positions.shape[0]):
        x = positions[i, 0]
        y = positions[i, 1]
        if x < x_min or x > x_max:
            velocities[i, 0] = -velocities[i, 0]
            flips += 1
        if y < y_min or y > y_max:
            velocities[i, 1] = -velocities[i, 1]
            flips += 1
    return flips


@jit(nopython=True)
def _advance_smoothed_numba(
    positions, velocities, last_velocities, blend_factors, speeds, scales,
    blend_rate, dt
):
    """
    Numba-jitted smoothed translation.

    The effective velocity is lerp(last_velocity, velocity, blend_factor).
    It drives both the translation and the visual scale, and the blend
    factor then advances by blend_rate * dt, clamped to [0, 1].
    """
    for i in range(positions.shape[0]):
        f = blend_factors[i]
        vx = last_velocities[i, 0] + (velocities[i, 0] - last_velocities[i, 0]) * f
        vy = last_velocities[i, 1] + (velocities[i, 1] - last_velocities[i, 1]) * f

        scales[i] = np.sqrt(vx * vx + vy * vy) / speeds[i]
        positions[i, 0] += vx * dt
        positions[i, 1] += vy * dt

        f += blend_rate * dt
        if f < 0.0:
            f = 0.0
        elif f > 1.0:
            f = 1.0
        blend_factors[i] = f


class Simulation:
    """
    Advances the particle system one frame at a time.
    """
    def __init__(self, particles: ParticleSystem, params: Dict[str, Any]):
        """
        Initializes the motion updater.

        Args:
            particles (ParticleSystem): The particle system to move.
            params (Dict[str, Any]): Simulation parameters from config.
        """
        self.particles = particles
        self.particle_size = float(params.get('particle_size', 64.0))
        self.smoothing_duration = float(params.get('smoothing_duration', 1.0))
        self.velocity_smoothing = bool(params.get('velocity_smoothing', True))
        self.boundary_margin = bool(params.get('boundary_margin', True))

        if self.smoothing_duration <= 0:
            msg = (
                f"Configuration error: smoothing_duration must be > 0, "
                f"got {self.smoothing_duration}."
            )
            logging.critical(msg)
            raise ValueError(msg)

        # Half the sprite size keeps the whole sprite inside the window.
        self.margin = self.particle_size / 2.0 if self.boundary_margin else 0.0
        self.blend_rate = 1.0 / self.smoothing_duration
        self.randomizations = 0

        logging.info(
            f"Simulation initialized: smoothing "
            f"{'on' if self.velocity_smoothing else 'off'}, "
            f"boundary margin {self.margin:.1f}px."
        )

    def warm_up(self):
        """
        Compiles the Numba kernels on scratch arrays so the first timed
        frame does not pay for JIT compilation.
        """
        positions = np.zeros((1, 2), dtype=np.float64)
        velocities = np.zeros((1, 2), dtype=np.float64)
        _reflect_numba(positions, velocities, 1.0, 1.0, self.margin)
        _advance_smoothed_numba(
            positions, velocities, velocities.copy(),
            np.zeros(1, dtype=np.float64), np.ones(1, dtype=np.float64),
            np.ones(1, dtype=np.float64), self.blend_rate, 0.0
        )
        logging.debug("Numba kernels compiled.")

    def randomize_velocities(self):
        """
        Replaces every particle's velocity with a fresh random one. The old
        velocity becomes the blend source and the blend factor restarts.
        """
        p = self.particles
        p.last_velocities[:] = p.velocities
        p.velocities[:] = p.random_velocities()
        p.blend_factors.fill(0.0)
        self.randomizations += 1
        logging.debug(f"Velocities randomized (event #{self.randomizations}).")

    def step(self, dt: float, half_width: float, half_height: float, timer: RepeatTimer) -> bool:
        """
        Executes one frame of the motion update.

        Returns:
            bool: True if the timer fired and velocities were randomized.
        """
        if dt < 0:
            raise ValueError(f"Frame time must be >= 0, got {dt}.")
        if dt == 0:
            # Nothing elapsed, so nothing fired this frame.
            timer.finished = False
            return False

        # 1. Tick the shared timer. It advances on every frame, whichever
        #    branch runs below.
        if timer.tick(dt):
            self.randomize_velocities()
            return True

        p = self.particles

        # 2. Reflect at the window edges (using Numba). This runs before the
        #    translation, so a crossing is corrected on the following frame.
        flips = _reflect_numba(
            p.positions, p.velocities,
            float(half_width), float(half_height), self.margin
        )
        if flips:
            logging.debug(f"{flips} velocity components reflected at the boundary.")

        # 3. Translate, either through the blended velocity or directly.
        if self.velocity_smoothing:
            _advance_smoothed_numba(
                p.positions, p.velocities, p.last_velocities, p.blend_factors,
                p.speeds, p.scales, self.blend_rate, float(dt)
            )
        else:
            p.positions += p.velocities * dt

        return False
