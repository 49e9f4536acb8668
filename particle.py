# particle.py
"""
Manages the state of all particles in the simulation.

This module defines the ParticleSystem class, which spawns a fixed
population of particles and stores their state (position, velocity,
smoothing state, scale) in parallel NumPy arrays indexed by particle id.
"""
import logging
import numpy as np
from typing import Dict, Any

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, params: Dict[str, Any]):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "seed": Optional[int]
#         - "particle_count": int
#         - "move_speed": float
#     - Outputs: None
#     - Side Effects: Initializes internal NumPy arrays for particle state.
#     - Invariants:
#       - self.ids is a NumPy array of shape (N,) of dtype int32, 0..N-1.
#       - self.positions, self.velocities and self.last_velocities are
#         NumPy arrays of shape (N, 2) of dtype float64.
#       - self.blend_factors, self.speeds and self.scales are NumPy arrays
#         of shape (N,) of dtype float64.
#       - N never changes after construction.
#
#   - random_velocities(self) -> np.ndarray:
#     - Outputs: (N, 2) array, each component uniform in [-speed, speed]
#       using each particle's own speed.

class ParticleSystem:
    """
    A fixed-size arena of particles, managing their state via NumPy arrays.
    """
    def __init__(self, params: Dict[str, Any]):
        """
        Spawns the particle population.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
        """
        self.particle_count = int(params['particle_count'])
        self.move_speed = float(params['move_speed'])
        self.seed = params.get('seed')

        if self.particle_count < 0:
            msg = f"Configuration error: particle_count must be >= 0, got {self.particle_count}."
            logging.critical(msg)
            raise ValueError(msg)
        if self.move_speed <= 0:
            msg = f"Configuration error: move_speed must be > 0, got {self.move_speed}."
            logging.critical(msg)
            raise ValueError(msg)

        # All randomness goes through one generator so a seeded run is
        # reproducible from spawn through every later randomization.
        self.rng = np.random.default_rng(self.seed)

        n = self.particle_count
        self.ids = np.arange(n, dtype=np.int32)
        self.speeds = np.full(n, self.move_speed, dtype=np.float64)
        self.positions = np.zeros((n, 2), dtype=np.float64)
        self.scales = np.ones(n, dtype=np.float64)

        self.velocities = self.random_velocities()
        self.last_velocities = self.velocities.copy()
        self.blend_factors = np.zeros(n, dtype=np.float64)

        logging.info(
            f"ParticleSystem spawned {self.particle_count} particles "
            f"with move speed {self.move_speed:.1f}."
        )
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Velocities shape: {self.velocities.shape}, "
            f"Seed: {self.seed}"
        )

    def __len__(self) -> int:
        return self.particle_count

    def random_velocities(self) -> np.ndarray:
        """
        Draws fresh velocity vectors, one per particle.

        Each component is (u - 0.5) * 2 * speed with u uniform in [0, 1),
        so it lies in [-speed, speed].
        """
        u = self.rng.random((self.particle_count, 2))
        return (u - 0.5) * 2.0 * self.speeds[:, np.newaxis]

    def describe(self, index: int) -> Dict[str, Any]:
        """Returns a plain snapshot of one particle, for debugging."""
        return {
            "id": int(self.ids[index]),
            "position": self.positions[index].tolist(),
            "velocity": self.velocities[index].tolist(),
            "last_velocity": self.last_velocities[index].tolist(),
            "blend_factor": float(self.blend_factors[index]),
            "speed": float(self.speeds[index]),
            "scale": float(self.scales[index]),
        }
