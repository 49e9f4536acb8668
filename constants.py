# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
Rendering properties live here, together with the defaults for every
tunable in config.json so that a partial config file is still complete.
"""

# Visualization settings
FPS = 60
WINDOW_TITLE = "Bouncing Particles"
DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 720
BACKGROUND_COLOR = (51, 51, 204) # Medium Blue
PARTICLE_COLOR = (255, 0, 0)     # Red

# The centered placeholder drawn beneath the particles.
LOGO_RADIUS = 48
LOGO_COLOR = (235, 235, 235)

# --- Simulation Defaults ---
# Number of particles spawned at startup. Never changes afterwards.
NUM_PARTICLES = 100
# Velocity components are drawn uniformly from [-MOVE_SPEED, MOVE_SPEED] (px/s).
MOVE_SPEED = 32.0
# Side length of a particle sprite at scale 1.0 (px).
PARTICLE_SIZE = 64.0
# Seconds between velocity randomization events.
REPEAT_RATE = 2.0
# Seconds to blend from the previous velocity to the new one.
TRANS_TIME = 1.0

DEFAULT_CONFIG = {
    "simulation_parameters": {
        "seed": None,
        "particle_count": NUM_PARTICLES,
        "move_speed": MOVE_SPEED,
        "particle_size": PARTICLE_SIZE,
        "repeat_interval": REPEAT_RATE,
        "smoothing_duration": TRANS_TIME,
        "velocity_smoothing": True,
        "boundary_margin": True
    },
    "run_control": {
        "max_steps": 0, # 0 runs until the window is closed
        "log_throttle_steps": 300,
        "profile": False
    },
    "visualization": {
        "window_width": DEFAULT_WINDOW_WIDTH,
        "window_height": DEFAULT_WINDOW_HEIGHT,
        "fullscreen": False,
        "background_color": list(BACKGROUND_COLOR),
        "particle_color": list(PARTICLE_COLOR)
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(levelname)s - %(message)s",
        "log_file": "logs/particles.log"
    }
}
