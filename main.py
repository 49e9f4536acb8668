# main.py
"""
Main entry point for the Bouncing Particles demo.

This script orchestrates the entire lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and spawns the particles.
4. Runs the frame loop.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import numpy as np
import cProfile
import pstats
import io


def main():
    """
    The main function to run the demo.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except (OSError, ValueError) as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Bouncing Particles Starting ---")

    sim_params = config['simulation_parameters']
    run_params = config['run_control']
    vis_params = config['visualization']

    from particle import ParticleSystem
    from simulation import Simulation, RepeatTimer
    from visualization import Visualizer

    # --- Component Initialization ---
    visualizer = Visualizer(vis_params, particle_size=sim_params['particle_size'])
    particles = ParticleSystem(sim_params)
    sim = Simulation(particles, sim_params)
    timer = RepeatTimer(sim_params['repeat_interval'])

    profiler = cProfile.Profile() if run_params.get('profile') else None

    log_throttle = max(int(run_params.get('log_throttle_steps', 300)), 1)
    max_steps = int(run_params.get('max_steps') or 0)

    running = True
    step_num = 0

    # Compile the kernels and restart the clock so the first frame's dt
    # covers one frame, not startup.
    sim.warm_up()
    visualizer.tick()

    if profiler:
        profiler.enable()
    while running:
        dt = visualizer.tick()
        half_width, half_height = visualizer.half_extents()
        sim.step(dt, half_width, half_height, timer)
        step_num += 1

        # The visualizer returns False once the user quits.
        if not visualizer.draw(particles):
            running = False

        # Hot loops must throttle logs
        if step_num % log_throttle == 0:
            logging.info(f"Frame {step_num}, {sim.randomizations} randomizations so far.")
            avg_speed = np.mean(np.linalg.norm(particles.velocities, axis=1)) if len(particles) else 0.0
            logging.debug(f"Frame {step_num} | Average Speed: {avg_speed:.4f}")

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping.")
            running = False
    if profiler:
        profiler.disable()

    visualizer.close()
    logging.info("Frame loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Bouncing Particles Shutting Down ---")


if __name__ == "__main__":
    main()
