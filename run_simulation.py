# run_simulation.py
import os
import argparse

# Import from the local library package
from creature_evolution_library import Simulation, config as sim_config

# Pygame is optional, attempt import for visualization
try:
    import pygame
except ImportError:
    pygame = None
    print("Pygame not found. Visualization will be disabled.")
    sim_config.VIS_ENABLED_DEFAULT = False

# Matplotlib for plotting - optional, attempt import
try:
    import matplotlib.pyplot as plt
    plt.switch_backend('Agg')
except ImportError:
    plt = None
    print("Matplotlib not found. End-of-run plotting will be disabled.")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Creature evolution: eyes, neural brains and a genetic algorithm')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for a reproducible run (default: random)')
    parser.add_argument('--generations', '-g', type=int, default=None,
                        help='Stop after this many generations (default: run until the window is closed)')
    parser.add_argument('--no-vis', action='store_true',
                        help='Run headless, without a Pygame window')
    parser.add_argument('--plots-dir', default=sim_config.PLOT_OUTPUT_DIR,
                        help=f'Directory for the fitness plots (default: {sim_config.PLOT_OUTPUT_DIR})')
    return parser.parse_args(argv)


def generate_and_save_plots(history, output_dir):
    if not plt:
        print("Matplotlib not available. Skipping plot generation.")
        return
    if not history['max_fitness']:
        return
    if not os.path.exists(output_dir):
        try:
            os.makedirs(output_dir)
        except OSError as e:
            print(f"Error creating plot directory {output_dir}: {e}. Plots will not be saved.")
            return

    generation_numbers = list(range(1, len(history['max_fitness']) + 1))
    plt.figure(figsize=(12, 7))
    plt.plot(generation_numbers, history['max_fitness'], label="Best Fitness", marker='o', linestyle='-')
    plt.plot(generation_numbers, history['avg_fitness'], label="Average Fitness", marker='x', linestyle='--')
    plt.plot(generation_numbers, history['min_fitness'], label="Worst Fitness", marker='.', linestyle=':')
    plt.title("Food Eaten over Generations", fontsize=16)
    plt.xlabel("Generation", fontsize=14)
    plt.ylabel("Food eaten", fontsize=14)
    plt.legend(fontsize=12)
    plt.grid(True, linestyle=':', alpha=0.7)
    plt.tight_layout()
    plot_path = os.path.join(output_dir, "fitness_over_generations.png")
    try:
        plt.savefig(plot_path)
        print(f"Saved fitness plot to {plot_path}")
    except OSError as e:
        print(f"Error saving fitness plot: {e}")
    plt.close()


def run_simulation(enable_visualization_param=sim_config.VIS_ENABLED_DEFAULT,
                   max_generations=None, seed=None,
                   plots_dir=sim_config.PLOT_OUTPUT_DIR):
    pygame_screen = None
    pygame_clock = None
    pygame_font = None
    pygame_is_initialized_this_run = False

    if enable_visualization_param and pygame:
        try:
            pygame.init()
            pygame_is_initialized_this_run = True
            pygame_screen = pygame.display.set_mode((int(sim_config.WORLD_WIDTH), int(sim_config.WORLD_HEIGHT)))
            pygame.display.set_caption("Creature Evolution Simulation")
            pygame_clock = pygame.time.Clock()
            pygame_font = pygame.font.Font(None, sim_config.VIS_FONT_SIZE)
        except pygame.error as e:
            print(f"Error initializing Pygame: {e}. Visualization will be disabled.")
            pygame_is_initialized_this_run = False
            enable_visualization_param = False
            if pygame.get_init():
                pygame.quit()
    elif enable_visualization_param and not pygame:
        print("Visualization was requested, but Pygame is not available. Running without visualization.")
        enable_visualization_param = False

    simulation = Simulation(seed=seed)
    print(f"Population size: {len(simulation.world.creatures)}, "
          f"brain topology: {simulation.topology}, "
          f"{simulation.generation_length} ticks per generation")

    running = True
    while running:
        if max_generations is not None and simulation.generation >= max_generations:
            break

        if not enable_visualization_param:
            simulation.run_generation()
            continue

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                print("Pygame window closed by user. Simulation will stop.")
                running = False
        if not running:
            break

        simulation.advance_tick()
        simulation.world.draw_world(pygame_screen, pygame_font,
                                    overlay_lines=[f"Generation: {simulation.generation}"])
        pygame.display.flip()
        pygame_clock.tick(sim_config.VIS_FPS)

    if pygame_is_initialized_this_run and pygame.get_init():
        pygame.quit()

    print(f"Simulation finished after {simulation.generation} generations.")
    generate_and_save_plots(simulation.history, plots_dir)
    return simulation


if __name__ == '__main__':
    args = parse_args()
    if args.no_vis and args.generations is None:
        print("Headless runs need --generations; defaulting to 10.")
        args.generations = 10
    run_simulation(
        enable_visualization_param=not args.no_vis and sim_config.VIS_ENABLED_DEFAULT,
        max_generations=args.generations,
        seed=args.seed,
        plots_dir=args.plots_dir)
