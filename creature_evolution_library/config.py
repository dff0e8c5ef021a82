# creature_evolution_library/config.py
import math

# World
WORLD_WIDTH = 1280.0
WORLD_HEIGHT = 800.0
FOOD_COUNT = 20
FOOD_SPAWN_MARGIN = 0.05 # Food respawns inside [5%, 95%] of each dimension

# Population and generations
POPULATION_SIZE = 20
GENERATION_LENGTH = 3500 # Ticks per generation before evolving

# Genetic algorithm
MUTATION_CHANCE = 0.01
MUTATION_COEFF = 0.2
TOURNAMENT_SIZE = 3

# Creature body
CREATURE_SIZE = 20.0
FOOD_SIZE = CREATURE_SIZE / 3.0
NECK_SIZE_RATIO = 2.0
BODY_LENGTH = CREATURE_SIZE * NECK_SIZE_RATIO
MOUTH_DISTANCE = BODY_LENGTH * 0.95 # Mouth sits near the tip of the body
EATEN_DISTANCE = CREATURE_SIZE / 1.5
MAX_EAT = 50 # Food eaten for full color intensity

# Creature motion
SPEED_MIN = 1.0
SPEED_MAX = 10.0
SPEED_ACCEL = 2.0
ROTATION_ACCEL = math.pi * 2.0 / 3.0

# Eye
EYE_CELLS = 9
EYE_ANGLE = math.pi + math.pi / 4.0
EYE_RANGE = 1000.0

# Brain: eye cells in, (rotation delta, speed delta) out
BRAIN_OUTPUTS = 2
NETWORK_TOPOLOGY = (EYE_CELLS, 5, 3, BRAIN_OUTPUTS)

# Visualization Parameters (if Pygame is used)
VIS_ENABLED_DEFAULT = True
VIS_FPS = 60
VIS_BACKGROUND_COLOR = (31, 38, 57)
VIS_FOOD_COLOR = (0, 255, 0)
VIS_CREATURE_COLOR = (255, 255, 255)
VIS_EYE_COLOR = (255, 255, 255)
VIS_EYEBALL_COLOR = (0, 0, 0)
VIS_MOUTH_COLOR = (255, 182, 193)
VIS_TEXT_COLOR = (230, 230, 230)
VIS_FONT_SIZE = 24
VIS_EYE_SIZE = CREATURE_SIZE / 3.0
VIS_EYEBALL_SIZE = CREATURE_SIZE / 5.0
VIS_EYE_POSITION = BODY_LENGTH * 0.5
VIS_EYEBALL_POSITION = BODY_LENGTH * 0.55
VIS_MOUTH_SIZE = CREATURE_SIZE / 5.0
VIS_MOUTH_OPEN_ANGLE = math.radians(10.0)

# Plotting output
PLOT_OUTPUT_DIR = "simulation_plots"
