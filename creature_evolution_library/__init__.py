# creature_evolution_library/__init__.py

# Key classes are exposed here for easier import.

from .config import (
    WORLD_WIDTH, WORLD_HEIGHT, POPULATION_SIZE, FOOD_COUNT,
    GENERATION_LENGTH, NETWORK_TOPOLOGY
)
from .errors import SimulationError, ConstructionError, InvariantViolation
from .genetics import (
    Individual, as_genome, GeneticAlgorithm,
    RouletteWheelSelection, TournamentSelection,
    UniformCrossover, AveragingCrossover, GaussianMutation
)
from .network import NeuralNetwork, Layer, parameter_count
from .eye import VisionSensor
from .agents import Creature, Food
from .model import World, WorldSnapshot, CreatureView, FoodView
from .evolution import Simulation

__version__ = "0.1.0"
