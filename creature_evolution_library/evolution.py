# creature_evolution_library/evolution.py
import random

import numpy as np

from .config import (WORLD_WIDTH, WORLD_HEIGHT, POPULATION_SIZE, FOOD_COUNT,
                     GENERATION_LENGTH, MUTATION_CHANCE, MUTATION_COEFF,
                     NETWORK_TOPOLOGY)
from .errors import ConstructionError
from .genetics import (GeneticAlgorithm, GaussianMutation, Individual,
                       RouletteWheelSelection, UniformCrossover)
from .model import World
from .network import NeuralNetwork


class Simulation:
    """
    Runs worlds generation after generation. Each generation lasts
    `generation_length` ticks; then the creatures' brains are evolved and a
    brand-new World is built from the children plus the best brain, untouched.
    """
    def __init__(self, width=WORLD_WIDTH, height=WORLD_HEIGHT,
                 population_size=POPULATION_SIZE, food_count=FOOD_COUNT,
                 generation_length=GENERATION_LENGTH,
                 mutation_chance=MUTATION_CHANCE, mutation_coeff=MUTATION_COEFF,
                 topology=NETWORK_TOPOLOGY, eye=None, genetic_algorithm=None,
                 rng=None, seed=None, verbose=True):
        """
        Initializes the Simulation and its first, randomly-brained, generation.

        Args:
            width (float): Width of the world.
            height (float): Height of the world.
            population_size (int): Creatures per generation.
            food_count (int): Food items per world.
            generation_length (int): Ticks each generation runs before evolving.
            mutation_chance (float): Per-gene mutation probability, used when no
                `genetic_algorithm` is given.
            mutation_coeff (float): Mutation magnitude, used when no `genetic_algorithm` is given.
            topology (sequence of int): Brain layer sizes.
            eye (VisionSensor, optional): Shared eye configuration.
            genetic_algorithm (GeneticAlgorithm, optional): Overrides the default
                roulette-wheel / uniform-crossover / Gaussian-mutation setup.
            rng (random.Random, optional): Source of randomness for the whole run.
            seed (optional): Seed for a new random.Random when `rng` is not given.
                With neither, the run is not reproducible.
            verbose (bool): Print a summary line at every generation boundary.
        """
        if generation_length <= 0:
            raise ConstructionError(f"Generation length must be positive, got {generation_length}.")

        self.rng = rng if rng is not None else random.Random(seed)
        self.width = width
        self.height = height
        self.food_count = food_count
        self.generation_length = generation_length
        self.topology = tuple(topology)
        self.eye = eye
        self.verbose = verbose
        self.genetic_algorithm = genetic_algorithm if genetic_algorithm is not None else GeneticAlgorithm(
            RouletteWheelSelection(),
            UniformCrossover(),
            GaussianMutation(mutation_chance, mutation_coeff))

        self.generation = 0
        self.history = {'min_fitness': [], 'max_fitness': [], 'avg_fitness': []}
        self.world = World(width=width, height=height, population_size=population_size,
                           food_count=food_count, topology=self.topology, eye=eye, rng=self.rng)

    @property
    def generation_over(self):
        """True once the current world has used up its tick budget."""
        return self.world.age >= self.generation_length

    def advance_tick(self):
        """Runs one world tick, or evolves the next generation when the current one is over."""
        if self.generation_over:
            self.evolve()
        else:
            self.world.step()

    def run_generation(self):
        """Advances until the current generation has been evolved into the next one."""
        starting_generation = self.generation
        while self.generation == starting_generation:
            self.advance_tick()

    def snapshot(self):
        return self.world.snapshot()

    def record_generation(self, population):
        """Stores min/max/avg fitness of the finished generation and prints them if verbose."""
        fitnesses = [individual.fitness for individual in population]
        stats = {
            'min_fitness': float(np.min(fitnesses)),
            'max_fitness': float(np.max(fitnesses)),
            'avg_fitness': float(np.mean(fitnesses)),
        }
        for key, value in stats.items():
            self.history[key].append(value)

        if self.verbose:
            print(f"Generation {self.generation}: min {stats['min_fitness']:.0f}, "
                  f"max {stats['max_fitness']:.0f}, avg {stats['avg_fitness']:.2f} "
                  f"(food eaten: {self.world.foods_eaten})")
        return stats

    def evolve(self):
        """
        Turns the finished generation into the next one: every creature becomes
        an Individual (brain genome, food eaten), the genetic algorithm breeds
        N-1 children and the best creature's brain is carried over as the elite.
        """
        creatures = self.world.creatures
        population = [Individual(creature.brain.to_genome(), float(creature.eaten))
                      for creature in creatures]
        self.record_generation(population)

        # max() keeps the first creature among equals
        best_creature = max(creatures, key=lambda creature: creature.eaten)

        children = self.genetic_algorithm.evolve(population, self.rng)
        brains = [NeuralNetwork.from_genome(self.topology, genome) for genome in children]
        brains.append(best_creature.brain)

        self.world = World(width=self.width, height=self.height, food_count=self.food_count,
                           topology=self.topology, brains=brains, eye=self.eye, rng=self.rng)
        self.generation += 1
