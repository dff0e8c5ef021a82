# creature_evolution_library/genetics.py
from collections import namedtuple

import numpy as np

from .config import MUTATION_CHANCE, MUTATION_COEFF, TOURNAMENT_SIZE
from .errors import ConstructionError, InvariantViolation

# One member of the population handed to the genetic algorithm.
Individual = namedtuple("Individual", ["genome", "fitness"])


def as_genome(values):
    """
    Builds a genome: a read-only, one-dimensional float32 array.

    Args:
        values (iterable of float): The genes, in order.

    Returns:
        numpy.ndarray: A new array that owns its data and cannot be written to.
    """
    genome = np.array(values, dtype=np.float32).ravel()
    genome.setflags(write=False)
    return genome


class RouletteWheelSelection:
    """
    Fitness-proportionate selection: an individual is drawn with probability
    fitness / total fitness. A population whose fitnesses are all zero is
    sampled uniformly.
    """

    def select(self, population, rng):
        if not population:
            raise InvariantViolation("Cannot select from an empty population.")
        weights = [individual.fitness for individual in population]
        if any(weight < 0 for weight in weights):
            raise InvariantViolation("Roulette-wheel selection needs non-negative fitness values.")
        if sum(weights) <= 0:
            return rng.choice(population)
        return rng.choices(population, weights=weights, k=1)[0]


class TournamentSelection:
    """Selects the fittest of `k` individuals drawn uniformly (with replacement)."""

    def __init__(self, k=TOURNAMENT_SIZE):
        if k < 1:
            raise ConstructionError(f"Tournament size must be at least 1, got {k}.")
        self.k = k

    def select(self, population, rng):
        if not population:
            raise InvariantViolation("Cannot select from an empty population.")
        best_participant = None
        for _ in range(self.k):
            participant = rng.choice(population)
            if best_participant is None or participant.fitness > best_participant.fitness:
                best_participant = participant
        return best_participant


def _check_same_length(parent_a, parent_b):
    if len(parent_a) != len(parent_b):
        raise InvariantViolation(
            f"Cannot cross over genomes of different lengths ({len(parent_a)} and {len(parent_b)}).")


class UniformCrossover:
    """Each gene of the child comes from either parent with probability 0.5."""

    def crossover(self, parent_a, parent_b, rng):
        _check_same_length(parent_a, parent_b)
        return as_genome([a if rng.random() < 0.5 else b for a, b in zip(parent_a, parent_b)])


class AveragingCrossover:
    """The child's gene is the mean of both parents' genes at the same position."""

    def crossover(self, parent_a, parent_b, rng):
        _check_same_length(parent_a, parent_b)
        return as_genome((np.asarray(parent_a, dtype=np.float32) + np.asarray(parent_b, dtype=np.float32)) / 2)


class GaussianMutation:
    """
    Jitters genes in place of a copy of the genome.

    Each gene mutates with probability `chance`; a mutated gene gets
    `sign * coefficient * U` added, where `sign` is +1 or -1 with equal
    probability and `U` is uniform in [0, 1).
    """

    def __init__(self, chance=MUTATION_CHANCE, coefficient=MUTATION_COEFF):
        if not 0.0 <= chance <= 1.0:
            raise ConstructionError(f"Mutation chance must be within [0, 1], got {chance}.")
        if coefficient < 0.0:
            raise ConstructionError(f"Mutation coefficient must be non-negative, got {coefficient}.")
        self.chance = chance
        self.coefficient = coefficient

    def mutate(self, genome, rng):
        genes = np.array(genome, dtype=np.float32)
        for i in range(len(genes)):
            if rng.random() < self.chance:
                sign = 1.0 if rng.random() < 0.5 else -1.0
                genes[i] += sign * self.coefficient * rng.random()
        return as_genome(genes)

    def __repr__(self):
        return f"GaussianMutation(chance={self.chance}, coefficient={self.coefficient})"


class GeneticAlgorithm:
    """
    Produces the genomes of the next generation from a population of
    Individuals, using pluggable selection, crossover and mutation strategies.
    """

    def __init__(self, selection=None, crossover=None, mutation=None):
        """
        Args:
            selection: Object with `select(population, rng) -> Individual`.
                Defaults to RouletteWheelSelection.
            crossover: Object with `crossover(parent_a, parent_b, rng) -> genome`.
                Defaults to UniformCrossover.
            mutation: Object with `mutate(genome, rng) -> genome`.
                Defaults to GaussianMutation with the configured chance and coefficient.
        """
        self.selection = selection if selection is not None else RouletteWheelSelection()
        self.crossover = crossover if crossover is not None else UniformCrossover()
        self.mutation = mutation if mutation is not None else GaussianMutation()

    def evolve(self, population, rng):
        """
        Breeds `len(population) - 1` children. The caller restores the full
        population size by appending the elite individual, unmodified.

        Args:
            population (list of Individual): The evaluated generation.
            rng (random.Random): Source of randomness for every strategy.

        Returns:
            list: Child genomes.
        """
        if not population:
            raise InvariantViolation("Cannot evolve an empty population.")

        children = []
        for _ in range(len(population) - 1):
            parent_a = self.selection.select(population, rng).genome
            parent_b = self.selection.select(population, rng).genome
            child = self.crossover.crossover(parent_a, parent_b, rng)
            children.append(self.mutation.mutate(child, rng))
        return children
