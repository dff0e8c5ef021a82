import random
from collections import Counter

import numpy as np
import pytest

from creature_evolution_library.errors import ConstructionError, InvariantViolation
from creature_evolution_library.genetics import (
    AveragingCrossover, GaussianMutation, GeneticAlgorithm, Individual,
    RouletteWheelSelection, TournamentSelection, UniformCrossover, as_genome)


@pytest.mark.parametrize("chance, coefficient", [(0.0, 0.0), (0.0, 2.0), (0.5, 0.0), (1.0, 0.0)])
def test_mutation_without_chance_or_coefficient_is_a_no_op(chance, coefficient):
    genome = as_genome([1.0, 2.0, 3.0, 4.0, 5.0])
    for seed in range(5):
        mutated = GaussianMutation(chance, coefficient).mutate(genome, random.Random(seed))
        assert np.array_equal(mutated, genome)


def test_full_chance_mutation_changes_every_gene_within_coefficient():
    genome = as_genome([1.0, 2.0, 3.0, 4.0, 5.0])
    mutated = GaussianMutation(1.0, 2.0).mutate(genome, random.Random(0))
    deltas = np.abs(mutated - genome)
    assert np.all(deltas > 0.0)
    assert np.all(deltas <= 2.0)


def test_mutation_returns_new_read_only_genome():
    genome = as_genome([1.0, 2.0, 3.0])
    mutated = GaussianMutation(1.0, 1.0).mutate(genome, random.Random(1))
    assert np.array_equal(genome, [1.0, 2.0, 3.0])
    assert not mutated.flags.writeable


@pytest.mark.parametrize("chance, coefficient", [(-0.1, 1.0), (1.1, 1.0), (0.5, -1.0)])
def test_mutation_parameters_are_validated(chance, coefficient):
    with pytest.raises(ConstructionError):
        GaussianMutation(chance, coefficient)


def test_uniform_crossover_takes_each_parent_about_half_the_time():
    parent_a = as_genome(range(1, 101))
    parent_b = as_genome([-n for n in range(1, 101)])
    from_a = 0
    total = 0
    for seed in range(200):
        child = UniformCrossover().crossover(parent_a, parent_b, random.Random(seed))
        assert np.all((child == parent_a) | (child == parent_b))
        from_a += int(np.sum(child == parent_a))
        total += len(child)
    assert 0.45 < from_a / total < 0.55


def test_uniform_crossover_rejects_unequal_parents():
    with pytest.raises(InvariantViolation):
        UniformCrossover().crossover(as_genome([1.0, 2.0]), as_genome([1.0]), random.Random(0))


def test_averaging_crossover_takes_the_mean():
    child = AveragingCrossover().crossover(as_genome([1.0, 2.0]), as_genome([3.0, -2.0]), random.Random(0))
    assert np.array_equal(child, [2.0, 0.0])


def test_roulette_wheel_follows_fitness_ranking():
    rng = random.Random(10)
    population = [Individual(as_genome([fitness]), fitness) for fitness in (3.0, 4.0, 1.0, 2.0)]
    histogram = Counter(RouletteWheelSelection().select(population, rng).fitness for _ in range(1000))
    assert histogram[4.0] > histogram[3.0] > histogram[2.0] > histogram[1.0] > 0


def test_roulette_wheel_with_zero_fitness_picks_uniformly():
    rng = random.Random(3)
    population = [Individual(as_genome([i]), 0.0) for i in range(4)]
    picked = Counter(int(RouletteWheelSelection().select(population, rng).genome[0]) for _ in range(400))
    assert set(picked) == {0, 1, 2, 3}


def test_selection_from_empty_population_fails():
    with pytest.raises(InvariantViolation):
        RouletteWheelSelection().select([], random.Random(0))
    with pytest.raises(InvariantViolation):
        TournamentSelection().select([], random.Random(0))


def test_roulette_wheel_rejects_negative_fitness():
    population = [Individual(as_genome([0.0]), -1.0), Individual(as_genome([1.0]), 2.0)]
    with pytest.raises(InvariantViolation):
        RouletteWheelSelection().select(population, random.Random(0))


def test_tournament_selection_prefers_fitter_individuals():
    rng = random.Random(5)
    population = [Individual(as_genome([fitness]), fitness) for fitness in (1.0, 2.0, 3.0)]
    histogram = Counter(TournamentSelection(k=3).select(population, rng).fitness for _ in range(600))
    assert histogram[3.0] > histogram[2.0] > histogram[1.0]


def test_evolve_breeds_one_child_fewer_than_the_population():
    rng = random.Random(0)
    population = [Individual(as_genome([rng.uniform(-1, 1) for _ in range(6)]), float(i)) for i in range(5)]
    children = GeneticAlgorithm().evolve(population, rng)
    assert len(children) == 4
    assert all(len(child) == 6 for child in children)


def test_evolve_without_mutation_only_recombines_parent_genes():
    population = [Individual(as_genome([1.0, 1.0, 1.0]), 1.0),
                  Individual(as_genome([2.0, 2.0, 2.0]), 1.0),
                  Individual(as_genome([3.0, 3.0, 3.0]), 0.0)]
    algorithm = GeneticAlgorithm(RouletteWheelSelection(), UniformCrossover(), GaussianMutation(0.0, 0.0))
    for child in algorithm.evolve(population, random.Random(4)):
        assert set(child.tolist()) <= {1.0, 2.0}


def test_evolve_on_empty_population_fails():
    with pytest.raises(InvariantViolation):
        GeneticAlgorithm().evolve([], random.Random(0))
