"""Tests for tournament selection, single-point crossover and bit-flip mutation."""

import random
from collections import Counter

import pytest

from bundle_ga.genetic import (
    BitFlipMutation,
    Individual,
    Population,
    SinglePointCrossover,
    TournamentSelection,
)


class TestTournamentSelection:

    def test_weaker_individual_never_wins(self, rng):
        selection = TournamentSelection(rng=rng)

        winners = [selection.select([5.0, 10.0]) for _ in range(500)]

        assert set(winners) == {1}

    def test_first_drawn_wins_tie(self, scripted):
        selection = TournamentSelection(rng=scripted([2, 0]))

        assert selection.select([3.0, 3.0, 3.0]) == 2

    def test_second_draw_repeats_until_distinct(self, scripted):
        draws = scripted([1, 1, 1, 0])
        selection = TournamentSelection(rng=draws)

        assert selection.select([1.0, 5.0, 0.0]) == 1
        assert draws.draws == []

    def test_strictly_better_second_draw_wins(self, scripted):
        selection = TournamentSelection(rng=scripted([0, 2]))

        assert selection.select([1.0, 5.0, 1.5]) == 2

    def test_mating_pool_has_two_parents_per_individual(self, rng):
        fitness = [1.0, 4.0, 2.0, 8.0, 3.0]

        pool = TournamentSelection(rng=rng).select_parents(fitness)

        assert len(pool) == 10
        assert all(0 <= index < 5 for index in pool)

    def test_single_individual_is_rejected(self, rng):
        with pytest.raises(ValueError):
            TournamentSelection(rng=rng).select([1.0])


class TestSinglePointCrossover:

    def test_child_takes_head_and_tail_from_parents(self):
        for seed in range(30):
            local = random.Random(seed)
            parent1 = Individual(10, rng=local)
            parent2 = Individual(10, rng=local)

            child, crosspoint = SinglePointCrossover(rng=local).crossover(parent1, parent2)

            assert 1 <= crosspoint <= 9
            assert child.chromosome[:crosspoint].tolist() == parent1.chromosome[:crosspoint].tolist()
            assert child.chromosome[crosspoint:].tolist() == parent2.chromosome[crosspoint:].tolist()
            assert child.fitness is None

    def test_crosspoint_range_is_enforced(self):
        parent = Individual(4, [1, 0, 1, 0])

        with pytest.raises(ValueError):
            SinglePointCrossover().crossover(parent, parent, crosspoint=0)
        with pytest.raises(ValueError):
            SinglePointCrossover().crossover(parent, parent, crosspoint=4)

    def test_breed_mates_consecutive_pairs(self, scripted):
        population = Population.from_chromosomes([[0, 0, 0, 0], [1, 1, 1, 1]])

        children = SinglePointCrossover(rng=scripted([2, 3])).breed(
            population.individuals, [0, 1, 1, 0])

        assert [child.chromosome.tolist() for child in children] == [[0, 0, 1, 1], [1, 1, 1, 0]]

    def test_breed_returns_one_child_per_pair(self, rng):
        population = Population(6, 8, rng=rng)
        pool = TournamentSelection(rng=rng).select_parents([1.0] * 6)

        children = SinglePointCrossover(rng=rng).breed(population.individuals, pool)

        assert len(children) == 6
        assert all(len(child.chromosome) == 8 for child in children)

    def test_odd_mating_pool_is_rejected(self, rng):
        population = Population(2, 4, rng=rng)

        with pytest.raises(ValueError):
            SinglePointCrossover(rng=rng).breed(population.individuals, [0, 1, 0])


class TestBitFlipMutation:

    def test_number_of_mutations_is_floored(self):
        assert BitFlipMutation(0.05).number_of_mutations(40, 16) == 32
        assert BitFlipMutation(0.03).number_of_mutations(10, 7) == 2

    def test_every_draw_flips_one_gene(self, rng):
        population = Population(40, 16, rng=rng)
        before = [ind.chromosome.copy() for ind in population]

        flips = BitFlipMutation(0.05, rng=rng).mutate_population(population.individuals)

        assert len(flips) == 32
        counts = Counter(flips)
        for index, individual in enumerate(population):
            for position in range(16):
                changed = individual.chromosome[position] != before[index][position]
                assert changed == (counts[(index, position)] % 2 == 1)

    def test_zero_rate_is_a_no_op(self, rng):
        population = Population(10, 8, rng=rng)
        before = [ind.chromosome.copy() for ind in population]

        flips = BitFlipMutation(0.0, rng=rng).mutate_population(population.individuals)

        assert flips == []
        assert all((ind.chromosome == old).all() for ind, old in zip(population, before))

    def test_mutated_individual_loses_cached_fitness(self, scripted):
        individual = Individual(4, [0, 0, 0, 0])
        individual.fitness = 2.0

        flips = BitFlipMutation(0.25, rng=scripted([0, 3])).mutate_population([individual])

        assert flips == [(0, 3)]
        assert individual.chromosome.tolist() == [0, 0, 0, 1]
        assert individual.fitness is None
