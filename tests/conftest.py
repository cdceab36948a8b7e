"""Shared fixtures for the bundle search tests."""

import random

import matplotlib
matplotlib.use("Agg")

import pytest

from bundle_ga.algorithms import GeneticAlgorithm
from bundle_ga.config import GAConfig
from bundle_ga.data import Catalog, CatalogLoader, ProductRecord
from bundle_ga.genetic import (
    BitFlipMutation,
    ElitePreservation,
    FitnessEvaluator,
    SinglePointCrossover,
    TournamentSelection,
)


class ScriptedRandom:
    """Random source replaying fixed draws, to pin operator behaviour."""

    def __init__(self, draws):
        self.draws = list(draws)

    def _next(self):
        return self.draws.pop(0)

    def random(self):
        return self._next()

    def randrange(self, stop):
        value = self._next()
        assert 0 <= value < stop
        return value

    def randint(self, a, b):
        value = self._next()
        assert a <= value <= b
        return value


@pytest.fixture
def four_product_catalog():
    """Codes 10..40, families 0/1 alternating, every product at 30.00."""
    return Catalog({
        10: ProductRecord(family=0, price=3000),
        20: ProductRecord(family=1, price=3000),
        30: ProductRecord(family=0, price=3000),
        40: ProductRecord(family=1, price=3000),
    })


@pytest.fixture
def four_product_config():
    return GAConfig(universe_size=4, population_size=6, max_generations=5,
                    target_price=9000, factor=500.0, penalty=0.25,
                    mutation_rate=0.05, random_seed=7)


@pytest.fixture
def evaluator(four_product_config, four_product_catalog):
    return FitnessEvaluator(four_product_config, four_product_catalog)


@pytest.fixture
def rng():
    return random.Random(12345)


@pytest.fixture
def random_catalog():
    return CatalogLoader().generate(12, max_price=6000, num_families=5, rng=random.Random(3))


@pytest.fixture
def search_config():
    return GAConfig(universe_size=12, population_size=10, max_generations=8,
                    mutation_rate=0.05, target_price=20000, random_seed=11)


def build_ga(config, catalog, seed, observers=None, elitism_operator=None):
    """Genetic algorithm whose operators share one seeded random source."""
    shared = random.Random(seed)
    return GeneticAlgorithm(
        config=config,
        fitness_evaluator=FitnessEvaluator(config, catalog),
        selection_operator=TournamentSelection(rng=shared),
        crossover_operator=SinglePointCrossover(rng=shared),
        mutation_operator=BitFlipMutation(config.mutation_rate, rng=shared),
        elitism_operator=elitism_operator or ElitePreservation(),
        observers=observers,
        rng=shared,
    )


@pytest.fixture
def ga_factory():
    return build_ga


@pytest.fixture
def scripted():
    return ScriptedRandom
