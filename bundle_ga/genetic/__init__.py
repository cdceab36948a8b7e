"""Genetic algorithm components module"""

from .individual import Individual
from .population import Population
from .operators import TournamentSelection, SinglePointCrossover, BitFlipMutation
from .elitism import ElitePreservation, EliteSnapshot
from .fitness_evaluator import FitnessEvaluator, DecodedBundle, round_half_away

__all__ = [
    'Individual',
    'Population',
    'TournamentSelection',
    'SinglePointCrossover',
    'BitFlipMutation',
    'ElitePreservation',
    'EliteSnapshot',
    'FitnessEvaluator',
    'DecodedBundle',
    'round_half_away'
]
