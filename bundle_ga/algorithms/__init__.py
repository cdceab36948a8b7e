"""Evolution controllers"""

from .genetic_algorithm import GeneticAlgorithm, GenerationStats, EvolutionResult

__all__ = ['GeneticAlgorithm', 'GenerationStats', 'EvolutionResult']
