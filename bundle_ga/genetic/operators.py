"""
Genetic operators for bundle search

This module contains the selection, crossover and mutation operators. Each
operator draws from the random source it was built with, so a seeded
random.Random makes a run repeatable.
"""

import random
from typing import List, Optional, Sequence, Tuple

import numpy as np
from .individual import Individual


class TournamentSelection:
    """Binary tournament selection"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random

    def select(self, fitness: Sequence[float]) -> int:
        """
        Run one tournament between two distinct random individuals

        Args:
            fitness: Fitness vector of the current population

        Returns:
            Index of the winner; on a tie the first drawn index wins
        """
        if len(fitness) < 2:
            raise ValueError("Tournament selection needs at least two individuals")

        first = self.rng.randrange(len(fitness))
        second = self.rng.randrange(len(fitness))
        while second == first:
            second = self.rng.randrange(len(fitness))

        return second if fitness[second] > fitness[first] else first

    def select_parents(self, fitness: Sequence[float]) -> List[int]:
        """
        Build the mating pool

        Args:
            fitness: Fitness vector of the current population

        Returns:
            2 * len(fitness) parent indices; pool[2k] and pool[2k+1] mate
        """
        return [self.select(fitness) for _ in range(2 * len(fitness))]


class SinglePointCrossover:
    """Single-point crossover producing one child per pair of parents"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random

    def crossover(self, parent1: Individual, parent2: Individual,
                  crosspoint: Optional[int] = None) -> Tuple[Individual, int]:
        """
        Recombine two parents at a crosspoint

        Args:
            parent1: Supplies genes before the crosspoint
            parent2: Supplies genes from the crosspoint on
            crosspoint: Crosspoint in [1, num_genes - 1]; drawn if None

        Returns:
            Tuple of (child, crosspoint used)
        """
        num_genes = parent1.num_genes
        if parent2.num_genes != num_genes:
            raise ValueError("Parents must have the same number of genes")
        if crosspoint is None:
            crosspoint = self.rng.randint(1, num_genes - 1)
        elif not 1 <= crosspoint <= num_genes - 1:
            raise ValueError(f"Crosspoint must be between 1 and {num_genes - 1}")

        child_chromosome = np.concatenate((parent1.chromosome[:crosspoint],
                                           parent2.chromosome[crosspoint:]))
        return Individual(num_genes, child_chromosome), crosspoint

    def breed(self, individuals: Sequence[Individual], parents: Sequence[int]) -> List[Individual]:
        """
        Produce the offspring of a mating pool

        Args:
            individuals: Current population
            parents: Mating pool of parent indices, consumed in consecutive pairs

        Returns:
            One child per pair, in pair order
        """
        if len(parents) % 2 != 0:
            raise ValueError("Mating pool must hold an even number of parents")

        children = []
        for k in range(0, len(parents), 2):
            child, _ = self.crossover(individuals[parents[k]], individuals[parents[k + 1]])
            children.append(child)
        return children


class BitFlipMutation:
    """Flips a fixed number of randomly chosen genes across the population"""

    def __init__(self, mutation_rate: float, rng: Optional[random.Random] = None):
        self.mutation_rate = mutation_rate
        self.rng = rng or random

    def number_of_mutations(self, population_size: int, num_genes: int) -> int:
        """floor(mutation_rate * population_size * num_genes)"""
        return int(self.mutation_rate * population_size * num_genes)

    def mutate_population(self, individuals: Sequence[Individual]) -> List[Tuple[int, int]]:
        """
        Apply bit-flip mutation in place

        The same (individual, gene) pair may be drawn more than once.

        Args:
            individuals: Offspring to mutate

        Returns:
            (individual index, gene position) of every flip, in draw order
        """
        if not individuals:
            return []

        num_genes = individuals[0].num_genes
        flips = []
        for _ in range(self.number_of_mutations(len(individuals), num_genes)):
            index = self.rng.randrange(len(individuals))
            position = self.rng.randrange(num_genes)
            individuals[index].flip(position)
            flips.append((index, position))
        return flips
