"""
Population management for genetic algorithm

This module contains the population management for the genetic algorithm.
The population size and chromosome length are fixed for a whole run.
"""

import random
from typing import Any, Dict, Iterator, List, Optional, Sequence

import numpy as np
from .individual import Individual


class Population:
    """Manages a collection of individuals in the genetic algorithm"""

    def __init__(self, size: int, num_genes: int, rng: Optional[random.Random] = None,
                 individuals: Optional[List[Individual]] = None):
        """
        Initialize population

        Args:
            size: Number of individuals in population
            num_genes: Number of genes for each individual
            rng: Random source for the initial chromosomes
            individuals: Pre-built individuals. If None, generates random ones

        Raises:
            ValueError: If the individuals break the size or length invariants
        """
        self.size = size
        self.num_genes = num_genes
        self.generation = 0
        self.best_individual: Optional[Individual] = None

        if individuals is None:
            rng = rng or random
            individuals = [Individual(num_genes, rng=rng) for _ in range(size)]
        self._check_individuals(individuals)
        self.individuals: List[Individual] = list(individuals)

    @classmethod
    def from_chromosomes(cls, chromosomes: Sequence[Sequence[int]]) -> 'Population':
        """
        Build a population from explicit chromosomes

        Args:
            chromosomes: One gene sequence per individual, all of equal length

        Returns:
            Population holding a copy of every chromosome
        """
        if not chromosomes:
            raise ValueError("Population must contain at least one chromosome")
        num_genes = len(chromosomes[0])
        individuals = [Individual(num_genes, chromosome) for chromosome in chromosomes]
        return cls(len(individuals), num_genes, individuals=individuals)

    def _check_individuals(self, individuals: Sequence[Individual]) -> None:
        if len(individuals) != self.size:
            raise ValueError(f"Population must hold {self.size} individuals, got {len(individuals)}")
        for index, individual in enumerate(individuals):
            if individual.num_genes != self.num_genes or len(individual.chromosome) != self.num_genes:
                raise ValueError(f"Individual {index} has {len(individual.chromosome)} genes, "
                                 f"expected {self.num_genes}")

    def fitness_vector(self) -> List[float]:
        """Fitness of every individual, index-aligned with the population"""
        if any(ind.fitness is None for ind in self.individuals):
            raise RuntimeError("Population has unevaluated individuals")
        return [ind.fitness for ind in self.individuals]

    def update_best_individual(self) -> None:
        """Update the best individual seen so far (highest fitness)"""
        evaluated_individuals = [ind for ind in self.individuals if ind.fitness is not None]
        if not evaluated_individuals:
            return

        # max() keeps the first of equal candidates
        current_best = max(evaluated_individuals, key=lambda ind: ind.fitness)

        if self.best_individual is None or current_best.fitness > self.best_individual.fitness:
            self.best_individual = current_best.copy()

    def get_statistics(self) -> Dict[str, Any]:
        """
        Calculate population statistics

        Returns:
            Dictionary with population statistics
        """
        evaluated_individuals = [ind for ind in self.individuals if ind.fitness is not None]

        if not evaluated_individuals:
            return {
                'best_fitness': None,
                'worst_fitness': None,
                'avg_fitness': None,
                'std_fitness': None,
                'diversity': self._calculate_diversity(),
                'evaluated_count': 0
            }

        fitness_values = [ind.fitness for ind in evaluated_individuals]

        return {
            'best_fitness': max(fitness_values),
            'worst_fitness': min(fitness_values),
            'avg_fitness': float(np.mean(fitness_values)),
            'std_fitness': float(np.std(fitness_values)),
            'diversity': self._calculate_diversity(),
            'evaluated_count': len(evaluated_individuals)
        }

    def _calculate_diversity(self) -> float:
        """Calculate population diversity as average normalized Hamming distance"""
        if len(self.individuals) < 2:
            return 0.0

        chromosomes = np.stack([ind.chromosome for ind in self.individuals])
        size = len(chromosomes)
        # A gene with k ones differs in k * (size - k) of the size * (size - 1) / 2 pairs
        ones = chromosomes.sum(axis=0)
        differing_pairs = float(np.sum(ones * (size - ones)))
        return differing_pairs / (size * (size - 1) / 2) / self.num_genes

    def replace_individuals(self, new_individuals: List[Individual]) -> None:
        """
        Replace current population with the next generation

        Args:
            new_individuals: List of new individuals for next generation
        """
        self._check_individuals(new_individuals)
        self.individuals = list(new_individuals)
        self.generation += 1

    def __len__(self) -> int:
        """Return population size"""
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        """Make population iterable"""
        return iter(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]
