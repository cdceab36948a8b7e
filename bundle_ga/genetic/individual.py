"""
Individual representation for genetic algorithm

Gene i of a chromosome is 1 when the product at position i of the catalog
code index is part of the bundle.
"""

import random
from typing import List, Optional, Sequence

import numpy as np


class Individual:
    """Represents a binary chromosome over the catalog code index"""

    def __init__(self, num_genes: int, chromosome: Optional[Sequence[int]] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize individual with binary chromosome

        Args:
            num_genes: Number of genes (universe size)
            chromosome: Pre-defined chromosome. If None, generates random one
            rng: Random source used for the random chromosome

        Raises:
            ValueError: If the chromosome length or gene values are invalid
        """
        self.num_genes = num_genes
        if chromosome is None:
            genes = self._generate_random_chromosome(rng or random)
        else:
            genes = np.array(chromosome)
        self.chromosome = self._validate(genes)
        self.fitness: Optional[float] = None

    def _generate_random_chromosome(self, rng) -> np.ndarray:
        """Generate a chromosome where every gene is 0 or 1 with equal probability"""
        return np.array([0 if rng.random() < 0.5 else 1 for _ in range(self.num_genes)], dtype=int)

    def _validate(self, genes: np.ndarray) -> np.ndarray:
        """Check shape and gene values before casting to int"""
        if genes.ndim != 1 or len(genes) != self.num_genes:
            raise ValueError(f"Chromosome must have exactly {self.num_genes} genes, "
                             f"got shape {genes.shape}")
        # Checked before the int cast, which would truncate 0.6 to 0
        if not np.isin(genes, (0, 1)).all():
            raise ValueError("Chromosome genes must be 0 or 1")
        return genes.astype(int)

    @property
    def num_selected_products(self) -> int:
        """Get the number of products in the bundle (1s in chromosome)"""
        return int(np.sum(self.chromosome))

    def get_selected_positions(self) -> List[int]:
        """
        Get gene positions of the products included in the bundle

        Returns:
            List of positions where chromosome value is 1
        """
        return [int(i) for i in np.flatnonzero(self.chromosome == 1)]

    def get_chromosome_string(self) -> str:
        """Chromosome as a string of 0s and 1s, used as cache key"""
        return ''.join(str(gene) for gene in self.chromosome)

    def flip(self, position: int) -> None:
        """Flip the gene at a position, invalidating the cached fitness"""
        self.chromosome[position] = 1 - self.chromosome[position]
        self.fitness = None

    def same_genes(self, other: 'Individual') -> bool:
        """Value equality of chromosomes"""
        return np.array_equal(self.chromosome, other.chromosome)

    def copy(self) -> 'Individual':
        """
        Create a deep copy of the individual

        Returns:
            New Individual instance with copied chromosome
        """
        new_individual = Individual(self.num_genes, self.chromosome.copy())
        new_individual.fitness = self.fitness
        return new_individual

    def __str__(self) -> str:
        fitness_str = f"{self.fitness:.2f}" if self.fitness is not None else "None"
        return f"Individual(genes={self.get_chromosome_string()}, fitness={fitness_str})"
