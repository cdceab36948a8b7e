"""
Fitness evaluator for genetic algorithm individuals

A bundle scores well when its total price approaches the target price from
below without exceeding it by much, and when its products are spread over
many families.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

import numpy as np

from ..config import GAConfig
from ..data import Catalog
from .individual import Individual


def round_half_away(value: float, decimals: int = 2) -> float:
    """Round to a number of decimals, halves away from zero"""
    scale = 10 ** decimals
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


@dataclass(frozen=True)
class DecodedBundle:
    """Products of one chromosome, with their total price and family counts"""
    product_ids: Tuple[int, ...]
    total_price: int
    families: Dict[int, int] = field(default_factory=dict)
    fitness: float = 0.0

    def to_dict(self) -> dict:
        return {
            'product_ids': list(self.product_ids),
            'total_price': self.total_price,
            'families': {str(family): count for family, count in self.families.items()},
            'fitness': self.fitness
        }


class FitnessEvaluator:
    """
    Evaluates fitness of individuals against the product catalog
    """

    def __init__(self, config: GAConfig, catalog: Catalog):
        """
        Initialize fitness evaluator

        Args:
            config: GA configuration (target price, factor, penalty)
            catalog: Product universe; its code index gives gene meaning
        """
        self.config = config
        self.catalog = catalog

        # Fitness caching
        self.fitness_cache: Dict[str, float] = {}

        self.logger = logging.getLogger(__name__)

    @property
    def num_genes(self) -> int:
        return len(self.catalog.code_index)

    def quantify(self, individual: Individual) -> Tuple[int, Dict[int, int]]:
        """
        Sum prices and count families of the products in a bundle

        Args:
            individual: Individual to quantify

        Returns:
            Tuple of (total price, family -> product count ordered by family)
        """
        if len(individual.chromosome) != self.num_genes:
            raise ValueError(f"Chromosome has {len(individual.chromosome)} genes, "
                             f"catalog has {self.num_genes} products")

        price = 0
        families: Dict[int, int] = {}
        for position in individual.get_selected_positions():
            record = self.catalog.record_at(position)
            price += record.price
            families[record.family] = families.get(record.family, 0) + 1

        return price, dict(sorted(families.items()))

    def calculate_fitness(self, price: int, families: Dict[int, int]) -> float:
        """
        Score a bundle from its total price and family distribution

        Args:
            price: Total price of the bundle, in cents
            families: Number of products per family

        Returns:
            Fitness value (higher is better)
        """
        target = self.config.target_price
        factor = self.config.factor
        penalty = self.config.penalty

        # Price term. An empty bundle gets 1.0 here and another 1.0 from the
        # diversity term below, so it scores 2.0 in total
        if price == 0:
            fitness = 1.0
        elif price < target:
            fitness = 6 * penalty * factor * target / (target - price + target) - 2 * factor
        else:
            fitness = 6 * factor * target / price

        # Diversity term
        nr_families = len(families)
        nr_products = sum(families.values())
        if nr_products != 0:
            fitness += factor * nr_families / nr_products
            fitness = round_half_away(fitness, 2)
        else:
            fitness += 1.0

        return fitness

    def evaluate_individual(self, individual: Individual) -> float:
        """
        Evaluate fitness of an individual

        Args:
            individual: Individual to evaluate

        Returns:
            Fitness value (higher is better)
        """
        chromosome_key = individual.get_chromosome_string()
        if chromosome_key in self.fitness_cache:
            individual.fitness = self.fitness_cache[chromosome_key]
            return individual.fitness

        price, families = self.quantify(individual)
        fitness = self.calculate_fitness(price, families)

        individual.fitness = fitness
        self.fitness_cache[chromosome_key] = fitness

        self.logger.debug(f"Evaluated {chromosome_key}: price={price}, "
                          f"families={families}, fitness={fitness:.2f}")

        return fitness

    def evaluate_population(self, individuals: Iterable[Individual]) -> List[float]:
        """
        Evaluate every individual, preserving population order

        Args:
            individuals: Population or list of individuals

        Returns:
            Fitness vector index-aligned with the individuals
        """
        return [self.evaluate_individual(individual) for individual in individuals]

    def decode(self, individual: Individual) -> DecodedBundle:
        """
        Decode an individual into the products of its bundle

        Args:
            individual: Individual to decode

        Returns:
            DecodedBundle with product identifiers in code index order
        """
        price, families = self.quantify(individual)
        fitness = individual.fitness
        if fitness is None:
            fitness = self.calculate_fitness(price, families)
        product_ids = tuple(self.catalog.code_index[i] for i in individual.get_selected_positions())
        return DecodedBundle(product_ids=product_ids, total_price=price,
                             families=families, fitness=fitness)

    def get_cache_size(self) -> int:
        """Get the current size of the fitness cache"""
        return len(self.fitness_cache)

    def get_fitness_distribution(self) -> Dict[str, float]:
        """Get fitness distribution statistics over every evaluated chromosome"""
        if not self.fitness_cache:
            return {
                'min_fitness': 0.0,
                'max_fitness': 0.0,
                'mean_fitness': 0.0,
                'std_fitness': 0.0
            }

        fitness_values = list(self.fitness_cache.values())
        return {
            'min_fitness': float(np.min(fitness_values)),
            'max_fitness': float(np.max(fitness_values)),
            'mean_fitness': float(np.mean(fitness_values)),
            'std_fitness': float(np.std(fitness_values))
        }

    def clear_cache(self) -> None:
        """Clear the fitness cache"""
        self.fitness_cache.clear()
        self.logger.debug("Fitness cache cleared")
