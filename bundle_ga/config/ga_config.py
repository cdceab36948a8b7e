"""
Genetic Algorithm Configuration

This module contains the configuration parameters for the product bundle
Genetic Algorithm.
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

@dataclass
class GAConfig:
    """Configuration parameters for the Genetic Algorithm"""

    # Population parameters
    universe_size: int = 16
    population_size: int = 40
    max_generations: int = 100

    # Genetic operator parameters
    mutation_rate: float = 0.05
    elitism: bool = True

    # Fitness function parameters
    target_price: int = 9000  # in cents
    factor: float = 500.0  # family diversity weight
    penalty: float = 0.25  # weight of the distance to the target price, when below

    # Random catalog generation
    max_price: int = 10000
    num_families: int = 10

    # Reproducibility (None means a non-reproducible run)
    random_seed: Optional[int] = None

    def validate(self) -> None:
        """Validate configuration parameters"""
        # Types, checked before the range comparisons below
        for name in ('universe_size', 'population_size', 'max_generations',
                     'target_price', 'max_price', 'num_families'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in ('mutation_rate', 'factor', 'penalty'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
        if not isinstance(self.elitism, bool):
            raise ValueError(f"elitism must be true or false, got {self.elitism!r}")

        # Population parameters
        if self.universe_size < 2:
            raise ValueError("Universe size must be at least 2")
        if self.population_size < 2:
            raise ValueError("Population size must be at least 2")
        if self.max_generations < 0:
            raise ValueError("Max generations must be non-negative")

        # Genetic operator parameters
        if not 0 <= self.mutation_rate <= 1:
            raise ValueError("Mutation rate must be between 0 and 1")

        # Fitness function parameters
        if self.target_price <= 0:
            raise ValueError("Target price must be positive")
        if self.factor <= 0:
            raise ValueError("Factor must be positive")
        if self.penalty < 0:
            raise ValueError("Penalty must be non-negative")

        # Catalog generation parameters
        if self.max_price <= 0:
            raise ValueError("Max price must be positive")
        if self.num_families <= 0:
            raise ValueError("Number of families must be positive")

        # Reproducibility parameters
        if self.random_seed is not None and not isinstance(self.random_seed, int):
            raise ValueError("Random seed must be an integer")

    def to_dict(self) -> dict:
        """Convert configuration to dictionary"""
        return {
            'universe_size': self.universe_size,
            'population_size': self.population_size,
            'max_generations': self.max_generations,
            'mutation_rate': self.mutation_rate,
            'elitism': self.elitism,
            'target_price': self.target_price,
            'factor': self.factor,
            'penalty': self.penalty,
            'max_price': self.max_price,
            'num_families': self.num_families,
            'random_seed': self.random_seed
        }


def load_config(filepath: Union[str, Path]) -> GAConfig:
    """
    Load a GA configuration from a JSON file

    Args:
        filepath: Path to a JSON object whose keys are GAConfig fields

    Returns:
        Validated GAConfig instance
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {filepath} must contain a JSON object")

    known = {field.name for field in fields(GAConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    config = GAConfig(**data)
    config.validate()
    return config
