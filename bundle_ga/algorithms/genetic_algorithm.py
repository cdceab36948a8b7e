"""
Main Genetic Algorithm controller
"""

import time
import random
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..config import GAConfig
from ..utils import set_seed
from ..genetic import (
    Population, Individual, TournamentSelection, SinglePointCrossover, BitFlipMutation,
    ElitePreservation, EliteSnapshot, FitnessEvaluator, DecodedBundle, round_half_away
)
from ..reporting.base_reporter import RunObserver


@dataclass(frozen=True)
class GenerationStats:
    """Fitness summary of one evaluated generation"""
    generation: int
    max_fitness: float
    average_fitness: float

    def to_dict(self) -> dict:
        return {
            'generation': self.generation,
            'max_fitness': self.max_fitness,
            'average_fitness': self.average_fitness
        }


@dataclass
class EvolutionResult:
    """Final state of a run"""
    population: List[Individual]
    fitness: List[float]
    history: List[GenerationStats]
    diversity_history: List[float]
    bundles: List[DecodedBundle]
    best_bundle: DecodedBundle
    best_ever: Optional[DecodedBundle]
    generations_run: int
    termination_reason: str
    elite_insertions: int = 0
    evaluated_chromosomes: int = 0
    fitness_distribution: Dict[str, float] = field(default_factory=dict)
    total_time: float = 0.0
    config: Dict[str, Any] = field(default_factory=dict)

    @property
    def max_fitness_history(self) -> List[float]:
        return [stats.max_fitness for stats in self.history]

    @property
    def average_fitness_history(self) -> List[float]:
        return [stats.average_fitness for stats in self.history]

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form of the result"""
        return {
            'best_bundle': self.best_bundle.to_dict(),
            'best_ever': self.best_ever.to_dict() if self.best_ever else None,
            'generations_run': self.generations_run,
            'termination_reason': self.termination_reason,
            'elite_insertions': self.elite_insertions,
            'evaluated_chromosomes': self.evaluated_chromosomes,
            'fitness_distribution': dict(self.fitness_distribution),
            'total_time': self.total_time,
            'history': [stats.to_dict() for stats in self.history],
            'diversity_history': list(self.diversity_history),
            'final_population': [
                {'chromosome': ind.chromosome.tolist(), 'fitness': fit}
                for ind, fit in zip(self.population, self.fitness)
            ],
            'bundles': [bundle.to_dict() for bundle in self.bundles],
            'config': dict(self.config)
        }


class GeneticAlgorithm:
    """
    Main controller for the Genetic Algorithm evolution process
    """

    def __init__(self,
                 config: GAConfig,
                 fitness_evaluator: FitnessEvaluator,
                 selection_operator: TournamentSelection,
                 crossover_operator: SinglePointCrossover,
                 mutation_operator: BitFlipMutation,
                 elitism_operator: Optional[ElitePreservation] = None,
                 observers: Optional[Sequence[RunObserver]] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize genetic algorithm

        Args:
            config: GA configuration parameters
            fitness_evaluator: Fitness evaluation strategy
            selection_operator: Selection strategy
            crossover_operator: Crossover strategy
            mutation_operator: Mutation strategy
            elitism_operator: Elite preservation, used when config.elitism is set
            observers: Reporters notified after each stage
            rng: Random source for the initial population
        """
        # Validation
        config.validate()
        if len(fitness_evaluator.catalog) != config.universe_size:
            raise ValueError(f"Catalog holds {len(fitness_evaluator.catalog)} products, "
                             f"universe_size is {config.universe_size}")

        self.config = config
        self.fitness_evaluator = fitness_evaluator
        self.selection_operator = selection_operator
        self.crossover_operator = crossover_operator
        self.mutation_operator = mutation_operator
        self.elitism_operator = elitism_operator or ElitePreservation()
        self.observers: List[RunObserver] = list(observers or [])
        self.rng = rng

        # Evolution state
        self.population: Optional[Population] = None
        self.generation = 0
        self.history: List[GenerationStats] = []
        self.diversity_history: List[float] = []
        self.elite_insertions = 0
        self.termination_reason: Optional[str] = None

        # Timing
        self.start_time: Optional[float] = None

        # Logging
        self.logger = logging.getLogger(__name__)

    def run(self, initial_population: Optional[Population] = None) -> EvolutionResult:
        """
        Run the complete genetic algorithm evolution

        Args:
            initial_population: Starting generation. If None, a random one is built

        Returns:
            EvolutionResult with the final population and statistics history
        """
        self.logger.info("Starting Genetic Algorithm evolution")
        self.logger.info(f"Configuration: Population={self.config.population_size}, "
                         f"Generations={self.config.max_generations}, "
                         f"Products={self.config.universe_size}, "
                         f"Elitism={self.config.elitism}")

        if self.config.random_seed is not None:
            set_seed(self.config.random_seed)

        self._initialize_population(initial_population)
        self.start_time = time.time()

        try:
            while True:
                fitness = self._evaluate_population()

                snapshot = None
                if self.config.elitism:
                    snapshot = self.elitism_operator.capture(self.population.individuals, fitness)

                stats = self._update_statistics(fitness)
                self._notify_observers("on_generation", self.generation,
                                       self.population.individuals, fitness, stats)
                self._log_generation_progress(stats)

                if self._should_terminate():
                    break

                self._evolve_population(fitness, snapshot)
                self.generation += 1

            result = self._compile_results(fitness)
            self._notify_observers("on_run_end", result)
            return result

        except Exception as e:
            self.logger.error(f"Error during evolution: {e}")
            raise
        finally:
            total_time = time.time() - self.start_time if self.start_time else 0
            self.logger.info(f"Evolution completed in {total_time:.2f} seconds")

    def _initialize_population(self, initial_population: Optional[Population]) -> None:
        """Initialize the population, randomly unless one is given"""
        self.logger.info("Initializing population...")
        if initial_population is None:
            initial_population = Population(self.config.population_size,
                                            self.config.universe_size, rng=self.rng)
        elif (len(initial_population) != self.config.population_size
              or initial_population.num_genes != self.config.universe_size):
            raise ValueError(f"Initial population must hold {self.config.population_size} "
                             f"individuals of {self.config.universe_size} genes")

        self.population = initial_population
        self.generation = 0
        self.history = []
        self.diversity_history = []
        self.elite_insertions = 0
        self.termination_reason = None
        self.fitness_evaluator.clear_cache()

    def _notify_observers(self, hook: str, *args) -> None:
        """Call a hook on every observer; a failing observer is logged and skipped"""
        for observer in self.observers:
            try:
                getattr(observer, hook)(*args)
            except Exception:
                self.logger.exception(f"Observer {type(observer).__name__}.{hook} failed")

    def _evaluate_population(self) -> List[float]:
        """Evaluate fitness for all individuals in the population"""
        if not self.population:
            raise RuntimeError("Population not initialized")

        fitness = self.fitness_evaluator.evaluate_population(self.population.individuals)
        self.population.update_best_individual()

        self.logger.debug(f"Population evaluation completed "
                          f"(cache size: {self.fitness_evaluator.get_cache_size()})")
        return fitness

    def _update_statistics(self, fitness: List[float]) -> GenerationStats:
        """Append the statistics of the current generation"""
        stats = GenerationStats(
            generation=self.generation,
            max_fitness=max(fitness),
            average_fitness=round_half_away(sum(sorted(fitness)) / len(fitness), 2)
        )
        self.history.append(stats)
        self.diversity_history.append(self.population.get_statistics()['diversity'])
        return stats

    def _should_terminate(self) -> bool:
        """Check the generation counter against the configured limit"""
        if self.generation >= self.config.max_generations:
            self.termination_reason = f"Maximum generations reached ({self.config.max_generations})"
            self.logger.info(self.termination_reason)
            return True
        return False

    def _evolve_population(self, fitness: List[float], snapshot: Optional[EliteSnapshot]) -> None:
        """Create the next generation through selection, crossover, mutation and elitism"""
        if not self.population:
            raise RuntimeError("Population not initialized")

        parents = self.selection_operator.select_parents(fitness)
        offspring = self.crossover_operator.breed(self.population.individuals, parents)
        mutations = self.mutation_operator.mutate_population(offspring)

        elite_inserted = False
        if snapshot is not None:
            elite_inserted = self.elitism_operator.apply(offspring, snapshot)
            if elite_inserted:
                self.elite_insertions += 1
                self.logger.debug(f"Generation {self.generation}: elite reinserted "
                                  f"at index {snapshot.worst_index}")

        self._notify_observers("on_offspring", self.generation, parents, offspring,
                               mutations, elite_inserted)

        self.population.replace_individuals(offspring)

    def _log_generation_progress(self, stats: GenerationStats) -> None:
        """Log progress for current generation"""
        if self.generation % 10 == 0 or self.generation < 10:
            self.logger.info(
                f"Generation {self.generation:3d}: "
                f"Max={stats.max_fitness:.2f}, "
                f"Avg={stats.average_fitness:.2f}, "
                f"Diversity={self.diversity_history[-1]:.3f}"
            )

    def _compile_results(self, fitness: List[float]) -> EvolutionResult:
        """Compile final evolution results"""
        if not self.population:
            raise RuntimeError("Population not initialized")

        bundles = [self.fitness_evaluator.decode(ind) for ind in self.population.individuals]
        best_index = int(np.argmax(fitness))
        best_ever = (self.fitness_evaluator.decode(self.population.best_individual)
                     if self.population.best_individual else None)
        total_time = time.time() - self.start_time if self.start_time else 0

        result = EvolutionResult(
            population=list(self.population.individuals),
            fitness=list(fitness),
            history=list(self.history),
            diversity_history=list(self.diversity_history),
            bundles=bundles,
            best_bundle=bundles[best_index],
            best_ever=best_ever,
            generations_run=self.generation,
            termination_reason=self.termination_reason,
            elite_insertions=self.elite_insertions,
            evaluated_chromosomes=self.fitness_evaluator.get_cache_size(),
            fitness_distribution=self.fitness_evaluator.get_fitness_distribution(),
            total_time=total_time,
            config=self.config.to_dict()
        )

        self.logger.info(f"Evolution results: {self.generation} generations, "
                         f"Best fitness: {result.best_bundle.fitness:.2f}, "
                         f"Best price: {result.best_bundle.total_price}, "
                         f"Products: {len(result.best_bundle.product_ids)}")

        return result
