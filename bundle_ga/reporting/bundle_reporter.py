#!/usr/bin/env python3
"""
Bundle Reporter Module

Observes a bundle search run and reports its results: per-generation logging,
a text report, JSON results and CSV tables of statistics and bundles.
"""

import logging
import pandas as pd
from pathlib import Path
from typing import Dict, Any, List, Optional, Sequence, Tuple, TYPE_CHECKING

from ..data import Catalog
from .base_reporter import BaseReporter

if TYPE_CHECKING:
    from ..algorithms import EvolutionResult


class BundleReporter(BaseReporter):
    """
    Reporter for bundle search runs
    """

    def __init__(self, results_dir: Path, catalog: Catalog):
        """
        Initialize bundle reporter

        Args:
            results_dir: Directory to save reports
            catalog: Product universe, for family and price context
        """
        super().__init__(results_dir)
        self.catalog = catalog
        self.logger = logging.getLogger(__name__)

        self.generation_rows: List[Dict[str, Any]] = []
        self.result: Optional['EvolutionResult'] = None

    def on_generation(self, generation, individuals, fitness, stats) -> None:
        """Record one generation and log every individual at debug level"""
        for individual, value in zip(individuals, fitness):
            self.logger.debug(f"Generation {generation}: {individual.get_chromosome_string()} "
                              f"fit={value:.2f}")

        self.generation_rows.append({
            'generation': generation,
            'max_fitness': stats.max_fitness,
            'average_fitness': stats.average_fitness,
            'mutations': 0,
            'elite_inserted': False
        })

    def on_offspring(self, generation: int, parents: Sequence[int], offspring: Sequence,
                     mutations: List[Tuple[int, int]], elite_inserted: bool) -> None:
        """Attach breeding details to the generation that produced the offspring"""
        self.logger.debug(f"Generation {generation}: mating pool {list(parents)}, "
                          f"{len(mutations)} mutations, elite inserted: {elite_inserted}")
        if self.generation_rows and self.generation_rows[-1]['generation'] == generation:
            self.generation_rows[-1]['mutations'] = len(mutations)
            self.generation_rows[-1]['elite_inserted'] = elite_inserted

    def on_run_end(self, result: 'EvolutionResult') -> None:
        self.result = result

    def generation_table(self) -> pd.DataFrame:
        """Observed generations as a DataFrame"""
        return pd.DataFrame(self.generation_rows,
                            columns=['generation', 'max_fitness', 'average_fitness',
                                     'mutations', 'elite_inserted'])

    def bundle_table(self, result: 'EvolutionResult') -> pd.DataFrame:
        """Decoded bundles of the final population as a DataFrame"""
        rows = []
        for index, bundle in enumerate(result.bundles):
            rows.append({
                'individual': index,
                'chromosome': result.population[index].get_chromosome_string(),
                'product_ids': ' '.join(str(pid) for pid in bundle.product_ids),
                'num_products': len(bundle.product_ids),
                'num_families': len(bundle.families),
                'total_price': bundle.total_price,
                'fitness': bundle.fitness
            })
        return pd.DataFrame(rows)

    def generate_report(self, result: Optional['EvolutionResult'] = None) -> Path:
        """
        Generate the bundle search report

        Args:
            result: Evolution result; defaults to the one observed at run end

        Returns:
            Path to generated report
        """
        result = self._require_result(result)
        report_path = self.results_dir / 'bundle_report.txt'

        with open(report_path, 'w', encoding='utf-8') as f:
            f.write("PRODUCT BUNDLE GENETIC SEARCH REPORT\n")
            f.write("=" * 80 + "\n\n")

            self._write_configuration(f, result)
            self._write_best_bundle(f, result)
            self._write_generation_statistics(f, result)
            self._write_final_population(f, result)

        return report_path

    def _write_configuration(self, f, result: 'EvolutionResult'):
        """Write run configuration section"""
        self.write_section_header(f, "CONFIGURATION", level=2)
        for key, value in result.config.items():
            self.write_bullet_point(f, f"{key}: {value}")
        self.write_bullet_point(f, f"catalog: {len(self.catalog)} products, "
                                   f"{len(self.catalog.families)} families")
        self.write_bullet_point(f, f"termination: {result.termination_reason}")
        f.write("\n")

    def _write_best_bundle(self, f, result: 'EvolutionResult'):
        """Write best bundle section"""
        self.write_section_header(f, "BEST BUNDLE", level=2)
        bundle = result.best_bundle
        f.write(f"Fitness: {self.format_number(bundle.fitness)}\n")
        f.write(f"Total price: {self.format_price(bundle.total_price)} "
                f"(target {self.format_price(result.config['target_price'])})\n")
        f.write(f"Products ({len(bundle.product_ids)}):\n")
        for product_id in bundle.product_ids:
            record = self.catalog[product_id]
            self.write_bullet_point(f, f"{product_id}: family {record.family}, "
                                       f"price {self.format_price(record.price)}", indent=1)
        f.write(f"Families: {bundle.families}\n\n")

    def _write_generation_statistics(self, f, result: 'EvolutionResult'):
        """Write per-generation fitness statistics"""
        self.write_section_header(f, "GENERATION STATISTICS", level=2)
        rows = [[stats.generation, self.format_number(stats.max_fitness),
                 self.format_number(stats.average_fitness)] for stats in result.history]
        f.write(self.create_summary_table_string(['Generation', 'Max Fitness', 'Avg Fitness'], rows))
        f.write("\n\n")
        f.write(f"Elite reinsertions: {result.elite_insertions}\n")
        distribution = result.fitness_distribution
        if distribution:
            f.write(f"Distinct chromosomes evaluated: {result.evaluated_chromosomes} "
                    f"(fitness min {self.format_number(distribution['min_fitness'])}, "
                    f"mean {self.format_number(distribution['mean_fitness'])}, "
                    f"max {self.format_number(distribution['max_fitness'])})\n")
        f.write("\n")

    def _write_final_population(self, f, result: 'EvolutionResult'):
        """Write the decoded final population"""
        self.write_section_header(f, "FINAL POPULATION", level=2)
        f.write(f"Code index: {list(self.catalog.code_index)}\n\n")
        table = self.bundle_table(result)
        rows = table[['individual', 'chromosome', 'total_price', 'fitness', 'product_ids']].values.tolist()
        f.write(self.create_summary_table_string(['#', 'Chromosome', 'Price', 'Fitness', 'Products'], rows))
        f.write("\n")

    def save_results(self, result: Optional['EvolutionResult'] = None) -> List[Path]:
        """
        Save results to JSON and CSV files

        Args:
            result: Evolution result; defaults to the one observed at run end

        Returns:
            List of paths to saved files
        """
        result = self._require_result(result)
        saved_files = []

        saved_files.append(self.save_json_results(result.to_dict(), "bundle_results"))

        history = pd.DataFrame([stats.to_dict() for stats in result.history])
        history['diversity'] = result.diversity_history
        saved_files.append(self.save_csv_summary(history, "generation_statistics"))

        saved_files.append(self.save_csv_summary(self.bundle_table(result), "final_bundles"))

        return saved_files

    def print_summary(self, result: Optional['EvolutionResult'] = None):
        """Print run summary to console"""
        result = self._require_result(result)
        bundle = result.best_bundle

        print("\n" + "=" * 80)
        print("BUNDLE SEARCH SUMMARY")
        print("=" * 80)
        print(f"Generations: {result.generations_run}  ({result.termination_reason})")
        print(f"Max fitness per generation: {result.max_fitness_history}")
        print(f"Avg fitness per generation: {result.average_fitness_history}")
        print(f"Best bundle: {list(bundle.product_ids)}")
        print(f"  price={self.format_price(bundle.total_price)}  "
              f"families={bundle.families}  fitness={self.format_number(bundle.fitness)}")
        print("=" * 80)

    def _require_result(self, result: Optional['EvolutionResult']) -> 'EvolutionResult':
        result = result or self.result
        if result is None:
            raise RuntimeError("No evolution result to report")
        return result
