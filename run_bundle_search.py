#!/usr/bin/env python3
"""
Product Bundle Search Runner

Runs the genetic bundle search end to end:
- Load the catalog from CSV, or generate a random one and save it
- Evolve bundles whose price approaches the target over many families
- Save the text report, JSON/CSV results and evolution plots
"""

import sys
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from bundle_ga.config import GAConfig, load_config
from bundle_ga.data import Catalog, CatalogLoader
from bundle_ga.genetic import (
    TournamentSelection, SinglePointCrossover, BitFlipMutation,
    ElitePreservation, FitnessEvaluator
)
from bundle_ga.algorithms import GeneticAlgorithm, EvolutionResult
from bundle_ga.utils import setup_logger, make_rng
from bundle_ga.visualization import EvolutionVisualizer
from bundle_ga.reporting import BundleReporter


class BundleSearchRunner:
    """
    Wires a catalog, the genetic operators and the reporting together
    """

    def __init__(self, config: GAConfig, catalog_file: Optional[str] = None,
                 output_dir: str = "bundle_results"):
        """Initialize the runner"""
        self.config = config
        self.catalog_file = catalog_file
        self.logger = logging.getLogger(__name__)
        self.rng = make_rng(config.random_seed)

        self.results_dir = Path(output_dir)
        self.plots_dir = self.results_dir / "plots"

        self.catalog = self._load_catalog()

        self.visualizer = EvolutionVisualizer(self.plots_dir, self.catalog)
        self.reporter = BundleReporter(self.results_dir, self.catalog)

    def _load_catalog(self) -> Catalog:
        """Load the catalog from CSV, or generate and save a random one"""
        loader = CatalogLoader()

        if self.catalog_file:
            self.logger.info(f"Loading catalog from {self.catalog_file}")
            catalog = loader.load_csv(self.catalog_file)
            # The file decides the universe size
            self.config.universe_size = len(catalog)
        else:
            self.logger.info(f"Generating random catalog of {self.config.universe_size} products")
            catalog = loader.generate(self.config.universe_size, self.config.max_price,
                                      self.config.num_families, rng=self.rng)
            saved = loader.save_csv(catalog, self.results_dir / "products.csv")
            self.logger.info(f"Catalog saved to {saved}")

        self.logger.info(f"Catalog: {len(catalog)} products, {len(catalog.families)} families")
        self.logger.info(f"Code index: {list(catalog.code_index)}")
        return catalog

    def run(self) -> EvolutionResult:
        """Run the search and write every output"""
        ga = GeneticAlgorithm(
            config=self.config,
            fitness_evaluator=FitnessEvaluator(self.config, self.catalog),
            selection_operator=TournamentSelection(rng=self.rng),
            crossover_operator=SinglePointCrossover(rng=self.rng),
            mutation_operator=BitFlipMutation(self.config.mutation_rate, rng=self.rng),
            elitism_operator=ElitePreservation(),
            observers=[self.reporter],
            rng=self.rng
        )

        result = ga.run()

        self.reporter.save_results(result)
        report_path = self.reporter.generate_report(result)
        self.logger.info(f"Report written to {report_path}")

        self.logger.info("Generating visualizations...")
        self.visualizer.generate_all_plots(result)
        self.logger.info(f"All plots saved to {self.plots_dir}")

        self.reporter.print_summary(result)
        return result


def main(catalog_file: Optional[str] = None, config_file: Optional[str] = None) -> EvolutionResult:
    """Main function to run the bundle search"""

    log_file = f"logs/bundle_search_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    logger = setup_logger(__name__, log_file)
    setup_logger("bundle_ga", log_file)

    try:
        config = load_config(config_file) if config_file else GAConfig()
        runner = BundleSearchRunner(config, catalog_file)
        result = runner.run()

        logger.info("Bundle search completed successfully!")
        logger.info(f"Log file: {log_file}")
        logger.info(f"Results saved to: {runner.results_dir}")

        return result

    except Exception as e:
        logger.error(f"Bundle search failed: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    if len(sys.argv) > 3:
        print("Usage: python run_bundle_search.py [catalog_file] [config_file]")
        print("Example: python run_bundle_search.py products.txt config.json")
        sys.exit(1)

    main(*sys.argv[1:])
