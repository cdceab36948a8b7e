#!/usr/bin/env python3
"""
Evolution Visualizer Module

Plots of a bundle search run: fitness curves, population diversity and the
composition of the best bundle.
"""

import matplotlib.pyplot as plt
from pathlib import Path
from typing import List, TYPE_CHECKING

from ..data import Catalog
from .base_visualizer import BaseVisualizer

if TYPE_CHECKING:
    from ..algorithms import EvolutionResult


class EvolutionVisualizer(BaseVisualizer):
    """
    Visualizer for bundle search results
    """

    def __init__(self, plots_dir: Path, catalog: Catalog):
        """
        Initialize evolution visualizer

        Args:
            plots_dir: Directory to save plots
            catalog: Product universe, for family and price context
        """
        super().__init__(plots_dir)
        self.catalog = catalog

    def generate_all_plots(self, result: 'EvolutionResult') -> List[Path]:
        """
        Generate all bundle search visualizations

        Args:
            result: Evolution result to plot

        Returns:
            Paths of the saved plots
        """
        return [
            self.plot_fitness_curves(result),
            self.plot_diversity(result),
            self.plot_best_bundle(result)
        ]

    def plot_fitness_curves(self, result: 'EvolutionResult') -> Path:
        """Plot max and average fitness per generation"""
        generations = [stats.generation for stats in result.history]

        plt.figure(figsize=(10, 6))
        plt.plot(generations, result.max_fitness_history, linewidth=2, label='Max Fitness')
        plt.plot(generations, result.average_fitness_history, linewidth=2,
                 linestyle='--', label='Average Fitness')
        plt.title('Fitness vs Generation')
        plt.xlabel('Generation')
        plt.ylabel('Fitness (Higher is Better)')
        self.setup_grid(plt.gca())
        plt.legend()

        return self.save_plot('fitness_curves.png')

    def plot_diversity(self, result: 'EvolutionResult') -> Path:
        """Plot average Hamming distance between chromosomes per generation"""
        plt.figure(figsize=(10, 6))
        plt.plot(range(len(result.diversity_history)), result.diversity_history,
                 linewidth=2, color='green')
        plt.title('Population Diversity')
        plt.xlabel('Generation')
        plt.ylabel('Mean Normalized Hamming Distance')
        plt.ylim(0, 1)
        self.setup_grid(plt.gca())

        return self.save_plot('diversity.png')

    def plot_best_bundle(self, result: 'EvolutionResult') -> Path:
        """Plot the family breakdown and product prices of the best bundle"""
        bundle = result.best_bundle
        fig, axes = self.create_subplot_grid(1, 2, figsize=(16, 6),
                                             suptitle=f"Best Bundle (fitness {bundle.fitness:.2f})")
        ax1, ax2 = axes[0]

        families = self.catalog.families
        counts = [bundle.families.get(family, 0) for family in families]
        bars = ax1.bar([str(family) for family in families], counts,
                       color=self.get_color_palette(len(families)))
        ax1.set_title('Products per Family')
        ax1.set_xlabel('Family')
        ax1.set_ylabel('Products')
        self.add_value_labels_to_bars(ax1, bars)

        prices = [self.catalog[pid].price / 100 for pid in bundle.product_ids]
        ax2.bar([str(pid) for pid in bundle.product_ids], prices, color='skyblue', alpha=0.8)
        ax2.axhline(result.config['target_price'] / 100 / max(len(prices), 1),
                    color='red', linestyle='--', label='Target / products')
        ax2.set_title(f"Product Prices (total {bundle.total_price / 100:.2f})")
        ax2.set_xlabel('Product')
        ax2.set_ylabel('Price')
        ax2.tick_params(axis='x', rotation=45)
        ax2.legend()

        return self.save_plot('best_bundle.png')
