#!/usr/bin/env python3
"""
Base Visualizer Module

Shared plotting configuration, styling and file handling for the bundle
search plots.
"""

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np
from pathlib import Path
from typing import Optional, Tuple, List
from abc import ABC, abstractmethod


class BaseVisualizer(ABC):
    """
    Base class for all visualizers with common plotting utilities
    """

    def __init__(self, plots_dir: Path, style: str = 'seaborn-v0_8'):
        """
        Initialize base visualizer

        Args:
            plots_dir: Directory to save plots
            style: Matplotlib style to use
        """
        self.plots_dir = Path(plots_dir)
        self.plots_dir.mkdir(parents=True, exist_ok=True)

        self.setup_plotting_style(style)

    def setup_plotting_style(self, style: str = 'seaborn-v0_8'):
        """Setup consistent plotting style across all visualizations"""
        plt.style.use(style)
        sns.set_palette("husl")

        plt.rcParams.update({
            'figure.figsize': (10, 6),
            'font.size': 11,
            'axes.titlesize': 13,
            'axes.labelsize': 11,
            'legend.fontsize': 10,
            'axes.titlepad': 20,
            'axes.labelpad': 10
        })

    def save_plot(self, filename: str, dpi: int = 150, bbox_inches: str = 'tight') -> Path:
        """
        Save current plot to file and close it

        Args:
            filename: Name of the file (without path)
            dpi: Resolution for saved plot
            bbox_inches: Bounding box configuration

        Returns:
            Path to saved plot
        """
        filepath = self.plots_dir / filename
        plt.savefig(filepath, dpi=dpi, bbox_inches=bbox_inches)
        plt.close()
        return filepath

    def create_subplot_grid(self, rows: int, cols: int, figsize: Optional[Tuple[int, int]] = None,
                            suptitle: Optional[str] = None) -> Tuple[plt.Figure, np.ndarray]:
        """
        Create a subplot grid with consistent styling

        Args:
            rows: Number of rows
            cols: Number of columns
            figsize: Figure size tuple
            suptitle: Super title for the figure

        Returns:
            Figure and 2-D axes array
        """
        if figsize is None:
            figsize = (6 * cols, 4 * rows)

        fig, axes = plt.subplots(rows, cols, figsize=figsize, squeeze=False)

        if suptitle:
            fig.suptitle(suptitle, fontsize=15)

        return fig, axes

    def add_value_labels_to_bars(self, ax: plt.Axes, bars, format_str: str = '{:.0f}',
                                 offset: float = 0.05):
        """Add value labels above the bars of a bar chart"""
        for bar in bars:
            height = bar.get_height()
            ax.text(bar.get_x() + bar.get_width() / 2, height + offset,
                    format_str.format(height), ha='center', va='bottom')

    def setup_grid(self, ax: plt.Axes, alpha: float = 0.3):
        """Add grid to plot with consistent styling"""
        ax.grid(True, alpha=alpha)

    def get_color_palette(self, n_colors: int) -> List:
        """Get a consistent color palette"""
        return sns.color_palette("husl", n_colors)

    @abstractmethod
    def generate_all_plots(self, *args, **kwargs) -> List[Path]:
        """Generate all plots for this visualizer (to be implemented by subclasses)"""
        pass
