#!/usr/bin/env python3
"""
Base Reporter Module

Observer hooks called by the generation loop, and the shared report
formatting and file handling used by every reporter.
"""

import json
import pandas as pd
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, List, Optional, Sequence, Tuple
from abc import ABC, abstractmethod


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder for numpy types and result objects"""
    def default(self, obj):
        import numpy as np

        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif hasattr(obj, 'to_dict'):
            return obj.to_dict()
        return super().default(obj)


class RunObserver:
    """
    Receives what happens during a run without influencing it

    Every hook does nothing by default; subclasses override the ones they need.
    """

    def on_generation(self, generation: int, individuals: Sequence, fitness: Sequence[float],
                      stats) -> None:
        """Called after a generation has been evaluated and its statistics recorded"""

    def on_offspring(self, generation: int, parents: Sequence[int], offspring: Sequence,
                     mutations: List[Tuple[int, int]], elite_inserted: bool) -> None:
        """Called after crossover, mutation and elitism produced the next generation"""

    def on_run_end(self, result) -> None:
        """Called once with the compiled evolution result"""


class BaseReporter(RunObserver, ABC):
    """
    Base class for all reporters with common reporting utilities
    """

    def __init__(self, results_dir: Path):
        """
        Initialize base reporter

        Args:
            results_dir: Directory to save reports and results
        """
        self.results_dir = Path(results_dir)
        self.results_dir.mkdir(parents=True, exist_ok=True)

    def write_section_header(self, f, title: str, level: int = 1):
        """
        Write a formatted section header

        Args:
            f: File handle
            title: Section title
            level: Header level (1 for main, 2 for subsection)
        """
        if level == 1:
            f.write(f"\n{title}\n")
            f.write("=" * len(title) + "\n\n")
        elif level == 2:
            f.write(f"\n{title}\n")
            f.write("-" * len(title) + "\n")
        else:
            f.write(f"\n{title}:\n")

    def write_bullet_point(self, f, text: str, indent: int = 0):
        """Write a formatted bullet point"""
        f.write("  " * indent + f"- {text}\n")

    def format_number(self, value: float, decimals: int = 2) -> str:
        """Format a number with specified decimals"""
        return f"{value:.{decimals}f}"

    def format_price(self, cents: int) -> str:
        """Format a price in cents as currency units"""
        return f"{cents / 100:.2f}"

    def _timestamped(self, filename: str, extension: str, timestamp: bool) -> Path:
        if timestamp:
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"{filename}_{ts}"
        return self.results_dir / f"{filename}.{extension}"

    def save_json_results(self, data: Dict[str, Any], filename: str,
                          timestamp: bool = True) -> Path:
        """
        Save results as JSON file

        Args:
            data: Data to save
            filename: Base filename, without extension
            timestamp: Whether to add timestamp to filename

        Returns:
            Path to saved file
        """
        filepath = self._timestamped(filename, 'json', timestamp)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, cls=NumpyEncoder)

        return filepath

    def save_csv_summary(self, df: pd.DataFrame, filename: str,
                         timestamp: bool = True) -> Path:
        """
        Save DataFrame as CSV file

        Args:
            df: DataFrame to save
            filename: Base filename, without extension
            timestamp: Whether to add timestamp to filename

        Returns:
            Path to saved file
        """
        filepath = self._timestamped(filename, 'csv', timestamp)
        df.to_csv(filepath, index=False)

        return filepath

    def create_summary_table_string(self, headers: list, rows: list,
                                    col_widths: Optional[list] = None) -> str:
        """
        Create a formatted table string

        Args:
            headers: List of column headers
            rows: List of row data (each row is a list)
            col_widths: Optional list of column widths

        Returns:
            Formatted table string
        """
        if col_widths is None:
            col_widths = [max(len(str(item)) for item in [header] + [row[i] for row in rows]) + 2
                          for i, header in enumerate(headers)]

        header_row = "".join(f"{header:<{col_widths[i]}}" for i, header in enumerate(headers))
        separator = "-" * len(header_row)

        data_rows = []
        for row in rows:
            data_row = "".join(f"{str(row[i]):<{col_widths[i]}}" for i in range(len(row)))
            data_rows.append(data_row)

        return "\n".join([header_row, separator] + data_rows)

    @abstractmethod
    def generate_report(self, *args, **kwargs) -> Path:
        """Generate the main report (to be implemented by subclasses)"""
        pass
