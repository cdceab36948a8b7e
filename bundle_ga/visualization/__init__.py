"""
Visualization package for bundle search runs
"""

from .base_visualizer import BaseVisualizer
from .evolution_visualizer import EvolutionVisualizer

__all__ = ['BaseVisualizer', 'EvolutionVisualizer']
