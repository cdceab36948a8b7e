"""Utility modules for common functionality"""

from .random_utils import set_seed, make_rng
from .logging_utils import setup_logger

__all__ = ['set_seed', 'make_rng', 'setup_logger']
