"""Configuration module"""

from .ga_config import GAConfig, load_config

__all__ = ['GAConfig', 'load_config']
