"""
Reporting package for bundle search runs
"""

from .base_reporter import BaseReporter, RunObserver, NumpyEncoder
from .bundle_reporter import BundleReporter

__all__ = ['BaseReporter', 'RunObserver', 'NumpyEncoder', 'BundleReporter']
