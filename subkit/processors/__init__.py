"""
Subtitle processing modules.

This package contains processors for document-level operations:
- Timing adjustment (shift, forced duration, linear drift correction)
- Fragmenting and unfragmenting
- Style and region hygiene
- Format conversion
"""

from .timing_adjuster import TimingAdjuster
from .fragmenter import Fragmenter
from .optimizer import StyleOptimizer
from .converter import FormatConverter

__all__ = [
    'TimingAdjuster',
    'Fragmenter',
    'StyleOptimizer',
    'FormatConverter',
]
