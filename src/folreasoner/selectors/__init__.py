"""
Clause selection strategies for the given-clause loop.
"""

from .base import ClauseSelector
from .fifo import FIFOSelector
from .smallest import SmallestSelector, clause_priority
from .ratio import RatioSelector
from .registry import SelectorRegistry, get_selector

__all__ = [
    'ClauseSelector', 'FIFOSelector', 'SmallestSelector', 'RatioSelector',
    'clause_priority', 'SelectorRegistry', 'get_selector'
]
