"""
Given clause loops.
"""

from .base import Loop
from .basic import (
    ResolutionEngine, SearchLimits, SearchResult, SearchStatistics, SearchStatus,
)

__all__ = [
    'Loop', 'ResolutionEngine',
    'SearchLimits', 'SearchResult', 'SearchStatistics', 'SearchStatus'
]
