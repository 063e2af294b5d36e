"""Inference rules for resolution-based theorem proving."""

from .base import Rule, RuleApplication
from .resolution import ResolutionRule
from .factoring import FactoringRule
from .hyperresolution import HyperresolutionRule
from .subsumption import SubsumptionRule, subsumes
from .unit_deletion import UnitDeletionRule

__all__ = [
    'Rule', 'RuleApplication',
    'ResolutionRule', 'FactoringRule', 'HyperresolutionRule',
    'SubsumptionRule', 'subsumes', 'UnitDeletionRule',
]
