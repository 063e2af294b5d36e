"""Base interface for inference rules."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from folreasoner.core.logic import Clause

if TYPE_CHECKING:
    from folreasoner.proofs.database import ClauseDatabase


@dataclass
class RuleApplication:
    """Result of applying an inference rule."""
    rule_name: str
    parents: List[int]  # Arena ids of parent clauses
    generated_clauses: List[Clause] = field(default_factory=list)
    deleted_clause_ids: List[int] = field(default_factory=list)  # For deletion rules like subsumption


class Rule(ABC):
    """Abstract base class for inference rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the inference rule."""
        pass

    @abstractmethod
    def apply(self, database: 'ClauseDatabase', clause_ids: List[int]) -> Optional[RuleApplication]:
        """
        Apply the rule to the given clauses.

        Args:
            database: Clause database whose arena holds the clauses
            clause_ids: Arena ids of the clauses to apply the rule to

        Returns:
            RuleApplication if the rule was successfully applied, None otherwise
        """
        pass
