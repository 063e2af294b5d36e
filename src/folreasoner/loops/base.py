"""Base class for given clause loops."""

from abc import ABC, abstractmethod

from folreasoner.core.logic import Clause


class Loop(ABC):
    """Abstract base class for given clause loops."""

    @abstractmethod
    def step(self):
        """
        Execute one iteration of the given clause loop.

        Returns:
            The search status after the iteration
        """
        pass

    def is_contradiction(self, clause: Clause) -> bool:
        """Check if a clause is a contradiction (empty clause)."""
        return len(clause.literals) == 0

    def is_tautology(self, clause: Clause) -> bool:
        """Check if a clause contains a literal and its complement."""
        return clause.is_tautology()
