"""Base class for clause selectors."""

from abc import ABC, abstractmethod
from typing import Optional

from folreasoner.proofs.state import ProofState


class ClauseSelector(ABC):
    """Abstract base class for clause selection strategies."""

    def __init__(self):
        """Initialize the selector."""
        self.stats = {
            'selections': 0,
        }

    @abstractmethod
    def select(self, proof_state: ProofState) -> Optional[int]:
        """Select a clause from the unprocessed list.

        Args:
            proof_state: Current proof state

        Returns:
            Index of selected clause in unprocessed list, or None if no selection
        """
        pass

    def run(self, proof_state: ProofState) -> Optional[int]:
        """Select and count the selection."""
        index = self.select(proof_state)
        if index is not None:
            self.stats['selections'] += 1
        return index

    @property
    @abstractmethod
    def name(self) -> str:
        """Return name of the selector."""
        pass
