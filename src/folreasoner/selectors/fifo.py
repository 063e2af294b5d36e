"""FIFO (First-In-First-Out) clause selector."""

from typing import Optional

from folreasoner.proofs.state import ProofState
from .base import ClauseSelector


class FIFOSelector(ClauseSelector):
    """Select clauses in the order they were generated (FIFO)."""

    def select(self, proof_state: ProofState) -> Optional[int]:
        """Select the first unprocessed clause."""
        if len(proof_state.unprocessed) > 0:
            return 0
        return None

    @property
    def name(self) -> str:
        return "fifo"
