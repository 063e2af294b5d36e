"""Smallest-clause-first selector."""

from typing import Optional, Tuple

from folreasoner.core.logic import Clause
from folreasoner.proofs.state import ProofState
from .base import ClauseSelector


def clause_priority(clause: Clause) -> Tuple[int, int, int]:
    """Fewest literals, then fewest symbols, then oldest."""
    return len(clause), clause.size(), clause.id


class SmallestSelector(ClauseSelector):
    """Select the smallest unprocessed clause."""

    def select(self, proof_state: ProofState) -> Optional[int]:
        if not proof_state.unprocessed:
            return None
        return min(range(len(proof_state.unprocessed)),
                   key=lambda i: clause_priority(proof_state.unprocessed[i]))

    @property
    def name(self) -> str:
        return "smallest"
