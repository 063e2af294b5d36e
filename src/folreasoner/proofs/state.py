"""Search state representation."""

from dataclasses import dataclass, field
from typing import List

from folreasoner.core.logic import Clause
from .database import ClauseArena, ClauseDatabase


@dataclass
class ProofState:
    """State of a given-clause search.

    ``usable`` holds the processed clauses (indexed for partner lookup),
    ``unprocessed`` the clauses still waiting to be selected, in
    generation order. Both share one arena.
    """
    arena: ClauseArena = field(default_factory=ClauseArena)
    usable: ClauseDatabase = None
    unprocessed: List[Clause] = field(default_factory=list)

    def __post_init__(self):
        if self.usable is None:
            self.usable = ClauseDatabase(self.arena)
        elif self.usable.arena is not self.arena:
            raise ValueError("Usable clauses must live in the state's arena")
        self.unprocessed = list(self.unprocessed)

    @property
    def all_clauses(self) -> List[Clause]:
        """Return all live clauses (usable + unprocessed)."""
        return self.usable.clauses() + self.unprocessed

    def add_unprocessed(self, clause: Clause) -> int:
        """Register ``clause`` in the arena and queue it for selection."""
        if clause.id is None:
            self.arena.add(clause)
        self.unprocessed.append(clause)
        return clause.id

    def pop_unprocessed(self, index: int) -> Clause:
        return self.unprocessed.pop(index)

    def move_to_usable(self, clause: Clause) -> None:
        """Add a selected clause to the usable set."""
        self.usable.insert(clause, check_subsumption=False)
