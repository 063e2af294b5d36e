"""Clause storage.

``ClauseArena`` owns every clause created during a search and hands out
ids. ``ClauseDatabase`` is the indexed set of *active* clauses on top of an
arena: removing a clause from the database deactivates it, while the arena
keeps it so that proofs can always be reconstructed.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from folreasoner.core.logic import Clause, Literal
from folreasoner.rules.subsumption import subsumes

logger = logging.getLogger(__name__)


class ClauseArena:
    """Append-only, id-indexed clause store."""

    def __init__(self):
        self._clauses: List[Clause] = []

    def add(self, clause: Clause) -> int:
        if clause.id is not None:
            raise ValueError(f"Clause {clause} already has id {clause.id}")
        clause.id = len(self._clauses)
        self._clauses.append(clause)
        return clause.id

    def get(self, clause_id: int) -> Clause:
        if not 0 <= clause_id < len(self._clauses):
            raise KeyError(clause_id)
        return self._clauses[clause_id]

    def __getitem__(self, clause_id: int) -> Clause:
        return self.get(clause_id)

    def __len__(self):
        return len(self._clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self._clauses)

    def __contains__(self, clause_id):
        return isinstance(clause_id, int) and 0 <= clause_id < len(self._clauses)

    def ancestors(self, clause_id: int) -> List[int]:
        """Ids of ``clause_id`` and everything it was derived from, ascending."""
        seen = set()
        stack = [clause_id]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            derivation = self.get(current).derivation
            if derivation is not None:
                stack.extend(derivation.parents)
        return sorted(seen)


@dataclass(frozen=True)
class Candidate:
    """A literal of an active clause that may resolve with a query literal."""
    clause_id: int
    literal_index: int
    literal: Literal


class ClauseDatabase:
    """Subsumption-checked set of active clauses with a literal index.

    The index maps ``(predicate name, arity, polarity)`` to the clauses
    containing such a literal, so resolution partners are found without
    scanning every clause.
    """

    def __init__(self, arena: Optional[ClauseArena] = None):
        self.arena = arena if arena is not None else ClauseArena()
        self._active: Dict[int, Clause] = {}
        self._index: Dict[Tuple[str, int, bool], Dict[int, List[int]]] = {}

    def insert(self, clause: Clause, check_subsumption: bool = True) -> Optional[int]:
        """Activate ``clause``; returns its id, or ``None`` if an active clause subsumes it.

        Clauses without an id are added to the arena first.
        """
        if check_subsumption:
            subsumer = self.find_subsumer(clause)
            if subsumer is not None:
                logger.debug("Clause %s subsumed by #%d", clause, subsumer)
                return None
        if clause.id is None:
            self.arena.add(clause)
        elif clause.id in self._active:
            return clause.id
        self._active[clause.id] = clause
        for index, literal in enumerate(clause.literals):
            self._index.setdefault(literal.key, {}).setdefault(clause.id, []).append(index)
        return clause.id

    def remove(self, clause_id: int) -> None:
        clause = self._active.pop(clause_id)
        for literal in clause.literals:
            bucket = self._index.get(literal.key)
            if bucket is not None:
                bucket.pop(clause_id, None)
                if not bucket:
                    del self._index[literal.key]

    def get(self, clause_id: int) -> Clause:
        """Look up any clause of the arena, active or not."""
        return self.arena.get(clause_id)

    def is_active(self, clause_id: int) -> bool:
        return clause_id in self._active

    def candidates(self, literal: Literal) -> List[Candidate]:
        """Active literals with the opposite polarity and the same predicate."""
        bucket = self._index.get(literal.complement_key, {})
        result = []
        for clause_id, indices in bucket.items():
            clause = self._active[clause_id]
            for index in indices:
                result.append(Candidate(clause_id, index, clause.literals[index]))
        return result

    def find_subsumer(self, clause: Clause) -> Optional[int]:
        """Id of an active clause subsuming ``clause``, if any."""
        keys = {literal.key for literal in clause.literals}
        for other_id, other in self._active.items():
            if len(other) > len(clause):
                continue
            if any(literal.key not in keys for literal in other.literals):
                continue
            if subsumes(other, clause):
                return other_id
        return None

    def is_subsumed(self, clause: Clause) -> bool:
        return self.find_subsumer(clause) is not None

    def back_subsumed(self, clause: Clause) -> List[int]:
        """Ids of active clauses, other than ``clause`` itself, that ``clause`` subsumes."""
        keys = {literal.key for literal in clause.literals}
        result = []
        for other_id, other in self._active.items():
            if other_id == clause.id or len(other) < len(clause):
                continue
            other_keys = {literal.key for literal in other.literals}
            if not keys <= other_keys:
                continue
            if subsumes(clause, other):
                result.append(other_id)
        return result

    def clauses(self) -> List[Clause]:
        return list(self._active.values())

    def clear(self) -> None:
        self._active.clear()
        self._index.clear()

    def __len__(self):
        return len(self._active)

    def __iter__(self) -> Iterator[Clause]:
        return iter(list(self._active.values()))

    def __contains__(self, item):
        if isinstance(item, Clause):
            return any(item == clause for clause in self._active.values())
        return item in self._active
