"""Knowledge base: named formulas and their subsumption-minimal clauses."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from folreasoner.core.derivation import AXIOM
from folreasoner.core.formula import Formula
from folreasoner.core.logic import Clause
from folreasoner.core.normalizer import Normalizer, Signature
from folreasoner.proofs.database import ClauseDatabase

logger = logging.getLogger(__name__)

FACT = "fact"
RULE = "rule"


@dataclass
class KnowledgeEntry:
    name: str
    role: str
    formula: Formula
    clauses: List[Clause] = field(default_factory=list)


class KnowledgeBase:
    """Ordered formulas plus the clause set they normalize to.

    ``version`` changes on every mutation, so results computed against one
    state of the knowledge base can be recognised as stale.
    """

    def __init__(self):
        self.entries: List[KnowledgeEntry] = []
        self.signature = Signature()
        self.normalizer = Normalizer(self.signature)
        self.database = ClauseDatabase()
        self.version = 0

    def add(self, formula: Formula, name: Optional[str] = None, role: str = AXIOM) -> KnowledgeEntry:
        """Normalize and store ``formula``.

        Normalization happens before anything is stored, so a malformed
        formula leaves the knowledge base untouched.
        """
        if name is None:
            name = f"formula_{len(self.entries) + 1}"
        clauses = self.normalizer.normalize(formula, source=name, role=role)

        for clause in clauses:
            clause_id = self.database.insert(clause)
            if clause_id is None:
                continue
            for subsumed in self.database.back_subsumed(clause):
                self.database.remove(subsumed)

        entry = KnowledgeEntry(name, role, formula, clauses)
        self.entries.append(entry)
        self.version += 1
        logger.debug("Added %s (%s) as %d clause(s), %d active", name, role, len(clauses), len(self.database))
        return entry

    def clauses(self) -> List[Clause]:
        """Active clauses in insertion order."""
        return sorted(self.database.clauses(), key=lambda clause: clause.id)

    def formulas(self) -> List[Formula]:
        return [entry.formula for entry in self.entries]

    def reset(self) -> None:
        self.entries = []
        self.signature = Signature()
        self.normalizer = Normalizer(self.signature)
        self.database = ClauseDatabase()
        self.version += 1

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
