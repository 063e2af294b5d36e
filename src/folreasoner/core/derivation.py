"""Provenance records attached to clauses."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .unification import Substitution

# Rules that introduce a clause without parents
AXIOM = "axiom"
NEGATED_CONJECTURE = "negated_conjecture"
PREMISE_RULES = (AXIOM, NEGATED_CONJECTURE)

RESOLUTION = "resolution"
FACTORING = "factoring"
HYPERRESOLUTION = "hyperresolution"
UNIT_DELETION = "unit_deletion"


@dataclass(frozen=True)
class Derivation:
    """How a clause was obtained.

    For resolution, ``parents`` is ``(given, partner)``, ``renaming`` is the
    standardize-apart substitution applied to the partner and
    ``literal_indices`` are the positions of the resolved literals in each
    parent. For factoring, ``literal_indices`` are the two merged positions
    in the single parent.

    Hyperresolution and unit deletion resolve several literals of the first
    parent against unit clauses at once: ``parents`` is ``(clause, unit, ...)``,
    ``literal_indices`` holds the removed positions of the first parent in
    unit order and ``renamings`` the renaming applied to each unit.
    """
    rule: str
    parents: Tuple[int, ...] = ()
    unifier: Optional[Substitution] = None
    renaming: Optional[Substitution] = None
    renamings: Tuple[Substitution, ...] = ()
    literal_indices: Tuple[int, ...] = ()
    depth: int = 0
    source: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_premise(self) -> bool:
        return self.rule in PREMISE_RULES


def premise(source: Optional[str] = None, role: str = AXIOM,
            rule: str = AXIOM) -> Derivation:
    return Derivation(rule=rule, source=source, role=role)
