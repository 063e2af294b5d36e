"""Subsumption elimination rule."""

from typing import List, Optional

from .base import Rule, RuleApplication
from folreasoner.core.logic import Clause, Literal
from folreasoner.core.unification import Substitution, match_literals


def subsumes(clause1: Clause, clause2: Clause) -> bool:
    """Check if clause1 θ-subsumes clause2.

    Holds when some substitution maps every literal of ``clause1`` onto a
    literal of ``clause2``. Only clauses no longer than ``clause2`` are
    considered, so a clause never subsumes its own factors.
    """
    if len(clause1) > len(clause2):
        return False
    # Most constrained literals first
    pattern = sorted(clause1.literals, key=lambda lit: -lit.size())
    return _extend(pattern, 0, clause2.literals, Substitution())


def _extend(pattern: List[Literal], position: int, targets, subst: Substitution) -> bool:
    if position == len(pattern):
        return True
    literal = pattern[position]
    for target in targets:
        extended = match_literals(literal, target, subst)
        if extended is not None and _extend(pattern, position + 1, targets, extended):
            return True
    return False


class SubsumptionRule(Rule):
    """Subsumption elimination - remove active clauses subsumed by a given one."""

    @property
    def name(self) -> str:
        return "subsumption"

    def apply(self, database, clause_ids: List[int]) -> Optional[RuleApplication]:
        """
        Find active clauses subsumed by the clause with id ``clause_ids[0]``.

        The database is not modified; the caller removes the reported ids.

        Returns:
            RuleApplication with deleted ids if any subsumptions found, None otherwise
        """
        if len(clause_ids) != 1:
            return None
        clause = database.get(clause_ids[0])
        deleted = database.back_subsumed(clause)
        if not deleted:
            return None
        return RuleApplication(
            rule_name=self.name,
            parents=list(clause_ids),
            deleted_clause_ids=deleted,
        )
