"""Unit deletion simplification rule."""

from typing import List, Optional, Tuple

from .base import Rule, RuleApplication
from folreasoner.core.derivation import UNIT_DELETION, Derivation
from folreasoner.core.logic import Clause
from folreasoner.core.unification import Substitution, VariableRenamer, match_literals


class UnitDeletionRule(Rule):
    """Delete literals whose complement is an instance of an active unit clause.

    A literal ``L`` goes away when some unit ``U`` matches ``¬L`` one way,
    binding only the variables of ``U``. The rest of the clause is left
    untouched, so the result is strictly shorter.
    """

    def __init__(self, renamer: Optional[VariableRenamer] = None):
        self.renamer = renamer if renamer is not None else VariableRenamer()

    @property
    def name(self) -> str:
        return UNIT_DELETION

    def deletions(self, clause: Clause, database) -> List[Tuple[int, Clause, Substitution, Substitution]]:
        """``(literal index, unit, renaming, matcher)`` for each deletable literal."""
        result = []
        for i, literal in enumerate(clause.literals):
            target = literal.negate()
            for candidate in database.candidates(literal):
                unit = database.get(candidate.clause_id)
                if len(unit) != 1:
                    continue
                renamed, renaming = self.renamer.rename_clause(unit)
                matcher = match_literals(renamed[0], target)
                if matcher is not None:
                    result.append((i, unit, renaming, matcher))
                    break
        return result

    def simplify(self, clause: Clause, database) -> Optional[Clause]:
        """Unit-deleted copy of ``clause``, or ``None`` if no literal can go.

        A clause without an id is added to the arena of ``database`` first,
        so that the copy can name it as its parent.
        """
        deletions = self.deletions(clause, database)
        if not deletions:
            return None
        if clause.id is None:
            database.arena.add(clause)

        mapping = {}
        for _, _, _, matcher in deletions:
            mapping.update(matcher.mapping)
        deleted = [i for i, _, _, _ in deletions]
        units = [unit for _, unit, _, _ in deletions]
        depth = max(_depth(parent) for parent in [clause] + units)
        return Clause(*(lit for k, lit in enumerate(clause.literals) if k not in deleted),
                      derivation=Derivation(
                          rule=UNIT_DELETION,
                          parents=(clause.id,) + tuple(unit.id for unit in units),
                          unifier=Substitution(mapping),
                          renamings=tuple(renaming for _, _, renaming, _ in deletions),
                          literal_indices=tuple(deleted),
                          depth=depth,
                      ))

    def apply(self, database, clause_ids: List[int]) -> Optional[RuleApplication]:
        """
        Unit-delete the clause with id ``clause_ids[0]``.

        Returns:
            RuleApplication with the shortened clause and the original id
            as deleted, None if nothing was removed
        """
        if len(clause_ids) != 1:
            return None
        simplified = self.simplify(database.get(clause_ids[0]), database)
        if simplified is None:
            return None
        return RuleApplication(
            rule_name=self.name,
            parents=list(simplified.derivation.parents),
            generated_clauses=[simplified],
            deleted_clause_ids=list(clause_ids),
        )


def _depth(clause: Clause) -> int:
    return clause.derivation.depth if clause.derivation is not None else 0
