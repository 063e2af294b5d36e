"""Positive unit hyperresolution."""

from typing import List, Optional, Sequence, Tuple

from .base import Rule, RuleApplication
from folreasoner.core.derivation import HYPERRESOLUTION, Derivation
from folreasoner.core.logic import Clause
from folreasoner.core.unification import Substitution, VariableRenamer, unify_literals


def is_positive_unit(clause: Clause) -> bool:
    return len(clause) == 1 and clause.literals[0].polarity


class HyperresolutionRule(Rule):
    """Resolve every negative literal of a nucleus against positive unit satellites.

    The hyperresolvent is made of the nucleus's positive literals under the
    combined unifier. Each satellite is renamed apart per use, so one unit
    may clash with several nucleus literals.
    """

    def __init__(self, renamer: Optional[VariableRenamer] = None, check_occurs: bool = True):
        self.renamer = renamer if renamer is not None else VariableRenamer()
        self.check_occurs = check_occurs

    @property
    def name(self) -> str:
        return HYPERRESOLUTION

    def hyperresolvents(self, given: Clause, database) -> List[Clause]:
        """Hyperresolvents over the active clauses that use ``given``.

        ``given`` takes part either as the nucleus or as one of the
        satellites.
        """
        units = [clause for clause in database if is_positive_unit(clause)]
        result = []
        for nucleus in database:
            if all(lit.polarity for lit in nucleus.literals):
                continue
            if nucleus.id == given.id:
                result.extend(self.combine(nucleus, units))
            elif is_positive_unit(given):
                result.extend(self.combine(nucleus, units, required=given.id))
        return result

    def combine(self, nucleus: Clause, units: Sequence[Clause],
                required: Optional[int] = None) -> List[Clause]:
        """All hyperresolvents of ``nucleus`` with ``units``.

        With ``required`` set, only combinations using that unit are kept.
        """
        negatives = [i for i, lit in enumerate(nucleus.literals) if not lit.polarity]
        result = []

        def extend(position: int, subst: Substitution, chosen: List[Tuple[Clause, Substitution]]):
            if position == len(negatives):
                if required is None or any(unit.id == required for unit, _ in chosen):
                    result.append(self._hyperresolvent(nucleus, negatives, chosen, subst))
                return
            literal = nucleus.literals[negatives[position]]
            for unit in units:
                if unit.literals[0].key != literal.complement_key:
                    continue
                renamed, renaming = self.renamer.rename_clause(unit)
                extended = unify_literals(literal, renamed[0], complementary=True,
                                          subst=subst, check_occurs=self.check_occurs)
                if extended is not None:
                    extend(position + 1, extended, chosen + [(unit, renaming)])

        extend(0, Substitution(), [])
        return result

    def _hyperresolvent(self, nucleus: Clause, negatives: List[int],
                        chosen: List[Tuple[Clause, Substitution]], subst: Substitution) -> Clause:
        positives = [lit for lit in nucleus.literals if lit.polarity]
        depth = 1 + max(_depth(clause) for clause in [nucleus] + [unit for unit, _ in chosen])
        return Clause(*subst.apply_literals(positives), derivation=Derivation(
            rule=HYPERRESOLUTION,
            parents=(nucleus.id,) + tuple(unit.id for unit, _ in chosen),
            unifier=subst,
            renamings=tuple(renaming for _, renaming in chosen),
            literal_indices=tuple(negatives),
            depth=depth,
        ))

    def apply(self, database, clause_ids: List[int]) -> Optional[RuleApplication]:
        """
        Hyperresolve with the clause ``clause_ids[0]`` as nucleus or satellite.

        Returns:
            RuleApplication if any hyperresolvents were found, None otherwise
        """
        if len(clause_ids) != 1:
            return None
        hyperresolvents = self.hyperresolvents(database.get(clause_ids[0]), database)
        if not hyperresolvents:
            return None
        return RuleApplication(
            rule_name=self.name,
            parents=list(clause_ids),
            generated_clauses=hyperresolvents,
        )


def _depth(clause: Clause) -> int:
    return clause.derivation.depth if clause.derivation is not None else 0
