"""Factoring inference rule."""

from typing import List, Optional

from .base import Rule, RuleApplication
from folreasoner.core.derivation import FACTORING, Derivation
from folreasoner.core.logic import Clause
from folreasoner.core.unification import unify_literals


class FactoringRule(Rule):
    """Factoring: unify two literals of the same polarity within one clause."""

    def __init__(self, check_occurs: bool = True):
        self.check_occurs = check_occurs

    @property
    def name(self) -> str:
        return FACTORING

    def factors(self, clause: Clause) -> List[Clause]:
        result = []
        for i, lit1 in enumerate(clause.literals):
            for j in range(i + 1, len(clause.literals)):
                lit2 = clause.literals[j]
                if lit1.key != lit2.key:
                    continue
                mgu = unify_literals(lit1, lit2, complementary=False,
                                     check_occurs=self.check_occurs)
                if mgu is None:
                    continue
                literals = [lit for k, lit in enumerate(clause.literals) if k != j]
                depth = clause.derivation.depth if clause.derivation is not None else 0
                result.append(Clause(*mgu.apply_literals(literals), derivation=Derivation(
                    rule=FACTORING,
                    parents=(clause.id,),
                    unifier=mgu,
                    literal_indices=(i, j),
                    depth=depth + 1,
                )))
        return result

    def apply(self, database, clause_ids: List[int]) -> Optional[RuleApplication]:
        """
        Apply factoring to a single clause.

        Args:
            database: Clause database holding the clause
            clause_ids: ``[clause_id]``

        Returns:
            RuleApplication if any factors were found, None otherwise
        """
        if len(clause_ids) != 1:
            return None
        factors = self.factors(database.get(clause_ids[0]))
        if not factors:
            return None
        return RuleApplication(
            rule_name=self.name,
            parents=list(clause_ids),
            generated_clauses=factors,
        )
