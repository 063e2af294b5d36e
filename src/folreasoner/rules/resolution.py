"""Binary resolution inference rule."""

from typing import List, Optional

from .base import Rule, RuleApplication
from folreasoner.core.derivation import RESOLUTION, Derivation
from folreasoner.core.logic import Clause
from folreasoner.core.unification import VariableRenamer, unify_literals


class ResolutionRule(Rule):
    """Binary resolution inference rule.

    The second parent is always standardized apart with fresh variables
    before unification, which also makes resolving a clause with itself
    safe. The renaming is stored in the resolvent's derivation.
    """

    def __init__(self, renamer: Optional[VariableRenamer] = None, check_occurs: bool = True):
        self.renamer = renamer if renamer is not None else VariableRenamer()
        self.check_occurs = check_occurs

    @property
    def name(self) -> str:
        return RESOLUTION

    def resolve(self, given: Clause, partner: Clause, i: int, j: int) -> Optional[Clause]:
        """Resolve literal ``i`` of ``given`` with literal ``j`` of ``partner``."""
        renamed, renaming = self.renamer.rename_clause(partner)
        mgu = unify_literals(given.literals[i], renamed[j], complementary=True,
                             check_occurs=self.check_occurs)
        if mgu is None:
            return None

        literals = [lit for k, lit in enumerate(given.literals) if k != i]
        literals += [lit for k, lit in enumerate(renamed) if k != j]
        depth = 1 + max(_depth(given), _depth(partner))
        return Clause(*mgu.apply_literals(literals), derivation=Derivation(
            rule=RESOLUTION,
            parents=(given.id, partner.id),
            unifier=mgu,
            renaming=renaming,
            literal_indices=(i, j),
            depth=depth,
        ))

    def resolvents(self, given: Clause, database) -> List[Clause]:
        """All resolvents of ``given`` with the active clauses of ``database``."""
        result = []
        for i, literal in enumerate(given.literals):
            for candidate in database.candidates(literal):
                partner = database.get(candidate.clause_id)
                resolvent = self.resolve(given, partner, i, candidate.literal_index)
                if resolvent is not None:
                    result.append(resolvent)
        return result

    def apply(self, database, clause_ids: List[int]) -> Optional[RuleApplication]:
        """
        Apply binary resolution.

        Args:
            database: Clause database holding the clauses
            clause_ids: ``[given_id]`` to resolve against every active clause,
                or ``[given_id, partner_id]`` for a single pair

        Returns:
            RuleApplication if successful, None otherwise
        """
        if len(clause_ids) == 1:
            resolvents = self.resolvents(database.get(clause_ids[0]), database)
        elif len(clause_ids) == 2:
            given, partner = (database.get(clause_id) for clause_id in clause_ids)
            resolvents = []
            for i, lit1 in enumerate(given.literals):
                for j, lit2 in enumerate(partner.literals):
                    if lit1.complement_key != lit2.key:
                        continue
                    resolvent = self.resolve(given, partner, i, j)
                    if resolvent is not None:
                        resolvents.append(resolvent)
        else:
            return None

        if not resolvents:
            return None

        return RuleApplication(
            rule_name=self.name,
            parents=list(clause_ids),
            generated_clauses=resolvents,
        )


def _depth(clause: Clause) -> int:
    return clause.derivation.depth if clause.derivation is not None else 0
