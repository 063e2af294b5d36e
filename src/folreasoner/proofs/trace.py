"""Proof traces reconstructed from the clause arena."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import networkx as nx

from folreasoner.core.derivation import FACTORING, HYPERRESOLUTION, RESOLUTION, UNIT_DELETION
from folreasoner.core.exceptions import ProofReplayError
from folreasoner.core.logic import Clause
from folreasoner.core.unification import Substitution
from .database import ClauseArena


@dataclass
class ProofStep:
    """One clause of a proof.

    ``parents`` are indices of earlier steps of the same trace,
    ``parent_ids`` the corresponding arena ids.
    """
    index: int
    clause: Clause
    clause_id: int
    parent_ids: Tuple[int, ...]
    parents: Tuple[int, ...]
    rule: str
    unifier: Optional[Substitution] = None
    source: Optional[str] = None

    @property
    def is_premise(self) -> bool:
        return not self.parents


class ProofTrace:
    """Ordered derivation of a final clause.

    Steps come in arena order, so every parent precedes its children.
    """

    def __init__(self, steps: List[ProofStep]):
        self.steps = list(steps)

    @classmethod
    def from_arena(cls, arena: ClauseArena, clause_id: int) -> 'ProofTrace':
        ids = arena.ancestors(clause_id)
        position = {cid: index for index, cid in enumerate(ids)}
        steps = []
        for index, cid in enumerate(ids):
            clause = arena.get(cid)
            derivation = clause.derivation
            parent_ids = tuple(derivation.parents) if derivation is not None else ()
            steps.append(ProofStep(
                index=index,
                clause=clause,
                clause_id=cid,
                parent_ids=parent_ids,
                parents=tuple(position[pid] for pid in parent_ids),
                rule=derivation.rule if derivation is not None else "input",
                unifier=derivation.unifier if derivation is not None else None,
                source=derivation.source if derivation is not None else None,
            ))
        return cls(steps)

    @property
    def conclusion(self) -> Clause:
        return self.steps[-1].clause

    @property
    def length(self) -> int:
        """Number of inference steps (premises excluded)."""
        return sum(1 for step in self.steps if not step.is_premise)

    @property
    def premises(self) -> List[ProofStep]:
        return [step for step in self.steps if step.is_premise]

    def __len__(self):
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __getitem__(self, index):
        return self.steps[index]

    def render(self) -> str:
        lines = []
        for step in self.steps:
            if step.is_premise:
                origin = step.rule if step.source is None else f"{step.rule} {step.source}"
            else:
                origin = f"{step.rule} {', '.join(map(str, step.parents))}"
                if step.unifier:
                    origin += f" {step.unifier}"
            lines.append(f"{step.index}. {step.clause!r}    [{origin}]")
        return "\n".join(lines)

    def __str__(self):
        return self.render()

    def to_graph(self) -> nx.DiGraph:
        """Derivation DAG with edges from parent step to child step."""
        graph = nx.DiGraph()
        for step in self.steps:
            graph.add_node(step.index, clause=repr(step.clause), rule=step.rule,
                           source=step.source, clause_id=step.clause_id)
            for parent in step.parents:
                graph.add_edge(parent, step.index)
        return graph

    def replay(self) -> bool:
        """Re-derive every inference step from its parents.

        Checks that the recorded unifier unifies the resolved literals, after
        the recorded renamings, and that applying it yields exactly the
        recorded clause. Raises ``ProofReplayError`` on the first step that
        does not check out.
        """
        for step in self.steps:
            if step.is_premise:
                continue
            derivation = step.clause.derivation
            parents = [self.steps[index].clause for index in step.parents]
            unifier = derivation.unifier or Substitution()
            if derivation.rule == RESOLUTION:
                expected = self._replay_resolution(step, parents, derivation, unifier)
            elif derivation.rule == FACTORING:
                expected = self._replay_factoring(step, parents, derivation, unifier)
            elif derivation.rule in (HYPERRESOLUTION, UNIT_DELETION):
                expected = self._replay_unit_resolution(step, parents, derivation, unifier)
            else:
                raise ProofReplayError(step.index, f"unknown rule {derivation.rule}")
            if expected != step.clause:
                raise ProofReplayError(step.index, f"re-derived {expected!r}, recorded {step.clause!r}")
        return True

    @staticmethod
    def _replay_resolution(step, parents, derivation, unifier) -> Clause:
        if len(parents) != 2:
            raise ProofReplayError(step.index, "resolution needs two parents")
        given, partner = parents
        i, j = derivation.literal_indices
        renaming = derivation.renaming or Substitution()
        renamed = renaming.apply_literals(partner.literals)
        left, right = given.literals[i], renamed[j]
        if left.polarity == right.polarity:
            raise ProofReplayError(step.index, "resolved literals have the same polarity")
        if unifier.apply_atom(left.atom) != unifier.apply_atom(right.atom):
            raise ProofReplayError(step.index, f"{unifier} does not unify {left!r} and {right!r}")
        literals = [lit for k, lit in enumerate(given.literals) if k != i]
        literals += [lit for k, lit in enumerate(renamed) if k != j]
        return Clause(*unifier.apply_literals(literals))

    @staticmethod
    def _replay_factoring(step, parents, derivation, unifier) -> Clause:
        if len(parents) != 1:
            raise ProofReplayError(step.index, "factoring needs one parent")
        (parent,) = parents
        i, j = derivation.literal_indices
        left, right = parent.literals[i], parent.literals[j]
        if left.polarity != right.polarity or unifier.apply_atom(left.atom) != unifier.apply_atom(right.atom):
            raise ProofReplayError(step.index, f"{unifier} does not merge {left!r} and {right!r}")
        return Clause(*unifier.apply_literals(lit for k, lit in enumerate(parent.literals) if k != j))

    @staticmethod
    def _replay_unit_resolution(step, parents, derivation, unifier) -> Clause:
        clause, units = parents[0], parents[1:]
        indices = derivation.literal_indices
        if not units or len(units) != len(indices) or len(units) != len(derivation.renamings):
            raise ProofReplayError(step.index, f"{derivation.rule} needs one unit per removed literal")
        for i, unit, renaming in zip(indices, units, derivation.renamings):
            if len(unit) != 1:
                raise ProofReplayError(step.index, f"{unit!r} is not a unit clause")
            left, right = clause.literals[i], renaming.apply_literal(unit.literals[0])
            if left.polarity == right.polarity or unifier.apply_atom(left.atom) != unifier.apply_atom(right.atom):
                raise ProofReplayError(step.index, f"{unifier} does not resolve {left!r} with {right!r}")
        return Clause(*unifier.apply_literals(lit for k, lit in enumerate(clause.literals) if k not in indices))
