"""Given clause loop for resolution refutation.

Clauses live in two sets: *unprocessed* clauses wait to be selected, and
*usable* clauses have been selected and are indexed for partner lookup.
Each iteration:

1. checks the resource limits
2. selects a given clause from the unprocessed set
3. discards it if it is a tautology or subsumed by a usable clause
4. removes usable clauses it subsumes (backward subsumption)
5. moves it to the usable set
6. applies the generating rules to it: factoring, binary resolution against
   every complementary usable literal (itself included) and, optionally,
   positive unit hyperresolution
7. files each new clause, after optional unit deletion, unless it is a
   tautology, subsumed, or beyond a depth, size or weight limit

Deriving the empty clause (or, when answer literals are in play, a single
answer literal) refutes the input. An empty unprocessed set means
saturation, unless a limit has dropped clauses along the way, in which
case the search is reported exhausted instead.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union

from folreasoner.core.derivation import FACTORING, HYPERRESOLUTION
from folreasoner.core.exceptions import NoProofAvailable
from folreasoner.core.logic import Clause
from folreasoner.core.unification import VariableRenamer
from folreasoner.proofs.database import ClauseArena
from folreasoner.proofs.state import ProofState
from folreasoner.proofs.trace import ProofTrace
from folreasoner.rules import (
    FactoringRule, HyperresolutionRule, ResolutionRule, SubsumptionRule, UnitDeletionRule,
)
from folreasoner.selectors import ClauseSelector, get_selector
from .base import Loop

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    READY = "ready"
    SEARCHING = "searching"
    REFUTED = "refuted"
    SATURATED = "saturated"
    EXHAUSTED = "exhausted"

    @property
    def is_final(self) -> bool:
        return self in (SearchStatus.REFUTED, SearchStatus.SATURATED, SearchStatus.EXHAUSTED)


@dataclass
class SearchLimits:
    """Resource bounds of one search. ``None`` disables a limit."""
    max_given: Optional[int] = 1000
    max_clauses: Optional[int] = 10000
    max_seconds: Optional[float] = None
    max_depth: Optional[int] = None
    max_clause_size: Optional[int] = 100
    max_weight: Optional[int] = None

    @classmethod
    def from_config(cls, config=None, **overrides) -> 'SearchLimits':
        """Read ``search.*`` keys, then apply keyword overrides."""
        if config is None:
            from folreasoner.utils.config import get_config
            config = get_config()
        values = {}
        for name in cls.__dataclass_fields__:
            values[name] = config.get(f"search.{name}", getattr(cls, name))
        for name, value in overrides.items():
            if name not in cls.__dataclass_fields__:
                raise TypeError(f"Unknown search limit: {name}")
            values[name] = value
        return cls(**values)


@dataclass
class SearchStatistics:
    given: int = 0
    generated: int = 0
    kept: int = 0
    forward_subsumed: int = 0
    back_subsumed: int = 0
    tautologies: int = 0
    factors: int = 0
    hyperresolvents: int = 0
    unit_deletions: int = 0
    discarded: int = 0
    elapsed: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class SearchResult:
    """Outcome of a search; keeps the arena so the proof can be rebuilt."""
    status: SearchStatus
    proof_clause_id: Optional[int] = None
    limit_type: Optional[str] = None
    statistics: SearchStatistics = field(default_factory=SearchStatistics)
    arena: Optional[ClauseArena] = field(default=None, repr=False)

    @property
    def refuted(self) -> bool:
        return self.status is SearchStatus.REFUTED

    @property
    def proof_clause(self) -> Clause:
        if not self.refuted:
            raise NoProofAvailable(f"Search ended with status {self.status.value}")
        return self.arena.get(self.proof_clause_id)

    def proof_trace(self) -> ProofTrace:
        if not self.refuted:
            raise NoProofAvailable(f"Search ended with status {self.status.value}")
        return ProofTrace.from_arena(self.arena, self.proof_clause_id)


class ResolutionEngine(Loop):
    """Given clause search over one clause set.

    An engine runs a single search: ``seed`` it with the input clauses,
    then call ``run`` (or ``step`` repeatedly).
    """

    def __init__(self,
                 limits: Optional[SearchLimits] = None,
                 selector: Union[str, ClauseSelector] = "smallest",
                 factoring: bool = True,
                 backward_subsumption: bool = True,
                 check_occurs: bool = True,
                 pick_given_ratio: int = 4,
                 hyperresolution: bool = False,
                 unit_deletion: bool = False):
        self.limits = limits if limits is not None else SearchLimits()
        if isinstance(selector, str):
            kwargs = {"ratio": pick_given_ratio} if selector.lower() == "ratio" else {}
            selector = get_selector(selector, **kwargs)
        self.selector = selector
        self.backward_subsumption = backward_subsumption
        if not check_occurs:
            logger.warning("Occurs check disabled: unification may produce cyclic bindings "
                           "and the search may report unsound refutations")

        self.state = ProofState()
        self.statistics = SearchStatistics()
        self.status = SearchStatus.READY
        self.proof_clause_id: Optional[int] = None
        self.limit_type: Optional[str] = None

        # One renamer for all rules keeps renamed variables distinct across inferences
        renamer = VariableRenamer()
        self._rules = []
        if factoring:
            self._rules.append(FactoringRule(check_occurs=check_occurs))
        self._rules.append(ResolutionRule(renamer, check_occurs=check_occurs))
        if hyperresolution:
            self._rules.append(HyperresolutionRule(renamer, check_occurs=check_occurs))
        self._unit_deletion = UnitDeletionRule(renamer) if unit_deletion else None
        self._subsumption = SubsumptionRule()
        self._queued = set()
        self._dropped_by: Optional[str] = None
        self._started: Optional[float] = None

    def seed(self, clauses: Iterable[Clause]) -> None:
        """Add input clauses. Clauses are copied into this engine's arena."""
        if self.status is not SearchStatus.READY:
            raise RuntimeError(f"Cannot seed a search in state {self.status.value}")
        for clause in clauses:
            copy = Clause(*clause.literals, derivation=clause.derivation)
            self.state.arena.add(copy)
            if self.is_refutation(copy):
                self._refute(copy)
                return
            if copy not in self._queued:
                self._queued.add(copy)
                self.state.add_unprocessed(copy)

    def is_refutation(self, clause: Clause) -> bool:
        """Empty clause, or a clause consisting of a single answer literal."""
        return self.is_contradiction(clause) or (clause.is_answer and len(clause) == 1)

    def run(self) -> SearchResult:
        if self.status is SearchStatus.READY:
            self.status = SearchStatus.SEARCHING
        while self.status is SearchStatus.SEARCHING:
            self.step()
        self.statistics.elapsed = self._elapsed()
        logger.info("Search %s after %d given clauses (%d generated, %d kept, %.3fs)",
                    self.status.value, self.statistics.given, self.statistics.generated,
                    self.statistics.kept, self.statistics.elapsed)
        return self.result()

    def result(self) -> SearchResult:
        return SearchResult(
            status=self.status,
            proof_clause_id=self.proof_clause_id,
            limit_type=self.limit_type,
            statistics=self.statistics,
            arena=self.state.arena,
        )

    def step(self) -> SearchStatus:
        if self.status is SearchStatus.READY:
            self.status = SearchStatus.SEARCHING
        if self.status is not SearchStatus.SEARCHING:
            return self.status
        if self._started is None:
            self._started = time.monotonic()

        limit = self._exceeded_limit()
        if limit is not None:
            self._exhaust(limit)
            return self.status

        index = self.selector.run(self.state)
        if index is None:
            if self._dropped_by is not None:
                self._exhaust(self._dropped_by)
            else:
                self.status = SearchStatus.SATURATED
            return self.status

        given = self.state.pop_unprocessed(index)
        self._queued.discard(given)
        self.statistics.given += 1
        logger.debug("Given #%d: %s", given.id, given)

        if self.is_tautology(given):
            self.statistics.tautologies += 1
            return self.status
        if self.state.usable.is_subsumed(given):
            self.statistics.forward_subsumed += 1
            return self.status

        if self.backward_subsumption:
            application = self._subsumption.apply(self.state.usable, [given.id])
            if application is not None:
                for clause_id in application.deleted_clause_ids:
                    self.state.usable.remove(clause_id)
                self.statistics.back_subsumed += len(application.deleted_clause_ids)

        self.state.move_to_usable(given)
        new_clauses = []
        for rule in self._rules:
            application = rule.apply(self.state.usable, [given.id])
            if application is None:
                continue
            if rule.name == FACTORING:
                self.statistics.factors += len(application.generated_clauses)
            elif rule.name == HYPERRESOLUTION:
                self.statistics.hyperresolvents += len(application.generated_clauses)
            new_clauses.extend(application.generated_clauses)

        for clause in new_clauses:
            self.statistics.generated += 1
            if self._keep(clause):
                break
        return self.status

    def _keep(self, clause: Clause) -> bool:
        """File a newly inferred clause; returns True if it refutes the input."""
        if self._unit_deletion is not None:
            simplified = self._unit_deletion.simplify(clause, self.state.usable)
            if simplified is not None:
                self.statistics.unit_deletions += len(simplified.derivation.literal_indices)
                clause = simplified
        if self.is_refutation(clause):
            self.state.arena.add(clause)
            self._refute(clause)
            return True
        if self.is_tautology(clause):
            self.statistics.tautologies += 1
            return False
        if self.limits.max_depth is not None and clause.derivation.depth > self.limits.max_depth:
            self._drop(clause, "max_depth")
            return False
        if self.limits.max_clause_size is not None and len(clause) > self.limits.max_clause_size:
            self._drop(clause, "max_clause_size")
            return False
        if self.limits.max_weight is not None and clause.size() > self.limits.max_weight:
            self._drop(clause, "max_weight")
            return False
        if clause in self._queued or self.state.usable.is_subsumed(clause):
            self.statistics.forward_subsumed += 1
            return False
        self._queued.add(clause)
        self.state.add_unprocessed(clause)
        self.statistics.kept += 1
        return False

    def _drop(self, clause: Clause, limit: str) -> None:
        self.statistics.discarded += 1
        if self._dropped_by is None:
            self._dropped_by = limit

    def _refute(self, clause: Clause) -> None:
        self.status = SearchStatus.REFUTED
        self.proof_clause_id = clause.id

    def _exhaust(self, limit: str) -> None:
        self.status = SearchStatus.EXHAUSTED
        self.limit_type = limit

    def _elapsed(self) -> float:
        if self._started is None:
            return 0.0
        return time.monotonic() - self._started

    def _exceeded_limit(self) -> Optional[str]:
        limits = self.limits
        if limits.max_given is not None and self.statistics.given >= limits.max_given:
            return "max_given"
        if limits.max_clauses is not None and self.statistics.kept >= limits.max_clauses:
            return "max_clauses"
        if limits.max_seconds is not None and self._elapsed() >= limits.max_seconds:
            return "max_seconds"
        return None
