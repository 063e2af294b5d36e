"""Reasoner facade over the knowledge base and the resolution engine."""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Union

from folreasoner.core.derivation import AXIOM, NEGATED_CONJECTURE
from folreasoner.core.exceptions import MalformedFormula, NoProofAvailable, ResourceExhausted
from folreasoner.core.formula import (
    Atomic, Exists, ForAll, Formula, Iff, Implies, Not, Or,
    free_variables_ordered, universal_closure,
)
from folreasoner.core.logic import ANSWER_PREFIX, Clause, Predicate, Term
from folreasoner.core.normalizer import Normalizer, check_formula
from folreasoner.fileformats.notation import parse
from folreasoner.knowledge import FACT, RULE, KnowledgeBase, KnowledgeEntry
from folreasoner.loops import ResolutionEngine, SearchLimits, SearchResult, SearchStatus
from folreasoner.proofs.trace import ProofTrace

logger = logging.getLogger(__name__)

QUERY_SOURCE = "query"

FormulaLike = Union[Formula, str]


@dataclass
class ReasonerOptions:
    """Search strategy settings, read from the ``engine.*`` configuration keys."""
    selector: str = "smallest"
    pick_given_ratio: int = 4
    factoring: bool = True
    backward_subsumption: bool = True
    occurs_check: bool = True
    hyperresolution: bool = False
    unit_deletion: bool = False

    @classmethod
    def from_config(cls, config=None, **overrides) -> 'ReasonerOptions':
        if config is None:
            from folreasoner.utils.config import get_config
            config = get_config()
        values = {name: config.get(f"engine.{name}", getattr(cls, name))
                  for name in cls.__dataclass_fields__}
        values.update(overrides)
        return cls(**values)


def _as_formula(formula: FormulaLike) -> Formula:
    if isinstance(formula, str):
        return parse(formula)
    return formula


def _strip_universals(formula: Formula) -> Formula:
    while isinstance(formula, ForAll):
        formula = formula.body
    return formula


class Reasoner:
    """First-order reasoner by resolution refutation.

    Example::

        reasoner = Reasoner()
        reasoner.add_axiom("mortality", "∀x (Human(x) → Mortal(x))")
        reasoner.add_fact("socrates", "Human(Socrates)")
        reasoner.entails("Mortal(Socrates)")   # True
        print(reasoner.get_proof().render())

    One instance is not safe for concurrent use.
    """

    def __init__(self,
                 limits: Optional[SearchLimits] = None,
                 options: Optional[ReasonerOptions] = None,
                 config=None):
        self.limits = limits if limits is not None else SearchLimits.from_config(config)
        self.options = options if options is not None else ReasonerOptions.from_config(config)
        self.kb = KnowledgeBase()
        self.last_result: Optional[SearchResult] = None
        self._proof_result: Optional[SearchResult] = None
        self._proof_version: Optional[int] = None

    # Knowledge base

    def add(self, formula: FormulaLike, name: Optional[str] = None, role: str = AXIOM) -> KnowledgeEntry:
        return self.kb.add(_as_formula(formula), name=name, role=role)

    def add_axiom(self, name: str, text: FormulaLike) -> KnowledgeEntry:
        return self.add(text, name=name, role=AXIOM)

    def add_fact(self, name: str, text: FormulaLike) -> KnowledgeEntry:
        """Add a single, possibly negated, atomic statement."""
        formula = _as_formula(text)
        match _strip_universals(formula):
            case Atomic() | Not(Atomic()):
                pass
            case _:
                raise MalformedFormula(f"Fact {name} is not a literal: {formula}", formula)
        return self.add(formula, name=name, role=FACT)

    def add_rule(self, name: str, text: FormulaLike) -> KnowledgeEntry:
        """Add an implication or equivalence, possibly under universal quantifiers."""
        formula = _as_formula(text)
        match _strip_universals(formula):
            case Implies() | Iff():
                pass
            case _:
                raise MalformedFormula(f"Rule {name} is not an implication: {formula}", formula)
        return self.add(formula, name=name, role=RULE)

    @property
    def formulas(self) -> List[Formula]:
        return self.kb.formulas()

    @property
    def clauses(self) -> List[Clause]:
        return self.kb.clauses()

    def reset(self) -> None:
        self.kb.reset()
        self.last_result = None
        self._forget_proof()

    # Queries

    def prove(self, query: FormulaLike, **limits) -> SearchResult:
        """Search for a refutation of ``¬query`` without raising on exhaustion.

        Free variables of the query are read universally. Keyword arguments
        override single search limits for this call.
        """
        query = _as_formula(query)
        negated = Not(universal_closure(query))
        return self._search(self._query_clauses(query, negated), limits)

    def entails(self, query: FormulaLike, **limits) -> bool:
        """Decide whether the knowledge base entails ``query``.

        Raises ``ResourceExhausted`` when a search limit stops the search;
        a ``False`` answer always means the clause set saturated.
        """
        result = self.prove(query, **limits)
        return self._conclude(result)

    def solve(self, query: FormulaLike, **limits) -> Optional[Dict[str, Term]]:
        """Find bindings for the free and leading existential variables of ``query``.

        Returns ``None`` if the clause set saturates without an answer. When
        several answers exist, the first one derived is returned.
        """
        query = _as_formula(query)
        body = query
        answer_variables = list(free_variables_ordered(query))
        while isinstance(body, Exists):
            if body.variable not in answer_variables:
                answer_variables.append(body.variable)
            body = body.body
        if not answer_variables:
            return {} if self.entails(query, **limits) else None

        answer = Atomic(Predicate(ANSWER_PREFIX, len(answer_variables))(*answer_variables))
        clauses = self._query_clauses(query, Or(Not(body), answer))
        result = self._search(clauses, limits)
        if not self._conclude(result):
            return None
        proof_clause = result.proof_clause
        if proof_clause.is_empty:
            # Contradictory knowledge base: every binding is an answer
            return {var.name: var for var in answer_variables}
        bindings = proof_clause.literals[0].atom.args
        return {var.name: term for var, term in zip(answer_variables, bindings)}

    def get_proof(self) -> ProofTrace:
        """Proof of the last successful query on the current knowledge base."""
        if self._proof_result is None or self._proof_version != self.kb.version:
            raise NoProofAvailable()
        return self._proof_result.proof_trace()

    def get_proof_trace(self) -> ProofTrace:
        return self.get_proof()

    def _query_clauses(self, query: Formula, negated: Formula) -> List[Clause]:
        # Queries are normalized against a copy of the signature and never change the knowledge base
        signature = self.kb.signature.copy()
        check_formula(query, signature)
        # Closing over free variables may nest a binder of the same name; the raw query was checked
        normalizer = Normalizer(signature)
        return normalizer.normalize(negated, source=QUERY_SOURCE, role=NEGATED_CONJECTURE,
                                    rule=NEGATED_CONJECTURE, check=False)

    def _search(self, query_clauses: List[Clause], overrides: dict) -> SearchResult:
        limits = replace(self.limits, **overrides) if overrides else self.limits
        engine = ResolutionEngine(
            limits=limits,
            selector=self.options.selector,
            factoring=self.options.factoring,
            backward_subsumption=self.options.backward_subsumption,
            check_occurs=self.options.occurs_check,
            pick_given_ratio=self.options.pick_given_ratio,
            hyperresolution=self.options.hyperresolution,
            unit_deletion=self.options.unit_deletion,
        )
        engine.seed(self.kb.clauses() + query_clauses)
        result = engine.run()
        self.last_result = result
        return result

    def _conclude(self, result: SearchResult) -> bool:
        if result.status is SearchStatus.EXHAUSTED:
            self._forget_proof()
            raise ResourceExhausted(result.limit_type, result.statistics)
        if result.status is SearchStatus.REFUTED:
            self._proof_result = result
            self._proof_version = self.kb.version
            return True
        self._forget_proof()
        return False

    def _forget_proof(self) -> None:
        self._proof_result = None
        self._proof_version = None


def prove(premises: Iterable[FormulaLike], query: FormulaLike, **limits) -> SearchResult:
    """One-shot proof search of ``query`` from ``premises``."""
    reasoner = Reasoner(limits=SearchLimits.from_config(**limits))
    for premise in premises:
        reasoner.add(premise)
    return reasoner.prove(query)
