"""Conversion of formulas to clause normal form.

The pipeline is fixed:

1. eliminate ``↔`` and ``→``
2. push negations inward (negation normal form)
3. standardize bound variables apart
4. Skolemize existential quantifiers
5. drop universal quantifiers
6. distribute ``∨`` over ``∧`` and read off one clause per conjunct

Fresh names (Skolem symbols, renamed variables) come from a ``Signature``
owned by the caller, never from module state.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .derivation import AXIOM, premise
from .exceptions import ArityMismatchError, MalformedFormula, SymbolKindError
from .formula import (
    And, Atomic, Exists, ForAll, Formula, Iff, Implies, Not, Or,
    atoms, universal_closure,
)
from .logic import (
    Atom, Clause, CompoundTerm, Constant, Function, Literal, Term, Variable,
)
from .unification import Substitution

logger = logging.getLogger(__name__)

PREDICATE = "predicate"
FUNCTION = "function"

RESERVED_PREFIX = "$"
SKOLEM_PREFIX = "sk"


class Signature:
    """Symbol table of one reasoner: name -> (kind, arity).

    Also owns the counters for Skolem symbols and standardized variables.
    """

    def __init__(self):
        self.symbols: Dict[str, Tuple[str, int]] = {}
        self.skolems = set()
        self.skolem_counter = 0
        self.variable_counter = 0

    def copy(self) -> 'Signature':
        other = Signature()
        other.symbols = dict(self.symbols)
        other.skolems = set(self.skolems)
        other.skolem_counter = self.skolem_counter
        other.variable_counter = self.variable_counter
        return other

    def commit(self, scratch: 'Signature') -> None:
        """Adopt the state of a scratch copy after a successful normalization."""
        self.symbols = scratch.symbols
        self.skolems = scratch.skolems
        self.skolem_counter = scratch.skolem_counter
        self.variable_counter = scratch.variable_counter

    def declare(self, name: str, kind: str, arity: int, formula=None) -> None:
        known = self.symbols.get(name)
        if known is None:
            self.symbols[name] = (kind, arity)
            return
        known_kind, known_arity = known
        if known_kind != kind:
            raise SymbolKindError(name, known_kind, kind, formula)
        if known_arity != arity:
            raise ArityMismatchError(name, known_arity, arity, formula)

    def is_skolem(self, name: str) -> bool:
        return name in self.skolems

    def fresh_skolem(self, arity: int) -> Function:
        while True:
            self.skolem_counter += 1
            name = f"{SKOLEM_PREFIX}{self.skolem_counter}"
            if name not in self.symbols:
                break
        self.symbols[name] = (FUNCTION, arity)
        self.skolems.add(name)
        return Function(name, arity)

    def fresh_variable(self, hint: str = "x") -> Variable:
        self.variable_counter += 1
        base = hint.rstrip("0123456789_") or "x"
        return Variable(f"{base}{self.variable_counter}")

    def __contains__(self, name):
        return name in self.symbols

    def __len__(self):
        return len(self.symbols)


# Step 1

def eliminate_implications(formula: Formula) -> Formula:
    """Rewrite ``A ↔ B`` to ``(A → B) ∧ (B → A)`` and ``A → B`` to ``¬A ∨ B``."""
    match formula:
        case Atomic():
            return formula
        case Not(body):
            return Not(eliminate_implications(body))
        case And(left, right):
            return And(eliminate_implications(left), eliminate_implications(right))
        case Or(left, right):
            return Or(eliminate_implications(left), eliminate_implications(right))
        case Implies(antecedent, consequent):
            return Or(Not(eliminate_implications(antecedent)), eliminate_implications(consequent))
        case Iff(left, right):
            left, right = eliminate_implications(left), eliminate_implications(right)
            return And(Or(Not(left), right), Or(Not(right), left))
        case ForAll(variable, body):
            return ForAll(variable, eliminate_implications(body))
        case Exists(variable, body):
            return Exists(variable, eliminate_implications(body))
        case _:
            raise TypeError(f"Expected Formula, got {formula!r}")


# Step 2

def to_nnf(formula: Formula) -> Formula:
    """Push negations down to atoms. Expects a formula without ``→``/``↔``."""
    match formula:
        case Atomic():
            return formula
        case Not(Atomic()):
            return formula
        case Not(Not(body)):
            return to_nnf(body)
        case Not(And(left, right)):
            return Or(to_nnf(Not(left)), to_nnf(Not(right)))
        case Not(Or(left, right)):
            return And(to_nnf(Not(left)), to_nnf(Not(right)))
        case Not(ForAll(variable, body)):
            return Exists(variable, to_nnf(Not(body)))
        case Not(Exists(variable, body)):
            return ForAll(variable, to_nnf(Not(body)))
        case Not(Implies() | Iff()) | Implies() | Iff():
            return to_nnf(eliminate_implications(formula))
        case And(left, right):
            return And(to_nnf(left), to_nnf(right))
        case Or(left, right):
            return Or(to_nnf(left), to_nnf(right))
        case ForAll(variable, body):
            return ForAll(variable, to_nnf(body))
        case Exists(variable, body):
            return Exists(variable, to_nnf(body))
        case _:
            raise TypeError(f"Expected Formula, got {formula!r}")


# Step 3

def _rename_term(term: Term, renaming: Dict[Variable, Variable]) -> Term:
    if isinstance(term, Variable):
        return renaming.get(term, term)
    if isinstance(term, CompoundTerm):
        return CompoundTerm(term.functor, [_rename_term(arg, renaming) for arg in term.args])
    return term


def standardize_variables(formula: Formula, signature: Signature,
                          renaming: Optional[Dict[Variable, Variable]] = None) -> Formula:
    """Give every quantifier its own fresh variable.

    An inner binder of an already bound name shadows the outer one.
    """
    renaming = renaming or {}
    match formula:
        case Atomic(atom):
            return Atomic(Atom(atom.predicate, [_rename_term(arg, renaming) for arg in atom.args]))
        case Not(body):
            return Not(standardize_variables(body, signature, renaming))
        case And(left, right):
            return And(standardize_variables(left, signature, renaming),
                       standardize_variables(right, signature, renaming))
        case Or(left, right):
            return Or(standardize_variables(left, signature, renaming),
                      standardize_variables(right, signature, renaming))
        case Implies(antecedent, consequent):
            return Implies(standardize_variables(antecedent, signature, renaming),
                           standardize_variables(consequent, signature, renaming))
        case Iff(left, right):
            return Iff(standardize_variables(left, signature, renaming),
                       standardize_variables(right, signature, renaming))
        case ForAll(variable, body) | Exists(variable, body):
            fresh = signature.fresh_variable(variable.name)
            inner = standardize_variables(body, signature, {**renaming, variable: fresh})
            return type(formula)(fresh, inner)
        case _:
            raise TypeError(f"Expected Formula, got {formula!r}")


# Step 4

def skolemize(formula: Formula, signature: Signature,
              universals: Tuple[Variable, ...] = (),
              subst: Optional[Substitution] = None) -> Formula:
    """Replace existential variables by Skolem terms over the enclosing universals.

    Expects a standardized formula in negation normal form.
    """
    subst = subst or Substitution()
    match formula:
        case Atomic(atom):
            return Atomic(subst.apply_atom(atom))
        case Not(Atomic(atom)):
            return Not(Atomic(subst.apply_atom(atom)))
        case And(left, right):
            return And(skolemize(left, signature, universals, subst),
                       skolemize(right, signature, universals, subst))
        case Or(left, right):
            return Or(skolemize(left, signature, universals, subst),
                      skolemize(right, signature, universals, subst))
        case ForAll(variable, body):
            return ForAll(variable, skolemize(body, signature, universals + (variable,), subst))
        case Exists(variable, body):
            skolem = signature.fresh_skolem(len(universals))
            witness = skolem(*universals)
            logger.debug("Skolemized %s as %r", variable, witness)
            return skolemize(body, signature, universals, subst.bind(variable, witness))
        case _:
            raise TypeError(f"Expected formula in negation normal form, got {formula!r}")


# Steps 5 and 6

def drop_universals(formula: Formula) -> Formula:
    match formula:
        case Atomic() | Not(Atomic()):
            return formula
        case And(left, right):
            return And(drop_universals(left), drop_universals(right))
        case Or(left, right):
            return Or(drop_universals(left), drop_universals(right))
        case ForAll(_, body):
            return drop_universals(body)
        case _:
            raise TypeError(f"Expected Skolemized formula, got {formula!r}")


def distribute(formula: Formula) -> List[List[Literal]]:
    """Distribute ``∨`` over ``∧``; returns the conjuncts as literal lists."""
    match formula:
        case Atomic(atom):
            return [[Literal(atom, True)]]
        case Not(Atomic(atom)):
            return [[Literal(atom, False)]]
        case And(left, right):
            return distribute(left) + distribute(right)
        case Or(left, right):
            return [l + r for l in distribute(left) for r in distribute(right)]
        case _:
            raise TypeError(f"Expected quantifier-free formula in negation normal form, got {formula!r}")


def _check_terms(terms, signature: Signature, formula: Formula, allow_reserved: bool) -> None:
    for term in terms:
        match term:
            case Variable():
                pass
            case Constant(name=name):
                _check_name(name, signature, formula, allow_reserved)
                signature.declare(name, FUNCTION, 0, formula)
            case CompoundTerm(functor=functor, args=args):
                _check_name(functor.name, signature, formula, allow_reserved)
                signature.declare(functor.name, FUNCTION, functor.arity, formula)
                _check_terms(args, signature, formula, allow_reserved)
            case _:
                raise MalformedFormula(f"Expected term, got {term!r}", formula)


def _check_name(name: str, signature: Signature, formula: Formula, allow_reserved: bool) -> None:
    if signature.is_skolem(name):
        raise MalformedFormula(f"Symbol {name} is reserved for Skolem functions", formula)
    if name.startswith(RESERVED_PREFIX) and not allow_reserved:
        raise MalformedFormula(f"Symbol {name} uses the reserved prefix {RESERVED_PREFIX!r}", formula)


def _check_quantifiers(sub, formula: Formula, path: Tuple[Variable, ...], bound_names: set) -> None:
    match sub:
        case Atomic(Atom()):
            pass
        case Not(body):
            _check_quantifiers(body, formula, path, bound_names)
        case And(left, right) | Or(left, right) | Iff(left, right) | Implies(left, right):
            _check_quantifiers(left, formula, path, bound_names)
            _check_quantifiers(right, formula, path, bound_names)
        case ForAll(variable, body) | Exists(variable, body):
            if not isinstance(variable, Variable):
                raise MalformedFormula(f"Quantifier over non-variable {variable!r}", formula)
            if variable in path:
                raise MalformedFormula(f"Variable {variable} is bound twice on one path", formula)
            bound_names.add(variable.name)
            _check_quantifiers(body, formula, path + (variable,), bound_names)
        case _:
            raise MalformedFormula(f"Expected formula, got {sub!r}", formula)


def check_formula(formula: Formula, signature: Signature, allow_reserved: bool = False) -> None:
    """Validate quantifiers and record symbol arities in ``signature``.

    Raises ``MalformedFormula`` on inconsistent arities or kinds, on
    quantification over something that is not a variable, and on use of
    reserved names.
    """
    bound_names = set()
    _check_quantifiers(formula, formula, (), bound_names)
    for atom in atoms(formula):
        name = atom.predicate.name
        if name.startswith(RESERVED_PREFIX) and allow_reserved:
            _check_terms(atom.args, signature, formula, allow_reserved)
            continue
        _check_name(name, signature, formula, allow_reserved)
        signature.declare(name, PREDICATE, atom.predicate.arity, formula)
        _check_terms(atom.args, signature, formula, allow_reserved)
    clashes = {name for name in bound_names
               if signature.symbols.get(name, (None,))[0] == FUNCTION}
    if clashes:
        raise MalformedFormula(
            f"Quantified variable name(s) {', '.join(sorted(clashes))} also used as constant or function",
            formula)


class Normalizer:
    """Turns formulas into clauses against a shared signature."""

    def __init__(self, signature: Optional[Signature] = None):
        self.signature = signature if signature is not None else Signature()

    def normalize(self, formula: Formula,
                  source: Optional[str] = None,
                  role: str = AXIOM,
                  rule: str = AXIOM,
                  allow_reserved: bool = False,
                  check: bool = True) -> List[Clause]:
        """Normalize ``formula`` into clauses.

        Free variables are read as universally quantified. Nothing is
        recorded in the signature unless normalization succeeds. With
        ``check=False`` the caller has already validated the formula (or the
        formula it was built from) against this signature.
        """
        if not isinstance(formula, Formula):
            raise MalformedFormula(f"Expected Formula, got {formula!r}")
        scratch = self.signature.copy()
        if check:
            check_formula(formula, scratch, allow_reserved)

        closed = universal_closure(formula)
        nnf = to_nnf(eliminate_implications(closed))
        standardized = standardize_variables(nnf, scratch)
        skolemized = skolemize(standardized, scratch)
        matrix = drop_universals(skolemized)

        clauses = []
        seen = set()
        for literals in distribute(matrix):
            clause = Clause(*literals, derivation=premise(source, role, rule))
            if clause not in seen:
                seen.add(clause)
                clauses.append(clause)

        self.signature.commit(scratch)
        logger.debug("Normalized %s into %d clause(s)", formula, len(clauses))
        return clauses


def clause_formula(clause: Clause) -> Formula:
    """Universally closed disjunction equivalent to ``clause``."""
    if clause.is_empty:
        raise ValueError("The empty clause has no formula counterpart")
    parts = [Atomic(lit.atom) if lit.polarity else Not(Atomic(lit.atom)) for lit in clause.literals]
    body = parts[0]
    for part in parts[1:]:
        body = Or(body, part)
    return universal_closure(body)
