"""Core logic data structures and algorithms."""

from .logic import (
    Variable, Constant, Function, Predicate,
    Term, CompoundTerm, Atom, Literal, Clause
)
from .formula import (
    Formula, Atomic, Not, And, Or, Implies, Iff, ForAll, Exists,
    conjunction, disjunction, free_variables, universal_closure, render
)
from .derivation import Derivation
from .exceptions import (
    FOLReasonerError, ParseError, MalformedFormula,
    ResourceExhausted, NoProofAvailable, ProofReplayError
)
from .normalizer import Normalizer, Signature
from .unification import (
    Substitution, VariableRenamer, unify, unify_terms, unify_literals,
    occurs_check
)

__all__ = [
    # Logic
    'Variable', 'Constant', 'Function', 'Predicate',
    'Term', 'CompoundTerm', 'Atom', 'Literal', 'Clause',
    # Formulas
    'Formula', 'Atomic', 'Not', 'And', 'Or', 'Implies', 'Iff', 'ForAll', 'Exists',
    'conjunction', 'disjunction', 'free_variables', 'universal_closure', 'render',
    'Derivation',
    # Errors
    'FOLReasonerError', 'ParseError', 'MalformedFormula',
    'ResourceExhausted', 'NoProofAvailable', 'ProofReplayError',
    # Normalization
    'Normalizer', 'Signature',
    # Unification
    'Substitution', 'VariableRenamer', 'unify', 'unify_terms', 'unify_literals',
    'occurs_check'
]
