"""
folreasoner: first-order logic reasoning by resolution refutation.

Formulas are added to a knowledge base, normalized to clauses, and queries
are decided by searching for a refutation of their negation with the given
clause algorithm. It includes:

- First-order terms, formulas and clauses
- Clause normal form conversion with Skolemization
- Unification and inference rules (resolution, factoring, subsumption)
- A given clause loop with resource limits
- Replayable proof traces
- A text notation for formulas

Basic usage:
    >>> from folreasoner import Reasoner
    >>> reasoner = Reasoner()
    >>> _ = reasoner.add_rule("mortality", "∀x (Human(x) → Mortal(x))")
    >>> _ = reasoner.add_fact("socrates", "Human(Socrates)")
    >>> reasoner.entails("Mortal(Socrates)")
    True
    >>> reasoner.get_proof().length
    2
"""

import logging

__version__ = "0.1.0"

# Core logic structures
from folreasoner.core import (
    Variable, Constant, Function, Predicate,
    Term, CompoundTerm, Atom, Literal, Clause,
    Formula, Atomic, Not, And, Or, Implies, Iff, ForAll, Exists,
    conjunction, disjunction, universal_closure,
    Substitution, unify, Normalizer,
    FOLReasonerError, ParseError, MalformedFormula,
    ResourceExhausted, NoProofAvailable, ProofReplayError
)

# Proof structures
from folreasoner.proofs import (
    ClauseDatabase, ProofStep, ProofTrace,
    trace_to_json, save_trace
)

# Saturation loops
from folreasoner.loops import (
    ResolutionEngine, SearchLimits, SearchResult, SearchStatus
)

# File formats
from folreasoner.fileformats import parse, parse_file

# Configuration
from folreasoner.utils.config import get_config

# High-level API
from folreasoner.knowledge import KnowledgeBase
from folreasoner.reasoner import Reasoner, ReasonerOptions, prove

logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    # Version
    "__version__",

    # Core logic
    "Variable", "Constant", "Function", "Predicate",
    "Term", "CompoundTerm", "Atom", "Literal", "Clause",
    "Formula", "Atomic", "Not", "And", "Or", "Implies", "Iff", "ForAll", "Exists",
    "conjunction", "disjunction", "universal_closure",
    "Substitution", "unify", "Normalizer",

    # Errors
    "FOLReasonerError", "ParseError", "MalformedFormula",
    "ResourceExhausted", "NoProofAvailable", "ProofReplayError",

    # Proofs
    "ClauseDatabase", "ProofStep", "ProofTrace",
    "trace_to_json", "save_trace",

    # Loops
    "ResolutionEngine", "SearchLimits", "SearchResult", "SearchStatus",

    # File formats
    "parse", "parse_file",

    # Configuration
    "get_config",

    # High-level API
    "KnowledgeBase", "Reasoner", "ReasonerOptions", "prove"
]
