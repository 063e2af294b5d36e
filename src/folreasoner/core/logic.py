"""Terms, atoms, literals and clauses."""

from typing import Iterable, Optional, Set, Tuple


class _Symbol:
    def __init__(self, name: str, arity: int):
        if not isinstance(name, str) or not name:
            raise TypeError(f"Expected non-empty symbol name, got {name!r}")
        if not isinstance(arity, int) or arity < 0:
            raise TypeError(f"Expected non-negative arity, got {arity!r}")
        self.name = name
        self.arity = arity

    def __eq__(self, other):
        return type(self) is type(other) and \
            self.name == other.name and \
            self.arity == other.arity

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash((type(self).__name__, self.name, self.arity))
        return self._hash

    def __repr__(self):
        return f"{self.name}/{self.arity}"

    def _check_args(self, args):
        if len(args) != self.arity:
            raise TypeError(f"{self!r} expects {self.arity} arguments, got {len(args)}")
        for arg in args:
            if not isinstance(arg, Term):
                raise TypeError(f"Expected Term, got {arg!r}")


class Function(_Symbol):
    """Function symbol. Calling it builds a term."""

    def __call__(self, *args) -> 'Term':
        self._check_args(args)
        if self.arity == 0:
            return Constant(self.name)
        return CompoundTerm(self, args)


class Predicate(_Symbol):
    """Predicate symbol. Calling it builds an atom."""

    def __call__(self, *args) -> 'Atom':
        self._check_args(args)
        return Atom(self, args)


class Term:
    """Base class of the term variants."""

    args: Tuple['Term', ...] = ()

    def variables(self) -> Set['Variable']:
        raise NotImplementedError

    def function_symbols(self) -> Set[Function]:
        raise NotImplementedError

    def depth(self) -> int:
        if self.args:
            return 1 + max(arg.depth() for arg in self.args)
        return 0

    def size(self) -> int:
        return 1 + sum(arg.size() for arg in self.args)

    def is_ground(self) -> bool:
        return not self.variables()


class Variable(Term):
    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise TypeError(f"Expected non-empty variable name, got {name!r}")
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Variable) and self.name == other.name

    def __hash__(self):
        return hash(('Variable', self.name))

    def __repr__(self):
        return self.name

    def variables(self):
        return {self}

    def function_symbols(self):
        return set()


class Constant(Term):
    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise TypeError(f"Expected non-empty constant name, got {name!r}")
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Constant) and self.name == other.name

    def __hash__(self):
        return hash(('Constant', self.name))

    def __repr__(self):
        return self.name

    @property
    def symbol(self) -> Function:
        return Function(self.name, 0)

    def variables(self):
        return set()

    def function_symbols(self):
        return {self.symbol}


class CompoundTerm(Term):
    def __init__(self, functor: Function, args: Iterable[Term]):
        args = tuple(args)
        if not isinstance(functor, Function):
            raise TypeError(f"Expected Function, got {functor!r}")
        if not args:
            raise TypeError("Compound terms need at least one argument, use Constant instead")
        functor._check_args(args)
        self.functor = functor
        self.args = args

    def __eq__(self, other):
        if not isinstance(other, CompoundTerm):
            return False
        return self.functor == other.functor and self.args == other.args

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash((self.functor, self.args))
        return self._hash

    def __repr__(self):
        return f"{self.functor.name}({', '.join(map(repr, self.args))})"

    def variables(self):
        variables = set()
        for arg in self.args:
            variables |= arg.variables()
        return variables

    def function_symbols(self):
        symbols = {self.functor}
        for arg in self.args:
            symbols |= arg.function_symbols()
        return symbols


class Atom:
    def __init__(self, predicate: Predicate, args: Iterable[Term] = ()):
        args = tuple(args)
        if not isinstance(predicate, Predicate):
            raise TypeError(f"Expected Predicate, got {predicate!r}")
        predicate._check_args(args)
        self.predicate = predicate
        self.args = args

    def __eq__(self, other):
        if not isinstance(other, Atom):
            return False
        return self.predicate == other.predicate and self.args == other.args

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash((self.predicate, self.args))
        return self._hash

    def __repr__(self):
        if not self.args:
            return self.predicate.name
        return f"{self.predicate.name}({', '.join(map(repr, self.args))})"

    @property
    def key(self) -> Tuple[str, int]:
        return self.predicate.name, self.predicate.arity

    def variables(self) -> Set[Variable]:
        variables = set()
        for arg in self.args:
            variables |= arg.variables()
        return variables

    def function_symbols(self) -> Set[Function]:
        symbols = set()
        for arg in self.args:
            symbols |= arg.function_symbols()
        return symbols

    def depth(self) -> int:
        return max((arg.depth() for arg in self.args), default=0)

    def size(self) -> int:
        return 1 + sum(arg.size() for arg in self.args)


class Literal:
    @staticmethod
    def check(atom, polarity):
        if not isinstance(atom, Atom):
            raise TypeError(f"Expected Atom, got {atom!r}")
        if not isinstance(polarity, bool):
            raise TypeError(f"Expected bool, got {polarity!r}")

    def __init__(self, atom: Atom, polarity: bool = True):
        Literal.check(atom, polarity)
        self.atom = atom
        self.polarity = polarity

    def __repr__(self):
        return f"{'' if self.polarity else '¬'}{self.atom}"

    def __eq__(self, other):
        if not isinstance(other, Literal):
            return False
        return self.atom == other.atom and self.polarity == other.polarity

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash((self.atom, self.polarity))
        return self._hash

    @property
    def predicate(self) -> Predicate:
        return self.atom.predicate

    @property
    def key(self) -> Tuple[str, int, bool]:
        """Index key: predicate name, arity and polarity."""
        return self.atom.predicate.name, self.atom.predicate.arity, self.polarity

    @property
    def complement_key(self) -> Tuple[str, int, bool]:
        return self.atom.predicate.name, self.atom.predicate.arity, not self.polarity

    def negate(self) -> 'Literal':
        return Literal(self.atom, not self.polarity)

    def is_complement_of(self, other: 'Literal') -> bool:
        return self.polarity != other.polarity and self.atom == other.atom

    def variables(self) -> Set[Variable]:
        return self.atom.variables()

    def size(self) -> int:
        return self.atom.size()


ANSWER_PREFIX = '$answer'


def is_answer_literal(literal: Literal) -> bool:
    return literal.atom.predicate.name.startswith(ANSWER_PREFIX)


class Clause:
    """A disjunction of literals.

    Duplicate literals are dropped, the remaining ones keep their order so
    that literal indices recorded in a derivation stay meaningful. Equality
    ignores order, arena id and provenance.

    ``id`` is assigned once by the clause arena; ``derivation`` records how
    the clause was obtained.
    """

    @staticmethod
    def check(literals):
        for literal in literals:
            if not isinstance(literal, Literal):
                raise TypeError(f"Expected Literal, got {literal!r}")

    def __init__(self, *literals: Literal, derivation=None):
        Clause.check(literals)
        self.literals = tuple(dict.fromkeys(literals))
        self.derivation = derivation
        self.id: Optional[int] = None

    def __repr__(self):
        if not self.literals:
            return "□"
        return ' ∨ '.join(map(repr, self.literals))

    def __eq__(self, other):
        if not isinstance(other, Clause):
            return False
        return frozenset(self.literals) == frozenset(other.literals)

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash(frozenset(self.literals))
        return self._hash

    def __len__(self):
        return len(self.literals)

    def __iter__(self):
        return iter(self.literals)

    @property
    def is_empty(self) -> bool:
        return not self.literals

    @property
    def is_answer(self) -> bool:
        """True for a non-empty clause made only of answer literals."""
        return bool(self.literals) and all(is_answer_literal(lit) for lit in self.literals)

    def is_tautology(self) -> bool:
        seen = set(self.literals)
        return any(lit.negate() in seen for lit in self.literals)

    def variables(self) -> Set[Variable]:
        variables = set()
        for literal in self.literals:
            variables |= literal.variables()
        return variables

    def predicate_symbols(self) -> Set[Predicate]:
        return {literal.atom.predicate for literal in self.literals}

    def function_symbols(self) -> Set[Function]:
        functions = set()
        for literal in self.literals:
            functions |= literal.atom.function_symbols()
        return functions

    def depth(self) -> int:
        return max((literal.atom.depth() for literal in self.literals), default=0)

    def size(self) -> int:
        """Number of symbol occurrences."""
        return sum(literal.size() for literal in self.literals)

    def weight(self) -> Tuple[int, int]:
        return len(self.literals), self.size()
