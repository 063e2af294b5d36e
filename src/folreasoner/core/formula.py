"""First-order formulas.

A formula is one of the frozen dataclasses below. Every transformation
dispatches over this closed set with ``match`` and rejects anything else.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Iterator, Set, Union

from .logic import Atom, Variable


class Formula:
    def __invert__(self) -> 'Formula':
        return Not(self)

    def __and__(self, other: 'Formula') -> 'Formula':
        return And(self, other)

    def __or__(self, other: 'Formula') -> 'Formula':
        return Or(self, other)

    def __str__(self):
        return render(self)


@dataclass(frozen=True, eq=True, repr=False)
class Atomic(Formula):
    atom: Atom

    def __repr__(self):
        return f"Atomic({self.atom!r})"


@dataclass(frozen=True, eq=True, repr=False)
class Not(Formula):
    body: Formula

    def __repr__(self):
        return f"Not({self.body!r})"


@dataclass(frozen=True, eq=True, repr=False)
class And(Formula):
    left: Formula
    right: Formula

    def __repr__(self):
        return f"And({self.left!r}, {self.right!r})"


@dataclass(frozen=True, eq=True, repr=False)
class Or(Formula):
    left: Formula
    right: Formula

    def __repr__(self):
        return f"Or({self.left!r}, {self.right!r})"


@dataclass(frozen=True, eq=True, repr=False)
class Implies(Formula):
    antecedent: Formula
    consequent: Formula

    def __repr__(self):
        return f"Implies({self.antecedent!r}, {self.consequent!r})"


@dataclass(frozen=True, eq=True, repr=False)
class Iff(Formula):
    left: Formula
    right: Formula

    def __repr__(self):
        return f"Iff({self.left!r}, {self.right!r})"


@dataclass(frozen=True, eq=True, repr=False)
class ForAll(Formula):
    variable: Variable
    body: Formula

    def __repr__(self):
        return f"ForAll({self.variable!r}, {self.body!r})"


@dataclass(frozen=True, eq=True, repr=False)
class Exists(Formula):
    variable: Variable
    body: Formula

    def __repr__(self):
        return f"Exists({self.variable!r}, {self.body!r})"


Quantifier = Union[ForAll, Exists]


def conjunction(*formulas: Formula) -> Formula:
    if not formulas:
        raise ValueError("conjunction() needs at least one formula")
    return reduce(And, formulas)


def disjunction(*formulas: Formula) -> Formula:
    if not formulas:
        raise ValueError("disjunction() needs at least one formula")
    return reduce(Or, formulas)


def subformulas(formula: Formula) -> Iterator[Formula]:
    """Pre-order walk over a formula tree."""
    stack = [formula]
    while stack:
        current = stack.pop()
        yield current
        match current:
            case Atomic():
                pass
            case Not(body) | ForAll(_, body) | Exists(_, body):
                stack.append(body)
            case And(left, right) | Or(left, right) | Iff(left, right):
                stack.extend((right, left))
            case Implies(antecedent, consequent):
                stack.extend((consequent, antecedent))
            case _:
                raise TypeError(f"Expected Formula, got {current!r}")


def atoms(formula: Formula) -> Iterator[Atom]:
    for sub in subformulas(formula):
        if isinstance(sub, Atomic):
            yield sub.atom


def free_variables(formula: Formula) -> Set[Variable]:
    match formula:
        case Atomic(atom):
            return atom.variables()
        case Not(body):
            return free_variables(body)
        case And(left, right) | Or(left, right) | Iff(left, right):
            return free_variables(left) | free_variables(right)
        case Implies(antecedent, consequent):
            return free_variables(antecedent) | free_variables(consequent)
        case ForAll(variable, body) | Exists(variable, body):
            return free_variables(body) - {variable}
        case _:
            raise TypeError(f"Expected Formula, got {formula!r}")


def free_variables_ordered(formula: Formula) -> list:
    """Free variables in order of first occurrence."""
    free = free_variables(formula)
    ordered = []
    for atom in atoms(formula):
        for var in _term_variables(atom.args):
            if var in free and var not in ordered:
                ordered.append(var)
    return ordered


def _term_variables(terms) -> Iterator[Variable]:
    for term in terms:
        if isinstance(term, Variable):
            yield term
        else:
            yield from _term_variables(term.args)


def universal_closure(formula: Formula) -> Formula:
    for var in reversed(free_variables_ordered(formula)):
        formula = ForAll(var, formula)
    return formula


def is_closed(formula: Formula) -> bool:
    return not free_variables(formula)


_PRECEDENCE = {Iff: 1, Implies: 2, Or: 3, And: 4}


def render(formula: Formula) -> str:
    """Render a formula in Unicode notation with minimal parentheses."""
    return _render(formula, 0)


def _render(formula: Formula, outer: int) -> str:
    match formula:
        case Atomic(atom):
            return repr(atom)
        case Not(body):
            return f"¬{_render(body, 5)}"
        case ForAll(variable, body):
            return f"∀{variable.name} {_render(body, 5)}"
        case Exists(variable, body):
            return f"∃{variable.name} {_render(body, 5)}"
        case And(left, right):
            text = f"{_render(left, 4)} ∧ {_render(right, 4)}"
        case Or(left, right):
            text = f"{_render(left, 3)} ∨ {_render(right, 3)}"
        case Implies(antecedent, consequent):
            text = f"{_render(antecedent, 3)} → {_render(consequent, 2)}"
        case Iff(left, right):
            text = f"{_render(left, 2)} ↔ {_render(right, 2)}"
        case _:
            raise TypeError(f"Expected Formula, got {formula!r}")
    if _PRECEDENCE[type(formula)] <= outer:
        return f"({text})"
    return text

