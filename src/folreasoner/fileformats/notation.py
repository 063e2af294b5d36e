"""Reader for the textual formula notation.

Unicode and ASCII spellings are both accepted::

    ∀x (Human(x) → Mortal(x))
    forall x. Human(x) -> Mortal(x)

Connectives, tightest first: negation, conjunction, disjunction,
implication (right-associative), equivalence. Like negation, a quantifier
scopes over the unary formula that follows it, so ``∀x P(x) → Q(x)`` leaves
the second ``x`` free. Use parentheses for a wider scope.

A bare identifier in term position starting with a lowercase letter is a
variable, any other bare identifier is a constant. Applied names are
predicates in formula position and functions in term position.
"""

from pathlib import Path
from typing import List, Union

from lark import Lark, Transformer, Token
from lark.exceptions import UnexpectedInput, VisitError

from folreasoner.core.exceptions import ParseError
from folreasoner.core.formula import (
    And, Atomic, Exists, ForAll, Formula, Iff, Implies, Not, Or, render,
)
from folreasoner.core.logic import Constant, Function, Predicate, Variable
from .base import FileFormat

notation_parser = Lark(r"""
    %import common.WS
    %ignore WS

    ?start : iff

    ?iff : implication
         | iff _IFF implication                -> iff
         | iff "iff" implication               -> iff

    ?implication : disjunction
                 | disjunction _IMPLIES implication   -> implies

    ?disjunction : conjunction
                 | disjunction _OR conjunction        -> disjunction
                 | disjunction "or" conjunction       -> disjunction

    ?conjunction : unary
                 | conjunction _AND unary             -> conjunction
                 | conjunction "and" unary            -> conjunction

    ?unary : _NOT unary                               -> negation
           | "not" unary                              -> negation
           | _FORALL variables _SEP? unary            -> forall
           | "forall" variables _SEP? unary           -> forall
           | _EXISTS variables _SEP? unary            -> exists
           | "exists" variables _SEP? unary           -> exists
           | "(" iff ")"
           | atom

    atom : NAME ("(" term ("," term)* ")")?

    ?term : NAME "(" term ("," term)* ")"             -> compound
          | NAME                                      -> bare

    variables : NAME ("," NAME)*

    _IFF : "↔" | "<->" | "<=>"
    _IMPLIES : "→" | "->" | "=>"
    _OR : "∨" | "|" | "\\/"
    _AND : "∧" | "&" | "/\\"
    _NOT : "¬" | "~" | "!"
    _FORALL : "∀"
    _EXISTS : "∃"
    _SEP : "." | ":"

    NAME : /[A-Za-z_][A-Za-z0-9_']*/
""", parser="lalr", start="start", propagate_positions=False)


def is_variable_name(name: str) -> bool:
    return name[0].islower()


class NotationTransformer(Transformer):
    """Turns a notation parse tree into a ``Formula``."""

    def iff(self, children):
        left, right = children
        return Iff(left, right)

    def implies(self, children):
        antecedent, consequent = children
        return Implies(antecedent, consequent)

    def disjunction(self, children):
        left, right = children
        return Or(left, right)

    def conjunction(self, children):
        left, right = children
        return And(left, right)

    def negation(self, children):
        (body,) = children
        return Not(body)

    def forall(self, children):
        variables, body = children
        for variable in reversed(variables):
            body = ForAll(variable, body)
        return body

    def exists(self, children):
        variables, body = children
        for variable in reversed(variables):
            body = Exists(variable, body)
        return body

    def variables(self, children):
        result = []
        for token in children:
            if not is_variable_name(token):
                raise ParseError(token.start_pos,
                                 f"Quantified variable {token} must start with a lowercase letter")
            result.append(Variable(str(token)))
        return result

    def atom(self, children):
        name, *args = children
        return Atomic(Predicate(str(name), len(args))(*args))

    def compound(self, children):
        name, *args = children
        return Function(str(name), len(args))(*args)

    def bare(self, children):
        (name,) = children
        if is_variable_name(name):
            return Variable(str(name))
        return Constant(str(name))


def _error_position(err: UnexpectedInput, text: str) -> int:
    position = getattr(err, 'pos_in_stream', None)
    if position is None or position < 0:
        token = getattr(err, 'token', None)
        if isinstance(token, Token) and token.start_pos is not None:
            return token.start_pos
        return len(text)
    return position


def parse(text: str) -> Formula:
    """Parse one formula.

    Raises ``ParseError`` carrying the character offset of the problem.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {text!r}")
    if not text.strip():
        raise ParseError(0, "Empty formula")
    try:
        tree = notation_parser.parse(text)
    except UnexpectedInput as err:
        message = str(err).strip().splitlines()[0]
        raise ParseError(_error_position(err, text), message) from None
    try:
        return NotationTransformer().transform(tree)
    except VisitError as err:
        if isinstance(err.orig_exc, ParseError):
            raise err.orig_exc from None
        raise


def parse_file(path: Union[str, Path]) -> List[Formula]:
    """Read one formula per line, skipping blank lines and ``#`` comments."""
    formulas = []
    with open(path, "r", encoding="utf-8") as f:
        for number, line in enumerate(f, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            try:
                formulas.append(parse(stripped))
            except ParseError as err:
                raise ParseError(err.position, f"line {number}: {err.message}") from None
    return formulas


class NotationFormat(FileFormat):
    """Handler for the textual formula notation."""

    def parse_file(self, file_path: Path, **kwargs) -> List[Formula]:
        return parse_file(file_path)

    def parse_string(self, content: str, **kwargs) -> List[Formula]:
        return [parse(line.strip()) for line in content.splitlines()
                if line.strip() and not line.strip().startswith("#")]

    def format_formula(self, formula: Formula, **kwargs) -> str:
        return render(formula)

    def write_file(self, formulas: List[Formula], file_path: Path, **kwargs) -> None:
        with open(file_path, "w", encoding="utf-8") as f:
            for formula in formulas:
                f.write(self.format_formula(formula) + "\n")

    @property
    def name(self) -> str:
        return "notation"

    @property
    def extensions(self) -> List[str]:
        return [".fol", ".txt"]
