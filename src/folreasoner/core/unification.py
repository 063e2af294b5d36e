"""Unification algorithm for first-order logic terms."""

from typing import Dict, Iterable, Optional, Tuple

from .logic import Atom, Clause, CompoundTerm, Literal, Term, Variable


class Substitution:
    """Represents a substitution mapping variables to terms.

    Application is a single simultaneous pass. Substitutions produced by
    ``unify`` with the occurs check enabled are idempotent, so applying
    them twice gives the same result as applying them once.
    """

    def __init__(self, mapping: Optional[Dict[Variable, Term]] = None):
        self.mapping = {var: term for var, term in (mapping or {}).items() if var != term}

    def apply(self, term: Term) -> Term:
        """Apply substitution to a term."""
        if not self.mapping:
            return term
        if isinstance(term, Variable):
            return self.mapping.get(term, term)
        if isinstance(term, CompoundTerm):
            return CompoundTerm(term.functor, [self.apply(arg) for arg in term.args])
        return term

    def apply_atom(self, atom: Atom) -> Atom:
        if not self.mapping:
            return atom
        return Atom(atom.predicate, [self.apply(arg) for arg in atom.args])

    def apply_literal(self, literal: Literal) -> Literal:
        if not self.mapping:
            return literal
        return Literal(self.apply_atom(literal.atom), literal.polarity)

    def apply_literals(self, literals: Iterable[Literal]) -> Tuple[Literal, ...]:
        return tuple(self.apply_literal(literal) for literal in literals)

    def apply_clause(self, clause: Clause) -> Clause:
        return Clause(*self.apply_literals(clause.literals))

    def bind(self, var: Variable, term: Term) -> 'Substitution':
        """Extend with ``var -> term``, keeping existing bindings fully applied."""
        single = Substitution({var: term})
        new_mapping = {v: single.apply(t) for v, t in self.mapping.items()}
        new_mapping[var] = term
        return Substitution(new_mapping)

    def compose(self, other: 'Substitution') -> 'Substitution':
        """Compose this substitution with another (apply self first, then other)."""
        new_mapping = {var: other.apply(term) for var, term in self.mapping.items()}
        for var, term in other.mapping.items():
            if var not in new_mapping:
                new_mapping[var] = term
        return Substitution(new_mapping)

    def is_renaming(self) -> bool:
        values = list(self.mapping.values())
        return all(isinstance(t, Variable) for t in values) and len(set(values)) == len(values)

    def __contains__(self, var):
        return var in self.mapping

    def __getitem__(self, var):
        return self.mapping[var]

    def __len__(self):
        return len(self.mapping)

    def __bool__(self):
        return bool(self.mapping)

    def __iter__(self):
        return iter(self.mapping)

    def items(self):
        return self.mapping.items()

    def __eq__(self, other):
        if not isinstance(other, Substitution):
            return False
        return self.mapping == other.mapping

    def __hash__(self):
        return hash(frozenset(self.mapping.items()))

    def __repr__(self):
        return f"Substitution({self})"

    def __str__(self):
        if not self.mapping:
            return "{}"
        items = [f"{var} ↦ {term!r}" for var, term in self.mapping.items()]
        return "{" + ", ".join(items) + "}"


def occurs_check(var: Variable, term: Term) -> bool:
    """Check if variable occurs in term (prevents infinite structures)."""
    if var == term:
        return True
    if isinstance(term, CompoundTerm):
        return any(occurs_check(var, arg) for arg in term.args)
    return False


def unify_terms(term1: Term, term2: Term, check_occurs: bool = True) -> Optional[Substitution]:
    """Unify two terms, returning the most general unifier if it exists."""
    return unify(term1, term2, Substitution(), check_occurs=check_occurs)


def unify(term1: Term, term2: Term,
          subst: Optional[Substitution] = None,
          check_occurs: bool = True) -> Optional[Substitution]:
    """Unify two terms given an existing substitution.

    Returns ``None`` when the terms do not unify. Passing
    ``check_occurs=False`` skips the occurs check: faster, but unsound, since
    ``x`` then unifies with ``f(x)``.
    """
    if subst is None:
        subst = Substitution()

    # Apply current substitution
    term1 = subst.apply(term1)
    term2 = subst.apply(term2)

    if term1 == term2:
        return subst

    if isinstance(term1, Variable):
        if check_occurs and occurs_check(term1, term2):
            return None
        return subst.bind(term1, term2)

    if isinstance(term2, Variable):
        if check_occurs and occurs_check(term2, term1):
            return None
        return subst.bind(term2, term1)

    if isinstance(term1, CompoundTerm) and isinstance(term2, CompoundTerm):
        if term1.functor != term2.functor:
            return None
        return unify_sequences(term1.args, term2.args, subst, check_occurs)

    # Distinct constants, or a constant against a compound term
    return None


def unify_sequences(args1, args2, subst: Substitution,
                    check_occurs: bool = True) -> Optional[Substitution]:
    if len(args1) != len(args2):
        return None
    for arg1, arg2 in zip(args1, args2):
        subst = unify(arg1, arg2, subst, check_occurs)
        if subst is None:
            return None
    return subst


def unify_atoms(atom1: Atom, atom2: Atom,
                subst: Optional[Substitution] = None,
                check_occurs: bool = True) -> Optional[Substitution]:
    if atom1.predicate != atom2.predicate:
        return None
    return unify_sequences(atom1.args, atom2.args, subst or Substitution(), check_occurs)


def unify_literals(lit1: Literal, lit2: Literal,
                   complementary: bool = True,
                   subst: Optional[Substitution] = None,
                   check_occurs: bool = True) -> Optional[Substitution]:
    """Unify the atoms of two literals.

    With ``complementary=True`` (resolution) the polarities must differ,
    otherwise (factoring) they must agree.
    """
    if complementary == (lit1.polarity == lit2.polarity):
        return None
    return unify_atoms(lit1.atom, lit2.atom, subst, check_occurs)


def match_terms(pattern: Term, target: Term,
                subst: Optional[Substitution] = None) -> Optional[Substitution]:
    """One-way matching: bind only variables of ``pattern``.

    Variables of ``target`` are treated as constants, so the result
    satisfies ``subst.apply(pattern) == target``.
    """
    if subst is None:
        subst = Substitution()
    if isinstance(pattern, Variable):
        if pattern in subst:
            return subst if subst[pattern] == target else None
        # Identity bindings must be kept here, they pin a pattern variable
        result = Substitution()
        result.mapping = {**subst.mapping, pattern: target}
        return result
    if isinstance(pattern, CompoundTerm):
        if not isinstance(target, CompoundTerm) or pattern.functor != target.functor:
            return None
        for p_arg, t_arg in zip(pattern.args, target.args):
            subst = match_terms(p_arg, t_arg, subst)
            if subst is None:
                return None
        return subst
    return subst if pattern == target else None


def match_literals(pattern: Literal, target: Literal,
                   subst: Optional[Substitution] = None) -> Optional[Substitution]:
    if pattern.polarity != target.polarity or pattern.atom.predicate != target.atom.predicate:
        return None
    if subst is None:
        subst = Substitution()
    for p_arg, t_arg in zip(pattern.atom.args, target.atom.args):
        subst = match_terms(p_arg, t_arg, subst)
        if subst is None:
            return None
    return subst


class VariableRenamer:
    """Hands out fresh variables for standardizing clauses apart.

    The counter belongs to the renamer instance, so two engines never share
    it.
    """

    def __init__(self, prefix: str = "_"):
        self.prefix = prefix
        self.counter = 0

    def fresh(self, hint: str = "v") -> Variable:
        self.counter += 1
        return Variable(f"{hint.rstrip('0123456789_') or 'v'}{self.prefix}{self.counter}")

    def renaming_for(self, variables: Iterable[Variable]) -> Substitution:
        ordered = sorted(variables, key=lambda v: v.name)
        return Substitution({var: self.fresh(var.name) for var in ordered})

    def rename_clause(self, clause: Clause) -> Tuple[Tuple[Literal, ...], Substitution]:
        renaming = self.renaming_for(clause.variables())
        return renaming.apply_literals(clause.literals), renaming
