"""End-to-end tests of the reasoner facade."""

import unittest

from folreasoner import Reasoner, ReasonerOptions, SearchLimits, SearchStatus, prove
from folreasoner.core.exceptions import (
    ArityMismatchError, MalformedFormula, NoProofAvailable, ParseError, ResourceExhausted
)
from folreasoner.core.logic import Constant, Variable


class TestMortality(unittest.TestCase):
    """All humans are mortal, Socrates is human."""

    def setUp(self):
        self.reasoner = Reasoner()
        self.reasoner.add_rule("mortality", "∀x (Human(x) → Mortal(x))")
        self.reasoner.add_fact("socrates", "Human(Socrates)")

    def test_entails(self):
        """Mortal(Socrates) follows."""
        self.assertTrue(self.reasoner.entails("Mortal(Socrates)"))
        self.assertEqual(self.reasoner.last_result.status, SearchStatus.REFUTED)

    def test_proof(self):
        """The proof has two resolution steps and replays."""
        self.reasoner.entails("Mortal(Socrates)")
        proof = self.reasoner.get_proof()
        self.assertEqual(proof.length, 2)
        self.assertTrue(proof.replay())
        self.assertTrue(proof.conclusion.is_empty)
        self.assertEqual({step.source for step in proof.premises}, {"mortality", "socrates", "query"})
        self.assertIn("[axiom mortality]", proof.render())
        self.assertIs(self.reasoner.get_proof_trace().steps[-1].clause.is_empty, True)

    def test_not_entailed(self):
        """Nothing is known about Plato, so the search saturates."""
        result = self.reasoner.prove("Mortal(Plato)")
        self.assertEqual(result.status, SearchStatus.SATURATED)
        self.assertFalse(self.reasoner.entails("Mortal(Plato)"))
        with self.assertRaises(NoProofAvailable):
            self.reasoner.get_proof()

    def test_solve(self):
        """Answers bind query variables, saturation gives None."""
        self.assertEqual(self.reasoner.solve("Mortal(x)"), {"x": Constant("Socrates")})
        self.assertEqual(self.reasoner.solve("Mortal(Socrates)"), {})
        self.assertIsNone(self.reasoner.solve("Mortal(Plato)"))
        self.assertIsNone(self.reasoner.solve("∃z God(z)"))

    def test_universal_query(self):
        """A universal query is refuted through its Skolemized negation."""
        reasoner = Reasoner()
        reasoner.add_rule("mortality", "∀x (Human(x) → Mortal(x))")
        self.assertTrue(reasoner.entails("∀y (Human(y) → Mortal(y))"))
        self.assertFalse(reasoner.entails("∀y Mortal(y)"))

    def test_free_query_variables_are_universal(self):
        """Mortal(x) asks whether everything is mortal."""
        self.assertFalse(self.reasoner.entails("Mortal(x)"))

    def test_monotonic(self):
        """Adding knowledge keeps entailed queries entailed."""
        self.assertTrue(self.reasoner.entails("Mortal(Socrates)"))
        self.reasoner.add_fact("plato", "Human(Plato)")
        self.reasoner.add_axiom("gods", "∀x (God(x) → ¬Mortal(x))")
        self.assertTrue(self.reasoner.entails("Mortal(Socrates)"))
        self.assertTrue(self.reasoner.entails("Mortal(Plato)"))

    def test_proof_invalidated_by_mutation(self):
        """A proof belongs to the knowledge base it was found on."""
        self.assertTrue(self.reasoner.entails("Mortal(Socrates)"))
        self.reasoner.add_fact("plato", "Human(Plato)")
        with self.assertRaises(NoProofAvailable):
            self.reasoner.get_proof()

    def test_query_leaves_knowledge_base_unchanged(self):
        """Queries add neither symbols nor Skolem constants."""
        signature = self.reasoner.kb.signature
        symbols = dict(signature.symbols)
        version = self.reasoner.kb.version
        self.reasoner.entails("∀y Mortal(y)")
        self.reasoner.entails("Immortal(Zeus)")
        self.assertEqual(signature.symbols, symbols)
        self.assertEqual(signature.skolem_counter, 0)
        self.assertEqual(self.reasoner.kb.version, version)
        self.assertEqual(len(self.reasoner.clauses), 2)

    def test_query_arity_checked(self):
        """Queries must agree with the knowledge base signature."""
        with self.assertRaises(ArityMismatchError):
            self.reasoner.entails("Human(Socrates, Plato)")

    def test_limit_overrides(self):
        """Per-call limits apply to one search only."""
        result = self.reasoner.prove("Mortal(Socrates)", max_given=1)
        self.assertEqual(result.status, SearchStatus.EXHAUSTED)
        self.assertEqual(result.limit_type, "max_given")
        self.assertTrue(self.reasoner.entails("Mortal(Socrates)"))


class TestKnowledgeBase(unittest.TestCase):
    """Test adding formulas."""

    def setUp(self):
        self.reasoner = Reasoner()

    def test_fact_must_be_literal(self):
        """add_fact rejects compound statements."""
        with self.assertRaises(MalformedFormula):
            self.reasoner.add_fact("rule", "∀x (Human(x) → Mortal(x))")
        entry = self.reasoner.add_fact("zeus", "¬Mortal(Zeus)")
        self.assertEqual(entry.role, "fact")

    def test_rule_must_be_implication(self):
        """add_rule rejects plain facts."""
        with self.assertRaises(MalformedFormula):
            self.reasoner.add_rule("fact", "Human(Socrates)")
        entry = self.reasoner.add_rule("iff", "∀x (Bachelor(x) ↔ Man(x) ∧ ¬Married(x))")
        self.assertEqual(len(entry.clauses), 3)

    def test_malformed_formula_leaves_kb_unchanged(self):
        """A rejected formula is not stored."""
        self.reasoner.add_fact("socrates", "Human(Socrates)")
        version = self.reasoner.kb.version
        with self.assertRaises(ArityMismatchError):
            self.reasoner.add_axiom("bad", "∀x (Human(x, x) → Mortal(x))")
        with self.assertRaises(ParseError):
            self.reasoner.add_axiom("broken", "Human(Socrates")
        self.assertEqual(len(self.reasoner.formulas), 1)
        self.assertEqual(len(self.reasoner.clauses), 1)
        self.assertEqual(self.reasoner.kb.version, version)
        # Mortal was never declared
        self.assertNotIn("Mortal", self.reasoner.kb.signature.symbols)

    def test_default_names(self):
        """Unnamed formulas are numbered."""
        entry = self.reasoner.add("Human(Socrates)")
        self.assertEqual(entry.name, "formula_1")

    def test_subsumed_clauses_not_active(self):
        """A general fact makes a specific one redundant."""
        self.reasoner.add_fact("socrates", "Human(Socrates)")
        self.reasoner.add_fact("everyone", "∀x Human(x)")
        self.assertEqual(len(self.reasoner.clauses), 1)
        self.assertEqual(len(self.reasoner.formulas), 2)

    def test_reset(self):
        """reset() forgets formulas, symbols and proofs."""
        self.reasoner.add_fact("socrates", "Human(Socrates)")
        self.assertTrue(self.reasoner.entails("Human(Socrates)"))
        self.reasoner.reset()
        self.assertEqual(self.reasoner.formulas, [])
        self.assertEqual(self.reasoner.clauses, [])
        self.assertIsNone(self.reasoner.last_result)
        with self.assertRaises(NoProofAvailable):
            self.reasoner.get_proof()
        self.reasoner.add_fact("socrates", "Human(Socrates, Athens)")


class TestAncestry(unittest.TestCase):
    """Answer extraction over a transitive relation."""

    def setUp(self):
        self.reasoner = Reasoner()
        self.reasoner.add_fact("ab", "Parent(Alice, Bob)")
        self.reasoner.add_fact("bc", "Parent(Bob, Charlie)")
        self.reasoner.add_rule("base", "∀x∀y (Parent(x, y) → Ancestor(x, y))")
        self.reasoner.add_rule("step", "∀x∀y∀z (Parent(x, y) ∧ Ancestor(y, z) → Ancestor(x, z))")

    def test_transitive_entailment(self):
        """Alice is an ancestor of Charlie."""
        self.assertTrue(self.reasoner.entails("Ancestor(Alice, Charlie)"))

    def test_solve_existential(self):
        """A witness for ∃z is a descendant of Alice."""
        answer = self.reasoner.solve("∃z Ancestor(Alice, z)")
        self.assertIsNotNone(answer)
        self.assertIn(answer["z"], {Constant("Bob"), Constant("Charlie")})
        self.assertTrue(self.reasoner.get_proof().replay())

    def test_solve_free_variables(self):
        """Free query variables are answer variables too."""
        answer = self.reasoner.solve("Ancestor(x, Charlie)")
        self.assertIn(answer["x"], {Constant("Alice"), Constant("Bob")})

    def test_solve_closed_query(self):
        """A closed query answers with no bindings."""
        self.assertEqual(self.reasoner.solve("Ancestor(Alice, Charlie)"), {})

    def test_solve_inconsistent_knowledge(self):
        """An inconsistent knowledge base answers with the variables themselves."""
        self.reasoner.add_fact("contradiction", "¬Parent(Alice, Bob)")
        answer = self.reasoner.solve("∃z Ancestor(Charlie, z)")
        self.assertEqual(answer, {"z": Variable("z")})


class TestTransitiveAncestry(unittest.TestCase):
    """Ancestor as the transitive closure of Parent."""

    def setUp(self):
        self.reasoner = Reasoner()
        self.add_knowledge(self.reasoner)

    @staticmethod
    def add_knowledge(reasoner):
        reasoner.add_fact("ab", "Parent(Alice, Bob)")
        reasoner.add_fact("bc", "Parent(Bob, Charlie)")
        reasoner.add_rule("parent", "∀x∀y (Parent(x, y) → Ancestor(x, y))")
        reasoner.add_rule("transitivity", "∀x∀y∀z ((Ancestor(x, y) ∧ Ancestor(y, z)) → Ancestor(x, z))")

    def test_solve_existential(self):
        """Alice has a descendant, Bob or Charlie."""
        answer = self.reasoner.solve("∃z Ancestor(Alice, z)")
        self.assertIsNotNone(answer)
        self.assertIn(answer["z"], {Constant("Bob"), Constant("Charlie")})
        proof = self.reasoner.get_proof()
        self.assertTrue(proof.replay())
        self.assertIn("ab", {step.source for step in proof.premises})

    def test_transitive_entailment(self):
        """Two parent links chain into one ancestor link."""
        self.assertTrue(self.reasoner.entails("Ancestor(Alice, Charlie)"))
        self.assertTrue(self.reasoner.get_proof().replay())

    def test_unit_rules(self):
        """Hyperresolution and unit deletion find replayable proofs too."""
        reasoner = Reasoner(options=ReasonerOptions(hyperresolution=True, unit_deletion=True))
        self.add_knowledge(reasoner)
        answer = reasoner.solve("∃z Ancestor(Alice, z)")
        self.assertIn(answer["z"], {Constant("Bob"), Constant("Charlie")})
        self.assertTrue(reasoner.get_proof().replay())
        self.assertTrue(reasoner.entails("Ancestor(Alice, Charlie)"))
        self.assertTrue(reasoner.get_proof().replay())


class TestQueryVariableNames(unittest.TestCase):
    """Free query variables may share a name with a bound one."""

    def test_entails_rebound_name(self):
        """The free x and the existential x are different variables."""
        reasoner = Reasoner()
        reasoner.add_axiom("kb", "P(x) | (exists x Q(x))")
        self.assertTrue(reasoner.entails("P(x) | (exists x Q(x))"))
        self.assertTrue(reasoner.get_proof().replay())

    def test_solve_rebound_name(self):
        """Only the free x is an answer variable."""
        reasoner = Reasoner()
        reasoner.add_fact("a", "Q(A)")
        reasoner.add_fact("b", "P(B)")
        self.assertEqual(reasoner.solve("Q(x) & (exists x P(x))"), {"x": Constant("A")})

    def test_nested_rebinding_still_rejected(self):
        """A binder repeated inside the query itself is malformed."""
        reasoner = Reasoner()
        reasoner.add_fact("a", "Q(A)")
        with self.assertRaises(MalformedFormula):
            reasoner.entails("∀x (Q(x) ∨ ∃x P(x))")
        with self.assertRaises(MalformedFormula):
            reasoner.solve("∃x ∃x P(x)")


class TestIncompleteSearch(unittest.TestCase):
    """An infinite clause set that cannot answer the query."""

    def setUp(self):
        self.reasoner = Reasoner(limits=SearchLimits(max_given=20))
        self.reasoner.add_rule("successor", "∀x (P(x) → P(f(x)))")
        self.reasoner.add_fact("start", "P(A)")

    def test_entails_raises(self):
        """Resource exhaustion is an error, not a negative answer."""
        with self.assertRaises(ResourceExhausted) as ctx:
            self.reasoner.entails("Q(A)")
        self.assertEqual(ctx.exception.limit_type, "max_given")
        self.assertEqual(ctx.exception.statistics.given, 20)
        with self.assertRaises(NoProofAvailable):
            self.reasoner.get_proof()

    def test_prove_reports_exhaustion(self):
        """prove() returns the exhausted result instead of raising."""
        result = self.reasoner.prove("Q(A)")
        self.assertEqual(result.status, SearchStatus.EXHAUSTED)
        self.assertFalse(result.refuted)

    def test_reachable_query(self):
        """Queries within reach are still proved."""
        self.assertTrue(self.reasoner.entails("P(f(f(A)))"))

    def test_depth_limited_search_is_not_saturation(self):
        """Dropping deep clauses never yields a negative answer."""
        with self.assertRaises(ResourceExhausted) as ctx:
            self.reasoner.entails("Q(A)", max_given=None, max_depth=3)
        self.assertEqual(ctx.exception.limit_type, "max_depth")


class TestModuleProve(unittest.TestCase):
    """Test the one-shot prove() helper."""

    def test_prove(self):
        """Premises and a query in one call."""
        result = prove(["∀x (Human(x) → Mortal(x))", "Human(Socrates)"], "Mortal(Socrates)")
        self.assertEqual(result.status, SearchStatus.REFUTED)
        self.assertEqual(result.proof_trace().length, 2)

    def test_prove_with_limits(self):
        """Limits are passed through."""
        result = prove(["∀x (P(x) → P(f(x)))", "P(A)"], "Q(A)", max_given=10)
        self.assertEqual(result.status, SearchStatus.EXHAUSTED)
        self.assertEqual(result.statistics.given, 10)


if __name__ == '__main__':
    unittest.main()
