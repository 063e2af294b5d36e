"""Tests for resolution, factoring and subsumption."""

import unittest

from folreasoner.core.derivation import FACTORING, HYPERRESOLUTION, RESOLUTION, UNIT_DELETION, premise
from folreasoner.core.logic import Variable, Constant, Function, Predicate, Literal, Clause
from folreasoner.core.unification import VariableRenamer
from folreasoner.proofs.database import ClauseDatabase
from folreasoner.proofs.trace import ProofTrace
from folreasoner.rules import (
    FactoringRule, HyperresolutionRule, ResolutionRule, SubsumptionRule, UnitDeletionRule, subsumes,
)


class TestResolution(unittest.TestCase):
    """Test binary resolution."""

    def setUp(self):
        self.x = Variable("x")
        self.y = Variable("y")
        self.a = Constant("a")
        self.socrates = Constant("Socrates")
        self.f = Function("f", 1)
        self.P = Predicate("P", 1)
        self.Human = Predicate("Human", 1)
        self.Mortal = Predicate("Mortal", 1)
        self.db = ClauseDatabase()
        self.rule = ResolutionRule(VariableRenamer())

    def test_resolve_instantiates(self):
        """¬Human(x) ∨ Mortal(x) and Human(Socrates) give Mortal(Socrates)."""
        rule_id = self.db.insert(Clause(Literal(self.Human(self.x), False), Literal(self.Mortal(self.x)),
                                        derivation=premise("mortality")))
        fact_id = self.db.insert(Clause(Literal(self.Human(self.socrates)), derivation=premise("socrates")))

        application = self.rule.apply(self.db, [fact_id, rule_id])
        self.assertIsNotNone(application)
        self.assertEqual(application.rule_name, RESOLUTION)
        self.assertEqual(application.parents, [fact_id, rule_id])
        (resolvent,) = application.generated_clauses
        self.assertEqual(resolvent, Clause(Literal(self.Mortal(self.socrates))))

        derivation = resolvent.derivation
        self.assertEqual(derivation.parents, (fact_id, rule_id))
        self.assertEqual(derivation.literal_indices, (0, 0))
        self.assertEqual(derivation.depth, 1)
        self.assertTrue(derivation.renaming.is_renaming())

    def test_partner_renamed_apart(self):
        """Shared variable names do not block resolution."""
        c1 = Clause(Literal(self.P(self.x)), Literal(self.Mortal(self.x)))
        c2 = Clause(Literal(self.P(self.f(self.x)), False))
        self.db.insert(c1)
        self.db.insert(c2)
        resolvent = self.rule.resolve(c1, c2, 0, 0)
        self.assertIsNotNone(resolvent)
        (literal,) = resolvent.literals
        self.assertEqual(literal.atom.predicate, self.Mortal)
        self.assertEqual(literal.atom.args[0].functor, self.f)
        self.assertNotIn(self.x, resolvent.variables())

    def test_self_resolution(self):
        """A clause can resolve with a renamed copy of itself."""
        clause = Clause(Literal(self.P(self.x), False), Literal(self.P(self.f(self.x))))
        self.db.insert(clause)
        resolvents = self.rule.resolvents(clause, self.db)
        self.assertEqual(len(resolvents), 2)
        for resolvent in resolvents:
            self.assertEqual(len(resolvent), 2)
            self.assertEqual(resolvent.derivation.parents, (clause.id, clause.id))

    def test_no_resolvent_on_clash(self):
        """Non-unifiable complementary literals give nothing."""
        c1 = Clause(Literal(self.Human(self.a)))
        c2 = Clause(Literal(self.Human(self.socrates), False))
        self.db.insert(c1)
        self.db.insert(c2)
        self.assertIsNone(self.rule.apply(self.db, [c1.id, c2.id]))
        self.assertIsNone(self.rule.apply(self.db, [c1.id]))

    def test_empty_resolvent(self):
        """Complementary units resolve to the empty clause."""
        c1 = Clause(Literal(self.Human(self.x)))
        c2 = Clause(Literal(self.Human(self.socrates), False))
        self.db.insert(c1)
        self.db.insert(c2)
        resolvent = self.rule.resolve(c2, c1, 0, 0)
        self.assertTrue(resolvent.is_empty)

    def test_apply_against_database(self):
        """A single id resolves against every active clause."""
        rule_id = self.db.insert(Clause(Literal(self.Human(self.x), False), Literal(self.Mortal(self.x))))
        self.db.insert(Clause(Literal(self.Human(self.socrates))))
        self.db.insert(Clause(Literal(self.Human(self.a))))
        application = self.rule.apply(self.db, [rule_id])
        self.assertEqual(set(application.generated_clauses), {
            Clause(Literal(self.Mortal(self.socrates))),
            Clause(Literal(self.Mortal(self.a))),
        })


class TestFactoring(unittest.TestCase):
    """Test factoring of same-polarity literals."""

    def setUp(self):
        self.x = Variable("x")
        self.y = Variable("y")
        self.a = Constant("a")
        self.P = Predicate("P", 1)
        self.Q = Predicate("Q", 1)
        self.db = ClauseDatabase()

    def test_factor(self):
        """P(x) ∨ P(a) ∨ Q(x) factors to P(a) ∨ Q(a)."""
        clause = Clause(Literal(self.P(self.x)), Literal(self.P(self.a)), Literal(self.Q(self.x)))
        clause_id = self.db.insert(clause)
        application = FactoringRule().apply(self.db, [clause_id])
        self.assertIsNotNone(application)
        (factor,) = application.generated_clauses
        self.assertEqual(factor, Clause(Literal(self.P(self.a)), Literal(self.Q(self.a))))
        self.assertEqual(factor.derivation.rule, FACTORING)
        self.assertEqual(factor.derivation.parents, (clause_id,))
        self.assertEqual(factor.derivation.literal_indices, (0, 1))

    def test_no_factor_across_polarity(self):
        """Literals of opposite polarity are never merged."""
        clause = Clause(Literal(self.P(self.x)), Literal(self.P(self.a), False))
        self.assertEqual(FactoringRule().factors(clause), [])


class TestHyperresolution(unittest.TestCase):
    """Test positive unit hyperresolution."""

    def setUp(self):
        self.x = Variable("x")
        self.a = Constant("a")
        self.P = Predicate("P", 1)
        self.Q = Predicate("Q", 1)
        self.R = Predicate("R", 1)
        self.db = ClauseDatabase()
        self.nucleus = self.db.insert(Clause(
            Literal(self.P(self.x), False), Literal(self.Q(self.x), False), Literal(self.R(self.x))))
        self.p = self.db.insert(Clause(Literal(self.P(self.a))))
        self.q = self.db.insert(Clause(Literal(self.Q(self.a))))

    def test_nucleus(self):
        """All negative literals of the nucleus are resolved at once."""
        application = HyperresolutionRule().apply(self.db, [self.nucleus])
        (clause,) = application.generated_clauses
        self.assertEqual(clause, Clause(Literal(self.R(self.a))))
        derivation = clause.derivation
        self.assertEqual(derivation.rule, HYPERRESOLUTION)
        self.assertEqual(derivation.parents, (self.nucleus, self.p, self.q))
        self.assertEqual(derivation.literal_indices, (0, 1))
        self.assertEqual(len(derivation.renamings), 2)
        self.assertEqual(derivation.depth, 1)

    def test_satellite(self):
        """A positive unit takes part as a satellite."""
        (clause,) = HyperresolutionRule().apply(self.db, [self.q]).generated_clauses
        self.assertEqual(clause, Clause(Literal(self.R(self.a))))

    def test_missing_satellite(self):
        """Without a unit for every negative literal there is no hyperresolvent."""
        db = ClauseDatabase()
        nucleus = db.insert(Clause(Literal(self.P(self.x), False), Literal(self.Q(self.x), False)))
        db.insert(Clause(Literal(self.P(self.a))))
        self.assertIsNone(HyperresolutionRule().apply(db, [nucleus]))

    def test_unit_reused(self):
        """One unit may resolve several literals of the nucleus."""
        S = Predicate("S", 2)
        y = Variable("y")
        db = ClauseDatabase()
        nucleus = db.insert(Clause(Literal(self.P(self.x), False), Literal(self.P(y), False), Literal(S(self.x, y))))
        unit = db.insert(Clause(Literal(self.P(self.a))))
        (clause,) = HyperresolutionRule().apply(db, [unit]).generated_clauses
        self.assertEqual(clause, Clause(Literal(S(self.a, self.a))))
        self.assertEqual(clause.derivation.parents, (nucleus, unit, unit))

    def test_replay(self):
        """Hyperresolution steps replay from their parents."""
        (clause,) = HyperresolutionRule().apply(self.db, [self.nucleus]).generated_clauses
        self.db.arena.add(clause)
        trace = ProofTrace.from_arena(self.db.arena, clause.id)
        self.assertEqual(trace.length, 1)
        self.assertTrue(trace.replay())


class TestUnitDeletion(unittest.TestCase):
    """Test unit deletion."""

    def setUp(self):
        self.x = Variable("x")
        self.y = Variable("y")
        self.a = Constant("a")
        self.P = Predicate("P", 1)
        self.Q = Predicate("Q", 1)
        self.R = Predicate("R", 1)
        self.db = ClauseDatabase()
        self.not_p = self.db.insert(Clause(Literal(self.P(self.y), False)))
        self.not_q = self.db.insert(Clause(Literal(self.Q(self.a), False)))

    def test_simplify(self):
        """Literals refuted by an active unit are removed."""
        clause = Clause(Literal(self.P(self.x)), Literal(self.Q(self.a)), Literal(self.R(self.x)))
        simplified = UnitDeletionRule().simplify(clause, self.db)
        self.assertEqual(simplified, Clause(Literal(self.R(self.x))))
        self.assertIsNotNone(clause.id)
        derivation = simplified.derivation
        self.assertEqual(derivation.rule, UNIT_DELETION)
        self.assertEqual(derivation.parents, (clause.id, self.not_p, self.not_q))
        self.assertEqual(derivation.literal_indices, (0, 1))

    def test_more_general_literal_kept(self):
        """A unit only deletes instances of its complement."""
        clause = Clause(Literal(self.Q(self.x)), Literal(self.R(self.x)))
        self.assertIsNone(UnitDeletionRule().simplify(clause, self.db))
        self.assertIsNone(clause.id)

    def test_apply(self):
        """apply reports the shortened clause and the replaced id."""
        clause_id = self.db.insert(Clause(Literal(self.P(self.a)), Literal(self.R(self.a))))
        application = UnitDeletionRule().apply(self.db, [clause_id])
        self.assertEqual(application.generated_clauses, [Clause(Literal(self.R(self.a)))])
        self.assertEqual(application.deleted_clause_ids, [clause_id])

    def test_replay(self):
        """Unit deletion steps replay from their parents."""
        clause = Clause(Literal(self.P(self.x)), Literal(self.Q(self.a)))
        simplified = UnitDeletionRule().simplify(clause, self.db)
        self.assertTrue(simplified.is_empty)
        self.db.arena.add(simplified)
        self.assertTrue(ProofTrace.from_arena(self.db.arena, simplified.id).replay())


class TestSubsumption(unittest.TestCase):
    """Test θ-subsumption."""

    def setUp(self):
        self.x = Variable("x")
        self.y = Variable("y")
        self.a = Constant("a")
        self.b = Constant("b")
        self.P = Predicate("P", 1)
        self.Q = Predicate("Q", 2)

    def test_instance_subsumed(self):
        """P(x) subsumes P(a) ∨ Q(a, b)."""
        self.assertTrue(subsumes(Clause(Literal(self.P(self.x))),
                                 Clause(Literal(self.P(self.a)), Literal(self.Q(self.a, self.b)))))

    def test_consistent_substitution_required(self):
        """Q(x, x) does not subsume Q(a, b)."""
        self.assertFalse(subsumes(Clause(Literal(self.Q(self.x, self.x))),
                                  Clause(Literal(self.Q(self.a, self.b)))))

    def test_multi_literal_backtracking(self):
        """Matching backtracks over literal choices."""
        general = Clause(Literal(self.Q(self.x, self.y)), Literal(self.P(self.y)))
        specific = Clause(Literal(self.Q(self.a, self.a)), Literal(self.Q(self.a, self.b)), Literal(self.P(self.b)))
        self.assertTrue(subsumes(general, specific))

    def test_length_bound(self):
        """A longer clause never subsumes a shorter one."""
        self.assertFalse(subsumes(Clause(Literal(self.P(self.x)), Literal(self.P(self.y))),
                                  Clause(Literal(self.P(self.a)))))

    def test_shared_variable_names(self):
        """Variables of the subsumed clause are treated as constants."""
        self.assertTrue(subsumes(Clause(Literal(self.Q(self.x, self.y))),
                                 Clause(Literal(self.Q(self.y, self.x)))))
        self.assertFalse(subsumes(Clause(Literal(self.P(self.a))), Clause(Literal(self.P(self.x)))))

    def test_rule_reports_deleted_ids(self):
        """SubsumptionRule lists the active clauses a clause subsumes."""
        db = ClauseDatabase()
        specific = db.insert(Clause(Literal(self.P(self.a)), Literal(self.Q(self.a, self.b))))
        general = Clause(Literal(self.P(self.x)))
        db.arena.add(general)
        application = SubsumptionRule().apply(db, [general.id])
        self.assertEqual(application.deleted_clause_ids, [specific])
        self.assertIsNone(SubsumptionRule().apply(db, [specific]))


if __name__ == '__main__':
    unittest.main()
