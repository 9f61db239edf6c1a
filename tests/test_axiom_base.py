"""
Unit tests for the axiom_base package.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest
from axiom_base import (
    Variable,
    VariableArena,
    AxiomForm,
    CoreKind,
    Axiom,
    Relation,
    TRUE,
    FALSE,
    conjunction,
    disjunction,
    equivalent,
    not_equivalent,
    flatten,
    KnowledgeBase,
    RuleRegistry,
    EQUALITY_SUBMODEL,
    StructuralViolation,
)
from vocabulary import NamedPoint, NamedInterval, PointKind, lt, left


class TestEntities(unittest.TestCase):
    """Test variables and the arena."""

    def test_variables_compare_by_index(self):
        """Test that variables are equal exactly when their indices are."""
        self.assertEqual(Variable(3), Variable(3))
        self.assertNotEqual(Variable(3), Variable(4))
        self.assertTrue(Variable(3).is_variable)
        self.assertFalse(NamedPoint("p").is_variable)

    def test_arena_never_reuses_indices(self):
        """Test that fresh variables are always distinct."""
        arena = VariableArena()
        a = arena.fresh()
        rest = arena.fresh_variables(3)
        self.assertEqual(len({a, *rest}), 4)
        self.assertEqual(arena.allocated, 4)

    def test_negative_allocation(self):
        """Test that a negative count is rejected."""
        with self.assertRaises(ValueError):
            VariableArena().fresh_variables(-1)


class TestAxioms(unittest.TestCase):
    """Test axiom construction."""

    def setUp(self):
        self.p = NamedPoint("p")
        self.q = NamedPoint("q")

    def test_forms(self):
        """Test that every axiom reports its form."""
        self.assertEqual(lt(self.p, self.q).form, AxiomForm.RELATION)
        self.assertEqual(conjunction().form, AxiomForm.CONJUNCTION)
        self.assertEqual(disjunction().form, AxiomForm.DISJUNCTION)
        self.assertEqual(TRUE.form, AxiomForm.TRUE)
        self.assertEqual(FALSE.form, AxiomForm.FALSE)

    def test_base_class_is_abstract(self):
        """Test that Axiom itself cannot be instantiated."""
        with self.assertRaises(TypeError):
            Axiom()

        class Formless(Axiom):
            pass

        with self.assertRaises(TypeError):
            Formless()

    def test_relations_are_values(self):
        """Test that equal relations hash alike."""
        self.assertEqual(lt(self.p, self.q), lt(self.p, self.q))
        self.assertEqual(len({equivalent(self.p, self.q), equivalent(self.p, self.q)}), 1)
        self.assertEqual(not_equivalent(self.p, self.q).kind, CoreKind.NOT_EQUIVALENT)

    def test_wrong_arity(self):
        """Test that the arity of the kind is enforced."""
        with self.assertRaises(StructuralViolation):
            Relation(PointKind.LT, (self.p,))

    def test_non_entity_argument(self):
        """Test that plain values are not accepted as entities."""
        with self.assertRaises(StructuralViolation):
            Relation(PointKind.LT, ("p", "q"))

    def test_non_axiom_member(self):
        """Test that connectives only hold axioms."""
        with self.assertRaises(StructuralViolation):
            conjunction(lt(self.p, self.q), "r")

    def test_str(self):
        """Test the readable form."""
        self.assertEqual(str(lt(self.p, self.q)), "p < q")
        self.assertEqual(str(disjunction(lt(self.p, self.q), equivalent(self.p, self.q))),
                         "(p < q ∨ p ≃ q)")


class TestKnowledgeBase(unittest.TestCase):
    """Test the axiom store."""

    def setUp(self):
        self.p, self.q, self.r = NamedPoint("p"), NamedPoint("q"), NamedPoint("r")

    def test_tell_flattens_conjunctions(self):
        """Test that nested conjunctions and lists are unpacked."""
        kb = KnowledgeBase()
        kb.tell(lt(self.p, self.q), [conjunction(lt(self.q, self.r), conjunction(TRUE))])
        self.assertEqual(kb.axioms, [lt(self.p, self.q), lt(self.q, self.r), TRUE])

    def test_disjunctions_stay_whole(self):
        """Test that disjunctions are stored as they are."""
        d = disjunction(lt(self.p, self.q), lt(self.q, self.p))
        self.assertEqual(KnowledgeBase([d]).axioms, [d])

    def test_take_is_last_in_first_out(self):
        """Test the order in which axioms are taken."""
        kb = KnowledgeBase([lt(self.p, self.q), lt(self.q, self.r)])
        self.assertEqual(kb.take(), lt(self.q, self.r))
        self.assertEqual(kb.take(), lt(self.p, self.q))
        self.assertFalse(kb)
        with self.assertRaises(IndexError):
            kb.take()

    def test_tell_rejects_non_axioms(self):
        """Test that strings are not mistaken for collections."""
        with self.assertRaises(StructuralViolation):
            KnowledgeBase().tell("p < q")

    def test_copy_is_independent(self):
        """Test that copies do not share the pending list."""
        kb = KnowledgeBase([lt(self.p, self.q)])
        other = kb.copy()
        other.tell(lt(self.q, self.r))
        self.assertEqual(len(kb), 1)
        self.assertEqual(len(other), 2)

    def test_flatten(self):
        """Test flattening of a nested collection."""
        items = list(flatten([conjunction(lt(self.p, self.q)), (lt(self.q, self.r),)]))
        self.assertEqual(items, [lt(self.p, self.q), lt(self.q, self.r)])


class TestRuleRegistry(unittest.TestCase):
    """Test the registration table."""

    def test_core_kinds_registered(self):
        """Test that ≃ and ≄ belong to the equality submodel."""
        registry = RuleRegistry()
        for kind in CoreKind:
            self.assertEqual(registry.submodel_for(kind), EQUALITY_SUBMODEL)

    def test_duplicate_registration(self):
        """Test that a kind can only be registered once."""
        registry = RuleRegistry()
        registry.register(PointKind.LT, submodel="order")
        with self.assertRaises(ValueError):
            registry.register(PointKind.LT)

    def test_signature_length(self):
        """Test that the signature must match the arity."""
        with self.assertRaises(ValueError):
            RuleRegistry().register(PointKind.LT, signature=(NamedPoint,))

    def test_frozen(self):
        """Test that a frozen registry rejects registrations."""
        registry = RuleRegistry().freeze()
        self.assertTrue(registry.frozen)
        with self.assertRaises(RuntimeError):
            registry.register(PointKind.LT)

    def test_unregistered_kind(self):
        """Test that unknown kinds have no rules."""
        registry = RuleRegistry()
        self.assertIsNone(registry.rules_for(PointKind.GAPSIZE))
        self.assertIsNone(registry.submodel_for(PointKind.GAPSIZE))

    def test_signature_validation(self):
        """Test that argument sorts are checked, variables excepted."""
        from vocabulary import build_registry
        rules = build_registry().rules_for(left(NamedInterval("a"), NamedPoint("p")).kind)
        rules.validate(left(NamedInterval("a"), Variable(1)))
        with self.assertRaises(StructuralViolation):
            rules.validate(left(NamedPoint("p"), NamedPoint("q")))

    def test_merge(self):
        """Test combining two registries."""
        first = RuleRegistry()
        second = RuleRegistry()
        second.register(PointKind.LT, submodel="order")
        first.merge(second)
        self.assertIn(PointKind.LT, first)
        self.assertEqual(len(first), len(CoreKind) + 1)


if __name__ == '__main__':
    unittest.main()
