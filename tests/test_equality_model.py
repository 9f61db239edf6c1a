"""
Unit tests for the equality submodel.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest
from axiom_base import (
    RuleRegistry,
    ModelConflict,
    Variable,
    equivalent,
    not_equivalent,
)
from model import Interpretation, Model
from vocabulary import NamedPoint, lt


def equality_only_model() -> Model:
    return Model(RuleRegistry())


class TestInterpretation(unittest.TestCase):
    """Test interpretation sets."""

    def test_union_has_new_identity(self):
        """Test that a union never reuses an identity."""
        a = Interpretation.singleton(NamedPoint("a"))
        b = Interpretation.singleton(NamedPoint("b"))
        u = a.union(b)
        self.assertEqual(u.members, a.members | b.members)
        self.assertNotIn(u.ident, (a.ident, b.ident))

    def test_representative_prefers_concrete(self):
        """Test that a named entity is preferred over a variable."""
        interp = Interpretation([Variable(7), NamedPoint("p")])
        self.assertEqual(interp.representative(), NamedPoint("p"))


class TestEquivalence(unittest.TestCase):
    """Test ≃ commits."""

    def setUp(self):
        self.model = equality_only_model()
        self.eq = self.model.equality
        self.a, self.b, self.c, self.d = (NamedPoint(n) for n in "abcd")

    def test_transitivity(self):
        """Test that equivalence classes grow by merging."""
        self.model.commit(equivalent(self.a, self.b))
        self.model.commit(equivalent(self.b, self.c))
        self.assertTrue(self.eq.equivalent(self.a, self.c))
        self.assertIs(self.eq.lookup(self.a), self.eq.lookup(self.c))
        self.assertEqual(self.eq.members_of(self.a), frozenset((self.a, self.b, self.c)))
        self.assertFalse(self.eq.equivalent(self.a, self.d))

    def test_reflexive_merge_is_noop(self):
        """Test that a ≃ a changes nothing."""
        self.assertEqual(self.model.commit(equivalent(self.a, self.a)), [])
        self.assertEqual(self.eq.interpretations(), [])

    def test_knows_does_not_register(self):
        """Test that membership queries never register entities."""
        self.assertFalse(self.model.knows(equivalent(self.a, self.b)))
        self.assertIsNone(self.eq.lookup(self.a))
        self.assertEqual(self.eq.entities, [])

    def test_first_touch_registers_singleton(self):
        """Test lazy allocation of interpretations."""
        interp = self.eq.interpretation(self.a)
        self.assertEqual(interp.members, frozenset((self.a,)))
        self.assertIs(self.eq.interpretation(self.a), interp)


class TestNonEquivalence(unittest.TestCase):
    """Test ≄ commits and the merge veto."""

    def setUp(self):
        self.model = equality_only_model()
        self.eq = self.model.equality
        self.a, self.b, self.c, self.d = (NamedPoint(n) for n in "abcd")

    def test_different_then_equivalent(self):
        """Test that ≄ followed by ≃ is vetoed."""
        self.model.commit(not_equivalent(self.a, self.b))
        with self.assertRaises(ModelConflict) as ctx:
            self.model.commit(equivalent(self.a, self.b))
        self.assertTrue(ctx.exception.conflict.veto)
        self.assertEqual(ctx.exception.conflict.submodel, "equality")

    def test_equivalent_then_different(self):
        """Test that ≃ followed by ≄ is a conflict."""
        self.model.commit(equivalent(self.a, self.b))
        with self.assertRaises(ModelConflict) as ctx:
            self.model.commit(not_equivalent(self.b, self.a))
        self.assertFalse(ctx.exception.conflict.veto)

    def test_different_from_itself(self):
        """Test that a ≄ a is a conflict."""
        with self.assertRaises(ModelConflict):
            self.model.commit(not_equivalent(self.a, self.a))

    def test_records_survive_merges(self):
        """Test that a difference recorded before merges still holds after."""
        self.model.commit(not_equivalent(self.a, self.d))
        self.model.commit(equivalent(self.a, self.b))
        self.model.commit(equivalent(self.d, self.c))
        self.assertTrue(self.eq.are_different(self.b, self.c))
        self.assertTrue(self.model.knows(not_equivalent(self.c, self.b)))
        with self.assertRaises(ModelConflict):
            self.model.commit(equivalent(self.b, self.c))

    def test_veto_changes_nothing(self):
        """Test that a vetoed merge leaves the model untouched."""
        self.model.commit(not_equivalent(self.a, self.b))
        self.model.commit(equivalent(self.b, self.c))
        before = {e: self.eq.lookup(e) for e in self.eq.entities}

        with self.assertRaises(ModelConflict):
            self.model.commit(equivalent(self.c, self.a))

        self.assertEqual({e: self.eq.lookup(e) for e in self.eq.entities}, before)
        self.assertFalse(self.eq.equivalent(self.a, self.c))

    def test_different_from(self):
        """Test listing the interpretations recorded as different."""
        self.model.commit(not_equivalent(self.a, self.b))
        self.model.commit(not_equivalent(self.a, self.c))
        self.model.commit(equivalent(self.b, self.c))
        self.assertEqual(len(self.eq.different_from(self.a)), 1)


class TestCloneAndIntersect(unittest.TestCase):
    """Test copies and intersections of equality models."""

    def setUp(self):
        self.model = equality_only_model()
        self.p, self.q, self.r, self.s = (NamedPoint(n) for n in "pqrs")

    def test_clone_is_independent(self):
        """Test that commits to a clone do not leak back."""
        self.model.commit(equivalent(self.p, self.q))
        other = self.model.clone()
        other.commit(equivalent(self.q, self.r))
        self.assertTrue(other.knows(equivalent(self.p, self.r)))
        self.assertFalse(self.model.knows(equivalent(self.p, self.r)))

    def test_intersection_is_partition_meet(self):
        """Test that only common equivalences survive."""
        first = self.model.clone()
        first.commit(equivalent(self.p, self.q))
        first.commit(equivalent(self.q, self.r))
        second = self.model.clone()
        second.commit(equivalent(self.p, self.q))
        second.commit(equivalent(self.r, self.s))

        common = Model.intersect([first, second])
        self.assertTrue(common.knows(equivalent(self.p, self.q)))
        self.assertFalse(common.knows(equivalent(self.q, self.r)))
        self.assertFalse(common.knows(equivalent(self.r, self.s)))

    def test_intersection_keeps_common_differences(self):
        """Test that a difference recorded in every branch survives."""
        first = self.model.clone()
        first.commit(not_equivalent(self.p, self.q))
        first.commit(not_equivalent(self.p, self.r))
        second = self.model.clone()
        second.commit(not_equivalent(self.q, self.p))

        common = Model.intersect([first, second])
        self.assertTrue(common.knows(not_equivalent(self.p, self.q)))
        self.assertFalse(common.knows(not_equivalent(self.p, self.r)))

    def test_intersect_nothing(self):
        """Test that an empty intersection is rejected."""
        with self.assertRaises(ValueError):
            Model.intersect([])

    def test_uncommitted_kind(self):
        """Test that a model without an order submodel refuses <."""
        with self.assertRaises(KeyError):
            self.model.commit(lt(self.p, self.q))


if __name__ == '__main__':
    unittest.main()
