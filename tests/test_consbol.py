"""
Integration tests for the ConsBOL facade and the biopolymer vocabulary.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
import tempfile
import unittest
from consbol import ConsBOL, CheckReport, describe
from config import ConsBOLGlobalConfig, ReasoningConfig, configure_logging
from axiom_base import KnowledgeBase, disjunction, equivalent, FALSE
from reasoning_engine import RecordingObserver
from vocabulary import (
    INTERVAL_SUBMODEL,
    ORDER_SUBMODEL,
    NamedPoint,
    NamedInterval,
    NamedStrandedInterval,
    IntervalKind,
    PointKind,
    StrandedKind,
    TOP_STRAND,
    BOTTOM_STRAND,
    Count,
    lt, le, ge, gt,
    gapsize,
    strand,
    containing,
    left,
    right,
    before,
    after,
    does_not_overlap,
    within,
    same_location,
    contains,
    starts_with,
    shorter_than,
    same_strand,
    different_strand,
    five_prime,
    upstream_of,
    stranded_relation,
    tetr_inverter,
    inverter,
)
from vocabulary.examples import TETR_INVERTER, LACI_INVERTER


class TestConsBOLCheck(unittest.TestCase):
    """Test the main check interface."""

    def setUp(self):
        self.consbol = ConsBOL()
        self.p, self.q, self.r = (NamedPoint(n) for n in "pqr")

    def test_consistent_report(self):
        """Test the report of a consistent knowledge base."""
        report = self.consbol.check([lt(self.p, self.q)])
        self.assertIsInstance(report, CheckReport)
        self.assertTrue(report.consistent)
        self.assertIsNotNone(report.model)
        self.assertIsNone(report.conflict)
        self.assertEqual(report.warnings, [])
        self.assertGreater(report.steps, 0)

    def test_inconsistent_report(self):
        """Test the report of an inconsistent knowledge base."""
        report = self.consbol.check([lt(self.p, self.q), gt(self.p, self.q)])
        self.assertFalse(report.consistent)
        self.assertIsNone(report.model)
        self.assertIsNotNone(report.conflict)
        self.assertTrue(any("Inconsistency" in w for w in report.warnings))

    def test_unhandled_warning(self):
        """Test that unhandled axioms are reported."""
        report = self.consbol.check([gapsize(self.p, self.q, Count(3))])
        self.assertTrue(report.consistent)
        self.assertEqual(report.unhandled, [gapsize(self.p, self.q, Count(3))])
        self.assertEqual(len(report.warnings), 1)

    def test_knowledge_base_input(self):
        """Test checking a knowledge base object."""
        kb = self.consbol.knowledge_base(lt(self.p, self.q), lt(self.q, self.r))
        self.assertIsInstance(kb, KnowledgeBase)
        self.assertTrue(self.consbol.is_consistent(kb))
        self.assertEqual(len(kb), 2)

    def test_single_axiom_input(self):
        """Test checking a lone axiom."""
        self.assertFalse(self.consbol.is_consistent(FALSE))

    def test_raw_result(self):
        """Test access to the engine result."""
        result = self.consbol.reason([le(self.p, self.q)])
        self.assertTrue(result.is_consistent())
        self.assertEqual(result.branches, 2)


class TestEntailment(unittest.TestCase):
    """Test entailment queries."""

    def setUp(self):
        self.consbol = ConsBOL()
        self.p, self.q, self.r = (NamedPoint(n) for n in "pqr")

    def test_transitivity(self):
        """Test that p < q and q < r entail p < r."""
        premises = [lt(self.p, self.q), lt(self.q, self.r)]
        self.assertTrue(self.consbol.entails(premises, lt(self.p, self.r)))
        self.assertFalse(self.consbol.entails(premises, lt(self.r, self.p)))

    def test_normalized_query(self):
        """Test that queries are normalized before lookup."""
        self.assertTrue(self.consbol.entails([lt(self.p, self.q)], gt(self.q, self.p)))

    def test_disjunctive_query(self):
        """Test that a disjunctive query needs one known disjunct."""
        query = disjunction(lt(self.q, self.p), lt(self.p, self.q))
        self.assertTrue(self.consbol.entails([lt(self.p, self.q)], query))

    def test_inconsistent_premises(self):
        """Test that an inconsistent knowledge base entails anything."""
        premises = [lt(self.p, self.q), lt(self.q, self.p)]
        self.assertTrue(self.consbol.entails(premises, equivalent(self.p, self.r)))


class TestExpand(unittest.TestCase):
    """Test one round of rewriting."""

    def setUp(self):
        self.consbol = ConsBOL()
        self.p, self.q = NamedPoint("p"), NamedPoint("q")

    def test_normalize_then_simplify(self):
        """Test that ≥ is normalized to ≤ and then simplified."""
        kb = self.consbol.expand([ge(self.p, self.q)])
        self.assertEqual(kb.axioms, [disjunction(lt(self.q, self.p), equivalent(self.q, self.p))])

    def test_fundamental_unchanged(self):
        """Test that fundamental relations are left as they are."""
        kb = self.consbol.expand(lt(self.p, self.q))
        self.assertEqual(kb.axioms, [lt(self.p, self.q)])

    def test_one_round_only(self):
        """Test that the results of a round are not rewritten again."""
        a, b = NamedInterval("a"), NamedInterval("b")
        kb = self.consbol.expand([does_not_overlap(a, b)])
        self.assertEqual(kb.axioms, [disjunction(before(a, b), before(b, a))])

    def test_inverse_is_normalized_and_simplified(self):
        """Test that after(a, b) becomes the ends of before(b, a)."""
        a, b = NamedInterval("a"), NamedInterval("b")
        (expanded,) = self.consbol.expand([after(a, b)]).axioms
        kinds = {ax.kind for ax in expanded}
        self.assertEqual(kinds, {IntervalKind.RIGHT, IntervalKind.LEFT, PointKind.LT})


class TestIntervals(unittest.TestCase):
    """Test the interval vocabulary end to end."""

    def setUp(self):
        self.consbol = ConsBOL()
        self.a, self.b, self.c = (NamedInterval(n) for n in "abc")

    def test_before_orders_ends(self):
        """Test that before(a, b) puts the right end of a before the left end of b."""
        report = self.consbol.check([before(self.a, self.b)])
        model = report.model
        positions = model.submodel(INTERVAL_SUBMODEL)
        ra = positions.value_of(model, IntervalKind.RIGHT, self.a)
        lb = positions.value_of(model, IntervalKind.LEFT, self.b)
        self.assertIsNotNone(ra)
        self.assertIsNotNone(lb)
        self.assertTrue(model.submodel(ORDER_SUBMODEL).precedes(model, ra, lb))

    def test_shared_ends(self):
        """Test that starts_with(b, c) gives b and c the same left end."""
        report = self.consbol.check([before(self.a, self.b), starts_with(self.b, self.c)])
        self.assertTrue(report.consistent)
        model = report.model
        positions = model.submodel(INTERVAL_SUBMODEL)
        lb = positions.value_of(model, IntervalKind.LEFT, self.b)
        lc = positions.value_of(model, IntervalKind.LEFT, self.c)
        self.assertTrue(model.equality.equivalent(lb, lc))

    def test_within_and_same_location(self):
        """Test that a strictly inner interval cannot share its location."""
        self.assertFalse(self.consbol.is_consistent(
            [within(self.a, self.b), same_location(self.a, self.b)]))
        self.assertFalse(self.consbol.is_consistent(
            [same_location(self.a, self.b), within(self.a, self.b)]))

    def test_contains_and_same_location(self):
        """Test that a non-strict containment allows the same location."""
        self.assertTrue(self.consbol.is_consistent(
            [contains(self.a, self.b), same_location(self.a, self.b)]))

    def test_containing_point(self):
        """Test that a contained point lies between the interval's ends."""
        p = NamedPoint("p")
        report = self.consbol.check([containing(self.a, p), left(self.a, NamedPoint("l"))])
        self.assertTrue(report.consistent)
        positions = report.model.submodel(INTERVAL_SUBMODEL)
        self.assertTrue(report.model.equality.equivalent(
            positions.value_of(report.model, IntervalKind.LEFT, self.a), NamedPoint("l")))

    def test_lengths_are_unhandled(self):
        """Test that relative lengths surface as unhandled lengths."""
        report = self.consbol.check([shorter_than(self.a, self.b)])
        self.assertTrue(report.consistent)
        kinds = {ax.kind for ax in report.unhandled}
        self.assertEqual(kinds, {IntervalKind.INTERVAL_LENGTH})

    def test_signature(self):
        """Test that points are not intervals."""
        from axiom_base import StructuralViolation
        with self.assertRaises(StructuralViolation):
            self.consbol.check([right(NamedPoint("p"), NamedPoint("q"))])


class TestStrands(unittest.TestCase):
    """Test strands and stranded intervals end to end."""

    def setUp(self):
        self.consbol = ConsBOL()
        self.x, self.y = NamedStrandedInterval("x"), NamedStrandedInterval("y")

    def test_same_strand_conflict(self):
        """Test that intervals on the same strand cannot be on different ones."""
        self.assertFalse(self.consbol.is_consistent([
            same_strand(self.x, self.y),
            strand(self.x, TOP_STRAND),
            strand(self.y, BOTTOM_STRAND),
        ]))

    def test_different_strand_conflict(self):
        """Test that intervals on different strands cannot share one."""
        self.assertFalse(self.consbol.is_consistent([
            different_strand(self.x, self.y),
            strand(self.x, TOP_STRAND),
            strand(self.y, TOP_STRAND),
        ]))
        self.assertTrue(self.consbol.is_consistent([
            different_strand(self.x, self.y),
            strand(self.x, TOP_STRAND),
            strand(self.y, BOTTOM_STRAND),
        ]))

    def test_same_strand_propagates(self):
        """Test that the strand of one interval carries over."""
        self.assertTrue(self.consbol.entails(
            [same_strand(self.x, self.y), strand(self.x, BOTTOM_STRAND)],
            strand(self.y, BOTTOM_STRAND)))

    def test_five_prime_on_top(self):
        """Test that the 5' end of a top strand interval is its left end."""
        p = NamedPoint("p")
        report = self.consbol.check([strand(self.x, TOP_STRAND), five_prime(self.x, p)])
        self.assertTrue(report.consistent)
        self.assertTrue(report.model.knows(left(self.x, p)))
        self.assertFalse(report.model.knows(right(self.x, p)))

    def test_upstream(self):
        """Test upstream_of on a known strand."""
        report = self.consbol.check([
            strand(self.y, TOP_STRAND),
            upstream_of(self.x, self.y),
        ])
        self.assertTrue(report.consistent)

    def test_end_indexed_relations(self):
        """Test that every end-indexed relation is consistent on its own."""
        for kind in (StrandedKind.STARTED_BY_55, StrandedKind.OVERLAPS_53,
                     StrandedKind.ABUTS_35):
            report = self.consbol.check([
                strand(self.x, TOP_STRAND),
                stranded_relation(kind, self.x, self.y),
            ])
            self.assertTrue(report.consistent, kind)


class TestInverter(unittest.TestCase):
    """Test the LacI/TetR inverter design."""

    def setUp(self):
        self.consbol = ConsBOL()

    def test_inverter_consistent(self):
        """Test that the inverter design is consistent."""
        report = self.consbol.check(inverter())
        self.assertTrue(report.consistent)
        self.assertGreater(report.branches, 0)

    def test_describe(self):
        """Test the readable summary of the inverter."""
        report = self.consbol.check(inverter())
        lines = describe(report, [TETR_INVERTER, LACI_INVERTER])
        self.assertEqual(len(lines), 2)
        self.assertIn("strand=TOP_STRAND", lines[0])

    def test_unit_on_bottom_strand_conflicts(self):
        """Test that a part cannot leave the strand of its unit."""
        kb = tetr_inverter()
        kb.tell(strand(NamedStrandedInterval("lacI"), BOTTOM_STRAND))
        report = self.consbol.check(kb)
        self.assertFalse(report.consistent)
        self.assertEqual(describe(report, [TETR_INVERTER])[0][:12], "inconsistent")

    def test_verbose_trace(self):
        """Test that a verbose configuration traces reasoning."""
        config = ConsBOLGlobalConfig(verbose=True)
        consbol = ConsBOL(config)
        with self.assertLogs('consbol.trace', level='DEBUG'):
            consbol.check(tetr_inverter())

    def test_extra_observers(self):
        """Test that observers passed to the facade see every run."""
        recorder = RecordingObserver()
        consbol = ConsBOL(observers=[recorder])
        consbol.check(inverter())
        self.assertIn('branch_taken', recorder.names())


class TestConfig(unittest.TestCase):
    """Test configuration handling."""

    def test_save_and_load(self):
        """Test a JSON round trip of a non-default configuration."""
        config = ConsBOLGlobalConfig(
            reasoning=ReasoningConfig(max_steps=50, parallel_branches=True),
            log_level="DEBUG",
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "consbol.json")
            config.save(path)
            with open(path) as f:
                self.assertEqual(json.load(f)['reasoning']['max_steps'], 50)
            loaded = ConsBOLGlobalConfig.load(path)
        self.assertEqual(loaded, config)

    def test_from_dict_defaults(self):
        """Test that missing keys keep their defaults."""
        config = ConsBOLGlobalConfig.from_dict({'verbose': True})
        self.assertTrue(config.verbose)
        self.assertEqual(config.reasoning, ReasoningConfig())

    def test_unknown_log_level(self):
        """Test that an unknown log level is rejected."""
        with self.assertRaises(ValueError):
            configure_logging(ConsBOLGlobalConfig(log_level="LOUD"))

    def test_step_budget_reaches_engine(self):
        """Test that the reasoning configuration is passed to the engine."""
        config = ConsBOLGlobalConfig(reasoning=ReasoningConfig(max_steps=7))
        self.assertEqual(ConsBOL(config).engine.config.max_steps, 7)


if __name__ == '__main__':
    unittest.main()
