"""
Vocabulary Module - Biopolymer Composition Constraints

A reference vocabulary for the reasoning engine: points, strands, intervals
and stranded intervals within biopolymers, together with their rewrite rules
and the submodels that commit their fundamental relations.

Includes:
- Point ordering and adjacency
- Strands and strand-relative orderings
- Interval topology and lengths
- Stranded interval relations
- The LacI/TetR inverter example
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.registry import RuleRegistry
from model.composite import Model
from model.order import OrderModel
from model.assignment import TagModel, PositionModel

from .points import (
    ORDER_SUBMODEL,
    PointRep,
    NamedPoint,
    Position,
    Count,
    PointKind,
    lt, le, ge, gt,
    gapsize,
    touches,
    does_not_touch,
    register_points,
)
from .strands import (
    STRAND_SUBMODEL,
    Strand,
    TOP_STRAND,
    BOTTOM_STRAND,
    STRANDS,
    StrandKind,
    strand,
    stranded_lt, stranded_le, stranded_ge, stranded_gt,
    register_strands,
)
from .intervals import (
    INTERVAL_SUBMODEL,
    IntervalRep,
    NamedInterval,
    IntervalKind,
    containing, left, right,
    interval_length, shorter_than, not_longer_than, same_length_as,
    not_shorter_than, longer_than,
    same_location, contains, contained_by, within, starts_with, start_of,
    ends_with, end_of, then, before, after, gap_then, overlaps_with,
    does_not_overlap,
    register_intervals,
)
from .stranded import (
    StrandedIntervalRep,
    NamedStrandedInterval,
    StrandedKind,
    five_prime, three_prime,
    same_strand, different_strand,
    upstream_of, downstream_of,
    stranded_relation,
    register_stranded,
)
from .examples import tetr_inverter, laci_inverter, inverter


def build_registry() -> RuleRegistry:
    """A rule registry holding the whole biopolymer vocabulary."""
    registry = RuleRegistry()
    register_points(registry)
    register_strands(registry)
    register_intervals(registry)
    register_stranded(registry)
    return registry


def build_model(registry: RuleRegistry) -> Model:
    """An empty model with the submodels of the biopolymer vocabulary."""
    return Model(registry, [
        OrderModel(ORDER_SUBMODEL, PointKind.LT),
        TagModel(STRAND_SUBMODEL, [StrandKind.STRAND], STRANDS),
        PositionModel(INTERVAL_SUBMODEL, [IntervalKind.LEFT, IntervalKind.RIGHT]),
    ])


__all__ = [
    'build_registry', 'build_model',
    'ORDER_SUBMODEL', 'STRAND_SUBMODEL', 'INTERVAL_SUBMODEL',
    'PointRep', 'NamedPoint', 'Position', 'Count', 'PointKind',
    'lt', 'le', 'ge', 'gt', 'gapsize', 'touches', 'does_not_touch',
    'Strand', 'TOP_STRAND', 'BOTTOM_STRAND', 'STRANDS', 'StrandKind',
    'strand', 'stranded_lt', 'stranded_le', 'stranded_ge', 'stranded_gt',
    'IntervalRep', 'NamedInterval', 'IntervalKind',
    'containing', 'left', 'right',
    'interval_length', 'shorter_than', 'not_longer_than', 'same_length_as',
    'not_shorter_than', 'longer_than',
    'same_location', 'contains', 'contained_by', 'within', 'starts_with',
    'start_of', 'ends_with', 'end_of', 'then', 'before', 'after', 'gap_then',
    'overlaps_with', 'does_not_overlap',
    'StrandedIntervalRep', 'NamedStrandedInterval', 'StrandedKind',
    'five_prime', 'three_prime', 'same_strand', 'different_strand',
    'upstream_of', 'downstream_of', 'stranded_relation',
    'tetr_inverter', 'laci_inverter', 'inverter',
]
