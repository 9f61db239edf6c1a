"""
Intervals

The fundamental unit of biosequence design is the interval: a segment of the
biosequence, demarcated by its left-most and right-most contained points.

| Term               | Definition                                        |
|--------------------|---------------------------------------------------|
| a containing p     | the interval a contains the point p               |
| a left p           | the left-most point of a is p                     |
| a right p          | the right-most point of a is p                    |

left and right are single-valued and committed by the position submodel.
Every other interval relation is defined over the ends of the intervals
involved; with l_a, r_a, l_b, r_b the ends of a and b:

    same_location(a, b)     ⇔  l_a ≃ l_b ∧ r_a ≃ r_b
    contains(a, b)          ⇔  l_a ≤ l_b ∧ r_b ≤ r_a
    within(a, b)            ⇔  l_a < l_b ∧ r_b < r_a
    starts_with(a, b)       ⇔  l_a ≃ l_b ∧ r_b ≤ r_a
    ends_with(a, b)         ⇔  l_a ≤ l_b ∧ r_a ≃ r_b
    then(a, b)              ⇔  r_a < l_b ∧ touches(r_a, l_b)
    before(a, b)            ⇔  r_a < l_b
    gap_then(a, b)          ⇔  r_a < l_b ∧ does_not_touch(r_a, l_b)
    overlaps_with(a, b)     ⇔  l_b ≤ r_a ∧ l_a ≤ r_b

The inverse relations normalize onto these:

    contained_by(a, b) ⇒ contains(b, a)      start_of(a, b) ⇒ starts_with(b, a)
    end_of(a, b)       ⇒ ends_with(b, a)     after(a, b)    ⇒ before(b, a)
    does_not_overlap(a, b) ⇒ before(a, b) ∨ before(b, a)

Relative lengths compare interval_length values, which are never committed:

    shorter_than(a, b)     ⇔  len(a, n) ∧ len(b, m) ∧ n < m
    not_longer_than(a, b)  ⇔  len(a, n) ∧ len(b, m) ∧ n ≤ m
    same_length_as(a, b)   ⇔  len(a, n) ∧ len(b, m) ∧ n ≃ m
"""

from typing import List, Tuple
from dataclasses import dataclass
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.entities import Entity, Variable, fresh_variables
from axiom_base.axioms import (
    Axiom,
    Relation,
    RelationKind,
    conjunction,
    disjunction,
    equivalent,
)
from axiom_base.registry import RuleRegistry

from .points import PointRep, Count, lt, le, touches, does_not_touch


# Name of the submodel that commits left and right
INTERVAL_SUBMODEL = "interval"


class IntervalRep(Entity):
    """A segment of a biosequence."""
    __slots__ = ()


@dataclass(frozen=True)
class NamedInterval(IntervalRep):
    """An interval referred to by name."""
    name: str

    def __str__(self) -> str:
        return self.name


class IntervalKind(RelationKind):
    """Relations over intervals."""
    # interval and point
    CONTAINING = ("containing", 2)
    LEFT = ("left", 2)
    RIGHT = ("right", 2)

    # lengths
    INTERVAL_LENGTH = ("interval_length", 2)
    SHORTER_THAN = ("shorter_than", 2)
    NOT_LONGER_THAN = ("not_longer_than", 2)
    SAME_LENGTH_AS = ("same_length_as", 2)
    NOT_SHORTER_THAN = ("not_shorter_than", 2)
    LONGER_THAN = ("longer_than", 2)

    # topology
    SAME_LOCATION = ("same_location", 2)
    CONTAINS = ("contains", 2)
    CONTAINED_BY = ("contained_by", 2)
    WITHIN = ("within", 2)
    STARTS_WITH = ("starts_with", 2)
    START_OF = ("start_of", 2)
    ENDS_WITH = ("ends_with", 2)
    END_OF = ("end_of", 2)
    THEN = ("then", 2)
    BEFORE = ("before", 2)
    AFTER = ("after", 2)
    GAP_THEN = ("gap_then", 2)
    OVERLAPS_WITH = ("overlaps_with", 2)
    DOES_NOT_OVERLAP = ("does_not_overlap", 2)


def _binary(kind: IntervalKind):
    def build(a: Entity, b: Entity) -> Relation:
        return Relation(kind, (a, b))
    build.__name__ = kind.symbol
    build.__doc__ = f"Build a {kind.symbol} relation."
    return build


containing = _binary(IntervalKind.CONTAINING)
left = _binary(IntervalKind.LEFT)
right = _binary(IntervalKind.RIGHT)

interval_length = _binary(IntervalKind.INTERVAL_LENGTH)
shorter_than = _binary(IntervalKind.SHORTER_THAN)
not_longer_than = _binary(IntervalKind.NOT_LONGER_THAN)
same_length_as = _binary(IntervalKind.SAME_LENGTH_AS)
not_shorter_than = _binary(IntervalKind.NOT_SHORTER_THAN)
longer_than = _binary(IntervalKind.LONGER_THAN)

same_location = _binary(IntervalKind.SAME_LOCATION)
contains = _binary(IntervalKind.CONTAINS)
contained_by = _binary(IntervalKind.CONTAINED_BY)
within = _binary(IntervalKind.WITHIN)
starts_with = _binary(IntervalKind.STARTS_WITH)
start_of = _binary(IntervalKind.START_OF)
ends_with = _binary(IntervalKind.ENDS_WITH)
end_of = _binary(IntervalKind.END_OF)
then = _binary(IntervalKind.THEN)
before = _binary(IntervalKind.BEFORE)
after = _binary(IntervalKind.AFTER)
gap_then = _binary(IntervalKind.GAP_THEN)
overlaps_with = _binary(IntervalKind.OVERLAPS_WITH)
does_not_overlap = _binary(IntervalKind.DOES_NOT_OVERLAP)


def interval_ends(a: Entity, b: Entity) -> Tuple[Tuple[Variable, ...], List[Axiom]]:
    """
    Fresh variables for the ends of two intervals.

    Returns:
        (l_a, l_b, r_a, r_b) and the left/right axioms binding them
    """
    la, lb, ra, rb = fresh_variables(4)
    return (la, lb, ra, rb), [left(a, la), left(b, lb), right(a, ra), right(b, rb)]


# Interval and point

def _simplify_containing(rel: Relation):
    a, p = rel.args
    l, r = fresh_variables(2)
    return conjunction(left(a, l), le(l, p), right(a, r), le(p, r))


# Lengths

def _swap(build):
    def normalize(rel: Relation):
        a, b = rel.args
        return build(b, a)
    return normalize


def _lengths(compare):
    def simplify(rel: Relation):
        a, b = rel.args
        n, m = fresh_variables(2)
        return conjunction(interval_length(a, n), interval_length(b, m), compare(n, m))
    return simplify


# Topology

def _simplify_same_location(rel: Relation):
    (la, lb, ra, rb), ends = interval_ends(*rel.args)
    return conjunction(*ends, equivalent(la, lb), equivalent(ra, rb))


def _simplify_contains(rel: Relation):
    (la, lb, ra, rb), ends = interval_ends(*rel.args)
    return conjunction(*ends, le(la, lb), le(rb, ra))


def _simplify_within(rel: Relation):
    (la, lb, ra, rb), ends = interval_ends(*rel.args)
    return conjunction(*ends, lt(la, lb), lt(rb, ra))


def _simplify_starts_with(rel: Relation):
    (la, lb, ra, rb), ends = interval_ends(*rel.args)
    return conjunction(*ends, equivalent(la, lb), le(rb, ra))


def _simplify_ends_with(rel: Relation):
    (la, lb, ra, rb), ends = interval_ends(*rel.args)
    return conjunction(*ends, le(la, lb), equivalent(ra, rb))


def _gap(extra=None):
    def simplify(rel: Relation):
        a, b = rel.args
        ra, lb = fresh_variables(2)
        axioms = [right(a, ra), left(b, lb), lt(ra, lb)]
        if extra is not None:
            axioms.append(extra(ra, lb))
        return conjunction(*axioms)
    return simplify


def _simplify_overlaps_with(rel: Relation):
    (la, lb, ra, rb), ends = interval_ends(*rel.args)
    return conjunction(*ends, le(lb, ra), le(la, rb))


def _normalize_does_not_overlap(rel: Relation):
    a, b = rel.args
    return disjunction(before(a, b), before(b, a))


def register_intervals(registry: RuleRegistry) -> RuleRegistry:
    """Register the interval vocabulary."""
    K = IntervalKind
    pair = (IntervalRep, IntervalRep)

    registry.register(K.CONTAINING, signature=(IntervalRep, PointRep),
                      simplify=_simplify_containing)
    registry.register(K.LEFT, signature=(IntervalRep, PointRep), submodel=INTERVAL_SUBMODEL)
    registry.register(K.RIGHT, signature=(IntervalRep, PointRep), submodel=INTERVAL_SUBMODEL)

    registry.register(K.INTERVAL_LENGTH, signature=(IntervalRep, Count))
    registry.register(K.SHORTER_THAN, signature=pair, simplify=_lengths(lt))
    registry.register(K.NOT_LONGER_THAN, signature=pair, simplify=_lengths(le))
    registry.register(K.SAME_LENGTH_AS, signature=pair, simplify=_lengths(equivalent))
    registry.register(K.NOT_SHORTER_THAN, signature=pair, normalize=_swap(not_longer_than))
    registry.register(K.LONGER_THAN, signature=pair, normalize=_swap(shorter_than))

    registry.register(K.SAME_LOCATION, signature=pair, simplify=_simplify_same_location)
    registry.register(K.CONTAINS, signature=pair, simplify=_simplify_contains)
    registry.register(K.CONTAINED_BY, signature=pair, normalize=_swap(contains))
    registry.register(K.WITHIN, signature=pair, simplify=_simplify_within)
    registry.register(K.STARTS_WITH, signature=pair, simplify=_simplify_starts_with)
    registry.register(K.START_OF, signature=pair, normalize=_swap(starts_with))
    registry.register(K.ENDS_WITH, signature=pair, simplify=_simplify_ends_with)
    registry.register(K.END_OF, signature=pair, normalize=_swap(ends_with))
    registry.register(K.THEN, signature=pair, simplify=_gap(touches))
    registry.register(K.BEFORE, signature=pair, simplify=_gap())
    registry.register(K.AFTER, signature=pair, normalize=_swap(before))
    registry.register(K.GAP_THEN, signature=pair, simplify=_gap(does_not_touch))
    registry.register(K.OVERLAPS_WITH, signature=pair, simplify=_simplify_overlaps_with)
    registry.register(K.DOES_NOT_OVERLAP, signature=pair,
                      normalize=_normalize_does_not_overlap)
    return registry
