"""
Stranded Intervals

A stranded interval is an interval on exactly one strand. As the two strands
are anti-parallel, an interval pointing rightwards on the top strand points
leftwards on the bottom strand, which gives every stranded interval a 5' and
a 3' end:

    five_prime(a, p)   ⇔  (strand(a, Top) ∧ left(a, p)) ∨ (strand(a, Bottom) ∧ right(a, p))
    three_prime(a, p)  ⇔  (strand(a, Top) ∧ right(a, p)) ∨ (strand(a, Bottom) ∧ left(a, p))

Stranded intervals are on the same or on different strands:

    same_strand(a, b)       ⇔  strand(a, s) ∧ strand(b, s)
    different_strand(a, b)  ⇔  strand(a, s_a) ∧ strand(b, s_b) ∧ s_a ≄ s_b

Intervals are positioned relative to the strand of another (a^5', a^3' are
the stranded ends, s_a the strand of a):

    upstream_of(a, b)    ⇔  l_a <ˢ b^5' ∧ r_a <ˢ b^5'        (on s_b)
    downstream_of(a, b)  ⇔  l_a >ˢ b^3' ∧ r_a >ˢ b^3'        (on s_b)

and, indexed by the ends involved:

    started_by_55(a, b)  ⇔  a^5' ≃ b^5' ∧ a^3' >ˢ b^3'       (on s_b)
    started_by_53(a, b)  ⇔  a^5' ≃ b^3' ∧ a^3' >ˢ b^5'       (on s_b)
    started_by_35(a, b)  ⇔  a^3' ≃ b^5' ∧ a^5' <ˢ b^3'       (on s_b)
    started_by_33(a, b)  ⇔  a^3' ≃ b^3' ∧ a^5' <ˢ b^5'       (on s_b)

    overlaps_55(a, b)    ⇔  a^5' <ˢ b^5' ∧ a^5' >ˢ b^3' ∧ a^3' >ˢ b^5'   (on s_a)
    overlaps_53(a, b)    ⇔  a^5' <ˢ b^3' ∧ a^5' >ˢ b^5' ∧ a^3' >ˢ b^3'   (on s_a)
    overlaps_35(a, b)    ⇔  a^3' >ˢ b^5' ∧ a^3' <ˢ b^3' ∧ a^5' <ˢ b^5'   (on s_a)
    overlaps_33(a, b)    ⇔  a^3' >ˢ b^3' ∧ a^3' <ˢ b^5' ∧ a^5' <ˢ b^3'   (on s_a)

    abuts_55(a, b)       ⇔  a^5' <ˢ b^5' ∧ touches(a^5', b^5')           (on s_a)
    abuts_53(a, b)       ⇔  a^5' <ˢ b^3' ∧ touches(a^5', b^3')           (on s_a)
    abuts_35(a, b)       ⇔  a^3' >ˢ b^5' ∧ touches(a^3', b^5')           (on s_a)
    abuts_33(a, b)       ⇔  a^3' >ˢ b^3' ∧ touches(a^3', b^3')           (on s_a)
"""

from typing import Dict
from dataclasses import dataclass
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.entities import Entity, fresh, fresh_variables
from axiom_base.axioms import (
    Relation,
    RelationKind,
    conjunction,
    disjunction,
    equivalent,
    not_equivalent,
)
from axiom_base.registry import RuleRegistry

from .points import PointRep, touches
from .strands import (
    TOP_STRAND,
    BOTTOM_STRAND,
    strand,
    stranded_lt,
    stranded_gt,
)
from .intervals import IntervalRep, left, right


class StrandedIntervalRep(IntervalRep):
    """An interval on exactly one strand."""
    __slots__ = ()


@dataclass(frozen=True)
class NamedStrandedInterval(StrandedIntervalRep):
    """A stranded interval referred to by name."""
    name: str

    def __str__(self) -> str:
        return self.name


class StrandedKind(RelationKind):
    """Relations over stranded intervals."""
    FIVE_PRIME = ("five_prime", 2)
    THREE_PRIME = ("three_prime", 2)

    SAME_STRAND = ("same_strand", 2)
    DIFFERENT_STRAND = ("different_strand", 2)

    UPSTREAM_OF = ("upstream_of", 2)
    DOWNSTREAM_OF = ("downstream_of", 2)

    STARTED_BY_55 = ("started_by_55", 2)
    STARTED_BY_53 = ("started_by_53", 2)
    STARTED_BY_35 = ("started_by_35", 2)
    STARTED_BY_33 = ("started_by_33", 2)

    OVERLAPS_55 = ("overlaps_55", 2)
    OVERLAPS_53 = ("overlaps_53", 2)
    OVERLAPS_35 = ("overlaps_35", 2)
    OVERLAPS_33 = ("overlaps_33", 2)

    ABUTS_55 = ("abuts_55", 2)
    ABUTS_53 = ("abuts_53", 2)
    ABUTS_35 = ("abuts_35", 2)
    ABUTS_33 = ("abuts_33", 2)


def five_prime(a: Entity, p: Entity) -> Relation:
    return Relation(StrandedKind.FIVE_PRIME, (a, p))


def three_prime(a: Entity, p: Entity) -> Relation:
    return Relation(StrandedKind.THREE_PRIME, (a, p))


def same_strand(a: Entity, b: Entity) -> Relation:
    return Relation(StrandedKind.SAME_STRAND, (a, b))


def different_strand(a: Entity, b: Entity) -> Relation:
    return Relation(StrandedKind.DIFFERENT_STRAND, (a, b))


def upstream_of(a: Entity, b: Entity) -> Relation:
    return Relation(StrandedKind.UPSTREAM_OF, (a, b))


def downstream_of(a: Entity, b: Entity) -> Relation:
    return Relation(StrandedKind.DOWNSTREAM_OF, (a, b))


def stranded_relation(kind: StrandedKind, a: Entity, b: Entity) -> Relation:
    """Build one of the end-indexed relations, e.g. overlaps_53."""
    return Relation(kind, (a, b))


# Ends

def _simplify_five_prime(rel: Relation):
    a, p = rel.args
    return disjunction(
        conjunction(strand(a, TOP_STRAND), left(a, p)),
        conjunction(strand(a, BOTTOM_STRAND), right(a, p)),
    )


def _simplify_three_prime(rel: Relation):
    a, p = rel.args
    return disjunction(
        conjunction(strand(a, TOP_STRAND), right(a, p)),
        conjunction(strand(a, BOTTOM_STRAND), left(a, p)),
    )


# Relative strands

def _simplify_same_strand(rel: Relation):
    a, b = rel.args
    s = fresh()
    return conjunction(strand(a, s), strand(b, s))


def _simplify_different_strand(rel: Relation):
    a, b = rel.args
    sa, sb = fresh_variables(2)
    return conjunction(strand(a, sa), strand(b, sb), not_equivalent(sa, sb))


def _simplify_upstream_of(rel: Relation):
    a, b = rel.args
    sb, la, ra, b5 = fresh_variables(4)
    return conjunction(left(a, la), right(a, ra), strand(b, sb), five_prime(b, b5),
                       stranded_lt(la, b5, sb), stranded_lt(ra, b5, sb))


def _simplify_downstream_of(rel: Relation):
    a, b = rel.args
    sb, la, ra, b3 = fresh_variables(4)
    return conjunction(left(a, la), right(a, ra), strand(b, sb), three_prime(b, b3),
                       stranded_gt(la, b3, sb), stranded_gt(ra, b3, sb))


# End-indexed relations

class _StrandedEnds:
    """Fresh variables for the strand and stranded ends of two intervals."""

    def __init__(self, a: Entity, b: Entity, strand_of: Entity):
        self.s, a5, b5, a3, b3 = fresh_variables(5)
        self.ends: Dict[str, Entity] = {'a5': a5, 'b5': b5, 'a3': a3, 'b3': b3}
        self.axioms = [
            strand(strand_of, self.s),
            five_prime(a, a5), five_prime(b, b5),
            three_prime(a, a3), three_prime(b, b3),
        ]

    def __getitem__(self, name: str) -> Entity:
        return self.ends[name]


def _started_by(same, first, ordering, second):
    """x ≃ y for the shared ends, plus a stranded ordering on b's strand."""
    def simplify(rel: Relation):
        a, b = rel.args
        e = _StrandedEnds(a, b, b)
        x, y = same
        return conjunction(*e.axioms, equivalent(e[x], e[y]),
                           ordering(e[first], e[second], e.s))
    return simplify


def _overlaps(*orderings):
    """Three stranded orderings on a's strand."""
    def simplify(rel: Relation):
        a, b = rel.args
        e = _StrandedEnds(a, b, a)
        return conjunction(*e.axioms,
                           *(ordering(e[x], e[y], e.s) for ordering, x, y in orderings))
    return simplify


def _abuts(ordering, x, y):
    """A stranded ordering on a's strand, with the two ends touching."""
    def simplify(rel: Relation):
        a, b = rel.args
        e = _StrandedEnds(a, b, a)
        return conjunction(*e.axioms, ordering(e[x], e[y], e.s), touches(e[x], e[y]))
    return simplify


LT, GT = stranded_lt, stranded_gt


def register_stranded(registry: RuleRegistry) -> RuleRegistry:
    """Register the stranded interval vocabulary."""
    K = StrandedKind
    pair = (StrandedIntervalRep, StrandedIntervalRep)

    registry.register(K.FIVE_PRIME, signature=(StrandedIntervalRep, PointRep),
                      simplify=_simplify_five_prime)
    registry.register(K.THREE_PRIME, signature=(StrandedIntervalRep, PointRep),
                      simplify=_simplify_three_prime)

    registry.register(K.SAME_STRAND, signature=pair, simplify=_simplify_same_strand)
    registry.register(K.DIFFERENT_STRAND, signature=pair,
                      simplify=_simplify_different_strand)

    registry.register(K.UPSTREAM_OF, signature=(IntervalRep, StrandedIntervalRep),
                      simplify=_simplify_upstream_of)
    registry.register(K.DOWNSTREAM_OF, signature=(IntervalRep, StrandedIntervalRep),
                      simplify=_simplify_downstream_of)

    registry.register(K.STARTED_BY_55, signature=pair,
                      simplify=_started_by(('a5', 'b5'), 'a3', GT, 'b3'))
    registry.register(K.STARTED_BY_53, signature=pair,
                      simplify=_started_by(('a5', 'b3'), 'a3', GT, 'b5'))
    registry.register(K.STARTED_BY_35, signature=pair,
                      simplify=_started_by(('a3', 'b5'), 'a5', LT, 'b3'))
    registry.register(K.STARTED_BY_33, signature=pair,
                      simplify=_started_by(('a3', 'b3'), 'a5', LT, 'b5'))

    registry.register(K.OVERLAPS_55, signature=pair, simplify=_overlaps(
        (LT, 'a5', 'b5'), (GT, 'a5', 'b3'), (GT, 'a3', 'b5')))
    registry.register(K.OVERLAPS_53, signature=pair, simplify=_overlaps(
        (LT, 'a5', 'b3'), (GT, 'a5', 'b5'), (GT, 'a3', 'b3')))
    registry.register(K.OVERLAPS_35, signature=pair, simplify=_overlaps(
        (GT, 'a3', 'b5'), (LT, 'a3', 'b3'), (LT, 'a5', 'b5')))
    registry.register(K.OVERLAPS_33, signature=pair, simplify=_overlaps(
        (GT, 'a3', 'b3'), (LT, 'a3', 'b5'), (LT, 'a5', 'b3')))

    registry.register(K.ABUTS_55, signature=pair, simplify=_abuts(LT, 'a5', 'b5'))
    registry.register(K.ABUTS_53, signature=pair, simplify=_abuts(LT, 'a5', 'b3'))
    registry.register(K.ABUTS_35, signature=pair, simplify=_abuts(GT, 'a3', 'b5'))
    registry.register(K.ABUTS_33, signature=pair, simplify=_abuts(GT, 'a3', 'b3'))
    return registry
