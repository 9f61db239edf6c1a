"""
Strands

Locations within DNA and RNA are often described in terms of the top and
bottom strands. The strand relation states which strand an entity is on; an
entity is on at most one strand, and the two strands are never the same.

    x strand s     the entity x is on strand s (TOP_STRAND or BOTTOM_STRAND)

Stranded orderings compare points relative to a strand. On the top strand
they are the plain point orderings; on the bottom strand they are reversed:

    a >ˢ b (s)  ⇒  b <ˢ a (s)                                 (normalize)
    a ≥ˢ b (s)  ⇒  b ≤ˢ a (s)                                 (normalize)
    a <ˢ b (s)  ⇒  (s ≃ Top ∧ a < b) ∨ (s ≃ Bottom ∧ b < a)   (simplify)
    a ≤ˢ b (s)  ⇒  (s ≃ Top ∧ a ≤ b) ∨ (s ≃ Bottom ∧ b ≤ a)   (simplify)
"""

from dataclasses import dataclass
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.entities import Entity
from axiom_base.axioms import (
    Relation,
    RelationKind,
    conjunction,
    disjunction,
    equivalent,
)
from axiom_base.registry import RuleRegistry

from .points import PointRep, lt, le


# Name of the submodel that commits strand
STRAND_SUBMODEL = "strand"


@dataclass(frozen=True)
class Strand(Entity):
    """One of the two strands of a biopolymer."""
    name: str

    def __str__(self) -> str:
        return self.name


TOP_STRAND = Strand("TOP_STRAND")
BOTTOM_STRAND = Strand("BOTTOM_STRAND")

STRANDS = frozenset((TOP_STRAND, BOTTOM_STRAND))


class StrandKind(RelationKind):
    """Strand membership and strand-relative point orderings."""
    STRAND = ("strand", 2)
    LT = ("<ˢ", 3)
    LE = ("≤ˢ", 3)
    GE = ("≥ˢ", 3)
    GT = (">ˢ", 3)


def strand(x: Entity, s: Entity) -> Relation:
    return Relation(StrandKind.STRAND, (x, s))


def stranded_lt(p: Entity, q: Entity, s: Entity) -> Relation:
    return Relation(StrandKind.LT, (p, q, s))


def stranded_le(p: Entity, q: Entity, s: Entity) -> Relation:
    return Relation(StrandKind.LE, (p, q, s))


def stranded_ge(p: Entity, q: Entity, s: Entity) -> Relation:
    return Relation(StrandKind.GE, (p, q, s))


def stranded_gt(p: Entity, q: Entity, s: Entity) -> Relation:
    return Relation(StrandKind.GT, (p, q, s))


def _normalize_gt(rel: Relation):
    p, q, s = rel.args
    return stranded_lt(q, p, s)


def _normalize_ge(rel: Relation):
    p, q, s = rel.args
    return stranded_le(q, p, s)


def _by_strand(s: Entity, on_top, on_bottom):
    return disjunction(
        conjunction(equivalent(s, TOP_STRAND), on_top),
        conjunction(equivalent(s, BOTTOM_STRAND), on_bottom),
    )


def _simplify_lt(rel: Relation):
    p, q, s = rel.args
    return _by_strand(s, lt(p, q), lt(q, p))


def _simplify_le(rel: Relation):
    p, q, s = rel.args
    return _by_strand(s, le(p, q), le(q, p))


def register_strands(registry: RuleRegistry) -> RuleRegistry:
    """Register the strand vocabulary."""
    registry.register(StrandKind.STRAND, signature=(Entity, Strand), submodel=STRAND_SUBMODEL)
    signature = (PointRep, PointRep, Strand)
    registry.register(StrandKind.LT, signature=signature, simplify=_simplify_lt)
    registry.register(StrandKind.LE, signature=signature, simplify=_simplify_le)
    registry.register(StrandKind.GE, signature=signature, normalize=_normalize_ge)
    registry.register(StrandKind.GT, signature=signature, normalize=_normalize_gt)
    return registry
