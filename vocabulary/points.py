"""
Points and Point Ordering

A point is a defined place within a biopolymer. Points are well-ordered from
left to right, so every pair-wise constraint on two points can be expressed
with < and ≃:

| Term              | Definition                                   |
|-------------------|----------------------------------------------|
| p < q             | p is to the left of q                        |
| p ≤ q             | p is to the left of, or at the same place as q |
| p ≥ q             | p is at the same place as, or to the right of q |
| p > q             | p is to the right of q                       |

Rewrites:
    p > q  ⇒  q < p                        (normalize)
    p ≥ q  ⇒  q ≤ p                        (normalize)
    p ≤ q  ⇒  p < q ∨ p ≃ q                (simplify)

Two points touch when they are adjacent, with no point between them:
    touches(p, q)         ⇒  gapsize(p, q, 0)              (normalize)
    does_not_touch(p, q)  ⇒  gapsize(p, q, n) ∧ 0 < n      (normalize)

gapsize itself is never committed; it surfaces as unhandled.
"""

from dataclasses import dataclass
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.entities import Entity, fresh
from axiom_base.axioms import (
    Relation,
    RelationKind,
    conjunction,
    disjunction,
    equivalent,
)
from axiom_base.registry import RuleRegistry


# Name of the submodel that commits <
ORDER_SUBMODEL = "order"


class PointRep(Entity):
    """A defined place within a biopolymer."""
    __slots__ = ()


@dataclass(frozen=True)
class NamedPoint(PointRep):
    """A point referred to by name."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Position(PointRep):
    """A point at a numbered place."""
    at: int

    def __str__(self) -> str:
        return f"@{self.at}"


@dataclass(frozen=True)
class Count(Entity):
    """A non-negative whole number, such as the size of a gap."""
    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError(f"Count must be non-negative, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)


class PointKind(RelationKind):
    """Relations over points."""
    LT = ("<", 2)
    LE = ("≤", 2)
    GE = ("≥", 2)
    GT = (">", 2)
    GAPSIZE = ("gapsize", 3)
    TOUCHES = ("touches", 2)
    DOES_NOT_TOUCH = ("does_not_touch", 2)


def lt(p: Entity, q: Entity) -> Relation:
    return Relation(PointKind.LT, (p, q))


def le(p: Entity, q: Entity) -> Relation:
    return Relation(PointKind.LE, (p, q))


def ge(p: Entity, q: Entity) -> Relation:
    return Relation(PointKind.GE, (p, q))


def gt(p: Entity, q: Entity) -> Relation:
    return Relation(PointKind.GT, (p, q))


def gapsize(p: Entity, q: Entity, n: Entity) -> Relation:
    """There are exactly n points strictly between p and q."""
    return Relation(PointKind.GAPSIZE, (p, q, n))


def touches(p: Entity, q: Entity) -> Relation:
    return Relation(PointKind.TOUCHES, (p, q))


def does_not_touch(p: Entity, q: Entity) -> Relation:
    return Relation(PointKind.DOES_NOT_TOUCH, (p, q))


# Rewrite rules

def _normalize_gt(rel: Relation):
    p, q = rel.args
    return lt(q, p)


def _normalize_ge(rel: Relation):
    p, q = rel.args
    return le(q, p)


def _simplify_le(rel: Relation):
    p, q = rel.args
    return disjunction(lt(p, q), equivalent(p, q))


def _normalize_touches(rel: Relation):
    p, q = rel.args
    return gapsize(p, q, Count(0))


def _normalize_does_not_touch(rel: Relation):
    p, q = rel.args
    n = fresh()
    return conjunction(gapsize(p, q, n), lt(Count(0), n))


def register_points(registry: RuleRegistry) -> RuleRegistry:
    """Register the point vocabulary."""
    # < also orders counts and lengths, so its arguments are not restricted
    registry.register(PointKind.LT, signature=(Entity, Entity), submodel=ORDER_SUBMODEL)
    registry.register(PointKind.LE, signature=(Entity, Entity), simplify=_simplify_le)
    registry.register(PointKind.GE, signature=(Entity, Entity), normalize=_normalize_ge)
    registry.register(PointKind.GT, signature=(Entity, Entity), normalize=_normalize_gt)
    registry.register(PointKind.GAPSIZE, signature=(PointRep, PointRep, Count))
    registry.register(PointKind.TOUCHES, signature=(PointRep, PointRep),
                      normalize=_normalize_touches)
    registry.register(PointKind.DOES_NOT_TOUCH, signature=(PointRep, PointRep),
                      normalize=_normalize_does_not_touch)
    return registry
