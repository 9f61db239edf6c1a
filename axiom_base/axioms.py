"""
Axioms: statements about entities.

An axiom is one of
- a Relation: a tagged relation over entities, r(a, b, ...),
- a Conjunction or Disjunction of other axioms,
- one of the constants TRUE and FALSE.

Relation kinds are members of RelationKind enumerations. The member value is
a (symbol, arity) pair. The core enumeration holds the two equivalence
relations every model understands:

- a ≃ b: a and b are the same entity
- a ≄ b: a and b are different entities

Vocabularies contribute their own enumerations (point ordering, strands,
interval topology, ...) and register rewrite rules for them separately.

Every axiom reports its AxiomForm so the engine can dispatch on a closed set
of forms instead of inspecting classes.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Tuple, Iterable, Iterator
from dataclasses import dataclass

from .entities import Entity, Variable
from .errors import StructuralViolation


class AxiomForm(Enum):
    """The closed set of shapes an axiom can take."""
    RELATION = "relation"
    CONJUNCTION = "conjunction"
    DISJUNCTION = "disjunction"
    TRUE = "true"
    FALSE = "false"


class RelationKind(Enum):
    """
    Base for relation kind enumerations.

    Members carry a (symbol, arity) value, e.g. ``LT = ("<", 2)``.
    """

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def arity(self) -> int:
        return self.value[1]

    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"

    def __str__(self) -> str:
        return self.symbol


class CoreKind(RelationKind):
    """Relations understood by every model."""
    EQUIVALENT = ("≃", 2)       # same entity
    NOT_EQUIVALENT = ("≄", 2)   # different entities


class Axiom(ABC):
    """Base class for all axioms."""

    __slots__ = ()

    @property
    @abstractmethod
    def form(self) -> AxiomForm:
        """The shape of this axiom, used by the engine to dispatch."""


@dataclass(frozen=True)
class Relation(Axiom):
    """
    A relation of a given kind over a tuple of entities.

    Attributes:
        kind: The relation kind
        args: The related entities, in order
    """
    kind: RelationKind
    args: Tuple[Entity, ...]

    def __post_init__(self):
        if not isinstance(self.kind, RelationKind):
            raise StructuralViolation(f"Not a relation kind: {self.kind!r}")
        if not isinstance(self.args, tuple):
            object.__setattr__(self, 'args', tuple(self.args))
        if len(self.args) != self.kind.arity:
            raise StructuralViolation(
                f"{self.kind.name} takes {self.kind.arity} arguments, "
                f"got {len(self.args)}"
            )
        for arg in self.args:
            if not isinstance(arg, Entity):
                raise StructuralViolation(
                    f"{self.kind.name} refers to {arg!r}, which is not an entity"
                )

    @property
    def form(self) -> AxiomForm:
        return AxiomForm.RELATION

    @property
    def variables(self) -> Tuple[Variable, ...]:
        """The variables this relation mentions."""
        return tuple(a for a in self.args if isinstance(a, Variable))

    def __getitem__(self, index: int) -> Entity:
        return self.args[index]

    def __str__(self) -> str:
        if len(self.args) == 2:
            return f"{self.args[0]} {self.kind.symbol} {self.args[1]}"
        inner = ', '.join(str(a) for a in self.args)
        return f"{self.kind.symbol}({inner})"


def _check_members(axioms: Tuple, name: str) -> None:
    for ax in axioms:
        if not isinstance(ax, Axiom):
            raise StructuralViolation(f"{name} member {ax!r} is not an axiom")


@dataclass(frozen=True)
class Conjunction(Axiom):
    """All of the member axioms hold."""
    axioms: Tuple[Axiom, ...] = ()

    def __post_init__(self):
        if not isinstance(self.axioms, tuple):
            object.__setattr__(self, 'axioms', tuple(self.axioms))
        _check_members(self.axioms, "Conjunction")

    @property
    def form(self) -> AxiomForm:
        return AxiomForm.CONJUNCTION

    def __iter__(self) -> Iterator[Axiom]:
        return iter(self.axioms)

    def __len__(self) -> int:
        return len(self.axioms)

    def __str__(self) -> str:
        return '(' + ' ∧ '.join(str(a) for a in self.axioms) + ')'


@dataclass(frozen=True)
class Disjunction(Axiom):
    """At least one of the member axioms holds."""
    axioms: Tuple[Axiom, ...] = ()

    def __post_init__(self):
        if not isinstance(self.axioms, tuple):
            object.__setattr__(self, 'axioms', tuple(self.axioms))
        _check_members(self.axioms, "Disjunction")

    @property
    def form(self) -> AxiomForm:
        return AxiomForm.DISJUNCTION

    def __iter__(self) -> Iterator[Axiom]:
        return iter(self.axioms)

    def __len__(self) -> int:
        return len(self.axioms)

    def __str__(self) -> str:
        return '(' + ' ∨ '.join(str(a) for a in self.axioms) + ')'


@dataclass(frozen=True)
class Constant(Axiom):
    """The logical constants ⊤ and ⊥."""
    value: bool

    @property
    def form(self) -> AxiomForm:
        return AxiomForm.TRUE if self.value else AxiomForm.FALSE

    def __str__(self) -> str:
        return "⊤" if self.value else "⊥"


TRUE = Constant(True)
FALSE = Constant(False)


def relation(kind: RelationKind, *args: Entity) -> Relation:
    """Build a relation from a kind and its arguments."""
    return Relation(kind, args)


def conjunction(*axioms: Axiom) -> Conjunction:
    """Build a conjunction of the given axioms."""
    return Conjunction(axioms)


def disjunction(*axioms: Axiom) -> Disjunction:
    """Build a disjunction of the given axioms."""
    return Disjunction(axioms)


def equivalent(a: Entity, b: Entity) -> Relation:
    """a ≃ b"""
    return Relation(CoreKind.EQUIVALENT, (a, b))


def not_equivalent(a: Entity, b: Entity) -> Relation:
    """a ≄ b"""
    return Relation(CoreKind.NOT_EQUIVALENT, (a, b))


def flatten(axioms: Iterable) -> Iterator[Axiom]:
    """
    Yield the individual axioms in a possibly nested collection.

    Conjunctions are unpacked recursively; disjunctions and relations are
    yielded as they are.
    """
    for item in axioms:
        if isinstance(item, Conjunction):
            yield from flatten(item.axioms)
        elif isinstance(item, Axiom):
            yield item
        elif isinstance(item, (str, bytes)) or not hasattr(item, '__iter__'):
            raise StructuralViolation(f"Cannot tell {item!r}: not an axiom")
        else:
            yield from flatten(item)
