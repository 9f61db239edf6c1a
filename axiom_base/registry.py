"""
Rule registry: what each relation kind can do.

For every relation kind a vocabulary registers
- a signature: the entity sort expected in each argument position,
- an optional normalize rule: rewrite to the canonical form of the vocabulary,
- an optional simplify rule: rewrite to more fundamental axioms, possibly
  introducing fresh variables,
- optionally, the name of the submodel that commits the kind once it is
  fundamental.

Kinds that are never registered are still legal axioms. They have no rules
and end up in the reasoning state's unhandled set.

The registry is assembled once at start-up and frozen when an engine is
built on it.
"""

from typing import Dict, Tuple, Optional, Callable, Iterator
from dataclasses import dataclass

from .entities import Entity, Variable
from .axioms import Axiom, Relation, RelationKind, CoreKind
from .errors import StructuralViolation


RewriteRule = Callable[[Relation], Optional[Axiom]]

# Name of the submodel that commits ≃ and ≄
EQUALITY_SUBMODEL = "equality"


@dataclass(frozen=True)
class AxiomRules:
    """
    The capabilities registered for one relation kind.

    Attributes:
        kind: The relation kind
        signature: Entity sort per argument (empty means unchecked)
        normalize: Rule producing the normalized form, or None
        simplify: Rule producing the simplified form, or None
        submodel: Name of the committing submodel, or None
    """
    kind: RelationKind
    signature: Tuple[type, ...] = ()
    normalize: Optional[RewriteRule] = None
    simplify: Optional[RewriteRule] = None
    submodel: Optional[str] = None

    @property
    def is_fundamental(self) -> bool:
        """True if the kind is committed directly and never rewritten."""
        return self.normalize is None and self.simplify is None

    def validate(self, rel: Relation) -> None:
        """
        Check the arguments of a relation against the signature.

        Variables are accepted in every position.

        Raises:
            StructuralViolation: If an argument has the wrong sort
        """
        if not self.signature:
            return
        if len(self.signature) != len(rel.args):
            raise StructuralViolation(
                f"Signature of {self.kind.name} has {len(self.signature)} "
                f"positions but the relation has {len(rel.args)} arguments"
            )
        for position, (sort, arg) in enumerate(zip(self.signature, rel.args)):
            if isinstance(arg, Variable):
                continue
            if not isinstance(arg, sort):
                raise StructuralViolation(
                    f"Argument {position} of {self.kind.name} must be a "
                    f"{sort.__name__}, got {arg!r}"
                )


class RuleRegistry:
    """
    Registration table from relation kinds to their rules.

    The core kinds ≃ and ≄ are registered on construction and committed by
    the equality submodel.
    """

    def __init__(self):
        self._rules: Dict[RelationKind, AxiomRules] = {}
        self._frozen = False
        for kind in CoreKind:
            self.register(kind, signature=(Entity, Entity),
                          submodel=EQUALITY_SUBMODEL)

    def register(self,
                 kind: RelationKind,
                 signature: Tuple[type, ...] = (),
                 normalize: Optional[RewriteRule] = None,
                 simplify: Optional[RewriteRule] = None,
                 submodel: Optional[str] = None) -> AxiomRules:
        """
        Register the rules of a relation kind.

        Args:
            kind: The relation kind
            signature: Entity sort per argument position
            normalize: Normalization rule
            simplify: Simplification rule
            submodel: Name of the submodel committing the kind

        Returns:
            The registered AxiomRules

        Raises:
            RuntimeError: If the registry is frozen
            ValueError: If the kind is already registered
        """
        if self._frozen:
            raise RuntimeError("Cannot register rules on a frozen registry")
        if kind in self._rules:
            raise ValueError(f"Rules for {kind!r} are already registered")
        if signature and len(signature) != kind.arity:
            raise ValueError(
                f"Signature for {kind!r} has {len(signature)} positions, "
                f"expected {kind.arity}"
            )
        rules = AxiomRules(kind, tuple(signature), normalize, simplify, submodel)
        self._rules[kind] = rules
        return rules

    def rules_for(self, kind: RelationKind) -> Optional[AxiomRules]:
        """Get the rules for a kind, or None if it was never registered."""
        return self._rules.get(kind)

    def submodel_for(self, kind: RelationKind) -> Optional[str]:
        """Name of the submodel that commits a kind, if any."""
        rules = self._rules.get(kind)
        return rules.submodel if rules else None

    def merge(self, other: 'RuleRegistry') -> 'RuleRegistry':
        """
        Add all non-core rules of another registry to this one.

        Returns:
            This registry
        """
        for kind, rules in other._rules.items():
            if isinstance(kind, CoreKind):
                continue
            self.register(kind, rules.signature, rules.normalize,
                          rules.simplify, rules.submodel)
        return self

    def freeze(self) -> 'RuleRegistry':
        """Prevent further registrations."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def kinds(self) -> Tuple[RelationKind, ...]:
        return tuple(self._rules)

    def __contains__(self, kind: RelationKind) -> bool:
        return kind in self._rules

    def __iter__(self) -> Iterator[AxiomRules]:
        return iter(list(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({len(self._rules)} kinds, frozen={self._frozen})"
