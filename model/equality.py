"""
Equality Model

The most important submodel. It tracks sets of entities that are equivalent,
as well as pairs of entities that are not.

Equivalence is modelled as disjoint interpretations: every member of an
equivalence class maps to the exact same Interpretation object.

Non-equivalence is not transitive, so it is stored per interpretation as the
set of interpretations known to be different from it. Those records are made
against identities that later merges retire, so the model keeps a forwarding
table from every retired identity to the interpretation that replaced it
(union-find with path compression). A record made against an old identity
always resolves to the live interpretation it has become.
"""

from typing import Dict, Set, List, Optional, Sequence, Tuple, FrozenSet, TYPE_CHECKING
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.entities import Entity
from axiom_base.axioms import Axiom, Relation, CoreKind, equivalent
from axiom_base.registry import EQUALITY_SUBMODEL

from .interpretation import Interpretation
from .submodel import Submodel

if TYPE_CHECKING:
    from .composite import Model


logger = logging.getLogger(__name__)


class EqualityModel(Submodel):
    """
    Tracks ≃ and ≄ assertions.

    Interpretations are allocated lazily: the first time an entity is
    touched it gets a singleton interpretation of its own.
    """

    def __init__(self, name: str = EQUALITY_SUBMODEL):
        super().__init__(name)
        self._interp: Dict[Entity, Interpretation] = {}
        self._live: Dict[int, Interpretation] = {}
        self._forward: Dict[int, int] = {}
        self._different: Dict[int, Set[int]] = {}

    # ------------------------------------------------------------------
    # Queries

    def lookup(self, entity: Entity) -> Optional[Interpretation]:
        """The current interpretation of an entity, without registering it."""
        return self._interp.get(entity)

    def interpretation(self, entity: Entity) -> Interpretation:
        """
        The current interpretation of an entity.

        If the entity was not known before, it is registered with a
        singleton interpretation.
        """
        interp = self._interp.get(entity)
        if interp is None:
            interp = Interpretation.singleton(entity)
            self._interp[entity] = interp
            self._live[interp.ident] = interp
        return interp

    def members_of(self, entity: Entity) -> FrozenSet[Entity]:
        """All entities known equivalent to the given one (itself included)."""
        interp = self._interp.get(entity)
        return interp.members if interp is not None else frozenset((entity,))

    def resolve(self, ident: int) -> Optional[Interpretation]:
        """
        Follow the forwarding table from an identity to the live interpretation.

        Returns None for identities this model never registered.
        """
        root = ident
        while root not in self._live:
            nxt = self._forward.get(root)
            if nxt is None:
                return None
            root = nxt

        # path compression
        while ident != root:
            nxt = self._forward[ident]
            self._forward[ident] = root
            ident = nxt

        return self._live[root]

    def equivalent(self, a: Entity, b: Entity) -> bool:
        """Test whether a and b are known to be the same entity."""
        if a == b:
            return True
        interp = self._interp.get(a)
        return interp is not None and interp is self._interp.get(b)

    def are_different(self, a: Entity, b: Entity) -> bool:
        """Test whether a and b are recorded as different entities."""
        ia = self._interp.get(a)
        ib = self._interp.get(b)
        if ia is None or ib is None:
            return False
        return self._records(ia, ib)

    def different_from(self, entity: Entity) -> List[Interpretation]:
        """The live interpretations recorded as different from an entity."""
        interp = self._interp.get(entity)
        if interp is None:
            return []
        found = {}
        for ident in self._different.get(interp.ident, ()):
            other = self.resolve(ident)
            if other is not None:
                found[other.ident] = other
        return list(found.values())

    def interpretations(self) -> List[Interpretation]:
        """All live interpretations."""
        return list(self._live.values())

    @property
    def entities(self) -> List[Entity]:
        return list(self._interp)

    def _records(self, a: Interpretation, b: Interpretation) -> bool:
        return any(self.resolve(d) is b for d in self._different.get(a.ident, ()))

    # ------------------------------------------------------------------
    # Submodel protocol

    def knows(self, rel: Relation, model: 'Model') -> bool:
        a, b = rel.args
        if rel.kind is CoreKind.EQUIVALENT:
            return self.equivalent(a, b)
        if rel.kind is CoreKind.NOT_EQUIVALENT:
            return self.are_different(a, b)
        return False

    def commit(self, rel: Relation, model: 'Model') -> List[Axiom]:
        a, b = rel.args

        if rel.kind is CoreKind.EQUIVALENT:
            return model.merge(a, b, rel)

        if rel.kind is CoreKind.NOT_EQUIVALENT:
            ia = self.interpretation(a)
            ib = self.interpretation(b)

            # non-equivalence is contradicted if they are already equivalent
            if ia is ib:
                raise self.conflict("entities are already equivalent",
                                    rel, equivalent(a, b))

            self._different.setdefault(ia.ident, set()).add(ib.ident)
            self._different.setdefault(ib.ident, set()).add(ia.ident)
            return []

        raise ValueError(f"{self.name} cannot commit {rel.kind!r}")

    def check_merge(self, model: 'Model', a: Interpretation, b: Interpretation,
                    union: Interpretation) -> Optional[str]:
        if self._records(a, b) or self._records(b, a):
            return "entities are recorded as different"
        return None

    def apply_merge(self, model: 'Model', a: Interpretation, b: Interpretation,
                    union: Interpretation) -> List[Axiom]:
        for entity in union.members:
            self._interp[entity] = union

        for old in (a, b):
            if self._live.pop(old.ident, None) is not None:
                self._forward[old.ident] = union.ident
        self._live[union.ident] = union

        different = self._different.pop(a.ident, set()) | self._different.pop(b.ident, set())
        if different:
            self._different[union.ident] = different

        logger.debug("Merged %r and %r into %r", a, b, union)
        return []

    def empty(self) -> 'EqualityModel':
        return EqualityModel(self.name)

    def copy(self) -> 'EqualityModel':
        new_model = EqualityModel(self.name)
        new_model._interp = dict(self._interp)
        new_model._live = dict(self._live)
        new_model._forward = dict(self._forward)
        new_model._different = {k: set(v) for k, v in self._different.items()}
        return new_model

    def absorb_common(self, result: 'Model',
                      branches: Sequence[Tuple['Model', 'EqualityModel']]) -> None:
        """
        Keep the equivalences and differences that hold in every branch.

        Two entities stay equivalent only if they are equivalent in all
        branches, so the common interpretation of an entity is the
        intersection of its interpretations across branches.
        """
        entities: Set[Entity] = set()
        for _, sub in branches:
            entities.update(sub._interp)

        for entity in entities:
            if entity in self._interp:
                continue
            common: Optional[FrozenSet[Entity]] = None
            for _, sub in branches:
                members = sub.members_of(entity)
                common = members if common is None else common & members
            interp = Interpretation(common)
            for member in interp.members:
                self._interp[member] = interp
            self._live[interp.ident] = interp

        _, first = branches[0]
        for ident, others in first._different.items():
            source = first.resolve(ident)
            if source is None:
                continue
            for other_ident in others:
                target = first.resolve(other_ident)
                if target is None:
                    continue
                lower = {self._interp[e].ident: self._interp[e] for e in source.members}
                upper = {self._interp[e].ident: self._interp[e] for e in target.members}
                for x in lower.values():
                    for y in upper.values():
                        if self._records(x, y):
                            continue
                        rx, ry = x.representative(), y.representative()
                        if all(sub.are_different(rx, ry) for _, sub in branches[1:]):
                            self._different.setdefault(x.ident, set()).add(y.ident)
                            self._different.setdefault(y.ident, set()).add(x.ident)

    def __repr__(self) -> str:
        lines = [f"EqualityModel with {len(self._live)} interpretations:"]
        for interp in sorted(self._live.values(), key=lambda i: i.ident):
            lines.append(f"  {interp}")
            for other in self.different_from(next(iter(interp.members))):
                lines.append(f"    ≄ {other}")
        return '\n'.join(lines)
