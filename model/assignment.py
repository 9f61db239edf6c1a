"""
Single-valued assignment submodels.

Several vocabulary relations assign exactly one value to an entity: the strand
an interval lies on, the left or right end point of an interval. They all share
the same bookkeeping: per relation kind, a map from interpretation identity to
the assigned value.

- TagModel: the values are tags drawn from a set of mutually exclusive
  constants (e.g. the top and bottom strands). Two provably distinct tags on
  one interpretation are a contradiction.
- PositionModel: the values are arbitrary entities (e.g. points). A second
  value on one interpretation simply means both values are the same entity.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, TYPE_CHECKING
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.entities import Entity
from axiom_base.axioms import Axiom, Relation, RelationKind, equivalent

from .interpretation import Interpretation
from .submodel import Submodel

if TYPE_CHECKING:
    from .composite import Model
    from .equality import EqualityModel


logger = logging.getLogger(__name__)


class AssignmentModel(Submodel):
    """
    Base for submodels holding at most one value per kind and interpretation.

    Relations committed here are binary: kind(subject, value).

    Attributes:
        kinds: The relation kinds this submodel commits
    """

    def __init__(self, name: str, kinds: Iterable[RelationKind]):
        super().__init__(name)
        self.kinds: Tuple[RelationKind, ...] = tuple(kinds)
        for kind in self.kinds:
            if kind.arity != 2:
                raise ValueError(f"{kind!r} is not a binary relation kind")
        self._assigned: Dict[RelationKind, Dict[int, Entity]] = {k: {} for k in self.kinds}

    def value_of(self, model: 'Model', kind: RelationKind, subject: Entity) -> Optional[Entity]:
        """The value assigned to an entity, or None. Registers nothing."""
        interp = model.equality.lookup(subject)
        if interp is None:
            return None
        return self._table(kind).get(interp.ident)

    def assignments(self, kind: RelationKind) -> Dict[int, Entity]:
        """Copy of the identity to value map of one kind."""
        return dict(self._table(kind))

    def _table(self, kind: RelationKind) -> Dict[int, Entity]:
        try:
            return self._assigned[kind]
        except KeyError:
            raise ValueError(f"{self.name} does not commit {kind!r}") from None

    def knows(self, rel: Relation, model: 'Model') -> bool:
        if rel.kind not in self._assigned:
            return False
        subject, value = rel.args
        existing = self.value_of(model, rel.kind, subject)
        return existing is not None and model.equality.equivalent(existing, value)

    def commit(self, rel: Relation, model: 'Model') -> List[Axiom]:
        table = self._table(rel.kind)
        subject, value = rel.args
        holder = model.equality.interpretation(subject)

        existing = table.get(holder.ident)
        if existing is None:
            table[holder.ident] = value
            return []
        if model.equality.equivalent(existing, value):
            return []
        return self._reassign(model, rel, existing)

    def _reassign(self, model: 'Model', rel: Relation, existing: Entity) -> List[Axiom]:
        """Handle a second value for an interpretation that already has one."""
        return [equivalent(existing, rel.args[1])]

    def apply_merge(self, model: 'Model', a: Interpretation, b: Interpretation,
                    union: Interpretation) -> List[Axiom]:
        follow_up: List[Axiom] = []
        for table in self._assigned.values():
            va = table.pop(a.ident, None)
            vb = table.pop(b.ident, None)
            if va is None and vb is None:
                continue
            table[union.ident] = va if va is not None else vb
            if va is not None and vb is not None and not model.equality.equivalent(va, vb):
                follow_up.append(equivalent(va, vb))
        return follow_up

    def copy(self) -> 'AssignmentModel':
        new_model = self.empty()
        new_model._assigned = {k: dict(v) for k, v in self._assigned.items()}
        return new_model

    def absorb_common(self, result: 'Model',
                      branches: Sequence[Tuple['Model', 'AssignmentModel']]) -> None:
        eq = result.equality
        first_model, first = branches[0]

        for kind, table in first._assigned.items():
            target_table = self._assigned[kind]
            for ident, value in table.items():
                holder = first_model.equality.resolve(ident)
                if holder is None:
                    continue
                for subject in holder.members:
                    target = eq.interpretation(subject)
                    if target.ident in target_table:
                        continue
                    if all(self._agrees(eq, m, s, kind, subject, value) for m, s in branches[1:]):
                        target_table[target.ident] = value

    @staticmethod
    def _agrees(eq: 'EqualityModel', model: 'Model', sub: 'AssignmentModel',
                kind: RelationKind, subject: Entity, value: Entity) -> bool:
        other = sub.value_of(model, kind, subject)
        return other is not None and eq.equivalent(other, value)

    def __repr__(self) -> str:
        counts = ', '.join(f"{k.symbol}: {len(t)}" for k, t in self._assigned.items())
        return f"{type(self).__name__}({self.name!r}, {counts})"


class TagModel(AssignmentModel):
    """
    Single-valued tags with mutually exclusive constant values.

    Args:
        name: Submodel name
        kinds: Tag relation kinds
        exclusive: Constant values no two of which can be the same entity
    """

    def __init__(self, name: str, kinds: Iterable[RelationKind], exclusive: Iterable[Entity]):
        self.exclusive = frozenset(exclusive)
        super().__init__(name, kinds)

    def empty(self) -> 'TagModel':
        return TagModel(self.name, self.kinds, self.exclusive)

    def _exclusive_in(self, eq: 'EqualityModel', entity: Entity) -> Set[Entity]:
        return {m for m in eq.members_of(entity) if m in self.exclusive}

    def distinct(self, eq: 'EqualityModel', x: Entity, y: Entity) -> bool:
        """Test whether two tag values can be proven to be different."""
        if eq.equivalent(x, y):
            return False
        if eq.are_different(x, y):
            return True
        return len(self._exclusive_in(eq, x) | self._exclusive_in(eq, y)) > 1

    def _reassign(self, model: 'Model', rel: Relation, existing: Entity) -> List[Axiom]:
        subject, value = rel.args
        if self.distinct(model.equality, existing, value):
            logger.debug("%s contradicts %s %s %s", rel, subject, rel.kind.symbol, existing)
            raise self.conflict("incompatible tags", rel,
                                Relation(rel.kind, (subject, existing)))
        return [equivalent(existing, value)]

    def check_merge(self, model: 'Model', a: Interpretation, b: Interpretation,
                    union: Interpretation) -> Optional[str]:
        constants = [m for m in union.members if m in self.exclusive]
        if len(constants) > 1:
            return "would identify " + ' and '.join(sorted(str(c) for c in constants))

        eq = model.equality
        for kind, table in self._assigned.items():
            va = table.get(a.ident)
            vb = table.get(b.ident)
            if va is not None and vb is not None and self.distinct(eq, va, vb):
                return f"incompatible {kind.symbol} tags {va} and {vb}"
        return None


class PositionModel(AssignmentModel):
    """
    Single-valued positional assignments.

    A second value never contradicts the first; it means the two values are
    equivalent.
    """

    def empty(self) -> 'PositionModel':
        return PositionModel(self.name, self.kinds)
