"""
Strict order submodel.

Keeps the transitive closure of a strict order (such as `<` over points)
incrementally. For every interpretation the model stores the set of
interpretations known to come after it and the set known to come before it.
Adding p < q links everything before or at p to everything after or at q, so
membership queries never need a search.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, TYPE_CHECKING
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.entities import Entity
from axiom_base.axioms import Axiom, Relation, RelationKind

from .interpretation import Interpretation
from .submodel import Submodel

if TYPE_CHECKING:
    from .composite import Model


logger = logging.getLogger(__name__)


class OrderModel(Submodel):
    """
    Transitively closed strict order.

    Args:
        name: Submodel name
        kind: The binary relation kind committed here
    """

    def __init__(self, name: str, kind: RelationKind):
        super().__init__(name)
        if kind.arity != 2:
            raise ValueError(f"{kind!r} is not a binary relation kind")
        self.kind = kind
        self._after: Dict[int, Set[int]] = {}
        self._before: Dict[int, Set[int]] = {}

    def precedes(self, model: 'Model', p: Entity, q: Entity) -> bool:
        """Test whether p is known to come strictly before q."""
        ip = model.equality.lookup(p)
        iq = model.equality.lookup(q)
        if ip is None or iq is None:
            return False
        return iq.ident in self._after.get(ip.ident, ())

    def successors(self, model: 'Model', p: Entity) -> List[Interpretation]:
        """Interpretations known to come after p."""
        ip = model.equality.lookup(p)
        if ip is None:
            return []
        return [model.equality.resolve(i) for i in self._after.get(ip.ident, ())]

    def predecessors(self, model: 'Model', p: Entity) -> List[Interpretation]:
        """Interpretations known to come before p."""
        ip = model.equality.lookup(p)
        if ip is None:
            return []
        return [model.equality.resolve(i) for i in self._before.get(ip.ident, ())]

    def knows(self, rel: Relation, model: 'Model') -> bool:
        return rel.kind is self.kind and self.precedes(model, *rel.args)

    def commit(self, rel: Relation, model: 'Model') -> List[Axiom]:
        if rel.kind is not self.kind:
            raise ValueError(f"{self.name} cannot commit {rel.kind!r}")

        p, q = rel.args
        ip = model.equality.interpretation(p)
        iq = model.equality.interpretation(q)

        if ip is iq:
            raise self.conflict("an entity cannot precede itself", rel)
        if ip.ident in self._after.get(iq.ident, ()):
            logger.debug("%s closes a cycle", rel)
            raise self.conflict("ordering cycle", rel, Relation(self.kind, (q, p)))
        if iq.ident in self._after.get(ip.ident, ()):
            return []

        lower = self._before.get(ip.ident, set()) | {ip.ident}
        upper = self._after.get(iq.ident, set()) | {iq.ident}
        self._link(lower, upper)
        return []

    def _link(self, lower: Iterable[int], upper: Iterable[int]) -> None:
        lower = set(lower)
        upper = set(upper)
        for x in lower:
            self._after.setdefault(x, set()).update(upper)
        for y in upper:
            self._before.setdefault(y, set()).update(lower)

    def check_merge(self, model: 'Model', a: Interpretation, b: Interpretation,
                    union: Interpretation) -> Optional[str]:
        if b.ident in self._after.get(a.ident, ()) or a.ident in self._after.get(b.ident, ()):
            return "one entity is known to precede the other"
        return None

    def apply_merge(self, model: 'Model', a: Interpretation, b: Interpretation,
                    union: Interpretation) -> List[Axiom]:
        retired = {a.ident, b.ident}
        after = self._after.pop(a.ident, set()) | self._after.pop(b.ident, set())
        before = self._before.pop(a.ident, set()) | self._before.pop(b.ident, set())
        if not after and not before:
            return []

        u = union.ident
        for x in before:
            neighbours = self._after.setdefault(x, set())
            neighbours -= retired
            neighbours.add(u)
        for y in after:
            neighbours = self._before.setdefault(y, set())
            neighbours -= retired
            neighbours.add(u)
        self._after[u] = after
        self._before[u] = before

        # everything before the union now precedes everything after it
        self._link(before, after)
        return []

    def empty(self) -> 'OrderModel':
        return OrderModel(self.name, self.kind)

    def copy(self) -> 'OrderModel':
        new_model = self.empty()
        new_model._after = {k: set(v) for k, v in self._after.items()}
        new_model._before = {k: set(v) for k, v in self._before.items()}
        return new_model

    def absorb_common(self, result: 'Model',
                      branches: Sequence[Tuple['Model', 'OrderModel']]) -> None:
        eq = result.equality
        first_model, first = branches[0]
        seen: Set[Tuple[int, int]] = set()

        for ident, successors in first._after.items():
            source = first_model.equality.resolve(ident)
            if source is None:
                continue
            for succ in successors:
                target = first_model.equality.resolve(succ)
                if target is None:
                    continue
                for p in source.members:
                    for q in target.members:
                        ip, iq = eq.interpretation(p), eq.interpretation(q)
                        if (ip.ident, iq.ident) in seen:
                            continue
                        seen.add((ip.ident, iq.ident))
                        if iq.ident in self._after.get(ip.ident, ()):
                            continue
                        if all(s.precedes(m, p, q) for m, s in branches[1:]):
                            self._link(self._before.get(ip.ident, set()) | {ip.ident},
                                       self._after.get(iq.ident, set()) | {iq.ident})

    def __repr__(self) -> str:
        pairs = sum(len(v) for v in self._after.values())
        return f"OrderModel({self.name!r}, {self.kind.symbol}, {pairs} ordered pairs)"
