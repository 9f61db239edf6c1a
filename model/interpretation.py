"""
Interpretation sets.

Different axioms may use different variables, or different names, for the
same thing. The standard way to cope with this is to work with sets of
equivalent entities, called interpretations. Every data structure that book-
keeps entities indexes by interpretation instead of by entity.

Interpretations are immutable. Merging two of them creates a new one with a
fresh identity; the old identities are retired and forwarded to the new one
by the equality model. Because they never change, interpretations are shared
freely between cloned models.
"""

from typing import Iterable, Iterator, FrozenSet
import itertools
import threading
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.entities import Entity


_identities = itertools.count(1)
_identity_lock = threading.Lock()


def _next_identity() -> int:
    with _identity_lock:
        return next(_identities)


class Interpretation:
    """
    The maximal set of entities currently known to be equivalent.

    Two interpretations are compared by identity: within one model, two live
    interpretations are either the very same object or disjoint.

    Attributes:
        ident: Unique integer identity
        members: The equivalent entities
    """

    __slots__ = ('ident', 'members')

    def __init__(self, members: Iterable[Entity]):
        self.ident: int = _next_identity()
        self.members: FrozenSet[Entity] = frozenset(members)

    @classmethod
    def singleton(cls, entity: Entity) -> 'Interpretation':
        return cls((entity,))

    def union(self, *others: 'Interpretation') -> 'Interpretation':
        """Create the interpretation holding the members of all of them."""
        members = set(self.members)
        for other in others:
            members.update(other.members)
        return Interpretation(members)

    def representative(self) -> Entity:
        """A deterministic member, preferring concrete entities."""
        return min(self.members, key=lambda e: (e.is_variable, repr(e)))

    def __contains__(self, entity: Entity) -> bool:
        return entity in self.members

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __repr__(self) -> str:
        inner = ', '.join(sorted(str(e) for e in self.members))
        return f"I{self.ident}{{{inner}}}"
