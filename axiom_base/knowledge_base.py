"""
Knowledge base: the store of axioms that have not been analysed yet.

A knowledge base is essentially one big conjunction. Axioms are kept in a
last-in-first-out stack: reasoning pops the most recently told axiom and
pushes back whatever it rewrites to. The order in which independent axioms
are taken never changes whether a set of axioms is consistent.
"""

from typing import List, Iterable, Iterator, Optional

from .axioms import Axiom, flatten


class KnowledgeBase:
    """
    An ordered, mutable multiset of pending axioms.

    Example:
        kb = KnowledgeBase()
        kb.tell(lt(a, b), conjunction(lt(b, c), lt(c, d)))
        kb.tell([strand(x, TOP_STRAND) for x in parts])
    """

    def __init__(self, axioms: Optional[Iterable] = None):
        self._axioms: List[Axiom] = []
        if axioms is not None:
            self.tell(axioms)

    def tell(self, *axioms) -> 'KnowledgeBase':
        """
        Add axioms to the knowledge base.

        Each argument may be a single axiom, a conjunction (unpacked into its
        members, recursively) or a collection of either.

        Returns:
            The knowledge base itself, so calls can be chained
        """
        self._axioms.extend(flatten(axioms))
        return self

    def take(self) -> Axiom:
        """
        Remove and return one pending axiom.

        Raises:
            IndexError: If the knowledge base is empty
        """
        if not self._axioms:
            raise IndexError("take from an empty knowledge base")
        return self._axioms.pop()

    def copy(self) -> 'KnowledgeBase':
        """Create an independent copy (axioms are shared, they are immutable)."""
        new_kb = KnowledgeBase()
        new_kb._axioms = list(self._axioms)
        return new_kb

    @property
    def axioms(self) -> List[Axiom]:
        """The pending axioms, oldest first."""
        return list(self._axioms)

    def __len__(self) -> int:
        return len(self._axioms)

    def __bool__(self) -> bool:
        return bool(self._axioms)

    def __iter__(self) -> Iterator[Axiom]:
        return iter(list(self._axioms))

    def __repr__(self) -> str:
        lines = [f"KnowledgeBase with {len(self._axioms)} axioms:"]
        for ax in self._axioms:
            lines.append(f"  {ax}")
        return '\n'.join(lines)


# The store is called an AxiomStore in the engine's vocabulary
AxiomStore = KnowledgeBase
