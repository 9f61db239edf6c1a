"""
Entities: the things axioms talk about.

An entity is either a concrete value supplied by a vocabulary (a named point,
a strand, an interval) or a Variable. Variables stand for entities that are
known to exist but may never be identified; two or more variables may end up
referring to the same thing.

Variables are identity-only placeholders. They are allocated from an arena as
integer indices, and two variables are equal exactly when their indices are.
"""

from typing import Tuple
from dataclasses import dataclass
import threading


class Entity:
    """
    Base class for everything an axiom may refer to.

    Concrete entities are frozen dataclasses deriving from this class and
    carry their own data; equality is value equality within one class.
    """

    __slots__ = ()

    @property
    def is_variable(self) -> bool:
        return False


@dataclass(frozen=True)
class Variable(Entity):
    """
    A placeholder for an unknown entity.

    Attributes:
        index: Position in the arena that allocated it
    """
    index: int

    @property
    def is_variable(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"?{self.index}"

    def __str__(self) -> str:
        return f"?{self.index}"


class VariableArena:
    """
    Allocator of fresh variables.

    Indices are never reused, so every variable handed out by one arena is
    distinct from every other. Allocation is safe across threads, which
    matters when disjunction branches are explored in parallel.
    """

    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def fresh(self) -> Variable:
        """Allocate one new variable."""
        with self._lock:
            index = self._next
            self._next += 1
        return Variable(index)

    def fresh_variables(self, n: int) -> Tuple[Variable, ...]:
        """Allocate n new variables."""
        if n < 0:
            raise ValueError("Cannot allocate a negative number of variables")
        with self._lock:
            start = self._next
            self._next += n
        return tuple(Variable(i) for i in range(start, start + n))

    @property
    def allocated(self) -> int:
        """Number of variables handed out so far."""
        return self._next - 1


# Process-wide arena used by vocabulary rewrite rules
DEFAULT_ARENA = VariableArena()


def fresh() -> Variable:
    """Allocate a new variable from the default arena."""
    return DEFAULT_ARENA.fresh()


def fresh_variables(n: int) -> Tuple[Variable, ...]:
    """Allocate n new variables from the default arena."""
    return DEFAULT_ARENA.fresh_variables(n)
