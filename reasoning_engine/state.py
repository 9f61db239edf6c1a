"""
Reasoning State

The state of one reasoning run: the pending axioms, the model built so far
and the axioms no submodel could handle.

A run moves through the states

    DRAINING  --(store empty, disjunction deferred)-->  BRANCHING
    BRANCHING --(recombined)-->                         DRAINING
    DRAINING  --(nothing pending)-->                    SOLVED
    DRAINING / BRANCHING --(conflict)-->                UNSATISFIABLE

Disjunctions taken from the store are set aside until every definite axiom
has been committed, so each disjunction is explored against everything that
is known for certain.

Each disjunction is recombined on its own, by intersecting its surviving
branch models; the result only holds facts entailed by the knowledge base.
Because that forgets how two disjunctions constrain each other, a solved run
that intersected anything is confirmed by a depth-first search for a single
world choosing one disjunct of every explored disjunction.
"""

from typing import Iterable, List, Set, Optional
from dataclasses import dataclass, field
from enum import Enum
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.axioms import Axiom
from axiom_base.errors import Conflict
from axiom_base.knowledge_base import KnowledgeBase
from model.composite import Model


class ReasoningStatus(Enum):
    """Where a reasoning run stands."""
    DRAINING = "draining"
    BRANCHING = "branching"
    UNSATISFIABLE = "unsatisfiable"
    SOLVED = "solved"


@dataclass
class ReasoningState:
    """
    Mutable state of a reasoning run.

    Attributes:
        kb: Pending axioms
        model: The model built so far
        unhandled: Fundamental axioms no submodel commits
        deferred: Disjunctions waiting for the definite axioms to drain
        branched: Top-level disjunctions that were explored branch by branch
        status: Current state of the run
    """
    kb: KnowledgeBase
    model: Model
    unhandled: Set[Axiom] = field(default_factory=set)
    deferred: List[Axiom] = field(default_factory=list)
    branched: List[Axiom] = field(default_factory=list)
    status: ReasoningStatus = ReasoningStatus.DRAINING

    def pending(self) -> bool:
        """True while axioms remain to be processed."""
        return bool(self.kb) or bool(self.deferred)

    def branch(self, axiom: Axiom, deferred: Iterable[Axiom] = ()) -> 'ReasoningState':
        """A fresh state holding a single axiom, a clone of the model and
        optionally disjunctions still waiting to be explored."""
        return ReasoningState(KnowledgeBase([axiom]), self.model.clone(), set(),
                              list(deferred))


@dataclass
class ReasoningResult:
    """
    Result of a reasoning run.

    Attributes:
        status: SOLVED or UNSATISFIABLE
        state: The final state (model and unhandled axioms)
        conflict: The contradiction found (if unsatisfiable)
        steps: Number of axioms processed, branches included
        branches: Number of disjunction branches explored
    """
    status: ReasoningStatus
    state: ReasoningState
    conflict: Optional[Conflict] = None
    steps: int = 0
    branches: int = 0

    def is_consistent(self) -> bool:
        return self.status == ReasoningStatus.SOLVED

    @property
    def model(self) -> Model:
        return self.state.model

    @property
    def unhandled(self) -> Set[Axiom]:
        return self.state.unhandled
