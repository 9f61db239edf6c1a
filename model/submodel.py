"""
The Submodel protocol.

A full model is composed of several submodels. Each one deals with a
particular family of facts, understands a particular subset of the relation
kinds and keeps its state indexed by interpretation.

Merging two interpretations affects every submodel, so all of them take part
in the merge-veto protocol:

1. check_merge: inspect the candidate merge and return a reason to refuse it,
   or None. This step must not change any state.
2. apply_merge: only called once every submodel approved. Re-key the
   submodel's own state from the two source interpretations to their union,
   and return any axioms the merge implies.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.axioms import Axiom, Relation
from axiom_base.errors import Conflict, ModelConflict

from .interpretation import Interpretation

if TYPE_CHECKING:
    from .composite import Model


class Submodel(ABC):
    """
    Base class of all submodels.

    Attributes:
        name: Name under which the composite model and the rule registry
            refer to this submodel
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def commit(self, rel: Relation, model: 'Model') -> List[Axiom]:
        """
        Record a fundamental relation.

        Returns:
            Follow-up axioms to be told to the knowledge base

        Raises:
            ModelConflict: If the relation contradicts the submodel
        """

    @abstractmethod
    def knows(self, rel: Relation, model: 'Model') -> bool:
        """Test whether the relation is already recorded. Performs no inference."""

    def check_merge(self, model: 'Model', a: Interpretation, b: Interpretation,
                    union: Interpretation) -> Optional[str]:
        """Return a reason to veto merging a and b, or None to approve."""
        return None

    def apply_merge(self, model: 'Model', a: Interpretation, b: Interpretation,
                    union: Interpretation) -> List[Axiom]:
        """Re-key state after an approved merge and return implied axioms."""
        return []

    @abstractmethod
    def empty(self) -> 'Submodel':
        """A new, empty submodel with the same configuration."""

    @abstractmethod
    def copy(self) -> 'Submodel':
        """An independent copy of this submodel."""

    @abstractmethod
    def absorb_common(self, result: 'Model',
                      branches: Sequence[Tuple['Model', 'Submodel']]) -> None:
        """
        Fill this (empty) submodel with the facts common to all branches.

        Called while recombining a disjunction. `result` is the model under
        construction; its equality submodel has already been filled.

        Args:
            result: The recombined model this submodel belongs to
            branches: (branch model, matching submodel) for every surviving
                branch
        """

    def conflict(self, reason: str, *axioms: Axiom, veto: bool = False) -> ModelConflict:
        """Build the exception reporting a contradiction in this submodel."""
        return ModelConflict(Conflict(reason, tuple(axioms), self.name, veto))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
