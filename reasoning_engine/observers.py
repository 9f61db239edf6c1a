"""
Observer hooks.

Observers watch a reasoning run without influencing it. The engine calls the
hooks below at the corresponding events; an exception raised by an observer
is logged and otherwise ignored.
"""

from typing import Sequence
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.axioms import Axiom
from axiom_base.errors import Conflict


class ReasoningObserver:
    """Base observer; every hook does nothing."""

    def rewrite_applied(self, rewrite) -> None:
        """A relation was normalized or simplified."""

    def branch_taken(self, disjunction: Axiom, branches: Sequence[Axiom]) -> None:
        """A disjunction is about to be explored branch by branch."""

    def veto_occurred(self, conflict: Conflict) -> None:
        """A submodel refused an equivalence merge."""

    def axiom_unsatisfiable(self, axiom: Axiom, conflict: Conflict) -> None:
        """Committing an axiom contradicted the model."""

    def run_completed(self, result) -> None:
        """A top-level reasoning run finished."""


class LoggingObserver(ReasoningObserver):
    """Reports every hook to the standard logging tree."""

    def __init__(self, logger: logging.Logger = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    def rewrite_applied(self, rewrite) -> None:
        self.logger.log(self.level, "rewrite: %s", rewrite)

    def branch_taken(self, disjunction: Axiom, branches: Sequence[Axiom]) -> None:
        self.logger.log(self.level, "branching %d ways on %s", len(branches), disjunction)

    def veto_occurred(self, conflict: Conflict) -> None:
        self.logger.log(self.level, "merge vetoed: %s", conflict)

    def axiom_unsatisfiable(self, axiom: Axiom, conflict: Conflict) -> None:
        self.logger.log(self.level, "unsatisfiable: %s (%s)", axiom, conflict)

    def run_completed(self, result) -> None:
        self.logger.log(self.level, "run completed: %s after %d steps",
                        result.status.value, result.steps)


class RecordingObserver(ReasoningObserver):
    """Keeps every event in a list, mostly useful for inspection and tests."""

    def __init__(self):
        self.events = []

    def rewrite_applied(self, rewrite) -> None:
        self.events.append(('rewrite_applied', rewrite))

    def branch_taken(self, disjunction: Axiom, branches: Sequence[Axiom]) -> None:
        self.events.append(('branch_taken', disjunction))

    def veto_occurred(self, conflict: Conflict) -> None:
        self.events.append(('veto_occurred', conflict))

    def axiom_unsatisfiable(self, axiom: Axiom, conflict: Conflict) -> None:
        self.events.append(('axiom_unsatisfiable', axiom))

    def run_completed(self, result) -> None:
        self.events.append(('run_completed', result))

    def names(self):
        return [name for name, _ in self.events]
