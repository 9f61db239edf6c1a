"""
Error taxonomy for axiom reasoning.

Two kinds of failure are kept strictly apart:

- ModelConflict: a genuine logical contradiction (an equivalence that clashes
  with a recorded non-equivalence, an ordering cycle, incompatible
  single-valued tags). It only closes the branch it occurs in; the engine
  catches it and reports the branch as unsatisfiable.
- StructuralViolation: a malformed axiom or a broken vocabulary (wrong arity,
  a non-entity argument, a rewrite rule that makes no progress). It signals a
  defect in the code that built the axioms and is never caught by the engine.

Rewrite misses and unhandled axioms are not errors at all and have no
exception type.
"""

from typing import Tuple, Optional, Any
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Conflict:
    """
    Description of a contradiction found while building a model.

    Attributes:
        reason: Human readable account of the contradiction
        axioms: The axioms involved (the triggering axiom first)
        submodel: Name of the submodel that reported it (if any)
        veto: True if the conflict is a vetoed equivalence merge
        causes: Conflicts of the failed branches, for a failed disjunction
    """
    reason: str
    axioms: Tuple[Any, ...] = ()
    submodel: Optional[str] = None
    veto: bool = False
    causes: Tuple['Conflict', ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        where = f"[{self.submodel}] " if self.submodel else ""
        if self.axioms:
            involved = ', '.join(str(a) for a in self.axioms)
            return f"{where}{self.reason}: {involved}"
        return f"{where}{self.reason}"


class ModelConflict(Exception):
    """A commit or merge contradicts what the model already knows."""

    def __init__(self, conflict: Conflict):
        super().__init__(str(conflict))
        self.conflict = conflict


class StructuralViolation(Exception):
    """A malformed axiom or a defective vocabulary rule."""


class RewriteLimitExceeded(StructuralViolation):
    """A reasoning run took more steps than the configured budget."""
