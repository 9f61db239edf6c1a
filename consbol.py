"""
ConsBOL: Consistency Checking for Biopolymer Composition Constraints

Main orchestration module for ConsBOL.

This module provides a unified interface for:
1. Describing designs as knowledge bases of axioms
2. Checking a knowledge base for consistency
3. Querying the model of a consistent knowledge base
4. Expanding axioms by one round of rewriting

Usage:
    from consbol import ConsBOL
    from vocabulary import inverter

    consbol = ConsBOL()

    # Check consistency
    report = consbol.check(inverter())
    print(report.consistent)

    # Ask what follows
    consbol.entails([lt(p, q), lt(q, r)], lt(p, r))
"""

import sys
import os
import time
from typing import List, Optional, Iterable, Union, Callable
from dataclasses import dataclass, field
import logging

# Add project root to path for imports
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from axiom_base.axioms import Axiom, AxiomForm, flatten
from axiom_base.errors import Conflict
from axiom_base.knowledge_base import KnowledgeBase
from axiom_base.registry import RuleRegistry
from model.composite import Model
from reasoning_engine.dispatch import NORMALIZE
from reasoning_engine.engine import ReasoningEngine
from reasoning_engine.observers import ReasoningObserver, LoggingObserver
from reasoning_engine.state import ReasoningResult
from config import ConsBOLGlobalConfig, DEFAULT_CONFIG, configure_logging

from vocabulary import (
    build_registry,
    build_model,
    inverter,
    STRAND_SUBMODEL,
    INTERVAL_SUBMODEL,
    IntervalKind,
    StrandKind,
    NamedPoint,
    lt,
)
from vocabulary.examples import TETR_INVERTER, LACI_INVERTER


logger = logging.getLogger(__name__)


@dataclass
class CheckReport:
    """Result of checking a knowledge base."""
    # Verdict
    consistent: bool

    # Model of a consistent knowledge base
    model: Optional[Model] = None
    unhandled: List[Axiom] = field(default_factory=list)

    # Contradiction of an inconsistent knowledge base
    conflict: Optional[Conflict] = None

    # Metadata
    steps: int = 0
    branches: int = 0
    elapsed_ms: float = 0.0
    warnings: List[str] = field(default_factory=list)


class ConsBOL:
    """
    Main ConsBOL class.

    Provides a unified interface for checking and querying designs.
    """

    def __init__(self,
                 config: Optional[ConsBOLGlobalConfig] = None,
                 registry: Optional[RuleRegistry] = None,
                 model_factory: Optional[Callable[[RuleRegistry], Model]] = None,
                 observers: Iterable[ReasoningObserver] = ()):
        """
        Initialize ConsBOL.

        Args:
            config: Configuration options (uses defaults if None)
            registry: Vocabulary rules (the biopolymer vocabulary if None)
            model_factory: Builds empty models (the biopolymer submodels if None)
            observers: Observers of every reasoning run
        """
        self.config = config or DEFAULT_CONFIG

        observers = list(observers)
        if self.config.verbose:
            observers.append(LoggingObserver(logging.getLogger("consbol.trace")))

        self.engine = ReasoningEngine(
            registry if registry is not None else build_registry(),
            model_factory or build_model,
            self.config.reasoning,
            observers,
        )

    @property
    def registry(self) -> RuleRegistry:
        return self.engine.registry

    def knowledge_base(self, *axioms) -> KnowledgeBase:
        """Create a knowledge base holding the given axioms."""
        return KnowledgeBase(axioms)

    def reason(self, axioms: Union[Axiom, Iterable]) -> ReasoningResult:
        """Run the engine and return its raw result."""
        return self.engine.check(axioms)

    def check(self, axioms: Union[Axiom, Iterable]) -> CheckReport:
        """
        Check a knowledge base for consistency.

        This is the main entry point of ConsBOL.

        Args:
            axioms: A knowledge base, an axiom, or a collection of axioms

        Returns:
            CheckReport with the verdict and the model
        """
        start_time = time.time()
        result = self.engine.check(axioms)
        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug("Checked knowledge base in %.2fms", elapsed_ms)

        warnings = []
        if not result.is_consistent():
            warnings.append(f"Inconsistency detected: {result.conflict}")
        unhandled = sorted(result.unhandled, key=str)
        if unhandled:
            warnings.append(f"{len(unhandled)} axiom(s) could not be handled by any submodel")

        return CheckReport(
            consistent=result.is_consistent(),
            model=result.model if result.is_consistent() else None,
            unhandled=unhandled,
            conflict=result.conflict,
            steps=result.steps,
            branches=result.branches,
            elapsed_ms=elapsed_ms,
            warnings=warnings,
        )

    def is_consistent(self, axioms: Union[Axiom, Iterable]) -> bool:
        """
        Check if a knowledge base is consistent.

        Args:
            axioms: A knowledge base, an axiom, or a collection of axioms

        Returns:
            True if consistent, False otherwise
        """
        return self.engine.check(axioms).is_consistent()

    def entails(self, axioms: Union[Axiom, Iterable], query: Axiom) -> bool:
        """
        Test whether the model of a knowledge base records a query.

        An inconsistent knowledge base entails everything. The query is
        looked up as it is, and after normalization; it is never simplified,
        since simplification introduces fresh variables the model cannot
        know about.

        Args:
            axioms: The premises
            query: The axiom to look up

        Returns:
            True if the query follows from the premises
        """
        result = self.engine.check(axioms)
        if not result.is_consistent():
            return True
        return self._known(result.model, query)

    def _known(self, model: Model, query: Axiom) -> bool:
        if model.knows(query):
            return True
        if query.form is AxiomForm.CONJUNCTION:
            return all(self._known(model, a) for a in query)
        if query.form is AxiomForm.DISJUNCTION:
            return any(self._known(model, a) for a in query)
        rewrite = self.engine.dispatch.rewrite(query)
        if rewrite is not None and rewrite.rule == NORMALIZE:
            return self._known(model, rewrite.result)
        return False

    def expand(self, axioms: Union[Axiom, Iterable]) -> KnowledgeBase:
        """
        Apply one round of normalization and simplification to each axiom.

        Args:
            axioms: A knowledge base, an axiom, or a collection of axioms

        Returns:
            A new knowledge base holding the expanded axioms
        """
        if isinstance(axioms, Axiom):
            axioms = [axioms]
        return KnowledgeBase([self.engine.dispatch.expand(a) for a in flatten(axioms)])


def describe(report: CheckReport, names: Iterable) -> List[str]:
    """Readable summary of what a model knows about some entities."""
    if not report.consistent:
        return [f"inconsistent: {report.conflict}"]

    model = report.model

    def show(value):
        if value is None:
            return "?"
        interp = model.equality.lookup(value)
        return str(interp.representative() if interp is not None else value)

    strands = model.submodel(STRAND_SUBMODEL)
    positions = model.submodel(INTERVAL_SUBMODEL)
    lines = []
    for entity in names:
        on = strands.value_of(model, StrandKind.STRAND, entity)
        l = positions.value_of(model, IntervalKind.LEFT, entity)
        r = positions.value_of(model, IntervalKind.RIGHT, entity)
        lines.append(f"{entity}: strand={show(on)}, left={show(l)}, right={show(r)}")
    return lines


def main():
    """Main demonstration of ConsBOL capabilities."""
    configure_logging(DEFAULT_CONFIG)

    print("=" * 60)
    print("ConsBOL: Consistency Checking for Biopolymer Designs")
    print("=" * 60)

    consbol = ConsBOL()

    # Example 1: The LacI/TetR inverter
    print("\n1. LacI/TetR Inverter")
    print("-" * 40)

    kb = inverter()
    print(f"Knowledge base has {len(kb)} axioms")
    print(f"One round of rewriting gives {len(consbol.expand(kb))} axioms")

    report = consbol.check(kb)
    print(f"Consistent: {report.consistent}")
    print(f"Steps: {report.steps}, branches: {report.branches}")
    print(f"Processing time: {report.elapsed_ms:.2f}ms")
    for line in describe(report, [TETR_INVERTER, LACI_INVERTER]):
        print(f"  {line}")

    if report.warnings:
        print("Warnings:")
        for w in report.warnings:
            print(f"  - {w}")

    # Example 2: Entailment over points
    print("\n2. Point Ordering")
    print("-" * 40)

    p, q, r = NamedPoint("p"), NamedPoint("q"), NamedPoint("r")
    print(f"p < q, q < r entails p < r: {consbol.entails([lt(p, q), lt(q, r)], lt(p, r))}")
    print(f"p < q, q < p consistent: {consbol.is_consistent([lt(p, q), lt(q, p)])}")

    print("\n" + "=" * 60)
    print("ConsBOL Demonstration Complete")
    print("=" * 60)


if __name__ == "__main__":
    main()
