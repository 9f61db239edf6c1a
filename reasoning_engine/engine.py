"""
Reasoning Engine

Builds a model from a knowledge base, or proves that none exists.

The engine repeatedly takes an axiom from the store and processes it by form:

- TRUE: nothing to do
- FALSE: the branch is unsatisfiable
- Conjunction: its members are told back to the store
- Disjunction: deferred until no definite axiom is pending, then every
  disjunct is explored in its own branch, on a clone of the model; the
  surviving branch models are intersected
  (a solved run that intersected branch models is confirmed by a depth-first
  search for one world choosing a disjunct of every explored disjunction)
- Relation: normalized if possible, else simplified, else committed to the
  submodel registered for its kind (or recorded as unhandled)

Commits may return follow-up axioms, which are told back to the store. The
run ends when the store is empty (solved) or a contradiction is found
(unsatisfiable).
"""

from typing import Callable, Iterable, List, Optional, Sequence, Union
from concurrent.futures import ThreadPoolExecutor
import logging
import threading
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.axioms import Axiom, AxiomForm, Disjunction
from axiom_base.errors import Conflict, ModelConflict, RewriteLimitExceeded
from axiom_base.knowledge_base import KnowledgeBase
from axiom_base.registry import RuleRegistry
from model.composite import Model
from config import ReasoningConfig

from .state import ReasoningStatus, ReasoningState, ReasoningResult
from .dispatch import RewriteDispatch
from .observers import ReasoningObserver


logger = logging.getLogger(__name__)


ModelFactory = Callable[[RuleRegistry], Model]


class _RunCounter:
    """Step and branch counts of one run, shared by its branches."""

    def __init__(self, max_steps: int):
        self.max_steps = max_steps
        self.steps = 0
        self.branches = 0
        self.intersections = 0
        self._lock = threading.Lock()

    def step(self) -> None:
        with self._lock:
            self.steps += 1
            steps = self.steps
        if steps > self.max_steps:
            raise RewriteLimitExceeded(
                f"Reasoning did not reach a fixed point within {self.max_steps} steps"
            )

    def add_branches(self, n: int) -> None:
        with self._lock:
            self.branches += n

    def add_intersection(self) -> None:
        with self._lock:
            self.intersections += 1


class ReasoningEngine:
    """
    The decision procedure.

    Args:
        registry: Rules of the vocabulary; frozen on construction
        model_factory: Builds an empty composite model for the registry
        config: Reasoning configuration
        observers: Observers notified of reasoning events
    """

    def __init__(self,
                 registry: RuleRegistry,
                 model_factory: Optional[ModelFactory] = None,
                 config: Optional[ReasoningConfig] = None,
                 observers: Iterable[ReasoningObserver] = ()):
        self.registry = registry.freeze()
        self.model_factory = model_factory or Model
        self.config = config or ReasoningConfig()
        self.observers: List[ReasoningObserver] = list(observers)
        self.dispatch = RewriteDispatch(registry)

        self._handlers = {
            AxiomForm.TRUE: self._reason_true,
            AxiomForm.FALSE: self._reason_false,
            AxiomForm.CONJUNCTION: self._reason_conjunction,
            AxiomForm.DISJUNCTION: self._reason_disjunction,
            AxiomForm.RELATION: self._reason_relation,
        }

    def add_observer(self, observer: ReasoningObserver) -> None:
        self.observers.append(observer)

    def new_model(self) -> Model:
        """An empty model for this engine's vocabulary."""
        return self.model_factory(self.registry)

    def new_state(self, axioms: Union[Axiom, Iterable] = (),
                  model: Optional[Model] = None) -> ReasoningState:
        """A fresh reasoning state holding the given axioms."""
        kb = KnowledgeBase()
        kb.tell(axioms)
        return ReasoningState(kb, model if model is not None else self.new_model())

    def check(self, axioms: Union[Axiom, Iterable],
              model: Optional[Model] = None) -> ReasoningResult:
        """
        Check a collection of axioms for consistency.

        Args:
            axioms: An axiom or a (nested) collection of axioms
            model: Model to start from; it is cloned, never modified

        Returns:
            ReasoningResult with the final model (if consistent)
        """
        start = model.clone() if model is not None else None
        return self.reason(self.new_state(axioms, start))

    def reason(self, state: ReasoningState) -> ReasoningResult:
        """
        Run the state to completion.

        The state is modified in place and returned inside the result.

        Raises:
            StructuralViolation: If an axiom is malformed or the vocabulary
                misbehaves
        """
        counter = _RunCounter(self.config.max_steps)
        try:
            self._drain(state, counter, depth=0)
            if state.branched and counter.intersections:
                self._witness(ReasoningState(KnowledgeBase(), state.model.clone(),
                                             deferred=list(state.branched)), counter)
        except ModelConflict as exc:
            state.status = ReasoningStatus.UNSATISFIABLE
            result = ReasoningResult(state.status, state, exc.conflict,
                                     counter.steps, counter.branches)
        else:
            state.status = ReasoningStatus.SOLVED
            result = ReasoningResult(state.status, state, None,
                                     counter.steps, counter.branches)

        logger.info("Reasoning %s after %d steps and %d branches",
                    result.status.value, result.steps, result.branches)
        self._notify('run_completed', result)
        return result

    def _drain(self, state: ReasoningState, counter: _RunCounter, depth: int) -> None:
        state.status = ReasoningStatus.DRAINING
        while state.pending():
            if state.kb:
                axiom = state.kb.take()
                if axiom.form is AxiomForm.DISJUNCTION:
                    state.deferred.append(axiom)
                    continue
            else:
                axiom = state.deferred.pop()
            counter.step()
            try:
                self._handlers[axiom.form](axiom, state, counter, depth)
            except ModelConflict as exc:
                state.status = ReasoningStatus.UNSATISFIABLE
                if exc.conflict.veto:
                    self._notify('veto_occurred', exc.conflict)
                self._notify('axiom_unsatisfiable', axiom, exc.conflict)
                raise

    def _reason_true(self, axiom, state, counter, depth) -> None:
        pass

    def _reason_false(self, axiom, state, counter, depth) -> None:
        raise ModelConflict(Conflict("⊥ was asserted", (axiom,)))

    def _reason_conjunction(self, axiom, state, counter, depth) -> None:
        state.kb.tell(axiom)

    def _reason_relation(self, axiom, state, counter, depth) -> None:
        rewrite = self.dispatch.rewrite(axiom)
        if rewrite is not None:
            self._notify('rewrite_applied', rewrite)
            state.kb.tell(rewrite.result)
            return

        if not state.model.handles(axiom):
            logger.debug("No submodel handles %s", axiom)
            state.unhandled.add(axiom)
            return

        follow_up = state.model.commit(axiom)
        if follow_up:
            state.kb.tell(follow_up)

    def _reason_disjunction(self, axiom: Disjunction, state: ReasoningState,
                            counter: _RunCounter, depth: int) -> None:
        # the empty disjunction is satisfied by fiat
        if not len(axiom):
            return
        if any(state.model.knows(disjunct) for disjunct in axiom):
            logger.debug("Already satisfied: %s", axiom)
            return

        state.status = ReasoningStatus.BRANCHING
        if depth == 0:
            state.branched.append(axiom)
        branches = [state.branch(disjunct) for disjunct in axiom]
        counter.add_branches(len(branches))
        self._notify('branch_taken', axiom, list(axiom))
        logger.debug("Branching %d ways on %s", len(branches), axiom)

        conflicts = self._explore(branches, counter, depth)
        survivors = [b for b, c in zip(branches, conflicts) if c is None]

        if not survivors:
            raise ModelConflict(Conflict(
                "every branch of the disjunction is unsatisfiable",
                (axiom,),
                causes=tuple(conflicts),
            ))

        # things true in every possible world are true
        if len(survivors) == 1:
            state.model = survivors[0].model
        else:
            state.model = Model.intersect([b.model for b in survivors])
            counter.add_intersection()

        # axioms not handled in some possible world are unhandled
        for branch in survivors:
            state.unhandled |= branch.unhandled

        state.status = ReasoningStatus.DRAINING

    def _explore(self, branches: Sequence[ReasoningState], counter: _RunCounter,
                 depth: int) -> List[Optional[Conflict]]:
        """Run every branch; return None for survivors, else the conflict."""
        if depth == 0 and self.config.parallel_branches and len(branches) > 1:
            workers = min(self.config.max_branch_workers, len(branches))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [pool.submit(self._run_branch, b, counter, depth + 1)
                           for b in branches]
                return [f.result() for f in futures]
        return [self._run_branch(b, counter, depth + 1) for b in branches]

    def _run_branch(self, branch: ReasoningState, counter: _RunCounter,
                    depth: int) -> Optional[Conflict]:
        try:
            self._drain(branch, counter, depth)
        except ModelConflict as exc:
            branch.status = ReasoningStatus.UNSATISFIABLE
            return exc.conflict
        branch.status = ReasoningStatus.SOLVED
        return None

    def _witness(self, state: ReasoningState, counter: _RunCounter) -> None:
        """
        Search depth first for one world satisfying every pending axiom.

        Intersecting the branches of each disjunction separately keeps the
        model sound but forgets how the branches of two disjunctions constrain
        each other. Here every disjunct carries the disjunctions still pending,
        and the first world that drains without a conflict settles the
        verdict.

        Raises:
            ModelConflict: If no combination of disjuncts is consistent
        """
        while state.pending():
            if state.kb:
                axiom = state.kb.take()
                if axiom.form is AxiomForm.DISJUNCTION:
                    state.deferred.append(axiom)
                    continue
                counter.step()
                self._handlers[axiom.form](axiom, state, counter, 0)
                continue

            axiom = state.deferred.pop()
            if not len(axiom) or any(state.model.knows(d) for d in axiom):
                continue
            counter.step()

            conflicts = []
            for disjunct in axiom:
                world = state.branch(disjunct, state.deferred)
                try:
                    self._witness(world, counter)
                except ModelConflict as exc:
                    conflicts.append(exc.conflict)
                    continue
                return
            raise ModelConflict(Conflict(
                "no choice of disjuncts is jointly satisfiable",
                (axiom,),
                causes=tuple(conflicts),
            ))

    def _notify(self, hook: str, *args) -> None:
        if not self.config.notify_observers:
            return
        for observer in self.observers:
            try:
                getattr(observer, hook)(*args)
            except Exception:
                logger.exception("Observer %r failed in %s", observer, hook)
