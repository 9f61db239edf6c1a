"""
Composite Model

A model is a set of named submodels working together. The equality submodel
is always present; vocabularies add their own through a model factory.

The composite routes fundamental relations to the submodel registered for
their kind and coordinates equivalence merges, which touch every submodel:
either every submodel approves a merge and all of them apply it, or one vetoes
and nothing changes.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.entities import Entity
from axiom_base.axioms import Axiom, AxiomForm, Relation
from axiom_base.errors import Conflict, ModelConflict
from axiom_base.registry import RuleRegistry, EQUALITY_SUBMODEL

from .interpretation import Interpretation
from .submodel import Submodel
from .equality import EqualityModel


logger = logging.getLogger(__name__)


class Model:
    """
    A composite of named submodels.

    Args:
        registry: Rule registry naming the submodel of every kind
        submodels: Domain submodels, in addition to equality
    """

    def __init__(self, registry: RuleRegistry, submodels: Iterable[Submodel] = (),
                 equality: Optional[EqualityModel] = None):
        self.registry = registry
        self.equality = equality if equality is not None else EqualityModel()
        if self.equality.name != EQUALITY_SUBMODEL:
            raise ValueError(f"The equality submodel must be named {EQUALITY_SUBMODEL!r}")
        self._submodels: Dict[str, Submodel] = {self.equality.name: self.equality}
        for sub in submodels:
            self.add_submodel(sub)

    def add_submodel(self, sub: Submodel) -> None:
        if sub.name in self._submodels:
            raise ValueError(f"Duplicate submodel name: {sub.name!r}")
        self._submodels[sub.name] = sub

    def submodel(self, name: str) -> Submodel:
        """Get a submodel by name (KeyError if missing)."""
        return self._submodels[name]

    @property
    def submodels(self) -> Tuple[Submodel, ...]:
        return tuple(self._submodels.values())

    def __contains__(self, name: str) -> bool:
        return name in self._submodels

    def _owner(self, rel: Relation) -> Optional[Submodel]:
        name = self.registry.submodel_for(rel.kind)
        if name is None:
            return None
        return self._submodels.get(name)

    def handles(self, rel: Relation) -> bool:
        """Test whether some submodel of this model commits the relation."""
        return self._owner(rel) is not None

    def knows(self, axiom: Axiom) -> bool:
        """
        Test whether an axiom is already recorded in the model.

        This is a membership test only: no inference is performed and no
        entity is registered.
        """
        form = axiom.form
        if form is AxiomForm.TRUE:
            return True
        if form is AxiomForm.FALSE:
            return False
        if form is AxiomForm.CONJUNCTION:
            return all(self.knows(a) for a in axiom)
        if form is AxiomForm.DISJUNCTION:
            return any(self.knows(a) for a in axiom)

        owner = self._owner(axiom)
        return owner is not None and owner.knows(axiom, self)

    def commit(self, rel: Relation) -> List[Axiom]:
        """
        Commit a fundamental relation to its submodel.

        Returns:
            Follow-up axioms

        Raises:
            ModelConflict: If the relation contradicts the model
            KeyError: If no submodel handles the relation
        """
        owner = self._owner(rel)
        if owner is None:
            raise KeyError(f"No submodel handles {rel.kind!r}")
        return owner.commit(rel, self)

    def merge(self, a: Entity, b: Entity, cause: Optional[Axiom] = None) -> List[Axiom]:
        """
        Merge the interpretations of two entities.

        Every submodel is asked first; only if none vetoes is the merge
        applied, equality first.

        Returns:
            Follow-up axioms returned by the submodels

        Raises:
            ModelConflict: If a submodel vetoes the merge
        """
        if a == b:
            return []
        ia = self.equality.lookup(a)
        ib = self.equality.lookup(b)
        if ia is not None and ia is ib:
            return []
        if ia is None:
            ia = Interpretation.singleton(a)
        if ib is None:
            ib = Interpretation.singleton(b)

        union = ia.union(ib)
        causes = (cause,) if cause is not None else ()
        for sub in self._submodels.values():
            reason = sub.check_merge(self, ia, ib, union)
            if reason is not None:
                logger.debug("Submodel %s vetoed merging %r and %r: %s",
                             sub.name, ia, ib, reason)
                raise ModelConflict(Conflict(reason, causes, sub.name, veto=True))

        follow_up: List[Axiom] = []
        for sub in self._submodels.values():
            follow_up.extend(sub.apply_merge(self, ia, ib, union))
        return follow_up

    def clone(self) -> 'Model':
        """An independent copy; interpretations and entities are shared."""
        subs = [s.copy() for s in self._submodels.values()]
        return Model(self.registry, subs[1:], equality=subs[0])

    def empty_like(self) -> 'Model':
        """An empty model with the same submodel configuration."""
        subs = [s.empty() for s in self._submodels.values()]
        return Model(self.registry, subs[1:], equality=subs[0])

    @classmethod
    def intersect(cls, models: Sequence['Model']) -> 'Model':
        """
        Build the model of the facts common to all given models.

        Two entities are equivalent in the result only if they are
        equivalent in every model; every other fact is kept only if every
        model records it.
        """
        if not models:
            raise ValueError("Cannot intersect an empty collection of models")
        if len(models) == 1:
            return models[0].clone()

        result = models[0].empty_like()
        # equality comes first in every model
        for name, sub in result._submodels.items():
            sub.absorb_common(result, [(m, m.submodel(name)) for m in models])
        return result

    def __repr__(self) -> str:
        lines = [f"Model({', '.join(self._submodels)})"]
        for sub in self._submodels.values():
            lines.append('  ' + repr(sub).replace('\n', '\n  '))
        return '\n'.join(lines)
