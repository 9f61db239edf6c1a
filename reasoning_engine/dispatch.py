"""
Rewrite dispatch.

Looks up the rules registered for a relation kind and applies them in order:
normalization first, then simplification. A rule returning None does not
apply; if no rule applies the relation is fundamental and the caller commits
it to the model.
"""

from typing import Optional
from dataclasses import dataclass
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from axiom_base.axioms import Axiom, AxiomForm, Relation
from axiom_base.errors import StructuralViolation
from axiom_base.registry import RuleRegistry, RewriteRule


logger = logging.getLogger(__name__)


NORMALIZE = "normalize"
SIMPLIFY = "simplify"


@dataclass(frozen=True)
class Rewrite:
    """
    One applied rewrite.

    Attributes:
        original: The relation that was rewritten
        result: What it was rewritten to
        rule: Which rule applied ("normalize" or "simplify")
    """
    original: Relation
    result: Axiom
    rule: str

    def __str__(self) -> str:
        return f"{self.original} ⇒ {self.result} ({self.rule})"


class RewriteDispatch:
    """Applies the rules of a registry to relations."""

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def _apply(self, rel: Relation, rule: Optional[RewriteRule], name: str) -> Optional[Rewrite]:
        if rule is None:
            return None
        result = rule(rel)
        if result is None:
            return None
        if not isinstance(result, Axiom):
            raise StructuralViolation(
                f"{name} rule of {rel.kind.name} returned {result!r}, not an axiom"
            )
        if result == rel:
            raise StructuralViolation(
                f"{name} rule of {rel.kind.name} returned its input unchanged: {rel}"
            )
        return Rewrite(rel, result, name)

    def rewrite(self, axiom: Axiom) -> Optional[Rewrite]:
        """
        Rewrite a relation by its normalize rule, or failing that its
        simplify rule.

        Args:
            axiom: The axiom to rewrite

        Returns:
            The applied Rewrite, or None if the axiom is fundamental (or not a
            relation at all)

        Raises:
            StructuralViolation: If the relation does not match its signature
                or a rule makes no progress
        """
        if axiom.form is not AxiomForm.RELATION:
            return None

        rules = self.registry.rules_for(axiom.kind)
        if rules is None:
            return None
        rules.validate(axiom)

        rewrite = (self._apply(axiom, rules.normalize, NORMALIZE)
                   or self._apply(axiom, rules.simplify, SIMPLIFY))
        if rewrite is not None:
            logger.debug("Rewrite %s", rewrite)
        return rewrite

    def expand(self, axiom: Axiom) -> Axiom:
        """
        Apply one normalize pass followed by one simplify pass.

        Non-relations and relations without rules are returned unchanged.
        """
        if axiom.form is not AxiomForm.RELATION:
            return axiom
        rules = self.registry.rules_for(axiom.kind)
        if rules is None:
            return axiom
        rules.validate(axiom)

        normalized = self._apply(axiom, rules.normalize, NORMALIZE)
        if normalized is not None:
            axiom = normalized.result
            if axiom.form is not AxiomForm.RELATION:
                return axiom
            rules = self.registry.rules_for(axiom.kind)
            if rules is None:
                return axiom

        simplified = self._apply(axiom, rules.simplify, SIMPLIFY)
        return simplified.result if simplified is not None else axiom
