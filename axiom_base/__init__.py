"""
Axiom Base Module - Entities, Axioms and the Knowledge Base

This module provides the immutable value types the reasoning engine works
on, and the store that feeds axioms to it.

Includes:
- Entities: concrete values and arena-allocated Variables
- Axioms: tagged relations, conjunction, disjunction, TRUE and FALSE
- KnowledgeBase: the LIFO store of pending axioms
- RuleRegistry: normalize / simplify / commit capabilities per relation kind
- Error taxonomy: ModelConflict, StructuralViolation
"""

from .entities import (
    Entity,
    Variable,
    VariableArena,
    DEFAULT_ARENA,
    fresh,
    fresh_variables,
)
from .axioms import (
    AxiomForm,
    RelationKind,
    CoreKind,
    Axiom,
    Relation,
    Conjunction,
    Disjunction,
    Constant,
    TRUE,
    FALSE,
    relation,
    conjunction,
    disjunction,
    equivalent,
    not_equivalent,
    flatten,
)
from .knowledge_base import KnowledgeBase, AxiomStore
from .registry import AxiomRules, RuleRegistry, EQUALITY_SUBMODEL
from .errors import (
    Conflict,
    ModelConflict,
    StructuralViolation,
    RewriteLimitExceeded,
)

__all__ = [
    'Entity',
    'Variable',
    'VariableArena',
    'DEFAULT_ARENA',
    'fresh',
    'fresh_variables',
    'AxiomForm',
    'RelationKind',
    'CoreKind',
    'Axiom',
    'Relation',
    'Conjunction',
    'Disjunction',
    'Constant',
    'TRUE',
    'FALSE',
    'relation',
    'conjunction',
    'disjunction',
    'equivalent',
    'not_equivalent',
    'flatten',
    'KnowledgeBase',
    'AxiomStore',
    'AxiomRules',
    'RuleRegistry',
    'EQUALITY_SUBMODEL',
    'Conflict',
    'ModelConflict',
    'StructuralViolation',
    'RewriteLimitExceeded',
]
