"""
ConsBOL: Consistency Checking for Biopolymer Composition Constraints

A reasoner for declarative axiom sets: it decides whether a collection of
axioms is jointly satisfiable and, if so, builds a model summarising
everything they entail.

Key Features:
- Vocabulary-driven rewriting (normalize, simplify) through a rule registry
- Composite models of interacting submodels with vetoable merges
- Disjunction branching with model intersection
- A reference vocabulary of points, strands and intervals

Example:
    from consbol import ConsBOL
    from vocabulary import inverter

    consbol = ConsBOL()
    report = consbol.check(inverter())
    print(report.consistent)
"""

__version__ = "1.0.0"
__author__ = "ConsBOL Project"

from .consbol import (
    ConsBOL,
    CheckReport,
    describe,
)

__all__ = [
    'ConsBOL',
    'CheckReport',
    'describe',
]
