"""
Model Module

Composite models built from interacting submodels.

Includes:
- Interpretation sets of equivalent entities
- The Submodel protocol with its merge-veto hooks
- EqualityModel for ≃ and ≄
- TagModel, PositionModel and OrderModel for vocabulary facts
- The composite Model with cloning and intersection
"""

from .interpretation import Interpretation
from .submodel import Submodel
from .equality import EqualityModel
from .assignment import AssignmentModel, TagModel, PositionModel
from .order import OrderModel
from .composite import Model

__all__ = [
    'Interpretation',
    'Submodel',
    'EqualityModel',
    'AssignmentModel',
    'TagModel',
    'PositionModel',
    'OrderModel',
    'Model',
]
