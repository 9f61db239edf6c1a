"""
Reasoning Engine Module

This module provides the decision procedure that builds a model from a
knowledge base or proves the knowledge base inconsistent.

Includes:
- Reasoning state and result types
- Rewrite dispatch over the rule registry
- The reasoning engine with disjunction branching and recombination
- Observer hooks
"""

from .state import (
    ReasoningStatus,
    ReasoningState,
    ReasoningResult,
)
from .dispatch import Rewrite, RewriteDispatch
from .observers import ReasoningObserver, LoggingObserver, RecordingObserver
from .engine import ReasoningEngine

__all__ = [
    'ReasoningStatus',
    'ReasoningState',
    'ReasoningResult',
    'Rewrite',
    'RewriteDispatch',
    'ReasoningObserver',
    'LoggingObserver',
    'RecordingObserver',
    'ReasoningEngine',
]
