"""Data models"""

from .callback import Callback
from .state import State, Transition
from .execution import StepResult, TransitionPhase
from .definition import StateDefinition, TransitionDefinition, TemplateDefinition

__all__ = [
    "Callback",
    "State",
    "Transition",
    "StepResult",
    "TransitionPhase",
    "StateDefinition",
    "TransitionDefinition",
    "TemplateDefinition"
]
