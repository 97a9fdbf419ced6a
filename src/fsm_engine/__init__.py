"""
fsm-engine - finite state machine templates with a builder DSL
"""

__version__ = "0.1.0"

from .core.builder import TransitionBuilder
from .core.machine import StateMachine
from .core.template import StateMachineTemplate, inherit_template
from .core.handler import Handler
from .core.parser import TemplateParser
from .models import Callback, State, Transition, StepResult, TransitionPhase
from .exceptions import (
    FSMEngineError,
    BuilderError,
    UnknownStateTransition,
    NoMoreTransitions,
    NoDeterministicTransition,
    NoInitialState,
    NoDeterministicInitialState,
    UnknownStateError,
    TransitionFailed
)

__all__ = [
    "TransitionBuilder",
    "StateMachine",
    "StateMachineTemplate",
    "inherit_template",
    "Handler",
    "TemplateParser",
    "Callback",
    "State",
    "Transition",
    "StepResult",
    "TransitionPhase",
    "FSMEngineError",
    "BuilderError",
    "UnknownStateTransition",
    "NoMoreTransitions",
    "NoDeterministicTransition",
    "NoInitialState",
    "NoDeterministicInitialState",
    "UnknownStateError",
    "TransitionFailed"
]
