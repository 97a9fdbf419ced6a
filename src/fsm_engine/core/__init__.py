"""Core state machine components"""

from .builder import TransitionBuilder
from .machine import StateMachine
from .template import StateMachineTemplate, inherit_template
from .engine import step, run
from .handler import Handler
from .parser import TemplateParser

__all__ = [
    "TransitionBuilder",
    "StateMachine",
    "StateMachineTemplate",
    "inherit_template",
    "step",
    "run",
    "Handler",
    "TemplateParser"
]
