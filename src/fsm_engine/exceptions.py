"""
Exceptions raised by the state machine engine.
"""
from typing import Any, Dict, Iterable, Optional


class FSMEngineError(Exception):
    """Base class for every engine error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class TemplateDefinitionError(FSMEngineError):
    """Raised when a template is declared incorrectly."""
    pass


class BuilderError(TemplateDefinitionError):
    """Raised when a transition builder chain is malformed."""
    pass


class UnknownStateTransition(TemplateDefinitionError):
    """A transition references a state that was never declared."""

    def __init__(self, direction: str, state: str):
        self.direction = direction
        self.state = state
        super().__init__(
            f"Cannot transition {direction} unknown state {state}",
            {"direction": direction, "state": state}
        )


class TemplateParseError(TemplateDefinitionError):
    """Raised when a template file or payload cannot be loaded."""
    pass


class TransitionError(FSMEngineError):
    """Base class for errors raised while stepping a machine."""
    pass


class NoMoreTransitions(TransitionError):
    """There are no eligible transitions from the current state."""

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"Cannot transition anywhere from {state}", {"state": state})


class NoDeterministicTransition(TransitionError):
    """More than one transition is eligible from the current state."""

    def __init__(self, state: str, destinations: Iterable[str]):
        self.state = state
        self.destinations = list(destinations)
        super().__init__(
            f"Cannot deterministically transition anywhere from {state}. "
            f"Possibilities are {', '.join(self.destinations)}",
            {"state": state, "destinations": self.destinations}
        )


class InitialStateError(FSMEngineError):
    """Base class for initial state resolution errors."""
    pass


class NoInitialState(InitialStateError):
    """The template declares no initial state."""

    def __init__(self):
        super().__init__("There is no initial state")


class NoDeterministicInitialState(InitialStateError):
    """The template declares more than one initial state."""

    def __init__(self, states: Iterable[str]):
        self.states = list(states)
        super().__init__(
            f"Cannot determine initial state. Possibilities are {', '.join(self.states)}",
            {"states": self.states}
        )


class UnknownStateError(FSMEngineError):
    """A saved position names a state the template does not know."""

    def __init__(self, state: Any):
        self.state = state
        super().__init__(f"Cannot restore unknown state {state}", {"state": state})


class TransitionFailed(FSMEngineError):
    """Deferred failure recorded by a transition callback."""
    pass
