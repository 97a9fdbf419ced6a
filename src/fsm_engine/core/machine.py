"""
State machine instances
"""
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Optional
import logging

from ..exceptions import NoDeterministicInitialState, NoInitialState, UnknownStateError
from ..models.state import State, Transition

if TYPE_CHECKING:
    from .template import StateMachineTemplate


logger = logging.getLogger(__name__)


class StateMachine:
    """A live machine positioned at one state of its template"""

    def __init__(self, template: "StateMachineTemplate"):
        self.template = template
        self.current_state: Optional[str] = None
        self.current_transition: Optional[Transition] = None
        self.resolve_initial_state()

    def resolve_initial_state(self) -> str:
        """
        Move the machine to the template's single initial state

        Raises:
            NoInitialState: no state is flagged initial
            NoDeterministicInitialState: more than one state is flagged initial
        """
        initial = self.template.initial_states()
        if not initial:
            raise NoInitialState()
        if len(initial) > 1:
            raise NoDeterministicInitialState(state.name for state in initial)
        self.current_state = initial[0].name
        self.current_transition = None
        return self.current_state

    @property
    def state(self) -> State:
        return self.template.states[self.current_state]

    @property
    def is_advancing(self) -> bool:
        """Transient and not final, run() keeps stepping from here"""
        state = self.state
        return state.transient and not state.final

    def possible_transitions(self) -> List[Transition]:
        return self.template.possible_transitions(self.current_state)

    def can_end(self) -> bool:
        return self.state.final

    def save(self) -> Dict[str, str]:
        return {"current_state": self.current_state}

    def restore(self, saved: Mapping[str, Any]) -> None:
        name = saved.get("current_state")
        if name not in self.template.states:
            raise UnknownStateError(name)
        self.current_state = name
        self.current_transition = None

    @contextmanager
    def perform_transition(self, transition: Transition) -> Iterator[Transition]:
        """Track ``transition`` while the body runs, then commit its target.

        The target is committed even when the body raises.
        """
        self.current_transition = transition
        try:
            yield transition
        finally:
            logger.debug(f"Committing state {transition.target} (was {self.current_state})")
            self.current_state = transition.target
            self.current_transition = None

    def draw(self) -> str:
        return self.template.draw()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} current_state={self.current_state!r}>"
