"""
State machine templates
"""
from typing import Any, Callable, Dict, Iterable, List, Optional
import logging

from ..diagnostics import render_template
from ..exceptions import UnknownStateTransition
from ..models.callback import Callback
from ..models.state import State, Transition
from .builder import TransitionBuilder
from .machine import StateMachine


logger = logging.getLogger(__name__)


class StateMachineTemplate:
    """Compiled graph of states, transitions and around-transition hooks.

    Transitions are kept as ``{source: {target: [Transition, ...]}}`` so that
    a single source/target pair can be disabled when a template is
    specialized. A template should not be changed once machines have been
    instantiated from it; derive a new one with ``clone`` instead.
    """

    def __init__(
        self,
        states: Optional[Dict[str, State]] = None,
        transitions: Optional[Dict[str, Dict[str, List[Transition]]]] = None,
        hooks: Optional[List[Callback]] = None,
        all_transient: bool = False,
        machine_factory: Callable[["StateMachineTemplate"], StateMachine] = StateMachine
    ):
        self.states: Dict[str, State] = states if states is not None else {}
        self.transitions: Dict[str, Dict[str, List[Transition]]] = (
            transitions if transitions is not None else {}
        )
        self.hooks: List[Callback] = hooks if hooks is not None else []
        self.all_transient = all_transient
        self.machine_factory = machine_factory

    def declare_state(
        self,
        name: str,
        initial: bool = False,
        final: bool = False,
        transient: bool = False
    ) -> State:
        """Register a state, replacing any previous state of that name"""
        if self.all_transient:
            transient = True
        state = State(name=name, initial=initial, final=final, transient=transient)
        if name in self.states:
            logger.debug(f"Redeclaring state '{name}'")
        self.states[name] = state
        return state

    def declare_transition(
        self,
        source: str,
        target: str,
        condition: Any = None,
        negate: bool = False,
        disable: bool = False,
        callback: Any = None,
        description: Optional[str] = None
    ) -> Optional[Transition]:
        """
        Register a transition between two declared states

        Args:
            source: source state name
            target: target state name
            condition: guard, a method name or a callable
            negate: invert the guard result
            disable: drop every transition registered for this pair instead
            callback: executed when the transition is performed
            description: human readable note

        Returns:
            Transition: the registered transition, None when disabling
        """
        self._check_endpoints(source, target)
        bucket = self.transitions.setdefault(source, {}).setdefault(target, [])
        if disable:
            bucket.clear()
            logger.debug(f"Disabled transitions {source} -> {target}")
            return None
        transition = Transition(
            source=source,
            target=target,
            condition=condition,
            negate=negate,
            callback=callback,
            description=description
        )
        bucket.append(transition)
        logger.debug(f"Declared transition {transition}")
        return transition

    def on_transition(self, source: str, target: str, **options) -> Callable:
        """Decorator form of declare_transition, the decorated function is the callback"""
        def decorator(func):
            self.declare_transition(source, target, callback=func, **options)
            return func
        return decorator

    def add_transitions(self, transitions: Iterable[Transition]) -> None:
        """Register already built transitions"""
        for transition in transitions:
            self._check_endpoints(transition.source, transition.target)
            self.transitions.setdefault(transition.source, {}) \
                .setdefault(transition.target, []).append(transition)
            logger.debug(f"Added transition {transition}")

    def define_transitions(self, block: Callable[[TransitionBuilder], Any]) -> Callable:
        """Call ``block`` with a fresh builder and register what it built.

        Usable as a decorator.
        """
        root = TransitionBuilder()
        block(root)
        self.add_transitions(root.build())
        return block

    def register_hook(self, callback: Any) -> Any:
        """Register a hook called before and after every transition.

        Usable as a decorator.
        """
        if callback is None:
            raise ValueError("register_hook requires a callback")
        self.hooks.append(Callback.wrap(callback))
        return callback

    def all_states_transient(self) -> None:
        """Mark every state declared from now on as transient"""
        self.all_transient = True

    def possible_transitions(self, source: str) -> List[Transition]:
        return [
            transition
            for bucket in self.transitions.get(source, {}).values()
            for transition in bucket
        ]

    def initial_states(self) -> List[State]:
        return [state for state in self.states.values() if state.initial]

    def instantiate(self) -> StateMachine:
        return self.machine_factory(self)

    def clone(self) -> "StateMachineTemplate":
        """Copy the template so that the copy can be changed independently"""
        transitions = {
            source: {target: list(bucket) for target, bucket in targets.items()}
            for source, targets in self.transitions.items()
        }
        return self.__class__(
            states=dict(self.states),
            transitions=transitions,
            hooks=list(self.hooks),
            all_transient=self.all_transient,
            machine_factory=self.machine_factory
        )

    def draw(self) -> str:
        return render_template(self)

    def _check_endpoints(self, source: str, target: str) -> None:
        if source not in self.states:
            raise UnknownStateTransition("from", source)
        if target not in self.states:
            raise UnknownStateTransition("to", target)


def inherit_template(parent: StateMachineTemplate) -> StateMachineTemplate:
    """Start a specialized template from a copy of ``parent``"""
    return parent.clone()
