"""
Handler mixin for objects that drive a state machine
"""
from typing import Any, ClassVar, Dict, MutableMapping, Optional, Union
import logging

from ..exceptions import FSMEngineError, TransitionFailed
from ..models.execution import StepResult
from . import engine
from .machine import StateMachine
from .template import StateMachineTemplate


logger = logging.getLogger(__name__)


class Handler:
    """Mixin giving a class its own state machine.

    Conditions, callbacks and hooks run against the handler instance, so they
    can read and change its attributes. Subclasses set ``template``; a
    specialized subclass usually starts from ``inherit_template(Parent.template)``.

    Example::

        class Counter(Handler):
            template = StateMachineTemplate()
            template.declare_state("start", initial=True)
            ...
    """

    template: ClassVar[Optional[StateMachineTemplate]] = None

    _state_machine: Optional[StateMachine] = None
    _failure: Optional[BaseException] = None

    @property
    def state_machine(self) -> StateMachine:
        if self._state_machine is None:
            if self.template is None:
                raise FSMEngineError(f"{type(self).__name__} has no state machine template")
            self._state_machine = self.template.instantiate()
        return self._state_machine

    @property
    def current_state(self) -> str:
        return self.state_machine.current_state

    def on_finish(self) -> None:
        """Called when the machine ends cleanly in a final state"""
        pass

    def fail(self, error: Union[BaseException, str]) -> None:
        """Record a failure raised once the current transition has committed"""
        if not isinstance(error, BaseException):
            error = TransitionFailed(str(error))
        self._failure = error

    def take_failure(self) -> Optional[BaseException]:
        failure, self._failure = self._failure, None
        return failure

    def step(self, *args: Any) -> StepResult:
        result = engine.step(self.state_machine, self, *args)
        result.raise_for_error()
        return result

    def run(self, *args: Any) -> StepResult:
        result = engine.run(self.state_machine, self, *args)
        result.raise_for_error()
        return result

    def save_state(self) -> Dict[str, str]:
        return self.state_machine.save()

    def restore_state(self, saved: Dict[str, Any]) -> None:
        self.state_machine.restore(saved)

    def resume(self, control: MutableMapping[str, Any], *args: Any) -> bool:
        """
        Run against a position persisted by a host job

        The position lives in ``control["saved"]``; it is written back after
        every run, including runs that end with a deferred failure.

        Returns:
            bool: True when the machine suspended in a non-final state
        """
        if "saved" in control:
            self.state_machine.restore(control["saved"])
        else:
            self.state_machine.resolve_initial_state()
        try:
            result = engine.run(self.state_machine, self, *args)
        finally:
            control["saved"] = self.state_machine.save()
        result.raise_for_error()
        suspended = not self.state_machine.can_end()
        if suspended:
            logger.debug(f"Suspending in {self.state_machine.current_state}")
        return suspended
