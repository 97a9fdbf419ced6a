"""
Step and run logic driving a state machine
"""
from typing import Any, List, Optional
import logging

from ..exceptions import NoDeterministicTransition, NoMoreTransitions
from ..models.callback import Callback
from ..models.execution import StepResult, TransitionPhase
from ..models.state import Transition
from .machine import StateMachine


logger = logging.getLogger(__name__)


def evaluate(callback: Optional[Callback], context: Any, *args: Any) -> Any:
    """Run a callback against the execution context"""
    if callback is None:
        return None
    return callback(context, *args)


def eligible_transitions(
    transitions: List[Transition],
    context: Any,
    *args: Any
) -> List[Transition]:
    """Keep the transitions whose condition holds, in discovery order"""
    return [
        transition for transition in transitions
        if transition.can_transition(lambda condition: evaluate(condition, context, *args))
    ]


def fire_hooks(
    machine: StateMachine,
    phase: TransitionPhase,
    transition: Transition,
    context: Any,
    *args: Any
) -> None:
    for hook in machine.template.hooks:
        evaluate(hook, context, phase, transition, *args)


def perform_transition(
    machine: StateMachine,
    transition: Transition,
    context: Any,
    *args: Any
) -> StepResult:
    """
    Perform one transition

    Hooks run before and after the callback, then the target state is
    committed. A failure recorded through ``context.fail`` during the callback
    is returned alongside the committed state instead of being raised. When the
    callback or a hook raises, the recorded failure is dropped with it.
    """
    logger.debug(f"Performing transition {transition}")
    try:
        with machine.perform_transition(transition):
            fire_hooks(machine, TransitionPhase.BEFORE, transition, context, *args)
            evaluate(transition.callback, context, *args)
            fire_hooks(machine, TransitionPhase.AFTER, transition, context, *args)
    finally:
        failure = _take_failure(context)
    if failure is not None:
        logger.warning(f"Transition {transition} recorded a failure: {failure}")
    return StepResult(
        state=machine.current_state,
        transition=transition,
        deferred_error=failure
    )


def step(machine: StateMachine, context: Any, *args: Any) -> StepResult:
    """
    Perform at most one transition from the current state

    Args:
        machine: the machine to advance
        context: object conditions and callbacks run against, usually a Handler
        args: event arguments passed to conditions, callbacks and hooks

    Returns:
        StepResult: committed state, ``finished`` set when the machine ended
        cleanly in a final state

    Raises:
        NoMoreTransitions: nothing is eligible and the machine cannot end here
        NoDeterministicTransition: more than one transition is eligible
    """
    state = machine.state
    transitions = eligible_transitions(machine.possible_transitions(), context, *args)
    # Only callbacks and hooks of the chosen transition may record a failure
    stale = _take_failure(context)
    if stale is not None:
        logger.debug(f"Discarding failure recorded outside a transition: {stale}")

    if not transitions:
        if state.transient or not state.final:
            logger.warning(f"No eligible transitions from {state.name}")
            raise NoMoreTransitions(state.name)
        logger.info(f"State machine finished in {state.name}")
        on_finish = getattr(context, "on_finish", None)
        if on_finish is not None:
            on_finish()
        return StepResult(state=state.name, finished=True)

    if len(transitions) > 1:
        destinations = [transition.target for transition in transitions]
        logger.warning(f"Ambiguous transitions from {state.name}: {destinations}")
        raise NoDeterministicTransition(state.name, destinations)

    return perform_transition(machine, transitions[0], context, *args)


def run(machine: StateMachine, context: Any, *args: Any) -> StepResult:
    """
    Step repeatedly while the machine sits in a transient, non-final state

    Stops early when a step records a deferred failure. The returned result
    describes the last step, with ``steps`` counting every step taken.
    """
    steps = 0
    while True:
        result = step(machine, context, *args)
        steps += 1
        if result.failed or not machine.is_advancing:
            result.steps = steps
            return result


def _take_failure(context: Any) -> Optional[BaseException]:
    take = getattr(context, "take_failure", None)
    return take() if take is not None else None
