"""
Step / run engine tests
"""
import pytest

from fsm_engine import (
    NoDeterministicTransition,
    NoMoreTransitions,
    StateMachineTemplate,
    TransitionPhase
)
from fsm_engine.core import engine


class Context:
    """Bare execution context without a Handler base"""

    def __init__(self):
        self.calls = []
        self.counter = 0
        self.finished = False

    def on_finish(self):
        self.finished = True


class TestStep:
    """engine.step tests"""

    @pytest.fixture
    def context(self):
        return Context()

    def test_single_eligible_transition(self, template, context):
        machine = template.instantiate()
        result = engine.step(machine, context)

        assert machine.current_state == "bar"
        assert result.state == "bar"
        assert result.transition.target == "bar"
        assert not result.finished

    def test_hooks_wrap_callback_in_registration_order(self, template, context):
        template.declare_transition("foo", "baz", condition=lambda ctx, *args: False)

        def first(ctx, phase, transition, *args):
            ctx.calls.append(("first", phase, transition.target, args))

        def second(ctx, phase, transition, *args):
            ctx.calls.append(("second", phase, transition.target, args))

        template.register_hook(first)
        template.register_hook(second)
        template.declare_transition("foo", "bar", disable=True)
        template.declare_transition(
            "foo", "bar",
            callback=lambda ctx, event: ctx.calls.append(("callback", event))
        )
        machine = template.instantiate()
        engine.step(machine, context, "go")

        assert context.calls == [
            ("first", TransitionPhase.BEFORE, "bar", ("go",)),
            ("second", TransitionPhase.BEFORE, "bar", ("go",)),
            ("callback", "go"),
            ("first", TransitionPhase.AFTER, "bar", ("go",)),
            ("second", TransitionPhase.AFTER, "bar", ("go",))
        ]

    def test_conditions_receive_event_arguments(self, context):
        template = StateMachineTemplate()
        template.declare_state("waiting", initial=True)
        template.declare_state("paid", final=True)
        template.declare_state("cancelled", final=True)
        template.define_transitions(lambda root: root.from_("waiting", lambda waiting: (
            waiting.if_(lambda ctx, event: event == "pay").goto("paid"),
            waiting.if_(lambda ctx, event: event == "cancel").goto("cancelled")
        )))
        machine = template.instantiate()
        engine.step(machine, context, "cancel")

        assert machine.current_state == "cancelled"

    def test_named_condition_and_callback_resolve_on_context(self):
        class Counter(Context):
            def done(self):
                return self.counter >= 1

            def increment(self):
                self.counter += 1

        template = StateMachineTemplate()
        template.declare_state("counting", initial=True)
        template.declare_state("done", final=True)
        template.define_transitions(
            lambda root: root.from_("counting").if_("done").goto("done").else_().do("increment").stay()
        )
        context = Counter()
        machine = template.instantiate()

        engine.step(machine, context)
        assert (machine.current_state, context.counter) == ("counting", 1)
        engine.step(machine, context)
        assert machine.current_state == "done"

    def test_no_eligible_transition_from_non_final(self, template, context):
        template.declare_transition("foo", "bar", disable=True)
        machine = template.instantiate()

        with pytest.raises(NoMoreTransitions) as exc_info:
            engine.step(machine, context)
        assert exc_info.value.state == "foo"
        assert machine.current_state == "foo"

    def test_no_eligible_transition_from_final_finishes(self, template, context):
        machine = template.instantiate()
        engine.step(machine, context)
        result = engine.step(machine, context)

        assert result.finished
        assert result.transition is None
        assert context.finished
        assert machine.current_state == "bar"

    def test_transient_final_state_without_transitions_fails(self, context):
        template = StateMachineTemplate()
        template.declare_state("end", initial=True, final=True, transient=True)
        machine = template.instantiate()

        with pytest.raises(NoMoreTransitions):
            engine.step(machine, context)
        assert not context.finished

    def test_ambiguous_transitions(self, template, context):
        template.declare_transition("foo", "baz")
        template.declare_transition("foo", "bar", condition=lambda ctx: True)
        machine = template.instantiate()

        with pytest.raises(NoDeterministicTransition) as exc_info:
            engine.step(machine, context)
        assert exc_info.value.destinations == ["bar", "bar", "baz"]
        assert machine.current_state == "foo"

    def test_negated_condition(self, context):
        template = StateMachineTemplate()
        template.declare_state("a", initial=True)
        template.declare_state("b")
        template.declare_transition("a", "b", condition=lambda ctx: False, negate=True)
        machine = template.instantiate()
        engine.step(machine, context)

        assert machine.current_state == "b"

    def test_context_without_failure_support(self, template):
        machine = template.instantiate()
        result = engine.step(machine, object())

        assert result.deferred_error is None
        assert machine.current_state == "bar"


class TestRun:
    """engine.run tests"""

    def test_counting_run(self, counting_template):
        context = Context()
        machine = counting_template.instantiate()
        result = engine.run(machine, context)

        # start -> counting, three increments, counting -> final
        assert machine.current_state == "final"
        assert context.counter == 3
        assert result.steps == 5
        assert result.state == "final"

    def test_run_stops_on_stable_state(self):
        template = StateMachineTemplate()
        template.declare_state("start", initial=True)
        template.declare_state("spawned", transient=True)
        template.declare_state("waiting")
        template.declare_transition("start", "spawned")
        template.declare_transition("spawned", "waiting")
        machine = template.instantiate()
        result = engine.run(machine, Context())

        assert machine.current_state == "waiting"
        assert result.steps == 2

    def test_run_stops_on_transient_final_state(self):
        template = StateMachineTemplate()
        template.declare_state("start", initial=True)
        template.declare_state("closing", transient=True, final=True)
        template.declare_state("archived", final=True)
        template.declare_transition("start", "closing")
        template.declare_transition("closing", "archived")
        machine = template.instantiate()
        result = engine.run(machine, Context())

        assert machine.current_state == "closing"
        assert result.steps == 1

    def test_run_passes_same_arguments_to_every_step(self):
        template = StateMachineTemplate()
        template.all_states_transient()
        template.declare_state("a", initial=True)
        template.declare_state("b")
        template.declare_state("c", final=True)
        seen = []
        template.declare_transition("a", "b", callback=lambda ctx, event: seen.append(event))
        template.declare_transition("b", "c", callback=lambda ctx, event: seen.append(event))
        engine.run(template.instantiate(), Context(), "tick")

        assert seen == ["tick", "tick"]
