"""
Shared pytest fixtures
"""
import pytest

from fsm_engine import StateMachineTemplate


@pytest.fixture
def template() -> StateMachineTemplate:
    """foo (initial) -> bar (final), baz -> bar"""
    template = StateMachineTemplate()
    template.declare_state("foo", initial=True)
    template.declare_state("baz")
    template.declare_state("bar", final=True)
    template.declare_transition("baz", "bar")
    template.declare_transition("foo", "bar")
    return template


@pytest.fixture
def counting_template() -> StateMachineTemplate:
    """start -> counting (transient) -> final, counting loops until counter reaches 3"""
    template = StateMachineTemplate()
    template.declare_state("start", initial=True)
    template.declare_state("counting", transient=True)
    template.declare_state("final", final=True)

    def reset(handler):
        handler.counter = 0

    def increment(handler):
        handler.counter += 1

    @template.define_transitions
    def transitions(root):
        root.from_("start").goto("counting").do(reset)
        root.from_("counting").if_(lambda handler: handler.counter >= 3).goto("final") \
            .else_().do(increment).stay()

    return template


@pytest.fixture
def sample_definition() -> dict:
    """Declarative form of an order workflow"""
    return {
        "template": {
            "name": "orders",
            "states": [
                {"name": "new", "initial": True},
                {"name": "checking", "transient": True},
                {"name": "waiting"},
                {"name": "shipped", "final": True},
                {"name": "rejected", "final": True}
            ],
            "transitions": [
                {"from": "new", "to": "checking", "do": "record"},
                {"from": "checking", "to": "waiting", "if": "in_stock"},
                {"from": "checking", "to": "rejected", "unless": "in_stock"},
                {"from": "waiting", "to": "shipped", "if": "is_shipment", "description": "carrier picked up"}
            ],
            "hooks": ["audit"]
        }
    }
