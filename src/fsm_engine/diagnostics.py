"""Graphviz rendering of state machine templates."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .models.state import State, Transition

if TYPE_CHECKING:
    from .core.template import StateMachineTemplate


def font_color(text: str, color: str) -> str:
    return f'<FONT COLOR="{color}">{text}</FONT>'


def render_state(state: State) -> str:
    properties = [f"<B>{state.name}</B>"]
    if state.initial:
        properties.append(font_color("initial", "blue"))
    if state.transient:
        properties.append(font_color("transient", "dimgray"))
    if state.final:
        properties.append(font_color("final", "darkgreen"))
    return f"{state.name} [label=<{'<BR/>'.join(properties)}>];"


def render_transition(transition: Transition) -> str:
    base = f"{transition.source} -> {transition.target}"
    if not transition.guarded:
        return base
    negate = "!" if transition.negate else ""
    tag = transition.condition.tag.replace('"', "'")
    return f'{base} [label="{negate}{tag}"]'


def render_template(template: StateMachineTemplate) -> str:
    """Render states first, then transitions grouped by source and target."""
    lines = ["digraph {"]
    lines.extend(render_state(state) for state in template.states.values())
    for targets in template.transitions.values():
        for bucket in targets.values():
            lines.extend(render_transition(transition) for transition in bucket)
    lines.append("}")
    return "\n".join(lines)
