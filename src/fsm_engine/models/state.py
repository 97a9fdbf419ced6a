"""States and transitions of a state machine template."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .callback import Callback


@dataclass(frozen=True)
class State:
    """A named node in the state machine graph."""

    name: str
    initial: bool = False
    final: bool = False
    transient: bool = False


@dataclass(frozen=True)
class Transition:
    """A guarded edge between two states with an optional callback."""

    source: str
    target: str
    condition: Optional[Callback] = None
    negate: bool = False
    callback: Optional[Callback] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        # Frozen dataclass, so normalization goes through object.__setattr__
        object.__setattr__(self, "condition", Callback.wrap(self.condition))
        object.__setattr__(self, "callback", Callback.wrap(self.callback))
        object.__setattr__(self, "negate", bool(self.negate))

    @property
    def guarded(self) -> bool:
        return self.condition is not None

    def can_transition(self, evaluate: Optional[Callable[[Callback], Any]] = None) -> bool:
        """Check whether the transition is eligible.

        ``evaluate`` receives the condition and returns its raw result. Without
        it only closures can be checked, called with no context. The negate
        flag is applied to whatever comes back.
        """
        if not self.guarded:
            return True
        if evaluate is None:
            if self.condition.is_named:
                raise ValueError(
                    f"Condition {self.condition.tag} of {self} needs a context to resolve"
                )
            result = self.condition(None)
        else:
            result = evaluate(self.condition)
        return not result if self.negate else bool(result)

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"
