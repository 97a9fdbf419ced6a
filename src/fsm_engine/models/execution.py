"""Runtime value types produced while stepping a state machine."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from .state import Transition


class TransitionPhase(str, enum.Enum):
    """Phase passed to around-transition hooks."""

    BEFORE = "before"
    AFTER = "after"


@dataclass
class StepResult:
    """Outcome of a step or run.

    ``state`` is always the committed state. A deferred failure does not
    prevent the commit; it is carried here so the caller decides when to
    raise it.
    """

    state: str
    transition: Optional[Transition] = None
    finished: bool = False
    steps: int = 1
    deferred_error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.deferred_error is not None

    def raise_for_error(self) -> None:
        if self.deferred_error is not None:
            raise self.deferred_error
