"""
Fluent builder for state transitions
"""
from typing import Any, Callable, List, Optional

from ..exceptions import BuilderError
from ..models.callback import Callback
from ..models.state import Transition


class TransitionBuilder:
    """Tree of partially specified transitions.

    Every chained call creates or updates a node; ``build`` flattens the tree
    in pre-order and keeps only nodes that have both a source and a target.

    Example::

        root.from_("counting").if_("done").goto("final") \\
            .else_().do(increment).stay()
    """

    def __init__(
        self,
        source: Optional[str] = None,
        target: Optional[str] = None,
        condition: Any = None,
        negate: bool = False,
        callback: Any = None
    ):
        self.source = source
        self.target = target
        self.condition = Callback.wrap(condition)
        self.negate = negate
        self.callback = Callback.wrap(callback)
        self.note: Optional[str] = None
        self.children: List["TransitionBuilder"] = []

    def _branch(self, **kwargs) -> "TransitionBuilder":
        child = self.__class__(**kwargs)
        self.children.append(child)
        return child

    def from_(
        self,
        name: str,
        block: Optional[Callable[["TransitionBuilder"], Any]] = None
    ) -> "TransitionBuilder":
        """
        Set the source state on a new child node

        Args:
            name: source state name
            block: when given it is called with the child and self is returned,
                which allows grouping several branches under one source

        Returns:
            TransitionBuilder: the child, or self in the grouping form
        """
        if self.source is not None:
            raise BuilderError(f"Source state already set to {self.source}")
        child = self._branch(source=name)
        if block is not None:
            block(child)
            return self
        return child

    def if_(self, condition: Any, negate: bool = False) -> "TransitionBuilder":
        """Branch with a condition, inheriting source and target"""
        return self._branch(
            source=self.source,
            target=self.target,
            condition=condition,
            negate=negate
        )

    def unless(self, condition: Any) -> "TransitionBuilder":
        """Branch with a negated condition"""
        return self.if_(condition, negate=True)

    def else_(self) -> "TransitionBuilder":
        """Branch with the current condition negated; the target must be set again"""
        if self.condition is None:
            raise BuilderError("Cannot create else branch without condition")
        return self._branch(
            source=self.source,
            condition=self.condition,
            negate=not self.negate
        )

    def elsif(self, condition: Any) -> "TransitionBuilder":
        """Branch with a new condition and no target"""
        child = self.if_(condition)
        child.target = None
        return child

    def goto(self, name: str) -> "TransitionBuilder":
        if self.target is not None:
            raise BuilderError(f"Target state already set to {self.target}")
        self.target = name
        return self

    def do(self, callback: Any) -> "TransitionBuilder":
        self.callback = Callback.wrap(callback)
        return self

    def stay(self) -> "TransitionBuilder":
        return self.goto(self.source)

    def description(self, text: str) -> "TransitionBuilder":
        self.note = text
        return self

    @property
    def complete(self) -> bool:
        return self.source is not None and self.target is not None

    def build(self) -> List[Transition]:
        transitions = []
        if self.complete:
            transitions.append(Transition(
                source=self.source,
                target=self.target,
                condition=self.condition,
                negate=self.negate,
                callback=self.callback,
                description=self.note
            ))
        for child in self.children:
            transitions.extend(child.build())
        return transitions
