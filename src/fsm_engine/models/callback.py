"""Callable references used for conditions, transition callbacks and hooks."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class Callback:
    """Either a named reference to a method of the driving object or a closure.

    Named callbacks are looked up on the execution context and called with the
    event arguments only, the same way a bound method would be. Closures get
    the context as their first argument.
    """

    name: Optional[str] = None
    func: Optional[Callable[..., Any]] = None
    label: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.name is None) == (self.func is None):
            raise ValueError("Callback needs exactly one of name or func")

    @classmethod
    def named(cls, name: str) -> "Callback":
        return cls(name=name)

    @classmethod
    def closure(cls, func: Callable[..., Any], label: Optional[str] = None) -> "Callback":
        return cls(func=func, label=label)

    @classmethod
    def wrap(cls, value: Any) -> Optional["Callback"]:
        """Normalize a DSL argument into a Callback (``None`` passes through)."""
        if value is None or isinstance(value, Callback):
            return value
        if isinstance(value, str):
            return cls.named(value)
        if callable(value):
            return cls.closure(value)
        raise TypeError(f"Expected a method name or a callable, got {type(value).__name__}")

    @property
    def is_named(self) -> bool:
        return self.name is not None

    @property
    def tag(self) -> str:
        """Stable human readable tag, used by the diagnostics renderer."""
        if self.name is not None:
            return self.name
        if self.label:
            return self.label
        return getattr(self.func, "__qualname__", None) or repr(self.func)

    def resolve(self, context: Any) -> Callable[..., Any]:
        if self.name is None:
            return self.func
        try:
            return getattr(context, self.name)
        except AttributeError:
            raise AttributeError(
                f"{type(context).__name__} has no method '{self.name}'"
            ) from None

    def __call__(self, context: Any, *args: Any) -> Any:
        if self.name is not None:
            return self.resolve(context)(*args)
        return self.func(context, *args)
