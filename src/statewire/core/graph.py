"""State-machine graph nodes: actions, transitions and states.

References between nodes are plain names. A transition may target a state
declared later, so nothing here resolves or checks names; that is the
validator's job.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TypeAlias

from statewire.core.expression import Expression, coerce_level, is_expression


def _require_name(value: object, what: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{what} must be a non-empty string")


@dataclass(frozen=True)
class Action:
    """Drive resource ``target`` to ``level`` on state entry."""

    target: str
    level: bool
    line: int | None = field(default=None, compare=False)
    source_file: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        _require_name(self.target, "Action target")
        object.__setattr__(self, "level", coerce_level(self.level))


@dataclass(frozen=True)
class OnExpression:
    """Transition taken when ``guard`` holds and the debounce interval has elapsed."""

    guard: Expression
    target_state: str
    line: int | None = field(default=None, compare=False)
    source_file: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not is_expression(self.guard):
            raise TypeError(
                f"OnExpression guard must be an expression, got {type(self.guard).__name__}"
            )
        _require_name(self.target_state, "Transition target state")


@dataclass(frozen=True)
class OnDelay:
    """Transition taken once ``milliseconds`` have elapsed since the last transition."""

    milliseconds: int
    target_state: str
    line: int | None = field(default=None, compare=False)
    source_file: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.milliseconds, bool) or not isinstance(self.milliseconds, int):
            raise TypeError(
                f"Delay must be an int number of milliseconds, got {type(self.milliseconds).__name__}"
            )
        if self.milliseconds < 0:
            raise ValueError(f"Delay must be >= 0 milliseconds, got {self.milliseconds}")
        _require_name(self.target_state, "Transition target state")


Transition: TypeAlias = "OnExpression | OnDelay"


@dataclass(frozen=True)
class State:
    """A named state.

    Normal states run ``actions`` in order, then dispatch on ``transitions``
    in order (earlier transitions have priority). A state with ``fault`` set
    blinks the fault indicator ``fault`` times and re-enters itself forever;
    it carries no actions or transitions.
    """

    name: str
    actions: tuple[Action, ...] = ()
    transitions: tuple[Transition, ...] = ()
    fault: int | None = None
    line: int | None = field(default=None, compare=False)
    source_file: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        _require_name(self.name, "State name")
        object.__setattr__(self, "actions", _as_tuple(self.actions, Action, "actions"))
        object.__setattr__(
            self, "transitions", _as_tuple(self.transitions, (OnExpression, OnDelay), "transitions")
        )
        if self.fault is not None:
            if isinstance(self.fault, bool) or not isinstance(self.fault, int):
                raise TypeError(f"Fault blink count must be int, got {type(self.fault).__name__}")
            if self.fault < 1:
                raise ValueError(f"Fault blink count must be >= 1, got {self.fault}")
            if self.actions or self.transitions:
                raise ValueError(f"Fault state '{self.name}' cannot have actions or transitions")

    @property
    def is_fault(self) -> bool:
        return self.fault is not None


def _as_tuple(items: Iterable[object], kinds: type | tuple[type, ...], what: str) -> tuple:
    values = tuple(items)
    for item in values:
        if not isinstance(item, kinds):
            raise TypeError(f"State {what} cannot contain {type(item).__name__}")
    return values


__all__ = [
    "Action",
    "OnDelay",
    "OnExpression",
    "State",
    "Transition",
]
