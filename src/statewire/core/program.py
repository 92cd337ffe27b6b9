"""Program container: registry, ordered states and the initial state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from statewire.core.graph import State
from statewire.core.resource import Registry

if TYPE_CHECKING:
    from statewire.core.diagnostics import DiagnosticReport


@dataclass
class Program:
    """Everything the validator and emitter need for one compilation.

    Attributes:
        name: Application name, echoed in the generated header.
        registry: Declared resources, in declaration order.
        states: Declared states, in declaration order.
        initial: Name of the initial state (None when none was marked).
        fault_pin: Pin driving the fault indicator, if any.
        end_line: Last source line seen while building; program-level
            diagnostics such as a missing initial state point here.
        source_file: Input path used to prefix diagnostics.
        initial_markings: How many states were marked initial (the last wins).
    """

    name: str
    registry: Registry = field(default_factory=Registry)
    states: list[State] = field(default_factory=list)
    initial: str | None = None
    fault_pin: int | None = None
    end_line: int | None = None
    source_file: str | None = None
    initial_markings: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Program name must be a non-empty string")
        if "\n" in self.name or "\r" in self.name:
            raise ValueError(f"Program name must be a single line, got {self.name!r}")
        if self.fault_pin is not None:
            if isinstance(self.fault_pin, bool) or not isinstance(self.fault_pin, int):
                raise TypeError(
                    f"fault_pin must be int or None, got {type(self.fault_pin).__name__}"
                )
            if self.fault_pin < 0:
                raise ValueError("fault_pin must be >= 0")
        if self.initial is not None and self.initial_markings == 0:
            self.initial_markings = 1

    def add_state(self, state: State, *, initial: bool = False) -> State:
        self.states.append(state)
        if initial:
            self.initial = state.name
            self.initial_markings += 1
        return state

    def contains_state(self, name: str) -> bool:
        return any(state.name == name for state in self.states)

    def get_state(self, name: str) -> State | None:
        """Return the last state declared under ``name``."""
        found: State | None = None
        for state in self.states:
            if state.name == name:
                found = state
        return found

    @property
    def initial_state(self) -> State | None:
        if self.initial is None:
            return None
        return self.get_state(self.initial)

    @property
    def fault_states(self) -> tuple[State, ...]:
        return tuple(state for state in self.states if state.is_fault)

    @property
    def has_fault_states(self) -> bool:
        return any(state.is_fault for state in self.states)

    def validate(self) -> DiagnosticReport:
        """Run semantic validation for this Program."""
        from statewire.core.validation import validate_program

        return validate_program(self)


__all__ = ["Program"]
