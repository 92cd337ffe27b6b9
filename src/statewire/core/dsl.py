"""Embedded Python DSL for declaring state machines.

Example:
    with App("Alarm", fault_pin=12) as app:
        button = sensor("button", 9)
        led = actuator("led", 10)

        with state("idle", initial=True):
            write(led, LOW)
            when(button.is_high(), goto="alarming")

        with state("alarming"):
            write(led, HIGH)
            after(5000, goto="idle")

        fault_state("broken", blinks=3)

    result = app.compile()

Every call records the caller's file and line, so diagnostics point at the
user's source. The context stacks are module-level and not thread-safe.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

from statewire.core._source import _capture_user_source
from statewire.core.builder import ProgramBuilder
from statewire.core.expression import Expression, is_expression
from statewire.core.graph import Action, State, Transition
from statewire.core.program import Program
from statewire.core.resource import Resource, ResourceKind

if TYPE_CHECKING:
    from statewire.core.diagnostics import DiagnosticReport
    from statewire.wiring.codegen.generate import EmitResult

_app_stack: list[App] = []


_state_stack: list[StateScope] = []


def _current_app() -> App | None:
    return _app_stack[-1] if _app_stack else None


def _require_app_context(func_name: str) -> App:
    app = _current_app()
    if app is None:
        raise RuntimeError(f"{func_name}() must be called inside an App context")
    return app


def _require_state_context(func_name: str) -> StateScope:
    scope = _state_stack[-1] if _state_stack else None
    if scope is None:
        raise RuntimeError(f"{func_name}() must be called inside a state context")
    return scope


class App:
    """Context manager collecting one application's resources and states."""

    def __init__(self, name: str, *, fault_pin: int | None = None) -> None:
        source_file, source_line = _capture_user_source()
        self._builder = ProgramBuilder(name, fault_pin=fault_pin, source_file=source_file)
        self._builder.lineno = source_line

    def __enter__(self) -> App:
        if _app_stack:
            raise RuntimeError("App contexts cannot be nested")
        _app_stack.append(self)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        _app_stack.pop()
        _state_stack.clear()

    @property
    def builder(self) -> ProgramBuilder:
        return self._builder

    @property
    def program(self) -> Program:
        return self._builder.build()

    def validate(self) -> DiagnosticReport:
        return self._builder.validate()

    def compile(self, out: IO[str] | None = None, **options: Any) -> EmitResult:
        return self._builder.compile(out=out, **options)


class StateScope:
    """Context manager collecting the actions and transitions of one state.

    The state is added to the App when the block exits normally.
    """

    def __init__(self, name: str, *, initial: bool = False) -> None:
        self._app = _require_app_context("state")
        self._source_file, self._source_line = _capture_user_source()
        self.name = name
        self.initial = initial
        self.actions: list[Action] = []
        self.transitions: list[Transition] = []
        self.state: State | None = None

    def __enter__(self) -> StateScope:
        if _state_stack:
            raise RuntimeError("state() contexts cannot be nested")
        _state_stack.append(self)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        _state_stack.pop()
        if exc_type is not None:
            return
        self.state = self._app.builder.make_state(
            self.name,
            self.actions,
            self.transitions,
            self.initial,
            line=self._source_line,
            source_file=self._source_file,
        )


def state(name: str, *, initial: bool = False) -> StateScope:
    """Open a state block; ``initial=True`` makes it the state ``loop()`` enters."""
    return StateScope(name, initial=initial)


def _declare(func_name: str, kind: ResourceKind, name: str, port: int) -> Resource:
    app = _require_app_context(func_name)
    source_file, source_line = _capture_user_source()
    return app.builder.register_resource(
        port, kind, name, line=source_line, source_file=source_file
    )


def sensor(name: str, port: int) -> Resource:
    """Declare an input read with ``digitalRead``."""
    return _declare("sensor", ResourceKind.SENSOR, name, port)


def actuator(name: str, port: int) -> Resource:
    """Declare an output driven with ``digitalWrite``."""
    return _declare("actuator", ResourceKind.ACTUATOR, name, port)


def _resource_name(target: Resource | str) -> str:
    if isinstance(target, Resource):
        return target.name
    if isinstance(target, str):
        return target
    raise TypeError(f"Expected Resource or resource name, got {type(target).__name__}")


def write(target: Resource | str, level: Any) -> Action:
    """Drive ``target`` to ``level`` when the current state is entered."""
    scope = _require_state_context("write")
    source_file, source_line = _capture_user_source()
    action = scope._app.builder.make_action(
        _resource_name(target), level, line=source_line, source_file=source_file
    )
    scope.actions.append(action)
    return action


def when(expr: Expression, *, goto: str) -> Transition:
    """Leave for ``goto`` once ``expr`` holds (debounced)."""
    scope = _require_state_context("when")
    if not is_expression(expr):
        raise TypeError(f"when() expects an expression, got {type(expr).__name__}")
    source_file, source_line = _capture_user_source()
    transition = scope._app.builder.make_transition(
        expr, goto, line=source_line, source_file=source_file
    )
    scope.transitions.append(transition)
    return transition


def after(milliseconds: int, *, goto: str) -> Transition:
    """Leave for ``goto`` once ``milliseconds`` have passed since the last transition."""
    scope = _require_state_context("after")
    if isinstance(milliseconds, bool) or not isinstance(milliseconds, int):
        raise TypeError(f"after() expects int milliseconds, got {type(milliseconds).__name__}")
    source_file, source_line = _capture_user_source()
    transition = scope._app.builder.make_transition(
        milliseconds, goto, line=source_line, source_file=source_file
    )
    scope.transitions.append(transition)
    return transition


def fault_state(name: str, *, blinks: int) -> State:
    """Declare a terminal state that blinks the fault pin ``blinks`` times, forever."""
    app = _require_app_context("fault_state")
    if _state_stack:
        raise RuntimeError("fault_state() cannot be called inside a state context")
    source_file, source_line = _capture_user_source()
    return app.builder.make_fault_state(
        name, blinks, line=source_line, source_file=source_file
    )


__all__ = [
    "App",
    "StateScope",
    "actuator",
    "after",
    "fault_state",
    "sensor",
    "state",
    "when",
    "write",
]
