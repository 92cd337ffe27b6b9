"""Wiring (Arduino) code generation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import IO

from statewire.core.diagnostics import Diagnostic, DiagnosticReport
from statewire.core.graph import State
from statewire.core.program import Program
from statewire.core.resource import Registry
from statewire.wiring.codegen._constants import DEFAULT_DEBOUNCE_MS
from statewire.wiring.codegen.context import CodegenContext
from statewire.wiring.codegen.render import _render_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmitResult:
    """Outcome of one compilation: generated source or the errors that blocked it.

    Either ``source`` is set or ``errors`` is non-empty, never both: ``source``
    is None exactly when ``diagnostics`` holds at least one error. Warnings
    are advisory, not errors. They never block emission and are kept
    alongside the source.
    """

    source: str | None
    diagnostics: DiagnosticReport

    @property
    def ok(self) -> bool:
        return self.source is not None

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return self.diagnostics.errors

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return self.diagnostics.warnings

    def summary(self) -> str:
        count = len(self.diagnostics.errors)
        if count:
            return f"**** {count} error{'s' if count > 1 else ''}"
        return self.diagnostics.summary()


def _check_debounce(debounce_ms: int) -> None:
    if isinstance(debounce_ms, bool) or not isinstance(debounce_ms, int):
        raise TypeError(f"debounce_ms must be int, got {type(debounce_ms).__name__}")
    if debounce_ms < 0:
        raise ValueError("debounce_ms must be >= 0")


def _emit(program: Program, debounce_ms: int) -> str:
    ctx = CodegenContext(program=program, debounce_ms=debounce_ms)
    ctx.assign_symbols()
    source = _render_code(ctx)
    logger.debug(
        "Rendered %d state function(s) for %r (%d line(s))",
        len(program.states),
        program.name,
        source.count("\n"),
    )
    return source


def generate_wiring(program: Program, *, debounce_ms: int = DEFAULT_DEBOUNCE_MS) -> str:
    """Validate ``program`` and return the generated sketch text.

    Raises:
        TypeError: ``program`` is not a Program or ``debounce_ms`` is not an int.
        ValueError: ``debounce_ms`` is negative, or validation reported errors.
    """
    if not isinstance(program, Program):
        raise TypeError(f"program must be Program, got {type(program).__name__}")
    _check_debounce(debounce_ms)

    report = program.validate()
    if report.errors:
        lines = [f"{len(report.errors)} error(s)."]
        for err in report.errors:
            lines.append(f"{err.code} @ {err.format()}")
        raise ValueError("\n".join(lines))

    return _emit(program, debounce_ms)


def compile_program(
    program: Program,
    *,
    out: IO[str] | None = None,
    debounce_ms: int = DEFAULT_DEBOUNCE_MS,
) -> EmitResult:
    """Validate, then emit once; nothing is written to ``out`` when there are errors."""
    if not isinstance(program, Program):
        raise TypeError(f"program must be Program, got {type(program).__name__}")
    _check_debounce(debounce_ms)

    report = program.validate()
    for warning in report.warnings:
        logger.debug("Advisory: %s", warning.format())
    if report.errors:
        logger.info("Not emitting %r: %s", program.name, report.summary())
        return EmitResult(source=None, diagnostics=report)

    source = _emit(program, debounce_ms)
    if out is not None:
        out.write(source)
    return EmitResult(source=source, diagnostics=DiagnosticReport(warnings=report.warnings))


def compile_app(
    name: str,
    fault_pin: int | None,
    registry: Registry,
    states: Iterable[State],
    *,
    initial: str | None,
    out: IO[str] | None = None,
    debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    source_file: str | None = None,
) -> EmitResult:
    """Assemble a Program from its parts and compile it."""
    if not isinstance(registry, Registry):
        raise TypeError(f"registry must be Registry, got {type(registry).__name__}")
    program = Program(
        name=name,
        registry=registry,
        states=list(states),
        initial=initial,
        fault_pin=fault_pin,
        source_file=source_file,
    )
    return compile_program(program, out=out, debounce_ms=debounce_ms)
