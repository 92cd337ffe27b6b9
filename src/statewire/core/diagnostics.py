"""Batch diagnostics produced while building and validating a program."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

DiagnosticSeverity = Literal["error", "warning"]

DUPLICATE_RESOURCE_NAME = "DUPLICATE_RESOURCE_NAME"
DUPLICATE_PORT = "DUPLICATE_PORT"
UNDECLARED_RESOURCE = "UNDECLARED_RESOURCE"
UNDECLARED_STATE = "UNDECLARED_STATE"
DUPLICATE_STATE_NAME = "DUPLICATE_STATE_NAME"
MISSING_INITIAL_STATE = "MISSING_INITIAL_STATE"
MISSING_FAULT_PIN = "MISSING_FAULT_PIN"
APP_NAME_CAPITALIZATION = "APP_NAME_CAPITALIZATION"
MULTIPLE_INITIAL_STATES = "MULTIPLE_INITIAL_STATES"

_ADVISORY_CODES = frozenset(
    {
        APP_NAME_CAPITALIZATION,
        MULTIPLE_INITIAL_STATES,
    }
)


def _route_severity(code: str) -> DiagnosticSeverity:
    if code in _ADVISORY_CODES:
        return "warning"
    return "error"


@dataclass(frozen=True)
class Diagnostic:
    code: str
    severity: DiagnosticSeverity
    message: str
    line: int | None = None
    source_file: str | None = None
    suggestion: str | None = None

    def format(self) -> str:
        """Render as ``file:line: message`` (GNU style, missing parts omitted)."""
        parts: list[str] = []
        if self.source_file:
            parts.append(self.source_file)
        if self.line is not None:
            parts.append(str(self.line))
        location = ":".join(parts)
        text = self.message if self.severity == "error" else f"warning: {self.message}"
        if location:
            return f"{location}: {text}"
        return text


def make_diagnostic(
    code: str,
    message: str,
    *,
    line: int | None = None,
    source_file: str | None = None,
    suggestion: str | None = None,
) -> Diagnostic:
    return Diagnostic(
        code=code,
        severity=_route_severity(code),
        message=message,
        line=line,
        source_file=source_file,
        suggestion=suggestion,
    )


@dataclass(frozen=True)
class DiagnosticReport:
    errors: tuple[Diagnostic, ...] = ()
    warnings: tuple[Diagnostic, ...] = ()

    @classmethod
    def from_diagnostics(cls, diagnostics: Iterable[Diagnostic]) -> DiagnosticReport:
        errors: list[Diagnostic] = []
        warnings: list[Diagnostic] = []
        for diagnostic in diagnostics:
            if diagnostic.severity == "error":
                errors.append(diagnostic)
            else:
                warnings.append(diagnostic)
        return cls(errors=tuple(errors), warnings=tuple(warnings))

    @property
    def ok(self) -> bool:
        return not self.errors

    def codes(self) -> list[str]:
        return [diagnostic.code for diagnostic in (*self.errors, *self.warnings)]

    def summary(self) -> str:
        parts: list[str] = []
        if self.errors:
            parts.append(f"{len(self.errors)} error(s)")
        if self.warnings:
            parts.append(f"{len(self.warnings)} warning(s)")
        if not parts:
            return "No findings."
        return ", ".join(parts) + "."

    def format(self) -> str:
        """All diagnostics, one per line, followed by the error count when nonzero."""
        lines = [diagnostic.format() for diagnostic in (*self.errors, *self.warnings)]
        if self.errors:
            count = len(self.errors)
            lines.append(f"**** {count} error{'s' if count > 1 else ''}")
        return "\n".join(lines)


__all__ = [
    "APP_NAME_CAPITALIZATION",
    "DUPLICATE_PORT",
    "DUPLICATE_RESOURCE_NAME",
    "DUPLICATE_STATE_NAME",
    "MISSING_FAULT_PIN",
    "MISSING_INITIAL_STATE",
    "MULTIPLE_INITIAL_STATES",
    "UNDECLARED_RESOURCE",
    "UNDECLARED_STATE",
    "Diagnostic",
    "DiagnosticReport",
    "DiagnosticSeverity",
    "make_diagnostic",
]
