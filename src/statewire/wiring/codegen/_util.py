"""Wiring (Arduino) code generation."""

from __future__ import annotations

from collections.abc import Collection

from statewire.core.expression import level_name
from statewire.core.resource import Resource, ResourceKind
from statewire.wiring.codegen._constants import _IDENT_RE


def _indent_body(lines: list[str], spaces: int) -> list[str]:
    prefix = " " * spaces
    return [f"{prefix}{line}" if line else line for line in lines]


def _level_literal(level: bool) -> str:
    return level_name(level)


def _pin_mode(resource: Resource) -> str:
    if resource.kind is ResourceKind.SENSOR:
        return "INPUT"
    return "OUTPUT"


def _c_identifier(logical_name: str) -> str:
    sanitized = _IDENT_RE.sub("_", logical_name)
    if not sanitized:
        sanitized = "_"
    if sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    return sanitized


def _mangle_symbol(
    logical_name: str,
    prefix: str,
    used: set[str],
    reserved: Collection[str] = (),
) -> str:
    sanitized = _c_identifier(logical_name)
    candidate = f"{prefix}{sanitized}"
    if candidate in reserved:
        candidate = f"sw_{candidate}"
    if candidate not in used:
        used.add(candidate)
        return candidate
    n = 2
    while True:
        next_candidate = f"{candidate}_{n}"
        if next_candidate not in used:
            used.add(next_candidate)
            return next_candidate
        n += 1
