"""Semantic validation for statewire programs.

Validation is a batch pass: every check runs over the whole program and
every defect is reported, so one invocation lists everything wrong with
the input. Only a report without errors may be handed to an emitter.
"""

from __future__ import annotations

from dataclasses import replace

from statewire.core.diagnostics import (
    APP_NAME_CAPITALIZATION,
    DUPLICATE_PORT,
    DUPLICATE_STATE_NAME,
    MISSING_FAULT_PIN,
    MISSING_INITIAL_STATE,
    MULTIPLE_INITIAL_STATES,
    UNDECLARED_RESOURCE,
    UNDECLARED_STATE,
    Diagnostic,
    DiagnosticReport,
    make_diagnostic,
)
from statewire.core.expression import Expression
from statewire.core.graph import Action, OnExpression, State, Transition
from statewire.core.program import Program
from statewire.core.resource import Registry


def _source_file(node: object, program: Program) -> str | None:
    return getattr(node, "source_file", None) or program.source_file


def _check_expression(
    expr: Expression,
    registry: Registry,
    line: int | None,
    source_file: str | None,
) -> list[Diagnostic]:
    findings: list[Diagnostic] = []
    for sensor_name in expr.iter_sensor_names():
        if not registry.contains(sensor_name):
            findings.append(
                make_diagnostic(
                    UNDECLARED_RESOURCE,
                    f"undeclared '{sensor_name}'",
                    line=line,
                    source_file=source_file,
                )
            )
    return findings


def _check_actions(actions: tuple[Action, ...], program: Program) -> list[Diagnostic]:
    findings: list[Diagnostic] = []
    for action in actions:
        if not program.registry.contains(action.target):
            findings.append(
                make_diagnostic(
                    UNDECLARED_RESOURCE,
                    f"undeclared '{action.target}'",
                    line=action.line,
                    source_file=_source_file(action, program),
                )
            )
    return findings


def _check_transition(transition: Transition, program: Program) -> list[Diagnostic]:
    findings: list[Diagnostic] = []
    source_file = _source_file(transition, program)
    if isinstance(transition, OnExpression):
        findings.extend(
            _check_expression(transition.guard, program.registry, transition.line, source_file)
        )
    if not program.contains_state(transition.target_state):
        findings.append(
            make_diagnostic(
                UNDECLARED_STATE,
                f"undeclared state '{transition.target_state}'",
                line=transition.line,
                source_file=source_file,
                suggestion="Declare the target state or fix the transition's target name.",
            )
        )
    return findings


def _check_duplicate_state(index: int, state: State, program: Program) -> list[Diagnostic]:
    # Only later states are compared, so the last occurrence of a name is the
    # one treated as the original declaration.
    for later in program.states[index + 1 :]:
        if later.name == state.name:
            return [
                make_diagnostic(
                    DUPLICATE_STATE_NAME,
                    f"duplicate state name: '{state.name}'",
                    line=state.line,
                    source_file=_source_file(state, program),
                )
            ]
    return []


def _check_states(program: Program) -> list[Diagnostic]:
    findings: list[Diagnostic] = []
    for index, state in enumerate(program.states):
        findings.extend(_check_actions(state.actions, program))
        for transition in state.transitions:
            findings.extend(_check_transition(transition, program))
        findings.extend(_check_duplicate_state(index, state, program))
    return findings


def _check_initial_state(program: Program) -> list[Diagnostic]:
    if program.initial is not None and program.contains_state(program.initial):
        return []
    return [
        make_diagnostic(
            MISSING_INITIAL_STATE,
            "no initial state declared",
            line=program.end_line,
            source_file=program.source_file,
            suggestion="Mark exactly one state as initial.",
        )
    ]


def _check_fault_pin(program: Program) -> list[Diagnostic]:
    findings: list[Diagnostic] = []
    fault_states = program.fault_states
    if fault_states and program.fault_pin is None:
        first = fault_states[0]
        findings.append(
            make_diagnostic(
                MISSING_FAULT_PIN,
                "a fault pin is required when fault states are defined",
                line=first.line,
                source_file=_source_file(first, program),
                suggestion="Pass fault_pin=<pin> when creating the program.",
            )
        )
    if program.fault_pin is not None:
        owner = program.registry.owner_of_port(program.fault_pin)
        if owner is not None:
            findings.append(
                make_diagnostic(
                    DUPLICATE_PORT,
                    f"port {program.fault_pin} was already used by '{owner.name}'",
                    line=owner.line,
                    source_file=_source_file(owner, program),
                    suggestion="The fault pin must not be shared with a declared resource.",
                )
            )
    return findings


def _check_advisories(program: Program) -> list[Diagnostic]:
    findings: list[Diagnostic] = []
    first_char = program.name[:1]
    if first_char.upper() != first_char:
        findings.append(
            make_diagnostic(
                APP_NAME_CAPITALIZATION,
                f"application name '{program.name}' should start with a capital",
                source_file=program.source_file,
            )
        )
    if program.initial_markings > 1:
        initial = program.initial_state
        findings.append(
            make_diagnostic(
                MULTIPLE_INITIAL_STATES,
                f"{program.initial_markings} states are marked initial; "
                f"'{program.initial}' (the last one) is used",
                line=initial.line if initial is not None else program.end_line,
                source_file=program.source_file,
            )
        )
    return findings


def validate_program(program: Program) -> DiagnosticReport:
    if not isinstance(program, Program):
        raise TypeError(f"program must be Program, got {type(program).__name__}")

    findings: list[Diagnostic] = [
        replace(conflict, source_file=conflict.source_file or program.source_file)
        for conflict in program.registry.conflicts
    ]
    findings.extend(_check_states(program))
    findings.extend(_check_initial_state(program))
    findings.extend(_check_fault_pin(program))
    findings.extend(_check_advisories(program))
    return DiagnosticReport.from_diagnostics(findings)


__all__ = ["validate_program"]
