"""State machine model, validation and DSL.

A Program holds a resource Registry (sensors and actuators bound to
ports) and an ordered list of States. Each State drives actuators on
entry and leaves through guarded transitions tried in declaration order.
``validate_program`` reports every defect in one pass; only a Program
without errors is handed to a code generator.
"""

from statewire.core.builder import ProgramBuilder
from statewire.core.diagnostics import (
    APP_NAME_CAPITALIZATION,
    DUPLICATE_PORT,
    DUPLICATE_RESOURCE_NAME,
    DUPLICATE_STATE_NAME,
    MISSING_FAULT_PIN,
    MISSING_INITIAL_STATE,
    MULTIPLE_INITIAL_STATES,
    UNDECLARED_RESOURCE,
    UNDECLARED_STATE,
    Diagnostic,
    DiagnosticReport,
)
from statewire.core.dsl import (
    App,
    actuator,
    after,
    fault_state,
    sensor,
    state,
    when,
    write,
)
from statewire.core.expression import (
    HIGH,
    LOW,
    AndExpr,
    Condition,
    Expression,
    ExpressionKind,
    OrExpr,
)
from statewire.core.graph import Action, OnDelay, OnExpression, State, Transition
from statewire.core.program import Program
from statewire.core.resource import Registry, Resource, ResourceKind
from statewire.core.validation import validate_program

__all__ = [
    # Signal levels
    "HIGH",
    "LOW",
    # Model
    "Action",
    "AndExpr",
    "Condition",
    "Expression",
    "ExpressionKind",
    "OnDelay",
    "OnExpression",
    "OrExpr",
    "Program",
    "ProgramBuilder",
    "Registry",
    "Resource",
    "ResourceKind",
    "State",
    "Transition",
    # Validation
    "Diagnostic",
    "DiagnosticReport",
    "validate_program",
    "APP_NAME_CAPITALIZATION",
    "DUPLICATE_PORT",
    "DUPLICATE_RESOURCE_NAME",
    "DUPLICATE_STATE_NAME",
    "MISSING_FAULT_PIN",
    "MISSING_INITIAL_STATE",
    "MULTIPLE_INITIAL_STATES",
    "UNDECLARED_RESOURCE",
    "UNDECLARED_STATE",
    # DSL
    "App",
    "actuator",
    "after",
    "fault_state",
    "sensor",
    "state",
    "when",
    "write",
]
