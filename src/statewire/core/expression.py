"""Boolean guard expressions over sensor readings.

An expression is a tree of ``Condition`` leaves (a sensor compared to a
signal level) joined by ``AndExpr`` / ``OrExpr`` nodes. Each child belongs
to exactly one parent, so a tree never shares nodes or contains cycles.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

HIGH = True
LOW = False

_LEVEL_NAMES = {"HIGH": HIGH, "LOW": LOW}


class ExpressionKind(Enum):
    """Node kinds accepted by ``ProgramBuilder.make_expression``."""

    CONDITION = "condition"
    AND = "and"
    OR = "or"


def coerce_level(value: Any) -> bool:
    """Normalize a signal level given as bool, 0/1 or ``"HIGH"``/``"LOW"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"Signal level must be 0 or 1, got {value}")
    if isinstance(value, str):
        level = _LEVEL_NAMES.get(value.strip().upper())
        if level is None:
            raise ValueError(f"Signal level must be 'HIGH' or 'LOW', got {value!r}")
        return level
    raise TypeError(f"Signal level must be bool, int or str, got {type(value).__name__}")


def level_name(level: bool) -> str:
    return "HIGH" if level else "LOW"


class _ExpressionOps:
    """``&`` / ``|`` composition shared by every expression node."""

    def __and__(self, other: Expression) -> AndExpr:
        """AND two expressions: button.is_high() & door.is_low()."""
        if isinstance(other, (Condition, AndExpr, OrExpr)):
            return AndExpr(self, other)  # type: ignore[arg-type]
        return NotImplemented

    def __or__(self, other: Expression) -> OrExpr:
        """OR two expressions: button.is_high() | door.is_low()."""
        if isinstance(other, (Condition, AndExpr, OrExpr)):
            return OrExpr(self, other)  # type: ignore[arg-type]
        return NotImplemented


@dataclass(frozen=True)
class Condition(_ExpressionOps):
    """Leaf test: the sensor named ``sensor`` reads ``level``."""

    sensor: str
    level: bool = HIGH

    def __post_init__(self) -> None:
        if not isinstance(self.sensor, str) or not self.sensor:
            raise ValueError("Condition sensor name must be a non-empty string")
        object.__setattr__(self, "level", coerce_level(self.level))

    def iter_sensor_names(self) -> Iterator[str]:
        yield self.sensor


@dataclass(frozen=True)
class AndExpr(_ExpressionOps):
    left: Expression
    right: Expression

    def __post_init__(self) -> None:
        _require_expression(self.left, "AndExpr.left")
        _require_expression(self.right, "AndExpr.right")

    def iter_sensor_names(self) -> Iterator[str]:
        yield from self.left.iter_sensor_names()
        yield from self.right.iter_sensor_names()


@dataclass(frozen=True)
class OrExpr(_ExpressionOps):
    left: Expression
    right: Expression

    def __post_init__(self) -> None:
        _require_expression(self.left, "OrExpr.left")
        _require_expression(self.right, "OrExpr.right")

    def iter_sensor_names(self) -> Iterator[str]:
        yield from self.left.iter_sensor_names()
        yield from self.right.iter_sensor_names()


Expression: TypeAlias = "Condition | AndExpr | OrExpr"


def is_expression(value: Any) -> bool:
    return isinstance(value, (Condition, AndExpr, OrExpr))


def _require_expression(value: Any, what: str) -> None:
    if not is_expression(value):
        raise TypeError(f"{what} must be an expression, got {type(value).__name__}")


__all__ = [
    "HIGH",
    "LOW",
    "AndExpr",
    "Condition",
    "Expression",
    "ExpressionKind",
    "OrExpr",
    "coerce_level",
    "is_expression",
    "level_name",
]
