"""Resource (brick) declarations and the registry that owns them.

Resources bind a name to a hardware port. The registry checks every new
declaration against the earlier ones and records conflicts instead of
raising, so one pass can surface every duplicate.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from statewire.core.diagnostics import (
    DUPLICATE_PORT,
    DUPLICATE_RESOURCE_NAME,
    Diagnostic,
    make_diagnostic,
)
from statewire.core.expression import HIGH, LOW, Condition


class ResourceKind(Enum):
    """Pin direction of a declared resource."""

    SENSOR = "sensor"  # Read with digitalRead, configured as INPUT
    ACTUATOR = "actuator"  # Driven with digitalWrite, configured as OUTPUT


@dataclass(frozen=True)
class Resource:
    """A sensor or actuator bound to a hardware port.

    Attributes:
        name: Identifier used by actions and conditions.
        kind: SENSOR or ACTUATOR.
        port: Hardware pin number.
        line: Declaration line, when known.
        source_file: Declaration file, when known.
    """

    name: str
    kind: ResourceKind
    port: int
    line: int | None = field(default=None, compare=False)
    source_file: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Resource name must be a non-empty string")
        if not isinstance(self.kind, ResourceKind):
            object.__setattr__(self, "kind", ResourceKind(self.kind))
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise TypeError(f"Resource port must be int, got {type(self.port).__name__}")
        if self.port < 0:
            raise ValueError(f"Resource port must be >= 0, got {self.port}")

    @property
    def is_sensor(self) -> bool:
        return self.kind is ResourceKind.SENSOR

    def is_high(self) -> Condition:
        """Condition true while this resource reads HIGH."""
        return Condition(self.name, HIGH)

    def is_low(self) -> Condition:
        """Condition true while this resource reads LOW."""
        return Condition(self.name, LOW)


class Registry:
    """Ordered collection of declared resources.

    ``register`` never rejects a resource: name and port conflicts are
    appended to ``conflicts`` and the resource is kept, so later checks
    still see it.
    """

    def __init__(self) -> None:
        self._resources: list[Resource] = []
        self.conflicts: list[Diagnostic] = []

    def register(self, resource: Resource) -> Resource:
        if not isinstance(resource, Resource):
            raise TypeError(f"register() expects a Resource, got {type(resource).__name__}")

        if self.contains(resource.name):
            self.conflicts.append(
                make_diagnostic(
                    DUPLICATE_RESOURCE_NAME,
                    f"name '{resource.name}' was already used",
                    line=resource.line,
                    source_file=resource.source_file,
                )
            )
        for existing in self._resources:
            if existing.port == resource.port:
                self.conflicts.append(
                    make_diagnostic(
                        DUPLICATE_PORT,
                        f"port {existing.port} was already used by '{existing.name}'",
                        line=resource.line,
                        source_file=resource.source_file,
                    )
                )

        self._resources.append(resource)
        return resource

    def contains(self, name: str) -> bool:
        return any(resource.name == name for resource in self._resources)

    def get(self, name: str) -> Resource | None:
        """First resource declared under ``name``."""
        for resource in self._resources:
            if resource.name == name:
                return resource
        return None

    def owner_of_port(self, port: int) -> Resource | None:
        for resource in self._resources:
            if resource.port == port:
                return resource
        return None

    def sensors(self) -> tuple[Resource, ...]:
        return tuple(r for r in self._resources if r.kind is ResourceKind.SENSOR)

    def actuators(self) -> tuple[Resource, ...]:
        return tuple(r for r in self._resources if r.kind is ResourceKind.ACTUATOR)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)


__all__ = [
    "Registry",
    "Resource",
    "ResourceKind",
]
