"""Wiring (Arduino) code generation."""

from __future__ import annotations

from dataclasses import dataclass, field

from statewire.core.graph import State
from statewire.core.program import Program
from statewire.core.resource import Resource
from statewire.wiring.codegen._constants import (
    _HELPER_ORDER,
    _RESERVED_WORDS,
    _STATE_FN_PREFIX,
)
from statewire.wiring.codegen._util import _mangle_symbol


@dataclass
class CodegenContext:
    program: Program
    debounce_ms: int

    resource_symbols: dict[str, str] = field(default_factory=dict)
    state_symbols: dict[str, str] = field(default_factory=dict)
    used_helpers: set[str] = field(default_factory=set)

    def assign_symbols(self) -> None:
        """Map every declared name to a unique C identifier, in declaration order."""
        self.resource_symbols.clear()
        self.state_symbols.clear()
        used: set[str] = set()

        for resource in self.program.registry:
            if resource.name in self.resource_symbols:
                continue
            self.resource_symbols[resource.name] = _mangle_symbol(
                resource.name, "", used, _RESERVED_WORDS
            )

        for state in self.program.states:
            if state.name in self.state_symbols:
                continue
            self.state_symbols[state.name] = _mangle_symbol(state.name, _STATE_FN_PREFIX, used)

    def symbol_for_resource(self, name: str) -> str:
        try:
            return self.resource_symbols[name]
        except KeyError:
            raise RuntimeError(f"No symbol assigned for resource {name!r}") from None

    def symbol_for_state(self, name: str) -> str:
        try:
            return self.state_symbols[name]
        except KeyError:
            raise RuntimeError(f"No symbol assigned for state {name!r}") from None

    def mark_helper(self, helper_name: str) -> None:
        self.used_helpers.add(helper_name)

    def helpers_in_order(self) -> list[str]:
        return [name for name in _HELPER_ORDER if name in self.used_helpers]

    @property
    def resources(self) -> list[Resource]:
        return list(self.program.registry)

    @property
    def states(self) -> list[State]:
        return list(self.program.states)

    @property
    def uses_fault_pin(self) -> bool:
        return self.program.fault_pin is not None
