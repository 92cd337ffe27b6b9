"""Tests for the builder-driven switch example."""

from __future__ import annotations

from statewire.examples import build_switch
from statewire.wiring import generate_wiring
from tests.conftest import switch_builder


def test_switch_example_matches_reference_builder():
    assert generate_wiring(build_switch()) == generate_wiring(switch_builder().build())


def test_switch_example_records_parser_lines():
    program = build_switch(source_file="switch.aml")
    btn, led = program.registry
    assert (btn.line, led.line) == (1, 2)
    assert [s.line for s in program.states] == [4, 8]
    assert program.end_line == 8
    assert program.source_file == "switch.aml"
