"""Tests for the Program container."""

from __future__ import annotations

import pytest

from statewire.core import App, Program, ProgramBuilder, State


class TestName:
    @pytest.mark.parametrize("name", ["", None, 3])
    def test_non_empty_string_required(self, name):
        with pytest.raises(ValueError, match="non-empty string"):
            Program(name=name)  # type: ignore[arg-type]

    @pytest.mark.parametrize("name", ["Alarm\nint evil = 1;", "Alarm\r", "\nAlarm"])
    def test_line_breaks_rejected(self, name):
        with pytest.raises(ValueError, match="single line"):
            Program(name=name)

    def test_line_breaks_rejected_by_front_ends(self):
        with pytest.raises(ValueError, match="single line"):
            ProgramBuilder("Switch\n#define HIGH LOW")
        with pytest.raises(ValueError, match="single line"):
            App("Switch\nint x;")

    def test_spaces_and_punctuation_allowed(self):
        assert Program(name="Front door (v2)").name == "Front door (v2)"


class TestFaultPin:
    def test_type_checked(self):
        with pytest.raises(TypeError, match="fault_pin must be int or None"):
            Program(name="Demo", fault_pin=True)

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="fault_pin must be >= 0"):
            Program(name="Demo", fault_pin=-1)


class TestInitial:
    def test_last_marking_wins(self):
        program = Program(name="Demo")
        program.add_state(State("A"), initial=True)
        program.add_state(State("B"), initial=True)
        assert program.initial == "B"
        assert program.initial_markings == 2
        assert program.initial_state is program.states[1]

    def test_explicit_initial_counts_as_one_marking(self):
        assert Program(name="Demo", initial="A").initial_markings == 1
