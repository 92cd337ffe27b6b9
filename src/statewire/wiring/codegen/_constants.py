"""Wiring (Arduino) code generation."""

from __future__ import annotations

import re

_IDENT_RE = re.compile(r"[^A-Za-z0-9_]")


DEFAULT_DEBOUNCE_MS = 200


BLINK_PULSE_MS = 300


BLINK_PAUSE_MS = 1500


_STATE_FN_PREFIX = "state_"


_BLINK_HELPER = "blinkError"


_FAULT_PIN_MACRO = "ERROR_LED_PIN"


_HELPER_ORDER = (_BLINK_HELPER,)


# Names the generated sketch defines or calls itself, plus C/C++ keywords.
_RESERVED_WORDS = frozenset(
    {
        # sketch globals and helpers
        "time",
        "debounce",
        "guard",
        "setup",
        "loop",
        _BLINK_HELPER,
        _FAULT_PIN_MACRO,
        # Wiring runtime
        "millis",
        "delay",
        "pinMode",
        "digitalRead",
        "digitalWrite",
        "HIGH",
        "LOW",
        "INPUT",
        "OUTPUT",
        "INPUT_PULLUP",
        "LED_BUILTIN",
        "A0",
        "A1",
        "A2",
        "A3",
        "A4",
        "A5",
        "A6",
        "A7",
        "main",
        "analogRead",
        "analogWrite",
        "delayMicroseconds",
        "Serial",
        "boolean",
        "byte",
        "word",
        "String",
        # C/C++
        "asm",
        "auto",
        "bool",
        "break",
        "case",
        "catch",
        "char",
        "class",
        "const",
        "constexpr",
        "continue",
        "default",
        "delete",
        "do",
        "double",
        "else",
        "enum",
        "explicit",
        "extern",
        "false",
        "float",
        "for",
        "friend",
        "goto",
        "if",
        "inline",
        "int",
        "long",
        "mutable",
        "namespace",
        "new",
        "nullptr",
        "operator",
        "private",
        "protected",
        "public",
        "register",
        "return",
        "short",
        "signed",
        "sizeof",
        "static",
        "struct",
        "switch",
        "template",
        "this",
        "throw",
        "true",
        "try",
        "typedef",
        "typename",
        "union",
        "unsigned",
        "using",
        "virtual",
        "void",
        "volatile",
        "wchar_t",
        "while",
        # C++ alternative tokens
        "and",
        "and_eq",
        "bitand",
        "bitor",
        "compl",
        "not",
        "not_eq",
        "or",
        "or_eq",
        "xor",
        "xor_eq",
    }
)
