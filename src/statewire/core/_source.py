"""Source-location capture helpers for DSL metadata."""

from __future__ import annotations

import inspect
import os

_CORE_DIR = os.path.normcase(os.path.dirname(os.path.abspath(__file__)))


def _capture_user_source() -> tuple[str | None, int | None]:
    """Capture the first call site outside statewire.core.

    DSL helpers call into each other before reaching the builder; the
    recorded line must always be the user's, never a library frame.
    """
    frame = inspect.currentframe()
    if frame is None:
        return None, None

    try:
        current = frame.f_back
        while current is not None:
            filename = current.f_code.co_filename
            normalized = os.path.normcase(os.path.abspath(filename))
            if not normalized.startswith(_CORE_DIR + os.sep):
                return filename, current.f_lineno
            current = current.f_back
    finally:
        del frame
    return None, None
