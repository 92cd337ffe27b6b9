from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

from rich.console import Console

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
for root in (str(PROJECT_ROOT), str(SRC_ROOT)):
    if root not in sys.path:
        sys.path.insert(0, root)

from statewire.core import App, Program
from statewire.wiring import DEFAULT_DEBOUNCE_MS, compile_program

console = Console(stderr=True)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an Arduino sketch from an App or Program."
    )
    parser.add_argument(
        "--module",
        default="statewire.examples.alarms",
        help="Python module containing the application (default: statewire.examples.alarms).",
    )
    parser.add_argument(
        "--app",
        default="alarm_with_error",
        help=(
            "Attribute holding an App, a Program, or a zero-argument callable "
            "returning one (default: alarm_with_error)."
        ),
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output .ino path (default: scratchpad/<app>.ino).",
    )
    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=DEFAULT_DEBOUNCE_MS,
        help=f"Debounce interval in milliseconds (default: {DEFAULT_DEBOUNCE_MS}).",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Also print generated source to stdout.",
    )
    return parser


def _resolve_program(obj: object) -> Program | None:
    if callable(obj) and not isinstance(obj, (App, Program)):
        obj = obj()
    if isinstance(obj, App):
        return obj.program
    if isinstance(obj, Program):
        return obj
    return None


def main() -> int:
    args = _build_parser().parse_args()

    try:
        module = importlib.import_module(args.module)
    except Exception as exc:
        console.print(f"[bold red]Failed to import module {args.module!r}: {exc}[/bold red]")
        return 1

    program = _resolve_program(getattr(module, args.app, None))
    if program is None:
        console.print(f"[bold red]{args.module}.{args.app} is not an App or Program.[/bold red]")
        return 1

    result = compile_program(program, debounce_ms=args.debounce_ms)
    for warning in result.warnings:
        console.print(f"[yellow]{warning.format()}[/yellow]")
    if not result.ok:
        for error in result.errors:
            console.print(f"[red]{error.format()}[/red]")
        console.print(f"[bold red]{result.summary()}[/bold red]")
        return 1

    source = result.source or ""
    output_path = Path(args.output or f"scratchpad/{args.app}.ino")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(source, encoding="utf-8")

    console.print(f"[bold green]Wrote {output_path} ({len(source.splitlines())} lines)[/bold green]")
    if args.stdout:
        print(source, end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
