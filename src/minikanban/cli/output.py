"""Console output for the headless commands."""

from rich.console import Console
from rich.markup import escape

# Resolves sys.stdout on every print; colour only on a terminal
console = Console(highlight=False, soft_wrap=True)


def _emit(marker: str, style: str, message: str) -> None:
    console.print(f"[{style}]{marker}[/] {escape(message)}")


def success(message: str) -> None:
    _emit("✓", "green", message)


def info(message: str) -> None:
    _emit("•", "yellow", message)


def warning(message: str) -> None:
    _emit("!", "yellow bold", message)


def error(message: str) -> None:
    _emit("✗", "red", message)


def header(message: str) -> None:
    console.print(f"[blue bold]{escape(message)}[/]")


def line(message: str) -> None:
    """Plain indented detail line under a header or status message."""
    console.print(f"  {escape(message)}")
