"""
Boxed console messages printed around a build.

All functions take an optional rich Console so callers (and tests) can
direct output; the default console writes to stdout.
"""

from typing import Optional

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text
from rich.traceback import Traceback

from ..models.results import BuildOutcome, BuildStatus
from ..system import PackageManagerDetector
from ..validation import CompilationError
from .progress import get_progress_bar

PROJECT_LINK = "https://wpack.io"
BULLET = "❯"
ERROR_SYMBOL = "✖"


def logo_small() -> Text:
    return Text("wpbuild", style="bold magenta")


def _bullet(label: str, value) -> Text:
    line = Text("    ")
    line.append(BULLET, style="magenta")
    line.append(" ")
    line.append(label, style="bold")
    line.append(" ")
    line.append_text(value if isinstance(value, Text) else Text(str(value)))
    line.append(".")
    return line


def _info_box(*renderables) -> Panel:
    return Panel(
        Group(*renderables),
        box=box.ROUNDED,
        border_style="cyan",
        padding=1,
        expand=False,
    )


def intro_panel() -> Panel:
    """The banner shown when a command starts."""
    title = Text("wpbuild", style="bold magenta", justify="center")
    subtitle = Text("WordPress asset bundling", style="dim", justify="center")
    return Panel(
        Group(title, subtitle),
        box=box.ROUNDED,
        border_style="magenta",
        padding=1,
        expand=False,
    )


def print_intro(console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print()
    console.print(intro_panel(), justify="center")


def progress_line(percent: int, message: str = "") -> Text:
    """Single status line for an in-flight compilation."""
    line = Text("compiling ")
    line.append_text(get_progress_bar(percent))
    if message:
        line.append(f" {message}", style="dim")
    return line


def end_build_info(
    local_url: str,
    detector: PackageManagerDetector,
    console: Optional[Console] = None,
) -> None:
    """Print the box shown after a successful production build."""
    console = console or Console()
    headline = logo_small()
    headline.append(" production build was ")
    headline.append("successful", style="green")
    headline.append(".")

    console.print()
    console.print(
        _info_box(
            headline,
            Text(""),
            Text("All files were written to disk and you can visit your local server."),
            Text(""),
            Text("If your filesize is too large, remember you can use dynamic imports"),
            Text("and multiple entry points."),
            Text(""),
            _bullet("Local Server:", Text(local_url, style="blue underline")),
            _bullet("Start Development:", Text(detector.run_command_hint("start"), style="yellow")),
            _bullet("For more info, visit:", Text(PROJECT_LINK, style="blue underline")),
        )
    )


def print_outcome(outcome: BuildOutcome, console: Optional[Console] = None) -> None:
    """Print the log carried by a SUCCESS or WARN outcome."""
    console = console or Console()
    if outcome.status is BuildStatus.SUCCESS:
        console.print(Text.from_ansi(outcome.log))
    elif outcome.status is BuildStatus.WARN:
        console.print(Text("Compiled with warnings.", style="bold yellow"))
        console.print()
        console.print(Text(outcome.log))


def pretty_print_error(
    error: BaseException,
    headline: str,
    console: Optional[Console] = None,
) -> None:
    """
    Print a failure.

    Compilation errors are printed line by line behind a pointer, anything
    else is rendered as a traceback.
    """
    console = console or Console(stderr=True)
    rule = Text("=" * (len(headline) + 2), style="dim")
    console.print(rule)
    console.print(Text(f"{ERROR_SYMBOL} ", style="red") + Text(headline))
    console.print(rule)
    console.print()

    if isinstance(error, CompilationError):
        console.print(Text(" please review the following errors ", style="black on red"))
        console.print()
        for line in str(error).split("\n"):
            console.print(Text(f"  {BULLET}  ", style="dim red") + Text(line))
    else:
        console.print(Traceback.from_exception(type(error), error, error.__traceback__))
    console.print()
