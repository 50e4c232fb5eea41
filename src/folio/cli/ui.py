#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

"""Rich consoles, theme and tables shared by the folio commands."""

from __future__ import annotations

import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TextIO

from rich import box
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.theme import Theme

THEME = Theme(
    {
        "heading": "bold cyan",
        "path": "bold",
        "kind": "cyan",
        "muted": "dim",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
    }
)

PLACEMENT_COLUMNS = ("Page", "Element", "x", "y", "Width", "Height")


@dataclass
class UiSettings:
    animations: bool = True


def _attached_to_terminal(stream: TextIO | None) -> bool:
    try:
        return bool(stream is not None and stream.isatty())
    except (OSError, ValueError):
        return False


def _make_console(*, stderr: bool) -> Console:
    stream = sys.__stderr__ if stderr else sys.__stdout__
    return Console(stderr=stderr, theme=THEME, force_terminal=_attached_to_terminal(stream))


settings = UiSettings()
console = _make_console(stderr=False)
console_err = _make_console(stderr=True)


def configure_ui(*, no_color: bool, no_animations: bool) -> None:
    settings.animations = not no_animations
    for target in (console, console_err):
        target.no_color = no_color


def error(message: object) -> None:
    console_err.print(f"[error]Error:[/error] {message}")


def warn(message: str, *, quiet: bool) -> None:
    if not quiet:
        console_err.print(f"[warning]Warning:[/warning] {message}")


@contextmanager
def render_progress(*, quiet: bool) -> Iterator[Progress | None]:
    """Transient page progress; ``None`` when quiet so callers can skip updates."""
    if quiet:
        yield None
        return
    if settings.animations:
        columns = (
            SpinnerColumn(style="heading"),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
        )
    else:
        columns = (TextColumn("[progress.description]{task.description}"),)
    bar = Progress(
        *columns,
        console=console,
        transient=True,
        disable=not _attached_to_terminal(sys.__stdout__),
    )
    with bar:
        yield bar


def kv_table(rows: Sequence[tuple[str, str]], *, title: str | None = None) -> Table:
    table = Table(title=title, title_style="heading", show_header=False, box=box.SIMPLE)
    table.add_column("Setting", style="bold", no_wrap=True)
    table.add_column("Value")
    for key, value in rows:
        table.add_row(key, value)
    return table


def placements_table(rows: Sequence[tuple[int, str, float, float, float, float]]) -> Table:
    """One row per placement: page, element kind, then position and size in points."""
    table = Table(box=box.SIMPLE_HEAD)
    for index, column in enumerate(PLACEMENT_COLUMNS):
        table.add_column(column, justify="right" if index != 1 else "left")
    for page, kind, x, y, width, height in rows:
        table.add_row(
            str(page),
            f"[kind]{kind}[/kind]",
            f"{x:.1f}",
            f"{y:.1f}",
            f"{width:.1f}",
            f"{height:.1f}",
        )
    return table


__all__ = [
    "PLACEMENT_COLUMNS",
    "THEME",
    "UiSettings",
    "configure_ui",
    "console",
    "console_err",
    "error",
    "kv_table",
    "placements_table",
    "render_progress",
    "settings",
    "warn",
]
