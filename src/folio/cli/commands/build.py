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

from __future__ import annotations

from pathlib import Path

import typer
from rich.progress import Progress, TaskID

from ...render.geometry import resolve_geometry
from ...render.layout import layout_elements
from ...render.pdf_render import render_document
from ...render.types import RenderListener, RenderResult
from ..ui import console, render_progress, warn
from ..core.common import _ctx_value, _load_config, _load_document, _run_cli, _warn_layout

_BUILD_HELP = (
    "Render a TOML document description to PDF.\n\n"
    "Examples:\n"
    "  folio build report.toml -o report.pdf\n"
    "  folio --page-size LETTER build report.toml -o report.pdf\n"
)


class ProgressListener(RenderListener):
    """Drives a rich progress bar from render callbacks."""

    def __init__(self, progress_bar: Progress | None) -> None:
        self._progress = progress_bar
        self._task: TaskID | None = None

    def on_start(self) -> None:
        if self._progress is not None:
            self._task = self._progress.add_task("Rendering pages", total=None)

    def on_progress(self, page: int, total: int) -> None:
        if self._progress is None or self._task is None:
            return
        self._progress.update(
            self._task,
            total=total,
            completed=page - 1,
            description=f"Rendering page {page}/{total}",
        )

    def on_success(self, result: RenderResult) -> None:
        if self._progress is None or self._task is None:
            return
        self._progress.update(self._task, total=result.page_count, completed=result.page_count)


def register(app: typer.Typer) -> None:
    app.command(help=_BUILD_HELP)(build)


def build(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="TOML document description."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output PDF path (defaults to <document>.pdf).",
        rich_help_panel="Outputs",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        doc = _load_document(config, document)
        if not doc.elements:
            warn(
                f"{document} has no elements; the PDF will have one blank page",
                quiet=quiet_value,
            )
        geometry = resolve_geometry(doc.page)
        _warn_layout(layout_elements(doc.elements, geometry), geometry, quiet=quiet_value)
        output_path = output or document.with_suffix(".pdf")
        with render_progress(quiet=quiet_value) as progress_bar:
            result = render_document(
                doc,
                output_path,
                listener=ProgressListener(progress_bar),
                qr_config=config.qr_config,
            )
        if not quiet_value:
            pages = "page" if result.page_count == 1 else "pages"
            summary = f"({result.page_count} {pages})"
            console.print(f"[path]{result.path}[/path] [muted]{summary}[/muted]")

    _run_cli(_run, debug=debug_value)
