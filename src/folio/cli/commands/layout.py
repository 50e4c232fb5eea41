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

from ...core.models import element_kind
from ...render.geometry import resolve_geometry
from ...render.layout import layout_elements
from ...render.measure import measure_height
from ...render.text import TextMeasurer
from ..ui import console, kv_table, placements_table
from ..core.common import _ctx_value, _load_config, _load_document, _run_cli, _warn_layout

_LAYOUT_HELP = (
    "Show where every element lands, page by page.\n\n"
    "Examples:\n"
    "  folio layout report.toml\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_LAYOUT_HELP)(layout)


def layout(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="TOML document description."),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        doc = _load_document(config, document)
        geometry = resolve_geometry(doc.page)
        measurer = TextMeasurer()
        pages = layout_elements(doc.elements, geometry, measurer)
        rows = [
            (
                page.page_number,
                element_kind(placement.element),
                placement.x,
                placement.y,
                placement.available_width,
                measure_height(placement.element, placement.available_width, measurer),
            )
            for page in pages
            for placement in page.placements
        ]
        console.print(
            kv_table(
                [
                    ("Page", f"{geometry.page_width:.1f} x {geometry.page_height:.1f} pt"),
                    ("Content", f"{geometry.content_width:.1f} x {geometry.content_height:.1f} pt"),
                    ("Pages", str(len(pages))),
                ],
                title=str(document),
            )
        )
        console.print(placements_table(rows))
        _warn_layout(pages, geometry, quiet=quiet_value)

    _run_cli(_run, debug=debug_value)
