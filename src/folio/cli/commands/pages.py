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

from ...render.geometry import resolve_geometry
from ...render.layout import page_count
from ..ui import console
from ..core.common import _ctx_value, _load_config, _load_document, _run_cli

_PAGES_HELP = (
    "Print how many pages a document will have, without rendering it.\n\n"
    "Examples:\n"
    "  folio pages report.toml\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_PAGES_HELP)(pages)


def pages(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="TOML document description."),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        doc = _load_document(config, document)
        console.print(str(page_count(doc.elements, resolve_geometry(doc.page))))

    _run_cli(_run, debug=debug_value)
