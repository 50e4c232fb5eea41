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

import importlib.metadata
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import typer
from rich.traceback import install as install_rich_traceback

from ...config import AppConfig, load_app_config
from ...core.models import element_kind
from ...document import Document
from ...formats import load_document
from ...render.geometry import PageGeometry, PageSize
from ...render.measure import measure_height
from ...render.text import TextMeasurer
from ...render.types import Page
from ..ui import error, warn


def _run_cli(func: Callable[[], Any], *, debug: bool) -> None:
    if debug:
        install_rich_traceback(show_locals=True)
    try:
        result = func()
    except (OSError, RuntimeError, ValueError, TypeError, LookupError) as exc:
        if debug:
            raise
        error(exc)
        raise typer.Exit(code=2)
    if isinstance(result, int) and result != 0:
        raise typer.Exit(code=result)


def _ctx_value(ctx: typer.Context, key: str) -> Any:
    if ctx.obj is None:
        return None
    return ctx.obj.get(key)


def _page_size_callback(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().upper()
    if normalized not in PageSize.__members__:
        choices = ", ".join(PageSize.__members__)
        raise typer.BadParameter(f"page size must be one of {choices}")
    return normalized


def _load_config(ctx: typer.Context) -> AppConfig:
    return load_app_config(_ctx_value(ctx, "config"), page_size=_ctx_value(ctx, "page_size"))


def _get_version() -> str:
    try:
        return importlib.metadata.version("folio")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


def _load_document(config: AppConfig, path: Path) -> Document:
    return load_document(path, page_defaults=config.page)


def _warn_layout(pages: Sequence[Page], geometry: PageGeometry, *, quiet: bool) -> None:
    """Warn about pages whose placements run past the bottom of the content area."""
    measurer = TextMeasurer()
    for page in pages:
        for placement in page.placements:
            bottom = placement.y + measure_height(
                placement.element, placement.available_width, measurer
            )
            if bottom > geometry.max_y + 0.01:
                warn(
                    f"page {page.page_number}: {element_kind(placement.element)} "
                    f"overflows the content area by {bottom - geometry.max_y:.1f} pt",
                    quiet=quiet,
                )
