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

from dataclasses import dataclass
from pathlib import Path

from ..core.models import Element


@dataclass(frozen=True)
class Placement:
    element: Element
    x: float
    y: float
    available_width: float


@dataclass(frozen=True)
class Page:
    page_number: int
    placements: tuple[Placement, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.placements


@dataclass(frozen=True)
class RenderResult:
    """Outcome of a successful render.

    Exactly one of ``path`` / ``data`` / ``bytes_written`` describes where the
    document went: a file, an in-memory buffer or a caller-supplied stream.
    """

    page_count: int
    path: Path | None = None
    data: bytes | None = None
    bytes_written: int | None = None


class RenderListener:
    """Progress callbacks for :func:`folio.render.pdf_render.render_document`.

    Subclass and override what you need; every hook is a no-op by default.
    """

    def on_start(self) -> None:
        return None

    def on_progress(self, page: int, total: int) -> None:
        return None

    def on_success(self, result: RenderResult) -> None:
        return None

    def on_failure(self, error: Exception) -> None:
        return None
