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

from typing import Sequence

from ..core.errors import LayoutError
from ..core.models import Element, ListElement, PageBreakElement, TableElement
from .geometry import PageGeometry
from .measure import measure_height
from .split import is_placeholder, split_list, split_table
from .text import Measurer, TextMeasurer
from .types import Page, Placement


class LayoutEngine:
    """Paginates an element stream into pages of placements.

    Elements that fit the remaining space are placed at the cursor. Tables and
    lists that overflow are split into chunks; any other element that
    overflows moves to a fresh page and is placed there even if it is taller
    than a page. The engine is total: every element except page breaks ends
    up in exactly one placement (or, for split elements, one per chunk).
    """

    def __init__(self, geometry: PageGeometry, measurer: Measurer | None = None) -> None:
        self.geometry = geometry
        self.measurer = measurer if measurer is not None else TextMeasurer()
        self._pages: list[Page] = []
        self._placements: list[Placement] = []
        self._page_number = 1
        self._cursor_y = geometry.start_y

    def layout(self, elements: Sequence[Element]) -> list[Page]:
        self._reset()
        width = self.geometry.content_width
        for element in elements:
            if isinstance(element, PageBreakElement):
                self._flush()
                continue
            height = measure_height(element, width, self.measurer)
            remaining = self.geometry.max_y - self._cursor_y
            if height <= remaining:
                self._place(element, height)
            elif isinstance(element, TableElement):
                self._place_chunks(
                    element,
                    split_table(
                        element, width, remaining, self.geometry.content_height, self.measurer
                    ),
                )
            elif isinstance(element, ListElement):
                self._place_chunks(
                    element,
                    split_list(
                        element, width, remaining, self.geometry.content_height, self.measurer
                    ),
                )
            else:
                self._place_atomic(element, height)
        if self._placements:
            self._flush()
        if not self._pages:
            self._pages.append(Page(page_number=1))
        return list(self._pages)

    def _reset(self) -> None:
        self._pages = []
        self._placements = []
        self._page_number = 1
        self._cursor_y = self.geometry.start_y

    def _flush(self) -> None:
        self._pages.append(Page(page_number=self._page_number, placements=tuple(self._placements)))
        self._placements = []
        self._page_number += 1
        self._cursor_y = self.geometry.start_y

    def _place(self, element: Element, height: float) -> None:
        self._placements.append(
            Placement(
                element=element,
                x=self.geometry.start_x,
                y=self._cursor_y,
                available_width=self.geometry.content_width,
            )
        )
        self._cursor_y += height

    def _place_atomic(self, element: Element, height: float) -> None:
        if self._placements:
            self._flush()
        self._place(element, height)

    def _place_chunks(
        self,
        element: TableElement | ListElement,
        chunks: Sequence[TableElement] | Sequence[ListElement],
    ) -> None:
        if not chunks:
            raise LayoutError(f"splitter returned no chunks for {type(element).__name__}")
        width = self.geometry.content_width
        if len(chunks) == 1 and chunks[0] is element:
            # unsplittable: no data rows / no items
            self._place_atomic(element, measure_height(element, width, self.measurer))
            return
        first = True
        for chunk in chunks:
            if is_placeholder(chunk):
                if self._placements:
                    self._flush()
                continue
            if not first:
                self._flush()
            self._place(chunk, measure_height(chunk, width, self.measurer))
            first = False


def layout_elements(
    elements: Sequence[Element],
    geometry: PageGeometry,
    measurer: Measurer | None = None,
) -> list[Page]:
    return LayoutEngine(geometry, measurer).layout(elements)


def page_count(
    elements: Sequence[Element],
    geometry: PageGeometry,
    measurer: Measurer | None = None,
) -> int:
    return len(layout_elements(elements, geometry, measurer))
