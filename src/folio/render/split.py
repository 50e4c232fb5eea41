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

from dataclasses import replace

from ..core.models import ListElement, TableElement, TableRow
from .measure import column_widths, measure_list_item, measure_row_height
from .text import Measurer


def is_placeholder(chunk: TableElement | ListElement) -> bool:
    """True for the empty chunk a splitter emits when nothing fits the current page."""
    if isinstance(chunk, TableElement):
        return not chunk.rows
    return not chunk.items


def split_table(
    table: TableElement,
    available_width: float,
    first_height: float,
    full_height: float,
    measurer: Measurer,
) -> list[TableElement]:
    """Split ``table`` into row chunks for the remaining and following pages.

    Every chunk repeats the header row. Rows are never split. When not a
    single data row fits ``first_height`` an empty placeholder chunk is emitted
    first, which tells the layout engine to move to a fresh page. Only the last
    chunk keeps the table's ``spacing_after``.

    Returns:
        The chunks in order, or ``[table]`` when there is nothing to split.
    """
    header = table.header_row
    data_rows = table.data_rows
    if not data_rows:
        return [table]

    widths = column_widths(table, available_width)
    seed: tuple[TableRow, ...] = (header,) if header is not None else ()
    seed_height = measure_row_height(header, widths, measurer) if header is not None else 0.0

    chunks: list[TableElement] = []
    current = list(seed)
    current_height = seed_height
    budget = first_height
    for row in data_rows:
        row_height = measure_row_height(row, widths, measurer)
        if current_height + row_height <= budget:
            current.append(row)
            current_height += row_height
            continue
        if len(current) > len(seed):
            chunks.append(replace(table, rows=tuple(current), spacing_after=0.0))
        elif not chunks:
            chunks.append(replace(table, rows=(), spacing_after=0.0))
        current = [*seed, row]
        current_height = seed_height + row_height
        budget = full_height

    chunks.append(replace(table, rows=tuple(current)))
    return chunks


def split_list(
    element: ListElement,
    available_width: float,
    first_height: float,
    full_height: float,
    measurer: Measurer,
) -> list[ListElement]:
    """Split a bullet or numbered list into item chunks.

    Each chunk's ``start_number`` continues the numbering of the previous one.
    Items are never split. Placeholder and spacing rules match
    :func:`split_table`.
    """
    if not element.items:
        return [element]

    chunks: list[ListElement] = []
    current: list[str] = []
    current_height = 0.0
    offset = 0
    budget = first_height
    for item in element.items:
        item_height = measure_list_item(element, item, available_width, measurer)
        if current_height + item_height <= budget:
            current.append(item)
            current_height += item_height
            continue
        if current:
            chunks.append(_list_chunk(element, current, offset, spacing_after=0.0))
            offset += len(current)
        elif not chunks:
            chunks.append(_list_chunk(element, [], offset, spacing_after=0.0))
        current = [item]
        current_height = item_height
        budget = full_height

    chunks.append(_list_chunk(element, current, offset, spacing_after=element.spacing_after))
    return chunks


def _list_chunk(
    element: ListElement, items: list[str], offset: int, *, spacing_after: float
) -> ListElement:
    return replace(
        element,
        items=tuple(items),
        start_number=element.start_number + offset,
        spacing_after=spacing_after,
    )
