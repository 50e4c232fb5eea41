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

import math
from typing import Sequence, assert_never

from ..core.models import (
    BoxElement,
    CheckboxElement,
    CheckboxListElement,
    DividerElement,
    Element,
    FontSpec,
    ImageElement,
    ListElement,
    PageBreakElement,
    QrCodeElement,
    SpacerElement,
    TableCell,
    TableElement,
    TableRow,
    TextElement,
)
from .text import Measurer, line_height, wrap_text

MIN_ROW_HEIGHT = 24.0


def measure_height(element: Element, available_width: float, measurer: Measurer) -> float:
    """Vertical space ``element`` needs when laid out at ``available_width``.

    Page breaks report an infinite height so they never fit anywhere.
    """
    match element:
        case TextElement():
            lines = text_lines(element, available_width, measurer)
            if not lines:
                return 0.0
            return (
                len(lines) * element.font.size * element.line_spacing + element.paragraph_spacing
            )
        case TableElement():
            widths = column_widths(element, available_width)
            total = sum(measure_row_height(row, widths, measurer) for row in element.rows)
            return total + element.spacing_after
        case ListElement():
            total = sum(
                measure_list_item(element, item, available_width, measurer)
                for item in element.items
            )
            return total + element.spacing_after
        case BoxElement():
            inner = box_inner_width(element, available_width)
            total = 2 * element.padding + 2 * element.border_width
            total += sum(measure_height(child, inner, measurer) for child in element.elements)
            return total + element.spacing_after
        case CheckboxElement():
            return checkbox_row_height(element.font, element.box_size) + element.spacing_after
        case CheckboxListElement():
            row = checkbox_row_height(element.font, element.box_size) + element.item_spacing
            return len(element.items) * row + element.spacing_after
        case DividerElement():
            return element.thickness + element.margin_top + element.margin_bottom
        case SpacerElement():
            return element.height
        case ImageElement():
            _width, height = image_box(element, available_width)
            return height + element.spacing_after
        case QrCodeElement():
            return element.size + element.spacing_after
        case PageBreakElement():
            return math.inf
        case _:
            assert_never(element)


def text_lines(element: TextElement, available_width: float, measurer: Measurer) -> list[str]:
    if not element.text:
        return []
    lines = wrap_text(measurer, element.text, available_width - element.indent, element.font)
    if element.max_lines is not None:
        lines = lines[: max(0, element.max_lines)]
    return lines


def column_widths(table: TableElement, available_width: float) -> list[float]:
    if table.column_widths:
        return [float(width) for width in table.column_widths]
    max_columns = max((len(row.cells) for row in table.rows), default=0) or 1
    return [available_width / max_columns] * max_columns


def cell_lines(cell: TableCell, col_width: float, measurer: Measurer) -> list[str]:
    return wrap_text(measurer, cell.content, col_width - 2 * cell.padding, cell.font)


def measure_row_height(row: TableRow, widths: Sequence[float], measurer: Measurer) -> float:
    height = max(row.min_height, MIN_ROW_HEIGHT)
    for cell, width in zip(row.cells, widths):
        lines = cell_lines(cell, width, measurer)
        height = max(height, len(lines) * line_height(cell.font) + 2 * cell.padding)
    return height


def list_item_lines(
    element: ListElement, item: str, available_width: float, measurer: Measurer
) -> list[str]:
    return wrap_text(measurer, item, available_width - element.indent, element.font)


def measure_list_item(
    element: ListElement, item: str, available_width: float, measurer: Measurer
) -> float:
    lines = list_item_lines(element, item, available_width, measurer)
    return len(lines) * line_height(element.font) + element.item_spacing


def box_inner_width(box: BoxElement, available_width: float) -> float:
    return available_width - 2 * box.padding - 2 * box.border_width


def checkbox_row_height(font: FontSpec, box_size: float) -> float:
    return max(box_size, line_height(font))


def image_box(element: ImageElement, available_width: float) -> tuple[float, float]:
    """Target (width, height) of an image before scale-type fitting."""
    width = element.width if element.width is not None else available_width
    if element.height is not None:
        return width, element.height
    return width, width * element.aspect_ratio
