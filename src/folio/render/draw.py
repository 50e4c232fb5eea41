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

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, assert_never

from fpdf import FPDF
from PIL import Image

from ..core.models import (
    WHITE,
    BoxElement,
    CheckboxElement,
    CheckboxListElement,
    Color,
    DividerElement,
    Element,
    FontSpec,
    ImageElement,
    ImageScaleType,
    ListElement,
    PageBreakElement,
    QrCodeElement,
    SpacerElement,
    TableElement,
    TextAlign,
    TextElement,
    alpha,
    rgb,
)
from ..document import ImageWatermark, TextWatermark, Watermark, WatermarkPosition
from ..qr.codec import QrConfig, element_qr_bytes
from .geometry import HeaderFooterContent, PageGeometry
from .measure import (
    box_inner_width,
    cell_lines,
    checkbox_row_height,
    column_widths,
    image_box,
    list_item_lines,
    measure_height,
    measure_row_height,
    text_lines,
)
from .text import TextMeasurer, apply_font, core_font_text, format_page_label, line_height

CHECKBOX_STROKE = 1.5
CHECKMARK_STROKE = 2.0
CHECKBOX_LABEL_GAP = 8.0


@dataclass
class DrawContext:
    pdf: FPDF
    measurer: TextMeasurer
    qr_images: Mapping[QrCodeElement, bytes] = field(default_factory=dict)
    qr_config: QrConfig = field(default_factory=QrConfig)


def draw_element(ctx: DrawContext, element: Element, x: float, y: float, width: float) -> None:
    match element:
        case TextElement():
            _draw_text(ctx, element, x, y, width)
        case TableElement():
            _draw_table(ctx, element, x, y, width)
        case ListElement():
            _draw_list(ctx, element, x, y, width)
        case BoxElement():
            _draw_box(ctx, element, x, y, width)
        case CheckboxElement():
            _draw_checkbox(
                ctx.pdf,
                x,
                y,
                label=element.label,
                checked=element.checked,
                font=element.font,
                color=element.color,
                box_size=element.box_size,
                box_color=element.box_color,
                check_color=element.check_color,
            )
        case CheckboxListElement():
            step = checkbox_row_height(element.font, element.box_size) + element.item_spacing
            for index, item in enumerate(element.items):
                _draw_checkbox(
                    ctx.pdf,
                    x,
                    y + index * step,
                    label=item.label,
                    checked=item.checked,
                    font=element.font,
                    color=element.color,
                    box_size=element.box_size,
                    box_color=element.box_color,
                    check_color=element.check_color,
                )
        case DividerElement():
            _draw_divider(ctx.pdf, element, x, y, width)
        case ImageElement():
            _draw_image(ctx.pdf, element, x, y, width)
        case QrCodeElement():
            _draw_qr(ctx, element, x, y, width)
        case SpacerElement() | PageBreakElement():
            return
        case _:
            assert_never(element)


def draw_background(pdf: FPDF, geometry: PageGeometry, color: Color | None) -> None:
    if color is None or rgb(color) == WHITE:
        return
    pdf.set_fill_color(*rgb(color))
    pdf.rect(0, 0, geometry.page_width, geometry.page_height, style="F")


def draw_band(
    ctx: DrawContext,
    content: HeaderFooterContent,
    geometry: PageGeometry,
    *,
    baseline: float,
    page: int,
    total: int,
) -> None:
    pdf = ctx.pdf
    apply_font(pdf, content.font)
    _apply_text_color(pdf, content.color)
    left = geometry.start_x
    width = geometry.content_width

    def label(template: str) -> str:
        return format_page_label(template, page=page, total=total)

    if content.left_text:
        _put_text(pdf, left, baseline, label(content.left_text))
    if content.center_text:
        text = label(content.center_text)
        offset = (width - ctx.measurer.string_width(text, content.font)) / 2
        _put_text(pdf, left + offset, baseline, text)
    if content.right_text:
        text = label(content.right_text)
        offset = width - ctx.measurer.string_width(text, content.font)
        _put_text(pdf, left + offset, baseline, text)
    if content.show_page_number and not content.has_custom_text:
        text = label(content.page_number_format)
        offset = (width - ctx.measurer.string_width(text, content.font)) / 2
        _put_text(pdf, left + offset, baseline, text)


def draw_watermark(ctx: DrawContext, watermark: Watermark, geometry: PageGeometry) -> None:
    pdf = ctx.pdf
    if isinstance(watermark, TextWatermark):
        text_width = ctx.measurer.string_width(watermark.text, watermark.font)
        text_height = watermark.font.size
        cx, cy = watermark_center(watermark.position, geometry, text_width, text_height)
        apply_font(pdf, watermark.font)
        with pdf.local_context(fill_opacity=alpha(watermark.color)):
            _apply_text_color(pdf, watermark.color)
            # fpdf angles are counter-clockwise
            with pdf.rotation(-watermark.rotation, x=cx, y=cy):
                _put_text(pdf, cx - text_width / 2, cy + text_height / 2, watermark.text)
        return
    if isinstance(watermark, ImageWatermark):
        scaled_width = geometry.page_width * watermark.scale
        ratio = watermark.pixel_height / watermark.pixel_width if watermark.pixel_width else 1.0
        scaled_height = scaled_width * ratio
        cx, cy = watermark_center(watermark.position, geometry, scaled_width, scaled_height)
        with pdf.local_context(fill_opacity=watermark.alpha, stroke_opacity=watermark.alpha):
            pdf.image(
                _image_source(watermark.source),
                x=cx - scaled_width / 2,
                y=cy - scaled_height / 2,
                w=scaled_width,
                h=scaled_height,
            )
        return
    assert_never(watermark)


def watermark_center(
    position: WatermarkPosition, geometry: PageGeometry, width: float, height: float
) -> tuple[float, float]:
    margin_x = geometry.margins.left
    margin_y = geometry.margins.top
    page_w = geometry.page_width
    page_h = geometry.page_height
    left = margin_x + width / 2
    right = page_w - margin_x - width / 2
    top = margin_y + height / 2
    bottom = page_h - margin_y - height / 2
    centers = {
        WatermarkPosition.TOP_LEFT: (left, top),
        WatermarkPosition.TOP_CENTER: (page_w / 2, top),
        WatermarkPosition.TOP_RIGHT: (right, top),
        WatermarkPosition.CENTER_LEFT: (left, page_h / 2),
        WatermarkPosition.CENTER: (page_w / 2, page_h / 2),
        WatermarkPosition.CENTER_RIGHT: (right, page_h / 2),
        WatermarkPosition.BOTTOM_LEFT: (left, bottom),
        WatermarkPosition.BOTTOM_CENTER: (page_w / 2, bottom),
        WatermarkPosition.BOTTOM_RIGHT: (right, bottom),
    }
    return centers[position]


def aligned_x(alignment: TextAlign, x: float, available: float, used: float) -> float:
    if alignment is TextAlign.CENTER:
        return x + (available - used) / 2
    if alignment is TextAlign.RIGHT:
        return x + available - used
    return x


def _draw_text(ctx: DrawContext, element: TextElement, x: float, y: float, width: float) -> None:
    lines = text_lines(element, width, ctx.measurer)
    if not lines:
        return
    pdf = ctx.pdf
    apply_font(pdf, element.font)
    _apply_text_color(pdf, element.color)
    effective_width = width - element.indent
    start_x = x + element.indent
    step = element.font.size * element.line_spacing
    for index, line in enumerate(lines):
        used = ctx.measurer.string_width(line, element.font)
        line_x = aligned_x(element.alignment, start_x, effective_width, used)
        _put_text(pdf, line_x, y + index * step + element.font.size, line)


def _draw_table(ctx: DrawContext, table: TableElement, x: float, y: float, width: float) -> None:
    pdf = ctx.pdf
    widths = column_widths(table, width)
    row_y = y
    data_index = 0
    for row in table.rows:
        row_height = measure_row_height(row, widths, ctx.measurer)
        row_fill: Color | None = None
        if row.is_header:
            row_fill = table.header_background_color
        else:
            if table.alternate_row_color is not None and data_index % 2 == 1:
                row_fill = table.alternate_row_color
            data_index += 1
        cell_x = x
        for cell, col_width in zip(row.cells, widths):
            fill = cell.background_color or row_fill
            if fill is not None:
                pdf.set_fill_color(*rgb(fill))
                pdf.rect(cell_x, row_y, col_width, row_height, style="F")
            if table.border_width > 0:
                pdf.set_line_width(table.border_width)
                pdf.set_draw_color(*rgb(table.border_color))
                pdf.rect(cell_x, row_y, col_width, row_height, style="D")
            lines = cell_lines(cell, col_width, ctx.measurer)
            step = line_height(cell.font)
            text_top = row_y + (row_height - len(lines) * step) / 2
            inner = col_width - 2 * cell.padding
            apply_font(pdf, cell.font)
            _apply_text_color(pdf, cell.color)
            for index, line in enumerate(lines):
                used = ctx.measurer.string_width(line, cell.font)
                line_x = aligned_x(cell.alignment, cell_x + cell.padding, inner, used)
                _put_text(pdf, line_x, text_top + index * step + cell.font.size, line)
            cell_x += col_width
        row_y += row_height


def _draw_list(ctx: DrawContext, element: ListElement, x: float, y: float, width: float) -> None:
    pdf = ctx.pdf
    apply_font(pdf, element.font)
    _apply_text_color(pdf, element.color)
    step = line_height(element.font)
    item_y = y
    for index, item in enumerate(element.items):
        lines = list_item_lines(element, item, width, ctx.measurer)
        baseline = item_y + element.font.size
        _put_text(pdf, x, baseline, element.marker(index))
        for line_index, line in enumerate(lines):
            _put_text(pdf, x + element.indent, baseline + line_index * step, line)
        item_y += len(lines) * step + element.item_spacing


def _draw_box(ctx: DrawContext, box: BoxElement, x: float, y: float, width: float) -> None:
    pdf = ctx.pdf
    inner = box_inner_width(box, width)
    content_height = sum(measure_height(child, inner, ctx.measurer) for child in box.elements)
    height = content_height + 2 * box.padding + 2 * box.border_width
    rounded = box.border_radius > 0
    if box.background_color is not None:
        pdf.set_fill_color(*rgb(box.background_color))
        pdf.rect(
            x, y, width, height, style="F", round_corners=rounded, corner_radius=box.border_radius
        )
    if box.border_width > 0:
        pdf.set_line_width(box.border_width)
        pdf.set_draw_color(*rgb(box.border_color))
        pdf.rect(
            x, y, width, height, style="D", round_corners=rounded, corner_radius=box.border_radius
        )
    child_x = x + box.padding + box.border_width
    child_y = y + box.padding + box.border_width
    for child in box.elements:
        draw_element(ctx, child, child_x, child_y, inner)
        child_y += measure_height(child, inner, ctx.measurer)


def _draw_checkbox(
    pdf: FPDF,
    x: float,
    y: float,
    *,
    label: str,
    checked: bool,
    font: FontSpec,
    color: Color,
    box_size: float,
    box_color: Color,
    check_color: Color,
) -> None:
    box_y = y + (line_height(font) - box_size) / 2
    pdf.set_line_width(CHECKBOX_STROKE)
    pdf.set_draw_color(*rgb(box_color))
    pdf.rect(x, box_y, box_size, box_size, style="D")
    if checked:
        pdf.set_line_width(CHECKMARK_STROKE)
        pdf.set_draw_color(*rgb(check_color))
        pdf.polyline(
            [
                (x + box_size * 0.2, box_y + box_size * 0.5),
                (x + box_size * 0.4, box_y + box_size * 0.75),
                (x + box_size * 0.8, box_y + box_size * 0.25),
            ]
        )
    apply_font(pdf, font)
    _apply_text_color(pdf, color)
    _put_text(pdf, x + box_size + CHECKBOX_LABEL_GAP, y + font.size, label)


def _draw_divider(pdf: FPDF, element: DividerElement, x: float, y: float, width: float) -> None:
    if element.thickness <= 0:
        return
    line_y = y + element.margin_top + element.thickness / 2
    pdf.set_line_width(element.thickness)
    pdf.set_draw_color(*rgb(element.color))
    if element.dash_width > 0:
        pdf.set_dash_pattern(dash=element.dash_width, gap=element.dash_gap)
        pdf.line(x, line_y, x + width, line_y)
        pdf.set_dash_pattern()
        return
    pdf.line(x, line_y, x + width, line_y)


def _draw_image(pdf: FPDF, element: ImageElement, x: float, y: float, width: float) -> None:
    box_w, box_h = image_box(element, width)
    box_x = aligned_x(element.alignment, x, width, box_w)
    if element.scale_type is ImageScaleType.STRETCH:
        pdf.image(_image_source(element.source), x=box_x, y=y, w=box_w, h=box_h)
        return
    if element.scale_type is ImageScaleType.FILL:
        pdf.image(_cover_crop(element, box_w, box_h), x=box_x, y=y, w=box_w, h=box_h)
        return
    draw_w, draw_h = _fit_inside(element, box_w, box_h)
    pdf.image(
        _image_source(element.source),
        x=box_x + (box_w - draw_w) / 2,
        y=y + (box_h - draw_h) / 2,
        w=draw_w,
        h=draw_h,
    )


def _draw_qr(ctx: DrawContext, element: QrCodeElement, x: float, y: float, width: float) -> None:
    png = ctx.qr_images.get(element)
    if png is None:
        png = element_qr_bytes(element, ctx.qr_config)
    qr_x = aligned_x(element.alignment, x, width, element.size)
    ctx.pdf.image(io.BytesIO(png), x=qr_x, y=y, w=element.size, h=element.size)


def _fit_inside(element: ImageElement, box_w: float, box_h: float) -> tuple[float, float]:
    ratio = element.aspect_ratio
    if box_w <= 0 or box_h <= 0:
        return box_w, box_h
    if box_w * ratio <= box_h:
        return box_w, box_w * ratio
    return box_h / ratio, box_h


def _cover_crop(element: ImageElement, box_w: float, box_h: float) -> Image.Image:
    with Image.open(_image_source(element.source)) as image:
        image.load()
        src_w, src_h = image.size
        if box_w <= 0 or box_h <= 0 or src_w <= 0 or src_h <= 0:
            return image.copy()
        target = box_w / box_h
        if src_w / src_h > target:
            crop_w = round(src_h * target)
            left = (src_w - crop_w) // 2
            return image.crop((left, 0, left + crop_w, src_h))
        crop_h = round(src_w / target)
        top = (src_h - crop_h) // 2
        return image.crop((0, top, src_w, top + crop_h))


def _image_source(source: str | Path | bytes) -> str | io.BytesIO:
    if isinstance(source, bytes):
        return io.BytesIO(source)
    return str(source)


def _apply_text_color(pdf: FPDF, color: Color | None) -> None:
    if color is None:
        pdf.set_text_color(0, 0, 0)
        return
    pdf.set_text_color(*rgb(color))


def _put_text(pdf: FPDF, x: float, baseline: float, text: str) -> None:
    if text:
        pdf.text(x, baseline, core_font_text(text))

