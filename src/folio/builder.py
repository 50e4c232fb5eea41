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

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, Sequence

from .core.models import (
    BLACK,
    PAGE_BREAK,
    BoxElement,
    CheckboxElement,
    CheckboxItem,
    CheckboxListElement,
    Color,
    DividerElement,
    Element,
    FontSpec,
    ImageElement,
    ListElement,
    QrCodeElement,
    QrErrorCorrection,
    SpacerElement,
    TableElement,
    TableRow,
    TextAlign,
    TextElement,
)
from .document import Document, PdfMetadata, TextWatermark, Watermark
from .qr.codec import QrConfig
from .render.geometry import (
    CustomPageSize,
    HeaderFooterContent,
    PageBand,
    PageConfig,
    PageMargins,
    PageOrientation,
    PageSize,
    resolve_geometry,
)
from .render.layout import page_count
from .render.pdf_render import Output, render_document
from .render.text import Measurer
from .render.types import RenderListener, RenderResult


@dataclass(frozen=True)
class DocumentBuilder:
    """Immutable, append-only document builder.

    Every method returns a new builder, so a partially built document can be
    shared and extended in different directions without copying.

    Example:
        >>> doc = (
        ...     DocumentBuilder.a4_portrait()
        ...     .title("Quarterly report")
        ...     .text("Revenue grew in every region.")
        ...     .freeze()
        ... )
    """

    content: tuple[Element, ...] = ()
    page: PageConfig = field(default_factory=PageConfig)
    watermark_spec: Watermark | None = None
    metadata_spec: PdfMetadata = field(default_factory=PdfMetadata)

    @classmethod
    def a4_portrait(cls) -> DocumentBuilder:
        return cls(page=PageConfig(size=PageSize.A4))

    @classmethod
    def a4_landscape(cls) -> DocumentBuilder:
        return cls(page=PageConfig(size=PageSize.A4, orientation=PageOrientation.LANDSCAPE))

    @classmethod
    def a5_portrait(cls) -> DocumentBuilder:
        return cls(page=PageConfig(size=PageSize.A5))

    @classmethod
    def letter(cls) -> DocumentBuilder:
        return cls(page=PageConfig(size=PageSize.LETTER))

    # page setup

    def page_size(self, size: PageSize | CustomPageSize) -> DocumentBuilder:
        return self._with_page(size=size)

    def custom_page_size(self, width: float, height: float) -> DocumentBuilder:
        return self._with_page(size=CustomPageSize.from_points(width, height))

    def page_size_mm(self, width_mm: float, height_mm: float) -> DocumentBuilder:
        return self._with_page(size=CustomPageSize.from_mm(width_mm, height_mm))

    def page_size_inches(self, width_in: float, height_in: float) -> DocumentBuilder:
        return self._with_page(size=CustomPageSize.from_inches(width_in, height_in))

    def orientation(self, orientation: PageOrientation) -> DocumentBuilder:
        return self._with_page(orientation=orientation)

    def margins(self, margins: PageMargins) -> DocumentBuilder:
        return self._with_page(margins=margins)

    def uniform_margins(self, value: float) -> DocumentBuilder:
        return self._with_page(margins=PageMargins.uniform(value))

    def margins_mm(self, top: float, bottom: float, left: float, right: float) -> DocumentBuilder:
        return self._with_page(margins=PageMargins.from_mm(top, bottom, left, right))

    def background(self, color: Color | None) -> DocumentBuilder:
        return self._with_page(background_color=color)

    def header(
        self,
        *,
        left: str | None = None,
        center: str | None = None,
        right: str | None = None,
        show_page_number: bool = False,
        height: float = 40.0,
        font: FontSpec | None = None,
    ) -> DocumentBuilder:
        return self._with_page(
            header=_band(left, center, right, show_page_number, height, font)
        )

    def footer(
        self,
        *,
        left: str | None = None,
        center: str | None = None,
        right: str | None = None,
        show_page_number: bool = True,
        height: float = 40.0,
        font: FontSpec | None = None,
    ) -> DocumentBuilder:
        return self._with_page(
            footer=_band(left, center, right, show_page_number, height, font)
        )

    def watermark(self, watermark: Watermark | None) -> DocumentBuilder:
        return replace(self, watermark_spec=watermark)

    def text_watermark(self, text: str, **kwargs: object) -> DocumentBuilder:
        return self.watermark(TextWatermark(text=text, **kwargs))  # type: ignore[arg-type]

    def metadata(self, metadata: PdfMetadata) -> DocumentBuilder:
        return replace(self, metadata_spec=metadata)

    # content

    def element(self, element: Element) -> DocumentBuilder:
        return replace(self, content=self.content + (element,))

    def elements(self, elements: Iterable[Element]) -> DocumentBuilder:
        return replace(self, content=self.content + tuple(elements))

    def text(
        self,
        text: str,
        *,
        size: float = 12.0,
        style: str = "",
        color: Color = BLACK,
        alignment: TextAlign = TextAlign.LEFT,
        line_spacing: float = 1.2,
        paragraph_spacing: float = 8.0,
        max_lines: int | None = None,
        indent: float = 0.0,
    ) -> DocumentBuilder:
        return self.element(
            TextElement(
                text=text,
                font=FontSpec(style=style, size=size),
                color=color,
                alignment=alignment,
                line_spacing=line_spacing,
                paragraph_spacing=paragraph_spacing,
                max_lines=max_lines,
                indent=indent,
            )
        )

    def title(self, text: str, *, alignment: TextAlign = TextAlign.LEFT) -> DocumentBuilder:
        return self.text(text, size=24.0, style="B", alignment=alignment, paragraph_spacing=16.0)

    def heading(self, text: str) -> DocumentBuilder:
        return self.text(text, size=18.0, style="B", paragraph_spacing=12.0)

    def subheading(self, text: str) -> DocumentBuilder:
        return self.text(text, size=14.0, style="B", paragraph_spacing=10.0)

    def spacer(self, height: float) -> DocumentBuilder:
        return self.element(SpacerElement(height=height))

    def divider(
        self,
        *,
        thickness: float = 1.0,
        color: Color = BLACK,
        margin_top: float = 8.0,
        margin_bottom: float = 8.0,
    ) -> DocumentBuilder:
        return self.element(
            DividerElement(
                thickness=thickness,
                color=color,
                margin_top=margin_top,
                margin_bottom=margin_bottom,
            )
        )

    def dashed_divider(
        self, *, dash_width: float = 5.0, dash_gap: float = 3.0, color: Color = BLACK
    ) -> DocumentBuilder:
        return self.element(DividerElement(color=color, dash_width=dash_width, dash_gap=dash_gap))

    def image(self, path: str | Path, **kwargs: object) -> DocumentBuilder:
        return self.element(ImageElement.from_path(path, **kwargs))

    def table(self, table: TableElement) -> DocumentBuilder:
        return self.element(table)

    def simple_table(
        self,
        rows: Sequence[Sequence[str]],
        *,
        has_header: bool = True,
        column_widths: Sequence[float] | None = None,
        alternate_row_color: Color | None = None,
    ) -> DocumentBuilder:
        table_rows = tuple(
            TableRow.of(*values, is_header=has_header and index == 0)
            for index, values in enumerate(rows)
        )
        return self.element(
            TableElement(
                rows=table_rows,
                column_widths=tuple(column_widths) if column_widths else None,
                alternate_row_color=alternate_row_color,
            )
        )

    def bullet_list(self, items: Sequence[str], *, size: float = 12.0) -> DocumentBuilder:
        return self.element(ListElement(items=tuple(items), font=FontSpec(size=size)))

    def numbered_list(
        self, items: Sequence[str], *, size: float = 12.0, start: int = 1
    ) -> DocumentBuilder:
        return self.element(
            ListElement(
                items=tuple(items), numbered=True, font=FontSpec(size=size), start_number=start
            )
        )

    def page_break(self) -> DocumentBuilder:
        return self.element(PAGE_BREAK)

    def box(self, elements: Sequence[Element], **kwargs: object) -> DocumentBuilder:
        return self.element(BoxElement(elements=tuple(elements), **kwargs))  # type: ignore[arg-type]

    def info_box(self, elements: Sequence[Element]) -> DocumentBuilder:
        return self.element(BoxElement.info(tuple(elements)))

    def warning_box(self, elements: Sequence[Element]) -> DocumentBuilder:
        return self.element(BoxElement.warning(tuple(elements)))

    def error_box(self, elements: Sequence[Element]) -> DocumentBuilder:
        return self.element(BoxElement.error(tuple(elements)))

    def success_box(self, elements: Sequence[Element]) -> DocumentBuilder:
        return self.element(BoxElement.success(tuple(elements)))

    def checkbox(self, label: str, *, checked: bool = False) -> DocumentBuilder:
        return self.element(CheckboxElement(label=label, checked=checked))

    def checkbox_list(self, items: Sequence[tuple[str, bool] | str]) -> DocumentBuilder:
        parsed = tuple(
            CheckboxItem(label=item) if isinstance(item, str) else CheckboxItem(*item)
            for item in items
        )
        return self.element(CheckboxListElement(items=parsed))

    def qr_code(
        self,
        data: str,
        *,
        size: float = 150.0,
        alignment: TextAlign = TextAlign.CENTER,
        error_correction: QrErrorCorrection = QrErrorCorrection.MEDIUM,
    ) -> DocumentBuilder:
        return self.element(
            QrCodeElement(
                data=data, size=size, alignment=alignment, error_correction=error_correction
            )
        )

    # lifecycle

    def clear(self) -> DocumentBuilder:
        return replace(self, content=())

    @property
    def element_count(self) -> int:
        return len(self.content)

    def page_config(self) -> PageConfig:
        return self.page

    def estimate_page_count(self, measurer: Measurer | None = None) -> int:
        return page_count(self.content, resolve_geometry(self.page), measurer)

    def freeze(self) -> Document:
        return Document(
            elements=self.content,
            page=self.page,
            watermark=self.watermark_spec,
            metadata=self.metadata_spec,
        )

    def build(
        self,
        output: Output = None,
        *,
        listener: RenderListener | None = None,
        qr_config: QrConfig | None = None,
    ) -> RenderResult:
        return render_document(self.freeze(), output, listener=listener, qr_config=qr_config)

    def _with_page(self, **changes: object) -> DocumentBuilder:
        return replace(self, page=replace(self.page, **changes))  # type: ignore[arg-type]


def _band(
    left: str | None,
    center: str | None,
    right: str | None,
    show_page_number: bool,
    height: float,
    font: FontSpec | None,
) -> PageBand:
    content = HeaderFooterContent(
        left_text=left,
        center_text=center,
        right_text=right,
        show_page_number=show_page_number,
        font=font or FontSpec(size=10.0),
    )
    return PageBand(enabled=True, height=height, content=content)
