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
from enum import Enum
from pathlib import Path
from typing import Any, TypeAlias

from PIL import Image, ImageColor

from .errors import ConfigurationError

Color: TypeAlias = tuple[int, int, int] | tuple[int, int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
DEFAULT_BULLET = "•"


class TextAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class ImageScaleType(Enum):
    FIT = "fit"
    FILL = "fill"
    STRETCH = "stretch"


class QrErrorCorrection(Enum):
    LOW = "L"
    MEDIUM = "M"
    QUARTILE = "Q"
    HIGH = "H"


@dataclass(frozen=True)
class FontSpec:
    """Font family, fpdf style string ("", "B", "I", "BI") and size in points."""

    family: str = "Helvetica"
    style: str = ""
    size: float = 12.0

    @classmethod
    def bold(cls, size: float, family: str = "Helvetica") -> FontSpec:
        return cls(family=family, style="B", size=size)


@dataclass(frozen=True)
class TextElement:
    text: str
    font: FontSpec = field(default_factory=FontSpec)
    color: Color = BLACK
    alignment: TextAlign = TextAlign.LEFT
    line_spacing: float = 1.2
    paragraph_spacing: float = 8.0
    max_lines: int | None = None
    indent: float = 0.0


@dataclass(frozen=True)
class ImageElement:
    source: str | Path | bytes
    pixel_width: int
    pixel_height: int
    width: float | None = None
    height: float | None = None
    alignment: TextAlign = TextAlign.CENTER
    scale_type: ImageScaleType = ImageScaleType.FIT
    spacing_after: float = 8.0

    @classmethod
    def from_path(cls, path: str | Path, **kwargs: Any) -> ImageElement:
        with Image.open(path) as image:
            width, height = image.size
        return cls(source=Path(path), pixel_width=width, pixel_height=height, **kwargs)

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs: Any) -> ImageElement:
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
        return cls(source=bytes(data), pixel_width=width, pixel_height=height, **kwargs)

    @property
    def aspect_ratio(self) -> float:
        """Height over width of the source bitmap."""
        if self.pixel_width <= 0:
            return 1.0
        return self.pixel_height / self.pixel_width


@dataclass(frozen=True)
class SpacerElement:
    height: float


@dataclass(frozen=True)
class DividerElement:
    thickness: float = 1.0
    color: Color = BLACK
    margin_top: float = 8.0
    margin_bottom: float = 8.0
    dash_width: float = 0.0
    dash_gap: float = 0.0


@dataclass(frozen=True)
class TableCell:
    content: str
    font: FontSpec = field(default_factory=lambda: FontSpec(size=11.0))
    color: Color = BLACK
    background_color: Color | None = None
    alignment: TextAlign = TextAlign.LEFT
    padding: float = 4.0
    col_span: int = 1
    row_span: int = 1


@dataclass(frozen=True)
class TableRow:
    cells: tuple[TableCell, ...]
    is_header: bool = False
    min_height: float = 0.0

    @classmethod
    def of(cls, *values: str, is_header: bool = False) -> TableRow:
        font = FontSpec(style="B", size=11.0) if is_header else FontSpec(size=11.0)
        return cls(
            cells=tuple(TableCell(content=value, font=font) for value in values),
            is_header=is_header,
        )


@dataclass(frozen=True)
class TableElement:
    rows: tuple[TableRow, ...]
    column_widths: tuple[float, ...] | None = None
    border_width: float = 0.5
    border_color: Color = BLACK
    header_background_color: Color = (0xEE, 0xEE, 0xEE)
    alternate_row_color: Color | None = None
    spacing_after: float = 8.0

    def __post_init__(self) -> None:
        headers = sum(1 for row in self.rows if row.is_header)
        if headers > 1:
            raise ConfigurationError(f"a table has at most one header row, got {headers}")

    @property
    def header_row(self) -> TableRow | None:
        for row in self.rows:
            if row.is_header:
                return row
        return None

    @property
    def data_rows(self) -> tuple[TableRow, ...]:
        return tuple(row for row in self.rows if not row.is_header)


@dataclass(frozen=True)
class ListElement:
    """Bullet or numbered list; a split chunk carries the number of its first item."""

    items: tuple[str, ...]
    numbered: bool = False
    font: FontSpec = field(default_factory=FontSpec)
    color: Color = BLACK
    bullet: str = DEFAULT_BULLET
    indent: float = 20.0
    item_spacing: float = 4.0
    spacing_after: float = 8.0
    start_number: int = 1

    def marker(self, index: int) -> str:
        if self.numbered:
            return f"{self.start_number + index}."
        return self.bullet


@dataclass(frozen=True)
class BoxElement:
    elements: tuple[Element, ...]
    padding: float = 12.0
    background_color: Color | None = None
    border_width: float = 1.0
    border_color: Color = BLACK
    border_radius: float = 0.0
    spacing_after: float = 8.0

    def __post_init__(self) -> None:
        for index, child in enumerate(self.elements):
            if isinstance(child, PageBreakElement):
                raise ConfigurationError(f"box elements[{index}] cannot be a page break")

    @classmethod
    def callout(
        cls,
        elements: tuple[Element, ...],
        *,
        background_color: Color = (0xF5, 0xF5, 0xF5),
        border_color: Color = (0xDD, 0xDD, 0xDD),
    ) -> BoxElement:
        return cls(
            elements=tuple(elements),
            background_color=background_color,
            border_color=border_color,
            border_radius=4.0,
        )

    @classmethod
    def info(cls, elements: tuple[Element, ...]) -> BoxElement:
        return cls.callout(
            elements, background_color=(0xE3, 0xF2, 0xFD), border_color=(0x21, 0x96, 0xF3)
        )

    @classmethod
    def warning(cls, elements: tuple[Element, ...]) -> BoxElement:
        return cls.callout(
            elements, background_color=(0xFF, 0xF8, 0xE1), border_color=(0xFF, 0xC1, 0x07)
        )

    @classmethod
    def error(cls, elements: tuple[Element, ...]) -> BoxElement:
        return cls.callout(
            elements, background_color=(0xFF, 0xEB, 0xEE), border_color=(0xF4, 0x43, 0x36)
        )

    @classmethod
    def success(cls, elements: tuple[Element, ...]) -> BoxElement:
        return cls.callout(
            elements, background_color=(0xE8, 0xF5, 0xE9), border_color=(0x4C, 0xAF, 0x50)
        )


@dataclass(frozen=True)
class CheckboxElement:
    label: str
    checked: bool = False
    font: FontSpec = field(default_factory=FontSpec)
    color: Color = BLACK
    box_size: float = 14.0
    box_color: Color = BLACK
    check_color: Color = BLACK
    spacing_after: float = 4.0


@dataclass(frozen=True)
class CheckboxItem:
    label: str
    checked: bool = False


@dataclass(frozen=True)
class CheckboxListElement:
    items: tuple[CheckboxItem, ...]
    font: FontSpec = field(default_factory=FontSpec)
    color: Color = BLACK
    box_size: float = 14.0
    box_color: Color = BLACK
    check_color: Color = BLACK
    item_spacing: float = 4.0
    spacing_after: float = 8.0


@dataclass(frozen=True)
class QrCodeElement:
    data: str
    size: float = 150.0
    alignment: TextAlign = TextAlign.CENTER
    foreground: Color = BLACK
    background: Color | None = None
    error_correction: QrErrorCorrection = QrErrorCorrection.MEDIUM
    margin: int = 1
    spacing_after: float = 8.0


@dataclass(frozen=True)
class PageBreakElement:
    pass


PAGE_BREAK = PageBreakElement()

Element: TypeAlias = (
    TextElement
    | ImageElement
    | SpacerElement
    | DividerElement
    | TableElement
    | ListElement
    | BoxElement
    | CheckboxElement
    | CheckboxListElement
    | QrCodeElement
    | PageBreakElement
)

_ELEMENT_KINDS: dict[type, str] = {
    TextElement: "text",
    ImageElement: "image",
    SpacerElement: "spacer",
    DividerElement: "divider",
    TableElement: "table",
    ListElement: "list",
    BoxElement: "box",
    CheckboxElement: "checkbox",
    CheckboxListElement: "checkbox_list",
    QrCodeElement: "qr",
    PageBreakElement: "page_break",
}


def element_kind(element: Element) -> str:
    return _ELEMENT_KINDS.get(type(element), type(element).__name__)


def parse_color(value: object, *, label: str = "color") -> Color:
    """Accept (r, g, b[, a]) sequences, ``#rrggbb[aa]`` strings and CSS color names."""
    if isinstance(value, (list, tuple)) and len(value) in (3, 4):
        try:
            channels = tuple(int(channel) for channel in value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"{label} channels must be integers") from exc
        if any(channel < 0 or channel > 255 for channel in channels):
            raise ConfigurationError(f"{label} channels must be between 0 and 255")
        return channels  # type: ignore[return-value]
    if isinstance(value, str):
        text = value.strip()
        try:
            rgba = ImageColor.getcolor(text, "RGBA")
        except ValueError as exc:
            raise ConfigurationError(f"{label} is not a valid color: {value!r}") from exc
        if isinstance(rgba, int):
            return (rgba, rgba, rgba)
        if len(text) in (5, 9) and text.startswith("#"):
            return (int(rgba[0]), int(rgba[1]), int(rgba[2]), int(rgba[3]))
        return (int(rgba[0]), int(rgba[1]), int(rgba[2]))
    raise ConfigurationError(f"{label} must be a color string or [r, g, b] list")


def rgb(color: Color) -> tuple[int, int, int]:
    return (color[0], color[1], color[2])


def alpha(color: Color) -> float:
    """Opacity in [0, 1]; three-channel colors are opaque."""
    if len(color) == 4:
        return color[3] / 255.0
    return 1.0


__all__ = [
    "BLACK",
    "Color",
    "DEFAULT_BULLET",
    "Element",
    "PAGE_BREAK",
    "WHITE",
    "BoxElement",
    "CheckboxElement",
    "CheckboxItem",
    "CheckboxListElement",
    "DividerElement",
    "FontSpec",
    "ImageElement",
    "ImageScaleType",
    "ListElement",
    "PageBreakElement",
    "QrCodeElement",
    "QrErrorCorrection",
    "SpacerElement",
    "TableCell",
    "TableElement",
    "TableRow",
    "TextAlign",
    "TextElement",
    "alpha",
    "element_kind",
    "parse_color",
    "rgb",
]
