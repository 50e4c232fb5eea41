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

from dataclasses import dataclass, field
from enum import Enum

from ..core.errors import ConfigurationError
from ..core.models import Color, FontSpec

MM_TO_PT = 2.83465
INCH_TO_PT = 72.0

DEFAULT_BAND_HEIGHT = 40.0
DEFAULT_PAGE_NUMBER_FORMAT = "Page {page} of {total}"


class PageSize(Enum):
    """Named paper sizes as (width, height) in points, portrait."""

    A3 = (841.89, 1190.55)
    A4 = (595.28, 841.89)
    A5 = (419.53, 595.28)
    A6 = (297.64, 419.53)
    B4 = (708.66, 1000.63)
    B5 = (498.90, 708.66)
    LETTER = (612.0, 792.0)
    LEGAL = (612.0, 1008.0)
    TABLOID = (792.0, 1224.0)
    EXECUTIVE = (522.0, 756.0)

    @property
    def width(self) -> float:
        return self.value[0]

    @property
    def height(self) -> float:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> PageSize:
        key = name.strip().upper()
        try:
            return cls[key]
        except KeyError:
            choices = ", ".join(member.name for member in cls)
            raise ConfigurationError(
                f"unknown page size: {name} (expected one of {choices})"
            ) from None


@dataclass(frozen=True)
class CustomPageSize:
    width: float
    height: float

    @classmethod
    def from_points(cls, width: float, height: float) -> CustomPageSize:
        return cls(width=float(width), height=float(height))

    @classmethod
    def from_mm(cls, width_mm: float, height_mm: float) -> CustomPageSize:
        return cls(width=width_mm * MM_TO_PT, height=height_mm * MM_TO_PT)

    @classmethod
    def from_inches(cls, width_in: float, height_in: float) -> CustomPageSize:
        return cls(width=width_in * INCH_TO_PT, height=height_in * INCH_TO_PT)


class PageOrientation(Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


@dataclass(frozen=True)
class PageMargins:
    top: float = 72.0
    bottom: float = 72.0
    left: float = 72.0
    right: float = 72.0

    @classmethod
    def uniform(cls, value: float) -> PageMargins:
        return cls(top=value, bottom=value, left=value, right=value)

    @classmethod
    def symmetric(cls, horizontal: float, vertical: float) -> PageMargins:
        return cls(top=vertical, bottom=vertical, left=horizontal, right=horizontal)

    @classmethod
    def from_mm(
        cls, top: float, bottom: float, left: float, right: float
    ) -> PageMargins:
        return cls(
            top=top * MM_TO_PT,
            bottom=bottom * MM_TO_PT,
            left=left * MM_TO_PT,
            right=right * MM_TO_PT,
        )

    @classmethod
    def from_inches(
        cls, top: float, bottom: float, left: float, right: float
    ) -> PageMargins:
        return cls(
            top=top * INCH_TO_PT,
            bottom=bottom * INCH_TO_PT,
            left=left * INCH_TO_PT,
            right=right * INCH_TO_PT,
        )

    @classmethod
    def preset(cls, name: str) -> PageMargins:
        key = name.strip().lower()
        if key not in MARGIN_PRESETS:
            choices = ", ".join(MARGIN_PRESETS)
            raise ConfigurationError(f"unknown margin preset: {name} (expected one of {choices})")
        return MARGIN_PRESETS[key]


NO_MARGINS = PageMargins.uniform(0.0)
NORMAL_MARGINS = PageMargins.uniform(72.0)
NARROW_MARGINS = PageMargins.uniform(36.0)
WIDE_MARGINS = PageMargins.uniform(108.0)
MODERATE_MARGINS = PageMargins.uniform(54.0)

MARGIN_PRESETS: dict[str, PageMargins] = {
    "none": NO_MARGINS,
    "normal": NORMAL_MARGINS,
    "narrow": NARROW_MARGINS,
    "wide": WIDE_MARGINS,
    "moderate": MODERATE_MARGINS,
}


@dataclass(frozen=True)
class HeaderFooterContent:
    left_text: str | None = None
    center_text: str | None = None
    right_text: str | None = None
    show_page_number: bool = False
    page_number_format: str = DEFAULT_PAGE_NUMBER_FORMAT
    font: FontSpec = field(default_factory=lambda: FontSpec(size=10.0))
    color: Color = (0x66, 0x66, 0x66)

    @property
    def has_custom_text(self) -> bool:
        return bool(self.left_text or self.center_text or self.right_text)


@dataclass(frozen=True)
class PageBand:
    """Header or footer band; only an enabled band reserves vertical space."""

    enabled: bool = False
    height: float = DEFAULT_BAND_HEIGHT
    content: HeaderFooterContent | None = None

    @property
    def reserved_height(self) -> float:
        return self.height if self.enabled else 0.0

    @classmethod
    def page_numbers(cls, page_number_format: str = DEFAULT_PAGE_NUMBER_FORMAT) -> PageBand:
        return cls(
            enabled=True,
            content=HeaderFooterContent(
                show_page_number=True,
                page_number_format=page_number_format,
            ),
        )


@dataclass(frozen=True)
class PageConfig:
    size: PageSize | CustomPageSize = PageSize.A4
    orientation: PageOrientation = PageOrientation.PORTRAIT
    margins: PageMargins = NORMAL_MARGINS
    header: PageBand = PageBand()
    footer: PageBand = PageBand()
    background_color: Color | None = None


@dataclass(frozen=True)
class PageGeometry:
    page_width: float
    page_height: float
    margins: PageMargins
    header_height: float = 0.0
    footer_height: float = 0.0

    @property
    def content_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @property
    def content_height(self) -> float:
        return (
            self.page_height
            - self.margins.top
            - self.margins.bottom
            - self.header_height
            - self.footer_height
        )

    @property
    def start_x(self) -> float:
        return self.margins.left

    @property
    def start_y(self) -> float:
        return self.margins.top + self.header_height

    @property
    def max_y(self) -> float:
        return self.page_height - self.margins.bottom - self.footer_height


def page_dimensions(config: PageConfig) -> tuple[float, float]:
    width = float(config.size.width)
    height = float(config.size.height)
    if config.orientation is PageOrientation.LANDSCAPE:
        return height, width
    return width, height


def resolve_geometry(config: PageConfig) -> PageGeometry:
    """Derive the usable content box of every page.

    Degenerate configurations (margins wider than the page, bands taller than
    the body) are not rejected; they yield negative content dimensions which
    the layout engine treats as "nothing fits".
    """
    width, height = page_dimensions(config)
    return PageGeometry(
        page_width=width,
        page_height=height,
        margins=config.margins,
        header_height=config.header.reserved_height,
        footer_height=config.footer.reserved_height,
    )


__all__ = [
    "CustomPageSize",
    "DEFAULT_BAND_HEIGHT",
    "DEFAULT_PAGE_NUMBER_FORMAT",
    "HeaderFooterContent",
    "INCH_TO_PT",
    "MARGIN_PRESETS",
    "MM_TO_PT",
    "MODERATE_MARGINS",
    "NARROW_MARGINS",
    "NORMAL_MARGINS",
    "NO_MARGINS",
    "PageBand",
    "PageConfig",
    "PageGeometry",
    "PageMargins",
    "PageOrientation",
    "PageSize",
    "WIDE_MARGINS",
    "page_dimensions",
    "resolve_geometry",
]
