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
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TypeAlias

from PIL import Image

from .core.models import Color, Element, FontSpec
from .render.geometry import PageConfig


class WatermarkPosition(Enum):
    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    CENTER_LEFT = "center_left"
    CENTER = "center"
    CENTER_RIGHT = "center_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"


@dataclass(frozen=True)
class TextWatermark:
    text: str
    font: FontSpec = field(default_factory=lambda: FontSpec.bold(48.0))
    color: Color = (0, 0, 0, 0x33)
    rotation: float = -45.0
    position: WatermarkPosition = WatermarkPosition.CENTER

    @classmethod
    def confidential(cls, color: Color = (0xFF, 0, 0, 0x33)) -> TextWatermark:
        return cls(text="CONFIDENTIAL", color=color)

    @classmethod
    def draft(cls, color: Color = (0, 0, 0, 0x33)) -> TextWatermark:
        return cls(text="DRAFT", color=color)

    @classmethod
    def copy(cls, color: Color = (0, 0, 0, 0x33)) -> TextWatermark:
        return cls(text="COPY", color=color)


@dataclass(frozen=True)
class ImageWatermark:
    source: str | Path | bytes
    pixel_width: int
    pixel_height: int
    alpha: float = 0.2
    scale: float = 0.5
    position: WatermarkPosition = WatermarkPosition.CENTER

    @classmethod
    def from_path(
        cls, path: str | Path, *, alpha: float = 0.2, scale: float = 0.5
    ) -> ImageWatermark:
        with Image.open(path) as image:
            width, height = image.size
        return cls(
            source=Path(path),
            pixel_width=width,
            pixel_height=height,
            alpha=alpha,
            scale=scale,
        )


Watermark: TypeAlias = TextWatermark | ImageWatermark

WATERMARK_PRESETS = {
    "confidential": TextWatermark.confidential,
    "draft": TextWatermark.draft,
    "copy": TextWatermark.copy,
}


@dataclass(frozen=True)
class PdfMetadata:
    title: str | None = None
    author: str | None = None
    subject: str | None = None
    keywords: tuple[str, ...] = ()
    creator: str | None = "folio"
    producer: str | None = None
    creation_date: datetime | None = None


@dataclass(frozen=True)
class Document:
    """An immutable element stream plus everything needed to paginate and paint it."""

    elements: tuple[Element, ...] = ()
    page: PageConfig = field(default_factory=PageConfig)
    watermark: Watermark | None = None
    metadata: PdfMetadata = field(default_factory=PdfMetadata)


__all__ = [
    "Document",
    "ImageWatermark",
    "PdfMetadata",
    "TextWatermark",
    "WATERMARK_PRESETS",
    "Watermark",
    "WatermarkPosition",
]
