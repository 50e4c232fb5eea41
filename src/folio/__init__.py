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

"""Declarative document construction and pagination."""

from __future__ import annotations

from .builder import DocumentBuilder as DocumentBuilder
from .core.errors import (
    ConfigurationError as ConfigurationError,
    FolioError as FolioError,
    LayoutError as LayoutError,
    OutputError as OutputError,
    RenderError as RenderError,
)
from .document import (
    Document as Document,
    ImageWatermark as ImageWatermark,
    PdfMetadata as PdfMetadata,
    TextWatermark as TextWatermark,
)
from .render.geometry import (
    PageConfig as PageConfig,
    PageMargins as PageMargins,
    PageOrientation as PageOrientation,
    PageSize as PageSize,
    resolve_geometry as resolve_geometry,
)
from .render.layout import layout_elements as layout_elements, page_count as page_count
from .render.pdf_render import render_document as render_document
from .render.types import (
    Page as Page,
    Placement as Placement,
    RenderListener as RenderListener,
    RenderResult as RenderResult,
)

__all__ = [
    "ConfigurationError",
    "Document",
    "DocumentBuilder",
    "FolioError",
    "ImageWatermark",
    "LayoutError",
    "OutputError",
    "Page",
    "PageConfig",
    "PageMargins",
    "PageOrientation",
    "PageSize",
    "PdfMetadata",
    "Placement",
    "RenderError",
    "RenderListener",
    "RenderResult",
    "TextWatermark",
    "layout_elements",
    "page_count",
    "render_document",
    "resolve_geometry",
]
