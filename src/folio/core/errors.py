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


class FolioError(RuntimeError):
    """Base class for errors raised while building a document."""


class ConfigurationError(FolioError, ValueError):
    """Malformed configuration or document description."""


class LayoutError(FolioError):
    """The layout engine reached a state it cannot paginate."""


class RenderError(FolioError):
    def __init__(
        self,
        message: str,
        *,
        page_number: int | None = None,
        element_kind: str | None = None,
    ) -> None:
        self.page_number = page_number
        self.element_kind = element_kind
        details = []
        if page_number is not None:
            details.append(f"page {page_number}")
        if element_kind:
            details.append(element_kind)
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class OutputError(FolioError, OSError):
    """Writing the rendered document to its destination failed."""


__all__ = [
    "ConfigurationError",
    "FolioError",
    "LayoutError",
    "OutputError",
    "RenderError",
]
