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

from typing import Protocol

from fpdf import FPDF

from ..core.models import FontSpec

DEFAULT_LINE_MULTIPLIER = 1.2

_CORE_FONT_SUBSTITUTES = {
    "•": "·",
    "–": "-",
    "—": "-",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "…": "...",
    " ": " ",
}


class Measurer(Protocol):
    def string_width(self, text: str, font: FontSpec) -> float: ...


def core_font_text(text: str) -> str:
    """Map text onto the latin-1 repertoire of the PDF core fonts."""
    if text.isascii():
        return text
    out: list[str] = []
    for ch in text:
        if ord(ch) < 256:
            out.append(ch)
            continue
        substitute = _CORE_FONT_SUBSTITUTES.get(ch)
        out.append(substitute if substitute is not None else "?")
    return "".join(out)


def apply_font(pdf: FPDF, font: FontSpec) -> None:
    pdf.set_font(font.family, style=font.style, size=font.size)


class TextMeasurer:
    """String widths backed by fpdf core font metrics.

    One measurer belongs to one build; it keeps the currently selected font on
    its private FPDF instance, so it must not be shared between threads.
    """

    def __init__(self, pdf: FPDF | None = None) -> None:
        self._pdf = pdf if pdf is not None else FPDF(unit="pt")
        self._font: FontSpec | None = None

    def string_width(self, text: str, font: FontSpec) -> float:
        if not text:
            return 0.0
        if font != self._font:
            apply_font(self._pdf, font)
            self._font = font
        return float(self._pdf.get_string_width(core_font_text(text)))


def wrap_text(measurer: Measurer, text: str, max_width: float, font: FontSpec) -> list[str]:
    """Greedy word-wrap of ``text`` into lines no wider than ``max_width``.

    Explicit newlines start a new paragraph and an empty paragraph yields an
    empty line. A word wider than the limit is sliced character by character;
    a single character is always accepted so the loop always progresses.
    A non-positive width returns the text unchanged as one line.
    """
    if max_width <= 0:
        return [text]

    def width(value: str) -> float:
        return measurer.string_width(value, font)

    wrapped: list[str] = []
    for paragraph in text.split("\n"):
        if not paragraph:
            wrapped.append("")
            continue
        start = len(wrapped)
        current = ""
        for word in paragraph.split(" "):
            candidate = word if not current else f"{current} {word}"
            if width(candidate) <= max_width:
                current = candidate
                continue
            if current:
                wrapped.append(current)
                current = ""
            if width(word) <= max_width:
                current = word
                continue
            parts: list[str] = []
            chunk = ""
            for ch in word:
                next_chunk = f"{chunk}{ch}"
                if chunk and width(next_chunk) > max_width:
                    parts.append(chunk)
                    chunk = ch
                else:
                    chunk = next_chunk
            if chunk:
                parts.append(chunk)
            wrapped.extend(parts[:-1])
            current = parts[-1] if parts else ""
        if current or len(wrapped) == start:
            wrapped.append(current)
    return wrapped


def font_line_height(size_pt: float, multiplier: float = DEFAULT_LINE_MULTIPLIER) -> float:
    return float(size_pt) * multiplier


def line_height(font: FontSpec, multiplier: float = DEFAULT_LINE_MULTIPLIER) -> float:
    return font_line_height(font.size, multiplier)


def format_page_label(template: str, *, page: int, total: int) -> str:
    return template.replace("{page}", str(page)).replace("{total}", str(total))
