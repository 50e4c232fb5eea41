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

import tomllib
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

from PIL import UnidentifiedImageError

from ..core.errors import ConfigurationError
from ..core.models import (
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
    ImageScaleType,
    ListElement,
    QrCodeElement,
    QrErrorCorrection,
    SpacerElement,
    TableCell,
    TableElement,
    TableRow,
    TextAlign,
    TextElement,
    parse_color,
)
from ..core.validation import (
    normalize_path,
    require_bool,
    require_dict,
    require_list,
    require_non_negative_number,
    require_number,
    require_positive_int,
    require_str,
)
from ..document import (
    WATERMARK_PRESETS,
    Document,
    ImageWatermark,
    PdfMetadata,
    TextWatermark,
    Watermark,
    WatermarkPosition,
)
from ..render.geometry import (
    CustomPageSize,
    HeaderFooterContent,
    PageBand,
    PageConfig,
    PageMargins,
    PageOrientation,
    PageSize,
)

Table = dict[str, Any]

# kind -> (font size, style, paragraph spacing)
_TEXT_PRESETS: dict[str, tuple[float, str, float]] = {
    "text": (12.0, "", 8.0),
    "title": (24.0, "B", 16.0),
    "heading": (18.0, "B", 12.0),
    "subheading": (14.0, "B", 10.0),
}

_FONT_STYLES = frozenset({"", "B", "I", "BI", "IB", "U", "BU", "IU", "BIU"})


def load_document(path: str | Path, *, page_defaults: PageConfig | None = None) -> Document:
    """Read a TOML document description and build a ``Document``.

    Relative image paths are resolved against the directory of ``path``.
    ``page_defaults`` supplies the page settings the file does not set.
    """
    doc_path = Path(path)
    try:
        with doc_path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"{doc_path}: invalid TOML: {exc}") from exc
    return parse_document(data, base_dir=doc_path.parent, page_defaults=page_defaults)


def parse_document(
    data: Table,
    *,
    base_dir: Path | None = None,
    page_defaults: PageConfig | None = None,
) -> Document:
    data = require_dict(data, label="document")
    parser = _ElementParser(base_dir or Path.cwd())
    page = parse_page_config(_optional_table(data, "page"), defaults=page_defaults)
    raw_elements = require_list(data.get("elements", []), label="elements")
    elements = tuple(
        parser.parse(raw, label=f"elements[{index}]") for index, raw in enumerate(raw_elements)
    )
    watermark_cfg = data.get("watermark")
    watermark = (
        None
        if watermark_cfg is None
        else _parse_watermark(require_dict(watermark_cfg, label="watermark"), parser.base_dir)
    )
    return Document(
        elements=elements,
        page=page,
        watermark=watermark,
        metadata=_parse_metadata(_optional_table(data, "metadata")),
    )


def parse_page_config(cfg: Table, *, defaults: PageConfig | None = None) -> PageConfig:
    """Overlay a ``[page]`` table on ``defaults``; unset keys keep the default."""
    page = defaults or PageConfig()
    if "size" in cfg:
        page = replace(page, size=PageSize.from_name(require_str(cfg["size"], label="page.size")))
    if "width" in cfg or "height" in cfg:
        page = replace(page, size=_parse_custom_size(cfg))
    if "orientation" in cfg:
        page = replace(page, orientation=parse_orientation(cfg["orientation"]))
    if "margins" in cfg:
        page = replace(page, margins=parse_margins(cfg["margins"], label="page.margins"))
    if "background" in cfg:
        page = replace(
            page, background_color=parse_color(cfg["background"], label="page.background")
        )
    if "header" in cfg:
        page = replace(
            page,
            header=_parse_band(
                require_dict(cfg["header"], label="page.header"),
                label="page.header",
                show_page_number=False,
            ),
        )
    if "footer" in cfg:
        page = replace(
            page,
            footer=_parse_band(
                require_dict(cfg["footer"], label="page.footer"),
                label="page.footer",
                show_page_number=True,
            ),
        )
    return page


def parse_orientation(value: object, *, label: str = "page.orientation") -> PageOrientation:
    if isinstance(value, str):
        normalized = value.strip().lower()
        for orientation in PageOrientation:
            if orientation.value == normalized:
                return orientation
    raise ConfigurationError(f"{label} must be 'portrait' or 'landscape'")


def parse_margins(value: object, *, label: str) -> PageMargins:
    """A preset name, a single number, or a table of top/bottom/left/right."""
    if isinstance(value, str):
        return PageMargins.preset(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return PageMargins.uniform(require_non_negative_number(value, label=label))
    cfg = require_dict(value, label=label)
    unit = require_str(cfg.get("unit", "pt"), label=f"{label}.unit").strip().lower()
    sides = {
        side: require_non_negative_number(cfg.get(side, 0), label=f"{label}.{side}")
        for side in ("top", "bottom", "left", "right")
    }
    if unit == "pt":
        return PageMargins(**sides)
    if unit == "mm":
        return PageMargins.from_mm(**sides)
    if unit == "in":
        return PageMargins.from_inches(**sides)
    raise ConfigurationError(f"{label}.unit must be one of pt, mm, in")


def _parse_custom_size(cfg: Table) -> CustomPageSize:
    width = require_number(cfg.get("width"), label="page.width")
    height = require_number(cfg.get("height"), label="page.height")
    if width <= 0 or height <= 0:
        raise ConfigurationError("page.width and page.height must be positive")
    unit = require_str(cfg.get("unit", "pt"), label="page.unit").strip().lower()
    if unit == "pt":
        return CustomPageSize.from_points(width, height)
    if unit == "mm":
        return CustomPageSize.from_mm(width, height)
    if unit == "in":
        return CustomPageSize.from_inches(width, height)
    raise ConfigurationError("page.unit must be one of pt, mm, in")


def _parse_band(cfg: Table, *, label: str, show_page_number: bool) -> PageBand:
    if not _bool(cfg, "enabled", True, label=label):
        return PageBand()
    content = HeaderFooterContent(
        left_text=_optional_str(cfg, "left", label=label),
        center_text=_optional_str(cfg, "center", label=label),
        right_text=_optional_str(cfg, "right", label=label),
        show_page_number=_bool(cfg, "show_page_number", show_page_number, label=label),
        page_number_format=require_str(
            cfg.get("page_number_format", "Page {page} of {total}"),
            label=f"{label}.page_number_format",
        ),
        font=_parse_font(cfg, label=label, size=10.0),
        color=_color(cfg, "color", (0x66, 0x66, 0x66), label=label),
    )
    height = require_non_negative_number(cfg.get("height", 40.0), label=f"{label}.height")
    return PageBand(enabled=True, height=height, content=content)


def _parse_watermark(cfg: Table, base_dir: Path) -> Watermark:
    position = _enum(cfg, "position", WatermarkPosition, WatermarkPosition.CENTER, "watermark")
    if "preset" in cfg:
        name = require_str(cfg["preset"], label="watermark.preset").strip().lower()
        factory = WATERMARK_PRESETS.get(name)
        if factory is None:
            choices = ", ".join(WATERMARK_PRESETS)
            raise ConfigurationError(f"watermark.preset must be one of {choices}")
        preset = factory()
        return replace(preset, position=position)
    if "image" in cfg:
        path = _resolve_path(cfg["image"], base_dir, label="watermark.image")
        try:
            watermark = ImageWatermark.from_path(
                path,
                alpha=require_non_negative_number(cfg.get("alpha", 0.2), label="watermark.alpha"),
                scale=require_non_negative_number(cfg.get("scale", 0.5), label="watermark.scale"),
            )
        except (OSError, UnidentifiedImageError) as exc:
            raise ConfigurationError(f"watermark.image: cannot read {path}: {exc}") from exc
        return replace(watermark, position=position)
    text = require_str(cfg.get("text"), label="watermark.text", allow_empty=False)
    defaults = TextWatermark(text=text)
    return TextWatermark(
        text=text,
        font=_parse_font(cfg, label="watermark", size=defaults.font.size, style="B"),
        color=_color(cfg, "color", defaults.color, label="watermark"),
        rotation=require_number(cfg.get("rotation", defaults.rotation), label="watermark.rotation"),
        position=position,
    )


def _parse_metadata(cfg: Table) -> PdfMetadata:
    keywords = require_list(cfg.get("keywords", []), label="metadata.keywords")
    return PdfMetadata(
        title=_optional_str(cfg, "title", label="metadata"),
        author=_optional_str(cfg, "author", label="metadata"),
        subject=_optional_str(cfg, "subject", label="metadata"),
        keywords=tuple(
            require_str(keyword, label=f"metadata.keywords[{index}]")
            for index, keyword in enumerate(keywords)
        ),
        creator=_optional_str(cfg, "creator", label="metadata") or "folio",
        producer=_optional_str(cfg, "producer", label="metadata"),
    )


class _ElementParser:
    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self._parsers: dict[str, Callable[[Table, str], Element]] = {
            "image": self._image,
            "spacer": self._spacer,
            "divider": self._divider,
            "table": self._table,
            "list": self._list,
            "box": self._box,
            "checkbox": self._checkbox,
            "checkboxes": self._checkboxes,
            "qr": self._qr,
            "page_break": lambda cfg, label: PAGE_BREAK,
        }
        for kind in _TEXT_PRESETS:
            self._parsers[kind] = self._text

    def parse(self, raw: object, *, label: str) -> Element:
        cfg = require_dict(raw, label=label)
        kind = require_str(cfg.get("kind"), label=f"{label}.kind").strip().lower()
        parser = self._parsers.get(kind)
        if parser is None:
            choices = ", ".join(sorted(self._parsers))
            raise ConfigurationError(f"{label}.kind must be one of {choices} (got {kind!r})")
        return parser(cfg, label)

    def _text(self, cfg: Table, label: str) -> TextElement:
        size, style, spacing = _TEXT_PRESETS[cfg["kind"].strip().lower()]
        max_lines = cfg.get("max_lines")
        return TextElement(
            text=require_str(cfg.get("text"), label=f"{label}.text"),
            font=_parse_font(cfg, label=label, size=size, style=style),
            color=_color(cfg, "color", BLACK, label=label),
            alignment=_enum(cfg, "align", TextAlign, TextAlign.LEFT, label),
            line_spacing=require_non_negative_number(
                cfg.get("line_spacing", 1.2), label=f"{label}.line_spacing"
            ),
            paragraph_spacing=_spacing(cfg, "spacing", spacing, label=label),
            max_lines=(
                None
                if max_lines is None
                else require_positive_int(max_lines, label=f"{label}.max_lines")
            ),
            indent=_spacing(cfg, "indent", 0.0, label=label),
        )

    def _image(self, cfg: Table, label: str) -> ImageElement:
        path = _resolve_path(cfg.get("path"), self.base_dir, label=f"{label}.path")
        try:
            return ImageElement.from_path(
                path,
                width=_optional_number(cfg, "width", label=label),
                height=_optional_number(cfg, "height", label=label),
                alignment=_enum(cfg, "align", TextAlign, TextAlign.CENTER, label),
                scale_type=_enum(cfg, "scale", ImageScaleType, ImageScaleType.FIT, label),
                spacing_after=_spacing(cfg, "spacing", 8.0, label=label),
            )
        except (OSError, UnidentifiedImageError) as exc:
            raise ConfigurationError(f"{label}.path: cannot read {path}: {exc}") from exc

    def _spacer(self, cfg: Table, label: str) -> SpacerElement:
        return SpacerElement(
            height=require_non_negative_number(cfg.get("height"), label=f"{label}.height")
        )

    def _divider(self, cfg: Table, label: str) -> DividerElement:
        dashed = _bool(cfg, "dashed", False, label=label)
        return DividerElement(
            thickness=_spacing(cfg, "thickness", 1.0, label=label),
            color=_color(cfg, "color", BLACK, label=label),
            margin_top=_spacing(cfg, "margin_top", 8.0, label=label),
            margin_bottom=_spacing(cfg, "margin_bottom", 8.0, label=label),
            dash_width=_spacing(cfg, "dash_width", 5.0 if dashed else 0.0, label=label),
            dash_gap=_spacing(cfg, "dash_gap", 3.0 if dashed else 0.0, label=label),
        )

    def _table(self, cfg: Table, label: str) -> TableElement:
        raw_rows = require_list(cfg.get("rows"), 1, label=f"{label}.rows")
        has_header = _bool(cfg, "header", True, label=label)
        rows: list[TableRow] = []
        for index, raw_row in enumerate(raw_rows):
            row_label = f"{label}.rows[{index}]"
            values = require_list(raw_row, 1, label=row_label)
            is_header = has_header and index == 0
            font = FontSpec(style="B" if is_header else "", size=11.0)
            cells = tuple(
                TableCell(
                    content=_cell_text(value, label=f"{row_label}[{column}]"),
                    font=font,
                )
                for column, value in enumerate(values)
            )
            rows.append(TableRow(cells=cells, is_header=is_header))
        widths = cfg.get("column_widths")
        column_widths = None
        if widths is not None:
            column_widths = tuple(
                require_non_negative_number(width, label=f"{label}.column_widths[{index}]")
                for index, width in enumerate(
                    require_list(widths, 1, label=f"{label}.column_widths")
                )
            )
        alternate = cfg.get("alternate_row_color")
        return TableElement(
            rows=tuple(rows),
            column_widths=column_widths,
            border_width=_spacing(cfg, "border_width", 0.5, label=label),
            border_color=_color(cfg, "border_color", BLACK, label=label),
            header_background_color=_color(
                cfg, "header_background", (0xEE, 0xEE, 0xEE), label=label
            ),
            alternate_row_color=(
                None
                if alternate is None
                else parse_color(alternate, label=f"{label}.alternate_row_color")
            ),
            spacing_after=_spacing(cfg, "spacing", 8.0, label=label),
        )

    def _list(self, cfg: Table, label: str) -> ListElement:
        items = require_list(cfg.get("items"), label=f"{label}.items")
        defaults = ListElement(items=())
        return ListElement(
            items=tuple(
                require_str(item, label=f"{label}.items[{index}]")
                for index, item in enumerate(items)
            ),
            numbered=_bool(cfg, "numbered", False, label=label),
            font=_parse_font(cfg, label=label, size=12.0),
            color=_color(cfg, "color", BLACK, label=label),
            bullet=require_str(cfg.get("bullet", defaults.bullet), label=f"{label}.bullet"),
            indent=_spacing(cfg, "indent", defaults.indent, label=label),
            item_spacing=_spacing(cfg, "item_spacing", defaults.item_spacing, label=label),
            spacing_after=_spacing(cfg, "spacing", defaults.spacing_after, label=label),
            start_number=require_positive_int(
                cfg.get("start", 1), label=f"{label}.start"
            ),
        )

    def _box(self, cfg: Table, label: str) -> BoxElement:
        raw_children = require_list(cfg.get("elements", []), label=f"{label}.elements")
        children = tuple(
            self.parse(raw, label=f"{label}.elements[{index}]")
            for index, raw in enumerate(raw_children)
        )
        for index, child in enumerate(children):
            if child is PAGE_BREAK:
                raise ConfigurationError(f"{label}.elements[{index}] cannot be a page break")
        style = cfg.get("style")
        if style is not None:
            presets = {
                "callout": BoxElement.callout,
                "info": BoxElement.info,
                "warning": BoxElement.warning,
                "error": BoxElement.error,
                "success": BoxElement.success,
            }
            name = require_str(style, label=f"{label}.style").strip().lower()
            if name not in presets:
                raise ConfigurationError(f"{label}.style must be one of {', '.join(presets)}")
            return presets[name](children)
        background = cfg.get("background")
        return BoxElement(
            elements=children,
            padding=_spacing(cfg, "padding", 12.0, label=label),
            background_color=(
                None if background is None else parse_color(background, label=f"{label}.background")
            ),
            border_width=_spacing(cfg, "border_width", 1.0, label=label),
            border_color=_color(cfg, "border_color", BLACK, label=label),
            border_radius=_spacing(cfg, "border_radius", 0.0, label=label),
            spacing_after=_spacing(cfg, "spacing", 8.0, label=label),
        )

    def _checkbox(self, cfg: Table, label: str) -> CheckboxElement:
        return CheckboxElement(
            label=require_str(cfg.get("label"), label=f"{label}.label"),
            checked=_bool(cfg, "checked", False, label=label),
            font=_parse_font(cfg, label=label, size=12.0),
            color=_color(cfg, "color", BLACK, label=label),
            box_size=_spacing(cfg, "box_size", 14.0, label=label),
        )

    def _checkboxes(self, cfg: Table, label: str) -> CheckboxListElement:
        raw_items = require_list(cfg.get("items"), label=f"{label}.items")
        items: list[CheckboxItem] = []
        for index, raw in enumerate(raw_items):
            item_label = f"{label}.items[{index}]"
            if isinstance(raw, str):
                items.append(CheckboxItem(label=raw))
                continue
            item = require_dict(raw, label=item_label)
            items.append(
                CheckboxItem(
                    label=require_str(item.get("label"), label=f"{item_label}.label"),
                    checked=_bool(item, "checked", False, label=item_label),
                )
            )
        return CheckboxListElement(
            items=tuple(items),
            font=_parse_font(cfg, label=label, size=12.0),
            color=_color(cfg, "color", BLACK, label=label),
            box_size=_spacing(cfg, "box_size", 14.0, label=label),
            item_spacing=_spacing(cfg, "item_spacing", 4.0, label=label),
            spacing_after=_spacing(cfg, "spacing", 8.0, label=label),
        )

    def _qr(self, cfg: Table, label: str) -> QrCodeElement:
        background = cfg.get("background")
        level = require_str(cfg.get("error", "M"), label=f"{label}.error").strip().upper()
        try:
            error_correction = QrErrorCorrection(level)
        except ValueError:
            raise ConfigurationError(f"{label}.error must be one of L, M, Q, H") from None
        margin = cfg.get("margin", 1)
        if isinstance(margin, bool) or not isinstance(margin, int) or margin < 0:
            raise ConfigurationError(f"{label}.margin must be a non-negative int")
        return QrCodeElement(
            data=require_str(cfg.get("data"), label=f"{label}.data", allow_empty=False),
            size=_spacing(cfg, "size", 150.0, label=label),
            alignment=_enum(cfg, "align", TextAlign, TextAlign.CENTER, label),
            foreground=_color(cfg, "foreground", BLACK, label=label),
            background=(
                None if background is None else parse_color(background, label=f"{label}.background")
            ),
            error_correction=error_correction,
            margin=margin,
            spacing_after=_spacing(cfg, "spacing", 8.0, label=label),
        )


def _optional_table(data: Table, key: str) -> Table:
    value = data.get(key)
    if value is None:
        return {}
    return require_dict(value, label=key)


def _optional_str(cfg: Table, key: str, *, label: str) -> str | None:
    value = cfg.get(key)
    if value is None:
        return None
    return require_str(value, label=f"{label}.{key}") or None


def _optional_number(cfg: Table, key: str, *, label: str) -> float | None:
    value = cfg.get(key)
    if value is None:
        return None
    return require_non_negative_number(value, label=f"{label}.{key}")


def _spacing(cfg: Table, key: str, default: float, *, label: str) -> float:
    return require_non_negative_number(cfg.get(key, default), label=f"{label}.{key}")


def _bool(cfg: Table, key: str, default: bool, *, label: str) -> bool:
    return require_bool(cfg.get(key, default), label=f"{label}.{key}")


def _color(cfg: Table, key: str, default: Color, *, label: str) -> Color:
    value = cfg.get(key)
    if value is None:
        return default
    return parse_color(value, label=f"{label}.{key}")


def _enum(cfg: Table, key: str, enum_type: Any, default: Any, label: str) -> Any:
    value = cfg.get(key)
    if value is None:
        return default
    normalized = require_str(value, label=f"{label}.{key}").strip().lower()
    for member in enum_type:
        if member.value == normalized or member.name.lower() == normalized:
            return member
    choices = ", ".join(member.name.lower() for member in enum_type)
    raise ConfigurationError(f"{label}.{key} must be one of {choices}")


def _parse_font(cfg: Table, *, label: str, size: float, style: str = "") -> FontSpec:
    family = require_str(cfg.get("font", "Helvetica"), label=f"{label}.font", allow_empty=False)
    font_style = require_str(cfg.get("style", style), label=f"{label}.style").strip().upper()
    if font_style not in _FONT_STYLES:
        raise ConfigurationError(f"{label}.style must be a combination of B, I and U")
    font_size = require_number(cfg.get("size", size), label=f"{label}.size")
    if font_size <= 0:
        raise ConfigurationError(f"{label}.size must be positive")
    return FontSpec(family=family.strip(), style=font_style, size=font_size)


def _cell_text(value: object, *, label: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ConfigurationError(f"{label} must be a string or number")


def _resolve_path(value: object, base_dir: Path, *, label: str) -> Path:
    path = Path(normalize_path(value, label=label)).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


__all__ = [
    "load_document",
    "parse_document",
    "parse_margins",
    "parse_orientation",
    "parse_page_config",
]
