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
from dataclasses import dataclass, field, replace
from pathlib import Path

from ..core.errors import ConfigurationError
from ..formats.document_file import parse_margins, parse_orientation
from ..qr.codec import QrConfig
from ..render.geometry import PageConfig, PageMargins, PageSize
from .installer import DEFAULT_PAGE_SIZE, env_page_size, resolve_config_path

_MARGIN_KEYS = ("margin_top", "margin_bottom", "margin_left", "margin_right")


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False
    no_animations: bool = False


@dataclass(frozen=True)
class CliDefaults:
    ui: UiDefaults = field(default_factory=UiDefaults)


@dataclass(frozen=True)
class AppConfig:
    config_path: Path
    page: PageConfig
    qr_config: QrConfig
    cli_defaults: CliDefaults = field(default_factory=CliDefaults)

    @property
    def page_size(self) -> str:
        size = self.page.size
        return size.name if isinstance(size, PageSize) else "custom"


def load_app_config(path: str | Path | None = None, *, page_size: str | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    page = _parse_page_defaults(_get_dict(data, "page"), page_size=page_size)
    return AppConfig(
        config_path=config_path,
        page=page,
        qr_config=build_qr_config(_get_dict(data, "qr")),
        cli_defaults=_parse_cli_defaults(data),
    )


def load_cli_defaults(path: str | Path | None = None) -> CliDefaults:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return _parse_cli_defaults(data)


def build_qr_config(cfg: dict[str, object] | None = None) -> QrConfig:
    cfg = cfg or {}
    scale = _parse_int_strict(cfg.get("scale", 10), field="qr.scale")
    if scale <= 0:
        raise ConfigurationError("qr.scale must be a positive integer")
    return QrConfig(
        scale=scale,
        boost_error=_parse_bool(cfg.get("boost_error"), field="qr.boost_error", default=False),
    )


def _parse_page_defaults(cfg: dict[str, object], *, page_size: str | None) -> PageConfig:
    size_name = (
        page_size
        or env_page_size()
        or _parse_optional_str(cfg.get("size"), field="page.size")
        or DEFAULT_PAGE_SIZE
    )
    page = PageConfig(size=PageSize.from_name(size_name))
    if "orientation" in cfg:
        page = replace(page, orientation=parse_orientation(cfg["orientation"]))
    if "margins" in cfg:
        page = replace(page, margins=parse_margins(cfg["margins"], label="page.margins"))
    if any(key in cfg for key in _MARGIN_KEYS):
        base = page.margins
        page = replace(
            page,
            margins=PageMargins(
                top=_parse_margin(cfg, "margin_top", base.top),
                bottom=_parse_margin(cfg, "margin_bottom", base.bottom),
                left=_parse_margin(cfg, "margin_left", base.left),
                right=_parse_margin(cfg, "margin_right", base.right),
            ),
        )
    return page


def _parse_margin(cfg: dict[str, object], key: str, default: float) -> float:
    value = cfg.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigurationError(f"page.{key} must be a non-negative number")
    return float(value)


def _parse_cli_defaults(data: dict[str, object]) -> CliDefaults:
    return CliDefaults(ui=_parse_ui_defaults(_get_dict(data, "ui")))


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False),
        no_color=_parse_bool(cfg.get("no_color"), field="ui.no_color", default=False),
        no_animations=_parse_bool(
            cfg.get("no_animations"),
            field="ui.no_animations",
            default=False,
        ),
    )


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"{path}: invalid TOML: {exc}") from exc


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ConfigurationError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ConfigurationError(f"{field} must be a boolean")
    raise ConfigurationError(f"{field} must be a boolean")


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigurationError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError as exc:
            raise ConfigurationError(f"{field} must be an integer") from exc
    raise ConfigurationError(f"{field} must be an integer")
