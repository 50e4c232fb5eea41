#!/usr/bin/env python3
from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any

import segno

from ..core.models import Color, QrCodeElement


@dataclass(frozen=True)
class QrConfig:
    """Bitmap settings for QR codes painted into documents.

    ``scale`` is the pixel size of one module; the painted size on the page is
    taken from the element, so this only controls raster sharpness.
    """

    scale: int = 10
    kind: str = "png"
    boost_error: bool = False


def make_qr(
    data: bytes | str,
    *,
    error: str = "M",
    boost_error: bool = False,
) -> Any:
    return segno.make(data, error=error, micro=False, boost_error=boost_error)


def qr_bytes(
    data: bytes | str,
    *,
    error: str = "M",
    scale: int = 10,
    border: int = 1,
    kind: str = "png",
    dark: str | Color | None = None,
    light: str | Color | None = None,
    boost_error: bool = False,
) -> bytes:
    qr = make_qr(data, error=error, boost_error=boost_error)
    buf = io.BytesIO()
    qr.save(
        buf,
        kind=kind,
        scale=scale,
        border=border,
        **_segno_color_kwargs(dark=dark, light=light),
    )
    return buf.getvalue()


def element_qr_bytes(element: QrCodeElement, config: QrConfig | None = None) -> bytes:
    config = config or QrConfig()
    return qr_bytes(
        element.data,
        error=element.error_correction.value,
        scale=config.scale,
        border=element.margin,
        kind=config.kind,
        dark=element.foreground,
        light=element.background,
        boost_error=config.boost_error,
    )


def _segno_color_kwargs(*, dark: object, light: object) -> dict[str, object]:
    # segno treats light=None as a transparent background
    style: dict[str, object] = {"light": _normalize_color_value(light)}
    normalized_dark = _normalize_color_value(dark)
    if normalized_dark is not None:
        style["dark"] = normalized_dark
    return style


def _normalize_color_value(value: object) -> object | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return tuple(value)
    return value
