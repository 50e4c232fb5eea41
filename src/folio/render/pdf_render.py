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

import concurrent.futures
import functools
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Sequence

from fpdf import FPDF
from fpdf.errors import FPDFException

from ..core.errors import OutputError, RenderError
from ..core.models import BoxElement, Element, QrCodeElement, element_kind
from ..document import Document, PdfMetadata
from ..qr.codec import QrConfig, element_qr_bytes
from .draw import DrawContext, draw_background, draw_band, draw_element, draw_watermark
from .geometry import PageConfig, PageGeometry, resolve_geometry
from .layout import layout_elements
from .text import TextMeasurer
from .types import Page, RenderListener, RenderResult

_RENDER_JOBS_ENV = "FOLIO_RENDER_JOBS"
_DEFAULT_QR_WORKERS_CAP = 8
_MIN_QR_TASKS_PER_WORKER = 4

Output = str | os.PathLike[str] | BinaryIO | None


def render_document(
    document: Document,
    output: Output = None,
    *,
    listener: RenderListener | None = None,
    qr_config: QrConfig | None = None,
) -> RenderResult:
    """Paginate ``document`` and paint it into a PDF.

    ``output`` selects the destination: ``None`` returns the PDF bytes in
    ``RenderResult.data``; a path writes the file atomically (creating parent
    directories); a binary stream receives the bytes and the count is reported
    in ``RenderResult.bytes_written``.

    Raises:
        RenderError: encoding a QR code or painting an element failed.
        OutputError: the destination could not be written.
    """
    listener = listener or RenderListener()
    listener.on_start()
    try:
        result = _render(document, output, listener, qr_config or QrConfig())
    except Exception as exc:
        listener.on_failure(exc)
        raise
    listener.on_success(result)
    return result


def render_pdf_bytes(document: Document, *, qr_config: QrConfig | None = None) -> bytes:
    return render_document(document, qr_config=qr_config).data or b""


def _render(
    document: Document,
    output: Output,
    listener: RenderListener,
    qr_config: QrConfig,
) -> RenderResult:
    geometry = resolve_geometry(document.page)
    measurer = TextMeasurer()
    pages = layout_elements(document.elements, geometry, measurer)
    pdf = _new_pdf(geometry, document.metadata)
    ctx = DrawContext(
        pdf=pdf,
        measurer=measurer,
        qr_images=_render_qr_images(pages, qr_config),
        qr_config=qr_config,
    )
    total = len(pages)
    for page in pages:
        listener.on_progress(page.page_number, total)
        pdf.add_page()
        _paint_page(ctx, document, geometry, page, total)
    try:
        data = bytes(pdf.output())
    except FPDFException as exc:
        raise RenderError(f"failed to serialize PDF: {exc}") from exc
    return _write_output(data, output, page_count=total)


def _new_pdf(geometry: PageGeometry, metadata: PdfMetadata) -> FPDF:
    pdf = FPDF(orientation="P", unit="pt", format=(geometry.page_width, geometry.page_height))
    pdf.set_auto_page_break(False)
    pdf.set_margins(0, 0, 0)
    _apply_metadata(pdf, metadata)
    return pdf


def _apply_metadata(pdf: FPDF, metadata: PdfMetadata) -> None:
    if metadata.title:
        pdf.set_title(metadata.title)
    if metadata.author:
        pdf.set_author(metadata.author)
    if metadata.subject:
        pdf.set_subject(metadata.subject)
    if metadata.keywords:
        pdf.set_keywords(", ".join(metadata.keywords))
    if metadata.creator:
        pdf.set_creator(metadata.creator)
    if metadata.producer:
        pdf.set_producer(metadata.producer)
    if metadata.creation_date is not None:
        pdf.set_creation_date(metadata.creation_date)


def _paint_page(
    ctx: DrawContext,
    document: Document,
    geometry: PageGeometry,
    page: Page,
    total: int,
) -> None:
    config: PageConfig = document.page
    draw_background(ctx.pdf, geometry, config.background_color)
    if document.watermark is not None:
        draw_watermark(ctx, document.watermark, geometry)
    header = config.header
    if header.enabled and header.content is not None:
        draw_band(
            ctx,
            header.content,
            geometry,
            baseline=geometry.margins.top + header.content.font.size,
            page=page.page_number,
            total=total,
        )
    footer = config.footer
    if footer.enabled and footer.content is not None:
        draw_band(
            ctx,
            footer.content,
            geometry,
            baseline=geometry.page_height - geometry.margins.bottom - footer.content.font.size,
            page=page.page_number,
            total=total,
        )
    for placement in page.placements:
        try:
            draw_element(
                ctx, placement.element, placement.x, placement.y, placement.available_width
            )
        except (FPDFException, OSError, ValueError) as exc:
            raise RenderError(
                f"failed to draw element: {exc}",
                page_number=page.page_number,
                element_kind=element_kind(placement.element),
            ) from exc


def _iter_qr_elements(elements: Sequence[Element]) -> Iterator[QrCodeElement]:
    for element in elements:
        if isinstance(element, QrCodeElement):
            yield element
        elif isinstance(element, BoxElement):
            yield from _iter_qr_elements(element.elements)


def _render_qr_images(pages: Sequence[Page], config: QrConfig) -> dict[QrCodeElement, bytes]:
    # each distinct element is encoded once; errors name the first page showing it
    first_page: dict[QrCodeElement, int] = {}
    for page in pages:
        for qr in _iter_qr_elements([placement.element for placement in page.placements]):
            first_page.setdefault(qr, page.page_number)
    if not first_page:
        return {}
    qr_worker = functools.partial(_encode_qr, config=config, pages=first_page)
    elements = list(first_page)
    return dict(zip(elements, _map_qr(elements, qr_worker)))


def _encode_qr(
    element: QrCodeElement, *, config: QrConfig, pages: dict[QrCodeElement, int]
) -> bytes:
    try:
        return element_qr_bytes(element, config=config)
    except ValueError as exc:
        raise RenderError(
            f"failed to encode QR code: {exc}",
            page_number=pages[element],
            element_kind=element_kind(element),
        ) from exc


def _map_qr(
    elements: list[QrCodeElement],
    qr_worker: Callable[[QrCodeElement], bytes],
) -> list[bytes]:
    workers = _resolve_qr_workers(len(elements))
    if workers <= 1:
        return [qr_worker(element) for element in elements]

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(qr_worker, elements))


def _resolve_qr_workers(task_count: int) -> int:
    raw = os.environ.get(_RENDER_JOBS_ENV, "").strip().lower()
    explicit = False
    requested: int | None = None
    if raw and raw != "auto":
        try:
            parsed = int(raw)
        except ValueError:
            raise ValueError(f"{_RENDER_JOBS_ENV} must be a positive integer or 'auto'") from None
        if parsed > 0:
            requested = parsed
            explicit = True

    cpu = os.cpu_count() or 1
    if requested is None:
        requested = min(cpu, _DEFAULT_QR_WORKERS_CAP)

    workers = max(1, min(requested, cpu, task_count))
    if not explicit:
        workers = min(workers, max(1, task_count // _MIN_QR_TASKS_PER_WORKER))

    return max(1, workers)


def _write_output(data: bytes, output: Output, *, page_count: int) -> RenderResult:
    if output is None:
        return RenderResult(page_count=page_count, data=data)
    if isinstance(output, (str, os.PathLike)):
        path = Path(output)
        _atomic_write(path, data)
        return RenderResult(page_count=page_count, path=path)
    try:
        output.write(data)
        output.flush()
    except (OSError, ValueError) as exc:
        raise OutputError(f"failed to write PDF to stream: {exc}") from exc
    return RenderResult(page_count=page_count, bytes_written=len(data))


def _atomic_write(path: Path, data: bytes) -> None:
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as handle:
            tmp_name = handle.name
            handle.write(data)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise OutputError(f"failed to write {path}: {exc}") from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


__all__ = [
    "RenderListener",
    "RenderResult",
    "render_document",
    "render_pdf_bytes",
]
