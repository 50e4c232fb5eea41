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

import io
import os
import unittest
from unittest import mock

from pypdf import PdfReader

from folio.builder import DocumentBuilder
from folio.core.errors import OutputError, RenderError
from folio.core.models import ImageElement, QrCodeElement
from folio.document import Document, PdfMetadata
from folio.qr.codec import QrConfig
from folio.render import pdf_render
from folio.render.pdf_render import render_document, render_pdf_bytes
from tests.test_support import RecordingListener, temp_dir, temp_env, write_png


def _reader(data: bytes) -> PdfReader:
    return PdfReader(io.BytesIO(data))


class TestRenderDocument(unittest.TestCase):
    def test_empty_document_renders_one_page(self) -> None:
        data = render_pdf_bytes(Document())
        self.assertTrue(data.startswith(b"%PDF"))
        self.assertEqual(len(_reader(data).pages), 1)

    def test_page_breaks_produce_pages(self) -> None:
        doc = DocumentBuilder.a4_portrait().text("one").page_break().text("two").freeze()
        result = render_document(doc)
        self.assertEqual(result.page_count, 2)
        self.assertIsNone(result.path)
        self.assertEqual(len(_reader(result.data).pages), 2)

    def test_listener_sees_every_page_in_order(self) -> None:
        doc = (
            DocumentBuilder.a4_portrait()
            .text("a")
            .page_break()
            .text("b")
            .page_break()
            .text("c")
            .freeze()
        )
        listener = RecordingListener()
        render_document(doc, listener=listener)
        self.assertEqual(
            listener.events,
            [
                ("start",),
                ("progress", 1, 3),
                ("progress", 2, 3),
                ("progress", 3, 3),
                ("success", 3),
            ],
        )

    def test_stream_output_reports_bytes_written(self) -> None:
        buffer = io.BytesIO()
        result = render_document(DocumentBuilder.letter().text("stream").freeze(), buffer)
        self.assertIsNone(result.data)
        self.assertEqual(result.bytes_written, len(buffer.getvalue()))
        self.assertTrue(buffer.getvalue().startswith(b"%PDF"))

    def test_path_output_creates_parent_directories(self) -> None:
        with temp_dir() as root:
            target = root / "nested" / "out.pdf"
            result = render_document(DocumentBuilder.a5_portrait().text("x").freeze(), target)
            self.assertEqual(result.path, target)
            self.assertEqual(len(PdfReader(str(target)).pages), 1)
            self.assertEqual(sorted(p.name for p in target.parent.iterdir()), ["out.pdf"])

    def test_failed_write_leaves_no_partial_file(self) -> None:
        with temp_dir() as root:
            target = root / "taken"
            target.mkdir()
            listener = RecordingListener()
            with self.assertRaises(OutputError):
                render_document(Document(), target, listener=listener)
            self.assertEqual([p.name for p in root.iterdir()], ["taken"])
            self.assertEqual(listener.events[-1], ("failure", "OutputError"))

    def test_metadata_is_written(self) -> None:
        doc = (
            DocumentBuilder.a4_portrait()
            .metadata(PdfMetadata(title="Ledger", author="Accounts", keywords=("q1", "q2")))
            .freeze()
        )
        info = _reader(render_pdf_bytes(doc)).metadata
        self.assertEqual(info.title, "Ledger")
        self.assertEqual(info.author, "Accounts")

    def test_footer_page_labels(self) -> None:
        doc = (
            DocumentBuilder.a4_portrait()
            .footer()
            .text("first")
            .page_break()
            .text("second")
            .freeze()
        )
        reader = _reader(render_pdf_bytes(doc))
        self.assertIn("Page 1 of 2", reader.pages[0].extract_text())
        self.assertIn("Page 2 of 2", reader.pages[1].extract_text())

    def test_images_boxes_and_qr_codes_render(self) -> None:
        with temp_dir() as root:
            image = write_png(root / "pixel.png", size=(30, 10))
            doc = (
                DocumentBuilder.a4_portrait()
                .image(image, width=90)
                .qr_code("https://example.com/folio", size=90)
                .info_box([QrCodeElement(data="inside", size=60)])
                .checkbox_list(["todo", ("done", True)])
                .dashed_divider()
                .text_watermark("DRAFT")
                .freeze()
            )
            data = render_pdf_bytes(doc, qr_config=QrConfig(scale=4))
        self.assertEqual(len(_reader(data).pages), 1)

    def test_draw_failures_name_page_and_element(self) -> None:
        with temp_dir() as root:
            path = write_png(root / "gone.png")
            element = ImageElement.from_path(path)
            os.unlink(path)
            doc = DocumentBuilder.a4_portrait().element(element).freeze()
            listener = RecordingListener()
            with self.assertRaises(RenderError) as ctx:
                render_document(doc, listener=listener)
        self.assertEqual(ctx.exception.page_number, 1)
        self.assertEqual(ctx.exception.element_kind, "image")
        self.assertIn("page 1", str(ctx.exception))
        self.assertEqual(listener.events[-1], ("failure", "RenderError"))

    def test_oversized_qr_payload_names_page_and_element(self) -> None:
        doc = (
            DocumentBuilder.a4_portrait()
            .text("intro")
            .page_break()
            .qr_code("x" * 5000, size=80)
            .freeze()
        )
        with temp_dir() as root:
            target = root / "out.pdf"
            with self.assertRaises(RenderError) as ctx:
                render_document(doc, target)
            self.assertFalse(target.exists())
        self.assertEqual(ctx.exception.page_number, 2)
        self.assertEqual(ctx.exception.element_kind, "qr")
        self.assertIn("failed to encode QR code", str(ctx.exception))

    def test_in_memory_render_returns_pdf_bytes(self) -> None:
        data = render_pdf_bytes(DocumentBuilder.a4_portrait().text("hi").freeze())
        self.assertIsInstance(data, bytes)
        self.assertTrue(data.startswith(b"%PDF"))


class TestQrWorkers(unittest.TestCase):
    def test_explicit_jobs_are_capped_by_task_count(self) -> None:
        with temp_env({"FOLIO_RENDER_JOBS": "2"}):
            self.assertEqual(pdf_render._resolve_qr_workers(1), 1)

    def test_auto_keeps_small_batches_serial(self) -> None:
        with temp_env({"FOLIO_RENDER_JOBS": "auto"}):
            self.assertEqual(pdf_render._resolve_qr_workers(3), 1)

    def test_invalid_jobs_value(self) -> None:
        with temp_env({"FOLIO_RENDER_JOBS": "many"}):
            with self.assertRaises(ValueError):
                pdf_render._resolve_qr_workers(10)

    def test_duplicate_qr_codes_render_once(self) -> None:
        qr = QrCodeElement(data="same", size=40)
        doc = DocumentBuilder.a4_portrait().element(qr).element(qr).freeze()
        calls: list[QrCodeElement] = []
        original = pdf_render.element_qr_bytes

        def counting(element: QrCodeElement, *, config: QrConfig) -> bytes:
            calls.append(element)
            return original(element, config=config)

        with mock.patch.object(pdf_render, "element_qr_bytes", counting):
            render_pdf_bytes(doc)
        self.assertEqual(calls, [qr])


if __name__ == "__main__":
    unittest.main()
