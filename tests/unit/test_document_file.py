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

import tempfile
import unittest
from pathlib import Path

from folio.core.errors import ConfigurationError
from folio.core.models import (
    PAGE_BREAK,
    BoxElement,
    CheckboxElement,
    CheckboxListElement,
    DividerElement,
    ImageElement,
    ListElement,
    QrCodeElement,
    QrErrorCorrection,
    SpacerElement,
    TableElement,
    TextAlign,
    TextElement,
)
from folio.document import TextWatermark, WatermarkPosition
from folio.formats import load_document, parse_document
from folio.render.geometry import PageConfig, PageMargins, PageOrientation, PageSize
from tests.test_support import write_png

DOCUMENT = """
[page]
size = "letter"
orientation = "landscape"
margins = { top = 10, bottom = 10, left = 20, right = 20 }
background = "#fafafa"

[page.footer]
center = "Page {page}"

[watermark]
preset = "draft"
position = "top_left"

[metadata]
title = "Inventory"
keywords = ["stock", "report"]

[[elements]]
kind = "title"
text = "Inventory"
align = "center"

[[elements]]
kind = "table"
rows = [["Item", "Qty"], ["Bolts", 12]]
alternate_row_color = [240, 240, 240]

[[elements]]
kind = "list"
numbered = true
items = ["one", "two"]
start = 3

[[elements]]
kind = "page_break"

[[elements]]
kind = "box"
style = "warning"

  [[elements.elements]]
  kind = "text"
  text = "Careful"

[[elements]]
kind = "checkboxes"
items = ["open", { label = "done", checked = true }]

[[elements]]
kind = "qr"
data = "https://example.com"
error = "h"
size = 72

[[elements]]
kind = "divider"
dashed = true

[[elements]]
kind = "spacer"
height = 12
"""


class TestDocumentFile(unittest.TestCase):
    def test_parses_full_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "doc.toml"
            path.write_text(DOCUMENT, encoding="utf-8")
            doc = load_document(path)

        self.assertIs(doc.page.size, PageSize.LETTER)
        self.assertIs(doc.page.orientation, PageOrientation.LANDSCAPE)
        self.assertEqual(doc.page.margins, PageMargins(top=10, bottom=10, left=20, right=20))
        self.assertEqual(doc.page.background_color, (0xFA, 0xFA, 0xFA))
        self.assertTrue(doc.page.footer.enabled)
        self.assertEqual(doc.page.footer.content.center_text, "Page {page}")
        self.assertFalse(doc.page.header.enabled)

        self.assertIsInstance(doc.watermark, TextWatermark)
        self.assertEqual(doc.watermark.text, "DRAFT")
        self.assertIs(doc.watermark.position, WatermarkPosition.TOP_LEFT)
        self.assertEqual(doc.metadata.title, "Inventory")
        self.assertEqual(doc.metadata.keywords, ("stock", "report"))

        kinds = [type(element) for element in doc.elements]
        self.assertEqual(
            kinds,
            [
                TextElement,
                TableElement,
                ListElement,
                type(PAGE_BREAK),
                BoxElement,
                CheckboxListElement,
                QrCodeElement,
                DividerElement,
                SpacerElement,
            ],
        )
        title, table, numbered, _, box, checkboxes, qr, divider, _ = doc.elements
        self.assertEqual((title.font.size, title.font.style), (24.0, "B"))
        self.assertIs(title.alignment, TextAlign.CENTER)
        self.assertTrue(table.rows[0].is_header)
        self.assertEqual(table.rows[1].cells[1].content, "12")
        self.assertEqual(table.alternate_row_color, (240, 240, 240))
        self.assertEqual(numbered.start_number, 3)
        self.assertEqual(box.background_color, (0xFF, 0xF8, 0xE1))
        self.assertEqual(box.elements[0].text, "Careful")
        self.assertEqual([item.checked for item in checkboxes.items], [False, True])
        self.assertIs(qr.error_correction, QrErrorCorrection.HIGH)
        self.assertEqual(qr.size, 72.0)
        self.assertEqual((divider.dash_width, divider.dash_gap), (5.0, 3.0))

    def test_page_defaults_fill_unset_settings(self) -> None:
        defaults = PageConfig(size=PageSize.A5, margins=PageMargins.uniform(20))
        doc = parse_document({"page": {"orientation": "landscape"}}, page_defaults=defaults)
        self.assertIs(doc.page.size, PageSize.A5)
        self.assertEqual(doc.page.margins, PageMargins.uniform(20))
        self.assertIs(doc.page.orientation, PageOrientation.LANDSCAPE)

    def test_custom_page_size_in_mm(self) -> None:
        doc = parse_document({"page": {"width": 100, "height": 50, "unit": "mm"}})
        self.assertAlmostEqual(doc.page.size.width, 283.46, places=2)

    def test_image_paths_resolve_against_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_png(root / "logo.png", size=(40, 20))
            doc = parse_document(
                {"elements": [{"kind": "image", "path": "logo.png", "width": 80}]},
                base_dir=root,
            )
        image = doc.elements[0]
        self.assertIsInstance(image, ImageElement)
        self.assertEqual((image.pixel_width, image.pixel_height), (40, 20))
        self.assertEqual(image.source, root / "logo.png")
        self.assertEqual(image.width, 80.0)

    def test_checkbox_and_empty_document(self) -> None:
        doc = parse_document({"elements": [{"kind": "checkbox", "label": "ok", "checked": True}]})
        self.assertIsInstance(doc.elements[0], CheckboxElement)
        self.assertTrue(doc.elements[0].checked)
        self.assertEqual(parse_document({}).elements, ())

    def test_errors_name_the_offending_field(self) -> None:
        cases = (
            ({"elements": [{"kind": "text", "text": "a"}, {"kind": "nope"}]}, "elements[1].kind"),
            ({"elements": [{"kind": "table", "rows": []}]}, "elements[0].rows"),
            ({"elements": [{"kind": "table", "rows": [["a"], "b"]}]}, "elements[0].rows[1]"),
            ({"elements": [{"kind": "spacer"}]}, "elements[0].height"),
            ({"elements": [{"kind": "text", "text": "a", "size": -1}]}, "elements[0].size"),
            ({"elements": [{"kind": "qr", "data": "x", "error": "Z"}]}, "elements[0].error"),
            (
                {"elements": [{"kind": "box", "elements": [{"kind": "list"}]}]},
                "elements[0].elements[0].items",
            ),
            (
                {
                    "elements": [
                        {
                            "kind": "box",
                            "elements": [{"kind": "text", "text": "a"}, {"kind": "page_break"}],
                        }
                    ]
                },
                "elements[0].elements[1]",
            ),
            ({"page": {"orientation": "diagonal"}}, "page.orientation"),
            ({"page": {"background": "not-a-color"}}, "page.background"),
            ({"watermark": {"preset": "secret"}}, "watermark.preset"),
            ({"elements": "text"}, "elements"),
        )
        for data, field in cases:
            with self.subTest(field=field):
                with self.assertRaises(ConfigurationError) as ctx:
                    parse_document(data)
                self.assertIn(field, str(ctx.exception))

    def test_missing_image_is_a_configuration_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ConfigurationError) as ctx:
                parse_document(
                    {"elements": [{"kind": "image", "path": "missing.png"}]},
                    base_dir=Path(tmpdir),
                )
        self.assertIn("elements[0].path", str(ctx.exception))

    def test_invalid_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.toml"
            path.write_text("[[elements]\n", encoding="utf-8")
            with self.assertRaises(ConfigurationError):
                load_document(path)


if __name__ == "__main__":
    unittest.main()
