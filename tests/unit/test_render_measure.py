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

import math
import unittest

from folio.core.models import (
    PAGE_BREAK,
    BoxElement,
    CheckboxElement,
    CheckboxItem,
    CheckboxListElement,
    DividerElement,
    FontSpec,
    ImageElement,
    ListElement,
    QrCodeElement,
    TableCell,
    TableElement,
    TableRow,
    TextElement,
)
from folio.render.measure import MIN_ROW_HEIGHT, column_widths, measure_height, measure_row_height
from tests.test_support import FixedWidthMeasurer, make_table, spacer


class TestMeasureHeight(unittest.TestCase):
    def setUp(self) -> None:
        self.measurer = FixedWidthMeasurer(6.0)

    def measure(self, element, width: float = 300.0) -> float:
        return measure_height(element, width, self.measurer)

    def test_text(self) -> None:
        self.assertAlmostEqual(self.measure(TextElement("hello")), 12 * 1.2 + 8)

    def test_text_wraps_at_width_minus_indent(self) -> None:
        element = TextElement("aaaa bbbb", indent=10.0)
        # 9 chars = 54pt; 60 - 10 leaves 50pt, so the words split
        self.assertAlmostEqual(self.measure(element, 60.0), 2 * 12 * 1.2 + 8)

    def test_text_max_lines(self) -> None:
        element = TextElement("a b c d", max_lines=2)
        self.assertAlmostEqual(self.measure(element, 6.0), 2 * 12 * 1.2 + 8)

    def test_empty_text_takes_no_space(self) -> None:
        self.assertEqual(self.measure(TextElement("")), 0.0)

    def test_spacer_and_divider(self) -> None:
        self.assertEqual(self.measure(spacer(33.0)), 33.0)
        self.assertEqual(self.measure(DividerElement()), 17.0)

    def test_table_rows_have_minimum_height(self) -> None:
        self.assertEqual(self.measure(make_table(3)), 4 * MIN_ROW_HEIGHT + 8)

    def test_table_row_grows_with_wrapped_cell(self) -> None:
        row = TableRow(cells=(TableCell("aaaa bbbb cccc dddd", font=FontSpec(size=10.0)),))
        # 60pt column minus 8pt padding fits one 4-letter word per line
        height = measure_row_height(row, [60.0], self.measurer)
        self.assertAlmostEqual(height, 4 * 12.0 + 8)

    def test_explicit_column_widths(self) -> None:
        table = TableElement(rows=make_table(1).rows, column_widths=(100.0, 50.0))
        self.assertEqual(column_widths(table, 400.0), [100.0, 50.0])
        self.assertEqual(column_widths(make_table(1, columns=4), 400.0), [100.0] * 4)

    def test_list(self) -> None:
        element = ListElement(items=("one", "two"))
        self.assertAlmostEqual(self.measure(element), 2 * (12 * 1.2 + 4) + 8)

    def test_box_sums_children(self) -> None:
        box = BoxElement(elements=(spacer(10.0), spacer(20.0)))
        self.assertEqual(self.measure(box), 2 * 12 + 2 * 1 + 30 + 8)

    def test_checkboxes(self) -> None:
        self.assertAlmostEqual(self.measure(CheckboxElement("ok")), 12 * 1.2 + 4)
        items = tuple(CheckboxItem(label) for label in ("a", "b", "c"))
        self.assertAlmostEqual(
            self.measure(CheckboxListElement(items=items)), 3 * (12 * 1.2 + 4) + 8
        )

    def test_checkbox_uses_box_size_when_taller(self) -> None:
        self.assertEqual(self.measure(CheckboxElement("ok", box_size=30.0)), 34.0)

    def test_image_keeps_aspect_ratio(self) -> None:
        image = ImageElement(source=b"", pixel_width=200, pixel_height=100)
        self.assertEqual(self.measure(image), 150.0 + 8)

    def test_image_explicit_height(self) -> None:
        image = ImageElement(source=b"", pixel_width=200, pixel_height=100, height=40.0)
        self.assertEqual(self.measure(image), 48.0)

    def test_qr(self) -> None:
        self.assertEqual(self.measure(QrCodeElement("data", size=90.0)), 98.0)

    def test_page_break_never_fits(self) -> None:
        self.assertTrue(math.isinf(self.measure(PAGE_BREAK)))


if __name__ == "__main__":
    unittest.main()
