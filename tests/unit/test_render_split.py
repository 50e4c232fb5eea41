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

import unittest

from folio.core.errors import ConfigurationError
from folio.core.models import ListElement, TableElement, TableRow
from folio.render.split import is_placeholder, split_list, split_table
from tests.test_support import FixedWidthMeasurer, make_list, make_table

WIDTH = 500.0


class TestSplitTable(unittest.TestCase):
    def setUp(self) -> None:
        self.measurer = FixedWidthMeasurer()

    def test_twenty_five_rows_split_into_two_chunks(self) -> None:
        table = make_table(25)
        chunks = split_table(table, WIDTH, 200.0, 700.0, self.measurer)

        self.assertEqual(len(chunks), 2)
        # 24pt header + 7 x 24pt rows = 192pt <= 200pt; an 8th row would need 216pt
        self.assertEqual(len(chunks[0].data_rows), 7)
        self.assertEqual(len(chunks[1].data_rows), 18)
        self.assertEqual(chunks[0].spacing_after, 0.0)
        self.assertEqual(chunks[1].spacing_after, table.spacing_after)

    def test_every_chunk_repeats_header(self) -> None:
        table = make_table(100)
        chunks = split_table(table, WIDTH, 100.0, 300.0, self.measurer)
        for chunk in chunks:
            self.assertIs(chunk.rows[0], table.rows[0])
            self.assertTrue(chunk.rows[0].is_header)
            self.assertEqual(sum(row.is_header for row in chunk.rows), 1)

    def test_rows_are_preserved_in_order(self) -> None:
        table = make_table(40)
        chunks = split_table(table, WIDTH, 150.0, 400.0, self.measurer)
        rows = [row for chunk in chunks for row in chunk.data_rows]
        self.assertEqual(tuple(rows), table.data_rows)

    def test_full_page_chunks_fill_budget(self) -> None:
        chunks = split_table(make_table(100), WIDTH, 700.0, 700.0, self.measurer)
        # 24 + 28 x 24 = 696 <= 700
        self.assertEqual(len(chunks[0].data_rows), 28)
        self.assertEqual(len(chunks[1].data_rows), 28)

    def test_placeholder_when_only_header_fits(self) -> None:
        chunks = split_table(make_table(5), WIDTH, 30.0, 700.0, self.measurer)
        self.assertEqual(len(chunks), 2)
        self.assertTrue(is_placeholder(chunks[0]))
        self.assertEqual(len(chunks[1].data_rows), 5)

    def test_table_without_header(self) -> None:
        chunks = split_table(make_table(10, header=False), WIDTH, 48.0, 120.0, self.measurer)
        self.assertEqual([len(chunk.rows) for chunk in chunks], [2, 5, 3])

    def test_second_header_row_is_rejected(self) -> None:
        rows = (TableRow.of("A", is_header=True), TableRow.of("B", is_header=True))
        with self.assertRaisesRegex(ConfigurationError, "at most one header row"):
            TableElement(rows=rows)

    def test_header_only_table_is_returned_unchanged(self) -> None:
        table = make_table(0)
        chunks = split_table(table, WIDTH, 10.0, 700.0, self.measurer)
        self.assertEqual(len(chunks), 1)
        self.assertIs(chunks[0], table)


class TestSplitList(unittest.TestCase):
    def setUp(self) -> None:
        self.measurer = FixedWidthMeasurer()

    def test_numbering_continues_across_chunks(self) -> None:
        element = make_list(50)
        # each item is 12 x 1.2 + 4 = 18.4pt, five fit in 100pt
        chunks = split_list(element, WIDTH, 100.0, 100.0, self.measurer)
        self.assertEqual(len(chunks), 10)
        self.assertEqual([chunk.start_number for chunk in chunks], list(range(1, 50, 5)))
        self.assertEqual(sum(len(chunk.items) for chunk in chunks), 50)

    def test_start_number_offset_is_kept(self) -> None:
        chunks = split_list(make_list(10, start=7), WIDTH, 40.0, 100.0, self.measurer)
        self.assertEqual(chunks[0].start_number, 7)
        self.assertEqual(chunks[1].start_number, 7 + len(chunks[0].items))

    def test_spacing_only_on_last_chunk(self) -> None:
        element = make_list(20)
        chunks = split_list(element, WIDTH, 60.0, 200.0, self.measurer)
        self.assertTrue(all(chunk.spacing_after == 0.0 for chunk in chunks[:-1]))
        self.assertEqual(chunks[-1].spacing_after, element.spacing_after)

    def test_placeholder_when_first_item_does_not_fit(self) -> None:
        chunks = split_list(make_list(3), WIDTH, 10.0, 700.0, self.measurer)
        self.assertTrue(is_placeholder(chunks[0]))
        self.assertEqual(chunks[1].items, ("Item 0", "Item 1", "Item 2"))

    def test_empty_list_is_returned_unchanged(self) -> None:
        element = ListElement(items=())
        self.assertEqual(split_list(element, WIDTH, 10.0, 100.0, self.measurer), [element])


if __name__ == "__main__":
    unittest.main()
