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

from folio.core.models import FontSpec
from folio.render.text import (
    TextMeasurer,
    core_font_text,
    font_line_height,
    format_page_label,
    line_height,
    wrap_text,
)
from tests.test_support import FixedWidthMeasurer

FONT = FontSpec()


class TestWrapText(unittest.TestCase):
    def setUp(self) -> None:
        self.measurer = FixedWidthMeasurer(6.0)

    def test_words_fill_lines_greedily(self) -> None:
        lines = wrap_text(self.measurer, "aaa bbb ccc", 42.0, FONT)
        self.assertEqual(lines, ["aaa bbb", "ccc"])

    def test_lines_never_exceed_width(self) -> None:
        text = "the quick brown fox jumps over the lazy dog " * 5
        for line in wrap_text(self.measurer, text.strip(), 60.0, FONT):
            self.assertLessEqual(self.measurer.string_width(line, FONT), 60.0)

    def test_rejoining_lines_restores_text(self) -> None:
        text = "one two three four five six seven eight nine ten"
        lines = wrap_text(self.measurer, text, 50.0, FONT)
        self.assertEqual(" ".join(lines), text)

    def test_long_word_is_sliced(self) -> None:
        lines = wrap_text(self.measurer, "abcdefghij", 24.0, FONT)
        self.assertEqual(lines, ["abcd", "efgh", "ij"])

    def test_sliced_tail_continues_with_next_word(self) -> None:
        lines = wrap_text(self.measurer, "abcdef g", 24.0, FONT)
        self.assertEqual(lines, ["abcd", "ef g"])

    def test_single_character_wider_than_limit_still_progresses(self) -> None:
        lines = wrap_text(self.measurer, "abc", 3.0, FONT)
        self.assertEqual(lines, ["a", "b", "c"])

    def test_newlines_start_paragraphs(self) -> None:
        lines = wrap_text(self.measurer, "a\n\nb", 100.0, FONT)
        self.assertEqual(lines, ["a", "", "b"])

    def test_non_positive_width_returns_text(self) -> None:
        self.assertEqual(wrap_text(self.measurer, "keep me", 0.0, FONT), ["keep me"])
        self.assertEqual(wrap_text(self.measurer, "keep me", -5.0, FONT), ["keep me"])

    def test_empty_text_is_one_empty_line(self) -> None:
        self.assertEqual(wrap_text(self.measurer, "", 100.0, FONT), [""])


class TestTextHelpers(unittest.TestCase):
    def test_line_height_multiplier(self) -> None:
        self.assertAlmostEqual(font_line_height(10.0), 12.0)
        self.assertAlmostEqual(line_height(FontSpec(size=20.0), 1.5), 30.0)

    def test_format_page_label(self) -> None:
        label = format_page_label("Page {page} of {total}", page=2, total=9)
        self.assertEqual(label, "Page 2 of 9")

    def test_core_font_text_substitutes(self) -> None:
        self.assertEqual(core_font_text("• item – done…"), "· item - done...")
        self.assertEqual(core_font_text("café"), "café")
        self.assertEqual(core_font_text("日本"), "??")

    def test_text_measurer_uses_font_metrics(self) -> None:
        measurer = TextMeasurer()
        narrow = measurer.string_width("iiii", FontSpec(size=12.0))
        wide = measurer.string_width("WWWW", FontSpec(size=12.0))
        self.assertGreater(wide, narrow)
        self.assertAlmostEqual(
            measurer.string_width("WWWW", FontSpec(size=24.0)),
            2 * wide,
            places=3,
        )
        self.assertEqual(measurer.string_width("", FontSpec()), 0.0)


if __name__ == "__main__":
    unittest.main()
