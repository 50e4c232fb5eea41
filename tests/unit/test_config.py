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

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from folio.config import PAGE_SIZE_ENV, build_qr_config, load_app_config, load_cli_defaults
from folio.core.errors import ConfigurationError
from folio.render.geometry import NARROW_MARGINS, PageOrientation, PageSize


def _write_config(tmpdir: str, text: str) -> Path:
    path = Path(tmpdir) / "config.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestConfig(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch.dict(os.environ, {PAGE_SIZE_ENV: ""})
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_load_app_config_parses_page(self) -> None:
        toml = """
[page]
size = "letter"
orientation = "landscape"
margins = "narrow"
"""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_app_config(_write_config(tmpdir, toml))

        self.assertIs(config.page.size, PageSize.LETTER)
        self.assertIs(config.page.orientation, PageOrientation.LANDSCAPE)
        self.assertEqual(config.page.margins, NARROW_MARGINS)
        self.assertEqual(config.page_size, "LETTER")

    def test_margin_overrides(self) -> None:
        toml = """
[page]
margins = "narrow"
margin_top = 100
"""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_app_config(_write_config(tmpdir, toml))
        self.assertEqual(config.page.margins.top, 100.0)
        self.assertEqual(config.page.margins.left, 36.0)

    def test_defaults_for_empty_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_app_config(_write_config(tmpdir, ""))
        self.assertIs(config.page.size, PageSize.A4)
        self.assertEqual(config.qr_config.scale, 10)
        self.assertFalse(config.cli_defaults.ui.quiet)

    def test_page_size_precedence(self) -> None:
        toml = '[page]\nsize = "A5"\n'
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_config(tmpdir, toml)
            self.assertIs(load_app_config(path).page.size, PageSize.A5)
            with mock.patch.dict(os.environ, {PAGE_SIZE_ENV: "legal"}):
                self.assertIs(load_app_config(path).page.size, PageSize.LEGAL)
                self.assertIs(
                    load_app_config(path, page_size="A3").page.size, PageSize.A3
                )

    def test_invalid_values_name_the_field(self) -> None:
        cases = (
            ('[page]\norientation = "sideways"\n', "page.orientation"),
            ('[page]\nmargin_left = -1\n', "page.margin_left"),
            ('[ui]\nquiet = "maybe"\n', "ui.quiet"),
            ('[qr]\nscale = 0\n', "qr.scale"),
        )
        for toml, field in cases:
            with self.subTest(field=field):
                with tempfile.TemporaryDirectory() as tmpdir:
                    with self.assertRaises(ConfigurationError) as ctx:
                        load_app_config(_write_config(tmpdir, toml))
                self.assertIn(field, str(ctx.exception))

    def test_unknown_page_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ConfigurationError):
                load_app_config(_write_config(tmpdir, '[page]\nsize = "A0"\n'))

    def test_invalid_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ConfigurationError):
                load_app_config(_write_config(tmpdir, "[page\n"))

    def test_load_cli_defaults(self) -> None:
        toml = """
[ui]
quiet = true
no_color = "yes"
no_animations = 1
"""
        with tempfile.TemporaryDirectory() as tmpdir:
            defaults = load_cli_defaults(_write_config(tmpdir, toml))
        self.assertTrue(defaults.ui.quiet)
        self.assertTrue(defaults.ui.no_color)
        self.assertTrue(defaults.ui.no_animations)

    def test_build_qr_config(self) -> None:
        config = build_qr_config({"scale": "6", "boost_error": "on"})
        self.assertEqual(config.scale, 6)
        self.assertTrue(config.boost_error)


if __name__ == "__main__":
    unittest.main()
