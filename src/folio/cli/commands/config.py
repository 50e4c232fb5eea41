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

import os
import shlex
import subprocess
from pathlib import Path

import typer

from ...config import AppConfig, init_user_config, user_config_needs_init, user_config_path
from ...render.geometry import resolve_geometry
from ..ui import console, kv_table
from ..core.common import _ctx_value, _load_config, _run_cli

_CONFIG_HELP = (
    "Show the effective page, QR and UI defaults, or edit the config file.\n\n"
    "Page settings here apply to every document that does not set them in its own\n"
    "[page] table. --page-size and FOLIO_PAGE_SIZE override the configured size.\n\n"
    "Examples:\n"
    "  folio config\n"
    "  folio --page-size LETTER config\n"
    "  folio config --print-path\n"
    "  folio config --edit\n"
    '  folio config --edit --editor "code -w"\n'
)


def register(app: typer.Typer) -> None:
    app.command(help=_CONFIG_HELP)(config)


def config(
    ctx: typer.Context,
    edit: bool = typer.Option(
        False,
        "--edit",
        help="Open the config file in an editor instead of showing it.",
        rich_help_panel="Behavior",
    ),
    editor: str | None = typer.Option(
        None,
        "--editor",
        "-e",
        help="Editor command for --edit (defaults to $VISUAL/$EDITOR, else the system opener).",
        rich_help_panel="Behavior",
    ),
    print_path: bool = typer.Option(
        False,
        "--print-path",
        help="Print the resolved config path and exit.",
        rich_help_panel="Behavior",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        if edit:
            explicit = _ctx_value(ctx, "config")
            _open_in_editor(_editable_path(explicit), editor=editor, quiet=quiet_value)
            return
        app_config = _load_config(ctx)
        if print_path:
            console.print(str(app_config.config_path))
            return
        console.print(kv_table(_settings_rows(app_config), title=str(app_config.config_path)))
        if not quiet_value and _ctx_value(ctx, "config") is None and user_config_needs_init():
            console.print(
                "[muted]Using the packaged defaults;"
                " run `folio --init-config` to customize.[/muted]"
            )

    _run_cli(_run, debug=debug_value)


def _settings_rows(app_config: AppConfig) -> list[tuple[str, str]]:
    page = app_config.page
    geometry = resolve_geometry(page)
    margins = page.margins
    ui = app_config.cli_defaults.ui
    return [
        (
            "Page size",
            f"{app_config.page_size} ({geometry.page_width:.1f} x {geometry.page_height:.1f} pt)",
        ),
        ("Orientation", page.orientation.value),
        (
            "Margins",
            f"top {margins.top:g}, bottom {margins.bottom:g}, "
            f"left {margins.left:g}, right {margins.right:g} pt",
        ),
        ("Content area", f"{geometry.content_width:.1f} x {geometry.content_height:.1f} pt"),
        ("QR scale", f"{app_config.qr_config.scale} px/module"),
        ("QR boost error", _on_off(app_config.qr_config.boost_error)),
        ("Quiet", _on_off(ui.quiet)),
        ("Color", _on_off(not ui.no_color)),
        ("Animations", _on_off(not ui.no_animations)),
    ]


def _on_off(value: bool) -> str:
    return "on" if value else "off"


def _editable_path(explicit: str | None) -> Path:
    """The packaged defaults ship read-only, so edits go to a user copy."""
    if explicit:
        return Path(os.path.expandvars(explicit)).expanduser()
    init_user_config()
    return user_config_path()


def _open_in_editor(path: Path, *, editor: str | None, quiet: bool) -> None:
    command = _editor_command(editor)
    if not command:
        if not quiet:
            console.print(f"[muted]Opening {path}...[/muted]")
        typer.launch(str(path))
        return
    if not quiet:
        console.print(f"[muted]Opening {path} with {' '.join(command)}...[/muted]")
    subprocess.run([*command, str(path)], check=False)


def _editor_command(editor: str | None) -> list[str]:
    if editor is None:
        editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or ""
    editor = editor.strip()
    if editor.lower() in {"", "default", "system"}:
        return []
    return shlex.split(editor, posix=os.name != "nt")
