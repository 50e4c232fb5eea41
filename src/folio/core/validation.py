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

import unicodedata
from typing import Any

from .errors import ConfigurationError


def require_list(value: object, min_length: int = 0, *, label: str) -> list[Any] | tuple[Any, ...]:
    """Validate that value is a list/tuple with at least min_length elements."""
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"{label} must be a list")
    if len(value) < min_length:
        raise ConfigurationError(f"{label} must have at least {min_length} entries")
    return value


def require_dict(value: object, *, label: str) -> dict[Any, Any]:
    """Validate that value is a dict."""
    if not isinstance(value, dict):
        raise ConfigurationError(f"{label} must be a table")
    return value


def require_str(value: object, *, label: str, allow_empty: bool = True) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{label} must be a string")
    if not allow_empty and not value.strip():
        raise ConfigurationError(f"{label} must be a non-empty string")
    return value


def require_number(value: object, *, label: str) -> float:
    """Validate that value is an int or float (booleans are rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{label} must be a number")
    return float(value)


def require_non_negative_number(value: object, *, label: str) -> float:
    number = require_number(value, label=label)
    if number < 0:
        raise ConfigurationError(f"{label} must be >= 0")
    return number


def require_positive_int(value: object, *, label: str) -> int:
    """Validate that value is a positive integer (> 0)."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{label} must be a positive int")
    return value


def require_bool(value: object, *, label: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{label} must be a boolean")
    return value


def normalize_path(path: object, *, label: str = "path") -> str:
    """Normalize a path to Unicode NFC and ensure it is valid UTF-8."""
    if not isinstance(path, str):
        raise ConfigurationError(f"{label} must be a string")
    try:
        path.encode("utf-8", "strict")
    except UnicodeEncodeError as exc:
        raise ConfigurationError(f"{label} must be valid UTF-8") from exc
    return unicodedata.normalize("NFC", path)
