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

from enum import Enum
from urllib.parse import quote, urlencode

_WIFI_SPECIAL = ("\\", ";", ",", ":", '"')


class WifiSecurity(Enum):
    WEP = "WEP"
    WPA = "WPA"
    WPA2 = "WPA2"
    NONE = "nopass"


def url_payload(url: str) -> str:
    return url.strip()


def email_payload(address: str, *, subject: str | None = None, body: str | None = None) -> str:
    params = {}
    if subject:
        params["subject"] = subject
    if body:
        params["body"] = body
    if not params:
        return f"mailto:{address}"
    return f"mailto:{address}?{urlencode(params, quote_via=quote)}"


def phone_payload(number: str) -> str:
    return f"tel:{_compact_number(number)}"


def sms_payload(number: str, *, message: str | None = None) -> str:
    target = f"sms:{_compact_number(number)}"
    if message:
        return f"{target}?body={quote(message)}"
    return target


def wifi_payload(
    ssid: str,
    *,
    password: str | None = None,
    security: WifiSecurity = WifiSecurity.WPA,
    hidden: bool = False,
) -> str:
    """Join-network payload understood by the Android and iOS camera apps."""
    parts = [f"T:{security.value};", f"S:{_wifi_escape(ssid)};"]
    if password and security is not WifiSecurity.NONE:
        parts.append(f"P:{_wifi_escape(password)};")
    if hidden:
        parts.append("H:true;")
    return "WIFI:" + "".join(parts) + ";"


def vcard_payload(
    first_name: str,
    *,
    last_name: str | None = None,
    phone: str | None = None,
    email: str | None = None,
    organization: str | None = None,
    title: str | None = None,
    address: str | None = None,
    website: str | None = None,
) -> str:
    full_name = f"{first_name} {last_name}" if last_name else first_name
    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"N:{last_name or ''};{first_name};;;",
        f"FN:{full_name}",
    ]
    optional = (
        ("ORG", organization),
        ("TITLE", title),
        ("TEL", phone),
        ("EMAIL", email),
        ("ADR", f";;{address};;;;" if address else None),
        ("URL", website),
    )
    lines.extend(f"{key}:{value}" for key, value in optional if value)
    lines.append("END:VCARD")
    return "\n".join(lines)


def geo_payload(latitude: float, longitude: float) -> str:
    if not -90.0 <= latitude <= 90.0:
        raise ValueError("latitude must be between -90 and 90")
    if not -180.0 <= longitude <= 180.0:
        raise ValueError("longitude must be between -180 and 180")
    return f"geo:{latitude},{longitude}"


def _compact_number(number: str) -> str:
    return "".join(number.split())


def _wifi_escape(value: str) -> str:
    for ch in _WIFI_SPECIAL:
        value = value.replace(ch, f"\\{ch}")
    return value
