"""Parse dictated Australian due dates into ISO calendar dates."""

from __future__ import annotations

import re
from datetime import date

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_AU_DATE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$", re.ASCII)


def normalize_due_date(raw: str | None, *, strict_iso: bool = False) -> str:
    """Return ``YYYY-MM-DD`` for an AU (day first) or ISO date, else ``""``.

    ISO-shaped input is passed through untouched unless ``strict_iso`` is set,
    in which case it must also be a real calendar date.
    """
    if not raw:
        return ""
    value = raw.strip()

    if _ISO_DATE.match(value):
        if strict_iso and not _is_calendar_date(value):
            return ""
        return value

    match = _AU_DATE.match(value)
    if match is None:
        return ""
    day, month, year = match.groups()
    candidate = f"{year}-{int(month):02d}-{int(day):02d}"
    return candidate if _is_calendar_date(candidate) else ""


def _is_calendar_date(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


__all__ = ["normalize_due_date"]
