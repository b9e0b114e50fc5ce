"""Date parsing and Spanish-language date formatting for section templates."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt

WEEKDAYS_ES = (
    "lunes",
    "martes",
    "miércoles",
    "jueves",
    "viernes",
    "sábado",
    "domingo",
)
MONTHS_ES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def parse_iso(value: str | None) -> dt.datetime | None:
    """Parse an authored ISO-8601 date or datetime, returning None if invalid."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return dt.datetime.fromisoformat(text)
    except ValueError:
        return None


def long_date(moment: dt.datetime) -> str:
    """Return e.g. ``miércoles, 23 de septiembre de 2026``."""
    return f"{day_month(moment, weekday=True)} de {moment.year}"


def day_month(moment: dt.datetime, *, weekday: bool = False) -> str:
    """Return e.g. ``23 de septiembre``, optionally prefixed by the weekday."""
    text = f"{moment.day} de {MONTHS_ES[moment.month - 1]}"
    if weekday:
        return f"{WEEKDAYS_ES[moment.weekday()]}, {text}"
    return text


def short_month(moment: dt.datetime) -> str:
    """Return the abbreviated month name used on calendar badges."""
    return MONTHS_ES[moment.month - 1][:3]


@dc.dataclass(frozen=True, slots=True)
class TimeRemaining:
    """Whole days, hours, minutes and seconds left until a target instant."""

    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def until(cls, target: dt.datetime, now: dt.datetime) -> TimeRemaining:
        """Return the time left from ``now`` to ``target``, never negative.

        Naive targets are interpreted in the local timezone of ``now``.
        """
        if target.tzinfo is None and now.tzinfo is not None:
            now = now.astimezone().replace(tzinfo=None)
        elif target.tzinfo is not None and now.tzinfo is None:
            target = target.astimezone().replace(tzinfo=None)
        total = int((target - now).total_seconds())
        if total <= 0:
            return cls()
        return cls(
            days=total // 86400,
            hours=total // 3600 % 24,
            minutes=total // 60 % 60,
            seconds=total % 60,
        )


__all__ = [
    "MONTHS_ES",
    "WEEKDAYS_ES",
    "TimeRemaining",
    "day_month",
    "long_date",
    "parse_iso",
    "short_month",
]
