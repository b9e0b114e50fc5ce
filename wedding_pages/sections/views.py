"""Derive per-section template context from typed section content.

Templates receive the section dataclass unchanged as ``section``; the values
built here are the ones that need computation at render time (countdowns,
calendar downloads, localised dates, resolved button targets).
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from urllib.parse import quote

from ..content.models import (
    CalendarEvent,
    CountdownSection,
    CtaSection,
    EventsCalendarSection,
    HeroCenteredSection,
    RsvpFormSection,
    WeddingHeroSection,
)
from .dates import TimeRemaining, day_month, long_date, parse_iso, short_month

if typ.TYPE_CHECKING:
    import datetime as dt

    from ..content.models import KnownSection

ICS_URI_PREFIX = "data:text/calendar;charset=utf-8,"
_WHITESPACE = re.compile(r"\s+")


@dc.dataclass(frozen=True, slots=True)
class SectionCallbacks:
    """Shared page-level actions injected into every section renderer.

    Attributes
    ----------
    signup_target : str
        In-page target of the "scroll to signup" action.
    partnership_target : str
        In-page target of the "open partnership dialog" action.
    collector_url : str
        Static form collector that receives RSVP submissions.
    newsletter_base : str
        Prefix of the newsletter procedures used by signup forms.
    """

    signup_target: str = "#rsvp"
    partnership_target: str = "#partnership"
    collector_url: str = "/"
    newsletter_base: str = "/api/newsletter"


@dc.dataclass(frozen=True, slots=True)
class CtaTarget:
    """Resolved destination of a call-to-action button."""

    href: str
    opens_dialog: bool = False


@dc.dataclass(frozen=True, slots=True)
class CalendarEntry:
    """Template view of one events-calendar entry."""

    event: CalendarEvent
    date_label: str = ""
    time_label: str = ""
    month_label: str = ""
    day_label: str = ""
    ics_uri: str | None = None
    ics_filename: str = "event.ics"


def section_anchor(section_id: str | None, index: int) -> str:
    """Return the element id of a section: authored id or ``section-<index>``."""
    return section_id or f"section-{index}"


def resolve_cta(
    action: str | None,
    link: str | None,
    callback_target: str | None,
    *,
    callback_is_dialog: bool = False,
) -> CtaTarget:
    """Resolve where a call-to-action button points.

    ``modal`` opens the injected callback target, ``scroll`` and ``link`` use
    the authored link. Without an explicit action the callback wins, then the
    authored link, then the page top.
    """
    match action:
        case "modal" if callback_target:
            return CtaTarget(callback_target, opens_dialog=True)
        case "scroll" | "link" if link:
            return CtaTarget(link)
        case _:
            pass
    if callback_target:
        return CtaTarget(callback_target, opens_dialog=callback_is_dialog)
    return CtaTarget(link or "#")


def _ics_text(value: str) -> str:
    """Escape an iCalendar TEXT value so it stays on one content line."""
    value = value.replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,")
    return value.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "\\n")


def calendar_ics(event: CalendarEvent) -> str | None:
    """Return the iCalendar text for ``event`` or None if its date is invalid."""
    start = parse_iso(event.date)
    if start is None:
        return None
    return "\r\n".join(
        [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            "BEGIN:VEVENT",
            f"DTSTART:{start:%Y%m%dT%H%M%S}",
            f"SUMMARY:{_ics_text(event.event_name)}",
            f"LOCATION:{_ics_text(event.location)}",
            f"DESCRIPTION:{_ics_text(event.description)}",
            "END:VEVENT",
            "END:VCALENDAR",
        ]
    )


def calendar_data_uri(event: CalendarEvent) -> str | None:
    """Return a ``data:`` URI that downloads ``event`` as an ``.ics`` file."""
    ics = calendar_ics(event)
    if ics is None:
        return None
    return ICS_URI_PREFIX + quote(ics, safe="-_.!~*'()")


def _calendar_entry(event: CalendarEvent) -> CalendarEntry:
    start = parse_iso(event.date)
    if start is None:
        return CalendarEntry(event=event, date_label=event.date)
    return CalendarEntry(
        event=event,
        date_label=day_month(start, weekday=True),
        time_label=f"{start:%H:%M}",
        month_label=short_month(start),
        day_label=str(start.day),
        ics_uri=calendar_data_uri(event) if event.add_to_calendar else None,
        ics_filename=f"{_WHITESPACE.sub('-', event.event_name) or 'event'}.ics",
    )


def build_view(
    section: KnownSection, callbacks: SectionCallbacks, *, now: dt.datetime
) -> dict[str, typ.Any]:
    """Return the computed template context for ``section``."""
    match section:
        case HeroCenteredSection():
            return {
                "cta": resolve_cta(
                    None, section.cta_button_link, callbacks.signup_target
                )
            }
        case CtaSection():
            return {
                "cta": resolve_cta(
                    section.cta_button_action,
                    section.cta_button_link,
                    callbacks.partnership_target,
                    callback_is_dialog=True,
                )
            }
        case WeddingHeroSection():
            moment = parse_iso(section.date)
            return {
                "date_label": long_date(moment) if moment else section.date,
                "remaining": TimeRemaining.until(moment, now) if moment else None,
            }
        case CountdownSection():
            moment = parse_iso(section.wedding_date)
            return {
                "remaining": TimeRemaining.until(moment, now)
                if moment
                else TimeRemaining(),
                "target_iso": moment.isoformat() if moment else "",
            }
        case RsvpFormSection():
            deadline = parse_iso(section.rsvp_deadline)
            return {
                "deadline_label": day_month(deadline)
                if deadline
                else section.rsvp_deadline
            }
        case EventsCalendarSection():
            return {"entries": [_calendar_entry(event) for event in section.events]}
        case _:
            return {}


__all__ = [
    "ICS_URI_PREFIX",
    "CalendarEntry",
    "CtaTarget",
    "SectionCallbacks",
    "build_view",
    "calendar_data_uri",
    "calendar_ics",
    "resolve_cta",
    "section_anchor",
]
