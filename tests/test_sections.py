"""Unit tests for section parsing, view helpers and the section registry."""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ
from urllib.parse import unquote

import pytest
from bs4 import BeautifulSoup
from markupsafe import Markup

from wedding_pages.content import SECTION_PARSERS, UnknownSection, parse_section
from wedding_pages.content.models import CalendarEvent, CountdownSection
from wedding_pages.sections import (
    SECTION_LABELS,
    SectionCallbacks,
    SectionRegistry,
    calendar_data_uri,
    resolve_cta,
    section_anchor,
)
from wedding_pages.sections.dates import TimeRemaining, long_date, parse_iso
from wedding_pages.sections.views import ICS_URI_PREFIX, build_view, calendar_ics

if typ.TYPE_CHECKING:
    from wedding_pages.content.models import KnownSection

MINIMAL_SECTIONS: dict[str, dict[str, typ.Any]] = {
    "hero-left": {"headline": "Bienvenidos"},
    "hero-centered": {"headline": "Bienvenidos", "ctaButtonText": "Confirmar"},
    "content-image": {"title": "Nuestra historia", "image": "/img/a.jpg"},
    "card-grid": {
        "title": "Actividades",
        "cards": [{"emoji": "*", "title": "Paseo", "description": "Por Triana"}],
    },
    "value-cards": {
        "title": "Valores",
        "cards": [{"emoji": "*", "title": "Familia", "description": "Siempre"}],
    },
    "cta-section": {"title": "Colabora", "ctaButtonText": "Escríbenos"},
    "email-signup": {"title": "Novedades"},
    "event-details": {
        "title": "Preboda",
        "eventDate": "2027-05-21",
        "location": "Triana",
    },
    "rich-text": {"body": "Texto **importante**"},
    "wedding-hero": {"date": "2027-05-22T18:00:00+02:00"},
    "countdown": {"title": "Faltan", "weddingDate": "2027-05-22T18:00:00+02:00"},
    "event-details-wedding": {
        "title": "Programa",
        "timeline": [{"time": "18:00", "event": "Ceremonia"}],
    },
    "rsvp-form": {"title": "RSVP", "rsvpDeadline": "2027-04-15"},
    "guest-resources": {
        "title": "Viaje",
        "sections": [{"sectionTitle": "Hoteles", "content": "Reservad pronto"}],
    },
    "faq": {
        "title": "Preguntas",
        "questions": [{"question": "¿Niños?", "answer": "Sí"}],
    },
    "events-calendar": {
        "title": "Agenda",
        "events": [
            {
                "eventName": "Cena",
                "date": "2027-05-21T21:00:00+02:00",
                "location": "Sevilla",
                "description": "Tapas",
            }
        ],
    },
    "info-box": {"title": "Aviso", "content": "Autobuses a las 17:00"},
    "registry": {"title": "Regalos"},
}


def _section(kind: str, **overrides: typ.Any) -> KnownSection:
    return typ.cast(
        "KnownSection",
        parse_section({"type": kind, **MINIMAL_SECTIONS[kind], **overrides}),
    )


def test_minimal_content_covers_every_registered_type() -> None:
    """Every registered type has a minimal fixture and a friendly label."""
    assert set(MINIMAL_SECTIONS) == set(SECTION_PARSERS), (
        "expected one minimal fixture per registered section type"
    )
    assert set(SECTION_LABELS) >= set(SECTION_PARSERS), (
        "expected a label for every registered section type"
    )


@pytest.mark.parametrize("kind", sorted(MINIMAL_SECTIONS))
def test_every_section_type_renders_minimal_content(
    kind: str, registry: SectionRegistry
) -> None:
    """Each section renders a tagged root element for its minimal content."""
    html = registry.render(_section(kind), SectionCallbacks(), 3)
    soup = BeautifulSoup(str(html), "html.parser")
    root = soup.find(attrs={"data-section-type": kind})

    assert root is not None, f"expected a root element tagged {kind!r}"
    expected_id = "rsvp" if kind == "rsvp-form" else "section-3"
    assert root["id"] == expected_id, (
        f"expected anchor {expected_id!r} for {kind}, got {root['id']!r}"
    )


def test_unknown_section_renders_nothing_and_logs(
    registry: SectionRegistry, caplog: pytest.LogCaptureFixture
) -> None:
    section = parse_section({"type": "mystery", "title": "???"})
    assert isinstance(section, UnknownSection)

    with caplog.at_level(logging.WARNING):
        html = registry.render(section, SectionCallbacks(), 0)

    assert html == Markup(""), "unknown sections should contribute no markup"
    assert "Unknown section type: mystery" in caplog.text


def test_failing_renderer_is_isolated(caplog: pytest.LogCaptureFixture) -> None:
    """A renderer error yields empty markup instead of propagating."""

    def broken(*_args: typ.Any, **_kwargs: typ.Any) -> Markup:
        raise ValueError("boom")

    registry = SectionRegistry({"faq": broken})
    with caplog.at_level(logging.ERROR):
        html = registry.render(_section("faq"), SectionCallbacks(), 0)

    assert html == Markup("")
    assert "Failed to render section 0 of type faq" in caplog.text


def test_render_all_preserves_order(registry: SectionRegistry) -> None:
    sections = [_section("faq"), _section("info-box"), _section("registry")]
    rendered = registry.render_all(sections, SectionCallbacks())
    kinds = [
        BeautifulSoup(str(html), "html.parser").section["data-section-type"]
        for html in rendered
    ]
    assert kinds == ["faq", "info-box", "registry"]


def test_authored_section_id_becomes_anchor() -> None:
    assert section_anchor("programa", 2) == "programa"
    assert section_anchor(None, 2) == "section-2"


def test_cta_modal_action_opens_partnership_dialog(
    registry: SectionRegistry,
) -> None:
    section = _section(
        "cta-section", ctaButtonAction="modal", ctaButtonLink="/contacto"
    )
    callbacks = SectionCallbacks(partnership_target="#partnership")
    soup = BeautifulSoup(str(registry.render(section, callbacks, 0)), "html.parser")
    button = soup.find("a", class_="button")

    assert button is not None
    assert button["href"] == "#partnership", (
        "modal actions must target the partnership dialog, not the authored link"
    )
    assert button.has_attr("data-opens-dialog")


@pytest.mark.parametrize(
    ("action", "link", "target", "expected"),
    [
        ("modal", "/x", "#dialog", "#dialog"),
        ("scroll", "#rsvp", "#dialog", "#rsvp"),
        ("link", "https://example.com", "#dialog", "https://example.com"),
        (None, "/x", "#dialog", "#dialog"),
        (None, "/x", None, "/x"),
        (None, None, None, "#"),
    ],
)
def test_resolve_cta(
    action: str | None, link: str | None, target: str | None, expected: str
) -> None:
    assert resolve_cta(action, link, target).href == expected


def test_invalid_enum_selection_falls_back_to_default() -> None:
    section = parse_section(
        {"type": "countdown", "title": "x", "backgroundColor": "neon-pink"}
    )
    assert isinstance(section, CountdownSection)
    assert section.background_color == "cream"


def test_malformed_array_entries_are_dropped() -> None:
    section = parse_section(
        {"type": "faq", "questions": [{"question": "ok", "answer": "a"}, "junk", {}]}
    )
    assert len(section.questions) == 1  # type: ignore[union-attr]


def test_countdown_never_negative_after_target(fixed_now: dt.datetime) -> None:
    target = dt.datetime(2020, 1, 1, tzinfo=dt.UTC)
    remaining = TimeRemaining.until(target, fixed_now)
    assert remaining == TimeRemaining(0, 0, 0, 0)


def test_countdown_splits_remaining_time(fixed_now: dt.datetime) -> None:
    target = fixed_now + dt.timedelta(days=2, hours=3, minutes=4, seconds=5)
    assert TimeRemaining.until(target, fixed_now) == TimeRemaining(2, 3, 4, 5)


def test_past_countdown_renders_zeroes(registry: SectionRegistry) -> None:
    section = _section("countdown", weddingDate="2020-01-01T00:00:00Z")
    soup = BeautifulSoup(
        str(registry.render(section, SectionCallbacks(), 0)), "html.parser"
    )
    values = [span.get_text() for span in soup.select(".countdown__value")]
    assert values == ["00", "00", "00", "00"]


def test_wedding_hero_formats_date_in_spanish() -> None:
    moment = parse_iso("2026-09-23T18:00:00+02:00")
    assert moment is not None
    assert long_date(moment) == "miércoles, 23 de septiembre de 2026"
    assert parse_iso("not a date") is None


def test_calendar_entry_offers_download_only_when_requested(
    fixed_now: dt.datetime,
) -> None:
    section = _section(
        "events-calendar",
        events=[
            {
                "eventName": "Cena de bienvenida",
                "date": "2027-05-21T21:00:00+02:00",
                "location": "Triana",
                "description": "Tapas",
                "addToCalendar": True,
                "requiresRSVP": True,
            },
            {"eventName": "Brunch", "date": "2027-05-23T11:00:00+02:00"},
        ],
    )
    entries = build_view(section, SectionCallbacks(), now=fixed_now)["entries"]

    assert entries[0].ics_uri is not None
    assert entries[0].ics_filename == "Cena-de-bienvenida.ics"
    assert entries[0].time_label == "21:00"
    assert entries[1].ics_uri is None, "events without addToCalendar get no link"


def test_calendar_data_uri_encodes_ics_document() -> None:
    event = CalendarEvent(
        event_name="Boda",
        date="2027-05-22T18:00:00+02:00",
        location="Sevilla",
        description="Ceremonia",
        add_to_calendar=True,
    )
    uri = calendar_data_uri(event)
    assert uri is not None
    assert uri.startswith(ICS_URI_PREFIX)
    ics = unquote(uri.removeprefix(ICS_URI_PREFIX))
    assert "DTSTART:20270522T180000" in ics
    assert "SUMMARY:Boda" in ics
    assert "\r\n" in ics


def test_calendar_text_fields_cannot_add_ics_lines() -> None:
    event = CalendarEvent(
        event_name="Boda; civil, y fiesta",
        date="2027-05-22T18:00:00+02:00",
        location="Hacienda\r\nEND:VEVENT",
        description="Trae abrigo\\ o chal\nDTSTART:19990101T000000",
    )
    ics = calendar_ics(event)

    assert ics is not None
    lines = ics.split("\r\n")
    assert lines == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "BEGIN:VEVENT",
        "DTSTART:20270522T180000",
        "SUMMARY:Boda\\; civil\\, y fiesta",
        "LOCATION:Hacienda\\nEND:VEVENT",
        "DESCRIPTION:Trae abrigo\\\\ o chal\\nDTSTART:19990101T000000",
        "END:VEVENT",
        "END:VCALENDAR",
    ], f"authored text leaked into the calendar structure: {lines!r}"


def test_markdown_fields_escape_raw_html(registry: SectionRegistry) -> None:
    section = _section("rich-text", body="Hola <script>alert(1)</script> **mundo**")
    html = str(registry.render(section, SectionCallbacks(), 0))
    assert "<script>" not in html
    assert "<strong>mundo</strong>" in html


def test_rsvp_form_posts_to_collector(registry: SectionRegistry) -> None:
    callbacks = SectionCallbacks(collector_url="/forms")
    soup = BeautifulSoup(
        str(registry.render(_section("rsvp-form"), callbacks, 0)), "html.parser"
    )
    form = soup.find("form", attrs={"data-form": "rsvp"})
    assert form is not None
    assert form["action"] == "/forms"
    hidden = form.find("input", attrs={"name": "form-name"})
    assert hidden is not None and hidden["value"] == "rsvp"
