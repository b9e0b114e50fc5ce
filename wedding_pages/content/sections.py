"""Section builders turning flat CMS section records into typed dataclasses.

Authored records are flat: ``{"type": "faq", "title": ..., "questions": [...]}``.
:func:`parse_section` looks the tag up in ``SECTION_PARSERS`` and hands the
record to the matching builder. Builders never raise for a JSON object; they
default missing optional fields, coerce enum selections outside the allowed
set back to the section's default, and drop malformed array entries.
Unrecognised tags become :class:`UnknownSection` so the caller can skip them.
"""

from __future__ import annotations

import typing as typ

from .helpers import (
    Payload,
    _choice,
    _columns,
    _flag,
    _mappings,
    _optional_choice,
    _optional_text,
    _text,
)
from .models import (
    CalendarEvent,
    Card,
    CardGridSection,
    ContentImageSection,
    CountdownSection,
    CtaSection,
    EmailSignupSection,
    EventDetailsSection,
    EventDetailsWeddingSection,
    EventsCalendarSection,
    FaqSection,
    FeatureItem,
    GuestResourcesSection,
    HeroCenteredSection,
    HeroLeftSection,
    InfoBoxSection,
    KnownSection,
    MealOption,
    QuestionItem,
    Recommendation,
    RegistryLink,
    RegistrySection,
    ResourceGroup,
    RichTextSection,
    RsvpFormSection,
    Section,
    TimelineItem,
    UnknownSection,
    UseCase,
    ValueCardsSection,
    WeddingHeroSection,
)

WEDDING_BACKGROUNDS = ("cream", "beige", "white")


def parse_section(record: Payload) -> Section:
    """Return the typed section for a flat CMS record.

    Parameters
    ----------
    record : Mapping[str, Any]
        Authored section object with a ``type`` discriminant and the
        type-specific fields alongside it.

    Returns
    -------
    Section
        The typed section dataclass, or :class:`UnknownSection` when the tag
        has no parser.

    Examples
    --------
    >>> parse_section({"type": "faq", "title": "Preguntas"}).title
    'Preguntas'
    >>> parse_section({"type": "mystery"}).type
    'mystery'
    """
    tag = _text(record, "type")
    section_id = _optional_text(record, "sectionId")
    parser = SECTION_PARSERS.get(tag)
    if parser is None:
        return UnknownSection(type=tag, raw=dict(record), section_id=section_id)
    return parser(record, section_id)


def _build_hero_left(data: Payload, section_id: str | None) -> HeroLeftSection:
    base = HeroLeftSection()
    return HeroLeftSection(
        section_id=section_id,
        headline=_text(data, "headline"),
        headline_secondary=_text(data, "headlineSecondary"),
        subheadline=_text(data, "subheadline"),
        description=_text(data, "description"),
        cta_title=_text(data, "ctaTitle"),
        cta_description=_text(data, "ctaDescription"),
        cta_button_text=_text(data, "ctaButtonText", base.cta_button_text),
        badge_text=_text(data, "badgeText"),
        background_desktop=_text(data, "backgroundDesktop", base.background_desktop),
        background_mobile=_text(data, "backgroundMobile", base.background_mobile),
        success_title=_text(data, "successTitle"),
        success_message=_text(data, "successMessage"),
        show_email_form=_flag(data, "showEmailForm", default=True),
        show_social_proof=_flag(data, "showSocialProof", default=True),
    )


def _build_hero_centered(
    data: Payload, section_id: str | None
) -> HeroCenteredSection:
    desktop = _text(data, "backgroundDesktop", HeroCenteredSection().background_desktop)
    return HeroCenteredSection(
        section_id=section_id,
        headline=_text(data, "headline"),
        headline_secondary=_optional_text(data, "headlineSecondary"),
        subheadline=_text(data, "subheadline"),
        description=_optional_text(data, "description"),
        cta_button_text=_text(data, "ctaButtonText"),
        cta_button_link=_optional_text(data, "ctaButtonLink"),
        background_desktop=desktop,
        background_mobile=_optional_text(data, "backgroundMobile") or desktop,
        badge_text=_optional_text(data, "badgeText"),
    )


def _build_content_image(
    data: Payload, section_id: str | None
) -> ContentImageSection:
    features = tuple(
        FeatureItem(emoji=_text(item, "emoji"), text=_text(item, "text"))
        for item in _mappings(data, "features")
        if _text(item, "text")
    )
    return ContentImageSection(
        section_id=section_id,
        title=_text(data, "title"),
        title_emoji=_optional_text(data, "titleEmoji"),
        description=_optional_text(data, "description")
        or _optional_text(data, "content"),
        image=_text(data, "image"),
        image_alt=_text(data, "imageAlt"),
        image_position=_choice(data, "imagePosition", ("left", "right"), default="right"),
        features=features,
        background_color=_choice(
            data, "backgroundColor", ("cream", "green", "yellow", "white"), default="cream"
        ),
    )


def _build_cards(data: Payload) -> tuple[Card, ...]:
    return tuple(
        Card(
            emoji=_text(item, "emoji"),
            title=_text(item, "title"),
            description=_text(item, "description"),
            badge_text=_optional_text(item, "badgeText"),
        )
        for item in _mappings(data, "cards")
        if _text(item, "title")
    )


def _build_card_grid(data: Payload, section_id: str | None) -> CardGridSection:
    return CardGridSection(
        section_id=section_id,
        title=_text(data, "title"),
        title_emoji=_optional_text(data, "titleEmoji"),
        subtitle=_optional_text(data, "subtitle"),
        cards=_build_cards(data),
        background_color=_choice(
            data,
            "backgroundColor",
            ("green", "cream", "yellow", "dark-green"),
            default="cream",
        ),
        columns=_columns(data),
    )


def _build_value_cards(data: Payload, section_id: str | None) -> ValueCardsSection:
    return ValueCardsSection(
        section_id=section_id,
        title=_text(data, "title"),
        title_emoji=_optional_text(data, "titleEmoji"),
        cards=_build_cards(data),
        background_color=_choice(
            data, "backgroundColor", ("yellow", "green", "cream"), default="yellow"
        ),
        columns=_columns(data),
    )


def _build_cta_section(data: Payload, section_id: str | None) -> CtaSection:
    use_cases = tuple(
        UseCase(emoji=_text(item, "emoji"), label=_text(item, "label"))
        for item in _mappings(data, "useCases")
        if _text(item, "label")
    )
    return CtaSection(
        section_id=section_id,
        title=_text(data, "title"),
        title_emoji=_optional_text(data, "titleEmoji"),
        description=_text(data, "description"),
        cta_button_text=_text(data, "ctaButtonText"),
        cta_button_action=_optional_choice(
            data, "ctaButtonAction", ("modal", "link", "scroll")
        ),
        cta_button_link=_optional_text(data, "ctaButtonLink"),
        use_cases=use_cases,
        background_color=_choice(
            data,
            "backgroundColor",
            ("dark-green", "green", "yellow", "cream", "beige", "bronze", "sage"),
            default="bronze",
        ),
    )


def _build_email_signup(data: Payload, section_id: str | None) -> EmailSignupSection:
    return EmailSignupSection(
        section_id=section_id,
        title=_text(data, "title"),
        title_emoji=_optional_text(data, "titleEmoji"),
        description=_text(data, "description"),
        button_text=_text(data, "buttonText", EmailSignupSection().button_text),
        success_title=_text(data, "successTitle"),
        success_message=_text(data, "successMessage"),
        show_segmentation=_flag(data, "showSegmentation", default=False),
        show_social_proof=_flag(data, "showSocialProof", default=True),
        background_color=_choice(
            data,
            "backgroundColor",
            ("green-gradient", "cream", "white"),
            default="green-gradient",
        ),
    )


def _build_event_details(
    data: Payload, section_id: str | None
) -> EventDetailsSection:
    return EventDetailsSection(
        section_id=section_id,
        title=_text(data, "title"),
        title_emoji=_optional_text(data, "titleEmoji"),
        event_date=_text(data, "eventDate"),
        event_time=_optional_text(data, "eventTime"),
        location=_text(data, "location"),
        map_link=_optional_text(data, "mapLink"),
        price=_optional_text(data, "price"),
        registration_deadline=_optional_text(data, "registrationDeadline"),
        description=_optional_text(data, "description"),
        background_color=_choice(
            data, "backgroundColor", ("cream", "white", "green"), default="cream"
        ),
    )


def _build_rich_text(data: Payload, section_id: str | None) -> RichTextSection:
    return RichTextSection(
        section_id=section_id,
        title=_optional_text(data, "title"),
        title_emoji=_optional_text(data, "titleEmoji"),
        body=_text(data, "body"),
        background_color=_choice(
            data, "backgroundColor", ("cream", "white", "green"), default="white"
        ),
    )


def _build_wedding_hero(data: Payload, section_id: str | None) -> WeddingHeroSection:
    return WeddingHeroSection(
        section_id=section_id,
        bride_name=_text(data, "brideName"),
        groom_name=_text(data, "groomName"),
        announcement=_text(data, "announcement"),
        date=_text(data, "date"),
        venue=_text(data, "venue"),
        location=_text(data, "location"),
        background_image=_optional_text(data, "backgroundImage"),
        skyline_position=_choice(
            data, "skylinePosition", ("bottom", "footer"), default="bottom"
        ),
        show_countdown=_flag(data, "showCountdown", default=False),
    )


def _build_countdown(data: Payload, section_id: str | None) -> CountdownSection:
    return CountdownSection(
        section_id=section_id,
        title=_text(data, "title"),
        wedding_date=_text(data, "weddingDate"),
        background_color=_choice(
            data, "backgroundColor", WEDDING_BACKGROUNDS, default="cream"
        ),
        decorative_element=_choice(
            data,
            "decorativeElement",
            ("none", "orange-branch", "olive-branch", "azulejo"),
            default="none",
        ),
    )


def _build_event_details_wedding(
    data: Payload, section_id: str | None
) -> EventDetailsWeddingSection:
    timeline = tuple(
        TimelineItem(
            time=_text(item, "time"),
            event=_text(item, "event"),
            icon=_choice(
                item,
                "icon",
                ("church", "champagne", "dinner", "music", "custom"),
                default="custom",
            ),
            description=_optional_text(item, "description"),
        )
        for item in _mappings(data, "timeline")
        if _text(item, "event")
    )
    return EventDetailsWeddingSection(
        section_id=section_id,
        title=_text(data, "title"),
        subtitle=_optional_text(data, "subtitle"),
        timeline=timeline,
        venue_address=_text(data, "venueAddress"),
        show_map=_flag(data, "showMap", default=False),
        map_latitude=_optional_text(data, "mapLatitude"),
        map_longitude=_optional_text(data, "mapLongitude"),
        parking_info=_optional_text(data, "parkingInfo"),
        transport_info=_optional_text(data, "transportInfo"),
        background_color=_choice(
            data, "backgroundColor", WEDDING_BACKGROUNDS, default="white"
        ),
    )


def _build_rsvp_form(data: Payload, section_id: str | None) -> RsvpFormSection:
    meal_options = tuple(
        MealOption(
            value=_text(item, "value"),
            label=_text(item, "label", _text(item, "value")),
            description=_optional_text(item, "description"),
        )
        for item in _mappings(data, "mealOptions")
        if _text(item, "value")
    )
    return RsvpFormSection(
        section_id=section_id or "rsvp",
        title=_text(data, "title"),
        subtitle=_optional_text(data, "subtitle"),
        form_intro=_text(data, "formIntro"),
        rsvp_deadline=_text(data, "rsvpDeadline"),
        meal_options=meal_options,
        ask_dietary_restrictions=_flag(data, "askDietaryRestrictions", default=True),
        ask_plus_one=_flag(data, "askPlusOne", default=True),
        decorative_icon=_choice(
            data, "decorativeIcon", ("champagne", "none"), default="none"
        ),
        background_color=_choice(
            data, "backgroundColor", WEDDING_BACKGROUNDS, default="beige"
        ),
    )


def _build_guest_resources(
    data: Payload, section_id: str | None
) -> GuestResourcesSection:
    groups: list[ResourceGroup] = []
    for item in _mappings(data, "sections"):
        title = _text(item, "sectionTitle")
        if not title:
            continue
        recommendations = tuple(
            Recommendation(
                name=_text(entry, "name"),
                description=_text(entry, "description"),
                link=_optional_text(entry, "link"),
                phone=_optional_text(entry, "phone"),
            )
            for entry in _mappings(item, "recommendations")
            if _text(entry, "name")
        )
        groups.append(
            ResourceGroup(
                section_title=title,
                icon=_choice(
                    item, "icon", ("hotel", "airplane", "car", "info"), default="info"
                ),
                content=_text(item, "content"),
                recommendations=recommendations,
            )
        )
    return GuestResourcesSection(
        section_id=section_id,
        title=_text(data, "title"),
        subtitle=_optional_text(data, "subtitle"),
        groups=tuple(groups),
        background_color=_choice(
            data, "backgroundColor", WEDDING_BACKGROUNDS, default="cream"
        ),
    )


def _build_faq(data: Payload, section_id: str | None) -> FaqSection:
    questions = tuple(
        QuestionItem(question=_text(item, "question"), answer=_text(item, "answer"))
        for item in _mappings(data, "questions")
        if _text(item, "question")
    )
    return FaqSection(
        section_id=section_id,
        title=_text(data, "title"),
        subtitle=_optional_text(data, "subtitle"),
        questions=questions,
        background_color=_choice(
            data, "backgroundColor", WEDDING_BACKGROUNDS, default="white"
        ),
    )


def _build_events_calendar(
    data: Payload, section_id: str | None
) -> EventsCalendarSection:
    events = tuple(
        CalendarEvent(
            event_name=_text(item, "eventName"),
            date=_text(item, "date"),
            location=_text(item, "location"),
            description=_text(item, "description"),
            add_to_calendar=_flag(item, "addToCalendar", default=False),
            requires_rsvp=_flag(item, "requiresRSVP", default=False),
        )
        for item in _mappings(data, "events")
        if _text(item, "eventName")
    )
    return EventsCalendarSection(
        section_id=section_id,
        title=_text(data, "title"),
        subtitle=_optional_text(data, "subtitle"),
        events=events,
        background_color=_choice(
            data, "backgroundColor", WEDDING_BACKGROUNDS, default="beige"
        ),
    )


def _build_info_box(data: Payload, section_id: str | None) -> InfoBoxSection:
    return InfoBoxSection(
        section_id=section_id,
        title=_text(data, "title"),
        content=_text(data, "content"),
        icon=_choice(data, "icon", ("info", "heart", "star", "custom"), default="info"),
        style=_choice(data, "style", ("highlight", "normal"), default="normal"),
        background_color=_choice(
            data, "backgroundColor", WEDDING_BACKGROUNDS, default="cream"
        ),
    )


def _build_registry(data: Payload, section_id: str | None) -> RegistrySection:
    links = tuple(
        RegistryLink(
            store_name=_text(item, "storeName"),
            store_url=_text(item, "storeUrl"),
            store_image=_optional_text(item, "storeImage"),
        )
        for item in _mappings(data, "registryLinks")
        if _text(item, "storeName") and _text(item, "storeUrl")
    )
    return RegistrySection(
        section_id=section_id,
        title=_text(data, "title"),
        message=_optional_text(data, "message"),
        registry_links=links,
        show_cash_option=_flag(data, "showCashOption", default=False),
        cash_message=_optional_text(data, "cashMessage"),
        background_color=_choice(
            data, "backgroundColor", WEDDING_BACKGROUNDS, default="white"
        ),
    )


SectionParser = typ.Callable[[Payload, str | None], KnownSection]

SECTION_PARSERS: typ.Final[typ.Mapping[str, SectionParser]] = {
    HeroLeftSection.type: _build_hero_left,
    HeroCenteredSection.type: _build_hero_centered,
    ContentImageSection.type: _build_content_image,
    CardGridSection.type: _build_card_grid,
    ValueCardsSection.type: _build_value_cards,
    CtaSection.type: _build_cta_section,
    EmailSignupSection.type: _build_email_signup,
    EventDetailsSection.type: _build_event_details,
    RichTextSection.type: _build_rich_text,
    WeddingHeroSection.type: _build_wedding_hero,
    CountdownSection.type: _build_countdown,
    EventDetailsWeddingSection.type: _build_event_details_wedding,
    RsvpFormSection.type: _build_rsvp_form,
    GuestResourcesSection.type: _build_guest_resources,
    FaqSection.type: _build_faq,
    EventsCalendarSection.type: _build_events_calendar,
    InfoBoxSection.type: _build_info_box,
    RegistrySection.type: _build_registry,
}


__all__ = ["SECTION_PARSERS", "parse_section"]
