"""Typed dataclasses describing CMS-authored page documents.

Each page document holds an ordered tuple of sections. Sections form a tagged
union: one dataclass per registered section kind, each carrying its ``type``
tag as a class variable, plus :class:`UnknownSection` as the catch-all arm for
tags nothing renders. Small value records (cards, questions, timeline items)
are owned by their section and have no identity of their own.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


# ---------------------------------------------------------------------------
# Owned value records
# ---------------------------------------------------------------------------


@dc.dataclass(frozen=True, slots=True)
class FeatureItem:
    """Emoji-prefixed bullet used by content-image sections."""

    emoji: str
    text: str


@dc.dataclass(frozen=True, slots=True)
class Card:
    """Card tile used by card-grid and value-cards sections."""

    emoji: str
    title: str
    description: str
    badge_text: str | None = None


@dc.dataclass(frozen=True, slots=True)
class UseCase:
    """Emoji label listed under a call-to-action."""

    emoji: str
    label: str


@dc.dataclass(frozen=True, slots=True)
class QuestionItem:
    """Question and answer pair rendered in the FAQ accordion."""

    question: str
    answer: str


@dc.dataclass(frozen=True, slots=True)
class TimelineItem:
    """Single entry in the wedding-day timeline."""

    time: str
    event: str
    icon: str = "custom"
    description: str | None = None


@dc.dataclass(frozen=True, slots=True)
class MealOption:
    """Menu choice offered on the RSVP form."""

    value: str
    label: str
    description: str | None = None


@dc.dataclass(frozen=True, slots=True)
class Recommendation:
    """Hotel, restaurant, or transport recommendation."""

    name: str
    description: str
    link: str | None = None
    phone: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ResourceGroup:
    """Titled group of guest resources with markdown body text."""

    section_title: str
    icon: str
    content: str
    recommendations: tuple[Recommendation, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class CalendarEvent:
    """Event listed on the events calendar."""

    event_name: str
    date: str
    location: str
    description: str
    add_to_calendar: bool = False
    requires_rsvp: bool = False


@dc.dataclass(frozen=True, slots=True)
class RegistryLink:
    """External gift registry entry."""

    store_name: str
    store_url: str
    store_image: str | None = None


@dc.dataclass(frozen=True, slots=True)
class AudienceSegment:
    """Newsletter segmentation option offered on the full signup form."""

    value: str
    label: str


@dc.dataclass(frozen=True, slots=True)
class NavItem:
    """Header navigation entry; ``is_modal`` opens the partnership dialog."""

    label: str
    href: str
    is_modal: bool = False


@dc.dataclass(frozen=True, slots=True)
class QuickLink:
    """Footer quick link."""

    label: str
    href: str


# ---------------------------------------------------------------------------
# Section union
# ---------------------------------------------------------------------------


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class SectionBase:
    """Fields shared by every section kind."""

    type: typ.ClassVar[str] = ""
    section_id: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class HeroLeftSection(SectionBase):
    type: typ.ClassVar[str] = "hero-left"
    headline: str = ""
    headline_secondary: str = ""
    subheadline: str = ""
    description: str = ""
    cta_title: str = ""
    cta_description: str = ""
    cta_button_text: str = "Subscribe"
    badge_text: str = ""
    background_desktop: str = "/hero-illustration.png"
    background_mobile: str = "/hero-illustration-mobile.png"
    success_title: str = ""
    success_message: str = ""
    show_email_form: bool = True
    show_social_proof: bool = True


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class HeroCenteredSection(SectionBase):
    type: typ.ClassVar[str] = "hero-centered"
    headline: str = ""
    headline_secondary: str | None = None
    subheadline: str = ""
    description: str | None = None
    cta_button_text: str = ""
    cta_button_link: str | None = None
    background_desktop: str = "/hero-illustration.png"
    background_mobile: str | None = None
    badge_text: str | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ContentImageSection(SectionBase):
    type: typ.ClassVar[str] = "content-image"
    title: str = ""
    title_emoji: str | None = None
    description: str | None = None
    image: str = ""
    image_alt: str = ""
    image_position: str = "right"
    features: tuple[FeatureItem, ...] = ()
    background_color: str = "cream"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CardGridSection(SectionBase):
    type: typ.ClassVar[str] = "card-grid"
    title: str = ""
    title_emoji: str | None = None
    subtitle: str | None = None
    cards: tuple[Card, ...] = ()
    background_color: str = "cream"
    columns: int = 4


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ValueCardsSection(SectionBase):
    type: typ.ClassVar[str] = "value-cards"
    title: str = ""
    title_emoji: str | None = None
    cards: tuple[Card, ...] = ()
    background_color: str = "yellow"
    columns: int = 4


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CtaSection(SectionBase):
    type: typ.ClassVar[str] = "cta-section"
    title: str = ""
    title_emoji: str | None = None
    description: str = ""
    cta_button_text: str = ""
    cta_button_action: str | None = None
    cta_button_link: str | None = None
    use_cases: tuple[UseCase, ...] = ()
    background_color: str = "bronze"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class EmailSignupSection(SectionBase):
    type: typ.ClassVar[str] = "email-signup"
    title: str = ""
    title_emoji: str | None = None
    description: str = ""
    button_text: str = "Subscribe"
    success_title: str = ""
    success_message: str = ""
    show_segmentation: bool = False
    show_social_proof: bool = True
    background_color: str = "green-gradient"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class EventDetailsSection(SectionBase):
    type: typ.ClassVar[str] = "event-details"
    title: str = ""
    title_emoji: str | None = None
    event_date: str = ""
    event_time: str | None = None
    location: str = ""
    map_link: str | None = None
    price: str | None = None
    registration_deadline: str | None = None
    description: str | None = None
    background_color: str = "cream"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class RichTextSection(SectionBase):
    type: typ.ClassVar[str] = "rich-text"
    title: str | None = None
    title_emoji: str | None = None
    body: str = ""
    background_color: str = "white"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class WeddingHeroSection(SectionBase):
    type: typ.ClassVar[str] = "wedding-hero"
    bride_name: str = ""
    groom_name: str = ""
    announcement: str = ""
    date: str = ""
    venue: str = ""
    location: str = ""
    background_image: str | None = None
    skyline_position: str = "bottom"
    show_countdown: bool = False


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CountdownSection(SectionBase):
    type: typ.ClassVar[str] = "countdown"
    title: str = ""
    wedding_date: str = ""
    background_color: str = "cream"
    decorative_element: str = "none"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class EventDetailsWeddingSection(SectionBase):
    type: typ.ClassVar[str] = "event-details-wedding"
    title: str = ""
    subtitle: str | None = None
    timeline: tuple[TimelineItem, ...] = ()
    venue_address: str = ""
    show_map: bool = False
    map_latitude: str | None = None
    map_longitude: str | None = None
    parking_info: str | None = None
    transport_info: str | None = None
    background_color: str = "white"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class RsvpFormSection(SectionBase):
    type: typ.ClassVar[str] = "rsvp-form"
    title: str = ""
    subtitle: str | None = None
    form_intro: str = ""
    rsvp_deadline: str = ""
    meal_options: tuple[MealOption, ...] = ()
    ask_dietary_restrictions: bool = True
    ask_plus_one: bool = True
    decorative_icon: str = "none"
    background_color: str = "beige"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class GuestResourcesSection(SectionBase):
    type: typ.ClassVar[str] = "guest-resources"
    title: str = ""
    subtitle: str | None = None
    groups: tuple[ResourceGroup, ...] = ()
    background_color: str = "cream"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class FaqSection(SectionBase):
    type: typ.ClassVar[str] = "faq"
    title: str = ""
    subtitle: str | None = None
    questions: tuple[QuestionItem, ...] = ()
    background_color: str = "white"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class EventsCalendarSection(SectionBase):
    type: typ.ClassVar[str] = "events-calendar"
    title: str = ""
    subtitle: str | None = None
    events: tuple[CalendarEvent, ...] = ()
    background_color: str = "beige"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class InfoBoxSection(SectionBase):
    type: typ.ClassVar[str] = "info-box"
    title: str = ""
    content: str = ""
    icon: str = "info"
    style: str = "normal"
    background_color: str = "cream"


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class RegistrySection(SectionBase):
    type: typ.ClassVar[str] = "registry"
    title: str = ""
    message: str | None = None
    registry_links: tuple[RegistryLink, ...] = ()
    show_cash_option: bool = False
    cash_message: str | None = None
    background_color: str = "white"


@dc.dataclass(frozen=True, slots=True)
class UnknownSection:
    """Catch-all arm for section tags with no registered renderer."""

    type: str
    raw: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)
    section_id: str | None = None


KnownSection = (
    HeroLeftSection
    | HeroCenteredSection
    | ContentImageSection
    | CardGridSection
    | ValueCardsSection
    | CtaSection
    | EmailSignupSection
    | EventDetailsSection
    | RichTextSection
    | WeddingHeroSection
    | CountdownSection
    | EventDetailsWeddingSection
    | RsvpFormSection
    | GuestResourcesSection
    | FaqSection
    | EventsCalendarSection
    | InfoBoxSection
    | RegistrySection
)
Section = KnownSection | UnknownSection


# ---------------------------------------------------------------------------
# Documents and global chrome
# ---------------------------------------------------------------------------


@dc.dataclass(frozen=True, slots=True)
class SeoMeta:
    """Page-level metadata injected into the document head."""

    meta_title: str
    meta_description: str = ""
    keywords: str | None = None
    share_image: str | None = None


@dc.dataclass(frozen=True, slots=True)
class PageDocument:
    """One CMS page: unique slug, SEO block, and ordered sections."""

    slug: str
    title: str
    seo: SeoMeta
    sections: tuple[Section, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class SiteSettings:
    """Global settings document (``content/settings.json``)."""

    site_name: str = "Valentina & Pedro Juan"
    contact_email: str | None = None
    location: str = "Sevilla, España"
    social_proof_count: str = "100+"
    bride_name: str = "Valentina"
    groom_name: str = "Pedro Juan"
    wedding_date: str | None = None
    venue_name: str | None = None


@dc.dataclass(frozen=True, slots=True)
class HeaderContent:
    """Global header chrome (``content/header.json``)."""

    brand_text: str = "V & P"
    nav_items: tuple[NavItem, ...] = ()
    cta_button_text: str = "RSVP"


@dc.dataclass(frozen=True, slots=True)
class FooterContent:
    """Global footer chrome (``content/footer.json``)."""

    copyright: str = ""
    newsletter_title: str = ""
    newsletter_description: str = ""
    newsletter_button_text: str = ""
    quick_links: tuple[QuickLink, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class ContentStore:
    """Immutable snapshot of every content document loaded at startup."""

    pages: cabc.Mapping[str, PageDocument]
    settings: SiteSettings = dc.field(default_factory=SiteSettings)
    header: HeaderContent = dc.field(default_factory=HeaderContent)
    footer: FooterContent = dc.field(default_factory=FooterContent)
    audience_segments: tuple[AudienceSegment, ...] = ()


__all__ = [
    "AudienceSegment",
    "CalendarEvent",
    "Card",
    "CardGridSection",
    "ContentImageSection",
    "ContentStore",
    "CountdownSection",
    "CtaSection",
    "EmailSignupSection",
    "EventDetailsSection",
    "EventDetailsWeddingSection",
    "EventsCalendarSection",
    "FaqSection",
    "FeatureItem",
    "FooterContent",
    "GuestResourcesSection",
    "HeaderContent",
    "HeroCenteredSection",
    "HeroLeftSection",
    "InfoBoxSection",
    "KnownSection",
    "MealOption",
    "NavItem",
    "PageDocument",
    "QuestionItem",
    "QuickLink",
    "Recommendation",
    "RegistryLink",
    "RegistrySection",
    "ResourceGroup",
    "RichTextSection",
    "RsvpFormSection",
    "Section",
    "SectionBase",
    "SeoMeta",
    "SiteSettings",
    "TimelineItem",
    "UnknownSection",
    "UseCase",
    "ValueCardsSection",
    "WeddingHeroSection",
]
