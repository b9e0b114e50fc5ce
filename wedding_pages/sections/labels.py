"""Friendly names and editor hints for every registered section type."""

from __future__ import annotations

SECTION_LABELS: dict[str, str] = {
    "hero-left": "Hero (Left Aligned)",
    "hero-centered": "Hero (Centered)",
    "content-image": "Text Block with Image",
    "card-grid": "Card Grid",
    "value-cards": "Value Cards",
    "cta-section": "Call to Action",
    "email-signup": "Email Signup Form",
    "event-details": "Event Details",
    "rich-text": "Rich Text Block",
    "wedding-hero": "Wedding Hero - Couple Names",
    "countdown": "Countdown Timer",
    "rsvp-form": "RSVP Form",
    "faq": "FAQ Section",
    "info-box": "Information Box",
    "registry": "Gift Registry",
    "guest-resources": "Guest Resources",
    "event-details-wedding": "Event Details (Wedding)",
    "events-calendar": "Events Calendar",
}

SECTION_DESCRIPTIONS: dict[str, str] = {
    "hero-left": (
        "Large hero banner with left-aligned text and optional email signup form"
    ),
    "hero-centered": (
        "Large hero banner with centered text and CTA button - great for event pages"
    ),
    "content-image": "Text content with bullet points and an image on either side",
    "card-grid": "Grid of cards with emoji, title, description, and optional badge",
    "value-cards": "Grid of value proposition cards with emoji icons",
    "cta-section": "Call-to-action section with description and button",
    "email-signup": (
        "Full email signup form with name, email, and optional segmentation"
    ),
    "event-details": (
        "Event info card showing date, time, location, price, and "
        "registration deadline"
    ),
    "rich-text": "Flexible rich text content area for custom markdown content",
    "wedding-hero": "Full-screen hero with the couple's names, date and venue",
    "countdown": "Live countdown to the wedding date",
    "rsvp-form": "Attendance confirmation form with meal and dietary options",
    "faq": "Accordion of frequently asked questions",
    "info-box": "Highlighted notice with an icon and markdown body",
    "registry": "Gift registry links with an optional cash gift message",
    "guest-resources": "Travel, lodging and transport recommendations for guests",
    "event-details-wedding": "Wedding-day timeline with venue, parking and transport",
    "events-calendar": "List of related events with add-to-calendar downloads",
}

__all__ = ["SECTION_DESCRIPTIONS", "SECTION_LABELS"]
