"""Field validation for every visitor-facing form.

Each validator takes the raw submitted fields and returns a cleaned copy or
raises :class:`~wedding_pages.errors.ValidationError` with one inline message
per offending field. Validation always runs before any network call.
"""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ

from .._constants import EMAIL_PATTERN, PARTNERSHIP_TYPES, SUBSCRIBER_CATEGORIES
from ..errors import ValidationError

Fields = dict[str, str]
Validator = typ.Callable[[cabc.Mapping[str, typ.Any]], Fields]

EMAIL_RE = re.compile(EMAIL_PATTERN)
ATTENDANCE_CHOICES = ("yes", "no")
MAX_GUESTS = 3

MSG_REQUIRED = "Por favor completa todos los campos requeridos"
MSG_NAME = "Por favor ingresa tu nombre completo"
MSG_EMAIL = "Por favor ingresa un correo electrónico válido"
MSG_ATTENDANCE = "Por favor selecciona una opción"
MSG_GUESTS = f"El número de acompañantes debe estar entre 0 y {MAX_GUESTS}"
MSG_CHOICE = "Por favor selecciona una opción válida"


def is_valid_email(value: str) -> bool:
    """Return True when ``value`` has a basic ``local@domain.tld`` shape."""
    return bool(EMAIL_RE.match(value))


def _email_rule() -> dict[str, typ.Any]:
    return {"field": "email", "email": True, "message": MSG_EMAIL}


# Checks the page script runs before sending each rendered form. Every rule
# names a field the matching ``validate_*`` function rejects.
CLIENT_RULES: dict[str, tuple[dict[str, typ.Any], ...]] = {
    "hero-signup": (_email_rule(),),
    "full-signup": (
        {"field": "firstName", "minLength": 1, "message": MSG_REQUIRED},
        _email_rule(),
    ),
    "partnership": (
        {"field": "name", "minLength": 1, "message": MSG_REQUIRED},
        _email_rule(),
        {
            "field": "partnershipType",
            "choices": list(PARTNERSHIP_TYPES),
            "message": MSG_CHOICE,
        },
    ),
    "rsvp": (
        {"field": "name", "minLength": 2, "message": MSG_NAME},
        _email_rule(),
        {
            "field": "attendance",
            "choices": list(ATTENDANCE_CHOICES),
            "message": MSG_ATTENDANCE,
        },
    ),
}


def _clean(fields: cabc.Mapping[str, typ.Any]) -> Fields:
    return {
        str(key): str(value).strip()
        for key, value in fields.items()
        if value is not None
    }


def _check_email(cleaned: Fields, errors: dict[str, str]) -> None:
    email = cleaned.get("email", "")
    if not email:
        errors["email"] = MSG_REQUIRED
    elif not is_valid_email(email):
        errors["email"] = MSG_EMAIL


def _raise_if(errors: dict[str, str]) -> None:
    if errors:
        raise ValidationError(errors)


def validate_hero_signup(fields: cabc.Mapping[str, typ.Any]) -> Fields:
    """Validate the single-field hero signup form."""
    cleaned = _clean(fields)
    errors: dict[str, str] = {}
    _check_email(cleaned, errors)
    _raise_if(errors)
    return {"email": cleaned["email"]}


def validate_full_signup(fields: cabc.Mapping[str, typ.Any]) -> Fields:
    """Validate the full signup form (first name, email, optional category)."""
    cleaned = _clean(fields)
    errors: dict[str, str] = {}
    if not cleaned.get("firstName"):
        errors["firstName"] = MSG_REQUIRED
    _check_email(cleaned, errors)
    category = cleaned.get("category", "")
    if category and category not in SUBSCRIBER_CATEGORIES:
        errors["category"] = MSG_CHOICE
    _raise_if(errors)
    result = {"email": cleaned["email"], "firstName": cleaned["firstName"]}
    if category:
        result["category"] = category
    return result


def validate_partnership(fields: cabc.Mapping[str, typ.Any]) -> Fields:
    """Validate the partnership inquiry dialog."""
    cleaned = _clean(fields)
    errors: dict[str, str] = {}
    if not cleaned.get("name"):
        errors["name"] = MSG_REQUIRED
    _check_email(cleaned, errors)
    partnership_type = cleaned.get("partnershipType", "")
    if not partnership_type:
        errors["partnershipType"] = MSG_REQUIRED
    elif partnership_type not in PARTNERSHIP_TYPES:
        errors["partnershipType"] = MSG_CHOICE
    _raise_if(errors)
    result = {
        "name": cleaned["name"],
        "email": cleaned["email"],
        "partnershipType": partnership_type,
    }
    for optional in ("organization", "message"):
        if cleaned.get(optional):
            result[optional] = cleaned[optional]
    return result


def validate_rsvp(fields: cabc.Mapping[str, typ.Any]) -> Fields:
    """Validate the RSVP form.

    ``name`` (two characters or more), a valid ``email`` and an ``attendance``
    choice of ``yes`` or ``no`` are required. ``guests`` must be an integer
    between 0 and 3 when given; ``dietary``, ``mealChoice`` and ``message``
    pass through when non-empty.
    """
    cleaned = _clean(fields)
    errors: dict[str, str] = {}
    if len(cleaned.get("name", "")) < 2:
        errors["name"] = MSG_NAME
    _check_email(cleaned, errors)
    attendance = cleaned.get("attendance", "")
    if attendance not in ATTENDANCE_CHOICES:
        errors["attendance"] = MSG_ATTENDANCE
    guests = cleaned.get("guests", "")
    if guests:
        try:
            count = int(guests)
        except ValueError:
            count = -1
        if not 0 <= count <= MAX_GUESTS:
            errors["guests"] = MSG_GUESTS
    _raise_if(errors)
    result = {
        "name": cleaned["name"],
        "email": cleaned["email"],
        "attendance": attendance,
    }
    if guests:
        result["guests"] = str(int(guests))
    for optional in ("mealChoice", "dietary", "message"):
        if cleaned.get(optional):
            result[optional] = cleaned[optional]
    return result


__all__ = [
    "ATTENDANCE_CHOICES",
    "CLIENT_RULES",
    "EMAIL_RE",
    "MAX_GUESTS",
    "Fields",
    "Validator",
    "is_valid_email",
    "validate_full_signup",
    "validate_hero_signup",
    "validate_partnership",
    "validate_rsvp",
]
