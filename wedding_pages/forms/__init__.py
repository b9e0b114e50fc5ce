"""Form validation, submission lifecycle, and delivery sinks."""

from .sinks import MailingListClient, StaticFormCollector
from .submission import (
    FormSubmission,
    SubmissionInFlightError,
    SubmissionSink,
    SubmissionStatus,
)
from .validation import (
    is_valid_email,
    validate_full_signup,
    validate_hero_signup,
    validate_partnership,
    validate_rsvp,
)

__all__ = [
    "FormSubmission",
    "MailingListClient",
    "StaticFormCollector",
    "SubmissionInFlightError",
    "SubmissionSink",
    "SubmissionStatus",
    "is_valid_email",
    "validate_full_signup",
    "validate_hero_signup",
    "validate_partnership",
    "validate_rsvp",
]
