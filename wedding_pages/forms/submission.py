"""Per-form submission lifecycle.

A :class:`FormSubmission` owns the state of one rendered form:
``idle -> submitting -> success | error``. Validation failures never leave
the current state and never reach the sink. A failed send lands in ``error``
and waits for the visitor to resubmit; nothing is retried automatically. A
successful send clears the fields and keeps the confirmation visible for the
form's dwell time, after which :meth:`FormSubmission.tick` returns the form to
``idle``.
"""

from __future__ import annotations

import enum
import logging
import time
import typing as typ

from .._constants import INLINE_DWELL_SECONDS
from ..errors import UpstreamError, ValidationError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .validation import Fields, Validator

logger = logging.getLogger(__name__)


class SubmissionStatus(enum.StrEnum):
    """Lifecycle states of a form submission."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class SubmissionInFlightError(RuntimeError):
    """Raised when a form is submitted again while a send is in flight."""


class SubmissionSink(typ.Protocol):
    """Destination of validated form fields."""

    def send(self, form_name: str, fields: Fields) -> str | None:
        """Deliver ``fields`` and return an optional confirmation message.

        Implementations raise :class:`UpstreamError` on network failure or a
        non-success status.
        """
        ...


class FormSubmission:
    """Drive one form through validation, sending and confirmation.

    Parameters
    ----------
    form_name : str
        Discriminant sent with the fields (for example ``"rsvp"``).
    sink : SubmissionSink
        Collector or mailing-list client receiving validated fields.
    validator : Validator
        Field validator raising ``ValidationError``.
    dwell : float, optional
        Seconds the success confirmation stays visible. Defaults to the
        inline dwell time.
    clock : Callable[[], float], optional
        Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        form_name: str,
        sink: SubmissionSink,
        validator: Validator,
        *,
        dwell: float = INLINE_DWELL_SECONDS,
        clock: typ.Callable[[], float] = time.monotonic,
    ) -> None:
        self.form_name = form_name
        self.sink = sink
        self.validator = validator
        self.dwell = dwell
        self._clock = clock
        self.status = SubmissionStatus.IDLE
        self.history: list[SubmissionStatus] = [SubmissionStatus.IDLE]
        self.fields: dict[str, str] = {}
        self.field_errors: dict[str, str] = {}
        self.error: str | None = None
        self.message: str | None = None
        self.success_at: float | None = None

    def _transition(self, status: SubmissionStatus) -> None:
        self.status = status
        self.history.append(status)

    def update(self, **fields: str) -> None:
        """Record visitor input without submitting it."""
        self.fields.update(fields)

    def submit(
        self, fields: cabc.Mapping[str, str] | None = None
    ) -> SubmissionStatus:
        """Validate and send the form, returning the resulting status.

        Raises
        ------
        SubmissionInFlightError
            If a previous submission has not finished.
        """
        if self.status is SubmissionStatus.SUBMITTING:
            msg = f"Form '{self.form_name}' is already submitting"
            raise SubmissionInFlightError(msg)
        if fields is not None:
            self.fields = dict(fields)
        try:
            cleaned = self.validator(self.fields)
        except ValidationError as exc:
            self.field_errors = exc.field_errors
            return self.status

        self.field_errors = {}
        self.error = None
        if self.status is SubmissionStatus.SUCCESS:
            self._transition(SubmissionStatus.IDLE)
        self._transition(SubmissionStatus.SUBMITTING)
        try:
            self.message = self.sink.send(self.form_name, cleaned)
        except UpstreamError as exc:
            logger.warning(
                "Submission of form '%s' failed: %s", self.form_name, exc.detail or exc
            )
            self.error = str(exc)
            self._transition(SubmissionStatus.ERROR)
            return self.status

        self.fields = {}
        self.success_at = self._clock()
        self._transition(SubmissionStatus.SUCCESS)
        return self.status

    def tick(self) -> SubmissionStatus:
        """Return to ``idle`` once the success dwell time has elapsed."""
        if (
            self.status is SubmissionStatus.SUCCESS
            and self.success_at is not None
            and self._clock() - self.success_at >= self.dwell
        ):
            self.success_at = None
            self.message = None
            self._transition(SubmissionStatus.IDLE)
        return self.status


__all__ = [
    "FormSubmission",
    "SubmissionInFlightError",
    "SubmissionSink",
    "SubmissionStatus",
]
