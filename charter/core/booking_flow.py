"""
Booking submission flow for a single yacht.

    collecting-details -> collecting-confirmation -> submitting -> submitted | failed

The flow owns the draft while the visitor fills it in. Submitting hands the draft
to an injected coroutine (an HTTP call from the UI, or a service call on the
server) exactly once; nothing is retried.
"""

import enum
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from charter.core.booking_draft import BookingDraft, validate_booking_draft
from charter.core.exceptions import BusinessRuleViolationError, FieldValidationError
from charter.core.i18n import message
from charter.core.pricing import preview_total_price, select_options
from charter.core.whatsapp import SelectedExtras, build_whatsapp_message, build_whatsapp_url

logger = logging.getLogger(__name__)


class BookingStep(enum.Enum):
    COLLECTING_DETAILS = "collecting-details"
    COLLECTING_CONFIRMATION = "collecting-confirmation"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    FAILED = "failed"


EDITABLE_FIELDS = ("customer_name", "customer_email", "customer_phone", "hours")


class BookingFlow:
    def __init__(
        self, yacht: Any, available_options: Sequence[Any] = (), language: str = "en"
    ):
        self.yacht = yacht
        self.available_options = list(available_options)
        self.language = language
        self.draft = BookingDraft()
        self.step = BookingStep.COLLECTING_DETAILS
        self.field_errors: Dict[str, str] = {}
        self.error_message: Optional[str] = None
        self.result: Any = None

    def _require_step(self, *steps: BookingStep) -> None:
        if self.step not in steps:
            raise BusinessRuleViolationError(
                "booking_flow_transition",
                f"Cannot do this while the booking is {self.step.value}",
                {"step": self.step.value},
            )

    @property
    def total_price(self):
        """Current total, or None while the hours are not bookable."""
        return preview_total_price(
            self.yacht,
            self.draft.hours,
            self.draft.selected_option_ids,
            self.available_options,
        )

    @property
    def selected_options(self):
        return select_options(self.draft.selected_option_ids, self.available_options)

    def update_details(self, **changes) -> None:
        self._require_step(BookingStep.COLLECTING_DETAILS)
        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                raise ValueError(f"Unknown booking field: {name}")
            setattr(self.draft, name, value)

    def toggle_option(self, option_id: int) -> None:
        self._require_step(BookingStep.COLLECTING_DETAILS)
        self.draft.toggle_option(option_id)

    def proceed(self) -> bool:
        """Move to confirmation if the draft is valid; otherwise keep the field errors."""
        self._require_step(BookingStep.COLLECTING_DETAILS)
        validation = validate_booking_draft(self.draft, self.language)
        self.field_errors = validation.field_errors
        if not validation.valid:
            return False
        self.step = BookingStep.COLLECTING_CONFIRMATION
        return True

    def back(self) -> None:
        self._require_step(BookingStep.COLLECTING_CONFIRMATION, BookingStep.FAILED)
        self.step = BookingStep.COLLECTING_DETAILS
        self.error_message = None

    async def submit(self, submitter: Callable[[BookingDraft], Awaitable[Any]]) -> Any:
        """
        Hand the draft to ``submitter``.

        On success the draft is cleared and the submitter's result returned. On
        failure the flow is left in ``failed`` with a message for the visitor; the
        underlying error is logged, not shown.
        """
        self._require_step(BookingStep.COLLECTING_CONFIRMATION)
        self.step = BookingStep.SUBMITTING
        try:
            result = await submitter(self.draft.cleaned())
        except Exception:
            logger.exception("Booking submission for yacht %s failed", getattr(self.yacht, "id", None))
            self.step = BookingStep.FAILED
            self.error_message = message("booking_failed", self.language)
            return None

        self.result = result
        self.step = BookingStep.SUBMITTED
        self.draft = BookingDraft()
        self.field_errors = {}
        return result

    def whatsapp_url(
        self, whatsapp_number: Optional[str], extras: Optional[SelectedExtras] = None
    ) -> str:
        """Pre-filled chat link for the current draft; does not change the step."""
        validation = validate_booking_draft(self.draft, self.language)
        self.field_errors = validation.field_errors
        if not validation.valid:
            raise FieldValidationError(
                validation.field_errors, message("invalid_input", self.language)
            )
        encoded = build_whatsapp_message(
            self.draft,
            self.total_price,
            self.selected_options,
            extras,
            yacht=self.yacht,
            language=self.language,
        )
        return build_whatsapp_url(whatsapp_number, encoded)

    def reset(self) -> None:
        self.draft = BookingDraft()
        self.step = BookingStep.COLLECTING_DETAILS
        self.field_errors = {}
        self.error_message = None
        self.result = None
