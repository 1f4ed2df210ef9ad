"""
Intake Form Controller - Step Navigation and Submission

Owns the step pointer and the accumulated FormState, and drives the form
through its steps:

    CONTACT -> PROJECT_TYPE -> LAND_LOCATION -> PROJECT_DETAILS
    -> REVIEW_SUBMIT -> submitted

The controller has no knowledge of HTML. A UI adapter feeds it posted values
and renders its derived views (progress, visibility, buttons, review).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping, Optional

from core.intake.client import SubmissionClient, SubmissionResult, SubmissionSuccess
from core.intake.review import ReviewSummary, build_review_summary
from core.intake.schema import (
    FIELDS_BY_NAME,
    TOTAL_STEPS,
    FieldKind,
    FieldValue,
    FormState,
    FormStep,
    fields_for_step,
)
from core.intake.validation import ValidationService
from core.intake.visibility import (
    ButtonState,
    ProgressStatus,
    button_state,
    field_visibility,
    progress_indicator,
)


logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """
    Where an error came from, which decides how it is displayed.

    STEP: field errors on the current step, shown inline
    FORM: final whole-form check, shown in a summary block
    SUBMISSION: backend or network failure, shown as one message
    """

    STEP = "step"
    FORM = "form"
    SUBMISSION = "submission"


def coerce_value(field_name: str, raw: Any) -> FieldValue:
    """Normalise a posted value to the FormState value type."""
    definition = FIELDS_BY_NAME[field_name]
    if definition.kind == FieldKind.CHECKBOX:
        if isinstance(raw, str):
            return raw.strip().lower() in ("on", "true", "1", "yes")
        return bool(raw)
    if raw is None:
        return ""
    return str(raw)


class IntakeFormController:
    """
    Multi-step intake form state machine.

    Args:
        validator: Rule evaluator for steps and the final form check
        client: Submission client used on the last step
    """

    def __init__(
        self,
        validator: Optional[ValidationService] = None,
        client: Optional[SubmissionClient] = None,
    ):
        self.validator = validator or ValidationService()
        self.client = client or SubmissionClient()
        self.current_step: int = FormStep.CONTACT
        self.form_state = FormState()
        self.is_submitting = False
        self.submitted = False
        self.errors: list[str] = []
        self.error_kind: Optional[ErrorKind] = None
        self.success_message: Optional[str] = None

    # =========================================================================
    # Field Collection
    # =========================================================================

    def collect(self, values: Mapping[str, Any]) -> None:
        """
        Merge posted values into FormState.

        Names outside the known field set are ignored, so buttons and other
        controls can be posted alongside the fields.
        """
        for name, raw in values.items():
            if name in FIELDS_BY_NAME:
                self.form_state[name] = coerce_value(name, raw)

    def update_field(self, name: str, value: Any) -> dict[str, bool]:
        """
        Record a single field change on the current step.

        Returns:
            The conditional-field visibility after the change

        Raises:
            ValueError: If the field is unknown or belongs to another step
        """
        if name not in FIELDS_BY_NAME:
            raise ValueError(f"Unknown form field: {name}")
        if name not in {d.name for d in fields_for_step(self.current_step)}:
            raise ValueError(f"Field {name} is not on step {int(self.current_step)}")
        self.form_state[name] = coerce_value(name, value)
        return self.visibility

    # =========================================================================
    # Transitions
    # =========================================================================

    async def advance(self, values: Optional[Mapping[str, Any]] = None) -> bool:
        """
        Handle the Next / Submit button.

        Args:
            values: Fields posted from the current step

        Returns:
            True if the pointer moved or the form was submitted
        """
        if self.is_submitting or self.submitted:
            logger.debug("Ignoring advance: submission in progress or complete")
            return False

        if values:
            self.collect(values)

        errors = self.validator.validate_step(self.current_step, self.form_state)
        if errors:
            logger.warning("Step %s validation failed: %s", int(self.current_step), errors)
            self._set_errors(ErrorKind.STEP, errors)
            return False

        if self.current_step < TOTAL_STEPS:
            self.show_step(self.current_step + 1)
            return True

        result = await self.submit()
        return result is not None and result.success

    def retreat(self) -> bool:
        """Handle the Back button. Going back never needs validation."""
        if self.is_submitting or self.submitted:
            return False
        if self.current_step <= FormStep.CONTACT:
            return False
        self.show_step(self.current_step - 1)
        return True

    async def submit(self) -> Optional[SubmissionResult]:
        """
        Validate the whole form and send it.

        Returns:
            The submission result, or None if nothing was sent
        """
        if self.is_submitting or self.submitted:
            logger.debug("Ignoring submit: submission in progress or complete")
            return None

        self.is_submitting = True
        try:
            errors = self.validator.validate_form(self.form_state)
            if errors:
                logger.warning("Final form validation failed: %s", errors)
                self._set_errors(ErrorKind.FORM, errors)
                return None

            self._clear_errors()
            result = await self.client.submit(self.form_state.to_dict())

            if isinstance(result, SubmissionSuccess):
                logger.info("Intake submission accepted")
                self.submitted = True
                self.success_message = result.message
            else:
                self._set_errors(ErrorKind.SUBMISSION, [result.error])
            return result
        finally:
            self.is_submitting = False

    def show_step(self, step: int) -> None:
        """Move the pointer, clearing any errors shown for the old step."""
        step = FormStep(step)
        logger.info("Intake form: step %s -> %s", int(self.current_step), int(step))
        self.current_step = step
        self._clear_errors()

    def reset(self) -> bool:
        """
        Start again from an empty form.

        Ignored while a submission is outstanding.
        """
        if self.is_submitting:
            logger.debug("Ignoring reset: submission in progress")
            return False
        self.form_state.clear()
        self.current_step = FormStep.CONTACT
        self.submitted = False
        self.success_message = None
        self._clear_errors()
        return True

    # =========================================================================
    # Derived Views
    # =========================================================================

    @property
    def step(self) -> FormStep:
        return FormStep(self.current_step)

    @property
    def progress(self) -> list[ProgressStatus]:
        return progress_indicator(self.current_step)

    @property
    def visibility(self) -> dict[str, bool]:
        return field_visibility(self.form_state)

    @property
    def buttons(self) -> ButtonState:
        return button_state(self.current_step, self.is_submitting)

    def review(self) -> ReviewSummary:
        return build_review_summary(self.form_state)

    # =========================================================================
    # Errors
    # =========================================================================

    def _set_errors(self, kind: ErrorKind, errors: list[str]) -> None:
        self.errors = list(errors)
        self.error_kind = kind

    def _clear_errors(self) -> None:
        self.errors = []
        self.error_kind = None
