"""
Intake Validation - Field, Step and Form Rules

Stateless rule evaluator for the intake form. Every check returns an ordered
list of human-readable error messages; an empty list means valid.

Errors are reported in field-declaration order. A failed required check
short-circuits the remaining checks for that field only.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Union

from core.intake.schema import (
    EMAIL_REGEX,
    FIELDS_BY_NAME,
    PHONE_REGEX,
    REQUIRED_FIELDS,
    STEP_FIELDS,
    FormStep,
    LandStatus,
    is_blank,
    to_step,
)


ValidationResult = list[str]


# =============================================================================
# Conditional Requirements
# =============================================================================


def requires_lot_address(form_state: Mapping[str, Any]) -> bool:
    """Lot address is needed once the buyer says they own land."""
    return form_state.get("land_status") == LandStatus.OWN_LAND.value


def requires_preferred_area(form_state: Mapping[str, Any]) -> bool:
    """Preferred area is needed when the buyer wants help finding land."""
    return (
        form_state.get("land_status") == LandStatus.NEED_LAND.value
        and form_state.get("needs_help_finding_land") is True
    )


CONDITIONAL_REQUIREMENTS = {
    "lot_address": (
        requires_lot_address,
        "Lot address is required when you own land",
    ),
    "preferred_area_description": (
        requires_preferred_area,
        "Preferred area description is required when you need help finding land",
    ),
}


# =============================================================================
# Validation Service
# =============================================================================


class ValidationService:
    """
    Evaluates the intake form rules.

    Holds no state beyond the static rule table, so one instance can be shared
    or a fresh one created per controller.
    """

    def __init__(
        self,
        required_fields: tuple[str, ...] = REQUIRED_FIELDS,
        step_fields: Optional[Mapping[FormStep, tuple[str, ...]]] = None,
    ):
        self.required_fields = required_fields
        self.step_fields = step_fields if step_fields is not None else STEP_FIELDS

    def validate_field(
        self,
        field_name: str,
        value: Any,
        form_state: Optional[Mapping[str, Any]] = None,
    ) -> ValidationResult:
        """
        Validate a single field value.

        Args:
            field_name: Name of the field being checked
            value: Current value (None when the field was never collected)
            form_state: Values of the other fields, for cross-field rules

        Returns:
            List of error messages, empty if valid
        """
        form_state = form_state or {}

        # === Required checks ===

        if field_name in self.required_fields and is_blank(value):
            return [f"{self.get_field_label(field_name)} is required"]

        conditional = CONDITIONAL_REQUIREMENTS.get(field_name)
        if conditional is not None and is_blank(value):
            applies, message = conditional
            if applies(form_state):
                return [message]

        if is_blank(value):
            return []

        # === Format checks ===

        errors: ValidationResult = []

        if field_name == "email_address" and not EMAIL_REGEX.fullmatch(str(value)):
            errors.append("Please enter a valid email address")

        if field_name == "phone_number" and not PHONE_REGEX.fullmatch(str(value)):
            errors.append("Please enter a valid phone number")

        return errors

    def validate_step(
        self,
        step: Union[int, FormStep],
        form_state: Mapping[str, Any],
    ) -> ValidationResult:
        """Validate every field owned by a step."""
        errors: ValidationResult = []
        for field_name in self.get_step_fields(step):
            errors.extend(
                self.validate_field(field_name, form_state.get(field_name), form_state)
            )
        return errors

    def validate_form(self, form_state: Mapping[str, Any]) -> ValidationResult:
        """Final check over the global required-field list."""
        errors: ValidationResult = []
        for field_name in self.required_fields:
            errors.extend(
                self.validate_field(field_name, form_state.get(field_name), form_state)
            )
        return errors

    def get_step_fields(self, step: Union[int, FormStep]) -> tuple[str, ...]:
        """Fields validated before leaving a step."""
        return self.step_fields.get(to_step(step), ())

    @staticmethod
    def get_field_label(field_name: str) -> str:
        """Human-readable label for a field name."""
        definition = FIELDS_BY_NAME.get(field_name)
        if definition is not None:
            return definition.label
        return re.sub(r"\b\w", lambda m: m.group(0).upper(), field_name.replace("_", " "))
