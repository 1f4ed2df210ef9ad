"""
Form Adapter - HTML Form Posts <-> Intake Controller

Reads posted HTML form fields into controller values and turns controller
state into the template context for the intake page. The template relies on
the following element IDs:

    intakeForm               the <form> element
    step-N                   container of step N
    <field>-options          radio option group of a field
    <field-with-dashes>-field  container of a conditional field
    nextBtn / backBtn        navigation buttons
    step-N-errors            inline errors of step N
    form-errors              summary block for form and submission errors
"""

from __future__ import annotations

from typing import Any, Mapping

from core.intake import (
    TOTAL_STEPS,
    ErrorKind,
    FieldDefinition,
    FieldKind,
    FormStep,
    IntakeFormController,
    fields_for_step,
)
from utils.formatting import format_errors, format_step_label


# =============================================================================
# Posted Values
# =============================================================================


def read_step_values(step: int, posted: Mapping[str, Any]) -> dict[str, Any]:
    """
    Extract the values of one step's fields from a form post.

    Browsers omit unchecked checkboxes and unselected radio groups, so a
    missing checkbox is read as False and a missing radio group is skipped.
    """
    values: dict[str, Any] = {}
    for definition in fields_for_step(step):
        if definition.kind == FieldKind.CHECKBOX:
            values[definition.name] = definition.name in posted
        elif definition.name in posted:
            values[definition.name] = posted[definition.name]
    return values


# =============================================================================
# Template Context
# =============================================================================


def field_container_id(field_name: str) -> str:
    """Container ID of a field, e.g. lot_address -> lot-address-field."""
    return f"{field_name.replace('_', '-')}-field"


def field_context(
    definition: FieldDefinition,
    controller: IntakeFormController,
    visibility: Mapping[str, bool],
) -> dict[str, Any]:
    value = controller.form_state.get(definition.name)
    return {
        "name": definition.name,
        "id": definition.name,
        "label": definition.label,
        "kind": definition.kind.value,
        "placeholder": definition.placeholder,
        "required": definition.name in controller.validator.required_fields,
        "value": "" if value is None or isinstance(value, bool) else value,
        "checked": value is True,
        "visible": visibility.get(definition.name, True),
        "container_id": field_container_id(definition.name),
        "options_id": f"{definition.name}-options",
        "options": [
            {
                "id": f"{definition.name}_{option.value}",
                "value": option.value,
                "label": option.label,
                "selected": option.value == value,
            }
            for option in definition.options
        ],
    }


def build_form_context(controller: IntakeFormController) -> dict[str, Any]:
    """Everything the intake template needs to render the current step."""
    visibility = controller.visibility
    buttons = controller.buttons
    current = int(controller.current_step)

    steps = [
        {
            "number": int(step),
            "id": f"step-{int(step)}",
            "title": step.title,
            "active": int(step) == current,
            "fields": [
                field_context(definition, controller, visibility)
                for definition in fields_for_step(step)
            ],
            "errors_id": f"step-{int(step)}-errors",
        }
        for step in FormStep
    ]

    inline_errors = controller.errors if controller.error_kind == ErrorKind.STEP else []
    summary_errors = controller.errors if controller.error_kind in (
        ErrorKind.FORM,
        ErrorKind.SUBMISSION,
    ) else []

    return {
        "current_step": current,
        "step_label": format_step_label(current, TOTAL_STEPS),
        "steps": steps,
        "progress": [
            {"step": index, "class_name": f"progress-dot {status.value}"}
            for index, status in enumerate(controller.progress, start=1)
        ],
        "buttons": buttons,
        "inline_errors": inline_errors,
        "inline_error_text": format_errors(inline_errors),
        "summary_errors": summary_errors,
        "review": controller.review().rows() if current == FormStep.REVIEW_SUBMIT else [],
    }


def build_status(controller: IntakeFormController) -> dict[str, Any]:
    """JSON snapshot of the controller, for scripts and diagnostics."""
    return {
        "current_step": int(controller.current_step),
        "total_steps": TOTAL_STEPS,
        "submitted": controller.submitted,
        "is_submitting": controller.is_submitting,
        "progress": [status.value for status in controller.progress],
        "visibility": controller.visibility,
        "errors": list(controller.errors),
        "error_kind": controller.error_kind.value if controller.error_kind else None,
        "form_state": controller.form_state.to_dict(),
    }
