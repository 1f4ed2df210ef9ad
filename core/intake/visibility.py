"""
Derived form views.

Pure functions over the step pointer and FormState. They are re-evaluated
after every mutation instead of being stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from core.intake.schema import TOTAL_STEPS, LandStatus


class ProgressStatus(Enum):
    """State of one progress dot."""

    COMPLETED = "completed"
    ACTIVE = "active"
    PENDING = "pending"


def progress_indicator(current_step: int, total: int = TOTAL_STEPS) -> list[ProgressStatus]:
    """Status of each step's progress dot, first step first."""
    statuses = []
    for step in range(1, total + 1):
        if step < current_step:
            statuses.append(ProgressStatus.COMPLETED)
        elif step == current_step:
            statuses.append(ProgressStatus.ACTIVE)
        else:
            statuses.append(ProgressStatus.PENDING)
    return statuses


def field_visibility(form_state: Mapping[str, Any]) -> dict[str, bool]:
    """Visibility of the conditional land-location fields."""
    land_status = form_state.get("land_status")
    needs_land = land_status == LandStatus.NEED_LAND.value
    return {
        "lot_address": land_status == LandStatus.OWN_LAND.value,
        "needs_help_finding_land": needs_land,
        "preferred_area_description": (
            needs_land and form_state.get("needs_help_finding_land") is True
        ),
    }


@dataclass(frozen=True)
class ButtonState:
    """Label and availability of the navigation buttons."""

    next_label: str
    next_is_submit: bool
    back_visible: bool
    disabled: bool


def button_state(current_step: int, is_submitting: bool, total: int = TOTAL_STEPS) -> ButtonState:
    is_last = current_step == total
    if is_submitting:
        next_label = "Submitting..."
    elif is_last:
        next_label = "Submit Application"
    else:
        next_label = "Next"
    return ButtonState(
        next_label=next_label,
        next_is_submit=is_last,
        back_visible=current_step > 1,
        disabled=is_submitting,
    )
