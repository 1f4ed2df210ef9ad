"""
Review summary for the final step.

Turns stored option values back into their display labels so the applicant
can check their answers before submitting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from core.intake.schema import FIELDS_BY_NAME, LandStatus

NOT_SPECIFIED = "Not specified"


@dataclass(frozen=True)
class ReviewSummary:
    """Display values shown on the review step."""

    name: str
    email: str
    phone: str
    company: str
    buyer_category: str
    financing: str
    land_status: str
    location: str
    budget: str
    timeline: str
    description: str

    def rows(self) -> list[tuple[str, str]]:
        """(label, value) pairs in display order."""
        return [
            ("Name", self.name),
            ("Email", self.email),
            ("Phone", self.phone),
            ("Company", self.company),
            ("Buyer Category", self.buyer_category),
            ("Financing", self.financing),
            ("Land Status", self.land_status),
            ("Location", self.location),
            ("Build Budget", self.budget),
            ("Timeline", self.timeline),
            ("Project Description", self.description),
        ]


def option_label(field_name: str, value: Any) -> str:
    """Label for an option value; falls back to the raw value."""
    if value is None:
        return ""
    definition = FIELDS_BY_NAME.get(field_name)
    label = definition.option_label(value) if definition else None
    return label if label is not None else str(value)


def location_details(form_state: Mapping[str, Any]) -> str:
    land_status = form_state.get("land_status")
    if land_status == LandStatus.OWN_LAND.value:
        return form_state.get("lot_address") or NOT_SPECIFIED
    if land_status == LandStatus.NEED_LAND.value:
        area = form_state.get("preferred_area_description")
        if form_state.get("needs_help_finding_land") and area:
            return f"Help needed finding land in: {area}"
        return "Will find land independently"
    return NOT_SPECIFIED


def build_review_summary(form_state: Mapping[str, Any]) -> ReviewSummary:
    """Build the review step contents from the collected values."""
    return ReviewSummary(
        name=form_state.get("full_name") or "",
        email=form_state.get("email_address") or "",
        phone=form_state.get("phone_number") or "",
        company=form_state.get("company_name") or NOT_SPECIFIED,
        buyer_category=option_label("buyer_category", form_state.get("buyer_category")),
        financing=option_label("financing_plan", form_state.get("financing_plan")),
        land_status=option_label("land_status", form_state.get("land_status")),
        location=location_details(form_state),
        budget=option_label("build_budget", form_state.get("build_budget")),
        timeline=option_label("construction_timeline", form_state.get("construction_timeline")),
        description=form_state.get("project_description") or "",
    )
