"""
Intake Form Schema - Static Field Configuration

Defines the steps, fields, option lists and validation patterns of the
Keylight project intake form. Everything here is immutable module data,
loaded before any controller is created.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Final, Iterator, MutableMapping, Optional, Union


# =============================================================================
# Enums
# =============================================================================


class FormStep(IntEnum):
    """Steps of the intake form, in display order."""

    CONTACT = 1
    PROJECT_TYPE = 2
    LAND_LOCATION = 3
    PROJECT_DETAILS = 4
    REVIEW_SUBMIT = 5

    @property
    def title(self) -> str:
        return STEP_TITLES[self]


class FieldKind(Enum):
    """How a field is rendered and how its posted value is read."""

    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    TEXTAREA = "textarea"
    RADIO = "radio"
    SELECT = "select"
    CHECKBOX = "checkbox"


class LandStatus(Enum):
    """Values of the land_status field that drive conditional fields."""

    OWN_LAND = "own_land"
    NEED_LAND = "need_land"


# =============================================================================
# Options
# =============================================================================


@dataclass(frozen=True)
class FieldOption:
    """A selectable value and its display label."""

    value: str
    label: str


BUYER_CATEGORIES: Final[tuple[FieldOption, ...]] = (
    FieldOption("homebuyer", "I am a homebuyer"),
    FieldOption("developer", "I am a developer"),
)

FINANCING_PLANS: Final[tuple[FieldOption, ...]] = (
    FieldOption("self_funding", "I will be self-funding the build"),
    FieldOption("finance_build", "I intend to finance the build"),
)

LAND_STATUSES: Final[tuple[FieldOption, ...]] = (
    FieldOption(LandStatus.OWN_LAND.value, "Yes, I own land"),
    FieldOption(LandStatus.NEED_LAND.value, "No, I need to purchase land"),
)

BUILD_BUDGETS: Final[tuple[FieldOption, ...]] = (
    FieldOption("200k_250k", "$200,000 – $250,000"),
    FieldOption("250k_350k", "$250,000 – $350,000"),
    FieldOption("350k_400k", "$350,000 – $400,000"),
    FieldOption("400k_500k", "$400,000 – $500,000"),
    FieldOption("500k_plus", "$500,000+"),
)

CONSTRUCTION_TIMELINES: Final[tuple[FieldOption, ...]] = (
    FieldOption("less_than_3_months", "Less than 3 months"),
    FieldOption("3_to_6_months", "3 to 6 months"),
    FieldOption("6_to_12_months", "6 to 12 months"),
    FieldOption("more_than_12_months", "More than 12 months"),
)


# =============================================================================
# Field Definitions
# =============================================================================


@dataclass(frozen=True)
class FieldDefinition:
    """Static description of one form field."""

    name: str
    label: str
    kind: FieldKind
    step: FormStep
    options: tuple[FieldOption, ...] = ()
    placeholder: str = ""

    def option_label(self, value: object) -> Optional[str]:
        """Return the label for an option value, or None if not an option."""
        for option in self.options:
            if option.value == value:
                return option.label
        return None


FIELD_DEFINITIONS: Final[tuple[FieldDefinition, ...]] = (
    # Step 1 - contact
    FieldDefinition("full_name", "Full Name", FieldKind.TEXT, FormStep.CONTACT),
    FieldDefinition("email_address", "Email Address", FieldKind.EMAIL, FormStep.CONTACT),
    FieldDefinition("phone_number", "Phone Number", FieldKind.TEL, FormStep.CONTACT),
    FieldDefinition("company_name", "Company Name", FieldKind.TEXT, FormStep.CONTACT),
    # Step 2 - project type
    FieldDefinition(
        "buyer_category", "Buyer Category", FieldKind.RADIO,
        FormStep.PROJECT_TYPE, BUYER_CATEGORIES,
    ),
    FieldDefinition(
        "financing_plan", "Financing Plan", FieldKind.RADIO,
        FormStep.PROJECT_TYPE, FINANCING_PLANS,
    ),
    # Step 3 - land and location
    FieldDefinition(
        "land_status", "Land Status", FieldKind.RADIO,
        FormStep.LAND_LOCATION, LAND_STATUSES,
    ),
    FieldDefinition("lot_address", "Lot Address", FieldKind.TEXT, FormStep.LAND_LOCATION),
    FieldDefinition(
        "needs_help_finding_land", "I need help finding land",
        FieldKind.CHECKBOX, FormStep.LAND_LOCATION,
    ),
    FieldDefinition(
        "preferred_area_description", "Preferred Area", FieldKind.TEXTAREA,
        FormStep.LAND_LOCATION,
        placeholder="Describe the area, suburb or region you would like to build in",
    ),
    # Step 4 - project details
    FieldDefinition(
        "build_budget", "Build Budget", FieldKind.SELECT,
        FormStep.PROJECT_DETAILS, BUILD_BUDGETS,
    ),
    FieldDefinition(
        "construction_timeline", "Construction Timeline", FieldKind.SELECT,
        FormStep.PROJECT_DETAILS, CONSTRUCTION_TIMELINES,
    ),
    FieldDefinition(
        "project_description", "Project Description", FieldKind.TEXTAREA,
        FormStep.PROJECT_DETAILS,
        placeholder="Tell us about the home you want to build",
    ),
)

FIELDS_BY_NAME: Final[dict[str, FieldDefinition]] = {
    definition.name: definition for definition in FIELD_DEFINITIONS
}

KNOWN_FIELDS: Final[frozenset[str]] = frozenset(FIELDS_BY_NAME)


# =============================================================================
# Steps and Rules
# =============================================================================

TOTAL_STEPS: Final = len(FormStep)

STEP_TITLES: Final[dict[FormStep, str]] = {
    FormStep.CONTACT: "Contact Information",
    FormStep.PROJECT_TYPE: "Project Type",
    FormStep.LAND_LOCATION: "Land & Location",
    FormStep.PROJECT_DETAILS: "Project Details",
    FormStep.REVIEW_SUBMIT: "Review & Submit",
}

# Fields validated before leaving each step, in declaration order
STEP_FIELDS: Final[dict[FormStep, tuple[str, ...]]] = {
    FormStep.CONTACT: ("full_name", "email_address", "phone_number"),
    FormStep.PROJECT_TYPE: ("buyer_category", "financing_plan"),
    FormStep.LAND_LOCATION: ("land_status", "lot_address", "preferred_area_description"),
    FormStep.PROJECT_DETAILS: ("build_budget", "construction_timeline", "project_description"),
    FormStep.REVIEW_SUBMIT: (),
}

# Always required, independent of step boundaries
REQUIRED_FIELDS: Final[tuple[str, ...]] = (
    "full_name",
    "email_address",
    "phone_number",
    "buyer_category",
    "financing_plan",
    "land_status",
    "build_budget",
    "construction_timeline",
    "project_description",
)

EMAIL_REGEX: Final = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_REGEX: Final = re.compile(r"[0-9\s\-()+.]{10,}")


def to_step(step: Union[int, FormStep]) -> FormStep:
    """Coerce an int to a FormStep, raising ValueError when out of range."""
    try:
        return FormStep(step)
    except ValueError:
        raise ValueError(f"Invalid step: {step} (expected 1-{TOTAL_STEPS})") from None


def fields_for_step(step: Union[int, FormStep]) -> tuple[FieldDefinition, ...]:
    """All fields rendered on a step, in declaration order."""
    step = to_step(step)
    return tuple(d for d in FIELD_DEFINITIONS if d.step == step)


def is_blank(value: object) -> bool:
    """True for missing, False, or whitespace-only values."""
    if value is None or value is False:
        return True
    return not str(value).strip()


# =============================================================================
# Form State
# =============================================================================

FieldValue = Union[str, bool]


@dataclass
class FormState(MutableMapping[str, FieldValue]):
    """
    Accumulated field values across all visited steps.

    Keys are restricted to KNOWN_FIELDS. Values are never removed except by
    clear(); deleting a single key is not supported.
    """

    values: dict[str, FieldValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in self.values:
            self._check_name(name)

    @staticmethod
    def _check_name(name: str) -> None:
        if name not in KNOWN_FIELDS:
            raise ValueError(f"Unknown form field: {name}")

    def __getitem__(self, name: str) -> FieldValue:
        return self.values[name]

    def __setitem__(self, name: str, value: FieldValue) -> None:
        self._check_name(name)
        self.values[name] = value

    def __delitem__(self, name: str) -> None:
        raise TypeError("FormState only shrinks on a full reset")

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def clear(self) -> None:
        self.values.clear()

    def to_dict(self) -> dict[str, FieldValue]:
        """Plain dict copy, used as the submission payload."""
        return dict(self.values)
