"""
Keylight Intake - Project Intake Form Module

Five-step lead intake for homebuyers and developers:
1. Contact details
2. Project type and financing
3. Land and location
4. Budget, timeline and description
5. Review and submit

The controller, validation service and submission client are independent
units; the controller receives the other two at construction time.
"""

from core.intake.schema import (
    FormStep,
    FieldKind,
    LandStatus,
    FieldOption,
    FieldDefinition,
    FormState,
    FIELD_DEFINITIONS,
    FIELDS_BY_NAME,
    KNOWN_FIELDS,
    REQUIRED_FIELDS,
    STEP_FIELDS,
    TOTAL_STEPS,
    fields_for_step,
)
from core.intake.validation import (
    ValidationService,
    ValidationResult,
)
from core.intake.client import (
    SubmissionClient,
    SubmissionSuccess,
    SubmissionFailure,
    SubmissionResult,
    HealthCheckResult,
)
from core.intake.visibility import (
    ProgressStatus,
    ButtonState,
    progress_indicator,
    field_visibility,
    button_state,
)
from core.intake.review import (
    ReviewSummary,
    build_review_summary,
)
from core.intake.controller import (
    IntakeFormController,
    ErrorKind,
)

__all__ = [
    # Schema
    "FormStep",
    "FieldKind",
    "LandStatus",
    "FieldOption",
    "FieldDefinition",
    "FormState",
    "FIELD_DEFINITIONS",
    "FIELDS_BY_NAME",
    "KNOWN_FIELDS",
    "REQUIRED_FIELDS",
    "STEP_FIELDS",
    "TOTAL_STEPS",
    "fields_for_step",
    # Validation
    "ValidationService",
    "ValidationResult",
    # Submission
    "SubmissionClient",
    "SubmissionSuccess",
    "SubmissionFailure",
    "SubmissionResult",
    "HealthCheckResult",
    # Derived views
    "ProgressStatus",
    "ButtonState",
    "progress_indicator",
    "field_visibility",
    "button_state",
    "ReviewSummary",
    "build_review_summary",
    # Controller
    "IntakeFormController",
    "ErrorKind",
]
