"""
Keylight Intake - Core Logic

Headless form logic for the Keylight project intake form. Nothing in this
package touches HTML; the web adapter in ``web`` renders controller state.
"""

from .intake import (
    IntakeFormController,
    ValidationService,
    SubmissionClient,
    FormState,
    FormStep,
)

__all__ = [
    "IntakeFormController",
    "ValidationService",
    "SubmissionClient",
    "FormState",
    "FormStep",
]
