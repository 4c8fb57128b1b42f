"""Registration wizard state model"""

import enum
from typing import Any

from pydantic import BaseModel, Field


class WizardStep(enum.IntEnum):
    PERSONAL = 1
    GUARDIAN = 2
    EMERGENCY = 3
    MEDICAL = 4
    REVIEW = 5
    # Terminal state after a successful submission
    SUBMITTED = 6


FIRST_STEP = WizardStep.PERSONAL
LAST_STEP = WizardStep.REVIEW

STEP_LABELS = {
    WizardStep.PERSONAL: "Personal",
    WizardStep.GUARDIAN: "Guardian",
    WizardStep.EMERGENCY: "Emergency",
    WizardStep.MEDICAL: "Medical",
    WizardStep.REVIEW: "Review",
}

# Every input rendered on a step, required or not
STEP_FIELDS = {
    WizardStep.PERSONAL: (
        "first_name",
        "last_name",
        "email",
        "phone",
        "date_of_birth",
        "gender",
        "corps_name",
    ),
    WizardStep.GUARDIAN: (
        "guardian_first_name",
        "guardian_last_name",
        "guardian_email",
        "guardian_phone",
        "guardian_relationship",
    ),
    WizardStep.EMERGENCY: (
        "emergency_name",
        "emergency_phone",
        "emergency_relationship",
    ),
    WizardStep.MEDICAL: ("medical_conditions", "medications", "allergies"),
    WizardStep.REVIEW: ("agreed_to_terms", "photo_video_consent"),
}

CHECKBOX_FIELDS = frozenset({"agreed_to_terms"})


class WizardState(BaseModel):
    """Progress of one registration wizard, persisted between requests"""

    current_step: WizardStep = FIRST_STEP
    # Latched when step 1 passes validation, not recomputed on later edits
    is_under18: bool = False
    field_errors: set[str] = Field(default_factory=set)
    values: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_submitted(self) -> bool:
        return self.current_step == WizardStep.SUBMITTED
