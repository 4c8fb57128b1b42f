"""Domain models for YC Registration"""

from yc_registration.models.registration import (
    Gender,
    GuardianRelationship,
    Registration,
)
from yc_registration.models.wizard import WizardState, WizardStep

__all__ = [
    "Registration",
    "Gender",
    "GuardianRelationship",
    "WizardState",
    "WizardStep",
]
