"""Registration record model"""

import enum
import re
import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = re.compile(r"^\S+@\S+$", re.IGNORECASE)


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class GuardianRelationship(str, enum.Enum):
    PARENT = "parent"
    GUARDIAN = "guardian"
    GRANDPARENT = "grandparent"
    OTHER = "other"


GUARDIAN_FIELDS = (
    "guardian_first_name",
    "guardian_last_name",
    "guardian_email",
    "guardian_phone",
    "guardian_relationship",
)


def new_registration_id() -> str:
    return str(uuid.uuid4())


class Registration(BaseModel):
    """A submitted registration.

    Attributes are snake_case; the JSON form uses the camelCase names of the
    stored blob and the remote collection endpoint (``firstName``,
    ``isUnder18``, ``registeredAt``...). Records are immutable once built.
    ``id`` and ``registered_at`` are assigned once at submission and must be
    present in every stored or fetched record.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    id: str = Field(min_length=1)

    # Personal
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str
    phone: str = Field(min_length=1)
    date_of_birth: date
    gender: Gender
    corps_name: str = Field(min_length=1)

    # Guardian, only for minors
    guardian_first_name: Optional[str] = None
    guardian_last_name: Optional[str] = None
    guardian_email: Optional[str] = None
    guardian_phone: Optional[str] = None
    guardian_relationship: Optional[GuardianRelationship] = None

    # Emergency contact
    emergency_name: str = Field(min_length=1)
    emergency_phone: str = Field(min_length=1)
    emergency_relationship: str = Field(min_length=1)

    # Medical
    medical_conditions: Optional[str] = None
    medications: Optional[str] = None
    allergies: Optional[str] = None

    # Consent
    agreed_to_terms: bool
    photo_video_consent: Optional[bool] = None

    is_under18: bool = Field(default=False, alias="isUnder18")
    registered_at: datetime

    @field_validator("email", "guardian_email")
    @classmethod
    def _check_email(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email address")
        return value

    @field_validator("photo_video_consent", mode="before")
    @classmethod
    def _parse_consent(cls, value):
        # The stored blob uses "yes"/"no" strings
        if isinstance(value, str):
            if not value.strip():
                return None
            return value.strip().lower() in ("yes", "true", "on", "1")
        return value

    @field_validator(
        "guardian_first_name",
        "guardian_last_name",
        "guardian_email",
        "guardian_phone",
        "guardian_relationship",
        "medical_conditions",
        "medications",
        "allergies",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _check_invariants(self):
        if not self.agreed_to_terms:
            raise ValueError("agreed_to_terms must be true")
        if self.is_under18:
            missing = [name for name in GUARDIAN_FIELDS if not getattr(self, name)]
            if missing:
                raise ValueError(
                    f"guardian information is required for minors: {', '.join(missing)}"
                )
        return self

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def has_guardian(self) -> bool:
        return all(getattr(self, name) for name in GUARDIAN_FIELDS)

    def to_json_dict(self) -> dict:
        """Serialize to the camelCase JSON shape of the collection blob"""
        return self.model_dump(mode="json", by_alias=True)
