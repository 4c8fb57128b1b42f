"""Step sequencing for the registration wizard.

The wizard walks Personal -> Guardian -> Emergency -> Medical -> Review. The
guardian step is skipped in both directions for adults. Whether the
registrant is a minor is decided once, when the personal step passes
validation, and kept until that step is advanced again.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from yc_registration.backends.registration_store import RegistrationStore
from yc_registration.models.registration import (
    GUARDIAN_FIELDS,
    Registration,
    new_registration_id,
)
from yc_registration.models.wizard import (
    CHECKBOX_FIELDS,
    FIRST_STEP,
    LAST_STEP,
    STEP_FIELDS,
    STEP_LABELS,
    WizardState,
    WizardStep,
)
from yc_registration.services.age_classifier import is_minor
from yc_registration.services.step_validator import validate_step

logger = logging.getLogger(__name__)


class InvalidTransitionError(ValueError):
    """Raised for a move the wizard does not allow from its current state"""


@dataclass(frozen=True)
class StepProgress:
    number: int
    label: str
    status: str  # "completed", "active" or "inactive"


class WizardController:
    """Drives a WizardState through the registration steps"""

    def __init__(self, state: Optional[WizardState] = None, today: Optional[date] = None):
        self.state = state or WizardState()
        self.today = today

    @property
    def current_step(self) -> WizardStep:
        return self.state.current_step

    @property
    def is_under18(self) -> bool:
        return self.state.is_under18

    @property
    def field_errors(self) -> set[str]:
        return self.state.field_errors

    def _ensure_active(self):
        if self.state.is_submitted:
            raise InvalidTransitionError(
                "Registration already submitted; start a new registration"
            )

    def update_values(self, posted: Mapping[str, Any]) -> None:
        """Merge posted inputs of the current step into the form snapshot"""
        self._ensure_active()
        for field in STEP_FIELDS[self.state.current_step]:
            if field in CHECKBOX_FIELDS:
                # Unchecked boxes are simply not posted
                self.state.values[field] = _is_checked(posted.get(field))
            elif field in posted:
                value = posted.get(field)
                self.state.values[field] = value.strip() if isinstance(value, str) else value

    def advance(self) -> bool:
        """
        Validate the current step and move forward.

        Returns:
            True if the wizard moved, False if the step has invalid fields
            (they are recorded in field_errors)
        """
        self._ensure_active()
        step = self.state.current_step
        errors = validate_step(step, self.state.values, self.state.is_under18)
        if errors:
            self.state.field_errors = errors
            logger.debug(f"Step {step.name} incomplete: {sorted(errors)}")
            return False

        if step == WizardStep.PERSONAL:
            self.state.is_under18 = is_minor(
                self.state.values.get("date_of_birth"), self.today
            )

        self.state.field_errors = set()

        if step in (WizardStep.PERSONAL, WizardStep.GUARDIAN) and not self.state.is_under18:
            self.state.current_step = WizardStep.EMERGENCY
        else:
            self.state.current_step = WizardStep(min(step + 1, LAST_STEP))
        return True

    def retreat(self) -> None:
        """Move back one step, skipping the guardian step for adults"""
        self._ensure_active()
        step = self.state.current_step
        if step == WizardStep.EMERGENCY and not self.state.is_under18:
            self.state.current_step = WizardStep.PERSONAL
        else:
            self.state.current_step = WizardStep(max(step - 1, FIRST_STEP))

    def build_registration(self, now: Optional[datetime] = None) -> Registration:
        """
        Build the record for the current snapshot.

        Raises:
            pydantic.ValidationError: If the snapshot does not make a valid record
        """
        payload = {}
        for step, fields in STEP_FIELDS.items():
            if step == WizardStep.GUARDIAN and not self.state.is_under18:
                continue
            for field in fields:
                if field in self.state.values:
                    payload[field] = self.state.values[field]

        return Registration(
            **payload,
            id=new_registration_id(),
            is_under18=self.state.is_under18,
            registered_at=now or datetime.now(timezone.utc),
        )

    async def submit(
        self, store: RegistrationStore, now: Optional[datetime] = None
    ) -> Optional[Registration]:
        """
        Validate the review step, persist the registration and finish.

        Returns:
            The stored Registration, or None if the review step (or the
            record as a whole) is invalid; field_errors says which fields.
            When an earlier step owns an invalid field the wizard moves back
            to the first such step.

        Raises:
            InvalidTransitionError: If the wizard is not on the review step
            StoreError: If the store rejects the record; the wizard stays on
                the review step with all values kept
        """
        self._ensure_active()
        if self.state.current_step != LAST_STEP:
            raise InvalidTransitionError("Registration can only be submitted from review")

        errors = validate_step(LAST_STEP, self.state.values, self.state.is_under18)
        if errors:
            self.state.field_errors = errors
            return None

        try:
            registration = self.build_registration(now)
        except ValidationError as e:
            self.state.field_errors = self._fields_from_validation_error(e)
            self.state.current_step = self._step_for_fields(self.state.field_errors)
            logger.info(
                f"Registration rejected on submit: {sorted(self.state.field_errors)}, "
                f"back to {self.state.current_step.name}"
            )
            return None

        await store.append(registration)

        self.state.field_errors = set()
        self.state.current_step = WizardStep.SUBMITTED
        logger.info(f"Registration {registration.id} submitted")
        return registration

    def _fields_from_validation_error(self, error: ValidationError) -> set[str]:
        by_alias = {
            (info.alias or name): name for name, info in Registration.model_fields.items()
        }
        fields = set()
        for detail in error.errors():
            loc = detail.get("loc") or ()
            if loc and isinstance(loc[0], str):
                fields.add(by_alias.get(loc[0], loc[0]))
            elif self.state.is_under18:
                # Model-level check: guardian block incomplete
                fields.update(
                    name for name in GUARDIAN_FIELDS if not self.state.values.get(name)
                )
        return fields or {"agreed_to_terms"}

    def _step_for_fields(self, fields: set[str]) -> WizardStep:
        """Earliest step that renders one of the fields, review if none does"""
        for step, step_fields in STEP_FIELDS.items():
            if fields.intersection(step_fields):
                return step
        return LAST_STEP

    def progress(self) -> list[StepProgress]:
        """Step markers for the progress indicator"""
        current = self.state.current_step
        markers = []
        for step, label in STEP_LABELS.items():
            if step < current:
                status = "completed"
            elif step == current:
                status = "active"
            else:
                status = "inactive"
            markers.append(StepProgress(number=int(step), label=label, status=status))
        return markers

    def progress_percent(self) -> int:
        done = min(self.state.current_step, LAST_STEP) - FIRST_STEP
        return round(done / (LAST_STEP - FIRST_STEP) * 100)


def _is_checked(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "on", "yes", "1")
    return bool(value)
