"""Per-step required-field validation for the registration wizard"""

from typing import Any, Mapping

from yc_registration.models.registration import EMAIL_PATTERN
from yc_registration.models.wizard import WizardStep

REQUIRED_FIELDS = {
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
    WizardStep.MEDICAL: (),
    WizardStep.REVIEW: ("agreed_to_terms",),
}

EMAIL_FIELDS = frozenset({"email", "guardian_email"})


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return not value


def validate_step(
    step: WizardStep, form: Mapping[str, Any], is_minor: bool
) -> set[str]:
    """
    Return every invalid field on a wizard step.

    A field is invalid when it is absent, blank or (for checkboxes) falsy.
    Email fields must also look like local@domain. The guardian step is
    only checked for minors.

    Args:
        step: Step being validated
        form: Current form snapshot keyed by field name
        is_minor: Latched under-18 flag of the registrant

    Returns:
        Set of invalid field names, empty when the step may be left
    """
    if step == WizardStep.GUARDIAN and not is_minor:
        return set()

    invalid = set()
    for field in REQUIRED_FIELDS.get(step, ()):
        value = form.get(field)
        if _is_missing(value):
            invalid.add(field)
        elif field in EMAIL_FIELDS and not EMAIL_PATTERN.match(str(value).strip()):
            invalid.add(field)
    return invalid
