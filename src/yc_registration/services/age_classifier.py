"""Age calculation used to route minors through the guardian step"""

from datetime import date, datetime
from typing import Optional, Union

ADULT_AGE = 18

DateInput = Union[date, datetime, str, None]


def parse_birth_date(value: DateInput) -> Optional[date]:
    """Coerce a form value into a date, or None when empty or unparseable"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = str(value).strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def calculate_age(
    date_of_birth: DateInput, reference_date: Optional[date] = None
) -> Optional[int]:
    """
    Age in whole years on the reference date.

    The year difference is reduced by one when the birthday has not yet come
    round in the reference year.

    Returns:
        Age in years, or None if the birth date is missing or invalid
    """
    birth = parse_birth_date(date_of_birth)
    if birth is None:
        return None

    today = reference_date or date.today()
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def is_minor(date_of_birth: DateInput, reference_date: Optional[date] = None) -> bool:
    """
    Whether the person is under 18 on the reference date (today by default).

    A missing or unparseable birth date counts as not a minor, so the wizard
    takes the adult path and skips the guardian step.
    """
    age = calculate_age(date_of_birth, reference_date)
    if age is None:
        return False
    return age < ADULT_AGE
