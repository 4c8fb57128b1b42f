"""Search and filtering for the admin dashboard"""

import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from yc_registration.models.registration import Registration


class AgeFilter(str, enum.Enum):
    ALL = "all"
    UNDER_18 = "under18"
    OVER_18 = "over18"


class GenderFilter(str, enum.Enum):
    ALL = "all"
    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class DashboardStats:
    total: int
    under_18: int
    corps_count: int


def parse_age_filter(value: Optional[str]) -> AgeFilter:
    try:
        return AgeFilter(value)
    except ValueError:
        return AgeFilter.ALL


def parse_gender_filter(value: Optional[str]) -> GenderFilter:
    try:
        return GenderFilter(value)
    except ValueError:
        return GenderFilter.ALL


def _matches_search(registration: Registration, term: str) -> bool:
    haystack = (
        registration.first_name,
        registration.last_name,
        registration.email,
        registration.corps_name,
    )
    return any(term in (value or "").lower() for value in haystack)


def filter_registrations(
    records: Sequence[Registration],
    search_term: Optional[str] = "",
    age_filter: AgeFilter = AgeFilter.ALL,
    gender_filter: GenderFilter = GenderFilter.ALL,
) -> list[Registration]:
    """
    Apply the dashboard search box and filters.

    The search term is stripped of surrounding whitespace, then matched
    case-insensitively as a substring of first name, last name, email or
    corps name; a blank term matches everything. All filters must hold. Input
    order is preserved and the input sequence is never modified.
    """
    term = (search_term or "").strip().lower()
    age_filter = AgeFilter(age_filter)
    gender_filter = GenderFilter(gender_filter)

    filtered = []
    for registration in records:
        if term and not _matches_search(registration, term):
            continue
        if age_filter == AgeFilter.UNDER_18 and not registration.is_under18:
            continue
        if age_filter == AgeFilter.OVER_18 and registration.is_under18:
            continue
        if (
            gender_filter != GenderFilter.ALL
            and registration.gender.value != gender_filter.value
        ):
            continue
        filtered.append(registration)
    return filtered


def summarize(records: Iterable[Registration]) -> DashboardStats:
    """Totals shown above the registration list"""
    records = list(records)
    return DashboardStats(
        total=len(records),
        under_18=sum(1 for r in records if r.is_under18),
        corps_count=len({r.corps_name for r in records}),
    )
