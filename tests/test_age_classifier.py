"""Tests for the age classifier"""

from datetime import date, datetime

import pytest

from yc_registration.services.age_classifier import (
    calculate_age,
    is_minor,
    parse_birth_date,
)

REFERENCE = date(2025, 6, 15)


class TestIsMinor:
    """Under-18 decision on a fixed reference date"""

    def test_eighteenth_birthday_is_adult(self):
        assert is_minor("2007-06-15", REFERENCE) is False

    def test_day_before_eighteenth_birthday_is_minor(self):
        assert is_minor("2007-06-16", REFERENCE) is True

    def test_clear_adult(self):
        assert is_minor("1990-05-17", REFERENCE) is False

    def test_clear_minor(self):
        assert is_minor("2012-01-01", REFERENCE) is True

    @pytest.mark.parametrize("value", ["", "   ", None, "not-a-date", "2010-13-40"])
    def test_missing_or_invalid_dates_are_not_minor(self, value):
        assert is_minor(value, REFERENCE) is False

    def test_accepts_date_objects(self):
        assert is_minor(date(2010, 1, 1), REFERENCE) is True
        assert is_minor(datetime(1980, 1, 1, 8, 30), REFERENCE) is False


class TestCalculateAge:
    def test_birthday_not_yet_reached(self):
        assert calculate_age("2000-12-31", REFERENCE) == 24

    def test_birthday_already_passed(self):
        assert calculate_age("2000-01-01", REFERENCE) == 25

    def test_leap_day_birthday(self):
        assert calculate_age("2008-02-29", date(2026, 2, 28)) == 17
        assert calculate_age("2008-02-29", date(2026, 3, 1)) == 18

    def test_invalid_returns_none(self):
        assert calculate_age("garbage", REFERENCE) is None

    def test_defaults_to_today(self):
        today = date.today()
        assert calculate_age(date(today.year - 30, 1, 1)) in (29, 30)


def test_parse_birth_date_accepts_datetime_strings():
    assert parse_birth_date("2001-04-05T10:00:00Z") == date(2001, 4, 5)
    assert parse_birth_date(" 2001-04-05 ") == date(2001, 4, 5)
