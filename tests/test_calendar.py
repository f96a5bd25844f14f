import pytest

from astrotime import Calendar, InvalidCalendarDateError
from astrotime.core.calendar import (
    YEAR_MAX,
    days_in_month,
    days_in_year,
    is_leap_year,
    validate_date,
    validate_time,
)

G = Calendar.GREGORIAN
J = Calendar.JULIAN


@pytest.mark.parametrize(
    "year, greg, jul",
    [
        (2000, True, True),
        (1900, False, True),
        (2100, False, True),
        (2004, True, True),
        (2001, False, False),
        (0, True, True),      # 1 BC
        (-1, False, False),
        (-100, False, True),
        (-400, True, True),
    ],
)
def test_leap_year_rules(year, greg, jul):
    assert is_leap_year(G, year) is greg
    assert is_leap_year(J, year) is jul


def test_month_lengths():
    assert days_in_month(G, 2000, 2) == 29
    assert days_in_month(G, 1900, 2) == 28
    assert days_in_month(J, 1900, 2) == 29
    assert [days_in_month(G, 2021, m) for m in range(1, 13)] == [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
    assert days_in_year(G, 1900) == 365
    assert days_in_year(J, 1900) == 366


def test_validate_date_rejects_out_of_range():
    validate_date(G, 2000, 2, 29)
    validate_date(J, 1900, 2, 29)
    for y, m, d in [(2021, 2, 29), (1900, 2, 29), (2021, 2, 30), (2021, 4, 31), (2021, 13, 1), (2021, 0, 1), (2021, 1, 0)]:
        with pytest.raises(InvalidCalendarDateError):
            validate_date(G, y, m, d)
    with pytest.raises(InvalidCalendarDateError):
        validate_date(G, YEAR_MAX + 1, 1, 1)


def test_validate_time():
    validate_time(23, 59, 59, 10**18 - 1)
    validate_time(23, 59, 60, 0, allow_leap_second=True)
    for args in [(24, 0, 0, 0), (0, 60, 0, 0), (0, 0, 60, 0), (0, 0, 0, 10**18), (0, 0, -1, 0)]:
        with pytest.raises(InvalidCalendarDateError):
            validate_time(*args)
    # also a ValueError for callers that do not know the package
    with pytest.raises(ValueError):
        validate_time(0, 0, 61, 0, allow_leap_second=True)
