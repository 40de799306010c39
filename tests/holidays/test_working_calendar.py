from datetime import date

from fakes import InMemoryHolidays
from teacher_performance.holidays.model import HolidayRange
from teacher_performance.holidays.resolver import WorkingCalendarResolver, working_dates


def test_working_dates_skip_sundays():
    # March 2024 has 31 days and 5 Sundays (3, 10, 17, 24, 31)
    dates = working_dates(date(2024, 3, 1), date(2024, 3, 31), [])

    assert len(dates) == 26
    assert all(d.weekday() != 6 for d in dates)
    assert date(2024, 3, 3) not in dates


def test_active_holiday_range_removes_days():
    holidays = [HolidayRange(campus_id=1, start_date=date(2024, 3, 11), end_date=date(2024, 3, 13))]

    dates = working_dates(date(2024, 3, 1), date(2024, 3, 31), holidays)

    assert len(dates) == 23
    assert date(2024, 3, 12) not in dates


def test_inactive_event_or_non_holiday_does_not_remove_days():
    holidays = [
        HolidayRange(campus_id=1, start_date=date(2024, 3, 11), end_date=date(2024, 3, 13), is_active=False),
        HolidayRange(campus_id=1, start_date=date(2024, 3, 14), is_holiday=False, event_name="Sports day"),
    ]

    dates = working_dates(date(2024, 3, 1), date(2024, 3, 31), holidays)

    assert len(dates) == 26


def test_single_day_holiday_without_end_date():
    holiday = HolidayRange(campus_id=1, start_date=date(2024, 3, 23))

    assert holiday.last_date == date(2024, 3, 23)
    assert len(working_dates(date(2024, 3, 1), date(2024, 3, 31), [holiday])) == 25


def test_resolver_clips_ranges_to_month_and_campus():
    repo = InMemoryHolidays(
        [
            # spans Feb/Mar: only Fri 1st and Sat 2nd fall in March
            HolidayRange(campus_id=1, start_date=date(2024, 2, 28), end_date=date(2024, 3, 2)),
            HolidayRange(campus_id=2, start_date=date(2024, 3, 4), end_date=date(2024, 3, 9)),
        ]
    )

    calendar = WorkingCalendarResolver(repo).resolve(1, 3, 2024)

    assert calendar.working_days == 24
    assert date(2024, 3, 1) not in calendar
    assert date(2024, 3, 4) in calendar


def test_holiday_over_whole_month_gives_zero_working_days():
    repo = InMemoryHolidays([HolidayRange(campus_id=1, start_date=date(2024, 3, 1), end_date=date(2024, 3, 31))])

    calendar = WorkingCalendarResolver(repo).resolve(1, 3, 2024)

    assert calendar.working_days == 0
    assert calendar.dates == ()
