from datetime import date, datetime, time

import pytest

from fakes import make_teacher
from teacher_performance.attendance.calculator import AttendanceMetricsCalculator
from teacher_performance.attendance.model import AttendanceEntry
from teacher_performance.core.enums import AttendanceStatus
from teacher_performance.holidays.model import WorkingCalendar
from teacher_performance.holidays.resolver import working_dates


def _calendar(n_days: int) -> WorkingCalendar:
    dates = working_dates(date(2024, 3, 1), date(2024, 3, 31), [])[:n_days]
    return WorkingCalendar(campus_id=1, month=3, year=2024, dates=dates)


def _present(day: date, hh: int, mm: int, teacher_id: int = 1) -> AttendanceEntry:
    return AttendanceEntry(
        employee_id=teacher_id,
        work_date=day,
        status=AttendanceStatus.PRESENT,
        time_in=datetime.combine(day, time(hh, mm)),
    )


def test_twenty_working_days_eighteen_present_fifteen_on_time():
    teacher = make_teacher(1, "Alice")
    calendar = _calendar(20)
    days = list(calendar.dates)

    entries = [_present(d, 8, 10) for d in days[:15]]
    entries += [_present(d, 8, 30) for d in days[15:18]]
    entries += [AttendanceEntry(employee_id=1, work_date=d, status=AttendanceStatus.ABSENT) for d in days[18:]]

    metrics = AttendanceMetricsCalculator().calculate(teacher, calendar, entries)

    assert metrics.working_days == 20
    assert metrics.attended_days == 18
    assert metrics.on_time_days == 15
    assert metrics.attendance_score == pytest.approx(3.15)
    assert metrics.punctuality_score == pytest.approx(1.875)


def test_zero_working_days_scores_zero_without_division():
    teacher = make_teacher(1, "Alice")
    calendar = WorkingCalendar(campus_id=1, month=3, year=2024, dates=())

    metrics = AttendanceMetricsCalculator().calculate(teacher, calendar, [_present(date(2024, 3, 4), 8, 0)])

    assert metrics.attendance_score == 0.0
    assert metrics.punctuality_score == 0.0


def test_entries_outside_working_calendar_are_ignored():
    teacher = make_teacher(1, "Alice")
    calendar = _calendar(5)
    sunday = date(2024, 3, 3)

    entries = [_present(d, 8, 0) for d in calendar.dates] + [_present(sunday, 8, 0)]
    metrics = AttendanceMetricsCalculator().calculate(teacher, calendar, entries)

    assert metrics.attended_days == 5
    assert metrics.attendance_score == pytest.approx(3.5)
    assert metrics.punctuality_score == pytest.approx(2.5)


def test_duplicate_day_is_counted_once():
    teacher = make_teacher(1, "Alice")
    calendar = _calendar(2)
    day = calendar.dates[0]

    metrics = AttendanceMetricsCalculator().calculate(teacher, calendar, [_present(day, 8, 0), _present(day, 8, 5)])

    assert metrics.attended_days == 1
    assert metrics.attendance_score == pytest.approx(1.75)


def test_late_status_is_not_attended_nor_on_time():
    teacher = make_teacher(1, "Alice")
    calendar = _calendar(1)
    day = calendar.dates[0]
    late = AttendanceEntry(
        employee_id=1,
        work_date=day,
        status=AttendanceStatus.LATE,
        time_in=datetime.combine(day, time(7, 55)),
    )

    metrics = AttendanceMetricsCalculator().calculate(teacher, calendar, [late])

    assert metrics.attended_days == 0
    assert metrics.on_time_days == 0


def test_missing_shift_start_gives_no_punctuality():
    teacher = make_teacher(1, "Alice", shift_start=None)
    calendar = _calendar(4)

    metrics = AttendanceMetricsCalculator().calculate(teacher, calendar, [_present(d, 8, 0) for d in calendar.dates])

    assert metrics.attendance_score == pytest.approx(3.5)
    assert metrics.on_time_days == 0
    assert metrics.punctuality_score == 0.0


def test_other_teachers_entries_do_not_count():
    teacher = make_teacher(1, "Alice")
    calendar = _calendar(2)

    metrics = AttendanceMetricsCalculator().calculate(
        teacher, calendar, [_present(d, 8, 0, teacher_id=2) for d in calendar.dates]
    )

    assert metrics.attended_days == 0
