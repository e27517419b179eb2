from datetime import date, datetime

from app.services.dates import (
    current_week_number,
    is_today,
    is_tomorrow,
    js_weekday,
    months_ago,
    parse_local_date,
    sunday_on_or_before,
    week_end,
    week_start,
)


def test_parse_local_date():
    assert parse_local_date("2024-06-03") == date(2024, 6, 3)
    assert parse_local_date("2024-06-03T23:30:00Z") == date(2024, 6, 3)
    assert parse_local_date(datetime(2024, 6, 3, 23, 59)) == date(2024, 6, 3)
    assert parse_local_date(date(2024, 6, 3)) == date(2024, 6, 3)


def test_months_ago_clamps_to_month_end():
    assert months_ago(date(2024, 3, 31), 1) == date(2024, 2, 29)
    assert months_ago(date(2023, 3, 31), 1) == date(2023, 2, 28)
    assert months_ago(date(2024, 1, 15), 3) == date(2023, 10, 15)
    assert months_ago(date(2024, 6, 30), 0) == date(2024, 6, 30)


def test_week_bounds_are_monday_to_sunday():
    sunday = date(2024, 6, 9)
    assert week_start(sunday) == date(2024, 6, 3)
    assert week_end(sunday) == sunday
    assert week_start(date(2024, 6, 3)) == date(2024, 6, 3)


def test_js_weekday_starts_on_sunday():
    assert js_weekday(date(2024, 6, 9)) == 0
    assert js_weekday(date(2024, 6, 3)) == 1
    assert js_weekday(date(2024, 6, 8)) == 6
    assert sunday_on_or_before(date(2024, 6, 5)) == date(2024, 6, 2)
    assert sunday_on_or_before(date(2024, 6, 9)) == date(2024, 6, 9)


def test_current_week_number():
    start = date(2024, 6, 3)
    assert current_week_number(start, start) == 1
    assert current_week_number(start, date(2024, 6, 9)) == 1
    assert current_week_number(start, date(2024, 6, 10)) == 2
    assert current_week_number(start, date(2024, 6, 2)) == 0


def test_today_and_tomorrow():
    today = date(2024, 6, 3)
    assert is_today("2024-06-03", today)
    assert not is_today("2024-06-04", today)
    assert is_tomorrow(date(2024, 6, 4), today)
    assert not is_tomorrow("2024-06-03", today)
