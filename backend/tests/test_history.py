from datetime import date

import pytest

from conftest import make_record
from hindsight.errors import NoTradingDayError
from hindsight.history import close_on_or_after, month_key, monthly_series


def test_purchase_on_non_trading_day_uses_next_trading_day():
    history = [make_record("2000-01-03", 10.0)]
    record = close_on_or_after(history, date(2000, 1, 1))
    assert record.date == date(2000, 1, 3)
    assert record.close == 10.0


def test_exact_trading_day_is_used():
    history = [make_record("2024-03-01", 10.0), make_record("2024-03-04", 11.0)]
    assert close_on_or_after(history, date(2024, 3, 4)).close == 11.0


def test_purchase_after_last_record_raises():
    history = [make_record("2024-03-01", 10.0)]
    with pytest.raises(NoTradingDayError):
        close_on_or_after(history, date(2024, 3, 2))


def test_empty_history_raises():
    with pytest.raises(NoTradingDayError):
        close_on_or_after([], date(2024, 3, 2))


def test_monthly_series_keeps_last_close_of_each_month():
    history = [
        make_record("2024-01-02", 10.0),
        make_record("2024-01-31", 12.0),
        make_record("2024-02-01", 13.0),
        make_record("2024-02-29", 11.0),
        make_record("2024-03-04", 14.0),
    ]
    assert monthly_series(history) == {"2024-01": 12.0, "2024-02": 11.0, "2024-03": 14.0}


def test_monthly_series_excludes_records_before_since():
    history = [
        make_record("2024-01-02", 10.0),
        make_record("2024-01-15", 12.0),
        make_record("2024-02-01", 13.0),
    ]
    assert monthly_series(history, since=date(2024, 1, 20)) == {"2024-02": 13.0}
    # A record on the since date itself is kept
    assert monthly_series(history, since=date(2024, 1, 15)) == {"2024-01": 12.0, "2024-02": 13.0}


def test_month_keys_sort_chronologically_as_strings():
    days = [date(1999, 12, 31), date(2000, 1, 1), date(2000, 9, 30), date(2000, 10, 1), date(2010, 2, 1)]
    keys = [month_key(d) for d in days]
    assert keys == ["1999-12", "2000-01", "2000-09", "2000-10", "2010-02"]
    assert sorted(reversed(keys)) == keys
