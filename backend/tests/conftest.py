import asyncio
import inspect
import pathlib
import sys
from datetime import date, timedelta

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hindsight.models import DailyPriceRecord, MonthlyPoint  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the suite."""

    config.addinivalue_line("markers", "asyncio: mark test as running in an asyncio event loop")


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute async test functions without requiring pytest-asyncio."""

    test_function = pyfuncitem.obj
    if inspect.iscoroutinefunction(test_function):
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            argnames = pyfuncitem._fixtureinfo.argnames
            kwargs = {name: pyfuncitem.funcargs[name] for name in argnames}
            loop.run_until_complete(test_function(**kwargs))
        finally:
            asyncio.set_event_loop(None)
            loop.close()
        return True
    return None


def make_record(day: date | str, close: float) -> DailyPriceRecord:
    if isinstance(day, str):
        day = date.fromisoformat(day)
    return DailyPriceRecord(date=day, open=close, high=close, low=close, close=close, volume=1000.0)


def make_series(values: list[float], start: str = "2020-01") -> list[MonthlyPoint]:
    """Build a monthly series with changes computed the same way the aggregator does."""

    year, month = (int(part) for part in start.split("-"))
    points: list[MonthlyPoint] = []
    for index, value in enumerate(values):
        total = (month - 1) + index
        key = f"{year + total // 12:04d}-{total % 12 + 1:02d}"
        change = None
        if index > 0 and values[index - 1] > 0:
            change = value / values[index - 1] - 1
        points.append(MonthlyPoint(month=key, value_usd=value, month_over_month_change=change))
    return points


def daily_closes(start: date, closes: list[float], step_days: int = 1) -> list[DailyPriceRecord]:
    return [make_record(start + timedelta(days=i * step_days), c) for i, c in enumerate(closes)]
