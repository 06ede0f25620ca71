import pytest

from hindsight.extremes import compute_year_extremes
from hindsight.models import MonthlyPoint


def _point(month: str, value: float) -> MonthlyPoint:
    return MonthlyPoint(month=month, value_usd=value)


def test_min_and_max_per_year_sorted_by_year():
    series = [
        _point("2020-11", 120),
        _point("2020-12", 80),
        _point("2021-01", 90),
        _point("2021-02", 150),
        _point("2021-03", 100),
    ]
    extremes = compute_year_extremes(series)
    assert [e.year for e in extremes] == ["2020", "2021"]
    y2020, y2021 = extremes
    assert (y2020.min_value_usd, y2020.min_month) == (80, "2020-12")
    assert (y2020.max_value_usd, y2020.max_month) == (120, "2020-11")
    assert (y2021.min_value_usd, y2021.min_month) == (90, "2021-01")
    assert (y2021.max_value_usd, y2021.max_month) == (150, "2021-02")
    assert y2021.min_value_eur is None


def test_ties_keep_the_first_month():
    series = [_point("2022-01", 100), _point("2022-02", 100), _point("2022-03", 100)]
    (extreme,) = compute_year_extremes(series)
    assert extreme.min_month == "2022-01"
    assert extreme.max_month == "2022-01"


def test_eur_values_use_the_single_rate():
    series = [_point("2022-01", 110), _point("2022-02", 220)]
    (extreme,) = compute_year_extremes(series, usd_per_eur=1.1)
    assert extreme.min_value_eur == pytest.approx(100)
    assert extreme.max_value_eur == pytest.approx(200)


def test_extremes_bound_every_value_of_their_year():
    series = [_point(f"20{y:02d}-{m:02d}", float((y * 37 + m * 11) % 97 + 1)) for y in (19, 20) for m in range(1, 13)]
    for extreme in compute_year_extremes(series):
        values = [p.value_usd for p in series if p.month.startswith(extreme.year)]
        assert all(extreme.min_value_usd <= v <= extreme.max_value_usd for v in values)
        assert extreme.min_month.startswith(extreme.year)
        assert extreme.max_month.startswith(extreme.year)


def test_empty_series():
    assert compute_year_extremes([]) == []
