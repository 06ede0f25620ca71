from datetime import date

import pytest

from conftest import make_record
from hindsight.errors import InvalidPriceError, MissingFieldError, NoTradingDayError
from hindsight.models import Currency, Position, Quote
from hindsight.valuation import (
    PRICE_SOURCE_HISTORY,
    PRICE_SOURCE_QUOTE,
    summarize_valuations,
    validate_position,
    value_position,
)


def _history():
    return [
        make_record("2000-01-03", 10.0),
        make_record("2000-01-04", 12.0),
        make_record("2000-02-01", 20.0),
    ]


def test_shares_and_current_value_from_quote():
    position = Position(id=1, ticker="msft", amount=1000, currency=Currency.USD, purchase_date=date(2000, 1, 1))
    valuation = value_position(position, _history(), Quote(symbol="MSFT.US", close=25.0))
    assert valuation.symbol == "MSFT.US"
    assert valuation.purchase_date_used == date(2000, 1, 3)
    assert valuation.purchase_close == 10.0
    assert valuation.shares == pytest.approx(100)
    assert valuation.latest_price == 25.0
    assert valuation.latest_price_source == PRICE_SOURCE_QUOTE
    assert valuation.current_value_usd == pytest.approx(2500)


def test_eur_amount_converted_with_rate():
    position = Position(id=1, ticker="MSFT", amount=1000, currency=Currency.EUR, purchase_date=date(2000, 1, 3))
    valuation = value_position(position, _history(), None, usd_per_eur=1.1)
    assert valuation.amount_usd == pytest.approx(1100)
    assert valuation.amount_original == 1000
    assert valuation.shares == pytest.approx(110)


def test_eur_amount_without_rate_is_treated_as_usd():
    position = Position(id=1, ticker="MSFT", amount=1000, currency=Currency.EUR, purchase_date=date(2000, 1, 3))
    valuation = value_position(position, _history(), None, usd_per_eur=None)
    assert valuation.amount_usd == 1000
    assert valuation.shares == pytest.approx(100)


@pytest.mark.parametrize("close", [None, float("nan"), float("inf")])
def test_unusable_quote_falls_back_to_last_history_close(close):
    position = Position(id=1, ticker="MSFT", amount=1000, purchase_date=date(2000, 1, 3))
    valuation = value_position(position, _history(), Quote(symbol="MSFT.US", close=close))
    assert valuation.latest_price == 20.0
    assert valuation.latest_price_source == PRICE_SOURCE_HISTORY
    assert valuation.current_value_usd == pytest.approx(2000)


@pytest.mark.parametrize("close", [0.0, -3.0])
def test_non_positive_quote_is_invalid(close):
    position = Position(id=1, ticker="MSFT", amount=1000, purchase_date=date(2000, 1, 3))
    with pytest.raises(InvalidPriceError):
        value_position(position, _history(), Quote(symbol="MSFT.US", close=close))


def test_zero_purchase_close_is_invalid():
    history = [make_record("2000-01-03", 0.0), make_record("2000-01-04", 5.0)]
    position = Position(id=1, ticker="MSFT", amount=1000, purchase_date=date(2000, 1, 3))
    with pytest.raises(InvalidPriceError):
        value_position(position, history)


def test_non_finite_current_price_is_invalid():
    history = [make_record("2000-01-03", 10.0), make_record("2000-01-04", float("nan"))]
    position = Position(id=1, ticker="MSFT", amount=1000, purchase_date=date(2000, 1, 3))
    with pytest.raises(InvalidPriceError):
        value_position(position, history, None)


def test_purchase_after_history_raises_no_trading_day():
    position = Position(id=1, ticker="MSFT", amount=1000, purchase_date=date(2001, 1, 1))
    with pytest.raises(NoTradingDayError):
        value_position(position, _history())


@pytest.mark.parametrize(
    "position",
    [
        Position(id=1, ticker="  ", amount=1000, purchase_date=date(2000, 1, 3)),
        Position(id=1, ticker="MSFT", amount=None, purchase_date=date(2000, 1, 3)),
        Position(id=1, ticker="MSFT", amount=0, purchase_date=date(2000, 1, 3)),
        Position(id=1, ticker="MSFT", amount=1000, purchase_date=None),
    ],
)
def test_missing_fields_are_rejected(position):
    with pytest.raises(MissingFieldError):
        validate_position(position)


def test_totals_keep_usd_equivalent_and_eur_original_apart():
    history = _history()
    eur = value_position(
        Position(id=1, ticker="A", amount=1000, currency=Currency.EUR, purchase_date=date(2000, 1, 3)),
        history,
        None,
        usd_per_eur=1.2,
    )
    usd = value_position(
        Position(id=2, ticker="B", amount=500, currency=Currency.USD, purchase_date=date(2000, 1, 3)),
        history,
        None,
        usd_per_eur=1.2,
    )
    totals = summarize_valuations([eur, usd], usd_per_eur=1.2)
    assert totals.invested_usd == pytest.approx(1700)
    assert totals.invested_original_eur == 1000
    assert totals.invested_original_usd == 500
    assert totals.current_value_usd == pytest.approx(3400)
    assert totals.current_value_eur == pytest.approx(3400 / 1.2)
    assert totals.pl_usd == pytest.approx(1700)
    assert totals.pl_pct == pytest.approx(100)


def test_totals_without_rate_have_no_eur_value():
    totals = summarize_valuations([], usd_per_eur=None)
    assert totals.current_value_eur is None
    assert totals.pl_pct == 0.0
