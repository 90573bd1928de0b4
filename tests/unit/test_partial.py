"""Tests for the base partial and its helpers."""
from datetime import date, datetime, timedelta, timezone
import pytest


def test_partial_from_none():
    from stock_scraper.models import Partial

    partial = Partial(None)

    assert partial.data == {}
    assert not partial.available


def test_partial_from_non_mapping():
    from stock_scraper.models import Partial

    partial = Partial(["not", "a", "mapping"])

    assert partial.data == {}
    assert not partial.available


def test_partial_available_with_data():
    from stock_scraper.models import Partial

    assert Partial({"PRICE": 1.0}).available


def test_partial_get_returns_value_verbatim():
    from stock_scraper.models import Partial

    nested = {"a": [1, 2]}
    partial = Partial({"NESTED": nested, "TEXT": "abc"})

    assert partial.get("NESTED") == nested
    assert partial.get("TEXT") == "abc"
    assert partial.get("MISSING") is None


def test_from_envelope_unwraps_first_object():
    from stock_scraper.models import Partial

    partial = Partial.from_envelope({"PriceV1": [{"PRICE": 97.8}]}, "PriceV1")

    assert partial.get("PRICE") == 97.8


@pytest.mark.parametrize("record", [
    None,
    {},
    {"PriceV1": None},
    {"PriceV1": []},
    {"PriceV1": [None]},
    {"PriceV1": "garbage"},
])
def test_from_envelope_missing_or_malformed(record):
    from stock_scraper.models import Partial

    partial = Partial.from_envelope(record, "PriceV1")

    assert not partial.available


def test_getitem_known_field():
    from stock_scraper.models import PeriodPartial

    period = PeriodPartial({"FIRST": 1.5})

    assert period["first"] == 1.5


def test_getitem_unknown_field_is_none():
    from stock_scraper.models import PeriodPartial

    period = PeriodPartial({"FIRST": 1.5})

    assert period["does_not_exist"] is None
    assert period["__class__"] is None
    assert period["data"] is None


# =============================================================================
# Day arithmetic
# =============================================================================

def test_diff_in_days_same_day(clock):
    from stock_scraper.models import Partial

    assert Partial(clock=clock).diff_in_days("2016-04-18") == 0


def test_diff_in_days_a_week_ago(clock):
    from stock_scraper.models import Partial

    assert Partial(clock=clock).diff_in_days("2016-04-11T12:30:00+02:00") == 7


def test_diff_in_days_future_is_negative(clock):
    from stock_scraper.models import Partial

    assert Partial(clock=clock).diff_in_days("2016-04-20") == -2


def test_diff_in_days_offset_without_colon(clock):
    from stock_scraper.models import Partial

    assert Partial(clock=clock).diff_in_days("2016-04-08T00:00:00+0200") == 10


def test_diff_in_days_uses_calendar_date_of_the_value(clock):
    from stock_scraper.models import Partial

    partial = Partial(clock=clock)

    # Still 2016-04-17 in UTC, but the exchange's calendar day counts
    assert partial.diff_in_days("2016-04-18T00:30:00+02:00") == 0
    assert partial.diff_in_days("2016-04-17T23:30:00-05:00") == 1


def test_diff_in_days_accepts_date_objects(clock):
    from stock_scraper.models import Partial

    partial = Partial(clock=clock)

    assert partial.diff_in_days(date(2016, 4, 17)) == 1
    assert partial.diff_in_days(datetime(2016, 4, 16, 23, 59)) == 2


@pytest.mark.parametrize("value", [None, "", "   ", "yesterday", "2016-13-45", 12345, [], {}])
def test_diff_in_days_absent_or_unparsable(clock, value):
    from stock_scraper.models import Partial

    assert Partial(clock=clock).diff_in_days(value) is None


def test_diff_in_days_default_clock_is_now():
    from stock_scraper.models import Partial

    today = datetime.now(timezone.utc)
    week_ago = (today - timedelta(days=7)).date().isoformat()

    assert Partial().diff_in_days(week_ago) == 7


# =============================================================================
# Ratios
# =============================================================================

def test_ratio_delta_volatility():
    from stock_scraper.models import ratio_delta

    assert ratio_delta(96.021, 97.91) == 1.93


def test_ratio_delta_performance():
    from stock_scraper.models import ratio_delta

    assert ratio_delta(97.049, 97.803) == 0.77


def test_ratio_delta_ints():
    from stock_scraper.models import ratio_delta

    assert ratio_delta(50, 100) == 50.0


@pytest.mark.parametrize("numerator, denominator", [
    (0, 0),
    (1.0, 0),
    (None, 1.0),
    (1.0, None),
    ("1.0", 2.0),
    (1.0, "2.0"),
    (True, 2.0),
    (1.0, False),
    ([1], 2.0),
    (10**400, 1),
    (1.0, 1e-320),
    (float("inf"), 1.0),
    (1.0, float("nan")),
])
def test_ratio_delta_degenerate_operands(numerator, denominator):
    from stock_scraper.models import ratio_delta

    assert ratio_delta(numerator, denominator) is None


def test_period_performance_with_huge_integer_is_none():
    from stock_scraper.models import PeriodPartial

    period = PeriodPartial({"FIRST": 10**400, "LAST": 1})

    assert period.performance is None
    assert period["performance"] is None


def test_getitem_failing_accessor_is_none():
    from stock_scraper.models import Partial

    class Broken(Partial):
        FIELDS = ("total",)

        @property
        def total(self):
            return sum(self.get("COUNTS"))

    assert Broken({"COUNTS": [1.5, 10**400]})["total"] is None
    with pytest.raises(OverflowError):
        Broken({"COUNTS": [1.5, 10**400]}).total


# =============================================================================
# Pruning
# =============================================================================

def test_prune_all_none_list():
    from stock_scraper.models import prune

    assert prune([None, None, None]) is None


def test_prune_keeps_partially_filled_list():
    from stock_scraper.models import prune

    assert prune([1.0, None, 3.0]) == [1.0, None, 3.0]


def test_prune_all_none_dict():
    from stock_scraper.models import prune

    assert prune({"delta": None, "opinion": None}) is None


def test_prune_keeps_partially_filled_dict():
    from stock_scraper.models import prune

    assert prune({"delta": 5, "opinion": None}) == {"delta": 5, "opinion": None}


def test_prune_keeps_zero_values():
    from stock_scraper.models import prune

    assert prune([0, None, None]) == [0, None, None]
