"""Tests for request URL building."""
import pytest

BASE = "https://www.consorsbank.de/ev/rest/de/marketdata/stocks"


def test_url_basic_only():
    from stock_scraper.collectors.consors.urls import url_for

    assert url_for(["US30303M1027"]) == f"{BASE}?field=BasicV1&id=US30303M1027"


def test_url_with_field():
    from stock_scraper.collectors.consors.urls import url_for

    url = url_for(["US30303M1027"], ["PerformanceV1"])

    assert url == f"{BASE}?field=BasicV1&field=PerformanceV1&id=US30303M1027"


def test_url_fields_follow_fixed_order():
    from stock_scraper.collectors.consors.urls import url_for
    from stock_scraper.models import Field

    url = url_for(["A"], [Field.EVENTS, "PriceV1", Field.PERFORMANCE], base_url="stocks")

    assert url == "stocks?field=BasicV1&field=PerformanceV1&field=PriceV1&field=EventsV1&id=A"


def test_url_drops_unknown_and_duplicate_fields():
    from stock_scraper.collectors.consors.urls import url_for

    url = url_for(["A"], ["PriceV1", "Bogus", "BasicV1", "PriceV1", None], base_url="stocks")

    assert url == "stocks?field=BasicV1&field=PriceV1&id=A"


def test_url_history_adds_range_before_ids():
    from stock_scraper.collectors.consors.urls import url_for

    url = url_for(["A", "B"], ["HistoryV1", "PriceV1"], base_url="stocks")

    assert url == "stocks?field=BasicV1&field=PriceV1&field=HistoryV1&range=-1&resolution=1D&id=A&id=B"


def test_url_repeats_ids_in_batch_order():
    from stock_scraper.collectors.consors.urls import url_for

    url = url_for(["C", "A", "B"], base_url="stocks")

    assert url.endswith("&id=C&id=A&id=B")


def test_url_all_fields():
    from stock_scraper.collectors.consors.urls import url_for
    from stock_scraper.models import FIELDS

    url = url_for(["A"], FIELDS, base_url="stocks")

    assert url == (
        "stocks?field=BasicV1&field=PerformanceV1&field=PriceV1&field=RecommendationV1"
        "&field=ScreenerV1&field=ScreenerAnalysisV1&field=TechnicalAnalysisV1"
        "&field=TradingCentralV1&field=EventsV1&field=HistoryV1&range=-1&resolution=1D&id=A"
    )
