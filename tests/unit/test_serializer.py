"""Tests for the stock serializer."""
import json
import pytest

URL = "https://example.test/stocks"


@pytest.fixture
def stock(facebook_json, clock):
    from stock_scraper.models import Stock

    return Stock(facebook_json, URL, clock=clock)


def test_serialize_returns_json(stock):
    from stock_scraper.core.serializer import Serializer

    data = json.loads(Serializer().serialize(stock))

    assert data["isin"] == "US30303M1027"
    assert data["url"] == URL
    assert data["scraped_at"] == "2016-04-18T00:00:00+00:00"


def test_serialize_renders_every_group(stock):
    from stock_scraper.core.serializer import Serializer

    data = Serializer().to_dict(stock)

    assert set(data) == {
        "isin", "url", "scraped_at", "basic", "price", "performance", "recommendation",
        "screener", "screener_analysis", "technical_analysis", "trading_central",
        "events", "history",
    }


def test_serialize_walks_partial_fields(stock):
    from stock_scraper.core.serializer import Serializer

    data = Serializer().to_dict(stock)

    assert data["basic"]["name"] == "Facebook Inc."
    assert data["price"] == {
        "price": 97.803,
        "currency": "EUR",
        "exchange": "Xetra",
        "change": 0.78,
        "volume": 12875,
        "previous": 97.049,
        "performance": 0.77,
        "age_in_days": 3,
    }
    assert data["trading_central"]["resistors"] == [109.0, None, 112.0]
    assert data["trading_central"]["medium_term"] is None


def test_serialize_nested_partials(stock):
    from stock_scraper.core.serializer import Serializer

    data = Serializer().to_dict(stock)

    assert data["history"]["periods"][0]["volatility"] == 1.93
    assert data["history"]["performance"] == 2.87
    assert data["events"]["events"][0] == {"type": "AGM", "name": "Ordentliche Hauptversammlung", "occurs_in": 59}
    assert data["performance"]["week"]["performance"] == 2.87
    assert data["performance"]["month"]["first"] is None


def test_serialize_omits_unrequested_and_empty_groups(facebook_json, clock):
    from stock_scraper.core.serializer import Serializer
    from stock_scraper.models import Stock

    del facebook_json["EventsV1"]
    stock = Stock(facebook_json, URL, fields=["PriceV1", "EventsV1"], clock=clock)

    data = Serializer().to_dict(stock)

    assert "price" in data
    assert "events" not in data
    assert "history" not in data


def test_serialize_unavailable_stock_yields_nothing(unavailable_json):
    from stock_scraper.core.serializer import Serializer
    from stock_scraper.models import Stock

    stock = Stock(unavailable_json, URL)

    assert Serializer().serialize(stock) is None


def test_serialize_refuses_nan(clock):
    from stock_scraper.core.serializer import Serializer
    from stock_scraper.models import Stock

    stock = Stock({"BasicV1": [{"ISIN": "X"}], "PriceV1": [{"PRICE": float("nan")}]}, URL, clock=clock)

    assert Serializer().serialize(stock) is None
