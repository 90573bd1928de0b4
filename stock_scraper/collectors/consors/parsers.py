"""Parsers for Consorsbank market data responses."""
import json
import logging
from typing import Any, Iterable

from stock_scraper.models import FIELDS, Field, Stock
from stock_scraper.models.partial import Clock

logger = logging.getLogger(__name__)


def parse_response(status: int, body: str | bytes | None) -> list[dict[str, Any]]:
    """Decode a response body into raw stock records.

    Anything but a successful response holding a JSON array yields no
    records.

    Args:
        status: HTTP status code
        body: Raw response body

    Returns:
        Raw records, one per stock
    """
    if not 200 <= status < 300 or not body:
        return []

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Invalid JSON in response body: {e}")
        return []

    if not isinstance(data, list):
        logger.debug(f"Unexpected response body type: {type(data).__name__}")
        return []

    return [record for record in data if isinstance(record, dict)]


def parse_stocks(
    records: list[dict[str, Any]],
    url: str,
    fields: Iterable[Field | str] = FIELDS,
    clock: Clock | None = None,
) -> list[Stock]:
    """Build the available stocks from raw records."""
    stocks = []
    for record in records:
        stock = Stock(record, url, fields, clock)
        if not stock.available:
            logger.debug(f"Skipping unavailable stock {stock.isin} from {url}")
            continue
        stocks.append(stock)
    return stocks
