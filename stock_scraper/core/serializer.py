"""JSON serialization of scraped stocks."""
import json
import logging
from datetime import datetime
from typing import Any

from stock_scraper.models import Partial, Stock

logger = logging.getLogger(__name__)


class Serializer:
    """Renders a stock as a JSON object.

    Each partial is rendered by walking the accessor names listed in its
    FIELDS. Nested partials become objects, lists of partials become
    arrays. Partials without data are left out.
    """

    def __init__(self, indent: int | None = None):
        self.indent = indent

    def to_dict(self, stock: Stock) -> dict[str, Any] | None:
        """Convert a stock to plain data. Returns None if it is unavailable."""
        if not stock.available:
            return None

        data: dict[str, Any] = {
            "isin": stock.isin,
            "url": stock.url,
            "scraped_at": stock.clock().isoformat(),
        }

        for name, partial in stock.partials().items():
            if partial.available:
                data[name] = self.render(partial)

        return data

    def serialize(self, stock: Stock) -> str | None:
        """JSON string for a stock, or None if there is nothing to write."""
        data = self.to_dict(stock)
        if data is None:
            return None

        try:
            return json.dumps(data, indent=self.indent, allow_nan=False)
        except ValueError as e:
            # NaN/Infinity cannot be written as strict JSON
            logger.warning(f"Cannot serialize {stock.isin}: {e}")
            return None

    def render(self, value: Any) -> Any:
        """Recursively turn partials into plain data."""
        if isinstance(value, Partial):
            return {name: self.render(value[name]) for name in value.FIELDS}
        if isinstance(value, (list, tuple)):
            return [self.render(v) for v in value]
        if isinstance(value, dict):
            return {k: self.render(v) for k, v in value.items()}
        if isinstance(value, datetime):
            return value.isoformat()
        return value
