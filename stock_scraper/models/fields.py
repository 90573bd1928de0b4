"""Field groups of the Consorsbank market data API."""
import logging
from enum import Enum
from typing import Iterable

logger = logging.getLogger(__name__)


class Field(Enum):
    """Requestable data categories, in the order the API expects them."""
    PERFORMANCE = "PerformanceV1"
    PRICE = "PriceV1"
    RECOMMENDATION = "RecommendationV1"
    SCREENER = "ScreenerV1"
    SCREENER_ANALYSIS = "ScreenerAnalysisV1"
    TECHNICAL_ANALYSIS = "TechnicalAnalysisV1"
    TRADING_CENTRAL = "TradingCentralV1"
    EVENTS = "EventsV1"
    HISTORY = "HistoryV1"


# Always requested, never selectable
BASIC = "BasicV1"

FIELDS: tuple[Field, ...] = tuple(Field)


def parse_fields(fields: Iterable[Field | str]) -> tuple[Field, ...]:
    """Normalize requested fields to enumeration order.

    Accepts Field members or their wire names. Unknown names are dropped,
    duplicates collapse.

    Args:
        fields: Requested field groups

    Returns:
        Known fields in the fixed enumeration order
    """
    wanted = set()
    for field in fields:
        if isinstance(field, Field):
            wanted.add(field)
            continue
        try:
            wanted.add(Field(field))
        except ValueError:
            logger.debug(f"Dropping unknown field group: {field!r}")

    return tuple(f for f in FIELDS if f in wanted)
