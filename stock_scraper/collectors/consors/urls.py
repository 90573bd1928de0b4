"""Request URLs for the Consorsbank market data API."""
from typing import Iterable

from stock_scraper.core.config import BASE_URL
from stock_scraper.models import BASIC, Field, parse_fields


def url_for(isins: Iterable[str], fields: Iterable[Field | str] = (), base_url: str = BASE_URL) -> str:
    """Build the URL to request the specified fields of the stocks.

    Basic data is always requested. Unknown fields are dropped, the others
    follow the fixed field order. History also sets range and resolution.

    Example:
        >>> url_for(["US30303M1027"], base_url="stocks")
        'stocks?field=BasicV1&id=US30303M1027'
        >>> url_for(["US30303M1027"], ["PerformanceV1"], base_url="stocks")
        'stocks?field=BasicV1&field=PerformanceV1&id=US30303M1027'

    Args:
        isins: ISIN numbers of the stocks, in request order
        fields: Subset of the field groups
        base_url: Endpoint of the stocks resource

    Returns:
        The request URL
    """
    fields = parse_fields(fields)

    params = [f"field={BASIC}"]
    params.extend(f"field={field.value}" for field in fields)

    if Field.HISTORY in fields:
        params.append("range=-1&resolution=1D")

    params.extend(f"id={isin}" for isin in isins)

    return f"{base_url}?{'&'.join(params)}"
