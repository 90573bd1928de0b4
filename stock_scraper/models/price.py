"""Identity and intraday price views."""
from typing import Any

from stock_scraper.models.partial import Partial, ratio_delta


class BasicPartial(Partial):
    """Identity of a stock (BasicV1)."""

    FIELDS = ("isin", "wkn", "name", "symbol", "sector", "branch", "country", "type")

    @property
    def isin(self) -> str | None:
        return self.get("ISIN")

    @property
    def wkn(self) -> str | None:
        return self.get("WKN")

    @property
    def name(self) -> str | None:
        return self.get("NAME_SECURITY")

    @property
    def symbol(self) -> str | None:
        return self.get("TICKER_SYMBOL")

    @property
    def sector(self) -> str | None:
        return self.get("SECTOR")

    @property
    def branch(self) -> str | None:
        return self.get("BRANCH")

    @property
    def country(self) -> str | None:
        return self.get("COUNTRY_CODE")

    @property
    def type(self) -> str | None:
        return self.get("INSTRUMENT_TYPE")


class PricePartial(Partial):
    """Latest quote of a stock (PriceV1)."""

    FIELDS = (
        "price",
        "currency",
        "exchange",
        "change",
        "volume",
        "previous",
        "performance",
        "age_in_days",
    )

    @property
    def price(self) -> float | None:
        """Last traded price."""
        return self.get("PRICE")

    @property
    def currency(self) -> str | None:
        return self.get("CURRENCY_ISO")

    @property
    def exchange(self) -> str | None:
        return self.get("EXCHANGE_NAME")

    @property
    def change(self) -> float | None:
        """Change in percent as reported by the exchange."""
        return self.get("PERFORMANCE_PCT")

    @property
    def volume(self) -> Any:
        return self.get("TOTAL_VOLUME")

    @property
    def previous(self) -> float | None:
        """Closing price of the previous trading day."""
        return self.get("PREVIOUS_LAST")

    @property
    def performance(self) -> float | None:
        """Change between previous close and last price, in percent."""
        return ratio_delta(self.previous, self.price)

    @property
    def age_in_days(self) -> int | None:
        """Days since the quote was taken."""
        return self.diff_in_days(self.get("DATETIME_PRICE"))
