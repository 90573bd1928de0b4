"""Stock assembled from one raw API record."""
from typing import Any, Iterable, Mapping

from stock_scraper.models.analysis import (
    RecommendationPartial,
    ScreenerAnalysisPartial,
    ScreenerPartial,
    TechnicalAnalysisPartial,
    TradingCentralPartial,
)
from stock_scraper.models.events import EventsPartial
from stock_scraper.models.fields import BASIC, FIELDS, Field, parse_fields
from stock_scraper.models.history import HistoryPartial, PerformancePartial
from stock_scraper.models.partial import Clock, Partial, unwrap, utc_now
from stock_scraper.models.price import BasicPartial, PricePartial

# Accessor name and view type per field group
PARTIALS: dict[Field, tuple[str, type[Partial]]] = {
    Field.PERFORMANCE: ("performance", PerformancePartial),
    Field.PRICE: ("price", PricePartial),
    Field.RECOMMENDATION: ("recommendation", RecommendationPartial),
    Field.SCREENER: ("screener", ScreenerPartial),
    Field.SCREENER_ANALYSIS: ("screener_analysis", ScreenerAnalysisPartial),
    Field.TECHNICAL_ANALYSIS: ("technical_analysis", TechnicalAnalysisPartial),
    Field.TRADING_CENTRAL: ("trading_central", TradingCentralPartial),
    Field.EVENTS: ("events", EventsPartial),
    Field.HISTORY: ("history", HistoryPartial),
}


class Stock:
    """A scraped stock composed of one partial per field group.

    Only requested field groups are read from the raw record; the others
    are empty partials of the right type.

    Attributes:
        url: The URL the record was scraped from
        fields: Requested field groups
    """

    def __init__(
        self,
        raw: Mapping[str, Any] | None,
        url: str = "",
        fields: Iterable[Field | str] = FIELDS,
        clock: Clock | None = None,
    ):
        self._raw = raw if isinstance(raw, Mapping) else {}
        self.url = url
        self.fields = parse_fields(fields)
        self.clock = clock or utc_now

        self._basic = BasicPartial.from_envelope(self._raw, BASIC, self.clock)
        self._partials: dict[Field, Partial] = {}
        for field, (_, partial_cls) in PARTIALS.items():
            if field in self.fields:
                self._partials[field] = partial_cls.from_envelope(self._raw, field.value, self.clock)
            else:
                self._partials[field] = partial_cls(clock=self.clock)

    @property
    def isin(self) -> str | None:
        """ISIN from the basic data, else the ID the API echoes back."""
        if self._basic.isin:
            return self._basic.isin

        info = self._raw.get("Info")
        if isinstance(info, Mapping):
            return info.get("ID")
        return None

    @property
    def available(self) -> bool:
        """A stock without basic data is not worth keeping."""
        return self._basic.available

    @property
    def basic(self) -> BasicPartial:
        return self._basic

    @property
    def price(self) -> PricePartial:
        return self._partials[Field.PRICE]

    @property
    def performance(self) -> PerformancePartial:
        return self._partials[Field.PERFORMANCE]

    @property
    def recommendation(self) -> RecommendationPartial:
        return self._partials[Field.RECOMMENDATION]

    @property
    def screener(self) -> ScreenerPartial:
        return self._partials[Field.SCREENER]

    @property
    def screener_analysis(self) -> ScreenerAnalysisPartial:
        return self._partials[Field.SCREENER_ANALYSIS]

    @property
    def technical_analysis(self) -> TechnicalAnalysisPartial:
        return self._partials[Field.TECHNICAL_ANALYSIS]

    @property
    def trading_central(self) -> TradingCentralPartial:
        return self._partials[Field.TRADING_CENTRAL]

    @property
    def events(self) -> EventsPartial:
        return self._partials[Field.EVENTS]

    @property
    def history(self) -> HistoryPartial:
        return self._partials[Field.HISTORY]

    def partials(self) -> dict[str, Partial]:
        """Basic data plus every requested partial, keyed by accessor name."""
        result: dict[str, Partial] = {"basic": self._basic}
        for field in self.fields:
            name, _ = PARTIALS[field]
            result[name] = self._partials[field]
        return result

    def __repr__(self) -> str:
        return f"Stock(isin={self.isin!r}, url={self.url!r})"
