"""Views over historical price ranges."""
from typing import Any, Iterator, Mapping

from stock_scraper.models.partial import Clock, Partial, is_number, ratio_delta


class PeriodPartial(Partial):
    """Informations about one time range.

    E.g. the high, low and volume of one week within the last 12 months.
    """

    FIELDS = ("first", "last", "high", "low", "volume", "age", "performance", "volatility")

    @property
    def first(self) -> float | None:
        """Opening price of the time range."""
        return self.get("FIRST")

    @property
    def last(self) -> float | None:
        """Closing price of the time range."""
        return self.get("LAST")

    @property
    def high(self) -> float | None:
        """Highest price of the time range."""
        return self.get("HIGH")

    @property
    def low(self) -> float | None:
        """Lowest price of the time range."""
        return self.get("LOW")

    @property
    def volume(self) -> Any:
        """Traded volume of the time range."""
        return self.get("TOTAL_VOLUME")

    @property
    def age(self) -> int | None:
        """Total number of days since the end of the time range."""
        return self.diff_in_days(self.get("DATETIME_LAST"))

    @property
    def performance(self) -> float | None:
        """Performance between first and last price, in percent."""
        return ratio_delta(self.first, self.last)

    @property
    def volatility(self) -> float | None:
        """Spread between low and high price, in percent."""
        return ratio_delta(self.low, self.high)


class PerformancePartial(Partial):
    """Performance over fixed windows (PerformanceV1).

    Each window is a nested object with the same shape as a history period.
    """

    FIELDS = ("week", "month", "three_months", "six_months", "year", "three_years", "five_years")

    def _period(self, key: str) -> PeriodPartial:
        return PeriodPartial(self.get(key), self.clock)

    @property
    def week(self) -> PeriodPartial:
        return self._period("W1")

    @property
    def month(self) -> PeriodPartial:
        return self._period("M1")

    @property
    def three_months(self) -> PeriodPartial:
        return self._period("M3")

    @property
    def six_months(self) -> PeriodPartial:
        return self._period("M6")

    @property
    def year(self) -> PeriodPartial:
        return self._period("Y1")

    @property
    def three_years(self) -> PeriodPartial:
        return self._period("Y3")

    @property
    def five_years(self) -> PeriodPartial:
        return self._period("Y5")


class HistoryPartial(Partial):
    """Daily price history of a stock (HistoryV1), most recent period first."""

    FIELDS = ("periods", "performance", "high", "low")

    def __init__(self, data: Mapping[str, Any] | None = None, clock: Clock | None = None):
        super().__init__(data, clock)

        items = self.get("ITEMS")
        if not isinstance(items, list):
            items = []

        self._periods = [
            PeriodPartial(item, self.clock) for item in items if isinstance(item, Mapping)
        ]

    @property
    def periods(self) -> list[PeriodPartial]:
        return list(self._periods)

    @property
    def latest(self) -> PeriodPartial:
        """Most recent period, empty if there is none."""
        return self._periods[0] if self._periods else PeriodPartial(clock=self.clock)

    @property
    def oldest(self) -> PeriodPartial:
        """Oldest period, empty if there is none."""
        return self._periods[-1] if self._periods else PeriodPartial(clock=self.clock)

    @property
    def performance(self) -> float | None:
        """Performance over the whole history, in percent."""
        return ratio_delta(self.oldest.first, self.latest.last)

    @property
    def high(self) -> float | None:
        """Highest price over all periods."""
        highs = [p.high for p in self._periods if is_number(p.high)]
        return max(highs) if highs else None

    @property
    def low(self) -> float | None:
        """Lowest price over all periods."""
        lows = [p.low for p in self._periods if is_number(p.low)]
        return min(lows) if lows else None

    def __iter__(self) -> Iterator[PeriodPartial]:
        return iter(self._periods)

    def __len__(self) -> int:
        return len(self._periods)
