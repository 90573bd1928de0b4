"""Analyst, screener and third-party analysis views."""
from typing import Any

from stock_scraper.models.partial import Partial, is_number, prune, ratio_delta


class RecommendationPartial(Partial):
    """Analyst recommendations (RecommendationV1)."""

    FIELDS = ("buy", "over", "hold", "under", "sell", "total", "target_price", "age_in_days")

    @property
    def buy(self) -> int | None:
        return self.get("BUY")

    @property
    def over(self) -> int | None:
        return self.get("OVERWEIGHT")

    @property
    def hold(self) -> int | None:
        return self.get("HOLD")

    @property
    def under(self) -> int | None:
        return self.get("UNDERWEIGHT")

    @property
    def sell(self) -> int | None:
        return self.get("SELL")

    @property
    def total(self) -> int | None:
        """Number of analysts with an opinion."""
        counts = [c for c in (self.buy, self.over, self.hold, self.under, self.sell) if is_number(c)]
        return sum(counts) if counts else None

    @property
    def target_price(self) -> float | None:
        return self.get("TARGET_PRICE")

    @property
    def age_in_days(self) -> int | None:
        return self.diff_in_days(self.get("DATETIME_ANALYSIS"))


class ScreenerPartial(Partial):
    """theScreener rating (ScreenerV1)."""

    FIELDS = ("rating", "interest", "risk", "sensitivity", "age_in_days")

    @property
    def rating(self) -> int | None:
        """Star rating from 0 to 4."""
        return self.get("RATING")

    @property
    def interest(self) -> int | None:
        return self.get("INTEREST")

    @property
    def risk(self) -> int | None:
        return self.get("RISK")

    @property
    def sensitivity(self) -> dict[str, Any] | None:
        """Bull and bear market sensitivity."""
        return prune({"bull": self.get("SENSITIVITY_BULL"), "bear": self.get("SENSITIVITY_BEAR")})

    @property
    def age_in_days(self) -> int | None:
        return self.diff_in_days(self.get("DATE_ANALYSIS"))


class ScreenerAnalysisPartial(Partial):
    """Fundamental key figures from theScreener (ScreenerAnalysisV1)."""

    FIELDS = ("pe", "eps_growth", "div_yield", "beta", "correlation", "age_in_days")

    @property
    def pe(self) -> float | None:
        """Current price-earnings ratio."""
        return self.get("CURRENT_PE")

    @property
    def eps_growth(self) -> float | None:
        return self.get("GROWTH_EPS")

    @property
    def div_yield(self) -> float | None:
        return self.get("DIVIDEND_YIELD")

    @property
    def beta(self) -> float | None:
        return self.get("BETA")

    @property
    def correlation(self) -> float | None:
        return self.get("CORRELATION")

    @property
    def age_in_days(self) -> int | None:
        return self.diff_in_days(self.get("DATE_ANALYSIS"))


class TechnicalAnalysisPartial(Partial):
    """Indicators from the technical analysis (TechnicalAnalysisV1)."""

    FIELDS = ("rsi", "momentum", "moving_averages", "trend", "age_in_days")

    @property
    def rsi(self) -> float | None:
        """Relative strength index over 25 days."""
        return self.get("RSI_25")

    @property
    def momentum(self) -> float | None:
        return self.get("MOMENTUM_250")

    @property
    def moving_averages(self) -> list | None:
        """The 38, 100 and 200 day moving averages."""
        return prune([
            self.get("MOVING_AVERAGE_38"),
            self.get("MOVING_AVERAGE_100"),
            self.get("MOVING_AVERAGE_200"),
        ])

    @property
    def trend(self) -> float | None:
        """Gap between the 200 and the 38 day average, in percent.

        Positive while the short average runs above the long one.
        """
        return ratio_delta(self.get("MOVING_AVERAGE_200"), self.get("MOVING_AVERAGE_38"))

    @property
    def age_in_days(self) -> int | None:
        return self.diff_in_days(self.get("DATE_ANALYSIS"))


class TradingCentralPartial(Partial):
    """Trading Central analysis of a stock (TradingCentralV1).

    All derived values are None as a whole if the sub-record is empty.
    """

    FIELDS = ("pivot", "supports", "resistors", "short_term", "medium_term", "age_in_days")

    @property
    def pivot(self) -> float | None:
        """The price where to buy into the stock."""
        if not self.available:
            return None
        return self.get("PIVOT")

    @property
    def supports(self) -> list | None:
        """The support values where to buy in."""
        if not self.available:
            return None
        return prune([self.get("SUPPORT_1"), self.get("SUPPORT_2"), self.get("SUPPORT_3")])

    @property
    def resistors(self) -> list | None:
        """The resistance values where to be notified."""
        if not self.available:
            return None
        return prune([self.get("RESISTANCE_1"), self.get("RESISTANCE_2"), self.get("RESISTANCE_3")])

    @property
    def short_term(self) -> dict[str, Any] | None:
        """The short term potential (2-4 weeks)."""
        if not self.available:
            return None
        return prune({"delta": self.get("DELTA_SHORTTERM"), "opinion": self.get("OPINION_SHORTTERM")})

    @property
    def medium_term(self) -> dict[str, Any] | None:
        """The medium term potential (3-6 months)."""
        if not self.available:
            return None
        return prune({"delta": self.get("DELTA_MEDIUMTERM"), "opinion": self.get("OPINION_MEDIUMTERM")})

    @property
    def age_in_days(self) -> int | None:
        """Days since the last update of the analysis."""
        if not self.available:
            return None
        return self.diff_in_days(self.get("DATE_ANALYSIS"))
