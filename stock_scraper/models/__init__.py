"""Data models for the stock scraper."""

from stock_scraper.models.fields import BASIC, FIELDS, Field, parse_fields
from stock_scraper.models.partial import Partial, prune, ratio_delta
from stock_scraper.models.price import BasicPartial, PricePartial
from stock_scraper.models.history import HistoryPartial, PerformancePartial, PeriodPartial
from stock_scraper.models.events import EventPartial, EventsPartial
from stock_scraper.models.analysis import (
    RecommendationPartial,
    ScreenerAnalysisPartial,
    ScreenerPartial,
    TechnicalAnalysisPartial,
    TradingCentralPartial,
)
from stock_scraper.models.stock import Stock

__all__ = [
    "BASIC",
    "FIELDS",
    "Field",
    "parse_fields",
    "Partial",
    "prune",
    "ratio_delta",
    "BasicPartial",
    "PricePartial",
    "PeriodPartial",
    "PerformancePartial",
    "HistoryPartial",
    "EventPartial",
    "EventsPartial",
    "RecommendationPartial",
    "ScreenerPartial",
    "ScreenerAnalysisPartial",
    "TechnicalAnalysisPartial",
    "TradingCentralPartial",
    "Stock",
]
