"""Consorsbank market data collector using aiohttp.

Each collector owns one client session and runs all its requests
concurrently, writing every available stock into the drop box.
"""
import asyncio
import logging
import time
from dataclasses import dataclass

import aiohttp

from stock_scraper.collectors.consors.parsers import parse_response, parse_stocks
from stock_scraper.collectors.consors.urls import url_for
from stock_scraper.core.config import BASE_URL
from stock_scraper.core.drop_box import DropBox, FileDropBox
from stock_scraper.models import FIELDS, Field
from stock_scraper.models.partial import Clock

logger = logging.getLogger(__name__)


@dataclass
class CollectorSettings:
    """Everything a worker process needs to run a collector."""

    drop_box: str
    fields: tuple[Field, ...] = FIELDS
    concurrent: int = 200
    base_url: str = BASE_URL
    request_timeout: float = 10.0


class ConsorsCollector:
    """Scrapes batches of ISINs and writes the stocks into a drop box.

    Requests are never retried. A failed request, an unreadable body or a
    failed write only lowers the returned count.
    """

    def __init__(
        self,
        settings: CollectorSettings,
        drop_box: DropBox | None = None,
        clock: Clock | None = None,
    ):
        self.settings = settings
        self.drop_box = drop_box or FileDropBox(settings.drop_box)
        self.clock = clock
        self.concurrent = max(1, settings.concurrent or 1)

        self._count = 0

        logger.debug(
            "INIT: ConsorsCollector initialized",
            extra={
                "extra_data": {
                    "action": "collector_init",
                    "drop_box": settings.drop_box,
                    "concurrent": self.concurrent,
                    "fields": [f.value for f in settings.fields],
                }
            },
        )

    @property
    def count(self) -> int:
        """Number of stocks written so far."""
        return self._count

    async def run(self, batches: list[list[str]]) -> int:
        """Scrape every batch, one request per batch.

        Args:
            batches: ISIN batches, each fetched with a single request

        Returns:
            Number of stocks written into the drop box
        """
        self._count = 0
        urls = [url_for(batch, self.settings.fields, self.settings.base_url) for batch in batches if batch]
        if not urls:
            return 0

        try:
            self.drop_box.ensure()
        except OSError as e:
            logger.error(f"Drop box not writable: {e}")
            return 0

        start_time = time.time()
        semaphore = asyncio.Semaphore(self.concurrent)
        connector = aiohttp.TCPConnector(limit=self.concurrent)
        timeout = aiohttp.ClientTimeout(total=self.settings.request_timeout)

        async with aiohttp.ClientSession(connector=connector, timeout=timeout) as session:
            results = await asyncio.gather(
                *(self._scrape(session, semaphore, url) for url in urls),
                return_exceptions=True,
            )

        for url, result in zip(urls, results):
            if isinstance(result, Exception):
                logger.error(f"Processing failed for {url}: {result!r}")

        elapsed = time.time() - start_time
        logger.info(f"Scraped {self._count} stocks with {len(urls)} requests in {elapsed:.1f}s")

        return self._count

    async def _scrape(self, session: aiohttp.ClientSession, semaphore: asyncio.Semaphore, url: str) -> None:
        """Fetch one URL and hand the response over to on_complete."""
        async with semaphore:
            logger.debug(
                "STEP: Requesting stocks",
                extra={"extra_data": {"action": "request_start", "url": url}},
            )

            try:
                async with session.get(url) as response:
                    status = response.status
                    body = await response.read()
                    effective_url = str(response.url)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.warning(f"Request failed for {url}: {e!r}")
                return

        self.on_complete(status, body, effective_url)

    def on_complete(self, status: int, body: bytes | str | None, url: str) -> int:
        """Save the stocks contained in a response.

        Args:
            status: HTTP status code
            body: Response body
            url: Effective URL of the response

        Returns:
            Number of stocks written for this response
        """
        if not 200 <= status < 300:
            logger.warning(f"HTTP {status} for {url}")

        records = parse_response(status, body)
        stocks = parse_stocks(records, url, self.settings.fields, self.clock)

        written = 0
        for stock in stocks:
            if self.drop_box.save(stock) is not None:
                written += 1

        self._count += written

        logger.debug(
            "TRANSFORM: Response processed",
            extra={
                "extra_data": {
                    "action": "response_processed",
                    "url": url,
                    "status": status,
                    "records": len(records),
                    "written": written,
                }
            },
        )

        return written


def collect(batches: list[list[str]], settings: CollectorSettings) -> int:
    """Run a collector to completion in its own event loop."""
    return asyncio.run(ConsorsCollector(settings).run(batches))
