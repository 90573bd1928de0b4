"""Orchestrator for fanning out scrape work across worker processes."""
import logging
import multiprocessing
import time
from multiprocessing.connection import Connection
from typing import Callable, Iterable, Sequence

from stock_scraper.collectors.consors.collector import CollectorSettings, collect
from stock_scraper.core.config import Config
from stock_scraper.core.drop_box import FileDropBox
from stock_scraper.models import FIELDS, Field, parse_fields

logger = logging.getLogger(__name__)

# Runs in a worker process: (batches, settings) -> number of stocks written
Worker = Callable[[list[list[str]], CollectorSettings], int]


def partition(items: Sequence, size: int) -> list[list]:
    """Split items into consecutive chunks of at most size elements."""
    size = max(1, size)
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def distribute(batches: list[list[str]], max_workers: int | None) -> list[list[list[str]]]:
    """Group batches into worker assignments.

    One batch per worker unless max_workers caps the number of workers, in
    which case consecutive batches share a worker.
    """
    if not max_workers or max_workers >= len(batches):
        return [[batch] for batch in batches]

    per_worker = -(-len(batches) // max_workers)
    return partition(batches, per_worker)


def report(conn: Connection, worker: Worker, batches: list[list[str]], settings: CollectorSettings) -> None:
    """Worker process entry point: run the worker and send its count once."""
    try:
        count = worker(batches, settings)
        conn.send(int(count))
    finally:
        conn.close()


class Orchestrator:
    """Partitions ISINs, starts one process per assignment and sums their counts.

    Responsibilities:
    1. Split the ISIN list into request batches
    2. Start the worker processes, each with its own result pipe
    3. Wait for them up to a shared deadline
    4. Add up the counts that were reported in time
    """

    def __init__(self, config: Config | None = None, worker: Worker = collect):
        """Initialize the orchestrator.

        Args:
            config: System configuration (defaults when omitted)
            worker: Callable run inside each worker process
        """
        self.config = config or Config.default()
        self.worker = worker
        self.drop_box = FileDropBox(self.config.drop_box.path)
        self._context = multiprocessing.get_context(self.config.scraper.start_method)

        logger.debug(
            "INIT: Orchestrator initialized",
            extra={
                "extra_data": {
                    "action": "orchestrator_init",
                    "drop_box": self.config.drop_box.path,
                    "timeout": self.config.scraper.timeout,
                    "max_workers": self.config.scraper.max_workers,
                }
            },
        )

    def run(
        self,
        isins: Sequence[str],
        fields: Iterable[Field | str] = FIELDS,
        concurrent: int = 200,
        parallel: int = 1,
    ) -> int:
        """Scrape the stocks and write them into the drop box.

        Example:
            Orchestrator().run(["US30303M1027"], fields=["PriceV1"])

        Args:
            isins: ISIN numbers of the stocks
            fields: Subset of the field groups
            concurrent: Max number of concurrent requests per worker
            parallel: Max number of stocks per request

        Returns:
            Total number of scraped stocks
        """
        isins = list(isins)
        if not isins:
            return 0

        batches = partition(isins, parallel or 1)
        assignments = distribute(batches, self.config.scraper.max_workers)
        settings = CollectorSettings(
            drop_box=self.config.drop_box.path,
            fields=parse_fields(fields),
            concurrent=max(1, concurrent or 1),
            base_url=self.config.api.base_url,
            request_timeout=self.config.api.request_timeout,
        )

        try:
            self.drop_box.ensure()
        except OSError as e:
            logger.error(f"Cannot create drop box {self.drop_box.base_path}: {e}")
            return 0

        logger.info(
            f"Scraping {len(isins)} stocks in {len(batches)} requests "
            f"across {len(assignments)} workers"
        )

        start_time = time.time()
        processes, pipes = self._start_workers(assignments, settings)
        self._wait_for(processes, timeout=self.config.scraper.timeout)
        total = self._sum_scraped_stocks(pipes)

        elapsed = time.time() - start_time
        logger.info(f"SCRAPE COMPLETE: {total}/{len(isins)} stocks in {elapsed:.1f}s")

        return total

    def _start_workers(
        self,
        assignments: list[list[list[str]]],
        settings: CollectorSettings,
    ) -> tuple[list[multiprocessing.Process], list[Connection]]:
        """Start one daemon process per assignment with a one-way pipe.

        Stops starting workers once the OS refuses a pipe or a process,
        e.g. when running out of file descriptors. The workers started so
        far keep running.
        """
        processes = []
        pipes = []

        for index, batches in enumerate(assignments):
            try:
                reader, writer = self._context.Pipe(duplex=False)
            except OSError as e:
                logger.warning(f"Cannot create pipe for worker {index}: {e}")
                break

            try:
                process = self._context.Process(
                    target=report,
                    args=(writer, self.worker, batches, settings),
                    daemon=True,
                )
                process.start()
            except OSError as e:
                reader.close()
                writer.close()
                logger.warning(
                    f"Cannot start worker {index}: {e}. "
                    f"Skipping {len(assignments) - index} of {len(assignments)} workers"
                )
                break

            # The child owns the write end now
            writer.close()

            processes.append(process)
            pipes.append(reader)

            logger.debug(
                "STEP: Worker started",
                extra={
                    "extra_data": {
                        "action": "worker_start",
                        "pid": process.pid,
                        "batches": len(batches),
                    }
                },
            )

        return processes, pipes

    def _wait_for(self, processes: list[multiprocessing.Process], timeout: float) -> None:
        """Join the processes until all exited or the deadline passed.

        Processes still running afterwards are left alone.
        """
        deadline = time.monotonic() + timeout

        for process in processes:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            process.join(remaining)

        running = [p.pid for p in processes if p.is_alive()]
        if running:
            logger.warning(f"Timeout after {timeout}s, {len(running)} workers still running: {running}")

    def _sum_scraped_stocks(self, pipes: list[Connection]) -> int:
        """Add up the counts reported so far. Silent workers count as 0."""
        total = 0

        for reader in pipes:
            try:
                if reader.poll():
                    total += reader.recv()
            except EOFError:
                logger.debug("Worker exited without reporting")
            finally:
                reader.close()

        return total
