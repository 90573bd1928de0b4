"""Main entry point for the stock scraper."""
import argparse
import logging
import sys
from pathlib import Path

from stock_scraper.core.config import ConfigError, load_config
from stock_scraper.core.orchestrator import Orchestrator
from stock_scraper.models import FIELDS

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="python -m stock_scraper",
        description="Stock scraper - Fetch stock data from Consorsbank into a drop box",
    )

    parser.add_argument(
        "isins",
        nargs="*",
        metavar="ISIN",
        help="ISIN numbers of the stocks to scrape",
    )

    parser.add_argument(
        "-c", "--config",
        default="config/default.yaml",
        help="Path to configuration file (default: config/default.yaml)",
    )

    parser.add_argument(
        "-l", "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "-f", "--file",
        help="File with one ISIN per line",
    )

    parser.add_argument(
        "--field",
        action="append",
        dest="fields",
        choices=[f.value for f in FIELDS],
        help="Field group to scrape, repeatable (default: from config)",
    )

    parser.add_argument(
        "--concurrent",
        type=int,
        help="Max number of concurrent requests per worker (default: from config)",
    )

    parser.add_argument(
        "--parallel",
        type=int,
        help="Max number of stocks per request (default: from config)",
    )

    return parser.parse_args(args)


def setup_logging(level: str) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level),
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # Reduce noise from external libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def read_isins(path: str) -> list[str]:
    """Read ISINs from a file, skipping blank lines and # comments."""
    isins = []
    for line in Path(path).read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            isins.append(line)
    return isins


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parsed_args = parse_args(args)

    setup_logging(parsed_args.log_level)

    logger.info("Stock scraper starting...")
    logger.info(f"Config: {parsed_args.config}")

    try:
        # Load configuration
        config = load_config(parsed_args.config)

        isins = list(parsed_args.isins)
        if parsed_args.file:
            isins.extend(read_isins(parsed_args.file))

        scraper = config.scraper
        orchestrator = Orchestrator(config)

        count = orchestrator.run(
            isins,
            fields=parsed_args.fields or scraper.fields,
            concurrent=parsed_args.concurrent if parsed_args.concurrent is not None else scraper.concurrent,
            parallel=parsed_args.parallel if parsed_args.parallel is not None else scraper.parallel,
        )

        print(count)
        return 0

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    except OSError as e:
        logger.error(f"Cannot read ISIN file: {e}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0

    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
