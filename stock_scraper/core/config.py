"""Configuration loading and validation."""
import logging
import multiprocessing
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from stock_scraper.models import FIELDS, Field, parse_fields

logger = logging.getLogger(__name__)

BASE_URL = "https://www.consorsbank.de/ev/rest/de/marketdata/stocks"


class ConfigError(Exception):
    """Raised when configuration is invalid."""

    pass


@dataclass
class ApiConfig:
    """Market data API configuration."""

    base_url: str = BASE_URL
    request_timeout: float = 10.0


@dataclass
class DropBoxConfig:
    """Where scraped stocks are written to."""

    path: str = "tmp/stocks"


@dataclass
class ScraperConfig:
    """Fan-out configuration.

    `concurrent` caps in-flight requests per worker process. `parallel` is
    the number of ISINs per request. `max_workers` limits the number of
    worker processes; None starts one worker per request batch.
    """

    timeout: float = 20.0
    concurrent: int = 200
    parallel: int = 1
    max_workers: int | None = None
    start_method: str | None = None
    fields: tuple[Field, ...] = FIELDS


@dataclass
class Config:
    """Main configuration container."""

    api: ApiConfig = field(default_factory=ApiConfig)
    drop_box: DropBoxConfig = field(default_factory=DropBoxConfig)
    scraper: ScraperConfig = field(default_factory=ScraperConfig)

    @classmethod
    def default(cls) -> "Config":
        """Configuration with every default value."""
        return cls()


def _int_option(section: dict, key: str, default: int | None) -> int | None:
    value = section.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Invalid value for {key}: {value!r} (expected an integer)")
    return value


def _positive_float(section: dict, key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"Invalid value for {key}: {value!r} (expected a positive number)")
    return float(value)


def load_config(path: str) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        Config object with validated configuration

    Raises:
        ConfigError: If file not found, invalid YAML, or missing required fields
    """
    config_path = Path(path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}") from e

    if raw is None:
        raise ConfigError("Configuration file is empty")

    if not isinstance(raw, dict):
        raise ConfigError("Configuration file must contain a mapping")

    # Validate required sections
    required_sections = ["api", "drop_box", "scraper"]
    for section in required_sections:
        if section not in raw:
            raise ConfigError(f"Missing required configuration section: {section}")
        if raw[section] is None:
            raw[section] = {}
        if not isinstance(raw[section], dict):
            raise ConfigError(f"Configuration section {section} must be a mapping")

    # Parse API config
    api_raw = raw["api"]
    api = ApiConfig(
        base_url=api_raw.get("base_url", BASE_URL),
        request_timeout=_positive_float(api_raw, "request_timeout", 10.0),
    )

    # Parse drop box config
    drop_box = DropBoxConfig(path=str(raw["drop_box"].get("path", "tmp/stocks")))

    # Parse scraper config
    scraper_raw = raw["scraper"]
    raw_fields = scraper_raw.get("fields")
    if raw_fields is None:
        fields = FIELDS
    elif isinstance(raw_fields, list):
        fields = parse_fields(raw_fields)
        known = {f.value for f in fields}
        unknown = [f for f in raw_fields if not isinstance(f, str) or f not in known]
        if unknown:
            logger.warning(f"Ignoring unknown field groups: {unknown}")
    else:
        raise ConfigError("scraper.fields must be a list of field group names")

    start_method = scraper_raw.get("start_method")
    if start_method is not None and start_method not in multiprocessing.get_all_start_methods():
        raise ConfigError(
            f"Invalid value for start_method: {start_method!r} "
            f"(expected one of {multiprocessing.get_all_start_methods()})"
        )

    scraper = ScraperConfig(
        timeout=_positive_float(scraper_raw, "timeout", 20.0),
        concurrent=_int_option(scraper_raw, "concurrent", 200),
        parallel=_int_option(scraper_raw, "parallel", 1),
        max_workers=_int_option(scraper_raw, "max_workers", None),
        start_method=start_method,
        fields=fields,
    )

    config = Config(api=api, drop_box=drop_box, scraper=scraper)

    logger.info(f"Loaded configuration from {path}")
    logger.debug(f"API: {api.base_url} (timeout={api.request_timeout}s)")
    logger.debug(f"Drop box: {drop_box.path}")
    logger.debug(
        f"Scraper: concurrent={scraper.concurrent}, parallel={scraper.parallel}, "
        f"max_workers={scraper.max_workers}, timeout={scraper.timeout}s"
    )

    return config
