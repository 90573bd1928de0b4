"""Drop box protocol and implementations."""
import logging
import uuid
from pathlib import Path
from typing import Protocol, runtime_checkable

from stock_scraper.core.serializer import Serializer
from stock_scraper.models import Stock

logger = logging.getLogger(__name__)


@runtime_checkable
class DropBox(Protocol):
    """Protocol for the place scraped stocks are written to."""

    def ensure(self) -> None:
        """Create the destination if it doesn't exist."""
        ...

    def save(self, stock: Stock) -> Path | None:
        """Persist a stock. Returns where it went, or None if nothing was written."""
        ...


class FileDropBox:
    """Writes one JSON file per stock into a directory.

    File names combine the ISIN with a random UUID, so concurrent writers
    never collide: <isin>-<uuid>.json
    """

    def __init__(self, base_path: str | Path, serializer: Serializer | None = None):
        self.base_path = Path(base_path)
        self.serializer = serializer or Serializer()

    def ensure(self) -> None:
        """Create the directory if it doesn't exist."""
        self.base_path.mkdir(parents=True, exist_ok=True)

    def filename_for(self, stock: Stock) -> str | None:
        """Generate a unique filename for a stock.

        Only the last path component of the ISIN is used, so a file never
        lands outside the drop box. None if the stock has no usable ISIN.

        Example:
            US30303M1027-01bff156-5e39-4c13-b35a-8380814ef07f.json
        """
        if stock.isin is None:
            return None

        name = Path(str(stock.isin).replace("\\", "/")).name
        if name in ("", ".", ".."):
            return None

        return f"{name}-{uuid.uuid4()}.json"

    def save(self, stock: Stock) -> Path | None:
        """Serialize a stock and write it into the drop box.

        Returns:
            Path of the written file, None if the stock has no ISIN,
            serialization produced nothing or the write failed
        """
        filename = self.filename_for(stock)
        if filename is None:
            logger.warning(f"Skipping stock without usable ISIN: {stock.isin!r}")
            return None

        json_string = self.serializer.serialize(stock)
        if json_string is None:
            logger.debug(f"Nothing to write for {stock.isin}")
            return None

        file_path = self.base_path / filename

        try:
            with open(file_path, "w") as f:
                f.write(json_string)
        except OSError as e:
            logger.warning(f"Failed to write {file_path}: {e}")
            return None

        logger.debug(f"Wrote stock data to {file_path}")
        return file_path
