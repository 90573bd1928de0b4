"""Base view over one raw sub-record of a stock."""
import logging
import math
from datetime import date, datetime, timezone
from numbers import Real
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def parse_date(value: Any) -> date | None:
    """Parse an ISO-8601 date or date-time into a calendar date.

    Returns None for missing or unparsable values.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        pass

    # The API sometimes sends offsets without a colon (+0200)
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%dT%H:%M:%S%z").date()
    except ValueError:
        return None


def is_number(value: Any) -> bool:
    """True for ints and floats, False for bools and everything else."""
    return isinstance(value, Real) and not isinstance(value, bool)


def ratio_delta(numerator: Any, denominator: Any) -> float | None:
    """Percentage gap between two values: 100 - numerator / denominator * 100.

    Returns None unless both operands are numbers, the denominator is not
    zero and the result is finite.
    """
    if not is_number(numerator) or not is_number(denominator):
        return None
    if denominator == 0:
        return None

    try:
        delta = 100 - numerator / denominator * 100
    except OverflowError:
        return None

    if not math.isfinite(delta):
        return None

    return round(delta, 2)


def prune(structure: list | tuple | dict) -> list | tuple | dict | None:
    """Collapse a group of values to None if every member is None.

    Groups with at least one value are returned unchanged, missing
    members included.
    """
    members = structure.values() if isinstance(structure, dict) else structure

    if all(member is None for member in members):
        return None

    return structure


class Partial:
    """Read-only view over a partial aspect of a stock.

    Wraps the raw mapping of one field group. Construction never fails and
    accessors never raise: missing or degenerate data yields None.

    Subclasses list their public accessors in FIELDS so a serializer can
    walk them by name.
    """

    FIELDS: tuple[str, ...] = ()

    def __init__(self, data: Mapping[str, Any] | None = None, clock: Clock | None = None):
        self._data = dict(data) if isinstance(data, Mapping) else {}
        self._clock = clock or utc_now

    @classmethod
    def from_envelope(cls, record: Mapping[str, Any] | None, key: str, clock: Clock | None = None):
        """Build the view from the V1 envelope of a raw record.

        The API wraps each field group in a list holding one object, e.g.
        {"PriceV1": [{"PRICE": 97.8}]}.
        """
        return cls(unwrap(record, key), clock)

    @property
    def data(self) -> dict[str, Any]:
        """Raw sub-record."""
        return self._data

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def available(self) -> bool:
        """If there are informations within the wrapped data."""
        return bool(self._data)

    def get(self, key: str) -> Any:
        """Raw value of a key, or None."""
        return self._data.get(key)

    def diff_in_days(self, value: Any) -> int | None:
        """Whole days from the given date until now.

        Negative for dates in the future. None if the value is missing or
        not a date.
        """
        then = parse_date(value)
        if then is None:
            return None

        return (self._clock().date() - then).days

    def __getitem__(self, name: str) -> Any:
        """Value of the accessor with that name.

        None for unknown names and for accessors that fail on odd data.
        """
        if name not in self.FIELDS:
            return None

        try:
            return getattr(self, name)
        except (ArithmeticError, TypeError, ValueError) as e:
            logger.debug(f"{type(self).__name__}.{name} failed: {e!r}")
            return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


def unwrap(record: Mapping[str, Any] | None, key: str) -> dict[str, Any]:
    """First object of a V1 envelope, or an empty dict."""
    if not isinstance(record, Mapping):
        return {}

    envelope = record.get(key)
    if isinstance(envelope, Mapping):
        return dict(envelope)
    if isinstance(envelope, list) and envelope and isinstance(envelope[0], Mapping):
        return dict(envelope[0])

    return {}
