"""Corporate event views (EventsV1)."""
from typing import Any, Iterator, Mapping

from stock_scraper.models.partial import Clock, Partial


class EventPartial(Partial):
    """A scheduled corporate event, e.g. an annual general meeting."""

    FIELDS = ("type", "name", "occurs_in")

    @property
    def type(self) -> str | None:
        return self.get("TYPE")

    @property
    def name(self) -> str | None:
        return self.get("NAME")

    @property
    def occurs_in(self) -> int | None:
        """Days left until the event takes place, negative once it passed."""
        days = self.diff_in_days(self.get("DATETIME_EVENT"))
        return None if days is None else -days


class EventsPartial(Partial):
    """List of upcoming and past events of a stock."""

    FIELDS = ("events",)

    def __init__(self, data: Mapping[str, Any] | None = None, clock: Clock | None = None):
        super().__init__(data, clock)

        items = self.get("EVENTS")
        if not isinstance(items, list):
            items = []

        self._events = [
            EventPartial(item, self.clock) for item in items if isinstance(item, Mapping)
        ]

    @property
    def events(self) -> list[EventPartial]:
        return list(self._events)

    @property
    def first(self) -> EventPartial:
        return self._events[0] if self._events else EventPartial(clock=self.clock)

    @property
    def upcoming(self) -> list[EventPartial]:
        """Events that did not take place yet."""
        return [e for e in self._events if e.occurs_in is not None and e.occurs_in >= 0]

    def __iter__(self) -> Iterator[EventPartial]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)
