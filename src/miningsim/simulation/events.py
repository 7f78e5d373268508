"""Simulation event logging.

When enabled, every truck transition is recorded to an EventLog, which
can be queried or exported for analysis after the run.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from miningsim.models.enums import EventType


@dataclass
class SimEvent:
    """A single simulation event."""

    tick: int
    """Tick on which the event occurred (1-based, 0 for run start)"""

    event_type: EventType
    """Category of event"""

    entity_id: str
    """ID of the truck involved, or SYSTEM"""

    station: Optional[int] = None
    """Station index involved (if applicable)"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional event-specific data"""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialisation."""
        return {
            "tick": self.tick,
            "event_type": self.event_type.value,
            "entity_id": self.entity_id,
            "station": self.station,
            **self.details,
        }


class EventLog:
    """Collects simulation events in the order they occur."""

    def __init__(self):
        self._events: list[SimEvent] = []

    def log(self, event: SimEvent) -> None:
        """Record an event."""
        self._events.append(event)

    def log_event(
        self,
        tick: int,
        event_type: EventType,
        entity_id: str,
        station: Optional[int] = None,
        **details: Any,
    ) -> SimEvent:
        """Convenience method to create and log an event."""
        event = SimEvent(
            tick=tick,
            event_type=event_type,
            entity_id=entity_id,
            station=station,
            details=details,
        )
        self.log(event)
        return event

    @property
    def events(self) -> list[SimEvent]:
        """All events in the order they were recorded."""
        return list(self._events)

    def filter_by_type(self, event_type: EventType) -> list[SimEvent]:
        """Get events of a specific type."""
        return [e for e in self._events if e.event_type == event_type]

    def filter_by_entity(self, entity_id: str) -> list[SimEvent]:
        """Get events for a specific truck."""
        return [e for e in self._events if e.entity_id == entity_id]

    def filter_by_station(self, station: int) -> list[SimEvent]:
        return [e for e in self._events if e.station == station]

    def to_list(self) -> list[dict[str, Any]]:
        """Export all events as list of dicts."""
        return [e.to_dict() for e in self._events]

    def to_dataframe(self):
        """Export events to pandas DataFrame."""
        import pandas as pd
        return pd.DataFrame(self.to_list())

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        return f"EventLog({len(self._events)} events)"
