"""Station allocation.

Arriving trucks are never routed by an explicit search for the shortest
queue. Instead they are offered stations in strict cyclic order, and every
queue drains by one tick at the end of each tick. Because every queue drains
at the same rate, the station under the cursor tends to be the least loaded.
"""

from miningsim.simulation.station import Station


class RoundRobinAllocator:
    """Shared round-robin cursor over the station list.

    The allocator owns the stations it cycles over; trucks receive it as a
    parameter of their step and never hold on to it.
    """

    def __init__(self, stations: list[Station]):
        if not stations:
            raise ValueError("At least one station is required")
        self.stations = stations
        self._cursor = 0

    @property
    def cursor(self) -> int:
        """Index of the station the next arrival will be offered."""
        return self._cursor

    @property
    def current(self) -> Station:
        return self.stations[self._cursor]

    def admit(self) -> tuple[int, int]:
        """Queue an arriving truck at the station under the cursor.

        Returns:
            (station index, trucks already queued there before this one)
        """
        idx = self._cursor
        station = self.stations[idx]
        ahead = station.queue_length
        station.increment_queue()
        self._cursor = (idx + 1) % len(self.stations)
        return idx, ahead

    def decay(self) -> None:
        """Drain every station queue by one tick."""
        for station in self.stations:
            station.decrement_queue()

    def min_queue_length(self) -> int:
        return min(s.queue_length for s in self.stations)

    def __len__(self) -> int:
        return len(self.stations)
