"""Unloading stations."""

from dataclasses import dataclass


@dataclass
class Station:
    """An unloading station with a single queue.

    queue_length counts the trucks still ahead at the station; it drains
    by one every tick and never goes below zero.
    """

    station_id: int
    queue_length: int = 0
    unloaded_count: int = 0

    def increment_queue(self) -> None:
        """A truck joined the queue."""
        self.queue_length += 1

    def decrement_queue(self) -> None:
        """Drain one tick of queue, saturating at zero."""
        if self.queue_length > 0:
            self.queue_length -= 1

    def increment_unloaded(self) -> None:
        """A truck finished unloading here."""
        self.unloaded_count += 1
