"""Haul truck state machine.

A truck cycles Mining -> TravelToStation -> (Waiting) -> Unloading ->
TravelToMining -> Mining, advancing exactly one step per tick. Every
tick is charged to one ledger activity.
"""

import logging
from typing import Optional

from miningsim.exceptions import UnreachableStateError
from miningsim.models.config import TRAVEL_TIME
from miningsim.models.enums import Activity, EventType, TruckState
from miningsim.simulation.allocator import RoundRobinAllocator
from miningsim.simulation.events import EventLog
from miningsim.simulation.ledger import TimeLedger
from miningsim.simulation.sampling import DurationSampler

logger = logging.getLogger(__name__)


class Truck:
    """Runtime state for one haul truck.

    A new truck starts in the Mining state with its first mining time
    already drawn from the shared sampler.

    Args:
        truck_id: Position of the truck in the fleet
        sampler: Shared mining-time source
    """

    def __init__(self, truck_id: int, sampler: DurationSampler):
        self.truck_id = truck_id
        self.state = TruckState.MINING
        self.timer = sampler.sample()
        self.assigned_station: Optional[int] = None
        self.ledger = TimeLedger()
        self.first_unload_tick: Optional[int] = None
        self.last_unload_tick: Optional[int] = None

    @property
    def name(self) -> str:
        return f"TRUCK_{self.truck_id:04d}"

    def step(
        self,
        allocator: RoundRobinAllocator,
        sampler: DurationSampler,
        tick: int = 0,
        event_log: Optional[EventLog] = None,
    ) -> None:
        """Advance the truck by one tick.

        Args:
            allocator: Station cursor and station list shared by the fleet
            sampler: Shared mining-time source
            tick: Current tick number, used for unload times and event records
            event_log: Where to record transitions (None disables recording)

        Raises:
            UnreachableStateError: If the truck holds an unknown state
        """
        if self.state == TruckState.MINING:
            self.timer -= 1
            self.ledger.record(Activity.MINING)

            if self.timer == 0:
                self.timer = TRAVEL_TIME
                self.state = TruckState.TRAVEL_TO_STATION
                self._log(event_log, tick, EventType.MINING_COMPLETED)

        elif self.state == TruckState.TRAVEL_TO_STATION:
            self.timer -= 1
            self.ledger.record(Activity.TRAVELING)

            if self.timer == 0:
                # Wait one tick per truck already queued at the offered station
                self.assigned_station, self.timer = allocator.admit()
                self.state = TruckState.WAITING if self.timer else TruckState.UNLOADING
                logger.debug(
                    "%s arrived at station %d with %d ahead",
                    self.name, self.assigned_station, self.timer,
                )
                self._log(
                    event_log, tick, EventType.ARRIVED_AT_STATION,
                    station=self.assigned_station, queue_ahead=self.timer,
                )

        elif self.state == TruckState.WAITING:
            self.timer -= 1
            self.ledger.record(Activity.WAITING)

            if self.timer == 0:
                self.state = TruckState.UNLOADING
                self._log(
                    event_log, tick, EventType.QUEUE_CLEARED,
                    station=self.assigned_station,
                )

        elif self.state == TruckState.UNLOADING:
            # Unloading always takes a single tick
            self.ledger.record(Activity.UNLOADING)
            allocator.stations[self.assigned_station].increment_unloaded()
            if self.first_unload_tick is None:
                self.first_unload_tick = tick
            self.last_unload_tick = tick
            self._log(
                event_log, tick, EventType.UNLOADING_COMPLETED,
                station=self.assigned_station,
            )
            self.timer = TRAVEL_TIME
            self.state = TruckState.TRAVEL_TO_MINING

        elif self.state == TruckState.TRAVEL_TO_MINING:
            self.timer -= 1
            self.ledger.record(Activity.TRAVELING)

            if self.timer == 0:
                self.timer = sampler.sample()
                self.state = TruckState.MINING
                self._log(
                    event_log, tick, EventType.ARRIVED_AT_MINE,
                    mining_ticks=self.timer,
                )

        else:
            logger.error("%s reached unknown state %r", self.name, self.state)
            raise UnreachableStateError(
                f"{self.name} is in state {self.state!r}, which should not be reached"
            )

    def _log(
        self,
        event_log: Optional[EventLog],
        tick: int,
        event_type: EventType,
        station: Optional[int] = None,
        **details,
    ) -> None:
        if event_log is not None:
            event_log.log_event(tick, event_type, self.name, station=station, **details)

    def __repr__(self) -> str:
        return (
            f"Truck({self.truck_id}, state={self.state.value}, "
            f"timer={self.timer}, station={self.assigned_station})"
        )
