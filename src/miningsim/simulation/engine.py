"""SimPy-driven tick loop for the mining simulation.

This module contains the SimulationEngine class that:
1. Builds the stations, the round-robin allocator and the truck fleet
2. Runs a single clock process that advances every truck once per tick
3. Drains station queues at the end of each tick
4. Optionally self-checks the model and produces the final report
"""

import logging
from typing import Generator, Optional

import simpy

from miningsim.exceptions import SimulationError
from miningsim.models import EventType, SimulationConfig
from miningsim.models.config import ONE_HOUR
from miningsim.simulation.allocator import RoundRobinAllocator
from miningsim.simulation.checks import check_shortest_wait, check_tick_sum
from miningsim.simulation.events import EventLog
from miningsim.simulation.report import SimulationReport, StationReport, TruckReport
from miningsim.simulation.sampling import DurationSampler, MiningTimeSampler
from miningsim.simulation.station import Station
from miningsim.simulation.truck import Truck

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Main simulation engine orchestrating the tick loop.

    Usage:
        config = SimulationConfig(truck_count=10, station_count=3)
        engine = SimulationEngine(config)
        report = engine.run()

    Args:
        config: Validated run configuration
        sampler: Mining-time source shared by every truck. Defaults to a
            MiningTimeSampler seeded from config.random_seed.
    """

    def __init__(
        self,
        config: SimulationConfig,
        sampler: Optional[DurationSampler] = None,
    ):
        self.config = config
        if sampler is None:
            sampler = MiningTimeSampler(config.random_seed)
        self.sampler: DurationSampler = sampler
        self.event_log: Optional[EventLog] = EventLog() if config.record_events else None

        # SimPy environment
        self.env: Optional[simpy.Environment] = None

        # Model
        self.stations: list[Station] = []
        self.allocator: Optional[RoundRobinAllocator] = None
        self.trucks: list[Truck] = []

        self.current_tick: int = 0
        self.ticks_run: int = 0
        self._failure: Optional[SimulationError] = None

    def run(self) -> SimulationReport:
        """Execute the simulation and return the final report.

        Raises:
            SimulationError: If a self-check fails or a truck reaches an
                unknown state. No partial report is produced.
        """
        self._setup()

        logger.info(
            "Starting run: %d trucks, %d stations, %d ticks (debug=%s)",
            self.config.truck_count,
            self.config.station_count,
            self.config.total_ticks,
            self.config.debug,
        )
        if self.event_log is not None:
            self.event_log.log_event(
                0,
                EventType.SIMULATION_STARTED,
                "SYSTEM",
                trucks=self.config.truck_count,
                stations=self.config.station_count,
                total_ticks=self.config.total_ticks,
            )

        self.env.process(self._clock())
        self.env.run()

        if self._failure is not None:
            raise self._failure

        if self.config.debug:
            for truck in self.trucks:
                self._checked(check_tick_sum, truck, self.config.total_ticks)

        report = self._build_report()

        if self.event_log is not None:
            self.event_log.log_event(
                self.ticks_run,
                EventType.SIMULATION_ENDED,
                "SYSTEM",
                total_unloaded=report.total_unloaded,
            )
        logger.info(
            "Run complete after %d ticks: %d trucks unloaded",
            self.ticks_run,
            report.total_unloaded,
        )
        return report

    def _setup(self) -> None:
        """Initialise a clean model for one run."""
        self.env = simpy.Environment()
        if self.config.record_events:
            self.event_log = EventLog()
        self.stations = [Station(station_id=i) for i in range(self.config.station_count)]
        self.allocator = RoundRobinAllocator(self.stations)

        # Each truck draws its first mining time in fleet order
        self.trucks = [Truck(i, self.sampler) for i in range(self.config.truck_count)]

        self.current_tick = 0
        self.ticks_run = 0
        self._failure = None

    def _clock(self) -> Generator:
        """Advance the whole model one tick per simulated time unit."""
        try:
            for tick in range(1, self.config.total_ticks + 1):
                self._step_tick(tick)
                yield self.env.timeout(1)
        except SimulationError as exc:
            # Re-raised from run() so the exception keeps its attributes
            self._failure = exc

    def _step_tick(self, tick: int) -> None:
        self.current_tick = tick
        for truck in self.trucks:
            truck.step(self.allocator, self.sampler, tick, self.event_log)
            if self.config.debug:
                self._checked(check_shortest_wait, self.allocator)

        self.allocator.decay()
        self.ticks_run = tick

        if tick % ONE_HOUR == 0:
            logger.debug(
                "Tick %d (hour %d): cursor=%d, queues=%s",
                tick,
                tick // ONE_HOUR,
                self.allocator.cursor,
                [s.queue_length for s in self.stations],
            )

    def _checked(self, check, *args) -> None:
        try:
            check(*args)
        except SimulationError as exc:
            logger.error("Run aborted at tick %d: %s", self.current_tick, exc)
            raise

    def _build_report(self) -> SimulationReport:
        total = self.config.total_ticks
        trucks = [
            TruckReport(
                truck_id=truck.truck_id,
                waiting_ticks=truck.ledger.waiting,
                unloading_ticks=truck.ledger.unloading,
                traveling_ticks=truck.ledger.traveling,
                mining_ticks=truck.ledger.mining,
                packed_ledger=truck.ledger.pack(),
                total_ticks=total,
                first_unload_tick=truck.first_unload_tick,
                last_unload_tick=truck.last_unload_tick,
            )
            for truck in self.trucks
        ]
        stations = [
            StationReport(station_id=s.station_id, unloaded_count=s.unloaded_count)
            for s in self.stations
        ]
        return SimulationReport(total_ticks=total, trucks=trucks, stations=stations)
