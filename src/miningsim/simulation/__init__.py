"""SimPy-driven tick simulation engine for miningsim."""

from miningsim.simulation.events import SimEvent, EventLog
from miningsim.simulation.ledger import TimeLedger
from miningsim.simulation.report import SimulationReport, StationReport, TruckReport
from miningsim.simulation.sampling import MiningTimeSampler
from miningsim.simulation.engine import SimulationEngine

__all__ = [
    "SimulationEngine",
    "SimulationReport",
    "StationReport",
    "TruckReport",
    "TimeLedger",
    "MiningTimeSampler",
    "SimEvent",
    "EventLog",
]
