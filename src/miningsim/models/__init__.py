"""Configuration models and enumerations for miningsim"""

from miningsim.models.enums import Activity, EventType, TruckState
from miningsim.models.config import (
    MAX_TICKS,
    MINUTES_PER_TICK,
    TRAVEL_TIME,
    SimulationConfig,
    load_config,
    save_config,
)

__all__ = [
    # Enums
    "Activity",
    "EventType",
    "TruckState",
    # Config
    "MAX_TICKS",
    "MINUTES_PER_TICK",
    "TRAVEL_TIME",
    "SimulationConfig",
    "load_config",
    "save_config",
]
