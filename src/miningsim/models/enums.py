"""Enumeration types for miningsim"""

from enum import Enum


class TruckState(str, Enum):
    """Current activity of a haul truck"""

    MINING = "mining"
    """Extracting at the mining pool, timer counts down the sampled mining time"""

    TRAVEL_TO_STATION = "travel_to_station"
    """Hauling from the mining pool to an unloading station"""

    WAITING = "waiting"
    """Queued at a station behind other trucks"""

    UNLOADING = "unloading"
    """Being unloaded; lasts exactly one tick"""

    TRAVEL_TO_MINING = "travel_to_mining"
    """Returning empty to the mining pool"""


class Activity(str, Enum):
    """Ledger categories a tick can be charged to"""

    WAITING = "waiting"
    UNLOADING = "unloading"
    TRAVELING = "traveling"
    MINING = "mining"


class EventType(str, Enum):
    """Types of events recorded in the transition trace"""

    # Truck lifecycle
    MINING_COMPLETED = "mining_completed"
    ARRIVED_AT_STATION = "arrived_at_station"
    QUEUE_CLEARED = "queue_cleared"
    UNLOADING_COMPLETED = "unloading_completed"
    ARRIVED_AT_MINE = "arrived_at_mine"

    # System events
    SIMULATION_STARTED = "simulation_started"
    SIMULATION_ENDED = "simulation_ended"
