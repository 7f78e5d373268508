"""Run configuration for a mining simulation.

A SimulationConfig is the complete input for one run: fleet size, number
of unloading stations, run length and the self-check switch. Time is
measured in ticks of five minutes throughout.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

MINUTES_PER_TICK = 5
"""Real-world minutes represented by one tick"""

ONE_HOUR = 12
"""Ticks per hour"""

FIVE_HOURS = 60
"""Ticks in five hours"""

TRAVEL_TIME = 6
"""Ticks to drive between the mining pool and a station (30 minutes)"""

MIN_MINING_TIME = ONE_HOUR
"""Shortest mining stint in ticks"""

MAX_MINING_TIME = FIVE_HOURS
"""Longest mining stint in ticks"""

MAX_TICKS = 864
"""Default run length in ticks (72 hours)"""

UINT16_MAX = 65535

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class SimulationConfig(BaseModel):
    """Global simulation control parameters."""

    # Topology
    truck_count: int = Field(
        ...,
        ge=1,
        le=UINT16_MAX,
        description="Number of haul trucks in the fleet"
    )
    station_count: int = Field(
        ...,
        ge=1,
        le=UINT16_MAX,
        description="Number of unloading stations"
    )

    # Time
    total_ticks: int = Field(
        MAX_TICKS,
        ge=1,
        le=UINT16_MAX,
        description="Run length in 5-minute ticks"
    )
    random_seed: Optional[int] = Field(
        None,
        description="RNG seed for mining times (None draws from OS entropy)"
    )

    # Self-checks and output control
    debug: bool = Field(
        False,
        description="Verify the shortest-wait and tick-sum invariants during the run"
    )
    record_events: bool = Field(
        False,
        description="Record every truck transition to the event log"
    )
    log_level: str = Field(
        "INFO",
        description="Logging verbosity (DEBUG, INFO, WARNING, ERROR)"
    )

    model_config = {"extra": "forbid"}

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got '{v}'")
        return level

    @property
    def duration_mins(self) -> int:
        """Run length in minutes."""
        return self.total_ticks * MINUTES_PER_TICK

    @property
    def duration_hours(self) -> float:
        """Run length in hours."""
        return self.duration_mins / 60

    def summary(self) -> str:
        """Generate human-readable configuration summary."""
        seed = self.random_seed if self.random_seed is not None else "random"
        return "\n".join([
            "Mining simulation:",
            f"  Trucks:   {self.truck_count}",
            f"  Stations: {self.station_count}",
            f"  Duration: {self.duration_hours:g} hours ({self.total_ticks} ticks)",
            f"  Seed:     {seed}",
            f"  Debug:    {'on' if self.debug else 'off'}",
        ])


def load_config(path: str) -> SimulationConfig:
    """Load and validate a run configuration from JSON file.

    Args:
        path: Path to configuration JSON file

    Returns:
        Validated SimulationConfig instance

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If JSON doesn't match schema
    """
    import json
    from pathlib import Path

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(file_path) as f:
        data = json.load(f)

    return SimulationConfig.model_validate(data)


def save_config(config: SimulationConfig, path: str, indent: int = 2) -> None:
    """Save a run configuration to JSON file."""
    from pathlib import Path

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w") as f:
        f.write(config.model_dump_json(indent=indent))
