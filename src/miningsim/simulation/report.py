"""Final statistics of a completed run."""

from dataclasses import dataclass, field
from typing import Any, Optional

from miningsim.models.enums import Activity


@dataclass
class TruckReport:
    """Time breakdown for one truck."""

    truck_id: int
    waiting_ticks: int
    unloading_ticks: int
    traveling_ticks: int
    mining_ticks: int
    packed_ledger: int
    total_ticks: int
    first_unload_tick: Optional[int] = None
    last_unload_tick: Optional[int] = None

    def ticks(self, activity: Activity) -> int:
        return getattr(self, f"{activity.value}_ticks")

    def percent(self, activity: Activity) -> float:
        """Share of the run spent in an activity, in percent."""
        return self.ticks(activity) / self.total_ticks * 100

    @property
    def waiting_pct(self) -> float:
        return self.percent(Activity.WAITING)

    @property
    def unloading_pct(self) -> float:
        return self.percent(Activity.UNLOADING)

    @property
    def traveling_pct(self) -> float:
        return self.percent(Activity.TRAVELING)

    @property
    def mining_pct(self) -> float:
        return self.percent(Activity.MINING)

    @property
    def cycle_ticks(self) -> Optional[float]:
        """Mean ticks between consecutive unloads, or None with fewer than two."""
        if self.unloading_ticks < 2 or self.first_unload_tick is None:
            return None
        span = self.last_unload_tick - self.first_unload_tick
        return span / (self.unloading_ticks - 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "truck_id": self.truck_id,
            "waiting_ticks": self.waiting_ticks,
            "unloading_ticks": self.unloading_ticks,
            "traveling_ticks": self.traveling_ticks,
            "mining_ticks": self.mining_ticks,
            "waiting_pct": self.waiting_pct,
            "unloading_pct": self.unloading_pct,
            "traveling_pct": self.traveling_pct,
            "mining_pct": self.mining_pct,
            "packed_ledger": self.packed_ledger,
            "cycle_ticks": self.cycle_ticks,
        }

    def summary(self) -> str:
        return "\n".join([
            f"Truck {self.truck_id}:",
            f"  Waiting:   {self.waiting_pct:.2f}%",
            f"  Unloading: {self.unloading_pct:.2f}%",
            f"  Traveling: {self.traveling_pct:.2f}%",
            f"  Mining:    {self.mining_pct:.2f}%",
        ])


@dataclass
class StationReport:
    """Throughput of one station."""

    station_id: int
    unloaded_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"station_id": self.station_id, "unloaded_count": self.unloaded_count}

    def summary(self) -> str:
        return f"Station {self.station_id}: {self.unloaded_count} trucks unloaded"


@dataclass
class SimulationReport:
    """Per-truck utilisation and per-station throughput for one run."""

    total_ticks: int
    trucks: list[TruckReport] = field(default_factory=list)
    stations: list[StationReport] = field(default_factory=list)

    @property
    def total_unloaded(self) -> int:
        return sum(s.unloaded_count for s in self.stations)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialisation."""
        return {
            "total_ticks": self.total_ticks,
            "trucks": [t.to_dict() for t in self.trucks],
            "stations": [s.to_dict() for s in self.stations],
        }

    def trucks_to_dataframe(self):
        """Export truck utilisation to pandas DataFrame."""
        import pandas as pd
        return pd.DataFrame([t.to_dict() for t in self.trucks])

    def stations_to_dataframe(self):
        """Export station throughput to pandas DataFrame."""
        import pandas as pd
        return pd.DataFrame([s.to_dict() for s in self.stations])

    def summary(self) -> str:
        """Generate human-readable per-truck and per-station listing."""
        lines = ["=== Truck Utilisation ===", ""]
        for truck in self.trucks:
            lines.append(truck.summary())
            lines.append("")
        lines.extend(["=== Station Throughput ===", ""])
        lines.extend(s.summary() for s in self.stations)
        return "\n".join(lines)
