"""KPI calculations for simulation results.

This module aggregates the per-truck and per-station report of a run
into fleet-level Key Performance Indicators.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from miningsim.models.enums import Activity
from miningsim.simulation.report import SimulationReport


def _to_python(value: Any) -> Any:
    """Convert numpy scalars to native Python types for JSON serialization."""
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, dict):
        return {k: _to_python(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_python(v) for v in value]
    return value


@dataclass
class FleetKPIs:
    """Key Performance Indicators for the truck fleet and stations."""

    # Counts
    truck_count: int = 0
    station_count: int = 0
    total_ticks: int = 0
    total_unloaded: int = 0

    # Utilisation (percent of run), keyed by activity
    mean_utilisation: dict[str, float] = field(default_factory=dict)
    min_utilisation: dict[str, float] = field(default_factory=dict)
    max_utilisation: dict[str, float] = field(default_factory=dict)

    # Station throughput
    mean_unloads_per_station: Optional[float] = None
    min_unloads_per_station: Optional[int] = None
    max_unloads_per_station: Optional[int] = None
    unload_imbalance: Optional[int] = None

    # Cycle metrics
    mean_unloads_per_truck: Optional[float] = None
    mean_cycle_ticks: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialisation."""
        return _to_python({
            "truck_count": self.truck_count,
            "station_count": self.station_count,
            "total_ticks": self.total_ticks,
            "total_unloaded": self.total_unloaded,
            "mean_utilisation_pct": self.mean_utilisation,
            "min_utilisation_pct": self.min_utilisation,
            "max_utilisation_pct": self.max_utilisation,
            "mean_unloads_per_station": self.mean_unloads_per_station,
            "min_unloads_per_station": self.min_unloads_per_station,
            "max_unloads_per_station": self.max_unloads_per_station,
            "unload_imbalance": self.unload_imbalance,
            "mean_unloads_per_truck": self.mean_unloads_per_truck,
            "mean_cycle_ticks": self.mean_cycle_ticks,
        })

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "=== Fleet KPIs ===",
            "",
            f"Trucks: {self.truck_count}  Stations: {self.station_count}  "
            f"Ticks: {self.total_ticks}",
            "",
            "Utilisation (mean / min / max %):",
        ]
        for activity in Activity:
            key = activity.value
            lines.append(
                f"  {key.capitalize():<10} "
                f"{self._fmt(self.mean_utilisation.get(key))} / "
                f"{self._fmt(self.min_utilisation.get(key))} / "
                f"{self._fmt(self.max_utilisation.get(key))}"
            )
        lines.extend([
            "",
            "Station Throughput:",
            f"  Total unloaded: {self.total_unloaded}",
            f"  Mean:      {self._fmt(self.mean_unloads_per_station)}",
            f"  Min:       {self.min_unloads_per_station}",
            f"  Max:       {self.max_unloads_per_station}",
            f"  Imbalance: {self.unload_imbalance}",
            "",
            f"Mean cycle time: {self._fmt(self.mean_cycle_ticks)} ticks",
        ])
        return "\n".join(lines)

    @staticmethod
    def _fmt(value: Optional[float]) -> str:
        return f"{value:.1f}" if value is not None else "N/A"


def compute_fleet_kpis(report: SimulationReport) -> FleetKPIs:
    """Compute fleet KPIs from a completed run.

    Args:
        report: Final report returned by SimulationEngine.run()

    Returns:
        FleetKPIs with all computed metrics
    """
    kpis = FleetKPIs(
        truck_count=len(report.trucks),
        station_count=len(report.stations),
        total_ticks=report.total_ticks,
        total_unloaded=report.total_unloaded,
    )

    if report.trucks:
        df = report.trucks_to_dataframe()
        for activity in Activity:
            col = df[f"{activity.value}_pct"]
            kpis.mean_utilisation[activity.value] = col.mean()
            kpis.min_utilisation[activity.value] = col.min()
            kpis.max_utilisation[activity.value] = col.max()

        kpis.mean_unloads_per_truck = df["unloading_ticks"].mean()

        # Only trucks with two or more unloads have a completed cycle
        cycles = df["cycle_ticks"].dropna()
        if len(cycles) > 0:
            kpis.mean_cycle_ticks = cycles.mean()

    if report.stations:
        sdf = report.stations_to_dataframe()
        unloads = sdf["unloaded_count"]
        kpis.mean_unloads_per_station = unloads.mean()
        kpis.min_unloads_per_station = unloads.min()
        kpis.max_unloads_per_station = unloads.max()
        kpis.unload_imbalance = kpis.max_unloads_per_station - kpis.min_unloads_per_station

    return kpis
