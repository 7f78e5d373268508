"""KPI extraction and analysis for miningsim runs."""

from miningsim.analysis.kpis import FleetKPIs, compute_fleet_kpis

__all__ = [
    "FleetKPIs",
    "compute_fleet_kpis",
]
