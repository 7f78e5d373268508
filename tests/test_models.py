"""Tests for miningsim configuration models."""

import json

import pytest
from pydantic import ValidationError

from miningsim.models import (
    MAX_TICKS,
    SimulationConfig,
    TruckState,
    load_config,
    save_config,
)


class TestSimulationConfig:
    def test_defaults(self):
        config = SimulationConfig(truck_count=5, station_count=2)
        assert config.total_ticks == MAX_TICKS == 864
        assert config.debug is False
        assert config.random_seed is None
        assert config.record_events is False
        assert config.log_level == "INFO"

    def test_duration_is_72_hours(self):
        config = SimulationConfig(truck_count=1, station_count=1)
        assert config.duration_mins == 4320
        assert config.duration_hours == 72.0

    @pytest.mark.parametrize("field", ["truck_count", "station_count"])
    def test_counts_must_be_positive(self, field):
        data = {"truck_count": 1, "station_count": 1, field: 0}
        with pytest.raises(ValidationError):
            SimulationConfig(**data)

    @pytest.mark.parametrize("field", ["truck_count", "station_count"])
    def test_counts_fit_sixteen_bits(self, field):
        data = {"truck_count": 1, "station_count": 1}
        SimulationConfig(**{**data, field: 65535})
        with pytest.raises(ValidationError):
            SimulationConfig(**{**data, field: 65536})

    def test_counts_required(self):
        with pytest.raises(ValidationError):
            SimulationConfig(truck_count=3)

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(truck_count=1, station_count=1, loaders=2)

    def test_log_level_normalised(self):
        config = SimulationConfig(truck_count=1, station_count=1, log_level=" debug ")
        assert config.log_level == "DEBUG"

    def test_bad_log_level_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(truck_count=1, station_count=1, log_level="LOUD")

    def test_summary_mentions_topology(self):
        config = SimulationConfig(truck_count=7, station_count=3, random_seed=11)
        text = config.summary()
        assert "Trucks:   7" in text
        assert "Stations: 3" in text
        assert "72 hours" in text
        assert "Seed:     11" in text


class TestConfigFiles:
    def test_save_and_load(self, tmp_path):
        config = SimulationConfig(
            truck_count=12, station_count=4, debug=True, random_seed=99
        )
        path = tmp_path / "configs" / "run.json"
        save_config(config, str(path))

        assert path.exists()
        loaded = load_config(str(path))
        assert loaded == config

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.json"))

    def test_load_invalid_content(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"truck_count": -1, "station_count": 1}))
        with pytest.raises(ValidationError):
            load_config(str(path))


class TestTruckState:
    def test_five_states(self):
        assert [s.value for s in TruckState] == [
            "mining",
            "travel_to_station",
            "waiting",
            "unloading",
            "travel_to_mining",
        ]
