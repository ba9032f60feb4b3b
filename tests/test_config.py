"""Tests for settings and the shared control config store."""

import pytest

from app.config import ConfigStore, Settings
from app.models import ControlConfig, ControlConfigUpdate, ControlMode, Orientation


class TestConfigStore:
    def test_initial_value(self, store):
        config = store.current()
        assert config.control_mode == ControlMode.AUTOMATIC
        assert config.manual_orientation == Orientation(azimuth=0.0, inclination=0.0)

    def test_merge_control_mode_keeps_orientation(self):
        store = ConfigStore(
            ControlConfig(manual_orientation=Orientation(azimuth=120.0, inclination=30.0))
        )
        merged = store.merge(ControlConfigUpdate.model_validate({"controlMode": "MANUAL"}))

        assert merged is store.current()
        assert merged.control_mode == ControlMode.MANUAL
        assert merged.manual_orientation == Orientation(azimuth=120.0, inclination=30.0)

    def test_orientation_replaced_wholesale(self):
        store = ConfigStore(
            ControlConfig(manual_orientation=Orientation(azimuth=120.0, inclination=30.0))
        )
        store.merge(ControlConfigUpdate.model_validate({"manualOrientation": {"azimuth": 45}}))

        # inclination falls back to the model default, not the stored 30
        assert store.current().manual_orientation == Orientation(azimuth=45.0, inclination=0.0)
        assert store.current().control_mode == ControlMode.AUTOMATIC

    def test_unknown_and_null_fields_ignored(self, store):
        before = store.current()
        update = ControlConfigUpdate.model_validate(
            {"controlMode": None, "brightness": 11, "sunOrientation": {"azimuth": 1}}
        )
        assert store.merge(update) == before

    def test_previous_snapshots_are_untouched(self, store):
        before = store.current()
        store.merge(ControlConfigUpdate(control_mode=ControlMode.MANUAL))
        assert before.control_mode == ControlMode.AUTOMATIC

    def test_wire_shape(self, store):
        assert store.current().model_dump(mode="json", by_alias=True) == {
            "controlMode": "AUTOMATIC",
            "manualOrientation": {"azimuth": 0.0, "inclination": 0.0},
        }


class TestSettings:
    def test_port_default(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        assert Settings(_env_file=None).port == 8080

    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")
        assert Settings(_env_file=None).port == 9090

    @pytest.mark.parametrize("value", ["", "not-a-port", "80.5"])
    def test_unparsable_port_falls_back(self, monkeypatch, value):
        monkeypatch.setenv("PORT", value)
        assert Settings(_env_file=None).port == 8080
