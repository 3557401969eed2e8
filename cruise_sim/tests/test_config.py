import json

import pytest
from cruise_sim.config import (
    SIM_TICK_S, DisturbanceProfile, VehicleProfile, get_disturbance_profile,
    get_vehicle_profile, load_vehicle_profile,
)


class TestConfig:

    def test_defaults(self):
        profile = VehicleProfile()
        assert SIM_TICK_S == 0.02
        assert profile.mass == 1406.0
        assert profile.gear_ratio == pytest.approx(0.11 / 0.065)
        assert DisturbanceProfile().wind_std == pytest.approx(40.0 / 3)

    def test_named_profiles(self):
        assert get_vehicle_profile() == VehicleProfile()
        assert get_disturbance_profile('calm').max_wind_speed == 0.0
        with pytest.raises(ValueError):
            get_vehicle_profile('tractor')
        with pytest.raises(ValueError):
            get_disturbance_profile('hurricane')

    def test_load_overrides(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({'mass': 1500, 'drag_area': 0.7}))

        profile = load_vehicle_profile(str(path))
        assert profile.mass == 1500.0
        assert profile.drag_area == 0.7
        assert profile.wheel_radius == VehicleProfile().wheel_radius

    def test_load_rejects_unknown_keys(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({'mass': 1500, 'wings': 2}))
        with pytest.raises(ValueError, match="wings"):
            load_vehicle_profile(str(path))
