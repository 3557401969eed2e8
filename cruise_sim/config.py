"""
Simulation constants and vehicle / environment profiles.
"""
import json
from dataclasses import dataclass, fields, replace

SIM_TICK_MS = 20  # milliseconds between each tick
SIM_TICK_S = SIM_TICK_MS / 1000.0

KPH_PER_MPS = 3.6
METERS_PER_KM = 1000.0

# Driver console
CRUISE_SPEED_STEP = 5.0  # km/h per faster/slower press
MAX_CRUISE_SPEED = 200.0  # km/h


@dataclass(frozen=True)
class VehicleProfile:
    """Physical description of the car and the air it drives through."""

    max_current: float = 400.0  # A, motor current at 100% throttle
    max_brake_torque: float = 1000.0  # Nm at 100% brake
    motor_sprocket_radius: float = 0.065  # m
    wheel_sprocket_radius: float = 0.11  # m
    wheel_radius: float = 0.25  # m
    gravity: float = 9.81  # m/s^2
    mass: float = 1406.0  # kg
    motor_constant: float = 0.8  # DC motor constant (Nm/A)
    air_density: float = 1.2041  # kg/m^3 at 20 degrees
    drag_area: float = 0.550  # m^2, drag coefficient * frontal area
    rolling_friction: float = 0.015  # dry concrete

    @property
    def gear_ratio(self):
        return self.wheel_sprocket_radius / self.motor_sprocket_radius


@dataclass(frozen=True)
class DisturbanceProfile:
    """Limits and cadence of the wind gust / hill grade generator."""

    max_wind_speed: float = 40.0  # m/s
    wind_gust_ticks: int = 100
    hill_ticks: int = 10
    max_hill_step: float = 0.5  # degrees per regeneration
    max_incline: float = 6.0  # degrees

    @property
    def wind_std(self):
        # ~99.7% of gusts fall inside +/- max_wind_speed
        return self.max_wind_speed / 3

    @classmethod
    def calm(cls):
        """No wind and a flat road."""
        return cls(max_wind_speed=0.0, max_hill_step=0.0, max_incline=0.0)


@dataclass(frozen=True)
class PidGains:
    kp: float = 4.0
    ki: float = 4.0
    kd: float = 2.0
    windup_reset_ticks: int = 200


VEHICLE_PROFILES = {
    'default': VehicleProfile(),
    # Heavier variant used for load sensitivity checks
    'loaded': VehicleProfile(mass=1806.0),
}

DISTURBANCE_PROFILES = {
    'default': DisturbanceProfile(),
    'calm': DisturbanceProfile.calm(),
    'gusty': DisturbanceProfile(wind_gust_ticks=25),
}


def get_vehicle_profile(name='default'):
    """Get a named vehicle profile"""
    try:
        return VEHICLE_PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown vehicle profile: {name}")


def get_disturbance_profile(name='default'):
    """Get a named disturbance profile"""
    try:
        return DISTURBANCE_PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown disturbance profile: {name}")


def load_vehicle_profile(path, base=None):
    """
    Read a JSON file of overrides and apply them on top of a base profile.

    Args:
        path: JSON file holding a flat object, e.g. ``{"mass": 1500}``.
        base: Profile to override. Defaults to ``VehicleProfile()``.

    Raises:
        ValueError: If the file names a field VehicleProfile does not have.
    """
    base = base or VehicleProfile()
    with open(path, 'r') as f:
        overrides = json.load(f)

    known = {f.name for f in fields(VehicleProfile)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown vehicle profile keys: {', '.join(sorted(unknown))}")

    return replace(base, **{key: float(value) for key, value in overrides.items()})
