"""
Immutable messages exchanged between the simulation tasks.
"""
import enum
from dataclasses import dataclass

from cruise_sim.config import KPH_PER_MPS, METERS_PER_KM


def clamp_percentage(percentage):
    """Bound a percentage to 0-100%. In-range values pass through unchanged."""
    return max(0.0, min(100.0, float(percentage)))


class Engine(enum.Enum):
    ON = 'ON'
    OFF = 'OFF'


class ActuatorKind(enum.Enum):
    BRAKE = 'BRAKE'
    MOTOR = 'MOTOR'
    IGNITION_ON = 'IGNITION_ON'
    IGNITION_OFF = 'IGNITION_OFF'


class CruiseKind(enum.Enum):
    ACTIVATE = 'ACTIVATE'
    SET_SPEED = 'SET_SPEED'
    DEACTIVATE = 'DEACTIVATE'


@dataclass(frozen=True)
class ActuatorInstruction:
    """
    Driver or cruise-control command for the car.

    ``percentage`` is only meaningful for BRAKE and MOTOR. It is clamped to
    0-100% on construction and forced to 0 for the ignition kinds.
    """
    kind: ActuatorKind
    percentage: float = 0.0

    def __post_init__(self):
        if self.kind in (ActuatorKind.BRAKE, ActuatorKind.MOTOR):
            value = clamp_percentage(self.percentage)
        else:
            value = 0.0
        object.__setattr__(self, 'percentage', value)

    @property
    def fraction(self):
        return self.percentage / 100.0

    @classmethod
    def brake(cls, percentage):
        return cls(ActuatorKind.BRAKE, percentage)

    @classmethod
    def motor(cls, percentage):
        return cls(ActuatorKind.MOTOR, percentage)

    @classmethod
    def ignition_on(cls):
        return cls(ActuatorKind.IGNITION_ON)

    @classmethod
    def ignition_off(cls):
        return cls(ActuatorKind.IGNITION_OFF)


@dataclass(frozen=True)
class CruiseInstruction:
    """
    Cruise control command. ``speed`` (km/h) is meaningful for ACTIVATE and
    SET_SPEED; negative speeds are raised to 0.
    """
    kind: CruiseKind
    speed: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'speed', max(0.0, float(self.speed)))

    @classmethod
    def activate(cls, speed):
        return cls(CruiseKind.ACTIVATE, speed)

    @classmethod
    def set_speed(cls, speed):
        return cls(CruiseKind.SET_SPEED, speed)

    @classmethod
    def deactivate(cls):
        return cls(CruiseKind.DEACTIVATE)


@dataclass(frozen=True)
class DynamicsReadout:
    """Snapshot of the car published once per dynamics tick."""
    distance: float = 0.0  # m travelled
    speed: float = 0.0  # m/s
    engine: Engine = Engine.OFF
    throttle: float = 0.0  # %
    brake: float = 0.0  # %
    gradient: float = 0.0  # degrees, positive is uphill
    wind_speed: float = 0.0  # m/s, positive blows the same way the car moves

    def __post_init__(self):
        object.__setattr__(self, 'throttle', clamp_percentage(self.throttle))
        object.__setattr__(self, 'brake', clamp_percentage(self.brake))

    @property
    def speed_kph(self):
        return self.speed * KPH_PER_MPS

    @property
    def distance_km(self):
        return self.distance / METERS_PER_KM

    @property
    def wind_speed_kph(self):
        return self.wind_speed * KPH_PER_MPS
