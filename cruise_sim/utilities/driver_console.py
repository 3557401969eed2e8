"""
Headless driver console.

Issues the same instruction sequences as the driver's dashboard (ignition,
pedals, cruise control buttons) and keeps the latest readout for display.
"""
import enum
import logging

from cruise_sim.config import CRUISE_SPEED_STEP, MAX_CRUISE_SPEED
from cruise_sim.sim.messages import ActuatorInstruction, CruiseInstruction, DynamicsReadout

logger = logging.getLogger(__name__)


class CruiseState(enum.Enum):
    OFF = 'Off'
    ON = 'On'
    INACTIVE = 'Inactive'  # overridden by the driver, can be resumed


class DriverConsole:
    def __init__(self, actuator_channel, cruise_channel, readout_channel):
        self.actuator_channel = actuator_channel
        self.cruise_channel = cruise_channel
        self.readout_channel = readout_channel

        self.ignition = False
        self.throttle = 0.0  # slider, %
        self.brake = 0.0  # slider, %
        self.cruise_state = CruiseState.OFF
        self.cruise_speed = 0.0  # km/h
        self.readout = DynamicsReadout()

    def _actuate(self, instruction):
        self.actuator_channel.send(instruction)

    def _change_cruise_state(self, state):
        if state == CruiseState.ON:
            # Driver is assumed to let go of the pedals while cruising
            self.brake = 0.0
            self._actuate(ActuatorInstruction.brake(0))
            self.throttle = 0.0
            self._actuate(ActuatorInstruction.motor(0))
            self.cruise_channel.send(CruiseInstruction.activate(self.cruise_speed))
        else:
            self.cruise_channel.send(CruiseInstruction.deactivate())
        self.cruise_state = state

    def turn_on_ignition(self):
        self._change_cruise_state(CruiseState.OFF)
        self._actuate(ActuatorInstruction.ignition_on())
        self._actuate(ActuatorInstruction.brake(self.brake))
        self._actuate(ActuatorInstruction.motor(self.throttle))
        self.ignition = True

    def turn_off_ignition(self):
        self._change_cruise_state(CruiseState.OFF)
        self._actuate(ActuatorInstruction.ignition_off())
        self._actuate(ActuatorInstruction.brake(self.brake))
        self.ignition = False

    def set_throttle(self, percentage):
        if self.cruise_state == CruiseState.ON:
            self._change_cruise_state(CruiseState.INACTIVE)
        instruction = ActuatorInstruction.motor(percentage)
        self.throttle = instruction.percentage
        self._actuate(instruction)

    def set_brake(self, percentage):
        if self.cruise_state == CruiseState.ON:
            self._change_cruise_state(CruiseState.INACTIVE)
        instruction = ActuatorInstruction.brake(percentage)
        self.brake = instruction.percentage
        self._actuate(instruction)

    def engage_cruise(self):
        """Set from OFF (holds the current speed) or resume from INACTIVE."""
        if not self.ignition:
            logger.info("Cruise control unavailable with the ignition off")
            return
        if self.cruise_state == CruiseState.OFF:
            self.cruise_speed = min(MAX_CRUISE_SPEED, self.readout.speed_kph)
        self._change_cruise_state(CruiseState.ON)

    def disengage_cruise(self):
        self._change_cruise_state(CruiseState.OFF)

    def cruise_faster(self):
        self.cruise_speed = min(MAX_CRUISE_SPEED, self.cruise_speed + CRUISE_SPEED_STEP)
        self.cruise_channel.send(CruiseInstruction.set_speed(self.cruise_speed))

    def cruise_slower(self):
        self.cruise_speed = max(0.0, self.cruise_speed - CRUISE_SPEED_STEP)
        self.cruise_channel.send(CruiseInstruction.set_speed(self.cruise_speed))

    def set_cruise_speed(self, speed_kph):
        self.cruise_speed = max(0.0, min(MAX_CRUISE_SPEED, speed_kph))
        self.cruise_channel.send(CruiseInstruction.set_speed(self.cruise_speed))

    def refresh(self):
        """Take at most one readout. Returns True if the display changed."""
        readout = self.readout_channel.try_receive()
        if readout is None:
            return False
        self.readout = readout
        return True

    def display(self):
        r = self.readout
        return {
            'speed': f"{r.speed_kph:.1f} km/h",
            'distance': f"{r.distance_km:.1f} km",
            'throttle': f"{r.throttle:.1f}%",
            'brake': f"{r.brake:.1f}%",
            'gradient': f"{r.gradient:.1f}°",
            'wind': f"{r.wind_speed_kph:.1f} km/h",
            'engine': r.engine.value,
            'cruise': self.cruise_state.value,
            'cruise_speed': f"{self.cruise_speed:.1f} km/h",
        }
