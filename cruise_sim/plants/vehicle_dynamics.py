"""
Vehicle dynamics physics model.
"""
import logging
import math

from cruise_sim.config import SIM_TICK_S, VehicleProfile
from cruise_sim.plants.base_plant import BasePlant
from cruise_sim.plants.disturbances import DisturbanceGenerator
from cruise_sim.sim.messages import ActuatorKind, DynamicsReadout, Engine

logger = logging.getLogger(__name__)


class VehicleDynamics(BasePlant):
    """
    Simulates longitudinal dynamics of an electric car along a straight line,
    with air drag, rolling resistance and hill/wind disturbances.

    Each tick publishes the state left by the previous tick, applies at most
    one queued actuator instruction and then integrates the physics, so an
    instruction shows up in the readout one tick after it is applied.
    """
    def __init__(self, name, instructions, readouts, profile=None, disturbances=None, dt=SIM_TICK_S):
        super().__init__(name, dt)
        self.instructions = instructions
        self.readouts = readouts
        self.profile = profile or VehicleProfile()
        self.disturbances = disturbances or DisturbanceGenerator()

        # State
        self.current = 0.0  # A supplied to the motor
        self.propulsion_force = 0.0  # N
        self.drag_force = 0.0  # N
        self.motor_torque = 0.0  # Nm
        self.wheel_torque = 0.0  # Nm
        self.brake_torque = 0.0  # Nm
        self.distance = 0.0  # m
        self.speed = 0.0  # m/s
        self.acceleration = 0.0  # m/s^2
        # Inputs
        self.engine = Engine.OFF
        self.throttle = 0.0  # %
        self.brake = 0.0  # %

    def readout(self):
        """Snapshot of the current state."""
        return DynamicsReadout(
            distance=self.distance,
            speed=self.speed,
            engine=self.engine,
            throttle=self.throttle,
            brake=self.brake,
            gradient=self.disturbances.hill_grade,
            wind_speed=self.disturbances.wind_speed,
        )

    def publish_sensor_data(self):
        """Broadcast the readout to the cruise controller and the dashboard."""
        if not self.readouts.send(self.readout()):
            logger.debug("%s: readout not delivered on tick %d", self.name, self.tick_count)

    def receive_messages(self):
        """Apply one pending instruction; the rest stay queued."""
        instruction = self.instructions.try_receive()
        if instruction is not None:
            self.execute_instruction(instruction)

    def execute_instruction(self, instruction):
        if instruction.kind == ActuatorKind.MOTOR:
            # Throttle can only be applied if the engine is on
            if self.engine == Engine.ON:
                self.current = self.profile.max_current * instruction.fraction
                self.throttle = instruction.percentage
        elif instruction.kind == ActuatorKind.BRAKE:
            self.brake_torque = self.profile.max_brake_torque * instruction.fraction
            self.brake = instruction.percentage
        elif instruction.kind == ActuatorKind.IGNITION_ON:
            # Engine starts with zero throttle
            self.current = 0.0
            self.throttle = 0.0
            self.engine = Engine.ON
            logger.info("%s: ignition on", self.name)
        elif instruction.kind == ActuatorKind.IGNITION_OFF:
            self.current = 0.0
            self.throttle = 0.0
            self.engine = Engine.OFF
            logger.info("%s: ignition off", self.name)
        logger.debug("%s: applied %s %.1f%%", self.name, instruction.kind.value, instruction.percentage)

    def _slope_force(self, grade_rad):
        p = self.profile
        return p.mass * p.gravity * math.sin(grade_rad)

    def _rolling_resistance(self, grade_rad):
        p = self.profile
        return p.rolling_friction * p.mass * p.gravity * math.cos(grade_rad)

    def update_physics(self, dt):
        """Advance forces, speed and distance by one tick (trapezoidal rule)."""
        p = self.profile
        wind, grade = self.disturbances.advance(self.speed)
        grade_rad = math.radians(grade)

        # Previous speed stands in for the speed over this tick
        relative_air_speed = wind - self.speed
        self.drag_force = 0.5 * p.air_density * relative_air_speed ** 2 * p.drag_area

        self.motor_torque = self.current * p.motor_constant
        self.wheel_torque = self.motor_torque * p.gear_ratio

        self.propulsion_force = (self.wheel_torque - self.brake_torque) / p.wheel_radius
        self.propulsion_force -= self._slope_force(grade_rad)
        self.propulsion_force -= self._rolling_resistance(grade_rad)

        # Head wind (or still air while moving) opposes motion, tail wind assists
        if relative_air_speed <= 0:
            new_acceleration = (self.propulsion_force - self.drag_force) / p.mass
        else:
            new_acceleration = (self.propulsion_force + self.drag_force) / p.mass

        self.speed += (self.acceleration + new_acceleration) * dt / 2
        # Brakes stop the car, they never reverse it
        self.speed = max(0.0, self.speed)

        self.distance += self.speed * dt
        self.acceleration = new_acceleration
