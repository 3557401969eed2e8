"""
Cruise control ECU.
"""
import logging

from cruise_sim.config import SIM_TICK_S
from cruise_sim.ecus.base_ecu import BaseECU
from cruise_sim.ecus.pid import PidController
from cruise_sim.sim.messages import ActuatorInstruction, CruiseKind, DynamicsReadout, Engine

logger = logging.getLogger(__name__)


class CruiseControlECU(BaseECU):
    """
    Sits between the driver and the car. Driver instructions pass through
    untouched; only when cruise control is engaged, the engine is on and the
    driver did nothing this tick does the PID produce a throttle instruction.
    The controller never brakes.
    """
    def __init__(self, name, readouts, cruise_instructions, driver_instructions, to_dynamics,
                 gains=None, dt=SIM_TICK_S):
        super().__init__(name, dt)
        self.readouts = readouts
        self.cruise_instructions = cruise_instructions
        self.driver_instructions = driver_instructions
        self.to_dynamics = to_dynamics
        self.pid = PidController(gains, dt)

        self.engaged = False
        self.set_speed = 0.0  # km/h
        self.engine = Engine.OFF
        self.readout = DynamicsReadout()
        self.driver_instruction = None  # received this tick
        self.next_instruction = None  # decided this tick, sent on the next

    def send_messages(self):
        """Forward the instruction decided on the previous tick, if any."""
        if self.next_instruction is not None:
            if not self.to_dynamics.send(self.next_instruction):
                logger.debug("%s: instruction not delivered on tick %d", self.name, self.tick_count)

    def receive_messages(self):
        # Absence of a driver instruction is meaningful: it lets the PID act
        self.driver_instruction = self.driver_instructions.try_receive()

        cruise_instruction = self.cruise_instructions.try_receive()
        if cruise_instruction is not None:
            self.execute_cruise_instruction(cruise_instruction)

        readout = self.readouts.try_receive()
        if readout is not None:
            self.readout = readout
            self.engine = readout.engine

    def execute_cruise_instruction(self, instruction):
        if instruction.kind == CruiseKind.ACTIVATE:
            self.engaged = True
            self.set_speed = instruction.speed
            logger.info("%s: engaged at %.1f km/h", self.name, self.set_speed)
        elif instruction.kind == CruiseKind.DEACTIVATE:
            # Set speed is kept for a later resume
            self.engaged = False
            logger.info("%s: disengaged", self.name)
        elif instruction.kind == CruiseKind.SET_SPEED:
            self.set_speed = instruction.speed

    def step(self, dt):
        """Decide the next instruction. Driver input always wins."""
        if self.engaged and self.engine == Engine.ON and self.driver_instruction is None:
            throttle = self.pid.update(self.set_speed, self.readout.speed_kph)
            self.next_instruction = ActuatorInstruction.motor(throttle)
        else:
            self.next_instruction = self.driver_instruction
