"""
Wiring of the cruise control simulation.
"""
import random
from collections import namedtuple

from cruise_sim.config import SIM_TICK_MS
from cruise_sim.ecus.cruise_control import CruiseControlECU
from cruise_sim.plants.disturbances import DisturbanceGenerator
from cruise_sim.plants.vehicle_dynamics import VehicleDynamics
from cruise_sim.sim.bus import BroadcastChannel, Channel
from cruise_sim.sim.engine import SimulationEngine
from cruise_sim.utilities.driver_console import DriverConsole

CruiseSimulation = namedtuple('CruiseSimulation', [
    'engine', 'vehicle', 'cruise', 'console', 'disturbances',
    'readouts', 'driver_instructions', 'cruise_instructions', 'to_dynamics',
])


def build_simulation(vehicle_profile=None, disturbance_profile=None, seed=None, tick_ms=SIM_TICK_MS):
    """
    Create the channels, tasks and driver console for one car.

    Args:
        vehicle_profile: VehicleProfile for the car (default profile if None).
        disturbance_profile: DisturbanceProfile for wind/hills.
        seed: Seed for the disturbance generator, for reproducible runs.
        tick_ms: Tick period, also used as the integration step.
    """
    engine = SimulationEngine(tick_ms=tick_ms)

    to_dynamics = Channel('CruiseControl->VehicleDynamics')
    driver_instructions = Channel('Dashboard->CruiseControl:actuator')
    cruise_instructions = Channel('Dashboard->CruiseControl:cruise')
    readouts = BroadcastChannel('VehicleDynamics:readout')
    readouts_to_cruise = readouts.subscribe('CruiseControl')
    readouts_to_dashboard = readouts.subscribe('Dashboard')

    disturbances = DisturbanceGenerator(disturbance_profile, random.Random(seed))
    vehicle = VehicleDynamics('VehicleDynamics', to_dynamics, readouts,
                              profile=vehicle_profile, disturbances=disturbances, dt=engine.dt)
    cruise = CruiseControlECU('CruiseControl', readouts_to_cruise, cruise_instructions,
                              driver_instructions, to_dynamics, dt=engine.dt)
    console = DriverConsole(driver_instructions, cruise_instructions, readouts_to_dashboard)

    engine.add_plant(vehicle)
    engine.add_ecu(cruise)

    return CruiseSimulation(engine, vehicle, cruise, console, disturbances,
                            readouts, driver_instructions, cruise_instructions, to_dynamics)
