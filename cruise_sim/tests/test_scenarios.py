"""
End-to-end cruise control scenarios.
Dynamics and cruise control are wired through real channels and stepped in
lock-step so runs are reproducible.
"""
import os

import pytest
from cruise_sim.config import DisturbanceProfile
from cruise_sim.sim.messages import ActuatorKind, Engine
from cruise_sim.sim.simulation import build_simulation
from cruise_sim.utilities.driver_console import CruiseState
from cruise_sim.utilities.drive_cycle import CycleDriver, DriveCycle
from cruise_sim.utilities.report_generator import ReportGenerator

TICKS_PER_SECOND = 50


class TestScenarios:

    @pytest.fixture
    def sim_setup(self):
        sim = build_simulation(disturbance_profile=DisturbanceProfile.calm(), seed=0)
        recorder = sim.readouts.subscribe('Recorder')
        return sim, recorder

    def drive(self, sim, recorder, seconds):
        for _ in range(int(seconds * TICKS_PER_SECOND)):
            sim.engine.step()
            sim.console.refresh()
        return recorder.drain()

    def generate_report(self, tmp_path, test_name, readouts, result="PASS"):
        filename = ReportGenerator(str(tmp_path)).generate(test_name, readouts, result=result,
                                                           every=TICKS_PER_SECOND)
        assert os.path.exists(filename)

    def test_cruise_to_100_kph(self, sim_setup, tmp_path):
        """
        Scenario: Engine on, cruise engaged at 100 km/h from standstill.
        Expected: Full throttle first, then speed holds near 100 km/h.
        """
        sim, recorder = sim_setup
        sim.console.turn_on_ignition()
        sim.console.engage_cruise()
        sim.console.set_cruise_speed(100.0)

        readouts = self.drive(sim, recorder, 5)

        motor_commands = [entry['message'] for entry in sim.to_dynamics.get_log()
                          if entry['message'].kind == ActuatorKind.MOTOR]
        pid_commands = [m for m in motor_commands if m.percentage > 0]
        assert pid_commands[0].percentage == 100.0, "PID should start saturated"

        early = readouts[2 * TICKS_PER_SECOND:5 * TICKS_PER_SECOND]
        assert all(r.throttle == 100.0 for r in early)

        readouts += self.drive(sim, recorder, 115)
        settled = [r.speed_kph for r in readouts[-20 * TICKS_PER_SECOND:]]
        print(f"Settled speed: {min(settled):.2f} - {max(settled):.2f} km/h")
        assert all(90.0 < v < 110.0 for v in settled)
        assert abs(sum(settled) / len(settled) - 100.0) < 5.0
        assert all(0.0 <= r.throttle <= 100.0 for r in readouts)

        self.generate_report(tmp_path, "Cruise_100kph", readouts)

    def test_brake_overrides_and_resume(self, sim_setup, tmp_path):
        """
        Scenario: Cruising at 80 km/h, driver brakes, then resumes.
        Expected: Cruise goes inactive, car slows; resume brings it back.
        """
        sim, recorder = sim_setup
        console = sim.console
        console.turn_on_ignition()
        console.engage_cruise()
        console.set_cruise_speed(80.0)
        readouts = self.drive(sim, recorder, 60)
        cruising = readouts[-1].speed_kph

        console.set_brake(80)
        assert console.cruise_state == CruiseState.INACTIVE
        readouts += self.drive(sim, recorder, 3)
        assert not sim.cruise.engaged
        assert readouts[-1].speed_kph < cruising - 15
        assert readouts[-1].brake == 80.0

        console.set_brake(0)
        console.engage_cruise()
        assert console.cruise_speed == 80.0, "Resume keeps the old set speed"
        readouts += self.drive(sim, recorder, 60)
        assert sim.cruise.engaged
        assert abs(readouts[-1].speed_kph - 80.0) < 10.0

        self.generate_report(tmp_path, "Brake_Override_Resume", readouts)

    def test_ignition_off_while_cruising(self, sim_setup):
        sim, recorder = sim_setup
        console = sim.console
        console.turn_on_ignition()
        console.engage_cruise()
        console.set_cruise_speed(60.0)
        self.drive(sim, recorder, 30)

        console.turn_off_ignition()
        readouts = self.drive(sim, recorder, 5)

        assert not sim.cruise.engaged
        assert readouts[-1].engine == Engine.OFF
        assert readouts[-1].throttle == 0.0
        assert sim.vehicle.current == 0.0
        speeds = [r.speed for r in readouts[TICKS_PER_SECOND:]]
        assert all(b <= a for a, b in zip(speeds, speeds[1:])), "Car should coast down"

    def test_cruise_with_disturbances(self, tmp_path):
        """
        Scenario: Default wind gusts and hills, cruise at 90 km/h.
        Expected: Controller keeps the car moving near the set speed; grade
        and wind stay within their limits.
        """
        sim = build_simulation(seed=42)
        recorder = sim.readouts.subscribe('Recorder')
        sim.console.turn_on_ignition()
        sim.console.engage_cruise()
        sim.console.set_cruise_speed(90.0)
        readouts = self.drive(sim, recorder, 120)

        assert all(0.0 <= r.gradient <= 6.0 for r in readouts)
        assert all(-40.0 <= r.wind_speed <= 40.0 for r in readouts)
        assert all(r.speed >= 0.0 for r in readouts)
        assert any(r.gradient > 0.0 for r in readouts)
        late = [r.speed_kph for r in readouts[-30 * TICKS_PER_SECOND:]]
        assert sum(late) / len(late) > 60.0

        self.generate_report(tmp_path, "Cruise_Disturbances", readouts)

    def test_drive_cycle_tracking(self, sim_setup, tmp_path):
        sim, recorder = sim_setup
        cycle = DriveCycle()
        driver = CycleDriver(sim.console, cycle)
        sim.console.turn_on_ignition()

        readouts = []
        for tick in range(int(cycle.duration * TICKS_PER_SECOND)):
            driver.step(tick / TICKS_PER_SECOND)
            sim.engine.step()
            sim.console.refresh()
            readouts.extend(recorder.drain())

        at_25s = readouts[25 * TICKS_PER_SECOND].speed_kph
        at_45s = readouts[45 * TICKS_PER_SECOND].speed_kph
        print(f"25s: {at_25s:.1f} km/h, 45s: {at_45s:.1f} km/h")
        assert abs(at_25s - 30.0) < 8.0
        assert abs(at_45s - 50.0) < 8.0

        self.generate_report(tmp_path, "Drive_Cycle", readouts)
