"""
Core Simulation Engine.
"""
import logging
import threading
import time

from cruise_sim.config import SIM_TICK_MS

logger = logging.getLogger(__name__)


class PeriodicTask:
    """
    Runs ``task.tick()`` on its own thread at a fixed rate.

    Deadlines are kept against the monotonic clock, so a slow tick shortens
    the following wait rather than shifting the whole schedule.
    """
    def __init__(self, task, period_s):
        self.task = task
        self.period_s = period_s
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, name=f"tick-{task.name}", daemon=True)

    def start(self):
        self._thread.start()

    def stop(self, timeout=None):
        self._stop_event.set()
        self._thread.join(timeout)

    def is_alive(self):
        return self._thread.is_alive()

    def _run(self):
        logger.info("Task started: %s (%.0f ms)", self.task.name, self.period_s * 1000)
        next_deadline = time.monotonic()
        while not self._stop_event.is_set():
            try:
                self.task.tick()
            except Exception:
                logger.exception("Tick failed for %s", self.task.name)
            next_deadline += self.period_s
            self._stop_event.wait(max(0.0, next_deadline - time.monotonic()))
        logger.info("Task stopped: %s", self.task.name)


class SimulationEngine:
    """
    Manages the simulation clock, plants, and ECUs.

    ``step()`` advances every task once in lock-step (plants first) and is what
    tests use. ``start()`` instead gives each task its own periodic thread so
    plants and ECUs tick independently of each other.
    """
    def __init__(self, tick_ms=SIM_TICK_MS):
        self.tick_ms = tick_ms
        self.dt = tick_ms / 1000.0
        self.ecus = []
        self.plants = []
        self.periodic_tasks = []

    @property
    def running(self):
        return bool(self.periodic_tasks)

    def add_ecu(self, ecu):
        """Add an ECU to the simulation."""
        self.ecus.append(ecu)

    def add_plant(self, plant):
        """Add a Plant model to the simulation."""
        self.plants.append(plant)

    def step(self):
        """Advance the simulation by one time step."""
        for plant in self.plants:
            plant.tick()

        for ecu in self.ecus:
            ecu.tick()

    def run(self, duration):
        """Run the simulation for a specific duration in seconds, without pacing."""
        steps = int(round(duration / self.dt))
        logger.info("Starting simulation for %ss (%d steps)...", duration, steps)

        for _ in range(steps):
            self.step()

        logger.info("Simulation complete.")

    def start(self):
        """Start one periodic thread per plant and ECU."""
        if self.running:
            raise RuntimeError("Simulation already running.")

        self.periodic_tasks = [PeriodicTask(task, self.dt) for task in self.plants + self.ecus]
        for periodic in self.periodic_tasks:
            periodic.start()

    def stop(self, timeout=1.0):
        """Stop the periodic threads and wait for them to finish their tick."""
        for periodic in self.periodic_tasks:
            periodic.stop(timeout)
        self.periodic_tasks = []
