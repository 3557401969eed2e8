"""
Wind gust and hill grade disturbances used to test the cruise controller.
"""
import logging
import random

from cruise_sim.config import DisturbanceProfile

logger = logging.getLogger(__name__)


class DisturbanceGenerator:
    """
    Produces a wind speed (m/s) and hill grade (degrees) once per tick.

    Wind gusts are redrawn from a normal distribution every
    ``wind_gust_ticks`` ticks. The hill grade is a bounded random walk that
    only moves while the car is moving. Declines are not generated since the
    cruise controller has no authority over the brakes.
    """
    def __init__(self, profile=None, rng=None):
        self.profile = profile or DisturbanceProfile()
        self.rng = rng or random.Random()
        self.wind_speed = 0.0
        self.hill_grade = 0.0
        self.wind_gust_tick = 0
        self.hill_tick = 0

    def advance(self, current_speed):
        """Advance the generator by one tick and return (wind_speed, hill_grade)."""
        self._generate_wind_gust()
        if current_speed > 0:
            self._generate_hill_grade()
        return self.wind_speed, self.hill_grade

    def _generate_wind_gust(self):
        if self.wind_gust_tick == self.profile.wind_gust_ticks:
            limit = self.profile.max_wind_speed
            gust = self.rng.gauss(0.0, self.profile.wind_std)
            self.wind_speed = max(-limit, min(limit, gust))
            self.wind_gust_tick = 0
            logger.debug("New wind gust: %.2f m/s", self.wind_speed)
        else:
            self.wind_gust_tick += 1

    def _generate_hill_grade(self):
        if self.hill_tick == self.profile.hill_ticks:
            change = self.profile.max_hill_step * self.rng.random()
            if self.rng.random() < 0.5:
                self.hill_grade = min(self.profile.max_incline, self.hill_grade + change)
            else:
                self.hill_grade = max(0.0, self.hill_grade - change)
            self.hill_tick = 0
        else:
            self.hill_tick += 1
