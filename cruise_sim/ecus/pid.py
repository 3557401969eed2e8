from cruise_sim.config import SIM_TICK_S, PidGains


class PidController:
    """
    Speed-holding PID mapped onto a 0-100% throttle.

    Errors are in km/h. The integral is zeroed every ``windup_reset_ticks``
    accumulations instead of being magnitude-limited.
    """
    def __init__(self, gains=None, dt=SIM_TICK_S):
        self.gains = gains or PidGains()
        self.dt = dt
        self.error = 0.0
        self.prev_error = 0.0
        self.total_error = 0.0
        self.total_error_counter = 0

    def update(self, set_speed_kph, speed_kph):
        """Return the throttle percentage for this tick."""
        g = self.gains
        self.error = set_speed_kph - speed_kph
        self.total_error += self.error

        if self.total_error_counter > g.windup_reset_ticks:
            self.total_error = 0.0
            self.total_error_counter = 0
        else:
            self.total_error_counter += 1

        output = (g.kp * self.error
                  + g.ki * self.total_error * self.dt
                  + g.kd * (self.error - self.prev_error) / self.dt)
        self.prev_error = self.error

        return max(0.0, min(100.0, output))
