
class DriveCycle:
    def __init__(self, name="Micro-WLTP", points=None):
        self.name = name
        # Time (s), Speed (km/h)
        # Simplified cycle: Idle, Accel, Cruise, Accel, Cruise, Ease off
        self.points = points or [
            (0, 0), (5, 0),  # Idle 5s
            (15, 30),  # Accel to 30kph
            (25, 30),  # Cruise
            (35, 50),  # Accel to 50kph
            (45, 50),  # Cruise
            (55, 20),  # Ease off to 20kph
            (60, 20)
        ]

    @property
    def duration(self):
        return self.points[-1][0]

    def get_target_speed(self, t):
        """Linear interpolation of the target speed in km/h."""
        if t < 0 or t > self.duration:
            return 0.0

        for (t1, v1), (t2, v2) in zip(self.points, self.points[1:]):
            if t1 <= t <= t2:
                ratio = (t - t1) / (t2 - t1)
                return v1 + ratio * (v2 - v1)
        return 0.0


class CycleDriver:
    """Follows a DriveCycle through the driver console's cruise control."""
    def __init__(self, console, cycle, resolution_kph=1.0):
        self.console = console
        self.cycle = cycle
        self.resolution_kph = resolution_kph
        self.last_sent = None

    def step(self, t):
        target = self.cycle.get_target_speed(t)
        if self.last_sent is None:
            self.console.engage_cruise()
            self.console.set_cruise_speed(target)
            self.last_sent = target
        elif abs(target - self.last_sent) >= self.resolution_kph:
            self.console.set_cruise_speed(target)
            self.last_sent = target
        return target
