from cruise_sim.config import SIM_TICK_S


class BasePlant:
    def __init__(self, name, dt=SIM_TICK_S):
        self.name = name
        self.dt = dt
        self.tick_count = 0

    def tick(self):
        """One periodic invocation: publish, then receive, then integrate."""
        self.publish_sensor_data()
        self.receive_messages()
        self.update_physics(self.dt)
        self.tick_count += 1

    def publish_sensor_data(self):
        """Publish sensor readings. Override in subclasses."""
        pass

    def receive_messages(self):
        """Poll input channels. Override in subclasses."""
        pass

    def update_physics(self, dt):
        """Update the physical state of the plant. Override in subclasses."""
        pass
