from cruise_sim.config import SIM_TICK_S


class BaseECU:
    def __init__(self, name, dt=SIM_TICK_S):
        self.name = name
        self.dt = dt
        self.tick_count = 0

    def tick(self):
        """One periodic invocation: send, then receive, then compute."""
        self.send_messages()
        self.receive_messages()
        self.step(self.dt)
        self.tick_count += 1

    def send_messages(self):
        """Send outputs decided on the previous tick. Override in subclasses."""
        pass

    def receive_messages(self):
        """Poll input channels. Override in subclasses."""
        pass

    def step(self, dt):
        """Execute one time step of logic. Override in subclasses."""
        pass
