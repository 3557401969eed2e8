"""
Message channels between the simulation tasks.
"""
import collections
import itertools
import logging
import queue

logger = logging.getLogger(__name__)


class Channel:
    """
    Point-to-point FIFO between one producer task and one consumer task.

    Sends never block and receives are polled: a tick that finds nothing queued
    gets ``None`` back and carries on.
    """
    def __init__(self, name, maxsize=0):
        self.name = name
        self._queue = queue.Queue(maxsize=maxsize)
        self._sequence = itertools.count()
        self.message_log = collections.deque(maxlen=1000)
        self.fault_injector = None

    def set_fault_injector(self, injector):
        """Attach a FaultInjector to the channel."""
        self.fault_injector = injector

    def send(self, message):
        """Queue a message. Returns False if it was not delivered."""
        messages = [message]
        if self.fault_injector:
            messages = self.fault_injector.process(self.name, message)
            if not messages:
                return False

        for queued in messages:
            try:
                self._queue.put_nowait(queued)
            except queue.Full:
                logger.debug("%s: channel full, message not delivered", self.name)
                return False
            self.message_log.append({'seq': next(self._sequence), 'channel': self.name, 'message': queued})
        return True

    def try_receive(self):
        """Take the oldest message, or None if the channel is empty."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def drain(self):
        """Take every message currently queued, oldest first."""
        messages = []
        while True:
            message = self.try_receive()
            if message is None:
                return messages
            messages.append(message)

    def pending(self):
        return self._queue.qsize()

    def get_log(self):
        return list(self.message_log)


class BroadcastChannel:
    """
    One producer, several readers. Each subscriber owns its own Channel so no
    reader can take a message meant for another.
    """
    def __init__(self, name):
        self.name = name
        self.subscribers = collections.OrderedDict()

    def subscribe(self, subscriber_name, maxsize=0):
        """Register a reader and return the Channel it should poll."""
        channel = Channel(f"{self.name}->{subscriber_name}", maxsize=maxsize)
        self.subscribers[subscriber_name] = channel
        logger.info("Subscriber registered on %s: %s", self.name, subscriber_name)
        return channel

    def set_fault_injector(self, injector):
        for channel in self.subscribers.values():
            channel.set_fault_injector(injector)

    def send(self, message):
        """Deliver a copy to every subscriber. True only if all accepted it."""
        delivered = True
        for channel in self.subscribers.values():
            delivered = channel.send(message) and delivered
        return delivered
