import logging

logger = logging.getLogger(__name__)


class FaultInjector:
    def __init__(self):
        self.active_faults = []

    def inject(self, fault_type, target='ALL', count=None):
        """
        fault_type: 'DROP' or 'DUPLICATE'
        target: Channel name to target, or 'ALL'
        count: Number of messages to affect (None = until cleared)
        """
        if fault_type not in ('DROP', 'DUPLICATE'):
            raise ValueError(f"Unknown fault type: {fault_type}")
        self.active_faults.append({'type': fault_type, 'target': target, 'remaining': count})
        logger.info("INJECTING FAULT: %s on %s", fault_type, target)

    def clear(self):
        self.active_faults = []

    def process(self, channel_name, message):
        """Return the list of messages that should actually be queued."""
        copies = 1
        for fault in self.active_faults:
            if fault['target'] not in (channel_name, 'ALL') or fault['remaining'] == 0:
                continue
            if fault['type'] == 'DROP':
                copies = 0
                logger.debug("FAULT: Dropped message on %s", channel_name)
            elif fault['type'] == 'DUPLICATE' and copies:
                copies += 1
                logger.debug("FAULT: Duplicated message on %s", channel_name)
            if fault['remaining'] is not None:
                fault['remaining'] -= 1
        return [message] * copies
