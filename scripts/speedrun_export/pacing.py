"""Fixed-delay pacing between dependent API calls."""

import time


class Pacer:
    """Sleeps a fixed number of seconds when asked. Keeps a running total."""

    def __init__(self, sleep=time.sleep):
        self._sleep = sleep
        self.total_waited = 0.0
        self.calls = 0

    def wait(self, seconds):
        if seconds <= 0:
            return
        self._sleep(seconds)
        self.total_waited += seconds
        self.calls += 1


class NoPacer(Pacer):
    """Pacer that records requested delays but never sleeps."""

    def __init__(self):
        super().__init__(sleep=lambda seconds: None)
        self.requested = []

    def wait(self, seconds):
        self.requested.append(seconds)
        super().wait(seconds)
