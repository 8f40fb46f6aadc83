"""Optional background thread that sweeps expired records periodically."""

import logging
import threading

from .errors import NueDBError
from .store import Store

logger = logging.getLogger(__name__)


class Sweeper:
    """Runs Store.sweep every ``interval`` seconds until stopped."""

    def __init__(self, store: Store, interval: float):
        if interval <= 0:
            raise ValueError('interval must be positive')
        self.store = store
        self.interval = interval
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name='nuedb-sweeper', daemon=True)

    def start(self) -> None:
        logger.info('Background sweep every %.1fs', self.interval)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.store.sweep()
            except NueDBError:
                # Already logged by the store; the next request reports it
                continue
