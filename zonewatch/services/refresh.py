"""
Polling Refresh Service

Periodically re-fetches data on a background thread until stopped.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class RefreshPoller:
    """Call `callback` every `interval` seconds on a daemon thread."""

    def __init__(self, interval, callback, name='ZoneRefresh'):
        self.interval = float(interval or 0)
        self.callback = callback
        self.name = name
        self._stop = threading.Event()
        self._thread = None

    @property
    def enabled(self):
        return self.interval > 0

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if not self.enabled or self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info('%s started (every %ss)', self.name, self.interval)

    def stop(self, timeout=None):
        if self._thread is None:
            return
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None
        logger.info('%s stopped', self.name)

    def _run(self):
        while not self._stop.wait(self.interval):
            try:
                self.callback()
            except Exception as e:
                logger.exception('%s tick failed: %s', self.name, e)
