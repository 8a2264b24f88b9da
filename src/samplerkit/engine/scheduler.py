import logging
import threading
import time
from typing import Any, Callable, Optional

from .poll import poll

logger = logging.getLogger(__name__)

# Seconds between two passes over the periodic samplers. Not configurable.
POLL_PERIOD = 20
SAMPLER_METRIC_NAME = "Supportability/Samplers"
THREAD_NAME = "Sampler Tasks"


class BackgroundScheduler:
    """
    Polls the periodic samplers on a daemon thread every POLL_PERIOD seconds.

    Harvest-time polling is the normal path; this thread is opt-in and is
    only started by an explicit `start()`. Once running it loops until the
    process exits. There is no stop.
    """

    def __init__(
        self,
        registry: Any,
        metrics: Any,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry
        self.metrics = metrics
        self._sleep = sleep
        self._clock = clock
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def thread(self) -> Optional[threading.Thread]:
        return self._thread

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """
        Start the sampler thread unless it is already alive or there is
        nothing to poll. Samplers registered afterwards do not start it;
        call `start()` again once they are in.

        Returns:
            bool: True if this call launched the thread.
        """
        with self._lock:
            if self.is_running():
                logger.debug("Sampler thread already running")
                return False
            if self.registry.periodic_samplers().is_empty():
                logger.debug("No periodic samplers registered, not starting sampler thread")
                return False

            self._thread = threading.Thread(
                target=self._run, name=THREAD_NAME, daemon=True
            )
            self._thread.start()
            logger.debug("Started sampler thread, polling every %ss", POLL_PERIOD)
            return True

    def _run(self) -> None:
        while True:
            self.run_cycle()

    def run_cycle(self) -> None:
        """One sleep-then-poll cycle. The duration is recorded even if the cycle fails."""
        started = self._clock()
        try:
            self._sleep(POLL_PERIOD)
            poll(self.registry.periodic_samplers())
        finally:
            duration = float(self._clock() - started)
            self.metrics.record_metric(SAMPLER_METRIC_NAME, duration)
