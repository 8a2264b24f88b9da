import logging
import os
from typing import Optional

import psutil

from .base_sampler import BaseSampler, SamplerError

logger = logging.getLogger(__name__)


class ProcessSampler(BaseSampler):
    """
    Base for samplers that measure the current Python process
    (or a specified PID) with psutil.

    Subclasses implement `measure()`; `poll()` records its value under
    `metric_name` in the attached stats engine.
    """

    metric_name: str = ""

    def __init__(self, pid: Optional[int] = None):
        super().__init__()
        self.pid = pid or os.getpid()
        self.process = psutil.Process(self.pid)

    def measure(self) -> float:
        raise NotImplementedError("Subclasses must implement measure().")

    def poll(self) -> None:
        if self.stats_engine is None:
            raise SamplerError(f"{self.id} is not attached to a stats engine")
        try:
            value = self.measure()
        except psutil.Error as e:
            raise SamplerError(f"{self.id} failed to read pid {self.pid}: {e}") from e
        self.stats_engine.record_metric(self.metric_name, value)

    @property
    def id(self) -> str:
        return f"{type(self).__name__}:{self.pid}"


class MemorySampler(ProcessSampler):
    """Resident memory of the process, in MB."""

    metric_name = "Memory/Physical"

    def measure(self) -> float:
        return self.process.memory_info().rss / (1024 ** 2)


class CpuSampler(ProcessSampler):
    """
    CPU utilisation of the process, in percent since the previous poll.
    The first psutil reading always returns 0.0, so it is primed here.
    """

    metric_name = "CPU/User Utilization"

    def __init__(self, pid: Optional[int] = None):
        super().__init__(pid)
        try:
            self.process.cpu_percent(interval=None)
        except psutil.Error as e:
            logger.warning("process.cpu_percent() initial call failed: %s", e)

    def measure(self) -> float:
        return float(self.process.cpu_percent(interval=None))


class ThreadSampler(ProcessSampler):
    """Number of live OS threads in the process."""

    metric_name = "Threads/all"

    def measure(self) -> float:
        return float(self.process.num_threads())
