import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional

import numpy as np

from samplerkit.samplers.base_sampler import PollResult
from samplerkit.samplers.sampler_set import SamplerSet
from .poll import poll
from .registry import SamplerRegistry
from .scheduler import BackgroundScheduler

DEFAULT_MAX_HISTORY = 1000


@dataclass
class MetricStats:
    """Running aggregate for one metric name, plus a bounded raw history."""

    call_count: int = 0
    total: float = 0.0
    min: float = 0.0
    max: float = 0.0
    sum_of_squares: float = 0.0
    history: Deque[float] = field(default_factory=lambda: deque(maxlen=DEFAULT_MAX_HISTORY))

    def record(self, value: float) -> None:
        value = float(value)
        if self.call_count == 0:
            self.min = self.max = value
        else:
            self.min = min(self.min, value)
            self.max = max(self.max, value)
        self.call_count += 1
        self.total += value
        self.sum_of_squares += value * value
        self.history.append(value)

    def std_dev(self) -> float:
        """Population standard deviation over every recorded value."""
        if self.call_count < 2:
            return 0.0
        mean = self.total / self.call_count
        variance = self.sum_of_squares / self.call_count - mean * mean
        # Float error can push a zero variance slightly negative.
        return float(np.sqrt(max(variance, 0.0)))

    def summary(self) -> Dict[str, Any]:
        return {
            "count": self.call_count,
            "total": round(self.total, 4),
            "min": round(self.min, 4),
            "max": round(self.max, 4),
            "average": round(self.total / self.call_count, 4) if self.call_count else 0.0,
            "std_dev": round(self.std_dev(), 4),
            "latest": round(self.history[-1], 4) if self.history else None,
        }


class StatsEngine:
    """
    Metrics sink that also owns the sampler registry and the background
    sampler thread.

    Samplers are handed this engine as `stats_engine` when registered and
    record their observations through `record_metric`. The harvest driver
    calls `poll_harvest_samplers()` before each harvest; the background
    thread must be started explicitly with `start_background_scheduler()`.
    """

    def __init__(
        self,
        max_history: int = DEFAULT_MAX_HISTORY,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.max_history = int(max_history)
        self._stats: Dict[str, MetricStats] = {}
        self._stats_lock = threading.Lock()

        self.registry = SamplerRegistry(self)
        scheduler_kwargs = {}
        if sleep is not None:
            scheduler_kwargs["sleep"] = sleep
        if clock is not None:
            scheduler_kwargs["clock"] = clock
        self.scheduler = BackgroundScheduler(self.registry, self, **scheduler_kwargs)

    # Samplers

    def add_periodic_sampler(self, sampler: Any) -> bool:
        return self.registry.add_periodic_sampler(sampler)

    def add_harvest_sampler(self, sampler: Any) -> bool:
        return self.registry.add_harvest_sampler(sampler)

    # Older name for add_periodic_sampler.
    add_sampler = add_periodic_sampler

    def periodic_samplers(self) -> SamplerSet:
        return self.registry.periodic_samplers()

    def harvest_samplers(self) -> SamplerSet:
        return self.registry.harvest_samplers()

    def start_background_scheduler(self) -> bool:
        return self.scheduler.start()

    start_sampler_thread = start_background_scheduler

    def poll(self, sampler_set: SamplerSet) -> List[PollResult]:
        return poll(sampler_set)

    def poll_harvest_samplers(self) -> List[PollResult]:
        return poll(self.harvest_samplers())

    # Metrics

    def record_metric(self, name: str, value: float) -> None:
        with self._stats_lock:
            stats = self._stats.get(name)
            if stats is None:
                stats = MetricStats(history=deque(maxlen=self.max_history))
                self._stats[name] = stats
            stats.record(value)

    def get_stats(self, name: str) -> Optional[MetricStats]:
        with self._stats_lock:
            return self._stats.get(name)

    def metric_names(self) -> List[str]:
        with self._stats_lock:
            return list(self._stats)

    def get_summary(self) -> Dict[str, Dict[str, Any]]:
        """Summary statistics per metric name, in first-recorded order."""
        with self._stats_lock:
            return {name: stats.summary() for name, stats in self._stats.items()}

    def reset(self) -> None:
        with self._stats_lock:
            self._stats.clear()


class NullStatsEngine:
    """
    Stand-in used when the agent is disabled: accepts every registration
    and observation and does nothing with them.
    """

    def add_periodic_sampler(self, *args, **kwargs) -> bool:
        return False

    def add_harvest_sampler(self, *args, **kwargs) -> bool:
        return False

    add_sampler = add_periodic_sampler

    def start_background_scheduler(self, *args, **kwargs) -> bool:
        return False

    start_sampler_thread = start_background_scheduler

    def record_metric(self, *args, **kwargs) -> None:
        pass
