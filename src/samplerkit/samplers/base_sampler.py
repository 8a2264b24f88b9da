from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Hashable, Optional


class SamplerError(Exception):
    """Raised by a sampler when it cannot take its measurement."""


@dataclass(frozen=True)
class PollResult:
    """Outcome of a single poll call on one sampler."""

    sampler: Any
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, sampler: Any) -> "PollResult":
        return cls(sampler=sampler)

    @classmethod
    def failure(cls, sampler: Any, error: BaseException) -> "PollResult":
        return cls(sampler=sampler, error=error)


class BaseSampler(ABC):
    """
    Abstract base class for samplers that measure some runtime quantity,
    such as process memory, CPU utilisation or thread counts.

    Samplers are registered with a stats engine and polled either just
    before each harvest or on the background timer. A sampler reports its
    observations back through `self.stats_engine`, which the registry sets
    when the sampler is accepted.
    """

    def __init__(self):
        # Set by the registry; the engine does not own the sampler.
        self.stats_engine = None

    @property
    def kind(self) -> Hashable:
        """
        Identity used to reject duplicate registrations.
        Distinct sampler implementations have distinct kinds.
        """
        return type(self)

    @property
    def id(self) -> str:
        """Identifier used in log messages."""
        return type(self).__name__

    @abstractmethod
    def poll(self) -> None:
        """
        Take one measurement and record it into the attached engine.

        Raises:
            SamplerError (or any other Exception) if the measurement fails.
            The sampler is then removed from its set for good.
        """
        pass

    def try_poll(self) -> PollResult:
        """Call `poll()` and capture its outcome instead of raising."""
        return run_poll(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


def sampler_kind(sampler: Any) -> Hashable:
    """Kind of any sampler-like object, falling back to its class."""
    return getattr(sampler, "kind", type(sampler))


def sampler_id(sampler: Any) -> str:
    """Loggable id of any sampler-like object, falling back to its class name."""
    return str(getattr(sampler, "id", type(sampler).__name__))


def run_poll(sampler: Any) -> PollResult:
    """
    Poll one sampler and return a PollResult.
    Works for BaseSampler subclasses and for plain objects with a `poll()`.
    """
    try:
        sampler.poll()
    except Exception as e:
        return PollResult.failure(sampler, e)
    return PollResult.success(sampler)
