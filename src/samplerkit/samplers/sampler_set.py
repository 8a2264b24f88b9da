import threading
from typing import Any, Callable, Iterator, List, Optional

from .base_sampler import sampler_kind


class SamplerSet:
    """
    Ordered collection of samplers with at most one sampler per kind.

    Registration threads append while the background thread removes failed
    samplers, so every mutation and every snapshot happens under a lock.
    Iteration works on a snapshot, never on the live list.
    """

    def __init__(self, name: str):
        self.name = name
        self._samplers: List[Any] = []
        self._lock = threading.Lock()

    def add(
        self, sampler: Any, on_added: Optional[Callable[[Any], None]] = None
    ) -> bool:
        """
        Append `sampler` unless one of the same kind is already present.

        `on_added` runs under the lock before the append, so no poll pass
        can see the sampler until it has returned.

        Returns:
            bool: True if the sampler was added, False if it was a duplicate.
        """
        kind = sampler_kind(sampler)
        with self._lock:
            if any(sampler_kind(s) == kind for s in self._samplers):
                return False
            if on_added is not None:
                on_added(sampler)
            self._samplers.append(sampler)
            return True

    def remove(self, sampler: Any) -> bool:
        """Remove this exact sampler instance. Returns False if it was not present."""
        with self._lock:
            for index, existing in enumerate(self._samplers):
                if existing is sampler:
                    del self._samplers[index]
                    return True
        return False

    def snapshot(self) -> List[Any]:
        with self._lock:
            return list(self._samplers)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._samplers

    def __len__(self) -> int:
        with self._lock:
            return len(self._samplers)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.snapshot())

    def __contains__(self, sampler: Any) -> bool:
        with self._lock:
            return any(s is sampler for s in self._samplers)

    def __repr__(self) -> str:
        return f"SamplerSet({self.name!r}, {self.snapshot()!r})"
