import logging
from typing import Any, Optional

from samplerkit.samplers.sampler_set import SamplerSet
from samplerkit.samplers.base_sampler import sampler_id

logger = logging.getLogger(__name__)


class SamplerRegistry:
    """
    Registration API over the periodic and harvest-time sampler sets.

    Both sets are created on first access and live as long as the registry.
    A sampler whose kind is already present in the target set is ignored
    with a warning; nothing is ever raised to the caller.
    """

    def __init__(self, engine: Any = None):
        self.engine = engine
        self._periodic: Optional[SamplerSet] = None
        self._harvest: Optional[SamplerSet] = None

    def periodic_samplers(self) -> SamplerSet:
        if self._periodic is None:
            self._periodic = SamplerSet("periodic")
        return self._periodic

    def harvest_samplers(self) -> SamplerSet:
        if self._harvest is None:
            self._harvest = SamplerSet("harvest-time")
        return self._harvest

    def add_periodic_sampler(self, sampler: Any) -> bool:
        """Add a sampler to be polled every POLL_PERIOD seconds on the background thread."""
        return self._add_to(self.periodic_samplers(), sampler)

    def add_harvest_sampler(self, sampler: Any) -> bool:
        """Add a sampler to be polled just before each harvest."""
        return self._add_to(self.harvest_samplers(), sampler)

    def _add_to(self, sampler_set: SamplerSet, sampler: Any) -> bool:
        if not sampler_set.add(sampler, on_added=self._attach):
            logger.warning(
                "Ignoring addition of %r because it is already registered.", sampler
            )
            return False
        logger.debug("Adding %s sampler: %s", sampler_set.name, sampler_id(sampler))
        return True

    def _attach(self, sampler: Any) -> None:
        # Runs under the set's lock, before the sampler is visible to a poll pass.
        try:
            sampler.stats_engine = self.engine
        except AttributeError as e:
            logger.debug("Could not attach engine to %r: %s", sampler, e)
