import logging
from typing import List

from samplerkit.samplers.base_sampler import PollResult, run_poll
from samplerkit.samplers.sampler_set import SamplerSet

logger = logging.getLogger(__name__)


def poll(sampler_set: SamplerSet) -> List[PollResult]:
    """
    Call poll on each sampler of the set, in registration order.

    A sampler whose poll fails is logged and removed from the set for good.
    The pass runs over a snapshot, so removals neither skip nor revisit
    the remaining samplers. Never raises.

    Returns:
        List[PollResult]: one result per sampler visited.
    """
    results = []
    for sampler in sampler_set.snapshot():
        result = run_poll(sampler)
        if not result.ok:
            logger.warning(
                "Removing %r from list: %r", sampler, result.error, exc_info=result.error
            )
            sampler_set.remove(sampler)
        results.append(result)
    return results
