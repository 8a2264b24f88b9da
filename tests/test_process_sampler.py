import os
from unittest.mock import patch

import psutil
import pytest

from samplerkit.engine.stats_engine import StatsEngine
from samplerkit.samplers.base_sampler import SamplerError
from samplerkit.samplers.process_sampler import CpuSampler, MemorySampler, ThreadSampler


@pytest.mark.parametrize("sampler_cls", [MemorySampler, CpuSampler, ThreadSampler])
def test_sampler_records_into_engine(sampler_cls):
    engine = StatsEngine()
    sampler = sampler_cls()
    engine.add_harvest_sampler(sampler)

    engine.poll_harvest_samplers()

    stats = engine.get_stats(sampler_cls.metric_name)
    assert stats is not None
    assert stats.call_count == 1
    assert stats.max >= 0.0
    assert sampler in engine.harvest_samplers()


def test_memory_and_thread_readings_are_positive():
    engine = StatsEngine()
    engine.add_periodic_sampler(MemorySampler())
    engine.add_periodic_sampler(ThreadSampler())

    engine.poll(engine.periodic_samplers())

    assert engine.get_summary()["Memory/Physical"]["latest"] > 0
    assert engine.get_summary()["Threads/all"]["latest"] >= 1


def test_samplers_of_different_classes_are_distinct_kinds():
    engine = StatsEngine()

    assert engine.add_periodic_sampler(MemorySampler())
    assert engine.add_periodic_sampler(CpuSampler())
    assert not engine.add_periodic_sampler(MemorySampler())
    assert len(engine.periodic_samplers()) == 2


def test_unattached_sampler_raises():
    sampler = MemorySampler()

    with pytest.raises(SamplerError):
        sampler.poll()


def test_psutil_failure_becomes_sampler_error_and_removal():
    engine = StatsEngine()
    sampler = MemorySampler()
    engine.add_harvest_sampler(sampler)

    with patch.object(
        sampler.process, "memory_info", side_effect=psutil.NoSuchProcess(os.getpid())
    ):
        results = engine.poll_harvest_samplers()

    assert isinstance(results[0].error, SamplerError)
    assert engine.harvest_samplers().is_empty()
    assert engine.get_stats("Memory/Physical") is None


def test_id_includes_pid():
    sampler = ThreadSampler()

    assert sampler.id == f"ThreadSampler:{os.getpid()}"
    assert sampler.kind is ThreadSampler
