import threading

import pytest

from torusfhe.parallel import (
    ParallelConfig,
    Railgun,
    ThreadPoolRailgun,
    default_railgun,
    thread_railgun,
)


def test_par_map():
    assert default_railgun().par_map([1, 2, 3, 4, 5], lambda x: x * 2) == [
        2,
        4,
        6,
        8,
        10,
    ]


def test_par_map_indexed():
    assert default_railgun().par_map_indexed([10, 20, 30], lambda i, x: i + x) == [
        10,
        21,
        32,
    ]


def test_with_config():
    config = ParallelConfig(stack_size=4 * 1024 * 1024, num_threads=2)
    assert default_railgun().with_config(config, lambda: 42) == 42


def test_thread_par_map_squares():
    railgun = ThreadPoolRailgun()
    assert railgun.par_map([1, 2, 3, 4, 5, 6, 7, 8], lambda x: x * x) == [
        1,
        4,
        9,
        16,
        25,
        36,
        49,
        64,
    ]


def test_thread_large_stack():
    railgun = ThreadPoolRailgun()
    config = ParallelConfig(stack_size=16 * 1024 * 1024, num_threads=4)

    def work():
        return sum(railgun.par_map(list(range(1000)), lambda x: x * 2))

    assert railgun.with_config(config, work) == 999000


def test_thread_indexed():
    railgun = ThreadPoolRailgun()
    assert railgun.par_map_indexed(["a", "b", "c"], lambda i, s: f"{i}{s}") == [
        "0a",
        "1b",
        "2c",
    ]


def test_with_config_runs_on_other_thread():
    caller = threading.get_ident()
    worker = default_railgun().with_config(ParallelConfig(), threading.get_ident)
    assert worker != caller and isinstance(worker, int)


def test_default_railgun_is_singleton():
    first = default_railgun()
    second = default_railgun()
    assert first is second
    assert second.par_map([3, 4], lambda x: x + 1) == [4, 5]


def test_thread_railgun_keeps_config():
    config = ParallelConfig(stack_size=None, num_threads=3)
    railgun = thread_railgun(config)
    assert railgun.config == config
    assert railgun.par_map(range(5), str) == ["0", "1", "2", "3", "4"]


def test_default_config_values():
    config = ParallelConfig()
    assert config.stack_size == 8 * 1024 * 1024
    assert config.num_threads is None
    assert config.workers >= 1
    assert ParallelConfig(num_threads=2).workers == 2


def test_empty_input():
    assert default_railgun().par_map([], lambda x: x) == []
    assert default_railgun().par_map_indexed([], lambda i, x: x) == []


def test_errors_propagate():
    def boom(x):
        raise KeyError(x)

    with pytest.raises(KeyError):
        default_railgun().par_map([1, 2], boom)
    with pytest.raises(KeyError):
        default_railgun().with_config(ParallelConfig(), lambda: boom(0))


def test_railgun_is_abstract():
    with pytest.raises(TypeError):
        Railgun()