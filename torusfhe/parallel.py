"""Pluggable parallel execution backends."""

from __future__ import annotations

import functools
import os
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


@dataclass(frozen=True)
class ParallelConfig:
    """Thread pool settings; ``None`` means choose automatically."""

    stack_size: int | None = 8 * 1024 * 1024
    num_threads: int | None = None

    @property
    def workers(self) -> int:
        """Number of worker threads this configuration asks for."""
        return self.num_threads or os.cpu_count() or 1


class Railgun(ABC):
    """Interface of a parallel execution backend."""

    @abstractmethod
    def par_map(self, items: Sequence[T], func: Callable[[T], U]) -> list[U]:
        """Apply ``func`` to every item in parallel, keeping the order."""

    @abstractmethod
    def par_map_indexed(
        self, items: Sequence[T], func: Callable[[int, T], U]
    ) -> list[U]:
        """Apply ``func(index, item)`` to every item in parallel."""

    @abstractmethod
    def with_config(self, config: ParallelConfig, func: Callable[[], R]) -> R:
        """Run ``func`` inside a pool built from ``config``."""


class ThreadPoolRailgun(Railgun):
    """Backend built on :class:`concurrent.futures.ThreadPoolExecutor`."""

    def __init__(self, config: ParallelConfig | None = None) -> None:
        self.config = config if config is not None else ParallelConfig()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"

    def par_map(self, items: Sequence[T], func: Callable[[T], U]) -> list[U]:
        items = list(items)
        if not items:
            return []
        workers = min(self.config.workers, len(items))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(func, items))

    def par_map_indexed(
        self, items: Sequence[T], func: Callable[[int, T], U]
    ) -> list[U]:
        return self.par_map(list(enumerate(items)), lambda pair: func(*pair))

    def with_config(self, config: ParallelConfig, func: Callable[[], R]) -> R:
        pool = ThreadPoolExecutor(max_workers=config.workers)
        try:
            if config.stack_size is None:
                future = pool.submit(func)
            else:
                # Worker threads are started on submit, so the stack size
                # only needs to be in force around that call.
                previous = threading.stack_size(config.stack_size)
                try:
                    future = pool.submit(func)
                finally:
                    threading.stack_size(previous)
            return future.result()
        finally:
            pool.shutdown(wait=True)


@functools.lru_cache(maxsize=None)
def default_railgun() -> ThreadPoolRailgun:
    """Return the shared default backend."""
    return ThreadPoolRailgun()


def thread_railgun(config: ParallelConfig) -> ThreadPoolRailgun:
    """Create a thread-pool backend with a custom configuration."""
    return ThreadPoolRailgun(config)