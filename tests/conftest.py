"""
Pytest configuration and shared fixtures for FitFlow tests.
"""

import asyncio
import os
import random
import tempfile
from pathlib import Path
from typing import Generator, Optional, Sequence, Tuple

import pytest

from fitflow.core.navigation import NavigationStack
from fitflow.core.store import MemorySessionStore
from fitflow.core.transitions import TransitionEngine
from fitflow.exceptions import StoreReadError, StoreWriteError


class FlakyStore(MemorySessionStore):
    """
    Memory store that fails on demand.

    Args:
        fail_reads: Raise StoreReadError from every read.
        fail_writes_after: Number of per-key writes or removals that succeed
            before every further one raises StoreWriteError. None never fails.
    """

    def __init__(
        self,
        initial=None,
        atomic_batch: bool = False,
        fail_reads: bool = False,
        fail_writes_after: Optional[int] = None,
    ):
        super().__init__(initial, atomic_batch=atomic_batch)
        self.fail_reads = fail_reads
        self.fail_writes_after = fail_writes_after
        self.writes = 0

    def _count_write(self, key: str) -> None:
        if self.fail_writes_after is not None and self.writes >= self.fail_writes_after:
            raise StoreWriteError(f"Simulated write failure for {key}")
        self.writes += 1

    async def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StoreReadError(f"Simulated read failure for {key}")
        return await super().get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        self._count_write(key)
        await super().set_item(key, value)

    async def remove_item(self, key: str) -> None:
        self._count_write(key)
        await super().remove_item(key)

    async def multi_set(self, pairs: Sequence[Tuple[str, str]]) -> None:
        if self.supports_atomic_batch:
            for key, _ in pairs:
                self._count_write(key)
        await super().multi_set(pairs)

    async def multi_remove(self, keys: Sequence[str]) -> None:
        if self.supports_atomic_batch:
            for key in keys:
                self._count_write(key)
        await super().multi_remove(keys)


class DelayedStore(MemorySessionStore):
    """Memory store whose operations settle after a random short delay."""

    def __init__(self, initial=None, max_delay: float = 0.005, seed: int = 0):
        super().__init__(initial, atomic_batch=False)
        self.max_delay = max_delay
        self._random = random.Random(seed)

    async def _delay(self) -> None:
        await asyncio.sleep(self._random.uniform(0, self.max_delay))

    async def get_item(self, key: str) -> Optional[str]:
        await self._delay()
        return await super().get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        await self._delay()
        await super().set_item(key, value)

    async def remove_item(self, key: str) -> None:
        await self._delay()
        await super().remove_item(key)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def store() -> MemorySessionStore:
    """Empty in-memory session store."""
    return MemorySessionStore()


@pytest.fixture
def navigation() -> NavigationStack:
    """Empty navigation stack."""
    return NavigationStack()


@pytest.fixture
def engine(store: MemorySessionStore, navigation: NavigationStack) -> TransitionEngine:
    """Transition engine over the store and navigation fixtures."""
    return TransitionEngine(store, navigation)


@pytest.fixture
def sample_profile() -> dict:
    return {
        "name": "Alex",
        "age": 29,
        "workout_preference": "gym",
        "equipment": "dumbbells",
        "gym_equipment": "free_weights",
        "fitness_goal": "build_muscle",
    }


# Hypothesis settings for property-based tests
from hypothesis import settings, Verbosity

# Register custom profile for FitFlow tests
settings.register_profile("fitflow", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("fitflow-ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.register_profile("fitflow-dev", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "fitflow"))
