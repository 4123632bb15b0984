"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

Persisted session store for FitFlow.

A string-to-string key/value store with asynchronous get/set/remove and bulk
variants. Two implementations are provided:

- MemorySessionStore: process-local dict, used by tests and the ``memory``
  storage backend.
- FileSessionStore: JSON document in the workspace, rewritten atomically
  (temporary file, fsync, rename) so a bulk operation lands as a whole.

Stores that cannot apply a bulk operation atomically advertise
``supports_atomic_batch = False``; their bulk operations apply keys one by
one in the order given, so callers order keys least-dangerous-first.
"""

import asyncio
import json
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from fitflow.exceptions import StoreReadError, StoreWriteError
from fitflow.logging_config import get_logger, log_store_operation

logger = get_logger(__name__)

STORE_FORMAT_VERSION = 1


class SessionStore(ABC):
    """
    Abstract base class for the session key/value store.

    Implementations raise StoreReadError / StoreWriteError for every failure,
    never the underlying OSError or JSON error.
    """

    supports_atomic_batch: bool = False

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None when absent."""

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store value under key."""

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Remove key. Removing an absent key is not an error."""

    async def multi_get(self, keys: Sequence[str]) -> Dict[str, Optional[str]]:
        """Read several keys concurrently."""
        values = await asyncio.gather(*(self.get_item(key) for key in keys))
        return dict(zip(keys, values))

    async def multi_set(self, pairs: Sequence[Tuple[str, str]]) -> None:
        """
        Write several keys.

        The default implementation writes one key at a time in the order
        given and stops at the first failure.
        """
        for key, value in pairs:
            await self.set_item(key, value)

    async def multi_remove(self, keys: Sequence[str]) -> None:
        """
        Remove several keys.

        The default implementation removes one key at a time in the order
        given and stops at the first failure.
        """
        for key in keys:
            await self.remove_item(key)


def _check_value(key: str, value: str) -> None:
    if not isinstance(key, str) or not isinstance(value, str):
        raise StoreWriteError(
            f"Session store only holds string keys and values, got {key!r}={value!r}"
        )


class MemorySessionStore(SessionStore):
    """
    In-process session store.

    Args:
        initial: Optional initial contents.
        atomic_batch: Whether bulk operations apply in one step. When False,
            bulk operations fall back to the ordered per-key behaviour of
            SessionStore, yielding to the event loop between keys.
    """

    def __init__(
        self,
        initial: Optional[Mapping[str, str]] = None,
        atomic_batch: bool = True,
    ):
        self._items: Dict[str, str] = dict(initial or {})
        self.supports_atomic_batch = atomic_batch

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of the current contents."""
        return dict(self._items)

    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        _check_value(key, value)
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    async def multi_set(self, pairs: Sequence[Tuple[str, str]]) -> None:
        if not self.supports_atomic_batch:
            for key, value in pairs:
                await self.set_item(key, value)
                await asyncio.sleep(0)
            return
        for key, value in pairs:
            _check_value(key, value)
        self._items.update(dict(pairs))

    async def multi_remove(self, keys: Sequence[str]) -> None:
        if not self.supports_atomic_batch:
            for key in keys:
                await self.remove_item(key)
                await asyncio.sleep(0)
            return
        for key in keys:
            self._items.pop(key, None)

    def __repr__(self) -> str:
        return f"MemorySessionStore(keys={sorted(self._items)!r})"


class FileSessionStore(SessionStore):
    """
    Session store persisted as a JSON document.

    File layout::

        {"version": 1, "items": {"isLoggedIn": "true", ...}}

    A missing file is an empty store. Every mutation rewrites the whole
    document atomically, so bulk operations are all-or-nothing.

    Args:
        path: Location of the JSON document.
    """

    supports_atomic_batch = True

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Disk access (runs in a worker thread)
    # ------------------------------------------------------------------

    def _read_items(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StoreReadError(f"Failed to read session store {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("items"), dict):
            raise StoreReadError(f"Malformed session store {self.path}")

        items = data["items"]
        return {str(k): v for k, v in items.items() if isinstance(v, str)}

    def _write_items(self, items: Dict[str, str]) -> None:
        """
        Persist items using an atomic write.

        Steps:
        1. Write to temporary file (.tmp)
        2. Flush to disk (fsync)
        3. Atomically rename to target file
        """
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w") as f:
                json.dump({"version": STORE_FORMAT_VERSION, "items": items}, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StoreWriteError(f"Failed to write session store {self.path}: {e}") from e

    def _update(self, updates: Mapping[str, str], removals: Iterable[str]) -> None:
        try:
            items = self._read_items()
        except StoreReadError as e:
            raise StoreWriteError(f"Cannot update unreadable session store: {e}") from e
        items.update(updates)
        for key in removals:
            items.pop(key, None)
        self._write_items(items)

    # ------------------------------------------------------------------
    # SessionStore API
    # ------------------------------------------------------------------

    async def _timed(self, operation: str, keys: Sequence[str], func, *args):
        start = time.perf_counter()
        try:
            result = await asyncio.to_thread(func, *args)
        except (StoreReadError, StoreWriteError) as e:
            log_store_operation(
                logger,
                operation=operation,
                keys=keys,
                duration_ms=(time.perf_counter() - start) * 1000,
                success=False,
                error=str(e),
            )
            raise
        log_store_operation(
            logger,
            operation=operation,
            keys=keys,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return result

    async def get_item(self, key: str) -> Optional[str]:
        items = await self._timed("get", [key], self._read_items)
        return items.get(key)

    async def multi_get(self, keys: Sequence[str]) -> Dict[str, Optional[str]]:
        items = await self._timed("multi_get", keys, self._read_items)
        return {key: items.get(key) for key in keys}

    async def set_item(self, key: str, value: str) -> None:
        await self.multi_set([(key, value)])

    async def remove_item(self, key: str) -> None:
        await self.multi_remove([key])

    async def multi_set(self, pairs: Sequence[Tuple[str, str]]) -> None:
        for key, value in pairs:
            _check_value(key, value)
        keys = [key for key, _ in pairs]
        async with self._lock:
            await self._timed("multi_set", keys, self._update, dict(pairs), ())

    async def multi_remove(self, keys: Sequence[str]) -> None:
        async with self._lock:
            await self._timed("multi_remove", keys, self._update, {}, list(keys))

    def __repr__(self) -> str:
        return f"FileSessionStore(path={self.path!r})"
