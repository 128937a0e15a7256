"""Process-wide memoization of lazy frames by (station, frequency)."""

from __future__ import annotations

import asyncio
import logging

import polars as pl

from .frequency import Frequency
from .materialize import FrameMaterializer

logger = logging.getLogger(__name__)

FrameKey = tuple[str, Frequency]


class FrameCache:
    """Single-flight cache of :class:`polars.LazyFrame` handles.

    Concurrent callers asking for the same key while it is cold share one
    materialization, run as a task owned by the cache.  A caller that is
    cancelled stops waiting but does not stop the materialization.  The lock
    only guards the dictionaries; downloads and Parquet writes happen outside
    it.  A failed or cancelled materialization leaves no entry behind and its
    error reaches every waiter.

    Args:
        materializer: Produces frames on a cache miss.
    """

    __slots__ = ("_frames", "_inflight", "_lock", "_materializer")

    def __init__(self, materializer: FrameMaterializer) -> None:
        self._materializer = materializer
        self._frames: dict[FrameKey, pl.LazyFrame] = {}
        self._inflight: dict[FrameKey, asyncio.Task[pl.LazyFrame]] = {}
        self._lock = asyncio.Lock()

    @property
    def materializer(self) -> FrameMaterializer:
        return self._materializer

    def __contains__(self, key: object) -> bool:
        return key in self._frames

    def __len__(self) -> int:
        return len(self._frames)

    async def get(self, station: str, frequency: Frequency) -> pl.LazyFrame:
        """Return the frame for *station* at *frequency*, materializing it once."""
        key: FrameKey = (station, frequency)
        async with self._lock:
            frame = self._frames.get(key)
            if frame is not None:
                logger.debug("Frame cache hit for %s/%s", frequency, station)
                return frame
            task = self._inflight.get(key)
            # A task cancelled before it started never ran its cleanup.
            if task is None or task.done():
                task = asyncio.create_task(self._materialize(key))
                self._inflight[key] = task

        # shield: cancelling one caller must not cancel the shared task.
        return await asyncio.shield(task)

    async def _materialize(self, key: FrameKey) -> pl.LazyFrame:
        try:
            frame = await self._materializer.materialize(*key)
        finally:
            self._inflight.pop(key, None)
        # No await between the pop and the store, so no caller sees neither.
        return self._frames.setdefault(key, frame)

    async def invalidate(self, station: str, frequency: Frequency) -> None:
        """Forget the cached frame for one key (the snapshot file is kept)."""
        async with self._lock:
            self._frames.pop((station, frequency), None)

    async def invalidate_all(self) -> None:
        """Forget every cached frame."""
        async with self._lock:
            self._frames.clear()
