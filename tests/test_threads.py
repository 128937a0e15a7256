"""Tests for meteostat_bulk._threads."""

from __future__ import annotations

import asyncio
import contextvars
import threading
from unittest.mock import patch

import pytest

from meteostat_bulk._threads import run_blocking
from meteostat_bulk.exceptions import TaskJoinError


class TestRunBlocking:
    @pytest.mark.asyncio
    async def test_runs_off_the_event_loop(self) -> None:
        main = threading.get_ident()
        assert await run_blocking("ident", threading.get_ident) != main

    @pytest.mark.asyncio
    async def test_passes_arguments(self) -> None:
        assert await run_blocking("join", "-".join, ["a", "b"]) == "a-b"
        assert await run_blocking("int", int, "ff", base=16) == 255

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self) -> None:
        with pytest.raises(ValueError):
            await run_blocking("int", int, "nope")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [RuntimeError("bad state"), NotImplementedError("todo"), RecursionError()])
    async def test_runtime_errors_from_func_propagate(self, error: RuntimeError) -> None:
        def fail() -> None:
            raise error

        with pytest.raises(type(error)) as exc_info:
            await run_blocking("fail", fail)
        assert exc_info.value is error
        assert not isinstance(exc_info.value, TaskJoinError)

    @pytest.mark.asyncio
    async def test_context_is_copied(self) -> None:
        var: contextvars.ContextVar[str] = contextvars.ContextVar("var")
        var.set("outer")
        assert await run_blocking("get", var.get) == "outer"

    @pytest.mark.asyncio
    async def test_executor_failure_is_task_join_error(self) -> None:
        loop = asyncio.get_running_loop()
        with (
            patch.object(loop, "run_in_executor", side_effect=RuntimeError("shutdown")),
            pytest.raises(TaskJoinError) as exc_info,
        ):
            await run_blocking("write parquet", print)
        assert exc_info.value.task == "write parquet"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
