"""Offload blocking work to the default thread pool."""

from __future__ import annotations

import asyncio
import contextvars
import functools
from typing import Callable, ParamSpec, TypeVar

from .exceptions import TaskJoinError

P = ParamSpec("P")
T = TypeVar("T")


async def run_blocking(task: str, func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Run *func* on a worker thread of the loop's default executor.

    Context variables are copied into the worker, as with
    :func:`asyncio.to_thread`.  Exceptions raised by *func* propagate
    unchanged, whatever their type.  Only a failure to hand the job to the
    executor (e.g. it was shut down) is reported as :class:`TaskJoinError`.

    Args:
        task: Short label used in the error message.
        func: Blocking callable.
    """
    loop = asyncio.get_running_loop()
    call = functools.partial(contextvars.copy_context().run, func, *args, **kwargs)
    try:
        future = loop.run_in_executor(None, call)
    except RuntimeError as exc:
        raise TaskJoinError(task) from exc
    return await future
