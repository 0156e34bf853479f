"""
Single calling convention for command actions.

Actions either return a value, return an awaitable, or (when the unit is
declared asynchronous) complete later through a ``done(error, result)``
callback. ``drive`` turns all three into one awaitable result.
"""

import asyncio
import inspect
from typing import Any

from .command import Arguments, CommandContext, CommandUnit


def _settle(future: asyncio.Future, error: Any, result: Any) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error if isinstance(error, BaseException) else RuntimeError(str(error)))
    else:
        future.set_result(result)


async def drive(unit: CommandUnit, ctx: CommandContext, args: Arguments) -> Any:
    """Run a unit's action and wait for its completion signal"""
    if not unit.is_async:
        result = unit.action(ctx, args)
        if inspect.isawaitable(result):
            result = await result
        return result

    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def done(error: Any = None, result: Any = None) -> None:
        # may be called from a worker thread
        loop.call_soon_threadsafe(_settle, future, error, result)

    started = unit.action(ctx, args, done)
    if inspect.isawaitable(started):
        await started
    return await future
