import asyncio
from typing import Any, Awaitable, List


async def gather_or_cancel(*aws: Awaitable[Any]) -> List[Any]:
    """
    Like asyncio.gather, but the first failure cancels the remaining awaitables.

    Siblings are awaited after cancellation so none of them keeps issuing
    requests or leaves an unretrieved exception behind.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
