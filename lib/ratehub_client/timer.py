from __future__ import annotations

import asyncio


async def sleep(milliseconds: float) -> None:
    if milliseconds <= 0:
        return
    await asyncio.sleep(milliseconds / 1000)
