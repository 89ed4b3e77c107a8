import asyncio
import time

from ratehub_client import timer
from ratehub_client.identity import new_id


def test_sleep_non_positive_returns_immediately() -> None:
    started = time.monotonic()
    asyncio.run(timer.sleep(0))
    asyncio.run(timer.sleep(-5000))
    assert time.monotonic() - started < 1.0


def test_sleep_waits_roughly_requested_time() -> None:
    started = time.monotonic()
    asyncio.run(timer.sleep(50))
    assert time.monotonic() - started >= 0.04


def test_new_id_is_unique() -> None:
    ids = {new_id() for _ in range(100)}
    assert len(ids) == 100
