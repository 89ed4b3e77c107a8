"""In-process request queue shared by client instances.

Jobs are async callables tagged with an owner key. ``push`` jobs run in
arrival order, ``push_immediate`` jobs jump ahead of them, and at most
``concurrency`` jobs are in flight at once. ``cancel(owner_key)`` abandons
every pending or running job registered under that key and nothing else.

A job waiting out a rate-limit reset keeps its slot, so with
``concurrency=1`` even ``push_immediate`` work waits for that reset. The
shared ``default_queue()`` therefore allows several jobs in flight.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

Executor = Callable[[], Awaitable[Any]]


@dataclass(eq=False)
class _Job:
    executor: Executor
    owner_key: str
    future: asyncio.Future
    task: asyncio.Task | None = None


class RequestQueue:
    def __init__(self, concurrency: int = 1):
        self._concurrency = max(1, int(concurrency))
        self._immediate: deque[_Job] = deque()
        self._ordered: deque[_Job] = deque()
        self._running: set[_Job] = set()

    @property
    def concurrency(self) -> int:
        return self._concurrency

    @property
    def pending_count(self) -> int:
        return len(self._immediate) + len(self._ordered)

    @property
    def running_count(self) -> int:
        return len(self._running)

    def push(self, executor: Executor, owner_key: str) -> asyncio.Future:
        return self._enqueue(self._ordered, executor, owner_key)

    def push_immediate(self, executor: Executor, owner_key: str) -> asyncio.Future:
        return self._enqueue(self._immediate, executor, owner_key)

    def cancel(self, owner_key: str) -> int:
        abandoned = 0
        for lane in (self._immediate, self._ordered):
            for job in [j for j in lane if j.owner_key == owner_key]:
                lane.remove(job)
                job.future.cancel()
                abandoned += 1
        for job in [j for j in self._running if j.owner_key == owner_key]:
            job.future.cancel()
            if job.task is not None and not job.task.done():
                job.task.cancel()
            abandoned += 1
        if abandoned:
            logger.debug("cancelled %d job(s) for %s", abandoned, owner_key)
        return abandoned

    def _enqueue(self, lane: deque[_Job], executor: Executor, owner_key: str) -> asyncio.Future:
        loop = asyncio.get_running_loop()
        job = _Job(executor=executor, owner_key=owner_key, future=loop.create_future())
        job.future.add_done_callback(lambda _fut: self._on_future_done(job))
        lane.append(job)
        logger.debug(
            "queued job for %s (%s), pending=%d running=%d",
            owner_key,
            "immediate" if lane is self._immediate else "ordered",
            self.pending_count,
            self.running_count,
        )
        self._drain()
        return job.future

    def _next_job(self) -> _Job | None:
        for lane in (self._immediate, self._ordered):
            while lane:
                job = lane.popleft()
                if not job.future.done():
                    return job
        return None

    def _drain(self) -> None:
        while len(self._running) < self._concurrency:
            job = self._next_job()
            if job is None:
                return
            self._running.add(job)
            job.task = asyncio.ensure_future(self._run(job))
            job.task.add_done_callback(lambda _task, job=job: self._on_task_done(job))

    async def _run(self, job: _Job) -> None:
        try:
            result = await job.executor()
        except asyncio.CancelledError:
            if not job.future.done():
                job.future.cancel()
            raise
        except Exception as exc:
            if not job.future.done():
                job.future.set_exception(exc)
        else:
            if not job.future.done():
                job.future.set_result(result)

    def _on_task_done(self, job: _Job) -> None:
        # Runs even when the task was cancelled before its first step.
        if not job.future.done():
            job.future.cancel()
        self._running.discard(job)
        self._drain()

    def _on_future_done(self, job: _Job) -> None:
        # The awaiting caller gave up; drop or stop the job it was waiting on.
        if not job.future.cancelled():
            return
        for lane in (self._immediate, self._ordered):
            if job in lane:
                lane.remove(job)
        if job.task is not None and not job.task.done():
            job.task.cancel()


DEFAULT_CONCURRENCY = 4

_DEFAULT_QUEUE: RequestQueue | None = None


def default_queue() -> RequestQueue:
    global _DEFAULT_QUEUE
    if _DEFAULT_QUEUE is None:
        _DEFAULT_QUEUE = RequestQueue(concurrency=DEFAULT_CONCURRENCY)
    return _DEFAULT_QUEUE
