"""
Single-writer save queue.

Every mutation enqueues a full copy of the state. One worker task drains
the queue and hands each copy to the gateway, so saves are issued in
exactly the order the mutations happened. Callers never wait for a save.

submit() is safe to call from any thread: items are handed to the
writer's event loop with call_soon_threadsafe, which preserves order.
"""

import asyncio
from typing import Optional

from networth_tracker.models.state import PersistedState
from networth_tracker.services.storage.gateway import PersistenceGateway


class SaveQueue:
    """Fire-and-forget, order-preserving writer for one gateway."""

    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._queue: Optional[asyncio.Queue] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None

    def start(self) -> None:
        """Start the writer task on the running event loop."""
        if self.is_running:
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._task = self._loop.create_task(self._run(), name="networth-save-queue")

    def submit(self, state: PersistedState) -> None:
        """
        Enqueue a save without waiting for it.

        Raises:
            RuntimeError: If the writer is not running or its loop is closed
        """
        if self._task is None or self._loop is None:
            raise RuntimeError("SaveQueue is not running")
        self._loop.call_soon_threadsafe(self._queue.put_nowait, state)

    async def _run(self) -> None:
        while True:
            state = await self._queue.get()
            try:
                await self._gateway.save(state)
            finally:
                self._queue.task_done()

    async def drain(self) -> None:
        """Wait until every save submitted so far has been attempted."""
        if self._task is None:
            return
        # Submissions are callbacks on the loop; this one runs after them.
        barrier = self._loop.create_future()
        self._loop.call_soon_threadsafe(barrier.set_result, None)
        await barrier
        await self._queue.join()

    async def stop(self) -> None:
        """Finish pending saves, then stop the writer task."""
        if self._task is None:
            return
        await self.drain()
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
