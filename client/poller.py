import asyncio
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

DEFAULT_POLL_INTERVAL = 30


class AccountPoller:
    """
    Re-fetches account data every ``interval`` seconds until stopped.

    A failed fetch is passed to ``on_error`` and polling continues.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        on_update: Callable[[Any], Any],
        on_error: Optional[Callable[[Exception], Any]] = None,
        interval: float = DEFAULT_POLL_INTERVAL,
    ):
        if interval <= 0:
            raise ValueError("Poll interval must be positive")
        self.fetch = fetch
        self.on_update = on_update
        self.on_error = on_error
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self) -> bool:
        try:
            data = await self.fetch()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Account refresh failed: {e}")
            if self.on_error:
                self.on_error(e)
            return False
        self.on_update(data)
        return True

    async def _run(self):
        while True:
            await self.refresh()
            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self):
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
