from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from PyQt6.QtCore import QObject, pyqtSignal


class TaskSignals(QObject):
    completed = pyqtSignal(object)
    failed = pyqtSignal(Exception)


@dataclass
class TaskHandle:
    signals: TaskSignals
    future: Future


class AsyncBridge:
    """Runs one asyncio loop on a background thread for all store mutations.

    The Qt thread never mutates the store directly: it hands work to this loop
    and receives results through queued Qt signals.
    """

    def __init__(self) -> None:
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name="linear-calendar-loop", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    def _wire(
        self,
        future: Future,
        on_success: Optional[Callable[[Any], None]],
        on_error: Optional[Callable[[Exception], None]],
    ) -> TaskHandle:
        signals = TaskSignals()
        if on_success:
            signals.completed.connect(on_success)
        if on_error:
            signals.failed.connect(on_error)

        def _done(done: Future) -> None:
            exc = done.exception()
            if exc is not None:
                signals.failed.emit(exc)
            else:
                signals.completed.emit(done.result())

        future.add_done_callback(_done)
        return TaskHandle(signals=signals, future=future)

    def submit(
        self,
        coro_fn: Callable[..., Awaitable[Any]],
        *args: Any,
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        **kwargs: Any,
    ) -> TaskHandle:
        future = asyncio.run_coroutine_threadsafe(coro_fn(*args, **kwargs), self.loop)
        return self._wire(future, on_success, on_error)

    def call(
        self,
        fn: Callable[..., Any],
        *args: Any,
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        **kwargs: Any,
    ) -> TaskHandle:
        """Run a synchronous callable on the loop thread."""

        async def _invoke() -> Any:
            return fn(*args, **kwargs)

        return self.submit(_invoke, on_success=on_success, on_error=on_error)

    def shutdown(self) -> None:
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout=2)
