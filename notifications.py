# notifications.py
import asyncio
import logging
from functools import partial
from typing import Any, Callable, List, Optional, Protocol

from models import Notification, NotificationKind

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules callbacks on a plain asyncio event loop.

    For hosts that are not Textual apps; the TUI uses the timer adapter in
    main.py instead.
    """
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop

    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self.loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class NotificationCoordinator:
    """Shows at most one transient notification at a time.

    A new notification replaces the current one and restarts the auto-clear
    timer, so an older timer can never clear a newer message.
    """

    def __init__(self, scheduler: Scheduler, timeout: float = 2.2):
        self.scheduler = scheduler
        self.timeout = timeout
        self._current: Optional[Notification] = None
        self._shown = 0
        self._timer: Optional[TimerHandle] = None
        self._subscribers: List[Callable[[Optional[Notification]], None]] = []

    @property
    def current(self) -> Optional[Notification]:
        return self._current

    @property
    def is_showing(self) -> bool:
        return self._current is not None

    def subscribe(self, callback: Callable[[Optional[Notification]], None]) -> None:
        self._subscribers.append(callback)

    def notify(self, text: str, kind: NotificationKind = NotificationKind.INFO) -> Notification:
        self._cancel_timer()
        self._current = Notification(text, kind)
        self._shown += 1
        self._timer = self.scheduler.schedule(self.timeout, partial(self._expire, self._shown))
        logger.debug("Showing %s notification: %s", kind.value, text)
        self._publish()
        return self._current

    def dismiss(self) -> None:
        self._cancel_timer()
        if self._current is None:
            return
        self._current = None
        self._publish()

    def _expire(self, shown: int) -> None:
        # only the timer of the latest notification may clear it
        if shown == self._shown:
            self.dismiss()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _publish(self) -> None:
        for callback in self._subscribers:
            callback(self._current)
