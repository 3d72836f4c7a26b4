# school_admin/services/side_effects.py
"""Follow-up work (admin notifications, email) dispatched after a primary write.

Each dispatched item runs as its own asyncio task with its own error channel:
a failure is logged and counted and never reaches the request that caused it.
"""
from collections import Counter
from functools import partial
from typing import Callable, Optional, Set
import asyncio
import logging

from .notification_service import NotificationService

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str], None]


class SideEffects:
    def __init__(self, session_factory, email_sender: Optional[EmailSender] = None):
        self.session_factory = session_factory
        if email_sender is None:
            from ..tasks.email_tasks import enqueue_email
            email_sender = enqueue_email
        self.email_sender = email_sender
        self.failures: Counter = Counter()
        self._tasks: Set[asyncio.Task] = set()

    def notify(self, **fields) -> None:
        """Schedule an admin notification; see NotificationService.raise_notification"""
        self._spawn("notification", self._store_notification(fields))

    def email(self, to: Optional[str], subject: str, html: str) -> None:
        if not to:
            logger.info(f"No recipient for email '{subject}', skipping")
            return
        self._spawn("email", self._send_email(to, subject, html))

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every scheduled item to finish"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(self, kind: str, coro) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(partial(self._finished, kind))

    def _finished(self, kind: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"{kind} side effect cancelled")
            return
        exc = task.exception()
        if exc is not None:
            self.failures[kind] += 1
            logger.error(f"{kind} side effect failed: {exc!r}")

    async def _store_notification(self, fields) -> None:
        async with self.session_factory() as session:
            notification = await NotificationService(session).raise_notification(**fields)
        if notification is None:
            self.failures["notification"] += 1

    async def _send_email(self, to: str, subject: str, html: str) -> None:
        await asyncio.to_thread(self.email_sender, to, subject, html)
        logger.info(f"Queued email to {to}: {subject}")
