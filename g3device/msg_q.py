"""A thread-safe first-in, first-out message queue that can be unblocked."""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable
from typing import Any, Optional

from g3device.linked_list import LinkedList, LinkedListError, ListEmptyError

logger = logging.getLogger(__name__)


class MsgQStatus(enum.IntEnum):
    """Result codes of message queue operations."""

    SUCCESS = 0
    FAILURE_GENERAL = -1
    INVALID_PARAMETER = -2
    INVALID_HANDLE = -3
    UNAVAILABLE_RESOURCE = -4
    INSUFFICIENT_BUFFER = -5


class MessageQueueError(Exception):
    """Raised when a queue operation fails; ``status`` tells why."""

    def __init__(self, message: str, status: MsgQStatus = MsgQStatus.FAILURE_GENERAL):
        super().__init__(message)
        self.status = status


class QueueUnblockedError(MessageQueueError):
    """Raised when the queue has been unblocked and can no longer be used."""

    def __init__(self, message: str = "message queue has been unblocked"):
        super().__init__(message, MsgQStatus.UNAVAILABLE_RESOURCE)


class MessageQueue:
    """Queue of messages shared between threads.

    :meth:`receive` blocks until a message arrives. :meth:`unblock` wakes every
    waiting receiver and puts the queue out of use for good.
    """

    def __init__(self) -> None:
        self._messages = LinkedList()
        self._cond = threading.Condition()
        self._unblocked = False

    def send(self, msg: Any, dealloc: Optional[Callable[[Any], None]] = None) -> None:
        """Put ``msg`` on the queue; ``dealloc`` is called on it if it is flushed."""
        if msg is None:
            raise MessageQueueError("message must not be None", MsgQStatus.INVALID_PARAMETER)
        with self._cond:
            logger.debug("Sending message %r", msg)
            if self._unblocked:
                logger.error("Message queue has been unblocked.")
                raise QueueUnblockedError()
            try:
                self._messages.add(msg, dealloc)
            except LinkedListError as exc:
                raise MessageQueueError(str(exc), MsgQStatus.INVALID_PARAMETER) from exc
            finally:
                self._cond.notify()

    def receive(self) -> Any:
        """Return the oldest message, waiting for one if the queue is empty.

        Raises :class:`QueueUnblockedError` if the queue is or becomes unblocked
        while nothing is left to receive.
        """
        with self._cond:
            if self._unblocked:
                logger.error("Message queue has been unblocked.")
                raise QueueUnblockedError()
            self._cond.wait_for(lambda: not self._messages.is_empty() or self._unblocked)
            try:
                msg = self._messages.remove()
            except ListEmptyError as exc:
                raise QueueUnblockedError() from exc
        logger.debug("Received message %r", msg)
        return msg

    def flush(self) -> None:
        """Drop every queued message, calling its release function if it has one."""
        with self._cond:
            self._messages.flush()
        logger.debug("Message Queue flushed")

    def unblock(self) -> None:
        """Wake all waiting receivers and stop the queue from being used."""
        with self._cond:
            if self._unblocked:
                logger.error("Message queue has been unblocked.")
                raise QueueUnblockedError()
            self._unblocked = True
            self._cond.notify_all()
        logger.debug("Message Queue unblocked")

    @property
    def unblocked(self) -> bool:
        """True once :meth:`unblock` has been called."""
        with self._cond:
            return self._unblocked

    def __len__(self) -> int:
        with self._cond:
            return len(self._messages)