#!/usr/bin/env python3
"""
FIFO queue that sends uploads to Google Drive one at a time.

The queue is a small state machine:

    IDLE      nothing in flight; enqueue starts a drain unless paused
    DRAINING  the front task is being uploaded
    STALLED   the front task failed and stays at the front until resume()

A failed upload is never skipped or retried on its own: every later task
waits behind it.
"""

import logging
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, BinaryIO, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadTask:
    open_stream: Callable[[], BinaryIO]
    size: int
    mime_type: str
    name: str
    service: Any
    parent_id: Optional[str] = None


class QueueState(Enum):
    IDLE = 'idle'
    DRAINING = 'draining'
    STALLED = 'stalled'


class UploadQueue:
    def __init__(self, upload: Callable[[UploadTask], Any]):
        """
        Args:
            upload: Runs one task to completion; raising marks it failed.
        """
        self._upload = upload
        self._tasks = deque()
        self._holds = 0
        self.state = QueueState.IDLE

    def __len__(self):
        return len(self._tasks)

    @property
    def processing(self):
        return self.state is QueueState.DRAINING

    @property
    def stalled(self):
        return self.state is QueueState.STALLED

    @property
    def stalled_on(self) -> Optional[UploadTask]:
        """The task blocking the queue, or None when it is not stalled."""
        if self.state is QueueState.STALLED:
            return self._tasks[0]
        return None

    def pending(self):
        return list(self._tasks)

    @contextmanager
    def paused(self):
        """
        Collect tasks without uploading them, then drain once on exit.

        Nested holds only drain when the outermost one is released.
        """
        self._holds += 1
        try:
            yield self
        finally:
            self._holds -= 1
        if not self._holds:
            self.drain()

    def enqueue(self, task: UploadTask):
        self._tasks.append(task)
        if self.state is QueueState.IDLE and not self._holds:
            self.drain()

    def drain(self):
        """Upload queued tasks in order until empty or a task fails."""
        if self.state is not QueueState.IDLE:
            return

        self.state = QueueState.DRAINING
        while self._tasks:
            task = self._tasks[0]
            try:
                self._upload(task)
            except Exception as e:
                logger.error(f"Error processing upload queue at {task.name}: {e}")
                self.state = QueueState.STALLED
                return
            self._tasks.popleft()
        self.state = QueueState.IDLE

    def resume(self):
        """Drive a stalled queue again, starting with the task that failed."""
        if self.state is not QueueState.STALLED:
            return
        logger.info(f"Resuming upload queue at {self._tasks[0].name}")
        self.state = QueueState.IDLE
        self.drain()
