#!/usr/bin/env python3
"""
Progress events emitted while mirroring a folder to Google Drive.

Listeners subscribe per event kind:

    progress      ProgressEvent(name, uploaded, size)
    fileUploaded  FileUploadedEvent(size, name, error)
    mkdir         MkdirEvent(name)
    addSize       AddSizeEvent(size)
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class UploadEvent(str, Enum):
    PROGRESS = 'progress'
    FILE_UPLOADED = 'fileUploaded'
    MKDIR = 'mkdir'
    ADD_SIZE = 'addSize'


@dataclass(frozen=True)
class ProgressEvent:
    name: str
    uploaded: int
    size: int
    type: str = 'file'


@dataclass(frozen=True)
class FileUploadedEvent:
    size: int
    name: str
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class MkdirEvent:
    name: str


@dataclass(frozen=True)
class AddSizeEvent:
    size: int


class EventEmitter:
    """
    Simple event emitter for upload events.

    Progress events arrive from the poller thread, so the listener table is
    guarded by a lock and dispatch works on a snapshot of it.
    """

    def __init__(self):
        self._listeners: Dict[UploadEvent, List[Callable]] = {}
        self._lock = threading.Lock()

    def on(self, event, callback: Callable):
        """Subscribe to an event."""
        event = UploadEvent(event)
        with self._lock:
            callbacks = self._listeners.setdefault(event, [])
            if callback not in callbacks:
                callbacks.append(callback)
        return callback

    def off(self, event, callback: Callable):
        """Unsubscribe from an event."""
        event = UploadEvent(event)
        with self._lock:
            callbacks = self._listeners.get(event, [])
            if callback in callbacks:
                callbacks.remove(callback)

    def listeners(self, event) -> List[Callable]:
        with self._lock:
            return list(self._listeners.get(UploadEvent(event), []))

    def emit(self, event, payload):
        """Deliver a payload to every listener of an event."""
        event = UploadEvent(event)
        for callback in self.listeners(event):
            try:
                callback(payload)
            except Exception as e:
                logger.error(f"Error in event listener for {event.value}: {e}")
