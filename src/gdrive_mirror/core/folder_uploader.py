#!/usr/bin/env python3
"""
Core functionality for mirroring folders to Google Drive.
This module walks local folders, creates the remote folders and feeds
every file through a single upload queue.
"""

import os
import stat
import logging
import threading
from collections import deque
from functools import partial

from gdrive_mirror.config import DEFAULT_PROGRESS_TICK
from gdrive_mirror.core.drive_api import create_file_request, create_folder_request
from gdrive_mirror.core.events import (
    AddSizeEvent,
    EventEmitter,
    FileUploadedEvent,
    MkdirEvent,
    ProgressEvent,
    UploadEvent,
)
from gdrive_mirror.core.upload_queue import UploadQueue, UploadTask
from gdrive_mirror.utils.file_utils import guess_mime_type

logger = logging.getLogger(__name__)


class GDriveUploader(EventEmitter):
    """
    Uploads files and folder trees to Google Drive.

    Emits:
        'progress'     : ProgressEvent(name, uploaded, size)
        'fileUploaded' : FileUploadedEvent(size, name, error)
        'mkdir'        : MkdirEvent(name)
        'addSize'      : AddSizeEvent(size)
    """

    def __init__(self, progress_tick=DEFAULT_PROGRESS_TICK):
        super().__init__()
        self.progress_tick = progress_tick
        self.queue = UploadQueue(self._upload_task)

    def upload_file(self, stream, total_size, mimetype, file_name, service, parent_id=None):
        """
        Upload a stream to Google Drive and return the created file resource.

        While the upload runs, a poller thread reports the bytes sent so far
        every `progress_tick` seconds. Errors are reported on the
        'fileUploaded' event and then re-raised.
        """
        self.emit(UploadEvent.PROGRESS, ProgressEvent(file_name, 0, total_size))
        logger.debug("Uploading file %s with parent_id: %s", file_name, parent_id)

        done = threading.Event()
        poller = None
        error = None
        try:
            request = create_file_request(
                service, stream, total_size, mimetype, file_name, parent_id)
            poller = threading.Thread(
                target=self._poll_progress,
                args=(request, file_name, total_size, done),
                name=f"progress-{file_name}",
                daemon=True,
            )
            poller.start()

            response = None
            while response is None:
                _status, response = request.next_chunk()
            logger.debug("Uploaded %s to Drive", file_name)
            return response
        except BaseException as e:
            error = e
            raise
        finally:
            done.set()
            if poller is not None:
                poller.join()
            self.emit(UploadEvent.FILE_UPLOADED, FileUploadedEvent(total_size, file_name, error))

    def _poll_progress(self, request, file_name, total_size, done):
        while not done.wait(self.progress_tick):
            uploaded = request.resumable_progress
            self.emit(UploadEvent.PROGRESS, ProgressEvent(file_name, uploaded, total_size))
            if uploaded >= total_size:
                return

    def _upload_task(self, task):
        try:
            stream = task.open_stream()
        except OSError as e:
            self.emit(UploadEvent.FILE_UPLOADED, FileUploadedEvent(task.size, task.name, e))
            raise
        with stream:
            return self.upload_file(
                stream, task.size, task.mime_type, task.name, task.service, task.parent_id)

    def make_dir(self, name, service, parent_id=None):
        """Create a Drive folder and return its id, or None when creation fails."""
        self.emit(UploadEvent.MKDIR, MkdirEvent(name))
        logger.debug("Creating directory %s with parent_id: %s", name, parent_id)
        try:
            folder = create_folder_request(service, name, parent_id).execute()
        except Exception as e:
            logger.error(f"Error creating folder {name}: {e}")
            return None
        return folder.get('id')

    def upload_dir(self, folder_path, service, parent_id=None):
        """
        Mirror the contents of folder_path under parent_id.

        Sub-folders are created remotely as they are found. Files are queued
        while the walk runs and uploaded once every entry has been sized, so
        all 'addSize' events come before the first upload. Entries that
        cannot be listed or stat'ed are logged and skipped along with
        everything below them.
        """
        pending = deque([(folder_path, parent_id)])
        with self.queue.paused():
            self._walk(pending, service)

    def _walk(self, pending, service):
        while pending:
            path, remote_parent = pending.popleft()
            try:
                names = sorted(os.listdir(path))
            except OSError as e:
                logger.error(f"Error listing {path}: {e}")
                continue

            for name in names:
                entry_path = os.path.join(path, name)
                try:
                    entry_stat = os.lstat(entry_path)
                except OSError as e:
                    logger.error(f"Error reading {entry_path}: {e}")
                    continue

                self.emit(UploadEvent.ADD_SIZE, AddSizeEvent(entry_stat.st_size))
                if stat.S_ISDIR(entry_stat.st_mode):
                    folder_id = self.make_dir(name, service, remote_parent)
                    if folder_id is not None:
                        pending.append((entry_path, folder_id))
                else:
                    self.queue.enqueue(UploadTask(
                        open_stream=partial(open, entry_path, 'rb'),
                        size=entry_stat.st_size,
                        mime_type=guess_mime_type(name),
                        name=name,
                        service=service,
                        parent_id=remote_parent,
                    ))

    def mirror_folder(self, folder_path, service, parent_id=None):
        """
        Create a Drive folder named after folder_path and mirror into it.

        Returns the new folder id, or None when it could not be created.
        """
        folder_name = os.path.basename(os.path.abspath(folder_path))
        folder_id = self.make_dir(folder_name, service, parent_id)
        if folder_id is not None:
            self.upload_dir(folder_path, service, folder_id)
        return folder_id
