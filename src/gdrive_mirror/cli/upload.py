#!/usr/bin/env python3
"""
Command-line interface for mirroring a local folder to Google Drive.
"""

import os
import time
import threading

from tabulate import tabulate
from tqdm import tqdm

from gdrive_mirror.core.drive_api import authenticate, build_service
from gdrive_mirror.core.events import UploadEvent
from gdrive_mirror.core.folder_uploader import GDriveUploader
from gdrive_mirror.utils.file_utils import get_folder_size
from gdrive_mirror.utils.formatting import format_size


class UploadProgress:
    """Feeds uploader events into a tqdm byte counter and keeps a summary."""

    def __init__(self, uploader, progress_bar):
        self._bar = progress_bar
        self._lock = threading.Lock()
        self._sent = {}
        self._last_added = None
        self.folders = []
        self.results = []
        uploader.on(UploadEvent.ADD_SIZE, self.on_add_size)
        uploader.on(UploadEvent.MKDIR, self.on_mkdir)
        uploader.on(UploadEvent.PROGRESS, self.on_progress)
        uploader.on(UploadEvent.FILE_UPLOADED, self.on_file_uploaded)

    def on_add_size(self, event):
        with self._lock:
            self._last_added = event.size
            self._bar.total += event.size
            self._bar.refresh()

    def on_mkdir(self, event):
        # A folder's addSize arrives just before its mkdir and is never uploaded
        with self._lock:
            if self._last_added is not None:
                self._bar.total -= self._last_added
                self._last_added = None
                self._bar.refresh()
        self.folders.append(event.name)

    def on_progress(self, event):
        with self._lock:
            self._advance(event.name, event.uploaded)
            self._bar.set_postfix_str(event.name)

    def on_file_uploaded(self, event):
        with self._lock:
            if event.error is None:
                self._advance(event.name, event.size)
            self._sent.pop(event.name, None)
        self.results.append(event)

    def _advance(self, name, uploaded):
        delta = uploaded - self._sent.get(name, 0)
        if delta > 0:
            self._sent[name] = uploaded
            self._bar.update(delta)

    def summary_rows(self):
        rows = []
        for result in self.results:
            status = 'uploaded' if result.error is None else f"failed: {result.error}"
            rows.append([result.name, format_size(result.size), status])
        return rows


def upload(folder_path, settings, parent_id=None, contents_only=False):
    """Mirror folder_path to Drive. Returns 0 on success, 1 otherwise."""
    if not os.path.isdir(folder_path):
        print(f"Error: '{folder_path}' is not a directory.")
        return 1

    folder_name = os.path.basename(os.path.abspath(folder_path))
    print(f"Uploading folder: {folder_name} ({format_size(get_folder_size(folder_path))})")

    print("\nAuthenticating with Google Drive...")
    service = build_service(authenticate(settings))
    print("Authentication successful!")

    uploader = GDriveUploader(progress_tick=settings.progress_tick)
    start_time = time.time()
    with tqdm(total=0, desc=f"Uploading {folder_name}", unit='B',
              unit_scale=True, unit_divisor=1024) as pbar:
        progress = UploadProgress(uploader, pbar)
        if contents_only:
            folder_id = parent_id
            uploader.upload_dir(folder_path, service, parent_id)
        else:
            folder_id = uploader.mirror_folder(folder_path, service, parent_id)
            if folder_id is None:
                print(f"Error: could not create folder {folder_name} in Google Drive.")
                return 1

    if progress.results:
        print(tabulate(progress.summary_rows(), headers=['File', 'Size', 'Status'], tablefmt='psql'))
    print(f"Created {len(progress.folders)} folder(s), processed {len(progress.results)} file(s) "
          f"in {time.time() - start_time:.2f} seconds")

    if uploader.queue.stalled:
        blocked = uploader.queue.stalled_on
        print(f"\nUpload stopped at {blocked.name}; "
              f"{len(uploader.queue)} file(s) were not uploaded.")
        return 1

    if folder_id:
        print(f"You can access it at: https://drive.google.com/drive/folders/{folder_id}")
    return 0
