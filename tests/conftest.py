"""Shared fakes for the Drive service."""
import itertools

import pytest

from gdrive_mirror.core.events import UploadEvent


class FakeRequest:
    def __init__(self, drive, body, media_body=None):
        self.drive = drive
        self.body = body
        self.media_body = media_body
        self.resumable_progress = 0

    def execute(self):
        return self.drive.finish(self)

    def next_chunk(self):
        result = self.drive.finish(self)
        self.resumable_progress = self.media_body.size()
        return None, result


class FakeFiles:
    def __init__(self, drive):
        self._drive = drive

    def create(self, body, fields=None, media_body=None):
        return FakeRequest(self._drive, body, media_body)


class FakeDriveService:
    """Records created folders and files; names listed in fail_* raise OSError."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.fail_names = set()
        self.fail_folders = set()
        self.folders = []
        self.uploads = []
        self.in_flight = 0
        self.max_in_flight = 0

    def files(self):
        return FakeFiles(self)

    def finish(self, request):
        body = request.body
        parent = body.get('parents', [None])[0]
        if request.media_body is None:
            if body['name'] in self.fail_folders:
                raise OSError(f"cannot create {body['name']}")
            folder_id = f"folder-{next(self._ids)}"
            self.folders.append((body['name'], parent, folder_id))
            return {'id': folder_id}

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if body['name'] in self.fail_names:
                raise OSError(f"upload of {body['name']} reset")
            media = request.media_body
            data = media.getbytes(0, media.size())
            file_id = f"file-{next(self._ids)}"
            self.uploads.append((body['name'], parent, data))
            return {'id': file_id}
        finally:
            self.in_flight -= 1

    def folder_id(self, name):
        return next(folder_id for folder, _, folder_id in self.folders if folder == name)

    def parent_of(self, file_name):
        return next(parent for name, parent, _ in self.uploads if name == file_name)


@pytest.fixture
def drive():
    return FakeDriveService()


@pytest.fixture
def record_events():
    """Subscribe to every event kind and collect (kind, payload) pairs."""
    def attach(emitter):
        events = []
        for kind in UploadEvent:
            emitter.on(kind, lambda payload, kind=kind: events.append((kind.value, payload)))
        return events
    return attach
