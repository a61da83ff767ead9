#!/usr/bin/env python3
"""
Example script demonstrating how to use the Google Drive mirror programmatically.
"""

import os
import sys

from gdrive_mirror import GDriveUploader, Settings, UploadEvent, authenticate, build_service


def main():
    # Path to the folder you want to upload
    folder_path = os.path.expanduser("~/Documents/FolderToUpload")

    # Optional: ID of a folder in Google Drive where you want to upload
    # Leave as None to upload to the root of your Google Drive
    parent_folder_id = None

    if not os.path.isdir(folder_path):
        print(f"Error: Folder '{folder_path}' does not exist.")
        print("Please modify this script to point to a valid folder.")
        sys.exit(1)

    settings = Settings.from_env()
    service = build_service(authenticate(settings))

    uploader = GDriveUploader(progress_tick=settings.progress_tick)
    uploader.on(UploadEvent.MKDIR, lambda event: print(f"Created folder {event.name}"))
    uploader.on(UploadEvent.PROGRESS,
                lambda event: print(f"  {event.name}: {event.uploaded}/{event.size} bytes"))
    uploader.on(UploadEvent.FILE_UPLOADED,
                lambda event: print(f"Uploaded {event.name}" if event.error is None
                                    else f"Failed {event.name}: {event.error}"))

    folder_id = uploader.mirror_folder(folder_path, service, parent_folder_id)
    if folder_id is None:
        print("Could not create the folder in Google Drive.")
        sys.exit(1)

    if uploader.queue.stalled:
        print(f"\nUpload stopped at {uploader.queue.stalled_on.name}.")
        sys.exit(1)

    print(f"\nUpload complete!")
    print(f"You can access it at: https://drive.google.com/drive/folders/{folder_id}")


if __name__ == "__main__":
    main()
