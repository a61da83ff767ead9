#!/usr/bin/env python3
"""
Google Drive Mirror - upload files and folder trees to Google Drive.
"""

__version__ = '0.3.0'

from gdrive_mirror.config import Settings
from gdrive_mirror.core.drive_api import authenticate, build_service, get_consent_page_url, new_oauth_flow
from gdrive_mirror.core.events import UploadEvent
from gdrive_mirror.core.folder_uploader import GDriveUploader
from gdrive_mirror.core.upload_queue import QueueState, UploadQueue, UploadTask


def main():
    """Entry point for the command-line interface."""
    import sys
    from gdrive_mirror.cli.main import main as cli_main
    sys.exit(cli_main())
