#!/usr/bin/env python3
"""
Utility functions for file operations.
"""

import os
import mimetypes

DEFAULT_MIME_TYPE = 'application/octet-stream'


def guess_mime_type(file_name):
    """Guess a MIME type from a file name, falling back to octet-stream."""
    mimetype = mimetypes.guess_type(file_name)[0]
    if mimetype is None:
        mimetype = DEFAULT_MIME_TYPE
    return mimetype


def get_folder_size(folder_path):
    """Calculate the total size of a folder in bytes."""
    total_size = 0
    for dirpath, dirnames, filenames in os.walk(folder_path):
        for filename in filenames:
            file_path = os.path.join(dirpath, filename)
            if os.path.exists(file_path):  # Check if file exists (in case of symlinks)
                total_size += os.path.getsize(file_path)
    return total_size


def chunk_size_for(file_size):
    """
    Pick a resumable upload chunk size for a file.

    Every value is a multiple of 256KB, as the Drive API requires.
    """
    if file_size > 100 * 1024 * 1024:  # > 100MB
        return 10 * 1024 * 1024
    elif file_size > 10 * 1024 * 1024:  # > 10MB
        return 5 * 1024 * 1024
    elif file_size < 1 * 1024 * 1024:  # < 1MB
        return 256 * 1024
    return 1 * 1024 * 1024
