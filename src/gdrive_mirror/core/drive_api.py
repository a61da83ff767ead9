#!/usr/bin/env python3
"""
Core functionality for Google Drive API interactions.
This module handles authentication and builds Drive requests.
"""

import os
import pickle
import logging

from google.auth.transport.requests import Request
from google_auth_oauthlib.flow import Flow, InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload

from gdrive_mirror.exceptions import ConfigurationError
from gdrive_mirror.utils.file_utils import chunk_size_for

logger = logging.getLogger(__name__)

# If modifying these scopes, delete the token file.
SCOPES = [
    'https://www.googleapis.com/auth/userinfo.profile',
    'https://www.googleapis.com/auth/drive',
]

FOLDER_MIME_TYPE = 'application/vnd.google-apps.folder'


def new_oauth_flow(settings):
    """Create a web-server OAuth flow from the configured client id and secret."""
    return Flow.from_client_config(
        settings.client_config(),
        scopes=SCOPES,
        redirect_uri=settings.redirect_url,
        # The consent URL and the code exchange run in separate processes
        autogenerate_code_verifier=False,
    )


def get_consent_page_url(flow):
    """Return the URL where the user grants offline access to Drive."""
    url, _state = flow.authorization_url(access_type='offline')
    return url


def credentials_from_code(flow, code):
    """Exchange the code from the consent redirect for credentials."""
    flow.fetch_token(code=code)
    return flow.credentials


def load_token(token_file):
    if not os.path.exists(token_file):
        return None
    with open(token_file, 'rb') as token:
        return pickle.load(token)


def save_token(creds, token_file):
    with open(token_file, 'wb') as token:
        pickle.dump(creds, token)


def _installed_app_flow(settings):
    if settings.has_client:
        return InstalledAppFlow.from_client_config(settings.client_config(), SCOPES)
    if not os.path.exists(settings.credentials_file):
        raise ConfigurationError(
            f"{settings.credentials_file} not found. Download your OAuth 2.0 "
            "credentials from the Google Cloud Console, or set "
            "GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET.")
    return InstalledAppFlow.from_client_secrets_file(settings.credentials_file, SCOPES)


def authenticate(settings):
    """Return valid credentials, refreshing or asking the user when needed."""
    # The token file stores the user's access and refresh tokens
    creds = load_token(settings.token_file)

    # If there are no (valid) credentials available, let the user log in.
    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            logger.debug("Refreshing expired credentials")
            creds.refresh(Request())
        else:
            flow = _installed_app_flow(settings)
            creds = flow.run_local_server(port=0)

        # Save the credentials for the next run
        save_token(creds, settings.token_file)

    return creds


def build_service(creds):
    """Build a Drive v3 service bound to the given credentials."""
    return build('drive', 'v3', credentials=creds, cache_discovery=False)


def create_folder_request(service, folder_name, parent_id=None):
    """Build the request that creates a folder under parent_id."""
    file_metadata = {
        'name': folder_name,
        'mimeType': FOLDER_MIME_TYPE,
    }
    if parent_id:
        file_metadata['parents'] = [parent_id]

    return service.files().create(body=file_metadata, fields='id')


def create_file_request(service, stream, file_size, mimetype, file_name, parent_id=None):
    """Build a resumable upload request streaming a file under parent_id."""
    file_metadata = {
        'name': file_name,
        'mimeType': mimetype,
    }
    if parent_id:
        file_metadata['parents'] = [parent_id]

    media = MediaIoBaseUpload(
        stream,
        mimetype=mimetype,
        chunksize=chunk_size_for(file_size),
        resumable=True
    )

    return service.files().create(
        body=file_metadata,
        media_body=media,
        fields='id'
    )
