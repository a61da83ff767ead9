#!/usr/bin/env python3
"""
Command-line interface for the web OAuth consent flow.
"""

from gdrive_mirror.core.drive_api import (
    credentials_from_code,
    get_consent_page_url,
    new_oauth_flow,
    save_token,
)


def consent_url(settings):
    """Print the consent page URL for the configured OAuth client."""
    print(get_consent_page_url(new_oauth_flow(settings)))
    return 0


def authorize(code, settings):
    """Exchange an authorization code and store the resulting token."""
    creds = credentials_from_code(new_oauth_flow(settings), code)
    save_token(creds, settings.token_file)
    print(f"Credentials saved to {settings.token_file}")
    return 0
