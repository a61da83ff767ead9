#!/usr/bin/env python3
"""
Runtime settings for the Google Drive mirror.
Values come from environment variables, with command-line overrides.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from gdrive_mirror.exceptions import ConfigurationError

# Seconds between two progress polls of an in-flight upload
DEFAULT_PROGRESS_TICK = 0.5
DEFAULT_TOKEN_FILE = 'token.pickle'
DEFAULT_CREDENTIALS_FILE = 'credentials.json'


@dataclass(frozen=True)
class Settings:
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_url: Optional[str] = None
    token_file: str = DEFAULT_TOKEN_FILE
    credentials_file: str = DEFAULT_CREDENTIALS_FILE
    progress_tick: float = DEFAULT_PROGRESS_TICK

    @classmethod
    def from_env(cls, environ=None):
        """Build settings from GOOGLE_* and GDRIVE_MIRROR_* variables."""
        env = os.environ if environ is None else environ
        tick = env.get('GDRIVE_MIRROR_PROGRESS_TICK')
        try:
            progress_tick = float(tick) if tick else DEFAULT_PROGRESS_TICK
        except ValueError:
            raise ConfigurationError(
                f"GDRIVE_MIRROR_PROGRESS_TICK must be a number, got {tick!r}")
        if progress_tick <= 0:
            raise ConfigurationError("GDRIVE_MIRROR_PROGRESS_TICK must be positive")

        return cls(
            client_id=env.get('GOOGLE_CLIENT_ID') or None,
            client_secret=env.get('GOOGLE_CLIENT_SECRET') or None,
            redirect_url=env.get('GOOGLE_REDIRECT_URL') or None,
            token_file=env.get('GDRIVE_MIRROR_TOKEN_FILE') or DEFAULT_TOKEN_FILE,
            credentials_file=env.get('GDRIVE_MIRROR_CREDENTIALS_FILE') or DEFAULT_CREDENTIALS_FILE,
            progress_tick=progress_tick,
        )

    def with_overrides(self, **overrides):
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @property
    def has_client(self):
        return bool(self.client_id and self.client_secret)

    def client_config(self):
        """Client config in the shape of a downloaded client secrets file."""
        if not self.has_client:
            raise ConfigurationError(
                "GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must be set")
        config = {
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'auth_uri': 'https://accounts.google.com/o/oauth2/auth',
            'token_uri': 'https://oauth2.googleapis.com/token',
        }
        if self.redirect_url:
            config['redirect_uris'] = [self.redirect_url]
        return {'web': config}
