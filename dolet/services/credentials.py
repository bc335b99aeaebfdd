"""
Bearer token provider for Vertex AI.

Loads a service-account key file (or Application Default Credentials when no
path is configured) scoped to cloud-platform, and exchanges it for a
short-lived OAuth2 access token.
"""

import logging
import threading
import time
from typing import Optional

import google.auth
from google.auth import exceptions as google_auth_exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from dolet.config import settings
from dolet.services.exceptions import AuthError


logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

_LOAD_ERRORS = (OSError, ValueError, google_auth_exceptions.GoogleAuthError)


class CredentialProvider:
    """
    Produces bearer tokens for the upstream API.

    Construction validates the identity source once and raises AuthError if it
    is missing or invalid. By default every get_token() call performs a fresh
    refresh round trip; a positive cache_seconds reuses a token for that long.
    """

    def __init__(self, credentials_path: Optional[str] = None, cache_seconds: int = 0):
        self.credentials_path = credentials_path or None
        self.cache_seconds = cache_seconds

        self._lock = threading.Lock()
        self._cached = None
        self._cached_at = 0.0

        # Fail at construction rather than on the first request
        self._load_credentials()

    @classmethod
    def from_settings(cls) -> "CredentialProvider":
        return cls(
            credentials_path=settings.google_application_credentials,
            cache_seconds=settings.vertex_token_cache_seconds,
        )

    def _load_credentials(self):
        try:
            if self.credentials_path:
                return service_account.Credentials.from_service_account_file(
                    self.credentials_path, scopes=[CLOUD_PLATFORM_SCOPE]
                )
            credentials, _project = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
            return credentials
        except _LOAD_ERRORS as e:
            logger.error("Failed to load Google credentials: %s", e)
            raise AuthError(f"Authentication failed: {e}") from e

    def _refresh(self, credentials) -> str:
        try:
            credentials.refresh(Request())
        except _LOAD_ERRORS as e:
            logger.error("Failed to get access token: %s", e)
            raise AuthError(f"Authentication failed: {e}") from e

        if not credentials.token:
            raise AuthError("Authentication failed: identity provider returned no token")
        return credentials.token

    def get_token(self) -> str:
        """
        Return a bearer token valid for the caller's upcoming requests.

        Raises:
            AuthError: Identity source unusable or token refresh failed
        """
        if self.cache_seconds <= 0:
            return self._refresh(self._load_credentials())

        with self._lock:
            age = time.monotonic() - self._cached_at
            if self._cached is not None and self._cached.valid and age < self.cache_seconds:
                return self._cached.token

            credentials = self._load_credentials()
            token = self._refresh(credentials)
            self._cached = credentials
            self._cached_at = time.monotonic()
            return token

    def invalidate(self):
        """Drop any cached token so the next call fetches a new one."""
        with self._lock:
            self._cached = None
            self._cached_at = 0.0
