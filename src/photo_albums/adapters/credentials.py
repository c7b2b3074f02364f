"""Session credential storage and bearer token attachment."""

from collections.abc import Generator
from dataclasses import dataclass
from typing import Protocol

import httpx


class CredentialStore(Protocol):
    """Source of the session's bearer credential."""

    def get_token(self) -> str | None:
        """Return the current bearer token, if the session has one."""


@dataclass
class SessionCredentialStore(CredentialStore):
    """Holds the bearer token for the lifetime of the session."""

    token: str | None = None

    def get_token(self) -> str | None:
        """Return the stored token."""
        return self.token

    def set_token(self, token: str) -> None:
        """Store a new token for subsequent requests."""
        self.token = token

    def clear(self) -> None:
        """Forget the stored token."""
        self.token = None


class BearerTokenAuth(httpx.Auth):
    """Attach the session bearer token to every outgoing request."""

    def __init__(self, credentials: CredentialStore) -> None:
        self.credentials = credentials

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        token = self.credentials.get_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request
