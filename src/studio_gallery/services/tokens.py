"""Share and access token generation."""

import secrets
from collections.abc import Callable

TOKEN_BYTES = 32

TokenFactory = Callable[[], str]


def issue_token() -> str:
    """Return a URL-safe token backed by the system CSPRNG."""
    return secrets.token_urlsafe(TOKEN_BYTES)
