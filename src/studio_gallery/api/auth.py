"""Photographer authentication with configured API tokens."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from studio_gallery.containers import AppContainer


def _get_photographer_tokens(request: Request) -> dict[str, UUID]:
    container: AppContainer = request.app.state.container
    return container.photographer_tokens


async def require_photographer(
    x_photographer_token: str | None = Header(default=None),
    photographer_tokens: dict[str, UUID] = Depends(_get_photographer_tokens),
) -> UUID:
    """Return the photographer the request's token belongs to."""
    if x_photographer_token:
        for token, photographer_id in photographer_tokens.items():
            if secrets.compare_digest(token.encode(), x_photographer_token.encode()):
                return photographer_id
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
