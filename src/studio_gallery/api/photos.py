"""Photographer access to original photo files."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from studio_gallery.api.auth import require_photographer
from studio_gallery.api.schemas import SignedUrlResponse

if TYPE_CHECKING:
    from studio_gallery.containers import AppContainer

router = APIRouter(prefix="/api/photos", tags=["photos"])


@router.get("/{photo_id}/url")
async def photo_url(
    photo_id: UUID,
    request: Request,
    photographer_id: UUID = Depends(require_photographer),
) -> SignedUrlResponse:
    """Return a time-limited download link for an original."""
    container: AppContainer = request.app.state.container
    url = container.photo_delivery.signed_url(photographer_id, photo_id)
    return SignedUrlResponse(
        url=url, expires_in=container.photo_delivery.signed_url_ttl_seconds
    )
