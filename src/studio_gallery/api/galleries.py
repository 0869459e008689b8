"""Photographer endpoints for composing and managing galleries."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from studio_gallery.api.auth import require_photographer
from studio_gallery.api.schemas import (
    GalleriesResponse,
    GalleryActivityOut,
    GalleryActivityResponse,
    GalleryCreateBody,
    GalleryOut,
    GalleryResponse,
    GallerySummaryOut,
    GalleryUpdateBody,
)

if TYPE_CHECKING:
    from studio_gallery.containers import AppContainer

router = APIRouter(prefix="/api/galleries", tags=["galleries"])


@router.get("")
async def list_galleries(
    request: Request, photographer_id: UUID = Depends(require_photographer)
) -> GalleriesResponse:
    """Return the photographer's galleries, newest first."""
    container: AppContainer = request.app.state.container
    summaries = container.gallery_composer.list_galleries(photographer_id)
    return GalleriesResponse(
        galleries=[GallerySummaryOut.from_summary(summary) for summary in summaries]
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_gallery(
    body: GalleryCreateBody,
    request: Request,
    photographer_id: UUID = Depends(require_photographer),
) -> GalleryResponse:
    """Compose a gallery from session photos and provision recipients."""
    container: AppContainer = request.app.state.container
    detail = container.gallery_composer.create_gallery(
        photographer_id=photographer_id,
        session_id=body.session_id,
        title=body.title,
        photo_ids=body.photo_ids,
        expiry_days=body.expiry_days,
        access_list=(
            [entry.to_request() for entry in body.access_list]
            if body.access_list is not None
            else None
        ),
        description=body.description,
    )
    return GalleryResponse(gallery=GalleryOut.from_detail(detail))


@router.get("/{gallery_id}")
async def get_gallery(
    gallery_id: UUID,
    request: Request,
    photographer_id: UUID = Depends(require_photographer),
) -> GalleryActivityResponse:
    """Return one gallery with per-photo likes and comments."""
    container: AppContainer = request.app.state.container
    activity = container.gallery_composer.get_gallery(photographer_id, gallery_id)
    return GalleryActivityResponse(gallery=GalleryActivityOut.from_activity(activity))


@router.patch("/{gallery_id}")
async def update_gallery(
    gallery_id: UUID,
    body: GalleryUpdateBody,
    request: Request,
    photographer_id: UUID = Depends(require_photographer),
) -> GalleryResponse:
    """Stop or resume sharing a gallery."""
    container: AppContainer = request.app.state.container
    detail = container.gallery_composer.set_gallery_active(
        photographer_id, gallery_id, body.is_active
    )
    return GalleryResponse(gallery=GalleryOut.from_detail(detail))


@router.delete("/{gallery_id}")
async def delete_gallery(
    gallery_id: UUID,
    request: Request,
    photographer_id: UUID = Depends(require_photographer),
) -> dict[str, str]:
    """Delete a gallery with its recipients, likes and comments."""
    container: AppContainer = request.app.state.container
    container.gallery_composer.delete_gallery(photographer_id, gallery_id)
    return {"message": "Gallery deleted successfully"}
