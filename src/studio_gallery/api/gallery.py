"""Visitor endpoints reached through a gallery share link."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Query, Request
from fastapi.responses import Response

from studio_gallery.api.schemas import (
    AccessTokenBody,
    CommentBody,
    CommentEditBody,
    CommentOut,
    CommentResponse,
    CommentsResponse,
    GalleryViewOut,
    GalleryViewResponse,
    LikeOut,
    LikeResponse,
    LikesResponse,
)
from studio_gallery.services.delivery import PREVIEW

if TYPE_CHECKING:
    from studio_gallery.containers import AppContainer

router = APIRouter(prefix="/api/gallery/{share_token}", tags=["gallery"])

IMAGE_HEADERS = {
    "Cache-Control": "private, no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}


@router.get("")
async def view_gallery(
    share_token: str,
    request: Request,
    access_token: str | None = Query(default=None, alias="accessToken"),
) -> GalleryViewResponse:
    """Return a live gallery with its photos and the viewer, if recognised."""
    container: AppContainer = request.app.state.container
    resolved = container.access_resolver.resolve(share_token, access_token)
    return GalleryViewResponse(gallery=GalleryViewOut.from_resolved(resolved))


@router.get("/photo/{photo_id}")
async def photo_image(
    share_token: str,
    photo_id: UUID,
    request: Request,
    variant: str = Query(default=PREVIEW, alias="type"),
) -> Response:
    """Serve a watermarked preview or thumbnail."""
    container: AppContainer = request.app.state.container
    rendered = container.photo_delivery.render(share_token, photo_id, variant)
    return Response(
        content=rendered.content,
        media_type=rendered.media_type,
        headers=IMAGE_HEADERS,
    )


@router.get("/photo/{photo_id}/like")
async def list_likes(
    share_token: str, photo_id: UUID, request: Request
) -> LikesResponse:
    """Return who liked a photo."""
    container: AppContainer = request.app.state.container
    likes = container.interaction_engine.list_likes(share_token, photo_id)
    return LikesResponse(
        likes=[LikeOut.from_record(like) for like in likes.likes],
        like_count=likes.like_count,
    )


@router.post("/photo/{photo_id}/like")
async def like_photo(
    share_token: str,
    photo_id: UUID,
    request: Request,
    body: AccessTokenBody | None = None,
) -> LikeResponse:
    """Like a photo as the recipient holding the access token."""
    container: AppContainer = request.app.state.container
    result = container.interaction_engine.like(
        share_token, photo_id, body.access_token if body else None
    )
    return LikeResponse(
        like_count=result.like_count,
        like=LikeOut.from_record(result.like) if result.like else None,
    )


@router.delete("/photo/{photo_id}/like")
async def unlike_photo(
    share_token: str,
    photo_id: UUID,
    request: Request,
    body: AccessTokenBody | None = None,
) -> LikeResponse:
    """Remove the recipient's like."""
    container: AppContainer = request.app.state.container
    result = container.interaction_engine.unlike(
        share_token, photo_id, body.access_token if body else None
    )
    return LikeResponse(like_count=result.like_count)


@router.get("/photo/{photo_id}/comment")
async def list_comments(
    share_token: str, photo_id: UUID, request: Request
) -> CommentsResponse:
    """Return comments on a photo, newest first."""
    container: AppContainer = request.app.state.container
    comments = container.interaction_engine.list_comments(share_token, photo_id)
    return CommentsResponse(
        comments=[CommentOut.from_record(comment) for comment in comments]
    )


@router.post("/photo/{photo_id}/comment")
async def add_comment(
    share_token: str,
    photo_id: UUID,
    request: Request,
    body: CommentBody | None = None,
) -> CommentResponse:
    """Comment on a photo as the recipient holding the access token."""
    container: AppContainer = request.app.state.container
    payload = body or CommentBody()
    comment = container.interaction_engine.comment(
        share_token, photo_id, payload.access_token, payload.comment
    )
    return CommentResponse(comment=CommentOut.from_record(comment))


@router.put("/photo/{photo_id}/comment")
async def edit_comment(
    share_token: str,
    photo_id: UUID,
    request: Request,
    body: CommentEditBody | None = None,
) -> CommentResponse:
    """Edit a comment written by the recipient holding the access token."""
    container: AppContainer = request.app.state.container
    payload = body or CommentEditBody()
    comment = container.interaction_engine.edit_comment(
        share_token,
        photo_id,
        payload.access_token,
        payload.comment_id,
        payload.comment,
    )
    return CommentResponse(comment=CommentOut.from_record(comment))
