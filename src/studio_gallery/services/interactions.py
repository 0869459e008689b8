"""Likes and comments left by gallery recipients."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from studio_gallery.domain.errors import (
    AccessDeniedError,
    InvalidInputError,
    NotFoundError,
)
from studio_gallery.domain.galleries import (
    GalleryPhotoRecord,
    PhotoCommentRecord,
    PhotoLikeRecord,
    VisitorIdentity,
)
from studio_gallery.services.access import GalleryAccessResolver

logger = logging.getLogger(__name__)


class InteractionRepository(Protocol):
    """Persistence interface for photo likes and comments."""

    def add_like(
        self, gallery_photo_id: UUID, identity: VisitorIdentity
    ) -> PhotoLikeRecord:
        """Insert a like, raising ConflictError if the recipient already liked."""

    def remove_like(self, gallery_photo_id: UUID, gallery_access_id: UUID) -> bool:
        """Delete a like and return whether a row was removed."""

    def count_likes(self, gallery_photo_id: UUID) -> int:
        """Return the current number of likes on a gallery photo."""

    def list_likes(self, gallery_photo_id: UUID) -> list[PhotoLikeRecord]:
        """Return likes on a gallery photo, newest first."""

    def add_comment(
        self,
        gallery_photo_id: UUID,
        identity: VisitorIdentity,
        comment: str,
        created_at: datetime,
    ) -> PhotoCommentRecord:
        """Insert a comment attributed to the recipient."""

    def update_comment(  # noqa: PLR0913
        self,
        comment_id: UUID,
        gallery_photo_id: UUID,
        identity: VisitorIdentity,
        comment: str,
        updated_at: datetime,
    ) -> PhotoCommentRecord | None:
        """Update a comment only if the recipient authored it."""

    def get_comment(
        self, comment_id: UUID, gallery_photo_id: UUID
    ) -> PhotoCommentRecord | None:
        """Return a comment on a gallery photo, if present."""

    def list_comments(self, gallery_photo_id: UUID) -> list[PhotoCommentRecord]:
        """Return comments on a gallery photo, newest first."""


@dataclass(frozen=True)
class LikeResult:
    """Outcome of a like or unlike with the recomputed total."""

    like_count: int
    like: PhotoLikeRecord | None = None


@dataclass(frozen=True)
class PhotoLikes:
    """Public list of likes on a photo."""

    likes: list[PhotoLikeRecord]

    @property
    def like_count(self) -> int:
        return len(self.likes)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InteractionEngine:
    """Apply likes and comments for recipients of a live gallery."""

    resolver: GalleryAccessResolver
    repository: InteractionRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def like(
        self, share_token: str, photo_id: UUID, access_token: str | None
    ) -> LikeResult:
        """Like a photo once per recipient and return the new total."""
        gallery_photo, identity = self._authorize(share_token, photo_id, access_token)
        like = self.repository.add_like(gallery_photo.id, identity)
        logger.info(
            "Photo liked",
            extra={
                "gallery_photo_id": str(gallery_photo.id),
                "gallery_access_id": str(identity.id),
            },
        )
        return LikeResult(
            like_count=self.repository.count_likes(gallery_photo.id), like=like
        )

    def unlike(
        self, share_token: str, photo_id: UUID, access_token: str | None
    ) -> LikeResult:
        """Remove the recipient's like and return the new total."""
        gallery_photo, identity = self._authorize(share_token, photo_id, access_token)
        if not self.repository.remove_like(gallery_photo.id, identity.id):
            raise NotFoundError("Photo is not liked by this user")
        return LikeResult(like_count=self.repository.count_likes(gallery_photo.id))

    def comment(
        self,
        share_token: str,
        photo_id: UUID,
        access_token: str | None,
        text: str | None,
    ) -> PhotoCommentRecord:
        """Add a comment attributed to the recipient."""
        cleaned = _clean_comment(text)
        gallery_photo, identity = self._authorize(share_token, photo_id, access_token)
        created = self.repository.add_comment(
            gallery_photo.id, identity, cleaned, created_at=self.clock()
        )
        logger.info(
            "Comment added",
            extra={
                "comment_id": str(created.id),
                "gallery_access_id": str(identity.id),
            },
        )
        return created

    def edit_comment(  # noqa: PLR0913
        self,
        share_token: str,
        photo_id: UUID,
        access_token: str | None,
        comment_id: UUID | None,
        text: str | None,
    ) -> PhotoCommentRecord:
        """Rewrite a comment; only its author may do so."""
        cleaned = _clean_comment(text)
        if comment_id is None:
            raise InvalidInputError("Comment ID is required")
        gallery_photo, identity = self._authorize(share_token, photo_id, access_token)
        updated = self.repository.update_comment(
            comment_id,
            gallery_photo.id,
            identity,
            cleaned,
            updated_at=self.clock(),
        )
        if updated is not None:
            return updated
        if self.repository.get_comment(comment_id, gallery_photo.id) is None:
            raise NotFoundError("Comment not found")
        logger.info(
            "Rejected edit of another recipient's comment",
            extra={
                "comment_id": str(comment_id),
                "gallery_access_id": str(identity.id),
            },
        )
        raise AccessDeniedError("Only the author can edit this comment")

    def list_likes(self, share_token: str, photo_id: UUID) -> PhotoLikes:
        """Return likes on a photo; no access token needed."""
        gallery = self.resolver.resolve_gallery(share_token)
        gallery_photo = self.resolver.gallery_photo(gallery, photo_id)
        return PhotoLikes(likes=self.repository.list_likes(gallery_photo.id))

    def list_comments(
        self, share_token: str, photo_id: UUID
    ) -> list[PhotoCommentRecord]:
        """Return comments on a photo; no access token needed."""
        gallery = self.resolver.resolve_gallery(share_token)
        gallery_photo = self.resolver.gallery_photo(gallery, photo_id)
        return self.repository.list_comments(gallery_photo.id)

    def _authorize(
        self, share_token: str, photo_id: UUID, access_token: str | None
    ) -> tuple[GalleryPhotoRecord, VisitorIdentity]:
        token = (access_token or "").strip()
        if not token:
            raise InvalidInputError("Access token is required")
        gallery = self.resolver.resolve_gallery(share_token)
        identity = self.resolver.resolve_identity(gallery, token)
        if identity is None:
            logger.info(
                "Rejected interaction with unknown access token",
                extra={"gallery_id": str(gallery.id)},
            )
            raise AccessDeniedError("Invalid access token or gallery not found")
        return self.resolver.gallery_photo(gallery, photo_id), identity


def _clean_comment(text: str | None) -> str:
    """Return the stripped comment text, rejecting blank input."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise InvalidInputError("Comment is required")
    return cleaned
