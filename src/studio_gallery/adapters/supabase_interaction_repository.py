"""Supabase-backed likes and comments."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from studio_gallery.adapters.supabase_rows import (
    COMMENT_COLUMNS,
    LIKE_COLUMNS,
    is_unique_violation,
    parse_comment,
    parse_like,
)
from studio_gallery.domain.errors import ConflictError
from studio_gallery.domain.galleries import (
    PhotoCommentRecord,
    PhotoLikeRecord,
    VisitorIdentity,
)
from studio_gallery.services.interactions import InteractionRepository


@dataclass
class SupabaseInteractionRepository(InteractionRepository):
    """Supabase implementation for photo likes and comments."""

    client: Client

    def add_like(
        self, gallery_photo_id: UUID, identity: VisitorIdentity
    ) -> PhotoLikeRecord:
        """Insert a like; the unique constraint rejects duplicates."""
        try:
            response = (
                self.client.table("photo_likes")
                .insert(
                    {
                        "gallery_photo_id": str(gallery_photo_id),
                        "gallery_access_id": str(identity.id),
                    }
                )
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise ConflictError("Photo already liked by this user") from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create like")
        row = response.data[0]
        return parse_like(
            {**row, "gallery_access": {"name": identity.name, "email": identity.email}}
        )

    def remove_like(self, gallery_photo_id: UUID, gallery_access_id: UUID) -> bool:
        """Delete a like and report whether one existed."""
        response = (
            self.client.table("photo_likes")
            .delete()
            .eq("gallery_photo_id", str(gallery_photo_id))
            .eq("gallery_access_id", str(gallery_access_id))
            .execute()
        )
        return bool(response.data)

    def count_likes(self, gallery_photo_id: UUID) -> int:
        """Return the current like total for a gallery photo."""
        response = (
            self.client.table("photo_likes")
            .select("id", count="exact")
            .eq("gallery_photo_id", str(gallery_photo_id))
            .execute()
        )
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])

    def list_likes(self, gallery_photo_id: UUID) -> list[PhotoLikeRecord]:
        """Return likes on a gallery photo, newest first."""
        response = (
            self.client.table("photo_likes")
            .select(LIKE_COLUMNS)
            .eq("gallery_photo_id", str(gallery_photo_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_like(row) for row in response.data or []]

    def add_comment(
        self,
        gallery_photo_id: UUID,
        identity: VisitorIdentity,
        comment: str,
        created_at: datetime,
    ) -> PhotoCommentRecord:
        """Insert a comment with matching created and updated timestamps."""
        timestamp = created_at.isoformat()
        response = (
            self.client.table("photo_comments")
            .insert(
                {
                    "gallery_photo_id": str(gallery_photo_id),
                    "gallery_access_id": str(identity.id),
                    "comment": comment,
                    "created_at": timestamp,
                    "updated_at": timestamp,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create comment")
        return _with_identity(response.data[0], identity)

    def update_comment(  # noqa: PLR0913
        self,
        comment_id: UUID,
        gallery_photo_id: UUID,
        identity: VisitorIdentity,
        comment: str,
        updated_at: datetime,
    ) -> PhotoCommentRecord | None:
        """Update a comment whose author matches in the same statement."""
        response = (
            self.client.table("photo_comments")
            .update({"comment": comment, "updated_at": updated_at.isoformat()})
            .eq("id", str(comment_id))
            .eq("gallery_photo_id", str(gallery_photo_id))
            .eq("gallery_access_id", str(identity.id))
            .execute()
        )
        if not response.data:
            return None
        return _with_identity(response.data[0], identity)

    def get_comment(
        self, comment_id: UUID, gallery_photo_id: UUID
    ) -> PhotoCommentRecord | None:
        """Return a comment on a gallery photo, if present."""
        response = (
            self.client.table("photo_comments")
            .select(COMMENT_COLUMNS)
            .eq("id", str(comment_id))
            .eq("gallery_photo_id", str(gallery_photo_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_comment(response.data[0])

    def list_comments(self, gallery_photo_id: UUID) -> list[PhotoCommentRecord]:
        """Return comments on a gallery photo, newest first."""
        response = (
            self.client.table("photo_comments")
            .select(COMMENT_COLUMNS)
            .eq("gallery_photo_id", str(gallery_photo_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_comment(row) for row in response.data or []]


def _with_identity(
    row: dict[str, object], identity: VisitorIdentity
) -> PhotoCommentRecord:
    return parse_comment(
        {**row, "gallery_access": {"name": identity.name, "email": identity.email}}
    )
