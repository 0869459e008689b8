"""Supabase gallery data access."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from studio_gallery.adapters.supabase_rows import (
    COMMENT_COLUMNS,
    LIKE_COLUMNS,
    parse_comment,
    parse_like,
    parse_timestamp,
)
from studio_gallery.domain.galleries import (
    GalleryAccessRecord,
    GalleryDraft,
    GalleryPhotoRecord,
    GalleryRecord,
    PhotoInteractions,
)
from studio_gallery.services.access import GalleryRepository

GALLERY_COLUMNS = (
    "id, title, description, share_token, expires_at, is_active, created_at, "
    "session_id, client_id"
)


@dataclass
class SupabaseGalleryRepository(GalleryRepository):
    """Supabase implementation for galleries, photos and recipients."""

    client: Client

    def get_by_share_token(self, share_token: str) -> GalleryRecord | None:
        """Return the gallery issued with the share token, if any."""
        response = (
            self.client.table("galleries")
            .select(GALLERY_COLUMNS)
            .eq("share_token", share_token)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_gallery(response.data[0])

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        """Return a gallery by id, if present."""
        response = (
            self.client.table("galleries")
            .select(GALLERY_COLUMNS)
            .eq("id", str(gallery_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_gallery(response.data[0])

    def list_galleries(self, session_ids: list[UUID]) -> list[GalleryRecord]:
        """Return galleries created from the sessions, newest first."""
        if not session_ids:
            return []
        response = (
            self.client.table("galleries")
            .select(GALLERY_COLUMNS)
            .in_("session_id", [str(session_id) for session_id in session_ids])
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_gallery(row) for row in response.data or []]

    def get_access(
        self, gallery_id: UUID, access_token: str
    ) -> GalleryAccessRecord | None:
        """Return the recipient holding the token within this gallery only."""
        response = (
            self.client.table("gallery_access")
            .select("id, gallery_id, name, email, access_token")
            .eq("gallery_id", str(gallery_id))
            .eq("access_token", access_token)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_access(response.data[0])

    def list_access(self, gallery_id: UUID) -> list[GalleryAccessRecord]:
        """Return every recipient of a gallery."""
        response = (
            self.client.table("gallery_access")
            .select("id, gallery_id, name, email, access_token")
            .eq("gallery_id", str(gallery_id))
            .order("created_at")
            .execute()
        )
        return [_parse_access(row) for row in response.data or []]

    def get_gallery_photo(
        self, gallery_id: UUID, photo_id: UUID
    ) -> GalleryPhotoRecord | None:
        """Return the join row for a photo shared in a gallery."""
        response = (
            self.client.table("gallery_photos")
            .select("id, gallery_id, photo_id")
            .eq("gallery_id", str(gallery_id))
            .eq("photo_id", str(photo_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_gallery_photo(response.data[0])

    def list_gallery_photos(self, gallery_id: UUID) -> list[GalleryPhotoRecord]:
        """Return all photos shared in a gallery in their original order."""
        response = (
            self.client.table("gallery_photos")
            .select("id, gallery_id, photo_id")
            .eq("gallery_id", str(gallery_id))
            .order("position")
            .execute()
        )
        return [_parse_gallery_photo(row) for row in response.data or []]

    def list_interactions(
        self, gallery_photo_ids: list[UUID]
    ) -> dict[UUID, PhotoInteractions]:
        """Return likes and comments per gallery photo, newest first."""
        if not gallery_photo_ids:
            return {}
        ids = [str(gallery_photo_id) for gallery_photo_id in gallery_photo_ids]
        like_rows = (
            self.client.table("photo_likes")
            .select(LIKE_COLUMNS)
            .in_("gallery_photo_id", ids)
            .order("created_at", desc=True)
            .execute()
        ).data or []
        comment_rows = (
            self.client.table("photo_comments")
            .select(COMMENT_COLUMNS)
            .in_("gallery_photo_id", ids)
            .order("created_at", desc=True)
            .execute()
        ).data or []

        interactions = {
            gallery_photo_id: PhotoInteractions()
            for gallery_photo_id in gallery_photo_ids
        }
        for row in like_rows:
            like = parse_like(row)
            interactions[like.gallery_photo_id].likes.append(like)
        for row in comment_rows:
            comment = parse_comment(row)
            interactions[comment.gallery_photo_id].comments.append(comment)
        return interactions

    def create_gallery(self, draft: GalleryDraft) -> GalleryRecord:
        """Write the gallery with its photos and access rows in one transaction."""
        response = self.client.rpc(
            "create_gallery",
            {
                "p_title": draft.title,
                "p_description": draft.description,
                "p_share_token": draft.share_token,
                "p_expires_at": (
                    draft.expires_at.isoformat() if draft.expires_at else None
                ),
                "p_session_id": str(draft.session_id),
                "p_client_id": str(draft.client_id),
                "p_photo_ids": [str(photo_id) for photo_id in draft.photo_ids],
                "p_access_list": [
                    {
                        "name": grant.name,
                        "email": grant.email,
                        "access_token": grant.access_token,
                    }
                    for grant in draft.access_list
                ],
            },
        ).execute()
        if not response.data:
            raise RuntimeError("Failed to create gallery")
        gallery = self.get_gallery(UUID(str(response.data)))
        if gallery is None:
            raise RuntimeError("Failed to load created gallery")
        return gallery

    def set_active(self, gallery_id: UUID, is_active: bool) -> GalleryRecord | None:
        """Toggle whether the gallery is shared."""
        response = (
            self.client.table("galleries")
            .update({"is_active": is_active})
            .eq("id", str(gallery_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_gallery(response.data[0])

    def delete_gallery(self, gallery_id: UUID) -> None:
        """Delete a gallery; descendants cascade."""
        self.client.table("galleries").delete().eq("id", str(gallery_id)).execute()


def _parse_gallery(row: dict[str, object]) -> GalleryRecord:
    return GalleryRecord(
        id=UUID(str(row["id"])),
        title=str(row["title"]),
        description=row.get("description"),
        share_token=str(row["share_token"]),
        expires_at=parse_timestamp(row.get("expires_at")),
        is_active=bool(row.get("is_active", True)),
        created_at=parse_timestamp(row.get("created_at")),
        session_id=UUID(str(row["session_id"])),
        client_id=UUID(str(row["client_id"])),
    )


def _parse_access(row: dict[str, object]) -> GalleryAccessRecord:
    return GalleryAccessRecord(
        id=UUID(str(row["id"])),
        gallery_id=UUID(str(row["gallery_id"])),
        name=str(row["name"]),
        email=str(row["email"]),
        access_token=str(row["access_token"]),
    )


def _parse_gallery_photo(row: dict[str, object]) -> GalleryPhotoRecord:
    return GalleryPhotoRecord(
        id=UUID(str(row["id"])),
        gallery_id=UUID(str(row["gallery_id"])),
        photo_id=UUID(str(row["photo_id"])),
    )
