"""Row parsing and error helpers shared by the Supabase repositories."""

from datetime import UTC, datetime
from uuid import UUID

from postgrest.exceptions import APIError

from studio_gallery.domain.galleries import PhotoCommentRecord, PhotoLikeRecord

UNIQUE_VIOLATION = "23505"

LIKE_COLUMNS = (
    "id, gallery_photo_id, gallery_access_id, created_at, gallery_access(name, email)"
)
COMMENT_COLUMNS = (
    "id, gallery_photo_id, gallery_access_id, comment, created_at, updated_at, "
    "gallery_access(name, email)"
)


def is_unique_violation(exc: APIError) -> bool:
    """Return True when Postgres rejected a duplicate key."""
    return exc.code == UNIQUE_VIOLATION


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp from PostgREST, assuming UTC when naive."""
    if not isinstance(raw, str) or not raw:
        return None
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def parse_like(row: dict[str, object]) -> PhotoLikeRecord:
    """Parse a like row with its embedded recipient."""
    access = row.get("gallery_access") or {}
    return PhotoLikeRecord(
        id=UUID(str(row["id"])),
        gallery_photo_id=UUID(str(row["gallery_photo_id"])),
        gallery_access_id=UUID(str(row["gallery_access_id"])),
        name=str(access.get("name", "")),
        email=str(access.get("email", "")),
        created_at=parse_timestamp(row.get("created_at")) or datetime.now(tz=UTC),
    )


def parse_comment(row: dict[str, object]) -> PhotoCommentRecord:
    """Parse a comment row with its embedded recipient."""
    access = row.get("gallery_access") or {}
    created_at = parse_timestamp(row.get("created_at")) or datetime.now(tz=UTC)
    return PhotoCommentRecord(
        id=UUID(str(row["id"])),
        gallery_photo_id=UUID(str(row["gallery_photo_id"])),
        gallery_access_id=UUID(str(row["gallery_access_id"])),
        comment=str(row.get("comment", "")),
        name=str(access.get("name", "")),
        email=str(access.get("email", "")),
        created_at=created_at,
        updated_at=parse_timestamp(row.get("updated_at")) or created_at,
    )
