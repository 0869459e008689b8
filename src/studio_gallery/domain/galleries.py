"""Domain models for shared galleries and visitor interactions."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class GalleryRecord:
    """Represents a persisted gallery."""

    id: UUID
    title: str
    description: str | None
    share_token: str
    expires_at: datetime | None
    is_active: bool
    created_at: datetime
    session_id: UUID
    client_id: UUID

    def is_expired(self, now: datetime) -> bool:
        """Return True once the sharing window has closed."""
        return self.expires_at is not None and self.expires_at <= now

    def is_live(self, now: datetime) -> bool:
        """Return True when visitors may open the gallery."""
        return self.is_active and not self.is_expired(now)


@dataclass(frozen=True)
class GalleryPhotoRecord:
    """Join row between a gallery and one session photo."""

    id: UUID
    gallery_id: UUID
    photo_id: UUID


@dataclass(frozen=True)
class GalleryAccessRecord:
    """A named recipient's personal entry into a gallery."""

    id: UUID
    gallery_id: UUID
    name: str
    email: str
    access_token: str


@dataclass(frozen=True)
class VisitorIdentity:
    """Recipient resolved from an access token."""

    id: UUID
    name: str
    email: str

    @classmethod
    def from_access(cls, access: GalleryAccessRecord) -> "VisitorIdentity":
        return cls(id=access.id, name=access.name, email=access.email)


@dataclass(frozen=True)
class PhotoLikeRecord:
    """A recipient's like, with the recipient's name and email attached."""

    id: UUID
    gallery_photo_id: UUID
    gallery_access_id: UUID
    name: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class PhotoCommentRecord:
    """A recipient's comment, with the recipient's name and email attached."""

    id: UUID
    gallery_photo_id: UUID
    gallery_access_id: UUID
    comment: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AccessGrant:
    """Recipient to provision when a gallery is created."""

    name: str
    email: str
    access_token: str


@dataclass(frozen=True)
class GalleryDraft:
    """Fully validated gallery, ready for a single transactional write."""

    title: str
    description: str | None
    share_token: str
    expires_at: datetime | None
    session_id: UUID
    client_id: UUID
    photo_ids: list[UUID]
    access_list: list[AccessGrant]


@dataclass(frozen=True)
class GallerySummary:
    """Photographer-facing gallery row with fresh interaction totals."""

    gallery: GalleryRecord
    session_title: str
    client_name: str
    client_email: str
    photo_ids: list[UUID]
    access_list: list[GalleryAccessRecord]
    like_count: int = 0
    comment_count: int = 0


@dataclass(frozen=True)
class PhotoInteractions:
    """Likes and comments recorded against one gallery photo."""

    likes: list[PhotoLikeRecord] = field(default_factory=list)
    comments: list[PhotoCommentRecord] = field(default_factory=list)

    @property
    def like_count(self) -> int:
        return len(self.likes)

    @property
    def comment_count(self) -> int:
        return len(self.comments)
