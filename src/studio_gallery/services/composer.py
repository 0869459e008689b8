"""Photographer-side gallery composition."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from studio_gallery.domain.errors import InvalidInputError, NotFoundError
from studio_gallery.domain.galleries import (
    AccessGrant,
    GalleryAccessRecord,
    GalleryDraft,
    GalleryRecord,
    GallerySummary,
    PhotoInteractions,
)
from studio_gallery.domain.studio import EMAIL_PATTERN, ClientRecord, PhotoRecord
from studio_gallery.services.access import GalleryRepository, StudioRepository
from studio_gallery.services.tokens import TokenFactory, issue_token

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_DAYS = 30


@dataclass(frozen=True)
class AccessRequest:
    """Recipient requested by the photographer."""

    name: str
    email: str


@dataclass(frozen=True)
class GalleryDetail:
    """A gallery with the tokens only its photographer may see."""

    gallery: GalleryRecord
    photo_ids: list[UUID]
    access_list: list[GalleryAccessRecord]


@dataclass(frozen=True)
class PhotoActivity:
    """A shared photo with everything recipients left on it."""

    photo: PhotoRecord
    interactions: PhotoInteractions


@dataclass(frozen=True)
class GalleryActivity:
    """A gallery summary with per-photo likes and comments."""

    summary: GallerySummary
    photos: list[PhotoActivity]


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class GalleryComposer:
    """Create, inspect and remove galleries for a photographer."""

    gallery_repository: GalleryRepository
    studio_repository: StudioRepository
    default_expiry_days: int = DEFAULT_EXPIRY_DAYS
    token_factory: TokenFactory = field(default=issue_token)
    clock: Callable[[], datetime] = field(default=_utcnow)

    def create_gallery(  # noqa: PLR0913
        self,
        photographer_id: UUID,
        session_id: UUID,
        title: str | None,
        photo_ids: Sequence[UUID],
        expiry_days: int | None = None,
        access_list: Sequence[AccessRequest] | None = None,
        description: str | None = None,
    ) -> GalleryDetail:
        """Validate the request and write the gallery as one unit.

        Nothing is persisted unless every photo belongs to the session and
        every recipient is valid. Without an explicit access list the
        session client's recipients are used, then the client itself.
        """
        cleaned_title = (title or "").strip()
        if not cleaned_title:
            raise InvalidInputError("Title is required")
        unique_photo_ids = list(dict.fromkeys(photo_ids))
        if not unique_photo_ids:
            raise InvalidInputError("At least one photo is required")
        now = self.clock()
        expires_at = self._expires_at(now, expiry_days)
        requested = _validate_access_list(access_list or [])

        session = self.studio_repository.get_session(session_id)
        if session is None or session.photographer_id != photographer_id:
            raise NotFoundError("Photo session not found or access denied")
        found = self.studio_repository.list_session_photos(session_id, unique_photo_ids)
        if {photo.id for photo in found} != set(unique_photo_ids):
            raise InvalidInputError(
                "Some photos not found or do not belong to this session"
            )
        if not requested:
            client = self.studio_repository.get_client(session.client_id)
            if client is None:
                raise NotFoundError("Client not found")
            requested = _default_recipients(client)

        draft = GalleryDraft(
            title=cleaned_title,
            description=(description or "").strip() or None,
            share_token=self.token_factory(),
            expires_at=expires_at,
            session_id=session.id,
            client_id=session.client_id,
            photo_ids=unique_photo_ids,
            access_list=[
                AccessGrant(
                    name=entry.name,
                    email=entry.email,
                    access_token=self.token_factory(),
                )
                for entry in requested
            ],
        )
        gallery = self.gallery_repository.create_gallery(draft)
        logger.info(
            "Gallery created",
            extra={
                "gallery_id": str(gallery.id),
                "session_id": str(session.id),
                "photo_count": len(unique_photo_ids),
                "recipient_count": len(draft.access_list),
            },
        )
        return self._detail(gallery)

    def list_galleries(self, photographer_id: UUID) -> list[GallerySummary]:
        """Return the photographer's galleries with fresh interaction totals."""
        session_ids = self.studio_repository.list_session_ids(photographer_id)
        if not session_ids:
            return []
        galleries = self.gallery_repository.list_galleries(session_ids)
        return [self._summary(gallery)[0] for gallery in galleries]

    def get_gallery(self, photographer_id: UUID, gallery_id: UUID) -> GalleryActivity:
        """Return one gallery with per-photo likes and comments."""
        gallery = self._owned_gallery(photographer_id, gallery_id)
        summary, interactions = self._summary(gallery)
        gallery_photos = self.gallery_repository.list_gallery_photos(gallery.id)
        photos = {
            photo.id: photo
            for photo in self.studio_repository.list_photos(summary.photo_ids)
        }
        return GalleryActivity(
            summary=summary,
            photos=[
                PhotoActivity(
                    photo=photos[gallery_photo.photo_id],
                    interactions=interactions.get(
                        gallery_photo.id, PhotoInteractions()
                    ),
                )
                for gallery_photo in gallery_photos
                if gallery_photo.photo_id in photos
            ],
        )

    def set_gallery_active(
        self, photographer_id: UUID, gallery_id: UUID, is_active: bool
    ) -> GalleryDetail:
        """Stop or resume sharing a gallery."""
        gallery = self._owned_gallery(photographer_id, gallery_id)
        updated = self.gallery_repository.set_active(gallery.id, is_active)
        if updated is None:
            raise NotFoundError("Gallery not found or access denied")
        logger.info(
            "Gallery sharing toggled",
            extra={"gallery_id": str(gallery.id), "is_active": is_active},
        )
        return self._detail(updated)

    def delete_gallery(self, photographer_id: UUID, gallery_id: UUID) -> None:
        """Delete a gallery and everything recipients left on it."""
        gallery = self._owned_gallery(photographer_id, gallery_id)
        self.gallery_repository.delete_gallery(gallery.id)
        logger.info("Gallery deleted", extra={"gallery_id": str(gallery.id)})

    def _expires_at(self, now: datetime, expiry_days: int | None) -> datetime:
        if expiry_days is None:
            expiry_days = self.default_expiry_days
        if isinstance(expiry_days, bool) or expiry_days < 1:
            raise InvalidInputError("Expiry days must be a positive number")
        try:
            return now + timedelta(days=expiry_days)
        except OverflowError as exc:
            raise InvalidInputError("Expiry days is too large") from exc

    def _owned_gallery(self, photographer_id: UUID, gallery_id: UUID) -> GalleryRecord:
        gallery = self.gallery_repository.get_gallery(gallery_id)
        session = (
            self.studio_repository.get_session(gallery.session_id) if gallery else None
        )
        if gallery is None or session is None:
            raise NotFoundError("Gallery not found or access denied")
        if session.photographer_id != photographer_id:
            raise NotFoundError("Gallery not found or access denied")
        return gallery

    def _detail(self, gallery: GalleryRecord) -> GalleryDetail:
        return GalleryDetail(
            gallery=gallery,
            photo_ids=[
                gallery_photo.photo_id
                for gallery_photo in self.gallery_repository.list_gallery_photos(
                    gallery.id
                )
            ],
            access_list=self.gallery_repository.list_access(gallery.id),
        )

    def _summary(
        self, gallery: GalleryRecord
    ) -> tuple[GallerySummary, dict[UUID, PhotoInteractions]]:
        gallery_photos = self.gallery_repository.list_gallery_photos(gallery.id)
        interactions = self.gallery_repository.list_interactions(
            [gallery_photo.id for gallery_photo in gallery_photos]
        )
        session = self.studio_repository.get_session(gallery.session_id)
        client = self.studio_repository.get_client(gallery.client_id)
        summary = GallerySummary(
            gallery=gallery,
            session_title=session.title if session else "",
            client_name=client.name if client else "",
            client_email=client.email if client else "",
            photo_ids=[gallery_photo.photo_id for gallery_photo in gallery_photos],
            access_list=self.gallery_repository.list_access(gallery.id),
            like_count=sum(item.like_count for item in interactions.values()),
            comment_count=sum(item.comment_count for item in interactions.values()),
        )
        return summary, interactions


def _validate_access_list(entries: Sequence[AccessRequest]) -> list[AccessRequest]:
    """Normalize recipients, rejecting the whole list on any invalid entry."""
    cleaned: dict[str, AccessRequest] = {}
    for entry in entries:
        name = (entry.name or "").strip()
        email = (entry.email or "").strip().lower()
        if not name or not email:
            raise InvalidInputError("Each access list item must have name and email")
        if not EMAIL_PATTERN.match(email):
            raise InvalidInputError(f"Invalid email format: {entry.email}")
        cleaned.setdefault(email, AccessRequest(name=name, email=email))
    return list(cleaned.values())


def _default_recipients(client: ClientRecord) -> list[AccessRequest]:
    """Return the client's recipients, or the client itself when none exist."""
    candidates = [
        AccessRequest(name=recipient.name, email=recipient.email)
        for recipient in client.recipients
    ] or [AccessRequest(name=client.name, email=client.email)]
    return _validate_access_list(candidates)
