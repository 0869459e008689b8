"""Gallery access resolution for share links and recipient tokens."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from studio_gallery.domain.errors import (
    GalleryExpiredError,
    GalleryNotFoundError,
    NotFoundError,
)
from studio_gallery.domain.galleries import (
    GalleryAccessRecord,
    GalleryDraft,
    GalleryPhotoRecord,
    GalleryRecord,
    PhotoInteractions,
    VisitorIdentity,
)
from studio_gallery.domain.studio import (
    ClientRecord,
    PhotoRecord,
    PhotoSessionRecord,
)

logger = logging.getLogger(__name__)


class GalleryRepository(Protocol):
    """Persistence interface for galleries and their join rows."""

    def get_by_share_token(self, share_token: str) -> GalleryRecord | None:
        """Return the gallery issued with the share token, if any."""

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        """Return a gallery by id, if present."""

    def list_galleries(self, session_ids: list[UUID]) -> list[GalleryRecord]:
        """Return galleries created from the sessions, newest first."""

    def get_access(
        self, gallery_id: UUID, access_token: str
    ) -> GalleryAccessRecord | None:
        """Return the recipient holding the token within this gallery only."""

    def list_access(self, gallery_id: UUID) -> list[GalleryAccessRecord]:
        """Return every recipient of a gallery."""

    def get_gallery_photo(
        self, gallery_id: UUID, photo_id: UUID
    ) -> GalleryPhotoRecord | None:
        """Return the join row for a photo shared in a gallery."""

    def list_gallery_photos(self, gallery_id: UUID) -> list[GalleryPhotoRecord]:
        """Return all photos shared in a gallery."""

    def list_interactions(
        self, gallery_photo_ids: list[UUID]
    ) -> dict[UUID, PhotoInteractions]:
        """Return likes and comments per gallery photo, newest first."""

    def create_gallery(self, draft: GalleryDraft) -> GalleryRecord:
        """Write the gallery with its photos and access rows in one transaction."""

    def set_active(self, gallery_id: UUID, is_active: bool) -> GalleryRecord | None:
        """Toggle whether the gallery is shared."""

    def delete_gallery(self, gallery_id: UUID) -> None:
        """Delete a gallery; descendants cascade."""


class StudioRepository(Protocol):
    """Read interface for sessions, photos and clients."""

    def get_session(self, session_id: UUID) -> PhotoSessionRecord | None:
        """Return a photo session by id, if present."""

    def list_session_ids(self, photographer_id: UUID) -> list[UUID]:
        """Return the ids of every session owned by the photographer."""

    def list_session_photos(
        self, session_id: UUID, photo_ids: list[UUID]
    ) -> list[PhotoRecord]:
        """Return the requested photos that belong to the session."""

    def list_photos(self, photo_ids: list[UUID]) -> list[PhotoRecord]:
        """Return photos by id."""

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        """Return a photo by id, if present."""

    def get_client(self, client_id: UUID) -> ClientRecord | None:
        """Return a client with its recipients, if present."""


@dataclass(frozen=True)
class GalleryPhotoView:
    """A photo as a visitor sees it, with its interactions."""

    gallery_photo_id: UUID
    photo: PhotoRecord
    interactions: PhotoInteractions


@dataclass(frozen=True)
class ResolvedGallery:
    """A live gallery together with the visitor identity, if any."""

    gallery: GalleryRecord
    session: PhotoSessionRecord | None
    client_name: str | None
    identity: VisitorIdentity | None
    photos: list[GalleryPhotoView]

    @property
    def can_interact(self) -> bool:
        return self.identity is not None


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class GalleryAccessResolver:
    """Resolve share links and access tokens against current store contents."""

    gallery_repository: GalleryRepository
    studio_repository: StudioRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def resolve(
        self, share_token: str, access_token: str | None = None
    ) -> ResolvedGallery:
        """Return the live gallery with photos, counts and the visitor identity.

        Read access only needs the share token. An access token that does not
        belong to this gallery leaves the identity empty rather than failing.
        """
        gallery = self.resolve_gallery(share_token)
        identity = self.resolve_identity(gallery, access_token)
        gallery_photos = self.gallery_repository.list_gallery_photos(gallery.id)
        photos = {
            photo.id: photo
            for photo in self.studio_repository.list_photos(
                [gallery_photo.photo_id for gallery_photo in gallery_photos]
            )
        }
        interactions = self.gallery_repository.list_interactions(
            [gallery_photo.id for gallery_photo in gallery_photos]
        )
        views = [
            GalleryPhotoView(
                gallery_photo_id=gallery_photo.id,
                photo=photos[gallery_photo.photo_id],
                interactions=interactions.get(gallery_photo.id, PhotoInteractions()),
            )
            for gallery_photo in gallery_photos
            if gallery_photo.photo_id in photos
        ]
        session = self.studio_repository.get_session(gallery.session_id)
        client = self.studio_repository.get_client(gallery.client_id)
        return ResolvedGallery(
            gallery=gallery,
            session=session,
            client_name=client.name if client else None,
            identity=identity,
            photos=views,
        )

    def resolve_gallery(self, share_token: str) -> GalleryRecord:
        """Return the gallery if it is active and not expired."""
        gallery = (
            self.gallery_repository.get_by_share_token(share_token)
            if share_token
            else None
        )
        if gallery is None or not gallery.is_active:
            raise GalleryNotFoundError()
        if gallery.is_expired(self.clock()):
            logger.info(
                "Expired gallery requested", extra={"gallery_id": str(gallery.id)}
            )
            raise GalleryExpiredError()
        return gallery

    def resolve_identity(
        self, gallery: GalleryRecord, access_token: str | None
    ) -> VisitorIdentity | None:
        """Return the recipient holding the token within this gallery."""
        token = (access_token or "").strip()
        if not token:
            return None
        access = self.gallery_repository.get_access(gallery.id, token)
        if access is None or access.gallery_id != gallery.id:
            return None
        return VisitorIdentity.from_access(access)

    def gallery_photo(
        self, gallery: GalleryRecord, photo_id: UUID
    ) -> GalleryPhotoRecord:
        """Return the join row for a photo, failing if it is not in the gallery."""
        gallery_photo = self.gallery_repository.get_gallery_photo(gallery.id, photo_id)
        if gallery_photo is None:
            raise NotFoundError("Photo not found in gallery")
        return gallery_photo
