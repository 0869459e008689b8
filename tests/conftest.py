"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from studio_gallery.config import Settings
from studio_gallery.containers import AppContainer
from studio_gallery.domain.errors import ConflictError
from studio_gallery.domain.galleries import (
    GalleryAccessRecord,
    GalleryDraft,
    GalleryPhotoRecord,
    GalleryRecord,
    PhotoCommentRecord,
    PhotoInteractions,
    PhotoLikeRecord,
    VisitorIdentity,
)
from studio_gallery.domain.studio import (
    ClientInput,
    ClientRecord,
    PhotoRecord,
    PhotoSessionRecord,
    RecipientRecord,
)
from studio_gallery.services.access import (
    GalleryAccessResolver,
    GalleryRepository,
    StudioRepository,
)
from studio_gallery.services.clients import ClientRepository, ClientService
from studio_gallery.services.composer import (
    AccessRequest,
    GalleryComposer,
    GalleryDetail,
)
from studio_gallery.services.delivery import (
    BlobStore,
    PhotoDeliveryService,
    WatermarkOptions,
    Watermarker,
)
from studio_gallery.services.interactions import (
    InteractionEngine,
    InteractionRepository,
)

PHOTOGRAPHER_ID = UUID("6f1c2a52-4f0e-4a8e-9a43-2d8c9f7b1e01")
OTHER_PHOTOGRAPHER_ID = UUID("0b7d5e3a-91c4-4c36-8f1d-5a2e6b9c4d02")
PHOTOGRAPHER_TOKEN = "photographer-token"
OTHER_PHOTOGRAPHER_TOKEN = "other-photographer-token"
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Settable clock shared by every service under test."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@dataclass
class InMemoryStudioRepository(StudioRepository):
    """In-memory sessions, photos and clients for tests."""

    sessions: dict[UUID, PhotoSessionRecord] = field(default_factory=dict)
    photos: dict[UUID, PhotoRecord] = field(default_factory=dict)
    clients: dict[UUID, ClientRecord] = field(default_factory=dict)

    def add_client(
        self,
        name: str = "Jane Doe",
        email: str = "jane@example.com",
        recipients: Sequence[tuple[str, str]] = (),
        photographer_id: UUID = PHOTOGRAPHER_ID,
    ) -> ClientRecord:
        client_id = uuid4()
        client = ClientRecord(
            id=client_id,
            photographer_id=photographer_id,
            name=name,
            email=email,
            phone=None,
            created_at=NOW,
            recipients=[
                RecipientRecord(
                    id=uuid4(),
                    client_id=client_id,
                    name=recipient_name,
                    email=recipient_email,
                )
                for recipient_name, recipient_email in recipients
            ],
        )
        self.clients[client_id] = client
        return client

    def add_session(
        self, client: ClientRecord, title: str = "Spring Portraits"
    ) -> PhotoSessionRecord:
        session = PhotoSessionRecord(
            id=uuid4(),
            photographer_id=client.photographer_id,
            client_id=client.id,
            title=title,
            session_date=NOW - timedelta(days=7),
        )
        self.sessions[session.id] = session
        return session

    def add_photo(
        self,
        session: PhotoSessionRecord,
        preview_path: str | None = None,
        thumbnail_path: str | None = None,
    ) -> PhotoRecord:
        photo_id = uuid4()
        photo = PhotoRecord(
            id=photo_id,
            session_id=session.id,
            filename=f"{photo_id}.jpg",
            original_name="IMG_0001.jpg",
            path=f"originals/{photo_id}.jpg",
            preview_path=preview_path,
            thumbnail_path=thumbnail_path,
            mime_type="image/jpeg",
            width=4000,
            height=3000,
            uploaded_at=NOW,
        )
        self.photos[photo_id] = photo
        return photo

    def get_session(self, session_id: UUID) -> PhotoSessionRecord | None:
        return self.sessions.get(session_id)

    def list_session_ids(self, photographer_id: UUID) -> list[UUID]:
        return [
            session.id
            for session in self.sessions.values()
            if session.photographer_id == photographer_id
        ]

    def list_session_photos(
        self, session_id: UUID, photo_ids: list[UUID]
    ) -> list[PhotoRecord]:
        return [
            self.photos[photo_id]
            for photo_id in photo_ids
            if photo_id in self.photos
            and self.photos[photo_id].session_id == session_id
        ]

    def list_photos(self, photo_ids: list[UUID]) -> list[PhotoRecord]:
        return [
            self.photos[photo_id] for photo_id in photo_ids if photo_id in self.photos
        ]

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        return self.photos.get(photo_id)

    def get_client(self, client_id: UUID) -> ClientRecord | None:
        return self.clients.get(client_id)


@dataclass
class InMemoryInteractionRepository(InteractionRepository):
    """In-memory likes and comments enforcing one like per recipient."""

    likes: list[PhotoLikeRecord] = field(default_factory=list)
    comments: list[PhotoCommentRecord] = field(default_factory=list)

    def add_like(
        self, gallery_photo_id: UUID, identity: VisitorIdentity
    ) -> PhotoLikeRecord:
        if any(
            like.gallery_photo_id == gallery_photo_id
            and like.gallery_access_id == identity.id
            for like in self.likes
        ):
            raise ConflictError("Photo already liked by this user")
        like = PhotoLikeRecord(
            id=uuid4(),
            gallery_photo_id=gallery_photo_id,
            gallery_access_id=identity.id,
            name=identity.name,
            email=identity.email,
            created_at=NOW,
        )
        self.likes.append(like)
        return like

    def remove_like(self, gallery_photo_id: UUID, gallery_access_id: UUID) -> bool:
        remaining = [
            like
            for like in self.likes
            if not (
                like.gallery_photo_id == gallery_photo_id
                and like.gallery_access_id == gallery_access_id
            )
        ]
        removed = len(remaining) != len(self.likes)
        self.likes = remaining
        return removed

    def count_likes(self, gallery_photo_id: UUID) -> int:
        return len(self.list_likes(gallery_photo_id))

    def list_likes(self, gallery_photo_id: UUID) -> list[PhotoLikeRecord]:
        return [
            like
            for like in reversed(self.likes)
            if like.gallery_photo_id == gallery_photo_id
        ]

    def add_comment(
        self,
        gallery_photo_id: UUID,
        identity: VisitorIdentity,
        comment: str,
        created_at: datetime,
    ) -> PhotoCommentRecord:
        record = PhotoCommentRecord(
            id=uuid4(),
            gallery_photo_id=gallery_photo_id,
            gallery_access_id=identity.id,
            comment=comment,
            name=identity.name,
            email=identity.email,
            created_at=created_at,
            updated_at=created_at,
        )
        self.comments.append(record)
        return record

    def update_comment(  # noqa: PLR0913
        self,
        comment_id: UUID,
        gallery_photo_id: UUID,
        identity: VisitorIdentity,
        comment: str,
        updated_at: datetime,
    ) -> PhotoCommentRecord | None:
        for index, existing in enumerate(self.comments):
            if (
                existing.id == comment_id
                and existing.gallery_photo_id == gallery_photo_id
                and existing.gallery_access_id == identity.id
            ):
                updated = replace(existing, comment=comment, updated_at=updated_at)
                self.comments[index] = updated
                return updated
        return None

    def get_comment(
        self, comment_id: UUID, gallery_photo_id: UUID
    ) -> PhotoCommentRecord | None:
        for comment in self.comments:
            if (
                comment.id == comment_id
                and comment.gallery_photo_id == gallery_photo_id
            ):
                return comment
        return None

    def list_comments(self, gallery_photo_id: UUID) -> list[PhotoCommentRecord]:
        return [
            comment
            for comment in reversed(self.comments)
            if comment.gallery_photo_id == gallery_photo_id
        ]

    def discard(self, gallery_photo_ids: set[UUID]) -> None:
        self.likes = [
            like
            for like in self.likes
            if like.gallery_photo_id not in gallery_photo_ids
        ]
        self.comments = [
            comment
            for comment in self.comments
            if comment.gallery_photo_id not in gallery_photo_ids
        ]


@dataclass
class InMemoryGalleryRepository(GalleryRepository):
    """In-memory galleries with cascading deletes."""

    interactions: InMemoryInteractionRepository
    galleries: dict[UUID, GalleryRecord] = field(default_factory=dict)
    gallery_photos: list[GalleryPhotoRecord] = field(default_factory=list)
    access: list[GalleryAccessRecord] = field(default_factory=list)
    drafts: list[GalleryDraft] = field(default_factory=list)

    def get_by_share_token(self, share_token: str) -> GalleryRecord | None:
        for gallery in self.galleries.values():
            if gallery.share_token == share_token:
                return gallery
        return None

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        return self.galleries.get(gallery_id)

    def list_galleries(self, session_ids: list[UUID]) -> list[GalleryRecord]:
        return [
            gallery
            for gallery in reversed(list(self.galleries.values()))
            if gallery.session_id in session_ids
        ]

    def get_access(
        self, gallery_id: UUID, access_token: str
    ) -> GalleryAccessRecord | None:
        for access in self.access:
            if access.gallery_id == gallery_id and access.access_token == access_token:
                return access
        return None

    def list_access(self, gallery_id: UUID) -> list[GalleryAccessRecord]:
        return [access for access in self.access if access.gallery_id == gallery_id]

    def get_gallery_photo(
        self, gallery_id: UUID, photo_id: UUID
    ) -> GalleryPhotoRecord | None:
        for gallery_photo in self.gallery_photos:
            if (
                gallery_photo.gallery_id == gallery_id
                and gallery_photo.photo_id == photo_id
            ):
                return gallery_photo
        return None

    def list_gallery_photos(self, gallery_id: UUID) -> list[GalleryPhotoRecord]:
        return [
            gallery_photo
            for gallery_photo in self.gallery_photos
            if gallery_photo.gallery_id == gallery_id
        ]

    def list_interactions(
        self, gallery_photo_ids: list[UUID]
    ) -> dict[UUID, PhotoInteractions]:
        return {
            gallery_photo_id: PhotoInteractions(
                likes=self.interactions.list_likes(gallery_photo_id),
                comments=self.interactions.list_comments(gallery_photo_id),
            )
            for gallery_photo_id in gallery_photo_ids
        }

    def create_gallery(self, draft: GalleryDraft) -> GalleryRecord:
        if self.get_by_share_token(draft.share_token) is not None:
            raise RuntimeError("duplicate share token")
        self.drafts.append(draft)
        gallery = GalleryRecord(
            id=uuid4(),
            title=draft.title,
            description=draft.description,
            share_token=draft.share_token,
            expires_at=draft.expires_at,
            is_active=True,
            created_at=NOW,
            session_id=draft.session_id,
            client_id=draft.client_id,
        )
        self.galleries[gallery.id] = gallery
        self.gallery_photos.extend(
            GalleryPhotoRecord(id=uuid4(), gallery_id=gallery.id, photo_id=photo_id)
            for photo_id in draft.photo_ids
        )
        self.access.extend(
            GalleryAccessRecord(
                id=uuid4(),
                gallery_id=gallery.id,
                name=grant.name,
                email=grant.email,
                access_token=grant.access_token,
            )
            for grant in draft.access_list
        )
        return gallery

    def set_active(self, gallery_id: UUID, is_active: bool) -> GalleryRecord | None:
        gallery = self.galleries.get(gallery_id)
        if gallery is None:
            return None
        updated = replace(gallery, is_active=is_active)
        self.galleries[gallery_id] = updated
        return updated

    def delete_gallery(self, gallery_id: UUID) -> None:
        self.galleries.pop(gallery_id, None)
        removed = {
            gallery_photo.id
            for gallery_photo in self.gallery_photos
            if gallery_photo.gallery_id == gallery_id
        }
        self.gallery_photos = [
            gallery_photo
            for gallery_photo in self.gallery_photos
            if gallery_photo.gallery_id != gallery_id
        ]
        self.access = [
            access for access in self.access if access.gallery_id != gallery_id
        ]
        self.interactions.discard(removed)

    def expire(self, gallery_id: UUID, expires_at: datetime | None) -> None:
        self.galleries[gallery_id] = replace(
            self.galleries[gallery_id], expires_at=expires_at
        )


@dataclass
class InMemoryClientRepository(ClientRepository):
    """Client directory backed by the in-memory studio repository."""

    studio: InMemoryStudioRepository

    def list_clients(self, photographer_id: UUID) -> list[ClientRecord]:
        return [
            client
            for client in reversed(list(self.studio.clients.values()))
            if client.photographer_id == photographer_id
        ]

    def get_client(self, client_id: UUID) -> ClientRecord | None:
        return self.studio.clients.get(client_id)

    def find_by_email(self, photographer_id: UUID, email: str) -> ClientRecord | None:
        for client in self.studio.clients.values():
            if client.photographer_id == photographer_id and client.email == email:
                return client
        return None

    def create_client(self, photographer_id: UUID, data: ClientInput) -> ClientRecord:
        client_id = uuid4()
        client = _client_record(client_id, photographer_id, data, NOW)
        self.studio.clients[client_id] = client
        return client

    def update_client(self, client_id: UUID, data: ClientInput) -> ClientRecord:
        existing = self.studio.clients[client_id]
        client = _client_record(
            client_id, existing.photographer_id, data, existing.created_at
        )
        self.studio.clients[client_id] = client
        return client

    def delete_client(self, client_id: UUID) -> None:
        self.studio.clients.pop(client_id, None)


def _client_record(
    client_id: UUID, photographer_id: UUID, data: ClientInput, created_at: datetime
) -> ClientRecord:
    return ClientRecord(
        id=client_id,
        photographer_id=photographer_id,
        name=data.name,
        email=data.email,
        phone=data.phone,
        created_at=created_at,
        recipients=[
            RecipientRecord(
                id=uuid4(),
                client_id=client_id,
                name=recipient.name,
                email=recipient.email,
                relation=recipient.relation,
            )
            for recipient in data.recipients
        ],
    )


@dataclass
class FakeBlobStore(BlobStore):
    """Blob store holding bytes in memory."""

    files: dict[str, bytes] = field(default_factory=dict)
    downloads: list[str] = field(default_factory=list)

    def download(self, path: str) -> bytes:
        self.downloads.append(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def create_signed_url(self, path: str, expires_in: int) -> str:
        return f"https://storage.example/{path}?expires_in={expires_in}"


@dataclass
class FakeWatermarker(Watermarker):
    """Watermarker that records its calls."""

    calls: list[tuple[bytes, WatermarkOptions]] = field(default_factory=list)

    def apply(self, image_bytes: bytes, options: WatermarkOptions) -> bytes:
        self.calls.append((image_bytes, options))
        return b"watermarked:" + options.text.encode()


@dataclass
class StudioHarness:
    """Bundle of in-memory collaborators behind a container."""

    clock: FakeClock
    studio: InMemoryStudioRepository
    galleries: InMemoryGalleryRepository
    interactions: InMemoryInteractionRepository
    blob_store: FakeBlobStore
    watermarker: FakeWatermarker
    container: AppContainer

    def share(  # noqa: PLR0913
        self,
        photo_count: int = 3,
        access_list: Sequence[tuple[str, str]] | None = (("Jane", "jane@x.com"),),
        expiry_days: int | None = 30,
        recipients: Sequence[tuple[str, str]] = (),
        title: str = "Preview",
    ) -> tuple[GalleryDetail, list[PhotoRecord]]:
        """Create a client, session and photos, then compose a gallery."""
        client = self.studio.add_client(recipients=recipients)
        session = self.studio.add_session(client)
        photos = [self.studio.add_photo(session) for _ in range(photo_count)]
        for photo in photos:
            self.blob_store.files[photo.path] = b"original-bytes"
        detail = self.container.gallery_composer.create_gallery(
            photographer_id=PHOTOGRAPHER_ID,
            session_id=session.id,
            title=title,
            photo_ids=[photo.id for photo in photos],
            expiry_days=expiry_days,
            access_list=(
                [AccessRequest(name=name, email=email) for name, email in access_list]
                if access_list is not None
                else None
            ),
        )
        return detail, photos


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        photographer_tokens=(
            f"{PHOTOGRAPHER_TOKEN}:{PHOTOGRAPHER_ID},"
            f"{OTHER_PHOTOGRAPHER_TOKEN}:{OTHER_PHOTOGRAPHER_ID}"
        ),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def harness(settings: Settings, clock: FakeClock) -> StudioHarness:
    studio = InMemoryStudioRepository()
    interactions = InMemoryInteractionRepository()
    galleries = InMemoryGalleryRepository(interactions=interactions)
    blob_store = FakeBlobStore()
    watermarker = FakeWatermarker()

    access_resolver = GalleryAccessResolver(
        gallery_repository=galleries,
        studio_repository=studio,
        clock=clock,
    )
    container = AppContainer(
        settings=settings,
        photographer_tokens={
            PHOTOGRAPHER_TOKEN: PHOTOGRAPHER_ID,
            OTHER_PHOTOGRAPHER_TOKEN: OTHER_PHOTOGRAPHER_ID,
        },
        access_resolver=access_resolver,
        interaction_engine=InteractionEngine(
            resolver=access_resolver, repository=interactions, clock=clock
        ),
        gallery_composer=GalleryComposer(
            gallery_repository=galleries,
            studio_repository=studio,
            default_expiry_days=settings.default_expiry_days,
            clock=clock,
        ),
        photo_delivery=PhotoDeliveryService(
            resolver=access_resolver,
            studio_repository=studio,
            blob_store=blob_store,
            watermarker=watermarker,
            watermark_text=settings.watermark_text,
            signed_url_ttl_seconds=settings.signed_url_ttl_seconds,
        ),
        client_service=ClientService(InMemoryClientRepository(studio)),
    )
    return StudioHarness(
        clock=clock,
        studio=studio,
        galleries=galleries,
        interactions=interactions,
        blob_store=blob_store,
        watermarker=watermarker,
        container=container,
    )


@pytest.fixture
def container(harness: StudioHarness) -> AppContainer:
    return harness.container
