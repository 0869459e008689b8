"""Pydantic models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from studio_gallery.domain.galleries import (
    GalleryAccessRecord,
    GallerySummary,
    PhotoCommentRecord,
    PhotoInteractions,
    PhotoLikeRecord,
    VisitorIdentity,
)
from studio_gallery.domain.studio import ClientRecord, PhotoRecord, RecipientInput
from studio_gallery.services.access import ResolvedGallery
from studio_gallery.services.composer import (
    AccessRequest,
    GalleryActivity,
    GalleryDetail,
)


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AccessTokenBody(CamelModel):
    """Request body carrying a recipient access token."""

    access_token: str | None = None


class CommentBody(CamelModel):
    """Request body for a new comment."""

    access_token: str | None = None
    comment: str | None = None


class CommentEditBody(CamelModel):
    """Request body for editing a comment."""

    access_token: str | None = None
    comment_id: UUID | None = None
    comment: str | None = None


class AccessEntryBody(CamelModel):
    """Recipient requested for a new gallery."""

    name: str | None = None
    email: str | None = None

    def to_request(self) -> AccessRequest:
        return AccessRequest(name=self.name or "", email=self.email or "")


class GalleryCreateBody(CamelModel):
    """Request body for composing a gallery."""

    session_id: UUID
    title: str | None = None
    description: str | None = None
    photo_ids: list[UUID] = Field(default_factory=list)
    expiry_days: int | None = None
    access_list: list[AccessEntryBody] | None = None


class GalleryUpdateBody(CamelModel):
    """Request body for toggling sharing."""

    is_active: bool


class RecipientBody(CamelModel):
    """Recipient configured on a client."""

    name: str | None = None
    email: str | None = None
    relation: str | None = None

    def to_input(self) -> RecipientInput:
        return RecipientInput(
            name=self.name or "", email=self.email or "", relation=self.relation
        )


class ClientBody(CamelModel):
    """Request body for creating or updating a client."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    recipients: list[RecipientBody] = Field(default_factory=list)


class ViewerOut(CamelModel):
    id: UUID
    name: str
    email: str

    @classmethod
    def from_identity(cls, identity: VisitorIdentity) -> "ViewerOut":
        return cls(id=identity.id, name=identity.name, email=identity.email)


class LikeOut(CamelModel):
    id: UUID
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_record(cls, like: PhotoLikeRecord) -> "LikeOut":
        return cls(
            id=like.id, name=like.name, email=like.email, created_at=like.created_at
        )


class CommentOut(CamelModel):
    id: UUID
    comment: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, comment: PhotoCommentRecord) -> "CommentOut":
        return cls(
            id=comment.id,
            comment=comment.comment,
            name=comment.name,
            email=comment.email,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class PhotoOut(CamelModel):
    """Photo metadata with likes and comments, without storage paths."""

    id: UUID
    filename: str
    original_name: str
    mime_type: str | None = None
    width: int | None = None
    height: int | None = None
    uploaded_at: datetime | None = None
    like_count: int = 0
    comment_count: int = 0
    likes: list[LikeOut] = Field(default_factory=list)
    comments: list[CommentOut] = Field(default_factory=list)

    @classmethod
    def from_records(
        cls, photo: PhotoRecord, interactions: PhotoInteractions
    ) -> "PhotoOut":
        return cls(
            id=photo.id,
            filename=photo.filename,
            original_name=photo.original_name,
            mime_type=photo.mime_type,
            width=photo.width,
            height=photo.height,
            uploaded_at=photo.uploaded_at,
            like_count=interactions.like_count,
            comment_count=interactions.comment_count,
            likes=[LikeOut.from_record(like) for like in interactions.likes],
            comments=[
                CommentOut.from_record(comment) for comment in interactions.comments
            ],
        )


class SessionOut(CamelModel):
    title: str | None = None
    date: datetime | None = None
    client_name: str | None = None


class GalleryViewOut(CamelModel):
    """What a visitor sees when opening a share link."""

    id: UUID
    title: str
    description: str | None = None
    created_at: datetime | None = None
    expires_at: datetime | None = None
    photos: list[PhotoOut]
    session: SessionOut
    viewer: ViewerOut | None = None
    can_interact: bool = False

    @classmethod
    def from_resolved(cls, resolved: ResolvedGallery) -> "GalleryViewOut":
        gallery = resolved.gallery
        return cls(
            id=gallery.id,
            title=gallery.title,
            description=gallery.description,
            created_at=gallery.created_at,
            expires_at=gallery.expires_at,
            photos=[
                PhotoOut.from_records(view.photo, view.interactions)
                for view in resolved.photos
            ],
            session=SessionOut(
                title=resolved.session.title if resolved.session else None,
                date=resolved.session.session_date if resolved.session else None,
                client_name=resolved.client_name,
            ),
            viewer=(
                ViewerOut.from_identity(resolved.identity)
                if resolved.identity
                else None
            ),
            can_interact=resolved.can_interact,
        )


class GalleryViewResponse(CamelModel):
    gallery: GalleryViewOut


class LikeResponse(CamelModel):
    success: bool = True
    like_count: int
    like: LikeOut | None = None


class LikesResponse(CamelModel):
    likes: list[LikeOut]
    like_count: int


class CommentResponse(CamelModel):
    success: bool = True
    comment: CommentOut


class CommentsResponse(CamelModel):
    comments: list[CommentOut]


class AccessOut(CamelModel):
    """Recipient entry with its token, shown only to the photographer."""

    id: UUID
    name: str
    email: str
    access_token: str

    @classmethod
    def from_record(cls, access: GalleryAccessRecord) -> "AccessOut":
        return cls(
            id=access.id,
            name=access.name,
            email=access.email,
            access_token=access.access_token,
        )


class GalleryOut(CamelModel):
    """Photographer view of a gallery."""

    id: UUID
    title: str
    description: str | None = None
    share_token: str
    expires_at: datetime | None = None
    is_active: bool
    created_at: datetime | None = None
    session_id: UUID
    client_id: UUID
    photo_ids: list[UUID]
    photo_count: int
    access_list: list[AccessOut]

    @classmethod
    def from_detail(cls, detail: GalleryDetail) -> "GalleryOut":
        gallery = detail.gallery
        return cls(
            id=gallery.id,
            title=gallery.title,
            description=gallery.description,
            share_token=gallery.share_token,
            expires_at=gallery.expires_at,
            is_active=gallery.is_active,
            created_at=gallery.created_at,
            session_id=gallery.session_id,
            client_id=gallery.client_id,
            photo_ids=detail.photo_ids,
            photo_count=len(detail.photo_ids),
            access_list=[AccessOut.from_record(entry) for entry in detail.access_list],
        )


class GallerySummaryOut(GalleryOut):
    """Gallery row for the photographer's dashboard."""

    session_title: str
    client_name: str
    client_email: str
    like_count: int
    comment_count: int

    @classmethod
    def from_summary(cls, summary: GallerySummary) -> "GallerySummaryOut":
        base = GalleryOut.from_detail(
            GalleryDetail(
                gallery=summary.gallery,
                photo_ids=summary.photo_ids,
                access_list=summary.access_list,
            )
        )
        return cls(
            **base.model_dump(),
            session_title=summary.session_title,
            client_name=summary.client_name,
            client_email=summary.client_email,
            like_count=summary.like_count,
            comment_count=summary.comment_count,
        )


class GalleryActivityOut(GallerySummaryOut):
    """Dashboard gallery with per-photo likes and comments."""

    photos: list[PhotoOut]

    @classmethod
    def from_activity(cls, activity: GalleryActivity) -> "GalleryActivityOut":
        summary = GallerySummaryOut.from_summary(activity.summary)
        return cls(
            **summary.model_dump(),
            photos=[
                PhotoOut.from_records(item.photo, item.interactions)
                for item in activity.photos
            ],
        )


class GalleryResponse(CamelModel):
    gallery: GalleryOut


class GalleryActivityResponse(CamelModel):
    gallery: GalleryActivityOut


class GalleriesResponse(CamelModel):
    galleries: list[GallerySummaryOut]


class RecipientOut(CamelModel):
    id: UUID
    name: str
    email: str
    relation: str | None = None


class ClientOut(CamelModel):
    id: UUID
    name: str
    email: str
    phone: str | None = None
    created_at: datetime | None = None
    recipients: list[RecipientOut]

    @classmethod
    def from_record(cls, client: ClientRecord) -> "ClientOut":
        return cls(
            id=client.id,
            name=client.name,
            email=client.email,
            phone=client.phone,
            created_at=client.created_at,
            recipients=[
                RecipientOut(
                    id=recipient.id,
                    name=recipient.name,
                    email=recipient.email,
                    relation=recipient.relation,
                )
                for recipient in client.recipients
            ],
        )


class ClientResponse(CamelModel):
    client: ClientOut


class ClientsResponse(CamelModel):
    clients: list[ClientOut]


class SignedUrlResponse(CamelModel):
    url: str
    expires_in: int
