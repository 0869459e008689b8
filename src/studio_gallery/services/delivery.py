"""Watermarked image delivery for gallery visitors."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from studio_gallery.domain.errors import InvalidInputError, NotFoundError
from studio_gallery.services.access import GalleryAccessResolver, StudioRepository

logger = logging.getLogger(__name__)

PREVIEW = "preview"
THUMBNAIL = "thumbnail"
VARIANTS = frozenset({PREVIEW, THUMBNAIL})
WATERMARKED_MEDIA_TYPE = "image/jpeg"


class BlobStore(Protocol):
    """Interface for image byte storage."""

    def download(self, path: str) -> bytes:
        """Return the bytes stored at the path."""

    def create_signed_url(self, path: str, expires_in: int) -> str:
        """Return a time-limited URL for the path."""


@dataclass(frozen=True)
class WatermarkOptions:
    """Text overlay settings for on-demand watermarking."""

    text: str
    opacity: float
    font_size: int


class Watermarker(Protocol):
    """Interface for the image-processing collaborator."""

    def apply(self, image_bytes: bytes, options: WatermarkOptions) -> bytes:
        """Return the image with the watermark applied."""


@dataclass(frozen=True)
class RenderedPhoto:
    """Image bytes ready to be served."""

    content: bytes
    media_type: str


@dataclass
class PhotoDeliveryService:
    """Serve gallery images, preferring pre-generated assets."""

    resolver: GalleryAccessResolver
    studio_repository: StudioRepository
    blob_store: BlobStore
    watermarker: Watermarker
    watermark_text: str = "Preview Only"
    signed_url_ttl_seconds: int = 86400

    def render(
        self, share_token: str, photo_id: UUID, variant: str = PREVIEW
    ) -> RenderedPhoto:
        """Return a preview or thumbnail for a photo in a live gallery.

        A stored preview or thumbnail is returned as-is. Without one, the
        original is fetched and watermarked on demand. Storage failures
        propagate to the caller.
        """
        if variant not in VARIANTS:
            raise InvalidInputError(f"Unsupported image type: {variant}")
        gallery = self.resolver.resolve_gallery(share_token)
        gallery_photo = self.resolver.gallery_photo(gallery, photo_id)
        photo = self.studio_repository.get_photo(gallery_photo.photo_id)
        if photo is None:
            raise NotFoundError("Photo not found in gallery")

        stored_path = (
            photo.thumbnail_path if variant == THUMBNAIL else photo.preview_path
        )
        if stored_path:
            return RenderedPhoto(
                content=self.blob_store.download(stored_path),
                media_type=photo.mime_type or WATERMARKED_MEDIA_TYPE,
            )

        logger.info(
            "Watermarking photo on demand",
            extra={"photo_id": str(photo.id), "variant": variant},
        )
        original = self.blob_store.download(photo.path)
        options = _watermark_options(variant, gallery.title, self.watermark_text)
        return RenderedPhoto(
            content=self.watermarker.apply(original, options),
            media_type=WATERMARKED_MEDIA_TYPE,
        )

    def signed_url(self, photographer_id: UUID, photo_id: UUID) -> str:
        """Return a time-limited link to an original for its photographer."""
        photo = self.studio_repository.get_photo(photo_id)
        session = (
            self.studio_repository.get_session(photo.session_id) if photo else None
        )
        if photo is None or session is None:
            raise NotFoundError("Photo not found")
        if session.photographer_id != photographer_id:
            raise NotFoundError("Photo not found")
        return self.blob_store.create_signed_url(
            photo.path, expires_in=self.signed_url_ttl_seconds
        )


def _watermark_options(variant: str, title: str, label: str) -> WatermarkOptions:
    if variant == THUMBNAIL:
        return WatermarkOptions(text=title, opacity=0.5, font_size=24)
    return WatermarkOptions(text=f"{label} - {title}", opacity=0.7, font_size=36)
