"""Tests for gallery image delivery."""

from datetime import timedelta

import pytest

from studio_gallery.domain.errors import (
    GalleryExpiredError,
    InvalidInputError,
    NotFoundError,
)
from tests.conftest import OTHER_PHOTOGRAPHER_ID, PHOTOGRAPHER_ID, StudioHarness


def test_pre_generated_preview_is_served_as_is(harness: StudioHarness) -> None:
    client = harness.studio.add_client()
    session = harness.studio.add_session(client)
    photo = harness.studio.add_photo(session, preview_path="previews/one.jpg")
    harness.blob_store.files["previews/one.jpg"] = b"stored-preview"
    detail = harness.container.gallery_composer.create_gallery(
        photographer_id=PHOTOGRAPHER_ID,
        session_id=session.id,
        title="Preview",
        photo_ids=[photo.id],
    )

    rendered = harness.container.photo_delivery.render(
        detail.gallery.share_token, photo.id, "preview"
    )

    assert rendered.content == b"stored-preview"
    assert rendered.media_type == "image/jpeg"
    assert harness.watermarker.calls == []


def test_missing_preview_is_watermarked_on_demand(harness: StudioHarness) -> None:
    detail, photos = harness.share(title="Smith Wedding")

    rendered = harness.container.photo_delivery.render(
        detail.gallery.share_token, photos[0].id
    )

    assert rendered.content == b"watermarked:Preview Only - Smith Wedding"
    original, options = harness.watermarker.calls[0]
    assert original == b"original-bytes"
    assert options.opacity == 0.7
    assert options.font_size == 36


def test_thumbnail_uses_lighter_watermark(harness: StudioHarness) -> None:
    detail, photos = harness.share(title="Smith Wedding")

    harness.container.photo_delivery.render(
        detail.gallery.share_token, photos[0].id, "thumbnail"
    )

    _, options = harness.watermarker.calls[0]
    assert options.text == "Smith Wedding"
    assert options.opacity == 0.5
    assert options.font_size == 24


def test_unknown_variant_is_rejected(harness: StudioHarness) -> None:
    detail, photos = harness.share()

    with pytest.raises(InvalidInputError):
        harness.container.photo_delivery.render(
            detail.gallery.share_token, photos[0].id, "original"
        )


def test_expired_gallery_serves_no_images(harness: StudioHarness) -> None:
    detail, photos = harness.share()
    harness.galleries.expire(detail.gallery.id, harness.clock.now - timedelta(days=1))

    with pytest.raises(GalleryExpiredError):
        harness.container.photo_delivery.render(
            detail.gallery.share_token, photos[0].id
        )

    assert harness.blob_store.downloads == []


def test_storage_failure_propagates(harness: StudioHarness) -> None:
    detail, photos = harness.share()
    harness.blob_store.files.clear()

    with pytest.raises(FileNotFoundError):
        harness.container.photo_delivery.render(
            detail.gallery.share_token, photos[0].id
        )


def test_signed_url_for_owner(harness: StudioHarness) -> None:
    _, photos = harness.share()

    url = harness.container.photo_delivery.signed_url(PHOTOGRAPHER_ID, photos[0].id)

    assert url == f"https://storage.example/{photos[0].path}?expires_in=86400"


def test_signed_url_hidden_from_other_photographer(harness: StudioHarness) -> None:
    _, photos = harness.share()

    with pytest.raises(NotFoundError):
        harness.container.photo_delivery.signed_url(
            OTHER_PHOTOGRAPHER_ID, photos[0].id
        )
