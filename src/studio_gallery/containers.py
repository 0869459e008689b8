"""Dependency container wiring for the application."""

from dataclasses import dataclass
from uuid import UUID

from supabase import create_client

from studio_gallery.adapters.pillow_watermarker import PillowWatermarker
from studio_gallery.adapters.supabase_blob_store import SupabaseBlobStore
from studio_gallery.adapters.supabase_client_repository import (
    SupabaseClientRepository,
)
from studio_gallery.adapters.supabase_gallery_repository import (
    SupabaseGalleryRepository,
)
from studio_gallery.adapters.supabase_interaction_repository import (
    SupabaseInteractionRepository,
)
from studio_gallery.adapters.supabase_studio_repository import (
    SupabaseStudioRepository,
)
from studio_gallery.config import Settings, parse_photographer_tokens
from studio_gallery.services.access import GalleryAccessResolver
from studio_gallery.services.clients import ClientService
from studio_gallery.services.composer import GalleryComposer
from studio_gallery.services.delivery import PhotoDeliveryService
from studio_gallery.services.interactions import InteractionEngine


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    photographer_tokens: dict[str, UUID]
    access_resolver: GalleryAccessResolver
    interaction_engine: InteractionEngine
    gallery_composer: GalleryComposer
    photo_delivery: PhotoDeliveryService
    client_service: ClientService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    gallery_repository = SupabaseGalleryRepository(supabase_client)
    studio_repository = SupabaseStudioRepository(supabase_client)
    interaction_repository = SupabaseInteractionRepository(supabase_client)
    client_repository = SupabaseClientRepository(supabase_client)
    blob_store = SupabaseBlobStore(
        client=supabase_client, bucket=resolved_settings.storage_bucket
    )

    access_resolver = GalleryAccessResolver(
        gallery_repository=gallery_repository,
        studio_repository=studio_repository,
    )
    interaction_engine = InteractionEngine(
        resolver=access_resolver,
        repository=interaction_repository,
    )
    gallery_composer = GalleryComposer(
        gallery_repository=gallery_repository,
        studio_repository=studio_repository,
        default_expiry_days=resolved_settings.default_expiry_days,
    )
    photo_delivery = PhotoDeliveryService(
        resolver=access_resolver,
        studio_repository=studio_repository,
        blob_store=blob_store,
        watermarker=PillowWatermarker(font_path=resolved_settings.watermark_font_path),
        watermark_text=resolved_settings.watermark_text,
        signed_url_ttl_seconds=resolved_settings.signed_url_ttl_seconds,
    )

    return AppContainer(
        settings=resolved_settings,
        photographer_tokens=parse_photographer_tokens(
            resolved_settings.photographer_tokens
        ),
        access_resolver=access_resolver,
        interaction_engine=interaction_engine,
        gallery_composer=gallery_composer,
        photo_delivery=photo_delivery,
        client_service=ClientService(client_repository),
    )
