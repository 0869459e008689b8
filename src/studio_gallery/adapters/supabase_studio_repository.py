"""Supabase data access for sessions, photos and clients."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from studio_gallery.adapters.supabase_rows import parse_timestamp
from studio_gallery.domain.studio import (
    ClientRecord,
    PhotoRecord,
    PhotoSessionRecord,
    RecipientRecord,
)
from studio_gallery.services.access import StudioRepository

SESSION_COLUMNS = "id, photographer_id, client_id, title, session_date"
PHOTO_COLUMNS = (
    "id, session_id, filename, original_name, path, preview_path, thumbnail_path, "
    "mime_type, width, height, uploaded_at"
)
CLIENT_COLUMNS = (
    "id, photographer_id, name, email, phone, created_at, "
    "recipients(id, client_id, name, email, relation)"
)


@dataclass
class SupabaseStudioRepository(StudioRepository):
    """Supabase implementation for the studio records galleries are built from."""

    client: Client

    def get_session(self, session_id: UUID) -> PhotoSessionRecord | None:
        """Return a photo session by id, if present."""
        response = (
            self.client.table("photo_sessions")
            .select(SESSION_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return PhotoSessionRecord(
            id=UUID(str(row["id"])),
            photographer_id=UUID(str(row["photographer_id"])),
            client_id=UUID(str(row["client_id"])),
            title=str(row["title"]),
            session_date=parse_timestamp(row.get("session_date")),
        )

    def list_session_ids(self, photographer_id: UUID) -> list[UUID]:
        """Return the ids of every session owned by the photographer."""
        response = (
            self.client.table("photo_sessions")
            .select("id")
            .eq("photographer_id", str(photographer_id))
            .execute()
        )
        return [UUID(str(row["id"])) for row in response.data or []]

    def list_session_photos(
        self, session_id: UUID, photo_ids: list[UUID]
    ) -> list[PhotoRecord]:
        """Return the requested photos that belong to the session."""
        if not photo_ids:
            return []
        response = (
            self.client.table("photos")
            .select(PHOTO_COLUMNS)
            .eq("session_id", str(session_id))
            .in_("id", [str(photo_id) for photo_id in photo_ids])
            .execute()
        )
        return [parse_photo(row) for row in response.data or []]

    def list_photos(self, photo_ids: list[UUID]) -> list[PhotoRecord]:
        """Return photos by id."""
        if not photo_ids:
            return []
        response = (
            self.client.table("photos")
            .select(PHOTO_COLUMNS)
            .in_("id", [str(photo_id) for photo_id in photo_ids])
            .execute()
        )
        return [parse_photo(row) for row in response.data or []]

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        """Return a photo by id, if present."""
        response = (
            self.client.table("photos")
            .select(PHOTO_COLUMNS)
            .eq("id", str(photo_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_photo(response.data[0])

    def get_client(self, client_id: UUID) -> ClientRecord | None:
        """Return a client with its recipients, if present."""
        response = (
            self.client.table("clients")
            .select(CLIENT_COLUMNS)
            .eq("id", str(client_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_client(response.data[0])


def parse_photo(row: dict[str, object]) -> PhotoRecord:
    """Parse a photo row."""
    return PhotoRecord(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        filename=str(row["filename"]),
        original_name=str(row.get("original_name") or row["filename"]),
        path=str(row["path"]),
        preview_path=row.get("preview_path"),
        thumbnail_path=row.get("thumbnail_path"),
        mime_type=row.get("mime_type"),
        width=row.get("width"),
        height=row.get("height"),
        uploaded_at=parse_timestamp(row.get("uploaded_at")),
    )


def parse_client(row: dict[str, object]) -> ClientRecord:
    """Parse a client row with its embedded recipients."""
    return ClientRecord(
        id=UUID(str(row["id"])),
        photographer_id=UUID(str(row["photographer_id"])),
        name=str(row["name"]),
        email=str(row["email"]),
        phone=row.get("phone"),
        created_at=parse_timestamp(row.get("created_at")),
        recipients=[
            RecipientRecord(
                id=UUID(str(recipient["id"])),
                client_id=UUID(str(recipient["client_id"])),
                name=str(recipient["name"]),
                email=str(recipient["email"]),
                relation=recipient.get("relation"),
            )
            for recipient in row.get("recipients") or []
        ],
    )
