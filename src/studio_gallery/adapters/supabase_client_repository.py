"""Supabase client directory data access."""

from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from studio_gallery.adapters.supabase_rows import is_unique_violation
from studio_gallery.adapters.supabase_studio_repository import (
    CLIENT_COLUMNS,
    parse_client,
)
from studio_gallery.domain.errors import ConflictError
from studio_gallery.domain.studio import ClientInput, ClientRecord
from studio_gallery.services.clients import ClientRepository


@dataclass
class SupabaseClientRepository(ClientRepository):
    """Supabase implementation for clients and recipients."""

    client: Client

    def list_clients(self, photographer_id: UUID) -> list[ClientRecord]:
        """Return the photographer's clients, newest first."""
        response = (
            self.client.table("clients")
            .select(CLIENT_COLUMNS)
            .eq("photographer_id", str(photographer_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_client(row) for row in response.data or []]

    def get_client(self, client_id: UUID) -> ClientRecord | None:
        """Return a client with recipients, if present."""
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

    def find_by_email(self, photographer_id: UUID, email: str) -> ClientRecord | None:
        """Return the photographer's client with this email, if any."""
        response = (
            self.client.table("clients")
            .select(CLIENT_COLUMNS)
            .eq("photographer_id", str(photographer_id))
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_client(response.data[0])

    def create_client(self, photographer_id: UUID, data: ClientInput) -> ClientRecord:
        """Insert a client and its recipients in one transaction."""
        return self._save(None, photographer_id, data)

    def update_client(self, client_id: UUID, data: ClientInput) -> ClientRecord:
        """Update a client and replace its recipients in one transaction."""
        return self._save(client_id, None, data)

    def delete_client(self, client_id: UUID) -> None:
        """Delete a client; recipients cascade."""
        self.client.table("clients").delete().eq("id", str(client_id)).execute()

    def _save(
        self, client_id: UUID | None, photographer_id: UUID | None, data: ClientInput
    ) -> ClientRecord:
        try:
            response = self.client.rpc(
                "save_client",
                {
                    "p_client_id": str(client_id) if client_id else None,
                    "p_photographer_id": (
                        str(photographer_id) if photographer_id else None
                    ),
                    "p_name": data.name,
                    "p_email": data.email,
                    "p_phone": data.phone,
                    "p_recipients": [
                        {
                            "name": recipient.name,
                            "email": recipient.email,
                            "relation": recipient.relation,
                        }
                        for recipient in data.recipients
                    ],
                },
            ).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                raise ConflictError("A client with this email already exists") from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to save client")
        saved = self.get_client(UUID(str(response.data)))
        if saved is None:
            raise RuntimeError("Failed to load saved client")
        return saved
