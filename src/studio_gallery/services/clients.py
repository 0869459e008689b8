"""Client directory with gallery recipients."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from studio_gallery.domain.errors import ConflictError, InvalidInputError, NotFoundError
from studio_gallery.domain.studio import (
    EMAIL_PATTERN,
    ClientInput,
    ClientRecord,
    RecipientInput,
)

logger = logging.getLogger(__name__)


class ClientRepository(Protocol):
    """Persistence interface for clients and their recipients."""

    def list_clients(self, photographer_id: UUID) -> list[ClientRecord]:
        """Return the photographer's clients, newest first."""

    def get_client(self, client_id: UUID) -> ClientRecord | None:
        """Return a client with recipients, if present."""

    def find_by_email(self, photographer_id: UUID, email: str) -> ClientRecord | None:
        """Return the photographer's client with this email, if any."""

    def create_client(self, photographer_id: UUID, data: ClientInput) -> ClientRecord:
        """Insert a client and its recipients in one transaction."""

    def update_client(self, client_id: UUID, data: ClientInput) -> ClientRecord:
        """Update a client and replace its recipients in one transaction."""

    def delete_client(self, client_id: UUID) -> None:
        """Delete a client; recipients cascade."""


@dataclass
class ClientService:
    """Application service for the photographer's client list."""

    repository: ClientRepository

    def list_clients(self, photographer_id: UUID) -> list[ClientRecord]:
        """Return the photographer's clients."""
        return self.repository.list_clients(photographer_id)

    def create_client(  # noqa: PLR0913
        self,
        photographer_id: UUID,
        name: str | None,
        email: str | None,
        phone: str | None = None,
        recipients: Sequence[RecipientInput] = (),
    ) -> ClientRecord:
        """Create a client whose email is unique for the photographer."""
        data = _normalize(name, email, phone, recipients)
        if self.repository.find_by_email(photographer_id, data.email) is not None:
            raise ConflictError("A client with this email already exists")
        client = self.repository.create_client(photographer_id, data)
        logger.info("Client created", extra={"client_id": str(client.id)})
        return client

    def update_client(  # noqa: PLR0913
        self,
        photographer_id: UUID,
        client_id: UUID,
        name: str | None,
        email: str | None,
        phone: str | None = None,
        recipients: Sequence[RecipientInput] = (),
    ) -> ClientRecord:
        """Update a client and replace its recipient list."""
        data = _normalize(name, email, phone, recipients)
        self._owned_client(photographer_id, client_id)
        duplicate = self.repository.find_by_email(photographer_id, data.email)
        if duplicate is not None and duplicate.id != client_id:
            raise ConflictError("A client with this email already exists")
        return self.repository.update_client(client_id, data)

    def delete_client(self, photographer_id: UUID, client_id: UUID) -> None:
        """Delete a client and its recipients."""
        self._owned_client(photographer_id, client_id)
        self.repository.delete_client(client_id)
        logger.info("Client deleted", extra={"client_id": str(client_id)})

    def _owned_client(self, photographer_id: UUID, client_id: UUID) -> ClientRecord:
        client = self.repository.get_client(client_id)
        if client is None or client.photographer_id != photographer_id:
            raise NotFoundError("Client not found")
        return client


def _normalize(
    name: str | None,
    email: str | None,
    phone: str | None,
    recipients: Sequence[RecipientInput],
) -> ClientInput:
    cleaned_name = (name or "").strip()
    cleaned_email = (email or "").strip().lower()
    if not cleaned_name or not cleaned_email:
        raise InvalidInputError("Name and email are required")
    if not EMAIL_PATTERN.match(cleaned_email):
        raise InvalidInputError("Invalid email format")
    cleaned_recipients = []
    for recipient in recipients:
        recipient_name = (recipient.name or "").strip()
        recipient_email = (recipient.email or "").strip().lower()
        if not recipient_name or not recipient_email:
            raise InvalidInputError("All recipients must have name and email")
        if not EMAIL_PATTERN.match(recipient_email):
            raise InvalidInputError(
                f"Invalid email format for recipient: {recipient.email}"
            )
        cleaned_recipients.append(
            RecipientInput(
                name=recipient_name,
                email=recipient_email,
                relation=(recipient.relation or "").strip() or None,
            )
        )
    return ClientInput(
        name=cleaned_name,
        email=cleaned_email,
        phone=(phone or "").strip() or None,
        recipients=cleaned_recipients,
    )
