"""Domain models for the photographer's studio records."""

import re
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class RecipientRecord:
    """Person who should receive a client's galleries."""

    id: UUID
    client_id: UUID
    name: str
    email: str
    relation: str | None = None


@dataclass(frozen=True)
class ClientRecord:
    """A photographer's client with configured recipients."""

    id: UUID
    photographer_id: UUID
    name: str
    email: str
    phone: str | None
    created_at: datetime
    recipients: list[RecipientRecord]


@dataclass(frozen=True)
class RecipientInput:
    """Normalized recipient data for client writes."""

    name: str
    email: str
    relation: str | None = None


@dataclass(frozen=True)
class ClientInput:
    """Normalized client data for client writes."""

    name: str
    email: str
    phone: str | None
    recipients: list[RecipientInput]


@dataclass(frozen=True)
class PhotoSessionRecord:
    """A photo session owned by a photographer for one client."""

    id: UUID
    photographer_id: UUID
    client_id: UUID
    title: str
    session_date: datetime | None


@dataclass(frozen=True)
class PhotoRecord:
    """Uploaded photo metadata with blob paths."""

    id: UUID
    session_id: UUID
    filename: str
    original_name: str
    path: str
    preview_path: str | None
    thumbnail_path: str | None
    mime_type: str | None
    width: int | None
    height: int | None
    uploaded_at: datetime
