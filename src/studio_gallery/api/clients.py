"""Photographer endpoints for the client directory."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from studio_gallery.api.auth import require_photographer
from studio_gallery.api.schemas import (
    ClientBody,
    ClientOut,
    ClientResponse,
    ClientsResponse,
)

if TYPE_CHECKING:
    from studio_gallery.containers import AppContainer

router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.get("")
async def list_clients(
    request: Request, photographer_id: UUID = Depends(require_photographer)
) -> ClientsResponse:
    """Return the photographer's clients with their recipients."""
    container: AppContainer = request.app.state.container
    clients = container.client_service.list_clients(photographer_id)
    return ClientsResponse(
        clients=[ClientOut.from_record(client) for client in clients]
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_client(
    body: ClientBody,
    request: Request,
    photographer_id: UUID = Depends(require_photographer),
) -> ClientResponse:
    """Create a client with optional recipients."""
    container: AppContainer = request.app.state.container
    client = container.client_service.create_client(
        photographer_id,
        body.name,
        body.email,
        phone=body.phone,
        recipients=[recipient.to_input() for recipient in body.recipients],
    )
    return ClientResponse(client=ClientOut.from_record(client))


@router.put("/{client_id}")
async def update_client(
    client_id: UUID,
    body: ClientBody,
    request: Request,
    photographer_id: UUID = Depends(require_photographer),
) -> ClientResponse:
    """Update a client and replace its recipients."""
    container: AppContainer = request.app.state.container
    client = container.client_service.update_client(
        photographer_id,
        client_id,
        body.name,
        body.email,
        phone=body.phone,
        recipients=[recipient.to_input() for recipient in body.recipients],
    )
    return ClientResponse(client=ClientOut.from_record(client))


@router.delete("/{client_id}")
async def delete_client(
    client_id: UUID,
    request: Request,
    photographer_id: UUID = Depends(require_photographer),
) -> dict[str, str]:
    """Delete a client and its recipients."""
    container: AppContainer = request.app.state.container
    container.client_service.delete_client(photographer_id, client_id)
    return {"message": "Client deleted successfully"}
