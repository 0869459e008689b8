"""Supabase Storage access for photo files."""

from dataclasses import dataclass

from supabase import Client

from studio_gallery.services.delivery import BlobStore


@dataclass
class SupabaseBlobStore(BlobStore):
    """Blob store backed by a Supabase Storage bucket."""

    client: Client
    bucket: str

    def download(self, path: str) -> bytes:
        """Return the bytes stored at the path."""
        return self.client.storage.from_(self.bucket).download(path)

    def create_signed_url(self, path: str, expires_in: int) -> str:
        """Return a time-limited URL for the path."""
        response = self.client.storage.from_(self.bucket).create_signed_url(
            path, expires_in
        )
        signed_url = response.get("signedURL") or response.get("signedUrl")
        if not signed_url:
            raise RuntimeError("Failed to create signed URL")
        return str(signed_url)
