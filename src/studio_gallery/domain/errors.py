"""Domain errors raised by the gallery services."""


class StudioError(Exception):
    """Base class for expected, user-facing failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(StudioError):
    """Request data failed validation before anything was written."""


class NotFoundError(StudioError):
    """A referenced entity does not exist or is not visible to the caller."""


class GalleryNotFoundError(NotFoundError):
    """The share token matches no active gallery."""

    def __init__(self, message: str = "Gallery not found") -> None:
        super().__init__(message)


class GalleryExpiredError(StudioError):
    """The gallery exists but its sharing window has lapsed."""

    def __init__(self, message: str = "Gallery has expired") -> None:
        super().__init__(message)


class AccessDeniedError(StudioError):
    """The caller holds no identity allowed to perform the action."""


class ConflictError(StudioError):
    """The write collides with an existing row."""
