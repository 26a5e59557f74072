"""
Domain errors raised by the service layer.

Every error carries the HTTP status it maps to; ``main.py`` registers one
handler for ``ContentError`` that renders ``{"detail", "error"}`` so callers
can tell a business-rule failure from a transport-level one.
"""


class ContentError(Exception):
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidModelError(ContentError):
    """The payload failed shape or field validation; nothing was written."""

    status_code = 422


class InvalidSlugError(InvalidModelError):
    """A slug could not be derived from the supplied title or name."""


class DuplicateSlugError(ContentError):
    """The candidate slug is already used by another entity of the same kind."""

    status_code = 409

    def __init__(self, label: str, slug: str) -> None:
        super().__init__(f"{label} cannot duplicate an existing {label.lower()}")
        self.slug = slug


class NotFoundError(ContentError):
    status_code = 404


class StoreError(ContentError):
    """Persistence failed for a reason the caller cannot fix."""

    status_code = 500
