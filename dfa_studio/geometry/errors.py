"""Geometry-related exceptions."""


class GeometryError(Exception):
    """Base exception for geometry errors."""

    pass


class GeometryUnsolvableError(GeometryError):
    """Raised when a curve cannot be clipped against its anchor circles."""

    def __init__(self, message: str, endpoint: str | None = None):
        self.endpoint = endpoint
        super().__init__(message)
