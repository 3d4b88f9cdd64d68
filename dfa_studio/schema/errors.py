"""Schema-related exceptions."""


class SchemaLoadError(Exception):
    """Raised when a sample catalog cannot be loaded."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaValidationError(Exception):
    """Raised when a catalog fails schema validation."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)


class UnknownSampleError(KeyError):
    """Raised when a sample name is not in the catalog."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown sample '{self.name}' (available: {', '.join(self.available)})"
