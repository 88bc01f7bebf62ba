"""Domain-specific exceptions — framework-independent."""

from dataclasses import dataclass


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist (or is soft-deleted)."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


@dataclass(frozen=True)
class FieldError:
    """A single caller-fixable problem with one input field."""

    field: str
    message: str


class ValidationError(Exception):
    """Raised when input fields break their declared rules.

    Carries one FieldError per offending field so the transport layer can
    report all of them at once.
    """

    def __init__(self, errors: list[FieldError]):
        if not errors:
            raise ValueError("ValidationError requires at least one FieldError")
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors))

    @property
    def field(self) -> str:
        """Name of the first offending field."""
        return self.errors[0].field

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field, message)])


class StoreError(Exception):
    """Raised when the persistence layer is unreachable or rejects an operation.

    Never retried by the core; retry policy belongs to the caller.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"Store failure during {operation}: {message}")


class ClientsApiError(Exception):
    """Raised by the HTTP client when the clients API answers with an error.

    ``status_code`` is None when the request never got a response.
    """

    def __init__(self, status_code: int | None, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"[clients-api] {status_code}: {message}")


class LoadError(Exception):
    """State recorded by the list engine when a page could not be fetched."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)
