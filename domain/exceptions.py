# domain/exceptions.py
from __future__ import annotations

from typing import List


class DomainError(Exception):
    pass


class ValidationError(DomainError):
    pass


class InvalidUrlError(DomainError):
    """Raised by the compiler when the joined URL cannot be parsed."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL format: {url}")


class ImportValidationError(ValidationError):
    """
    Structural problems in an import payload.

    `errors` holds one display-ready message per problem. Nothing is merged
    when this is raised.
    """

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid import payload")
