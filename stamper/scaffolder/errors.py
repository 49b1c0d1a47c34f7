"""Exceptions raised by the scaffolder."""

from __future__ import annotations


class InvalidSpec(ValueError):
    """Raised when a domain spec cannot be stamped.

    Covers bad characters in the domain, environment, prefix or workflow
    names, an empty or duplicated environment list, and resource names that
    exceed the platform length limits.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")
