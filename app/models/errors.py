from __future__ import annotations


class ValidationError(ValueError):
    """An entity invariant was violated by caller-supplied data."""


class EmailAlreadyExistsError(Exception):
    def __init__(self, email: str) -> None:
        super().__init__("User with this email already exists")
        self.email = email
