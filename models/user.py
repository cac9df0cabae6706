"""
models/user.py
--------------
Domain model for users.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """
    Represents a registered user.

    Attributes:
        id: Unique identifier chosen by the caller; the lookup key.
        name: Display name.
        password: Credential string, stored and compared as-is.
    """
    id: str
    name: str
    password: str

    def __str__(self) -> str:
        return f"{self.id} ({self.name})"
