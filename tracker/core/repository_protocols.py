"""Boundary Protocols: contracts between services and the storage adapter.

Invariants:
    - Implementations map store failures to PersistenceError / ConflictError
    - Implementations provided by services/storage.py via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Any, Protocol


class UserRepository(Protocol):
    """Contract for user persistence used by AuthService."""
    async def create(self, name: str, email: str, password_hash: str) -> Any: ...
    async def get_by_email(self, email: str) -> Any | None: ...
