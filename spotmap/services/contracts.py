"""Collaborator contracts consumed by the spot lifecycle and query services.

The lifecycle only depends on these protocols; the SQLAlchemy-backed
implementations in this package are one way to satisfy them.
"""

from collections.abc import Sequence
from typing import Any, Protocol
from uuid import UUID

from spotmap.models import Review, Spot, Tag, User


class ReviewServiceContract(Protocol):
    async def create(self, author_id: UUID, text: str, rating: float) -> Review: ...

    async def remove(self, review_id: UUID) -> None: ...

    async def get_by_id(self, review_id: UUID) -> Review: ...


class TagServiceContract(Protocol):
    async def get_by_label(self, label: str) -> Tag: ...

    async def create(self, label: str, seeded: bool = False) -> Tag: ...

    async def remove(self, tag_id: UUID) -> None: ...


class UserServiceContract(Protocol):
    async def get_by_id(self, user_id: UUID) -> User: ...

    async def adjust_reputation(self, user_id: UUID, increase: bool) -> None: ...


class SpotStoreContract(Protocol):
    async def insert(self, spot: Spot) -> Spot: ...

    async def find_one(self, *criteria: Any, populate: Sequence[str] = ()) -> Spot | None: ...

    async def find(self, *criteria: Any, populate: Sequence[str] = ()) -> list[Spot]: ...

    async def update_fields(self, spot: Spot, **fields: Any) -> Spot: ...

    async def remove(self, spot: Spot) -> None: ...

    async def populate(self, spot: Spot, paths: Sequence[str]) -> Spot: ...
