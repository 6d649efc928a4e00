"""Record store contract shared by the analytics services."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Literal, Optional, Sequence

from pydantic import BaseModel

FilterOperator = Literal["==", ">", ">=", "<", "<=", "in"]


class QueryFilter(BaseModel):
    """One `field <operator> value` predicate. A query AND-s all of its filters."""
    field: str
    operator: FilterOperator
    value: Any


class RecordStore(ABC):
    """Document store over named collections (MongoDB or Firestore)."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Sequence[QueryFilter],
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        ...

    @abstractmethod
    async def write_doc(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Upsert `data` under `doc_id`, replacing whatever was stored there."""

    @abstractmethod
    async def read_doc(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        ...

    async def close(self) -> None:
        return None
