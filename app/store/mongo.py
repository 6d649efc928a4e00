"""MongoDB record store (Motor)."""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorClient

from app.errors import UnsupportedOperatorError
from app.store.base import QueryFilter, RecordStore

logger = logging.getLogger(__name__)

MONGO_OPERATORS = {
    ">": "$gt",
    ">=": "$gte",
    "<": "$lt",
    "<=": "$lte",
    "in": "$in",
}


def build_mongo_query(filters: Sequence[QueryFilter]) -> dict[str, Any]:
    """Translate AND-ed filters into a Mongo query document.

    Range filters on the same field are merged, e.g. ``date >= a`` and
    ``date <= b`` become ``{"date": {"$gte": a, "$lte": b}}``.
    """
    query: dict[str, Any] = {}
    for f in filters:
        if f.operator == "==":
            clause = {"$eq": f.value}
        elif f.operator in MONGO_OPERATORS:
            value = list(f.value) if f.operator == "in" else f.value
            clause = {MONGO_OPERATORS[f.operator]: value}
        else:
            raise UnsupportedOperatorError(f.operator)
        query.setdefault(f.field, {}).update(clause)

    # Plain equality reads better in logs and uses the same index path
    for field, clause in query.items():
        if list(clause) == ["$eq"]:
            query[field] = clause["$eq"]
    return query


def _from_mongo(doc: dict[str, Any]) -> dict[str, Any]:
    data = dict(doc)
    doc_id = data.pop("_id", None)
    if doc_id is not None:
        data.setdefault("id", str(doc_id))
    return data


class MongoRecordStore(RecordStore):
    def __init__(self, client: AsyncIOMotorClient, db_name: str):
        self._client = client
        self._db = client[db_name]

    @classmethod
    def connect(cls, url: str, db_name: str) -> "MongoRecordStore":
        logger.info(f"Connecting to MongoDB database '{db_name}'")
        return cls(AsyncIOMotorClient(url), db_name)

    async def query(
        self,
        collection: str,
        filters: Sequence[QueryFilter],
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        cursor = self._db[collection].find(build_mongo_query(filters))
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=None)
        return [_from_mongo(d) for d in docs]

    async def write_doc(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        await self._db[collection].replace_one({"_id": doc_id}, dict(data), upsert=True)

    async def read_doc(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        doc = await self._db[collection].find_one({"_id": doc_id})
        if doc is None:
            return None
        data = dict(doc)
        data.pop("_id", None)
        return data

    async def close(self) -> None:
        logger.info("Closing MongoDB connection")
        self._client.close()
