"""Firestore record store (firebase-admin async client)."""
from __future__ import annotations

import inspect
import logging
from typing import Any, Optional, Sequence

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud.firestore_v1.base_query import FieldFilter

from app.errors import RecordStoreError
from app.store.base import QueryFilter, RecordStore

logger = logging.getLogger(__name__)

_APP_NAME = "analytics-record-store"


class FirestoreRecordStore(RecordStore):
    def __init__(self, client, app: Optional[firebase_admin.App] = None):
        self._client = client
        self._app = app

    @classmethod
    def connect(cls, credentials_path: str, project_id: str = "") -> "FirestoreRecordStore":
        if not credentials_path:
            raise RecordStoreError("FIREBASE_CREDENTIALS_PATH must be set for the firestore backend")
        try:
            cred = credentials.Certificate(credentials_path)
        except (IOError, ValueError) as e:
            raise RecordStoreError(f"Failed to load Firebase credentials: {e}") from e

        options = {"projectId": project_id} if project_id else None
        app = firebase_admin.initialize_app(cred, options, name=_APP_NAME)
        logger.info(f"Connected to Firestore project '{app.project_id}'")
        return cls(firestore_async.client(app), app)

    async def query(
        self,
        collection: str,
        filters: Sequence[QueryFilter],
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        q = self._client.collection(collection)
        for f in filters:
            q = q.where(filter=FieldFilter(f.field, f.operator, f.value))
        if limit:
            q = q.limit(limit)
        return [{"id": snap.id, **snap.to_dict()} async for snap in q.stream()]

    async def write_doc(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        await self._client.collection(collection).document(doc_id).set(dict(data))

    async def read_doc(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        snap = await self._client.collection(collection).document(doc_id).get()
        if not snap.exists:
            return None
        return snap.to_dict()

    async def close(self) -> None:
        logger.info("Releasing Firestore client")
        result = self._client.close()
        if inspect.isawaitable(result):
            await result
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None
