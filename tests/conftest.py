import asyncio
import os

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest  # noqa: E402

from app.store.base import RecordStore  # noqa: E402

_OPS = {
    "==": lambda a, b: a == b,
    ">": lambda a, b: a is not None and a > b,
    ">=": lambda a, b: a is not None and a >= b,
    "<": lambda a, b: a is not None and a < b,
    "<=": lambda a, b: a is not None and a <= b,
    "in": lambda a, b: a in b,
}


class FakeRecordStore(RecordStore):
    """In-memory store that records every call."""

    def __init__(self, collections=None):
        self.collections = {name: dict(docs) for name, docs in (collections or {}).items()}
        self.calls = []
        self.fail_on_query = None
        self.closed = False

    def add(self, collection, doc_id, data):
        self.collections.setdefault(collection, {})[doc_id] = dict(data)

    def add_attendance(self, *records):
        for i, rec in enumerate(records):
            self.add("attendance", f"att-{len(self.collections.get('attendance', {}))}-{i}", rec)

    def writes(self):
        return [c for c in self.calls if c[0] == "write_doc"]

    def queries(self):
        return [c for c in self.calls if c[0] == "query"]

    async def query(self, collection, filters, limit=None):
        self.calls.append(("query", collection, [(f.field, f.operator, f.value) for f in filters]))
        if self.fail_on_query is not None and len(self.queries()) >= self.fail_on_query:
            raise ConnectionError("store unavailable")
        out = []
        for doc_id, doc in self.collections.get(collection, {}).items():
            if all(_OPS[f.operator](doc.get(f.field), f.value) for f in filters):
                out.append({"id": doc_id, **doc})
        return out[:limit] if limit else out

    async def write_doc(self, collection, doc_id, data):
        self.calls.append(("write_doc", collection, doc_id))
        self.add(collection, doc_id, data)

    async def read_doc(self, collection, doc_id):
        self.calls.append(("read_doc", collection, doc_id))
        doc = self.collections.get(collection, {}).get(doc_id)
        return dict(doc) if doc is not None else None

    async def close(self):
        self.closed = True


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def store():
    return FakeRecordStore()
