from app.store.firestore import FirestoreRecordStore
from conftest import run


class FakeAsyncClient:
    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True


def test_close_releases_client():
    client = FakeAsyncClient()
    store = FirestoreRecordStore(client)

    run(store.close())

    assert client.closed is True
