"""Record store adapters and the factory used by the app lifespan."""
from app.config import Settings
from app.store.base import FilterOperator, QueryFilter, RecordStore


def create_record_store(settings: Settings) -> RecordStore:
    """Build the store selected by RECORD_STORE_BACKEND. Called once per process."""
    if settings.record_store_backend == "firestore":
        from app.store.firestore import FirestoreRecordStore

        return FirestoreRecordStore.connect(
            settings.firebase_credentials_path, settings.firebase_project_id
        )

    from app.store.mongo import MongoRecordStore

    return MongoRecordStore.connect(settings.mongodb_url, settings.mongodb_db_name)


__all__ = [
    "FilterOperator",
    "QueryFilter",
    "RecordStore",
    "create_record_store",
]
