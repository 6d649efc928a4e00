"""Application configuration using Pydantic Settings."""
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RECORD_STORE_BACKENDS = ("mongodb", "firestore")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "School Analytics"
    debug: bool = False
    log_level: str = "INFO"

    # Record store
    record_store_backend: str = "mongodb"  # mongodb | firestore

    # MongoDB
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "school"

    # Firestore
    firebase_credentials_path: str = ""
    firebase_project_id: str = ""

    # JWT (tokens are issued by the main app; we only verify them)
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"

    # Analytics
    attendance_window_days: int = 30  # rolling window is [as_of - N, as_of], inclusive

    # CORS (comma-separated origins)
    cors_origins: str = "http://localhost:5173"

    @model_validator(mode="after")
    def _validate_settings(self):
        if self.record_store_backend not in RECORD_STORE_BACKENDS:
            raise ValueError(
                f"RECORD_STORE_BACKEND must be one of {', '.join(RECORD_STORE_BACKENDS)}, "
                f"got {self.record_store_backend!r}"
            )
        if not self.debug:
            if self.jwt_secret_key in ("change-me-in-production", ""):
                raise ValueError(
                    "JWT_SECRET_KEY must be set to a strong secret when DEBUG is not enabled. "
                    "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
                )
        return self


settings = Settings()
