"""Shared dependencies: bearer JWT verification and service wiring."""
from typing import Annotated, Any, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.config import settings
from app.services.attendance_aggregator import AttendanceAggregator
from app.services.fees_aging import FeesAgingCalculator
from app.store.base import RecordStore

security = HTTPBearer(auto_error=False)


async def get_current_claims(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> dict[str, Any]:
    """Verify the access token issued by the main app and return its claims."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = jwt.decode(
            credentials.credentials, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")
    return payload


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_attendance_aggregator(
    store: Annotated[RecordStore, Depends(get_record_store)],
) -> AttendanceAggregator:
    return AttendanceAggregator(store, window_days=settings.attendance_window_days)


def get_fees_aging(store: Annotated[RecordStore, Depends(get_record_store)]) -> FeesAgingCalculator:
    return FeesAgingCalculator(store)


# Type aliases for route injection
CurrentClaims = Annotated[dict[str, Any], Depends(get_current_claims)]
Aggregator = Annotated[AttendanceAggregator, Depends(get_attendance_aggregator)]
FeesAging = Annotated[FeesAgingCalculator, Depends(get_fees_aging)]
Store = Annotated[RecordStore, Depends(get_record_store)]
