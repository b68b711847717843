from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from shared.core.config import settings
from shared.core.exceptions import UnauthorizedError
from shared.core.schemas import UserToken

security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    """Issue a token the way the auth service does; used by tooling and tests."""
    payload = data.copy()
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    payload["exp"] = expires

    # Ensure "name" exists
    if "name" not in payload and "full_name" in payload:
        payload["name"] = payload["full_name"]

    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        user = UserToken(**payload)
    except (JWTError, PydanticValidationError):
        raise UnauthorizedError("Invalid or expired token")

    if not user.user_id:
        raise UnauthorizedError("Invalid token structure")

    # A token without an organization must carry a uuid user id to scope rows by
    if user.org_id is None:
        try:
            UUID(user.user_id)
        except ValueError:
            raise UnauthorizedError("Invalid token structure")

    return user


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserToken:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return verify_token(credentials.credentials)
