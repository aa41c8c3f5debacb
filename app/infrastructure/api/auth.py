"""Bearer-token authentication — resolves the signed-in user for a request.

Requests without a valid token are served as anonymous (current_user is None);
anonymous users hold no rights, so protected operations fail at the
permission check rather than here.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.adapters.persistence.repositories import SqlUserRepository
from app.config import settings
from app.domain.entities.user import User
from app.infrastructure.api.dependencies import get_user_repo

logger = logging.getLogger(__name__)

ACCESS_TOKEN_EXPIRE = timedelta(hours=12)

security = HTTPBearer(auto_error=False)


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or ACCESS_TOKEN_EXPIRE)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int | None:
    """Return the user id carried by *token*, or None if the token is unusable."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info("Rejected access token: %s", e)
        return None

    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        return None
    return int(sub)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    users: SqlUserRepository = Depends(get_user_repo),
) -> User | None:
    if credentials is None:
        return None
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        return None
    return await users.get_by_id(user_id)
