# utils/tokenJWT.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from config import settings
from schemas.user import TokenData, UserResponse
from storage import DatabaseStorage, get_storage

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer()

ADMIN_ROLE = "admin"


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


# Sign a token for the given claims; "sub" carries the username
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {**data, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    """Verify signature and expiry, return the claims we rely on."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.info("Rejected token: %s", e)
        raise _unauthorized()

    data = TokenData(username=payload.get("sub"), role=payload.get("role"))
    if not data.username:
        raise _unauthorized()
    return data


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    store: DatabaseStorage = Depends(get_storage),
) -> UserResponse:
    token_data = decode_access_token(credentials.credentials)

    # Role is read from the database, not the token, so demotions apply at once
    user = store.get_user_by_username(token_data.username)
    if user is None:
        raise _unauthorized()
    return user


def role_required(*allowed_roles):
    def _checker(current_user: UserResponse = Depends(get_current_user)) -> UserResponse:
        if allowed_roles and current_user.role not in allowed_roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return current_user
    return _checker


require_admin = role_required(ADMIN_ROLE)
