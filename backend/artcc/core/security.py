"""
Bearer-token authentication.

Tokens are issued by the network OAuth login flow (outside this service)
and carry the controller's CID as `sub`. This module verifies them and
resolves the acting controller for route handlers.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artcc.core.clock import utcnow
from artcc.core.config import get_settings
from artcc.db.session import get_db
from artcc.models.controller import Controller

settings = get_settings()

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_cid(token: str) -> Optional[int]:
    """Return the CID carried by a token, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_cid(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    if credentials is None:
        raise _unauthorized("Not authenticated")
    cid = decode_cid(credentials.credentials)
    if cid is None:
        raise _unauthorized("Could not validate credentials")
    return cid


async def get_current_controller(
    cid: int = Depends(get_current_cid),
    db: AsyncSession = Depends(get_db),
) -> Controller:
    result = await db.execute(select(Controller).where(Controller.cid == cid))
    controller = result.scalar_one_or_none()
    if controller is None:
        raise _unauthorized("Unknown controller")
    return controller


async def get_optional_controller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[Controller]:
    """Acting controller for pages that anonymous visitors may also see."""
    if credentials is None:
        return None
    cid = decode_cid(credentials.credentials)
    if cid is None:
        return None
    result = await db.execute(select(Controller).where(Controller.cid == cid))
    return result.scalar_one_or_none()
