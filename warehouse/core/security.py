from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from warehouse.core.config import JWT_SECRET, JWT_ALGORITHM
from warehouse.schemas.actor import Actor

# auto_error is off so a missing header can be told apart from a bad token
security = HTTPBearer(auto_error=False)


def create_access_token(actor: Actor, expires_in: timedelta = timedelta(hours=24)) -> str:
    """Signs a token carrying the actor identity. Used by seed scripts and tests."""
    payload = {
        "sub": str(actor.id),
        "name": actor.name,
        "role": actor.role,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None


def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Actor:
    """Resolves the caller identity from the bearer token. The core only records it."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")

    return Actor(
        id=str(payload["sub"]),
        name=payload.get("name") or str(payload["sub"]),
        role=payload.get("role") or "staff",
    )
