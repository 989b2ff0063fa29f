from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, Request
from jose import jwt
from splitledger.core.config import settings

ACCESS_TOKEN_TTL = timedelta(hours=1)


def create_access_token(data: dict, expires_delta: timedelta = ACCESS_TOKEN_TTL) -> str:
    """Sign a token in the format ``get_current_user`` accepts; ``sub`` carries the user id.

    Production tokens come from the external identity service. This is for
    tests and local development.
    """
    payload = dict(data)
    payload["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)


def get_bearer_token(request: Request) -> str:
    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing token")
    return auth.split(" ")[1]


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])
    except jwt.ExpiredSignatureError:
        raise HTTPException(401, "Token expired")
    except jwt.JWTError:
        raise HTTPException(401, "Invalid token")
