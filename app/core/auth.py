# app/core/auth.py
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel, ValidationError

from app.core.config import get_settings

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can answer with our own 401 message.
bearer_scheme = HTTPBearer(auto_error=False)


class TokenClaims(BaseModel):
    """
    Claims carried by a session token.

    Tokens are self-contained: nothing is stored server-side, so a token
    stays valid until `exp` or until JWT_SECRET is rotated.
    """

    id: int
    email: str
    role: str
    exp: int


def create_access_token(
    subject_id: int,
    email: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Sign a session token for an authenticated account.

    Args:
        subject_id: primary key of the account
        email: account email
        role: application role ("admin" for the admin panel)
        expires_delta: lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES (1 day)

    Returns:
        Encoded JWT string.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    expire = datetime.now(timezone.utc) + expires_delta
    claims = {
        "id": subject_id,
        "email": email,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a session token.

    Verification:
      - signature (JWT_SECRET / JWT_ALG)
      - expiration time (exp)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenClaims:
    """
    Resolve the caller from the Authorization header.

    Flow:
      1. No bearer token => 401.
      2. Decode JWT (signature + exp).
      3. Validate the claim set shape.

    Raises:
        HTTPException(401): if the token is missing, invalid, expired
        or lacks required claims.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    payload = decode_access_token(credentials.credentials)

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def require_admin(claims: TokenClaims = Depends(get_token_claims)) -> TokenClaims:
    """
    Enforce admin role.

    Route is accessible only if:
      - the token is valid, and
      - claims.role == "admin"

    Raises:
        HTTPException(403): if role is not admin.
    """
    if claims.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return claims
