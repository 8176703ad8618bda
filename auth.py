"""Admin authentication.

Credentials are exchanged with Supabase Auth (or checked against a local
bcrypt hash when ADMIN_EMAIL / ADMIN_PASSWORD_HASH are set). A successful
login mints a locally signed JWT; admin routes only check its signature
and expiry.
"""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx
from fastapi import Header, HTTPException
from jose import JWTError, jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# JWT Config
SECRET_KEY = os.getenv("JWT_SECRET", "dev-secret-change")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24  # 24 hours

# Supabase Auth
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
SUPABASE_TIMEOUT = 10.0

# Optional local admin credential
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidCredentials(Exception):
    """Email or password rejected."""

    pass


class AuthServiceUnavailable(Exception):
    """Auth service could not be reached or is not configured."""

    pass


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")


def _get_client() -> httpx.Client:
    """Get a configured httpx client for Supabase Auth."""
    return httpx.Client(base_url=SUPABASE_URL, timeout=SUPABASE_TIMEOUT)


def _supabase_sign_in(email: str, password: str) -> Dict[str, Any]:
    if not SUPABASE_URL or not SUPABASE_ANON_KEY:
        raise AuthServiceUnavailable("SUPABASE_URL and SUPABASE_ANON_KEY are required")

    try:
        with _get_client() as client:
            response = client.post(
                "/auth/v1/token",
                params={"grant_type": "password"},
                headers={"apikey": SUPABASE_ANON_KEY},
                json={"email": email, "password": password},
            )
    except httpx.RequestError as e:
        logger.error("Supabase Auth unavailable: %s", e)
        raise AuthServiceUnavailable(str(e)) from e

    if response.status_code in (400, 401, 422):
        raise InvalidCredentials(email)
    if response.status_code != 200:
        logger.error("Supabase Auth returned %s", response.status_code)
        raise AuthServiceUnavailable(f"Unexpected status {response.status_code}")

    data = response.json()
    if not data.get("access_token"):
        raise InvalidCredentials(email)
    user = data.get("user") or {}
    if not user.get("id"):
        logger.error("Supabase Auth response has no user id")
        raise AuthServiceUnavailable("Auth response missing user id")
    return {"id": str(user["id"]), "email": user.get("email", email)}


def authenticate_admin(email: str, password: str) -> Dict[str, Any]:
    """Exchange admin credentials for a user record.

    Raises InvalidCredentials or AuthServiceUnavailable.
    """
    email = email.lower()
    if ADMIN_EMAIL and ADMIN_PASSWORD_HASH:
        if email != ADMIN_EMAIL.lower() or not verify_password(password, ADMIN_PASSWORD_HASH):
            raise InvalidCredentials(email)
        return {"id": "local-admin", "email": email}
    return _supabase_sign_in(email, password)


def login_admin(email: str, password: str) -> str:
    user = authenticate_admin(email, password)
    return create_access_token({"sub": user["id"], "email": user["email"]})


# Dependency for admin routes

def require_admin(authorization: Optional[str] = Header(default=None)):
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")
    token = authorization.split(" ", 1)[1]
    payload = decode_token(token)
    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")
    return payload


if __name__ == "__main__":
    # Prints a bcrypt hash for ADMIN_PASSWORD_HASH
    import getpass

    print(hash_password(getpass.getpass("Admin password: ")))
