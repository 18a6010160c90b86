"""
Authentication utilities and JWT token handling
"""
import hashlib
import logging
import os
import uuid
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import config
from .db import get_db
from .db.models import User

logger = logging.getLogger(__name__)

# Security configuration
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 120

# Each increment doubles hashing time; tests run with 4
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS
)
http_bearer = HTTPBearer(auto_error=False)


def _bcrypt_input(password: str) -> bytes:
    """Passwords over bcrypt's 72-byte limit are pre-hashed with SHA256"""
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > 72:
        return hashlib.sha256(password_bytes).hexdigest().encode('utf-8')
    return password_bytes


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt"""
    if not password:
        raise ValueError("Password cannot be empty")
    hashed = bcrypt.hashpw(_bcrypt_input(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    if not plain_password or not hashed_password:
        return False

    candidate = _bcrypt_input(plain_password)
    try:
        return pwd_context.verify(candidate.decode('utf-8'), hashed_password)
    except Exception:
        # passlib cannot always drive newer bcrypt releases; check directly
        try:
            if hashed_password.startswith('$2'):
                return bcrypt.checkpw(candidate, hashed_password.encode('utf-8'))
            return False
        except Exception as e:
            logger.warning(f"Password verification failed: {type(e).__name__}")
            return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token

    Args:
        data: Claims to encode (must include 'sub' - user ID as string)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({
        "exp": expire,
        "jti": str(uuid.uuid4()),
        "iat": datetime.utcnow(),
    })
    return jwt.encode(to_encode, config.get_secret_key(), algorithm=ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    """Verify and decode a JWT token"""
    try:
        return jwt.decode(token, config.get_secret_key(), algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Token verification failed: Token has expired")
        return None
    except JWTError as e:
        logger.warning(f"Token verification failed: {type(e).__name__} - {str(e)}")
        return None


def get_auth_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer)
) -> Optional[str]:
    """
    Extract authentication token from Authorization header or cookie.
    Returns None if no token is found.
    """
    if credentials and credentials.credentials:
        return credentials.credentials

    cookie_token = request.cookies.get("auth_token")
    if cookie_token:
        logger.debug("Using token from auth_token cookie")
        return cookie_token
    return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Optional[str] = Depends(get_auth_token),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user from a bearer token or the auth_token cookie"""
    if not token or not token.strip():
        raise _unauthorized("Unauthorized")

    payload = verify_token(token.strip())
    if payload is None:
        raise _unauthorized("Invalid or expired authentication token")

    try:
        user_id = int(payload.get("sub"))
    except (ValueError, TypeError):
        logger.warning(f"Authentication failed: Invalid user ID in token: {payload.get('sub')}")
        raise _unauthorized("Invalid token format: user identifier is not valid")

    user = db.get(User, user_id)
    if user is None:
        logger.warning(f"Authentication failed: User with ID {user_id} not found")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if user.is_banned:
        logger.warning(f"Authentication failed: User {user_id} is banned")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is banned")

    return user
