"""
Authentication API routes: registration, login and the current user
"""
import logging
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, Field

from .auth import (
    verify_password,
    get_password_hash,
    create_access_token,
    get_current_user,
    ACCESS_TOKEN_EXPIRE_MINUTES
)
from .db.models import User
from .dependencies import get_storage
from .schemas import UserCreate, UserPublic
from .storage import DatabaseStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["authentication"])

MIN_PASSWORD_LENGTH = 8


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3)
    password: str
    email: EmailStr
    name: str = Field(..., min_length=1)
    bio: Optional[str] = None
    profile_image: Optional[str] = Field(None, alias="profileImage")

    model_config = {"populate_by_name": True}


class LoginRequest(BaseModel):
    username: str
    password: str


def _public(user: User) -> dict:
    return UserPublic.model_validate(user).model_dump(mode="json")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, storage: DatabaseStorage = Depends(get_storage)):
    """Register a new user; the username is checked before the email"""
    if storage.users.get_by_username(request.username).unwrap():
        logger.warning(f"Registration failed: username taken - {request.username}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists")

    if storage.users.get_by_email(request.email).unwrap():
        logger.warning(f"Registration failed: email already registered - {request.email}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    if len(request.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    user = storage.users.create(UserCreate(
        username=request.username,
        password=get_password_hash(request.password),
        email=request.email,
        name=request.name,
        bio=request.bio,
        profile_image=request.profile_image,
    ))
    return _public(user)


@router.post("/login")
async def login(request: LoginRequest, storage: DatabaseStorage = Depends(get_storage)):
    """Login with username and password"""
    user = storage.users.get_by_username(request.username).unwrap()
    if user is None or not verify_password(request.password, user.password):
        logger.warning(f"Login failed for username: {request.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if user.is_banned:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is banned")

    # JWT requires 'sub' claim to be a string
    access_token = create_access_token(
        data={"sub": str(user.id)},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return {**_public(user), "access_token": access_token, "token_type": "bearer"}


@router.get("/user")
async def read_current_user(current_user: User = Depends(get_current_user)):
    return _public(current_user)
