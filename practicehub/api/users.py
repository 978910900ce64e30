"""User registration and login routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from practicehub.core.security import hash_password, verify_password
from practicehub.db.models import User
from practicehub.db.session import get_db
from practicehub.schemas.user import AuthResponse, UserCreate, UserLogin, UserRead

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, db: Session = Depends(get_db)):
    """Create a new account. Profile-name format is validated by the schema."""
    if db.query(User.id).filter(User.email == body.email).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )
    if db.query(User.id).filter(User.profile_name == body.profile_name).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Profile name already taken",
        )

    try:
        hashed = hash_password(body.password)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    user = User(
        name=body.name,
        profile_name=body.profile_name,
        email=body.email,
        password=hashed,
        user_type=body.user_type,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User registered: %s", user.email)
    return AuthResponse(message="User registered successfully", user=UserRead.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(body: UserLogin, db: Session = Depends(get_db)):
    """Check credentials and return the user profile.

    Unknown email and wrong password produce the same 401.
    """
    user = db.query(User).filter(User.email == body.email).first()
    if not user or not verify_password(body.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )

    user.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    logger.info("User logged in: %s", user.email)
    return AuthResponse(message="Login successful", user=UserRead.model_validate(user))
