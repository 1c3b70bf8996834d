"""Auth API routes — login, register, me."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.services.auth_service import authenticate_user, issue_token, register_customer
from app.domain.models.user import User
from app.domain.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserRead
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_user

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, body.email, body.password)
    return TokenResponse(
        access_token=issue_token(user),
        user=UserRead.from_user(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    user = register_customer(db, body)
    return TokenResponse(
        access_token=issue_token(user),
        user=UserRead.from_user(user),
    )


@router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    return UserRead.from_user(user)
