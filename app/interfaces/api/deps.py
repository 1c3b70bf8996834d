"""FastAPI dependency — JWT auth and the acting user."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.application.services.auth_service import decode_access_token
from app.application.services.authorization import Actor
from app.core.exceptions import UnauthorizedException
from app.domain.models.user import User
from app.infrastructure.database import get_db
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Extract the user id from the JWT and load the user fresh from the database."""
    if credentials is None:
        raise UnauthorizedException("Token de acesso ausente")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedException("Token inválido ou expirado")

    user_id: Optional[str] = payload.get("sub")
    if user_id is None:
        raise UnauthorizedException("Token inválido")

    user = SQLAlchemyUserRepository(db).get_by_id(user_id)
    if user is None or not user.is_active:
        raise UnauthorizedException("Usuário não encontrado ou inativo")

    return user


def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    return Actor.from_user(user)
