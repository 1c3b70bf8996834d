"""Auth service — JWT token management, password hashing and customer registration."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.clock import utcnow
from app.core.exceptions import BusinessRuleViolationException, UnauthorizedException
from app.domain.enums import RoleName
from app.domain.models.customer import Customer
from app.domain.models.user import User
from app.domain.schemas.auth import RegisterRequest
from app.infrastructure.database import transaction
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt", email=email)
        raise UnauthorizedException("Email ou senha incorretos")
    if not user.is_active:
        raise UnauthorizedException("Usuário inativo")
    return user


def issue_token(user: User) -> str:
    # Roles are reloaded from the database on every request, the token only names the user
    return create_access_token({"sub": user.id})


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return SQLAlchemyUserRepository(db).get_by_email(email)


def create_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
) -> User:
    """Add a user row; the caller owns the transaction."""
    repo = SQLAlchemyUserRepository(db)
    if repo.get_by_email(email) is not None:
        raise BusinessRuleViolationException("Email já cadastrado", {"email": "Este email já está em uso."})
    return repo.create({
        "name": name,
        "email": email,
        "password_hash": hash_password(password),
        "phone": phone,
        "created_at": utcnow(),
        "is_active": True,
    })


def register_customer(db: Session, data: RegisterRequest) -> User:
    """Self-registration: user, Cliente role and customer profile together."""
    repo = SQLAlchemyUserRepository(db)
    with transaction(db):
        user = create_user(db, data.name, data.email, data.password, data.phone)
        repo.set_roles(user, [repo.get_or_create_role(RoleName.CLIENTE.value)])
        db.add(Customer(id=user.id))
        repo.flush(user)

    logger.info("Customer registered", user_id=user.id, email=user.email)
    return user
