"""User administration API routes — accounts, roles and administrators."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.services import user_admin_service
from app.application.services.authorization import Actor
from app.domain.schemas.auth import UserRead
from app.domain.schemas.user import AdministratorRead, AdminUserCreate, AdminUserUpdate
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_actor

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[UserRead])
def list_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return [UserRead.from_user(u) for u in user_admin_service.list_users(db, actor, skip, limit)]


@router.get("/administrators", response_model=List[AdministratorRead])
def list_administrators(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return user_admin_service.list_administrators(db, actor)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return UserRead.from_user(user_admin_service.get_user(db, user_id, actor))


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    body: AdminUserCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return UserRead.from_user(user_admin_service.create_user_with_role(db, body, actor))


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: str,
    body: AdminUserUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return UserRead.from_user(user_admin_service.update_user(db, user_id, body, actor))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    user_admin_service.delete_user(db, user_id, actor)
