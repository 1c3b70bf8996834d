"""Reviews API routes — public reading, authoring and moderation."""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.services import review_service
from app.application.services.authorization import Actor
from app.domain.repositories.review_repository import ReviewRepository
from app.domain.schemas.review import (
    ActionResult,
    ModerationRequest,
    ResolveRequest,
    ReviewCreate,
    ReviewRead,
    ReviewUpdate,
)
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_actor
from app.interfaces.deps import get_review_repository

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


@router.get("", response_model=List[ReviewRead])
def list_reviews(
    product_id: Optional[int] = None,
    repo: ReviewRepository = Depends(get_review_repository),
):
    return review_service.list_reviews(repo, product_id)


@router.get("/reported", response_model=List[ReviewRead])
def list_reported(
    repo: ReviewRepository = Depends(get_review_repository),
    actor: Actor = Depends(get_current_actor),
):
    return review_service.list_reported_reviews(repo, actor)


@router.get("/{review_id}", response_model=ReviewRead)
def get_review(review_id: int, db: Session = Depends(get_db)):
    return review_service.get_review(db, review_id)


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
def create_review(
    body: ReviewCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return review_service.create_review(db, body, actor)


@router.put("/{review_id}", response_model=ReviewRead)
def update_review(
    review_id: int,
    body: ReviewUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return review_service.update_review(db, review_id, body, actor)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(review_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    review_service.delete_review(db, review_id, actor)


@router.post("/{review_id}/report", response_model=ActionResult)
def report_review(review_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    review_service.report_review(db, review_id, actor)
    return ActionResult(message="Avaliação denunciada")


@router.post("/{review_id}/resolve", response_model=ActionResult)
def resolve_review(
    review_id: int,
    body: ResolveRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    message = review_service.resolve_review(db, review_id, body.action, actor)
    return ActionResult(message=message)


@router.patch("/{review_id}/status", response_model=ReviewRead)
def set_moderation_status(
    review_id: int,
    body: ModerationRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return review_service.set_moderation_status(db, review_id, body.status, actor)
