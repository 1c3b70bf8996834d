"""Review service: product reviews and their moderation.

Anyone may read reviews. Customers write, edit and delete their own, and may
report someone else's. Administrators moderate reported reviews.
"""

from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from app.application.services.authorization import (
    Actor,
    require_admin,
    require_authenticated_role,
    require_owner_or_admin,
)
from app.core.clock import to_utc_naive, utcnow
from app.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    ForbiddenException,
)
from app.domain.enums import ResolveAction, ReviewStatus
from app.domain.models.review import Review
from app.domain.repositories.review_repository import ReviewRepository
from app.domain.schemas.review import ReviewCreate, ReviewUpdate
from app.infrastructure.database import transaction
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from app.infrastructure.repositories.review_repository import SQLAlchemyReviewRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyCustomerRepository

logger = structlog.get_logger(__name__)


def _load_review(db: Session, review_id: int) -> Review:
    review = SQLAlchemyReviewRepository(db).get_by_id(review_id)
    if review is None:
        raise EntityNotFoundException("Avaliação não encontrada")
    return review


def create_review(db: Session, data: ReviewCreate, actor: Actor) -> Review:
    require_authenticated_role(actor, "create_review")
    if SQLAlchemyProductRepository(db).get_by_id(data.product_id) is None:
        raise EntityNotFoundException("Produto não encontrado")
    if SQLAlchemyCustomerRepository(db).get_by_id(actor.id) is None:
        raise BusinessRuleViolationException(
            "Cliente inexistente", {"customer_id": "Somente clientes podem avaliar produtos."}
        )

    with transaction(db):
        review = SQLAlchemyReviewRepository(db).create({
            "product_id": data.product_id,
            "customer_id": actor.id,
            "score": data.score,
            "comment": data.comment,
            "created_at": utcnow(),
            "is_reported": False,
            "status": ReviewStatus.PENDENTE.value,
        })
    logger.info("Review created", review_id=review.id, product_id=review.product_id, actor_id=actor.id)
    return review


def list_reviews(repo: ReviewRepository, product_id: Optional[int] = None) -> List[Review]:
    return repo.list_filtered(product_id)


def get_review(db: Session, review_id: int) -> Review:
    return _load_review(db, review_id)


def update_review(db: Session, review_id: int, data: ReviewUpdate, actor: Actor) -> Review:
    """Edit score and comment.

    Authorship and creation time only change when an administrator says so.
    """
    repo = SQLAlchemyReviewRepository(db)
    review = _load_review(db, review_id)
    require_owner_or_admin(actor, review.customer_id, "update_review")
    repo.check_version(review, data.version_id)

    changes = data.model_dump(exclude_unset=True, exclude={"version_id"})
    if "score" in changes and changes["score"] is None:
        del changes["score"]
    if not actor.is_admin:
        changes.pop("customer_id", None)
        changes.pop("created_at", None)
    else:
        if not changes.get("customer_id"):
            changes.pop("customer_id", None)
        elif SQLAlchemyCustomerRepository(db).get_by_id(changes["customer_id"]) is None:
            raise BusinessRuleViolationException(
                "Cliente inexistente", {"customer_id": "O cliente informado não existe."}
            )
        if changes.get("created_at") is None:
            changes.pop("created_at", None)
        else:
            changes["created_at"] = to_utc_naive(changes["created_at"])

    with transaction(db):
        review = repo.update(review, changes)
    logger.info("Review updated", review_id=review.id, fields=sorted(changes), actor_id=actor.id)
    return review


def delete_review(db: Session, review_id: int, actor: Actor) -> None:
    repo = SQLAlchemyReviewRepository(db)
    review = _load_review(db, review_id)
    require_owner_or_admin(actor, review.customer_id, "delete_review")

    with transaction(db):
        repo.delete(review)
    logger.info("Review deleted", review_id=review_id, actor_id=actor.id)


def report_review(db: Session, review_id: int, actor: Actor) -> Review:
    """Flag someone else's review for moderation."""
    require_authenticated_role(actor, "report_review")
    repo = SQLAlchemyReviewRepository(db)
    review = _load_review(db, review_id)

    if review.customer_id == actor.id:
        logger.warning("Self-report rejected", review_id=review.id, actor_id=actor.id)
        raise ForbiddenException("Você não pode denunciar sua própria avaliação")
    if review.is_reported:
        raise ForbiddenException("Esta avaliação já foi denunciada")

    with transaction(db):
        review = repo.update(review, {"is_reported": True})
    logger.info("Review reported", review_id=review.id, actor_id=actor.id)
    return review


def list_reported_reviews(repo: ReviewRepository, actor: Actor) -> List[Review]:
    require_admin(actor, "list_reported_reviews")
    return repo.list_reported()


def resolve_review(db: Session, review_id: int, action: ResolveAction, actor: Actor) -> str:
    """Close a report: Remove deletes the review, Keep clears the flag."""
    require_admin(actor, "resolve_review")
    repo = SQLAlchemyReviewRepository(db)
    review = _load_review(db, review_id)
    action = ResolveAction(action)

    with transaction(db):
        if action == ResolveAction.REMOVE:
            repo.delete(review)
            message = "Avaliação removida"
        else:
            repo.update(review, {"is_reported": False})
            message = "Avaliação mantida"
    logger.info("Review report resolved", review_id=review_id, action=action.value, actor_id=actor.id)
    return message


def set_moderation_status(db: Session, review_id: int, status: ReviewStatus, actor: Actor) -> Review:
    require_admin(actor, "set_moderation_status")
    repo = SQLAlchemyReviewRepository(db)
    review = _load_review(db, review_id)
    status = ReviewStatus(status)

    with transaction(db):
        review = repo.update(review, {"status": status.value})
    logger.info("Review moderation status changed", review_id=review.id, status=status.value, actor_id=actor.id)
    return review
