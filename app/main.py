"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.infrastructure.database import engine, Base, SessionLocal
from app.infrastructure.seed import seed_database
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import AppError, app_error_handler, global_exception_handler

# Import all models so SQLAlchemy knows about them
from app.domain import models  # noqa: F401

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.categories import router as categories_router
from app.interfaces.api.coupons import router as coupons_router
from app.interfaces.api.customers import router as customers_router
from app.interfaces.api.orders import router as orders_router
from app.interfaces.api.payments import router as payments_router
from app.interfaces.api.products import router as products_router
from app.interfaces.api.reviews import router as reviews_router
from app.interfaces.api.users import router as users_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting RyujinBites API...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only — use Alembic in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()

    yield

    logger.info("RyujinBites API stopped")


app = FastAPI(
    title="RyujinBites — Pedidos e Avaliações",
    description="API Backend — cardápio, pedidos, pagamentos, cupons e moderação de avaliações",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (Correlation ID, Logging, CORS)
setup_middleware(app)

# Domain errors become structured bodies; anything else is fatal
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Include routers
app.include_router(auth_router)
app.include_router(categories_router)
app.include_router(products_router)
app.include_router(coupons_router)
app.include_router(orders_router)
app.include_router(payments_router)
app.include_router(reviews_router)
app.include_router(customers_router)
app.include_router(users_router)


@app.get("/")
def root():
    return {
        "name": "RyujinBites",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
