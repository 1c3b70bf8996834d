
import sys
import os

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import structlog

from app.core.logging import configure_logging
from app.domain import models  # noqa: F401
from app.infrastructure.database import Base, SessionLocal, engine
from app.infrastructure.seed import seed_database

logger = structlog.get_logger("init_db")


def init_db():
    """Create the schema and seed roles plus the default administrator."""
    configure_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified", url=engine.url.render_as_string(hide_password=True))

    db = SessionLocal()
    try:
        seed_database(db)
        logger.info("Seed data verified")
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
