"""
Create all tables directly from the models (local development without Alembic).
Run: python -m mockprep.db.init_db
"""
import logging

from mockprep.db.session import engine
from mockprep.db.base import Base
import mockprep.db.models  # noqa: F401  registers every model on Base.metadata

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create any missing tables on the given engine (defaults to the app engine)."""
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
