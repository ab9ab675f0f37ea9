"""CLI entry point that creates the database schema."""
import logging
import os

from dotenv import load_dotenv

from quotewatch.db.sessions import create_db_engine, init_db

logger = logging.getLogger(__name__)

_DEFAULT_URL = "sqlite:///./quotewatch.db"


def init() -> None:
    """Create the users and favorites tables on DATABASE_URL (idempotent)."""
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)
    engine = create_db_engine(
        os.getenv("DATABASE_URL", _DEFAULT_URL),
        echo=os.getenv("SQL_ECHO", "0") == "1",
    )
    try:
        init_db(engine)
        logger.info("Tables created on %s", engine.url.render_as_string(hide_password=True))
    finally:
        engine.dispose()
