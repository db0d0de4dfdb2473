"""Create database tables in the configured database.

Reads DATABASE_URL (or PG* variables) from .env / environment and creates
all registered ORM tables, including the unique constraints that guard the
ticket inventory and the sale ledger.

Usage:
  python scripts/create_tables.py
"""

from __future__ import annotations

import logging
import pathlib

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]

logger = logging.getLogger("create_tables")


def main() -> int:
    """Create all ORM tables in the target database."""

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Imported after the env is loaded; config resolves DATABASE_URL at import.
    from lottery_sales.config import resolve_database_url
    from lottery_sales.db import create_app_engine
    from lottery_sales.models.base import Base

    database_url = resolve_database_url()
    engine = create_app_engine(database_url)
    Base.metadata.create_all(bind=engine)

    logger.info("Tables created (or already exist): %s", ", ".join(sorted(Base.metadata.tables)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
