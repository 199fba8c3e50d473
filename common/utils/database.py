from pathlib import Path
import psycopg

from common.utils.utils import DB_CONFIG
from common.utils.logging_service import logger

SQL_DIR = Path(__file__).resolve().parents[2] / "db"

# schema first; the seed data needs the reference tables
SQL_FILES = ["schema.sql", "data.sql"]


def init_db():
    """Drops and recreates every table, then seeds the MPA and genre tables."""
    with psycopg.connect(**DB_CONFIG) as conn:
        for name in SQL_FILES:
            conn.execute((SQL_DIR / name).read_text())
            logger.info(f"Applied {name}")
