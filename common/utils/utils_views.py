from flask import Blueprint, jsonify, make_response
import psycopg

from common.utils.utils import DB_CONFIG
from common.utils.logging_service import logger


bp_name = "utils"
bp = Blueprint(bp_name, __name__)


def check_database() -> bool:
    try:
        with psycopg.connect(**DB_CONFIG, connect_timeout=3):
            return True
    except psycopg.OperationalError as e:
        logger.error(f"Database health check failed: {e}")
        return False


@bp.route("/health", methods=["GET"])
def health_check():
    """Liveness probe; answers 503 while PostgreSQL is unreachable."""
    db_up = check_database()

    return make_response(
        jsonify(
            {
                "status": "ok" if db_up else "degraded",
                "database": "up" if db_up else "down",
            }
        ),
        200 if db_up else 503,
    )
