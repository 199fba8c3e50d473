from flask import Blueprint, jsonify, make_response
from werkzeug.exceptions import HTTPException

from common.exceptions import FilmorateException
from common.utils.logging_service import logger

bp = Blueprint("exceptions", __name__)


@bp.app_errorhandler(FilmorateException)
def handle_filmorate_exception(e: FilmorateException):
    logger.warning(f"{type(e).__name__}: {e.message}")
    return make_response(jsonify(e.to_dict()), e.status_code)


@bp.app_errorhandler(HTTPException)
def handle_http_exception(e: HTTPException):
    return make_response(jsonify({"error": e.description}), e.code)


@bp.app_errorhandler(Exception)
def handle_unexpected_exception(e: Exception):
    logger.exception(f"Unexpected error: {e}")
    return make_response(jsonify({"error": "Internal server error"}), 500)
