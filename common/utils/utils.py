import psutil, os
import time
from typing import Dict
from flask import request
from functools import wraps
from marshmallow import Schema, ValidationError, missing
from psycopg.errors import ForeignKeyViolation, UniqueViolation
from common.exceptions import NotFoundException, ValidationFailure
from common.utils.logging_service import logger
from dotenv import load_dotenv

load_dotenv()


DB_CONFIG: Dict[str, str] = {
    "dbname": os.getenv("POSTGRES_DB", "filmorate"),
    "user": os.getenv("POSTGRES_USER"),
    "password": os.getenv("POSTGRES_PASSWORD"),
    "host": os.getenv("POSTGRES_HOST"),
    "port": os.getenv("POSTGRES_PORT", "5432"),
}


def load_request_body(schema: Schema):
    """
    Validates the JSON body of the current request against `schema` and
    returns the loaded object.

    :raises ValidationFailure: carrying the field-level violations, before
        any entity is built.
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationFailure({"_schema": ["Request body must be a JSON object."]})

    try:
        return schema.load(body)
    except ValidationError as err:
        raise ValidationFailure(err.messages) from err


def is_unset(value) -> bool:
    return value is missing or value is None


def foreign_keys_as_not_found(func):
    """Reports a write referencing a missing row as a not-found error."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ForeignKeyViolation as e:
            detail = e.diag.message_detail or "Referenced entity not found."
            logger.debug(f"{func.__name__} rejected: {detail}")
            raise NotFoundException(detail) from e

    return wrapper


def unique_violation_as_validation_failure(field: str, message: str):
    """Reports a write rejected by a unique index as an invalid `field`."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except UniqueViolation as e:
                logger.debug(f"{func.__name__} rejected: {e.diag.message_primary}")
                raise ValidationFailure({field: [message]}) from e

        return wrapper

    return decorator


def time_it(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        logger.info(f"Starting {func.__name__}")
        start_time = time.time()
        result = func(*args, **kwargs)
        end_time = time.time()
        elapsed_time = end_time - start_time
        logger.info(f"{func.__name__} completed in {elapsed_time:.2f}s")
        logger.info(
            f"Memory usage: {psutil.Process(os.getpid()).memory_info().rss / 1024**2:.2f} MB"
        )

        return result

    return wrapper


def get_int_arg(name: str, default=None, required: bool = False):
    """Reads an integer query parameter of the current request."""
    value = request.args.get(name)
    if value is None or value == "":
        if required:
            raise ValidationFailure({name: ["Missing data for required field."]})
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationFailure({name: ["Not a valid integer."]})
