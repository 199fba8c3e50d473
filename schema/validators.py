from datetime import date
from typing import Callable

from marshmallow import ValidationError
from marshmallow.validate import Length, Validator

from common.exceptions import NotFoundException

CINEMA_BIRTHDAY = date(1895, 12, 28)

# VARCHAR(255) columns in db/schema.sql
NAME_MAX_LENGTH = 255
max_name_length = Length(max=NAME_MAX_LENGTH)


def not_blank(value: str):
    if not value or not value.strip():
        raise ValidationError("Must not be blank.")


def no_whitespace(value: str):
    if not value or any(char.isspace() for char in value):
        raise ValidationError("Must not be blank or contain whitespace.")


def not_before_cinema_birthday(value: date):
    if value < CINEMA_BIRTHDAY:
        raise ValidationError(
            f"Must not be earlier than {CINEMA_BIRTHDAY.isoformat()}."
        )


def not_in_future(value: date):
    if value > date.today():
        raise ValidationError("Must not be in the future.")


class EntityExists(Validator):
    """
    Checks that an id refers to a stored row. A missing row is reported as
    not found rather than as a malformed field.
    """

    def __init__(self, entity: str, exists: Callable[[int], bool]):
        self.entity = entity
        self.exists = exists

    def _repr_args(self) -> str:
        return f"entity={self.entity!r}"

    def __call__(self, value: int) -> int:
        if not self.exists(value):
            raise NotFoundException(f"{self.entity.capitalize()} #{value} not found.")
        return value
