from marshmallow import ValidationError, fields, post_load, validates, validates_schema

import users.users_dao as users_dao
from users.users_dao import EMAIL_IN_USE
import users.users_service as users_service
from schema.reference_schema import BaseSchema
from schema.validators import (
    EntityExists,
    max_name_length,
    no_whitespace,
    not_in_future,
)
from users.user import User, UserUpdate


class UserSchema(BaseSchema):
    id = fields.Int(dump_only=True)
    email = fields.Email(required=True, validate=max_name_length)
    login = fields.Str(required=True, validate=[no_whitespace, max_name_length])
    name = fields.Str(allow_none=True, load_default=None, validate=max_name_length)
    birthday = fields.Date(required=True, validate=not_in_future)

    @validates("email")
    def validate_email_unused(self, value, **kwargs):
        if users_service.isEmailUsed(value):
            raise ValidationError(EMAIL_IN_USE)

    @post_load
    def make_user(self, data, **kwargs):
        return User(id=None, **data)


class UserUpdateSchema(BaseSchema):
    id = fields.Int(
        required=True,
        validate=EntityExists("user", lambda user_id: users_dao.userExists(user_id)),
    )
    email = fields.Email(allow_none=True, validate=max_name_length)
    login = fields.Str(allow_none=True, validate=[no_whitespace, max_name_length])
    name = fields.Str(allow_none=True, validate=max_name_length)
    birthday = fields.Date(allow_none=True, validate=not_in_future)

    @validates_schema(skip_on_field_errors=True)
    def validate_email_unused(self, data, **kwargs):
        email = data.get("email")
        if email and users_service.isEmailUsed(email, exclude_id=data["id"]):
            raise ValidationError(EMAIL_IN_USE, "email")

    @post_load
    def make_user_update(self, data, **kwargs):
        return UserUpdate(**data)
