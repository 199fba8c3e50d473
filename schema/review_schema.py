from marshmallow import fields, post_load

import films.films_dao as films_dao
import users.users_dao as users_dao
from reviews.review import Review, ReviewUpdate
from schema.reference_schema import BaseSchema
from schema.validators import EntityExists, not_blank


class ReviewSchema(BaseSchema):
    review_id = fields.Int(dump_only=True, data_key="reviewId")
    content = fields.Str(required=True, validate=not_blank)
    is_positive = fields.Bool(required=True, data_key="isPositive")
    user_id = fields.Int(
        required=True,
        data_key="userId",
        validate=EntityExists("user", lambda user_id: users_dao.userExists(user_id)),
    )
    film_id = fields.Int(
        required=True,
        data_key="filmId",
        validate=EntityExists("film", lambda film_id: films_dao.filmExists(film_id)),
    )
    useful = fields.Int(dump_only=True)

    @post_load
    def make_review(self, data, **kwargs):
        return Review(review_id=None, **data)


class ReviewUpdateSchema(BaseSchema):
    # author and film cannot be changed, so userId/filmId are ignored here
    review_id = fields.Int(required=True, data_key="reviewId")
    content = fields.Str(allow_none=True, validate=not_blank)
    is_positive = fields.Bool(allow_none=True, data_key="isPositive")

    @post_load
    def make_review_update(self, data, **kwargs):
        return ReviewUpdate(**data)
