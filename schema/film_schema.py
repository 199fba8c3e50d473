from marshmallow import fields, post_load, validate

import films.films_dao as films_dao
from films.model.film import Film, FilmUpdate
from schema.reference_schema import (
    BaseSchema,
    DirectorRefSchema,
    GenreSchema,
    MpaSchema,
)
from schema.validators import (
    EntityExists,
    max_name_length,
    not_before_cinema_birthday,
    not_blank,
)

DESCRIPTION_MAX_LENGTH = 200


class FilmSchema(BaseSchema):
    id = fields.Int(dump_only=True)
    name = fields.Str(required=True, validate=[not_blank, max_name_length])
    description = fields.Str(
        required=True, validate=validate.Length(max=DESCRIPTION_MAX_LENGTH)
    )
    release_date = fields.Date(
        required=True, data_key="releaseDate", validate=not_before_cinema_birthday
    )
    duration = fields.Int(
        required=True, validate=validate.Range(min=1, error="Must be positive.")
    )
    mpa = fields.Nested(MpaSchema, required=True)
    genres = fields.List(fields.Nested(GenreSchema), allow_none=True, load_default=list)
    directors = fields.List(
        fields.Nested(DirectorRefSchema), allow_none=True, load_default=list
    )
    likes = fields.List(fields.Int(), dump_only=True)

    @post_load
    def make_film(self, data, **kwargs):
        data["genres"] = data.get("genres") or []
        data["directors"] = data.get("directors") or []
        return Film(id=None, **data)


class FilmUpdateSchema(BaseSchema):
    """
    Every field but the id is optional; absent fields stay `missing` on the
    resulting FilmUpdate.
    """

    id = fields.Int(
        required=True,
        validate=EntityExists("film", lambda film_id: films_dao.filmExists(film_id)),
    )
    name = fields.Str(allow_none=True, validate=max_name_length)
    description = fields.Str(
        allow_none=True, validate=validate.Length(max=DESCRIPTION_MAX_LENGTH)
    )
    release_date = fields.Date(
        allow_none=True, data_key="releaseDate", validate=not_before_cinema_birthday
    )
    duration = fields.Int(
        allow_none=True, validate=validate.Range(min=1, error="Must be positive.")
    )
    mpa = fields.Nested(MpaSchema, allow_none=True)
    genres = fields.List(fields.Nested(GenreSchema), allow_none=True)
    directors = fields.List(fields.Nested(DirectorRefSchema), allow_none=True)

    @post_load
    def make_film_update(self, data, **kwargs):
        return FilmUpdate(**data)
