from marshmallow import EXCLUDE, Schema, fields, post_load

import directors.directors_dao as directors_dao
from directors.model.director import Director
from genres.model.genre import Genre
from mpa.model.mpa import Mpa
from schema.validators import EntityExists, max_name_length, not_blank


class BaseSchema(Schema):
    class Meta:
        unknown = EXCLUDE


class GenreSchema(BaseSchema):
    id = fields.Int(required=True)
    name = fields.Str(allow_none=True)

    @post_load
    def make_genre(self, data, **kwargs):
        return Genre(**data)


class MpaSchema(BaseSchema):
    id = fields.Int(required=True)
    name = fields.Str(allow_none=True)

    @post_load
    def make_mpa(self, data, **kwargs):
        return Mpa(**data)


class DirectorRefSchema(BaseSchema):
    """A director as referenced from a film: only the id is needed."""

    id = fields.Int(required=True)
    name = fields.Str(allow_none=True)

    @post_load
    def make_director(self, data, **kwargs):
        return Director(**data)


class DirectorSchema(BaseSchema):
    id = fields.Int(dump_only=True)
    name = fields.Str(required=True, validate=[not_blank, max_name_length])

    @post_load
    def make_director(self, data, **kwargs):
        return Director(id=data.get("id"), name=data["name"].strip())


class DirectorUpdateSchema(DirectorSchema):
    id = fields.Int(
        required=True,
        validate=EntityExists(
            "director", lambda director_id: directors_dao.directorExists(director_id)
        ),
    )
