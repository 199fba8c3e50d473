from flask import Blueprint, jsonify, make_response

import genres.genres_service as genres_service
from schema.reference_schema import GenreSchema

bp_name = "genres"
bp_url_prefix = "/genres"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)


@bp.route("", methods=["GET"])
def getAllGenres():
    genres = genres_service.getAllGenres()
    return make_response(jsonify(GenreSchema(many=True).dump(genres)), 200)


@bp.route("/<int:id>", methods=["GET"])
def getGenre(id):
    return make_response(jsonify(GenreSchema().dump(genres_service.getGenreById(id))), 200)
