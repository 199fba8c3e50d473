from flask import Blueprint, jsonify, make_response, request

from common.exceptions import ValidationFailure
from common.utils.utils import get_int_arg, load_request_body
import films.films_service as films_service
from films.model.search_field import SearchField
from schema.film_schema import FilmSchema, FilmUpdateSchema

bp_name = "films"
bp_url_prefix = "/films"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)

film_schema = FilmSchema()
films_schema = FilmSchema(many=True)


@bp.route("", methods=["GET"])
def getAllFilms():
    return make_response(jsonify(films_schema.dump(films_service.getAllFilms())), 200)


@bp.route("", methods=["POST"], endpoint="createFilm")
def createFilm():
    film = load_request_body(FilmSchema())
    created = films_service.createFilm(film)
    return make_response(jsonify(film_schema.dump(created)), 201)


@bp.route("", methods=["PUT"])
def updateFilm():
    update = load_request_body(FilmUpdateSchema())
    updated = films_service.updateFilm(update)
    return make_response(jsonify(film_schema.dump(updated)), 200)


@bp.route("/<int:id>", methods=["GET"])
def getFilm(id):
    return make_response(jsonify(film_schema.dump(films_service.getFilmById(id))), 200)


@bp.route("/<int:id>", methods=["DELETE"])
def deleteFilm(id):
    films_service.deleteFilm(id)
    return make_response(jsonify({}), 200)


@bp.route("/<int:id>/like/<int:user_id>", methods=["PUT"])
def addLike(id, user_id):
    films_service.addLike(id, user_id)
    return make_response(jsonify({}), 200)


@bp.route("/<int:id>/like/<int:user_id>", methods=["DELETE"])
def removeLike(id, user_id):
    films_service.removeLike(id, user_id)
    return make_response(jsonify({}), 200)


@bp.route("/popular", methods=["GET"])
def getPopularFilms():
    count = get_int_arg("count", default=10)
    genre_id = get_int_arg("genreId")
    year = get_int_arg("year")

    films = films_service.getPopularFilms(count, genre_id, year)
    return make_response(jsonify(films_schema.dump(films)), 200)


@bp.route("/director/<int:director_id>", methods=["GET"])
def getFilmsByDirector(director_id):
    sort_by = request.args.get("sortBy", "year")
    films = films_service.getFilmsByDirector(director_id, sort_by)
    return make_response(jsonify(films_schema.dump(films)), 200)


@bp.route("/common", methods=["GET"])
def getCommonFilms():
    user_id = get_int_arg("userId", required=True)
    friend_id = get_int_arg("friendId", required=True)

    films = films_service.getCommonFilms(user_id, friend_id)
    return make_response(jsonify(films_schema.dump(films)), 200)


@bp.route("/search", methods=["GET"])
def searchFilms():
    query = request.args.get("query")
    if query is None:
        raise ValidationFailure({"query": ["Missing data for required field."]})
    by = request.args.get("by", SearchField.TITLE.value)

    films = films_service.searchFilm(query, by)
    return make_response(jsonify(films_schema.dump(films)), 200)
