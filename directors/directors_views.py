from flask import Blueprint, jsonify, make_response

from common.utils.utils import load_request_body
import directors.directors_service as directors_service
from schema.reference_schema import DirectorSchema, DirectorUpdateSchema

bp_name = "directors"
bp_url_prefix = "/directors"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)

director_schema = DirectorSchema()


@bp.route("", methods=["GET"])
def getAllDirectors():
    directors = directors_service.getAllDirectors()
    return make_response(jsonify(DirectorSchema(many=True).dump(directors)), 200)


@bp.route("/<int:id>", methods=["GET"])
def getDirector(id):
    director = directors_service.getDirectorById(id)
    return make_response(jsonify(director_schema.dump(director)), 200)


@bp.route("", methods=["POST"])
def createDirector():
    director = load_request_body(DirectorSchema())
    created = directors_service.createDirector(director)
    return make_response(jsonify(director_schema.dump(created)), 201)


@bp.route("", methods=["PUT"])
def updateDirector():
    director = load_request_body(DirectorUpdateSchema())
    updated = directors_service.updateDirector(director)
    return make_response(jsonify(director_schema.dump(updated)), 200)


@bp.route("/<int:id>", methods=["DELETE"])
def deleteDirector(id):
    directors_service.deleteDirector(id)
    return make_response(jsonify({}), 200)
