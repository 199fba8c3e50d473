from flask import Blueprint, jsonify, make_response

import mpa.mpa_service as mpa_service
from schema.reference_schema import MpaSchema

bp_name = "mpa"
bp_url_prefix = "/mpa"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)


@bp.route("", methods=["GET"])
def getAllMpa():
    return make_response(jsonify(MpaSchema(many=True).dump(mpa_service.getAllMpa())), 200)


@bp.route("/<int:id>", methods=["GET"])
def getMpa(id):
    return make_response(jsonify(MpaSchema().dump(mpa_service.getMpaById(id))), 200)
