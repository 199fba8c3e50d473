from flask import Blueprint, jsonify, make_response

from common.utils.utils import load_request_body
import feed.feed_service as feed_service
import films.films_service as films_service
from schema.feed_schema import FeedEventSchema
from schema.film_schema import FilmSchema
from schema.user_schema import UserSchema, UserUpdateSchema
import users.users_service as users_service

bp_name = "users"
bp_url_prefix = "/users"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)

user_schema = UserSchema()
users_schema = UserSchema(many=True)


@bp.route("", methods=["GET"])
def getAllUsers():
    return make_response(jsonify(users_schema.dump(users_service.getAllUsers())), 200)


@bp.route("", methods=["POST"], endpoint="createUser")
def createUser():
    user = load_request_body(UserSchema())
    created = users_service.createUser(user)
    return make_response(jsonify(user_schema.dump(created)), 201)


@bp.route("", methods=["PUT"])
def updateUser():
    update = load_request_body(UserUpdateSchema())
    updated = users_service.updateUser(update)
    return make_response(jsonify(user_schema.dump(updated)), 200)


@bp.route("/<int:id>", methods=["GET"])
def getUser(id):
    return make_response(jsonify(user_schema.dump(users_service.getUserById(id))), 200)


@bp.route("/<int:id>", methods=["DELETE"])
def deleteUser(id):
    users_service.deleteUser(id)
    return make_response(jsonify({}), 200)


@bp.route("/<int:id>/friends/<int:friend_id>", methods=["PUT"])
def addFriend(id, friend_id):
    users_service.addFriend(id, friend_id)
    return make_response(jsonify({}), 200)


@bp.route("/<int:id>/friends/<int:friend_id>", methods=["DELETE"])
def removeFriend(id, friend_id):
    users_service.removeFriend(id, friend_id)
    return make_response(jsonify({}), 200)


@bp.route("/<int:id>/friends", methods=["GET"])
def getFriends(id):
    return make_response(jsonify(users_schema.dump(users_service.getFriends(id))), 200)


@bp.route("/<int:id>/friends/common/<int:other_id>", methods=["GET"])
def getCommonFriends(id, other_id):
    common = users_service.getCommonFriends(id, other_id)
    return make_response(jsonify(users_schema.dump(common)), 200)


@bp.route("/<int:id>/feed", methods=["GET"])
def getFeed(id):
    events = feed_service.get_feed(id)
    return make_response(jsonify(FeedEventSchema(many=True).dump(events)), 200)


@bp.route("/<int:id>/recommendations", methods=["GET"])
def getRecommendations(id):
    films = films_service.getRecommendation(id)
    return make_response(jsonify(FilmSchema(many=True).dump(films)), 200)
