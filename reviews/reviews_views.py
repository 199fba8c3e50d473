from flask import Blueprint, jsonify, make_response

from common.utils.utils import get_int_arg, load_request_body
import reviews.reviews_service as reviews_service
from schema.review_schema import ReviewSchema, ReviewUpdateSchema


bp_name = "reviews"
bp_url_prefix = "/reviews"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)

review_schema = ReviewSchema()


@bp.route("", methods=["GET"])
def fetch_reviews():
    film_id = get_int_arg("filmId")
    count = get_int_arg("count", default=10)

    reviews = reviews_service.get_reviews(film_id, count)
    return make_response(jsonify(ReviewSchema(many=True).dump(reviews)), 200)


@bp.route("/<int:review_id>", methods=["GET"])
def fetch_review(review_id):
    review = reviews_service.get_review(review_id)
    return make_response(jsonify(review_schema.dump(review)), 200)


@bp.route("", methods=["POST"])
def create_review():
    review = load_request_body(ReviewSchema())
    created = reviews_service.add_review(review)
    return make_response(jsonify(review_schema.dump(created)), 201)


@bp.route("", methods=["PUT"])
def update_review():
    update = load_request_body(ReviewUpdateSchema())
    updated = reviews_service.update_review(update)
    return make_response(jsonify(review_schema.dump(updated)), 200)


@bp.route("/<int:review_id>", methods=["DELETE"])
def delete_review(review_id):
    reviews_service.delete_review(review_id)
    return make_response(jsonify({}), 200)


@bp.route("/<int:review_id>/like/<int:user_id>", methods=["PUT"])
def add_like(review_id, user_id):
    reviews_service.toggle_reaction(review_id, user_id, is_like=True, value=True)
    return make_response(jsonify({}), 200)


@bp.route("/<int:review_id>/like/<int:user_id>", methods=["DELETE"])
def remove_like(review_id, user_id):
    reviews_service.toggle_reaction(review_id, user_id, is_like=True, value=False)
    return make_response(jsonify({}), 200)


@bp.route("/<int:review_id>/dislike/<int:user_id>", methods=["PUT"])
def add_dislike(review_id, user_id):
    reviews_service.toggle_reaction(review_id, user_id, is_like=False, value=True)
    return make_response(jsonify({}), 200)


@bp.route("/<int:review_id>/dislike/<int:user_id>", methods=["DELETE"])
def remove_dislike(review_id, user_id):
    reviews_service.toggle_reaction(review_id, user_id, is_like=False, value=False)
    return make_response(jsonify({}), 200)
