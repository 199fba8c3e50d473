from typing import List, Optional

from common.exceptions import NotFoundException, ValidationFailure
from common.utils.logging_service import logger
from common.utils.utils import is_unset
import feed.feed_service as feed_service
from feed.model.event_type import EventType
from feed.model.operation import Operation
from reviews.review import Review, ReviewUpdate
import reviews.reviews_dao as reviews_dao
import users.users_service as users_service


def get_review(review_id: int) -> Review:
    review = reviews_dao.get_review(review_id)
    if review is None:
        raise NotFoundException(f"Review #{review_id} not found.")
    return review


def get_reviews(film_id: Optional[int] = None, count: int = 10) -> List[Review]:
    """
    Fetches the most useful reviews, optionally for a single film.

    :param film_id: restricts the result to one film when given.
    :param count: maximum number of reviews returned.
    """
    if count <= 0:
        raise ValidationFailure({"count": ["Must be a positive number."]})
    return reviews_dao.get_reviews(film_id, count)


def add_review(review: Review) -> Review:
    review_id = reviews_dao.add_review(review)
    saved = get_review(review_id)
    logger.debug(f"Creating review {saved}.")
    feed_service.save_feed(saved.user_id, review_id, EventType.REVIEW, Operation.ADD)
    return saved


def update_review(update: ReviewUpdate) -> Review:
    stored = get_review(update.review_id)

    content = stored.content if is_unset(update.content) else update.content
    is_positive = (
        stored.is_positive if is_unset(update.is_positive) else update.is_positive
    )

    if not reviews_dao.update_review(stored.review_id, content, is_positive):
        raise NotFoundException(f"Review #{update.review_id} not found.")

    saved = get_review(stored.review_id)
    logger.debug(f"Updating review {saved}.")
    feed_service.save_feed(
        stored.user_id, stored.review_id, EventType.REVIEW, Operation.UPDATE
    )
    return saved


def delete_review(review_id: int):
    stored = get_review(review_id)

    if not reviews_dao.delete_review(review_id):
        raise NotFoundException(f"Review #{review_id} not found.")

    logger.debug(f"Deleting review #{review_id}.")
    feed_service.save_feed(stored.user_id, review_id, EventType.REVIEW, Operation.REMOVE)


def toggle_reaction(review_id: int, user_id: int, is_like: bool, value: bool):
    """
    Adds (value=True) or removes (value=False) a like or dislike of a review.
    Removing a reaction the user never left is a no-op.
    """
    get_review(review_id)
    users_service.getUserById(user_id)

    reaction = "like" if is_like else "dislike"
    if value:
        reviews_dao.set_reaction(review_id, user_id, is_like)
        logger.debug(f"User #{user_id} left a {reaction} on review #{review_id}.")
    elif reviews_dao.delete_reaction(review_id, user_id, is_like):
        logger.debug(f"User #{user_id} removed a {reaction} from review #{review_id}.")
    else:
        logger.debug(
            f"Attempting to remove a non-existent {reaction} of user #{user_id} on review #{review_id}."
        )
