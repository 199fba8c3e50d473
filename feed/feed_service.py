from typing import List

from common.utils.logging_service import logger
import feed.feed_dao as feed_dao
from feed.model.event_type import EventType
from feed.model.feed_event import FeedEvent
from feed.model.operation import Operation
from common.exceptions import NotFoundException
import users.users_dao as users_dao


def save_feed(
    user_id: int, entity_id: int, event_type: EventType, operation: Operation
) -> int:
    event_id = feed_dao.add_event(user_id, entity_id, event_type, operation)
    logger.debug(
        f"Feed event #{event_id}: user #{user_id} {operation.value} {event_type.value} #{entity_id}."
    )
    return event_id


def get_feed(user_id: int) -> List[FeedEvent]:
    if not users_dao.userExists(user_id):
        raise NotFoundException(f"User #{user_id} not found.")
    return feed_dao.get_events(user_id)
