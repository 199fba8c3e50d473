from typing import List

from common.exceptions import NotFoundException, ValidationFailure
from common.utils.logging_service import logger
from common.utils.utils import is_unset
import feed.feed_service as feed_service
from feed.model.event_type import EventType
from feed.model.operation import Operation
from users.user import User, UserUpdate
import users.users_dao as users_dao


def getUserById(id: int) -> User:
    user = users_dao.getUser(id)
    if user is None:
        raise NotFoundException(f"User #{id} not found.")
    return user


def getAllUsers() -> List[User]:
    users = users_dao.getUsers()
    logger.debug(f"Loading {len(users)} users.")
    return users


def isEmailUsed(email: str, exclude_id: int = None) -> bool:
    return users_dao.isEmailUsed(email, exclude_id)


def createUser(user: User) -> User:
    if not user.name or not user.name.strip():
        user.name = user.login

    user_id = users_dao.createUser(user)
    saved = getUserById(user_id)
    logger.debug(f"Creating new user {saved}.")
    return saved


def updateUser(update: UserUpdate) -> User:
    stored = getUserById(update.id)

    merged = User(
        id=stored.id,
        email=stored.email if is_unset(update.email) else update.email,
        login=stored.login if is_unset(update.login) else update.login,
        name=stored.name if is_unset(update.name) else update.name,
        birthday=stored.birthday if is_unset(update.birthday) else update.birthday,
    )
    if not merged.name or not merged.name.strip():
        merged.name = merged.login

    if not users_dao.updateUser(merged):
        raise NotFoundException(f"User #{update.id} not found.")

    saved = getUserById(update.id)
    logger.debug(f"Updating user {saved}.")
    return saved


def deleteUser(id: int):
    if not users_dao.deleteUser(id):
        raise NotFoundException(f"User #{id} not found.")
    logger.debug(f"Deleting user #{id}.")


def addFriend(user_id: int, friend_id: int):
    if user_id == friend_id:
        raise ValidationFailure({"friendId": ["A user cannot add themselves as a friend."]})
    getUserById(user_id)
    getUserById(friend_id)

    if users_dao.addFriend(user_id, friend_id):
        logger.debug(f"User #{user_id} added user #{friend_id} as a friend.")
        feed_service.save_feed(user_id, friend_id, EventType.FRIEND, Operation.ADD)
    else:
        logger.debug(
            f"Attempting to add existing friend #{friend_id} for user #{user_id}."
        )


def removeFriend(user_id: int, friend_id: int):
    getUserById(user_id)
    getUserById(friend_id)

    if users_dao.removeFriend(user_id, friend_id):
        logger.debug(f"User #{user_id} removed user #{friend_id} from friends.")
        feed_service.save_feed(user_id, friend_id, EventType.FRIEND, Operation.REMOVE)
    else:
        logger.debug(
            f"Attempting to remove non-existent friend #{friend_id} for user #{user_id}."
        )


def getFriends(user_id: int) -> List[User]:
    getUserById(user_id)
    return users_dao.getFriends(user_id)


def getCommonFriends(user_id: int, other_id: int) -> List[User]:
    getUserById(user_id)
    getUserById(other_id)
    common = users_dao.getCommonFriends(user_id, other_id)
    logger.debug(f"Users #{user_id} and #{other_id} have {len(common)} common friends.")
    return common
