from enum import Enum


class EventType(Enum):
    LIKE = "LIKE"
    FRIEND = "FRIEND"
    REVIEW = "REVIEW"
