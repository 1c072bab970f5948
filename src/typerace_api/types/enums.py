from enum import StrEnum


class ErrorCode(StrEnum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    STORE_ERROR = "STORE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_TOKEN = "INVALID_TOKEN"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    PARTICIPANT_NOT_FOUND = "PARTICIPANT_NOT_FOUND"
    INVALID_ROOM_STATE = "INVALID_ROOM_STATE"
    ROOM_FULL = "ROOM_FULL"
    ALREADY_JOINED = "ALREADY_JOINED"
    NOT_ROOM_OWNER = "NOT_ROOM_OWNER"
    NOT_A_PARTICIPANT = "NOT_A_PARTICIPANT"
    PARTICIPANT_FINISHED = "PARTICIPANT_FINISHED"


class CookieNames(StrEnum):
    ACCESS_TOKEN = "TP_AT"


class RoomStatus(StrEnum):
    """
    Only moves forward: WAITING -> IN_PROGRESS -> FINISHED
    """

    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"
