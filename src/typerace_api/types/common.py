from datetime import UTC, datetime
from typing import Annotated, Self

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..orm.game_result import GameResult
from ..orm.participant import Participant
from ..orm.room import Room
from ..orm.user import User
from .enums import Difficulty, ErrorCode, RoomStatus


def as_utc(inpt: datetime) -> datetime:
    """
    SQLite hands back naive timestamps, they are stored as UTC
    """
    if inpt.tzinfo is None:
        return inpt.replace(tzinfo=UTC)
    return inpt


UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]


class ErrorContext(BaseModel):
    code: ErrorCode = ErrorCode.UNKNOWN_ERROR
    message: str = ""


class CamelModel(BaseModel):
    """
    snake_case in python, camelCase on the wire
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserInfo(CamelModel):
    """
    public profile and lifetime statistics
    """

    id: str
    name: str
    best_wpm: int = 0
    average_wpm: int = 0
    average_accuracy: float = 0
    games_played: int = 0
    games_won: int = 0

    @classmethod
    def from_db(cls, inpt: User) -> Self:
        return cls.model_validate(inpt)


class RoomInfo(CamelModel):
    id: str
    code: str
    name: str
    owner_id: str
    max_players: int
    current_players: int
    status: RoomStatus
    text_content: str
    difficulty: Difficulty
    duration: int
    created_at: UTCDatetime
    started_at: UTCDatetime | None = None
    finished_at: UTCDatetime | None = None

    @classmethod
    def from_db(cls, inpt: Room) -> Self:
        return cls.model_validate(inpt)


class ParticipantInfo(CamelModel):
    id: str
    room_id: str
    user_id: str

    current_wpm: int = 0
    current_accuracy: float = 0
    progress: float = 0
    characters_typed: int = 0
    errors: int = 0

    # populate after finish
    finished: bool = False
    final_wpm: int | None = None
    final_accuracy: float | None = None
    placement: int | None = None

    joined_at: UTCDatetime
    finished_at: UTCDatetime | None = None

    @classmethod
    def from_db(cls, inpt: Participant) -> Self:
        return cls.model_validate(inpt)


class ParticipantWithUser(ParticipantInfo):
    user: UserInfo

    @classmethod
    def from_db(cls, inpt: Participant) -> Self:
        """
        'inpt.user' must be loaded already
        """
        participant = ParticipantInfo.from_db(inpt)
        return cls(**dict(participant), user=UserInfo.from_db(inpt.user))


class RoomWithParticipants(RoomInfo):
    """
    participants are in join order
    """

    owner: UserInfo
    participants: list[ParticipantWithUser] = Field(default_factory=list)

    @classmethod
    def from_db(cls, inpt: Room) -> Self:
        """
        'inpt.owner' and 'inpt.participants[*].user' must be loaded already
        """
        room = RoomInfo.from_db(inpt)
        return cls(
            **dict(room),
            owner=UserInfo.from_db(inpt.owner),
            participants=[ParticipantWithUser.from_db(p) for p in inpt.participants],
        )


class GameResultInfo(CamelModel):
    id: str
    room_id: str
    user_id: str
    wpm: int
    accuracy: float
    placement: int
    characters_typed: int
    errors: int
    duration: int
    created_at: UTCDatetime

    @classmethod
    def from_db(cls, inpt: GameResult) -> Self:
        return cls.model_validate(inpt)
