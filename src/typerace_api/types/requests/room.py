from typing import Annotated

from pydantic import Field, StringConstraints

from ..common import CamelModel
from ..enums import Difficulty

RoomCode = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, to_upper=True, pattern=r"^[A-Za-z0-9]{10}$"
    ),
]


class CreateRoomRequest(CamelModel):
    """
    - duration: seconds
    """

    name: str = Field(min_length=1, max_length=50)
    max_players: int = Field(ge=2, le=10)
    difficulty: Difficulty
    duration: int = Field(ge=60, le=600)


class JoinRoomRequest(CamelModel):
    code: RoomCode
