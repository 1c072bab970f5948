from .base import Base
from .game_result import GameResult
from .participant import Participant
from .room import Room
from .user import User

__all__ = ["Base", "GameResult", "Participant", "Room", "User"]
