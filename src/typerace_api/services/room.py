from dataclasses import dataclass
from logging import getLogger

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..lib.util import gen_room_code
from ..repositories.participant import ParticipantRepo
from ..repositories.room import RoomRepo
from ..repositories.user import UserRepo
from ..types.common import ParticipantInfo, ParticipantWithUser, RoomWithParticipants
from ..types.enums import ErrorCode, RoomStatus
from ..types.requests.room import CreateRoomRequest
from ..types.setting import Setting
from .base import ServiceRet

logger = getLogger(__name__)


@dataclass(slots=True)
class JoinRoomRet:
    room: RoomWithParticipants
    participant: ParticipantInfo


class RoomService:
    """
    Room lifecycle: create, join, start, and the enriched room reads.

    Joins are serialized per room by write locking the room row, occupancy
    is increased with a conditional update so it can never pass max_players.
    """

    def __init__(
        self,
        setting: Setting,
        sessionmaker: async_sessionmaker[AsyncSession],
    ) -> None:
        self._setting = setting
        self._sessionmaker = sessionmaker

    async def _gen_unused_code(self, repo: RoomRepo) -> str:
        for _ in range(self._setting.game.code_retry):
            code = gen_room_code()
            if not await repo.code_exists(code):
                return code
            logger.warning("room code collision: %s", code)

        raise RuntimeError(
            f"no unused room code after {self._setting.game.code_retry} attempts"
        )

    async def create_room(
        self,
        owner_id: str,
        owner_name: str,
        request: CreateRoomRequest,
    ) -> ServiceRet[RoomWithParticipants]:
        logger.debug(
            "owner_id: %s, request: %s", owner_id, request.model_dump_json()
        )

        async with self._sessionmaker() as session:
            await UserRepo(session).register(id=owner_id, name=owner_name)

            room_repo = RoomRepo(session)
            room = await room_repo.create(
                code=await self._gen_unused_code(room_repo),
                name=request.name,
                owner_id=owner_id,
                max_players=request.max_players,
                difficulty=request.difficulty,
                duration=request.duration,
                text_content=self._setting.game.passages[request.difficulty],
            )

            room = await room_repo.get_with_participants(room.id)
            assert room
            data = RoomWithParticipants.from_db(room)

            await session.commit()

        logger.info("room created, room_id: %s, code: %s", data.id, data.code)
        return ServiceRet(ok=True, data=data)

    async def join_room(
        self,
        user_id: str,
        username: str,
        code: str,
    ) -> ServiceRet[JoinRoomRet]:
        logger.debug("user_id: %s, code: %s", user_id, code)

        async with self._sessionmaker() as session:
            await UserRepo(session).register(id=user_id, name=username)

            room_repo = RoomRepo(session)
            room = await room_repo.get_by_code(code)
            if room is None:
                logger.warning("room not found, code: %s", code)
                return ServiceRet.fail(ErrorCode.ROOM_NOT_FOUND)

            room = await room_repo.touch(room.id)
            assert room
            room_id = room.id

            if room.status != RoomStatus.WAITING:
                logger.warning(
                    "room not accepting players, room_id: %s, status: %s",
                    room.id,
                    room.status,
                )
                return ServiceRet.fail(
                    ErrorCode.INVALID_ROOM_STATE,
                    "Room is not accepting new players",
                )

            if room.current_players >= room.max_players:
                logger.warning("room is full, room_id: %s", room.id)
                return ServiceRet.fail(ErrorCode.ROOM_FULL, "Room is full")

            participant_repo = ParticipantRepo(session)
            if await participant_repo.get_by_room_and_user(room.id, user_id):
                logger.warning(
                    "already joined, room_id: %s, user_id: %s", room.id, user_id
                )
                return ServiceRet.fail(
                    ErrorCode.ALREADY_JOINED, "Already joined this room"
                )

            try:
                participant = await participant_repo.create(
                    room_id=room.id, user_id=user_id
                )
            except IntegrityError:
                # a concurrent join of the same user won
                await session.rollback()
                logger.warning(
                    "already joined, room_id: %s, user_id: %s", room_id, user_id
                )
                return ServiceRet.fail(
                    ErrorCode.ALREADY_JOINED, "Already joined this room"
                )

            if await room_repo.increase_player_count(room_id) is None:
                await session.rollback()
                logger.warning("room filled up while joining, room_id: %s", room_id)
                return ServiceRet.fail(ErrorCode.ROOM_FULL, "Room is full")

            participant_data = ParticipantInfo.from_db(participant)
            room = await room_repo.get_with_participants(room_id)
            assert room
            room_data = RoomWithParticipants.from_db(room)

            await session.commit()

        logger.info(
            "joined, room_id: %s, user_id: %s, participant_id: %s",
            room_data.id,
            user_id,
            participant_data.id,
        )
        return ServiceRet(
            ok=True, data=JoinRoomRet(room=room_data, participant=participant_data)
        )

    async def get_room_by_code(self, code: str) -> ServiceRet[RoomWithParticipants]:
        logger.debug("code: %s", code)

        async with self._sessionmaker() as session:
            room = await RoomRepo(session).get_with_participants_by_code(code)
            if room is None:
                logger.warning("room not found, code: %s", code)
                return ServiceRet.fail(ErrorCode.ROOM_NOT_FOUND)

            return ServiceRet(ok=True, data=RoomWithParticipants.from_db(room))

    async def get_room_by_id(self, room_id: str) -> ServiceRet[RoomWithParticipants]:
        logger.debug("room_id: %s", room_id)

        async with self._sessionmaker() as session:
            room = await RoomRepo(session).get_with_participants(room_id)
            if room is None:
                logger.warning("room not found, room_id: %s", room_id)
                return ServiceRet.fail(ErrorCode.ROOM_NOT_FOUND)

            return ServiceRet(ok=True, data=RoomWithParticipants.from_db(room))

    async def get_participants(
        self, room_id: str
    ) -> ServiceRet[list[ParticipantWithUser]]:
        """
        participants of the room, ordered by progress in descent
        """
        logger.debug("room_id: %s", room_id)

        async with self._sessionmaker() as session:
            participants = await ParticipantRepo(session).get_room_participants(
                room_id
            )
            return ServiceRet(
                ok=True, data=[ParticipantWithUser.from_db(p) for p in participants]
            )

    async def start_room(
        self, user_id: str, room_id: str
    ) -> ServiceRet[RoomWithParticipants]:
        """
        waiting -> in_progress, owner only
        """
        logger.debug("user_id: %s, room_id: %s", user_id, room_id)

        async with self._sessionmaker() as session:
            room_repo = RoomRepo(session)
            room = await room_repo.get(room_id, lock=True)
            if room is None:
                logger.warning("room not found, room_id: %s", room_id)
                return ServiceRet.fail(ErrorCode.ROOM_NOT_FOUND)

            if room.owner_id != user_id:
                logger.warning(
                    "not the owner, room_id: %s, user_id: %s", room_id, user_id
                )
                return ServiceRet.fail(
                    ErrorCode.NOT_ROOM_OWNER, "Only the owner can start the room"
                )

            if await room_repo.start(room_id) is None:
                logger.warning(
                    "room can not start, room_id: %s, status: %s",
                    room_id,
                    room.status,
                )
                return ServiceRet.fail(
                    ErrorCode.INVALID_ROOM_STATE, "Room has already started"
                )

            room = await room_repo.get_with_participants(room_id)
            assert room
            data = RoomWithParticipants.from_db(room)

            await session.commit()

        logger.info("room started, room_id: %s", room_id)
        return ServiceRet(ok=True, data=data)
