from dataclasses import dataclass
from logging import getLogger

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..orm.base import utc_now
from ..repositories.game_result import GameResultRepo
from ..repositories.participant import ParticipantRepo
from ..repositories.room import RoomRepo
from ..repositories.user import UserRepo
from ..types.common import ParticipantInfo, as_utc
from ..types.enums import ErrorCode
from ..types.requests.game import FinishGameRequest, ProgressRequest
from .base import ServiceRet

logger = getLogger(__name__)


@dataclass(slots=True)
class FinishGameRet:
    placement: int


class GameService:

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    async def update_progress(
        self,
        user_id: str,
        participant_id: str,
        progress: ProgressRequest,
    ) -> ServiceRet[ParticipantInfo]:
        """
        Overwrite the live metrics, the latest report wins.
        """
        logger.debug(
            "user_id: %s, participant_id: %s, progress: %s",
            user_id,
            participant_id,
            progress.model_dump_json(),
        )

        async with self._sessionmaker() as session:
            repo = ParticipantRepo(session)
            participant = await repo.get(participant_id, lock=True)
            if participant is None:
                logger.warning("participant not found, participant_id: %s", participant_id)
                return ServiceRet.fail(ErrorCode.PARTICIPANT_NOT_FOUND)

            if participant.user_id != user_id:
                logger.warning(
                    "not a participant, participant_id: %s, user_id: %s",
                    participant_id,
                    user_id,
                )
                return ServiceRet.fail(ErrorCode.NOT_A_PARTICIPANT)

            if participant.finished:
                logger.warning("already finished, participant_id: %s", participant_id)
                return ServiceRet.fail(
                    ErrorCode.PARTICIPANT_FINISHED, "Participant already finished"
                )

            participant = await repo.update_progress(
                id=participant_id,
                wpm=progress.wpm,
                accuracy=progress.accuracy,
                progress=progress.progress,
                characters_typed=progress.characters_typed,
                errors=progress.errors,
            )
            assert participant
            data = ParticipantInfo.from_db(participant)

            await session.commit()

        return ServiceRet(ok=True, data=data)

    async def finish_game(
        self,
        user_id: str,
        statistics: FinishGameRequest,
    ) -> ServiceRet[FinishGameRet]:
        """
        on finish, users will send their final statistics to the server
        - placement is decided here, in order of arrival
        - lifetime statistics of the user are updated
        - the room is finished once every participant has finished
        """
        logger.debug(
            "user_id: %s, statistics: %s", user_id, statistics.model_dump_json()
        )
        participant_id = statistics.participant_id

        async with self._sessionmaker() as session:
            participant_repo = ParticipantRepo(session)
            participant = await participant_repo.get(participant_id)
            if participant is None:
                logger.warning("participant not found, participant_id: %s", participant_id)
                return ServiceRet.fail(ErrorCode.PARTICIPANT_NOT_FOUND)

            if participant.user_id != user_id:
                logger.warning(
                    "not a participant, participant_id: %s, user_id: %s",
                    participant_id,
                    user_id,
                )
                return ServiceRet.fail(ErrorCode.NOT_A_PARTICIPANT)

            # finishes in the same room are serialized by the room write lock,
            # placement is counted only after it is held
            room_repo = RoomRepo(session)
            room = await room_repo.touch(participant.room_id)
            assert room

            participant = await participant_repo.get(participant_id, lock=True)
            assert participant
            if participant.finished:
                assert participant.placement is not None
                logger.warning(
                    "already finished, participant_id: %s, placement: %s",
                    participant_id,
                    participant.placement,
                )
                return ServiceRet(
                    ok=True, data=FinishGameRet(placement=participant.placement)
                )

            placement = await participant_repo.count_finished(room.id) + 1
            finished_at = utc_now()
            started_at = as_utc(room.started_at or participant.joined_at)
            duration = max(0, round((finished_at - started_at).total_seconds()))

            await participant_repo.finish(
                id=participant_id,
                final_wpm=statistics.final_wpm,
                final_accuracy=statistics.final_accuracy,
                placement=placement,
                finished_at=finished_at,
            )

            await GameResultRepo(session).create(
                room_id=room.id,
                user_id=participant.user_id,
                wpm=statistics.final_wpm,
                accuracy=statistics.final_accuracy,
                placement=placement,
                characters_typed=participant.characters_typed,
                errors=participant.errors,
                duration=duration,
            )

            user = await UserRepo(session).update_stats(
                id=participant.user_id,
                wpm=statistics.final_wpm,
                accuracy=statistics.final_accuracy,
                won=placement == 1,
            )
            if user is None:
                await session.rollback()
                logger.warning("user not found, user_id: %s", user_id)
                return ServiceRet.fail(ErrorCode.USER_NOT_FOUND)

            if await participant_repo.count_unfinished(room.id) == 0:
                await room_repo.finish(room.id)
                logger.info("room finished, room_id: %s", room.id)

            await session.commit()

        logger.info(
            "participant finished, participant_id: %s, placement: %s",
            participant_id,
            placement,
        )
        return ServiceRet(ok=True, data=FinishGameRet(placement=placement))
