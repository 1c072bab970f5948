from datetime import datetime
from sqlalchemy import DateTime, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, gen_id, utc_now


class GameResult(Base):
    """
    Game result (per user), written once when the participant finishes

    Attributes:
        duration: seconds spent in the race
    """

    __tablename__ = "game_results"

    id: Mapped[str] = mapped_column(Text(), primary_key=True, default=gen_id)
    room_id: Mapped[str] = mapped_column(
        Text(),
        ForeignKey("rooms.id", ondelete="CASCADE"),
    )
    user_id: Mapped[str] = mapped_column(
        Text(),
        ForeignKey("users.id", ondelete="CASCADE"),
    )
    wpm: Mapped[int] = mapped_column(Integer())
    accuracy: Mapped[float] = mapped_column(Float())
    placement: Mapped[int] = mapped_column(Integer())
    characters_typed: Mapped[int] = mapped_column(Integer())
    errors: Mapped[int] = mapped_column(Integer())
    duration: Mapped[int] = mapped_column(Integer())
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
    )

    room = relationship(
        "Room",
        foreign_keys=room_id,
        back_populates="game_results",
    )
    user = relationship(
        "User",
        foreign_keys=user_id,
        back_populates="game_results",
    )
