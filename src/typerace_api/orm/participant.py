from datetime import datetime
from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, gen_id, utc_now


class Participant(Base):
    """
    A user's membership in one room (one row per room and user).

    Live metrics are overwritten by every progress report until the
    participant finishes, terminal metrics are written once on finish.
    """

    __tablename__ = "participants"
    __table_args__ = (UniqueConstraint("room_id", "user_id"),)

    id: Mapped[str] = mapped_column(Text(), primary_key=True, default=gen_id)
    room_id: Mapped[str] = mapped_column(
        Text(),
        ForeignKey("rooms.id", ondelete="CASCADE"),
    )
    user_id: Mapped[str] = mapped_column(
        Text(),
        ForeignKey("users.id", ondelete="CASCADE"),
    )

    # live
    current_wpm: Mapped[int] = mapped_column(Integer(), default=0)
    current_accuracy: Mapped[float] = mapped_column(Float(), default=0)
    progress: Mapped[float] = mapped_column(Float(), default=0)
    characters_typed: Mapped[int] = mapped_column(Integer(), default=0)
    errors: Mapped[int] = mapped_column(Integer(), default=0)

    # terminal
    finished: Mapped[bool] = mapped_column(Boolean(), default=False)
    final_wpm: Mapped[int | None] = mapped_column(Integer())
    final_accuracy: Mapped[float | None] = mapped_column(Float())
    placement: Mapped[int | None] = mapped_column(Integer())

    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
    )
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    room = relationship(
        "Room",
        foreign_keys=room_id,
        back_populates="participants",
    )
    user = relationship(
        "User",
        foreign_keys=user_id,
        back_populates="participants",
    )
