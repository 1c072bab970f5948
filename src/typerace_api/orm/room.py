from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..types.enums import Difficulty, RoomStatus
from .base import Base, gen_id, utc_now


class Room(Base):
    """
    A typing race session, joined through its shareable code.

    Attributes:
        code: [A-Z0-9]{10}
        current_players: occupancy, never above max_players
        status: RoomStatus value
        text_content: the passage, fixed at creation
        duration: seconds
    """

    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(Text(), primary_key=True, default=gen_id)
    code: Mapped[str] = mapped_column(String(10), unique=True)
    name: Mapped[str] = mapped_column(Text())
    owner_id: Mapped[str] = mapped_column(
        Text(),
        ForeignKey("users.id", ondelete="CASCADE"),
    )
    max_players: Mapped[int] = mapped_column(Integer())
    current_players: Mapped[int] = mapped_column(Integer(), default=0)
    status: Mapped[str] = mapped_column(Text(), default=RoomStatus.WAITING)
    text_content: Mapped[str] = mapped_column(Text())
    difficulty: Mapped[str] = mapped_column(Text(), default=Difficulty.MEDIUM)
    duration: Mapped[int] = mapped_column(Integer())

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
    )
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    owner = relationship(
        "User",
        foreign_keys=owner_id,
        back_populates="owned_rooms",
    )
    participants = relationship(
        "Participant",
        back_populates="room",
        order_by="Participant.joined_at",
        passive_deletes=True,
        uselist=True,
    )
    game_results = relationship(
        "GameResult",
        back_populates="room",
        passive_deletes=True,
        uselist=True,
    )
