from datetime import datetime
from sqlalchemy import DateTime, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base, utc_now


class User(Base):
    """
    Attributes:
        id: User ID, the identity provider's subject

    Lifetime statistics are only written when a participant finishes:
        best_wpm: never decreases
        average_wpm: rounded running mean over games_played
        average_accuracy: running mean over games_played
    """
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        Text(),
        primary_key=True,
    )
    name: Mapped[str] = mapped_column(Text())
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
    )

    best_wpm: Mapped[int] = mapped_column(Integer(), default=0)
    average_wpm: Mapped[int] = mapped_column(Integer(), default=0)
    average_accuracy: Mapped[float] = mapped_column(Float(), default=0)
    games_played: Mapped[int] = mapped_column(Integer(), default=0)
    games_won: Mapped[int] = mapped_column(Integer(), default=0)

    owned_rooms = relationship(
        "Room",
        back_populates="owner",
        passive_deletes=True,
        uselist=True,
    )
    participants = relationship(
        "Participant",
        back_populates="user",
        passive_deletes=True,
        uselist=True,
    )
    game_results = relationship(
        "GameResult",
        back_populates="user",
        passive_deletes=True,
        uselist=True,
    )
