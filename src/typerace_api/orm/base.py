from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def gen_id() -> str:
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(UTC)
