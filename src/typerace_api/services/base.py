from typing import Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict

from ..types.common import ErrorContext
from ..types.enums import ErrorCode

T = TypeVar("T")


class ServiceRet(BaseModel, Generic[T]):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    error: ErrorContext | None = None
    data: T | None = None

    @classmethod
    def fail(cls, code: ErrorCode, message: str = "") -> Self:
        return cls(ok=False, error=ErrorContext(code=code, message=message))
