from typing import Self

from pydantic import BaseModel, Field

from ..common import ErrorContext
from ..enums import ErrorCode


class SuccessResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    """
    Every failed request answers with this body, whatever the route
    """

    ok: bool = False
    error: ErrorContext = Field(default_factory=ErrorContext)

    @classmethod
    def from_code(cls, code: ErrorCode, message: str = "") -> Self:
        return cls(error=ErrorContext(code=code, message=message))
