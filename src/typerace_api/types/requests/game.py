from pydantic import Field

from ..common import CamelModel


class ProgressRequest(CamelModel):
    """
    live metrics, sent periodically while typing
    - progress: percentage of the passage typed
    """

    wpm: int = Field(ge=0)
    accuracy: float = Field(ge=0, le=100)
    progress: float = Field(ge=0, le=100)
    characters_typed: int = Field(ge=0)
    errors: int = Field(ge=0)


class FinishGameRequest(CamelModel):
    participant_id: str = Field(min_length=1)
    final_wpm: int = Field(ge=0)
    final_accuracy: float = Field(ge=0, le=100)
