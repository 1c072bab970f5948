from pydantic import BaseModel


class ProgressResponse(BaseModel):
    success: bool = True


class FinishGameResponse(BaseModel):
    placement: int
