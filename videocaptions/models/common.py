from typing import Optional

from pydantic import BaseModel, Field

__all__ = ["ProblemDetail"]


class ProblemDetail(BaseModel):
    type: str = Field(default="about:blank")
    title: str
    status: int
    detail: Optional[str] = None
    instance: Optional[str] = None
