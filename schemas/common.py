from typing import Optional
from pydantic import BaseModel


class PaginatedResponse(BaseModel):
    count: int
    next: Optional[str]
    previous: Optional[str]
    results: list


class UserBrief(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
