from datetime import datetime
from pydantic import BaseModel, Field


class TodoCreate(BaseModel):
    user_id: int
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None


class TodoUpdate(BaseModel):
    is_completed: bool


class TodoOut(BaseModel):
    todo_id: int
    user_id: int
    title: str
    description: str | None
    is_completed: bool
    created_at: datetime
