from datetime import date, datetime
from pydantic import BaseModel


class AssignedTaskOut(BaseModel):
    task_id: int
    employee_id: int
    assigned_by: int | None
    title: str
    description: str | None
    status: str
    due_date: date | None
    created_at: datetime
