from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.session import get_db
from app.models.assigned_task import AssignedTask
from app.schemas.assigned_task import AssignedTaskOut

router = APIRouter(prefix="/assigned-tasks", tags=["assigned-tasks"])


@router.get("/{employee_id}", response_model=list[AssignedTaskOut])
def list_assigned_tasks(employee_id: int, db: Session = Depends(get_db)):
    tasks = (
        db.query(AssignedTask)
        .filter(AssignedTask.employee_id == employee_id)
        .order_by(AssignedTask.task_id.asc())
        .all()
    )
    if not tasks:
        raise NotFoundError("No assigned tasks")
    return [AssignedTaskOut.model_validate(t, from_attributes=True) for t in tasks]
