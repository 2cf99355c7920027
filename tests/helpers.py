from contextlib import contextmanager
from datetime import datetime, date

from sqlalchemy.orm import Session

from app.core.passwords import hash_password
from app.models.assigned_task import AssignedTask
from app.models.employee import Employee, EmployeeRole
from app.models.todo import Todo

DEFAULT_PASSWORD = "s3cret-pass"


def create_employee(
    db: Session,
    email: str,
    name: str = "Employee",
    department: str | None = "Engineering",
    manager_id: int | None = None,
    role: EmployeeRole = EmployeeRole.STAFF,
    password: str = DEFAULT_PASSWORD,
    phone_number: str | None = None,
    photo_url: str | None = None,
) -> Employee:
    e = Employee(
        email=email,
        name=name,
        password=hash_password(password),
        department=department,
        manager_id=manager_id,
        role=role,
        phone_number=phone_number,
        photo_url=photo_url,
    )
    db.add(e)
    db.commit()
    db.refresh(e)
    return e


def create_todo(db: Session, user: Employee, title: str, created_at: datetime | None = None, **kwargs) -> Todo:
    t = Todo(user_id=user.employee_id, title=title, **kwargs)
    if created_at is not None:
        t.created_at = created_at
    db.add(t)
    db.commit()
    db.refresh(t)
    return t


def create_assigned_task(
    db: Session,
    employee: Employee,
    title: str,
    assigned_by: Employee | None = None,
    due_date: date | None = None,
) -> AssignedTask:
    task = AssignedTask(
        employee_id=employee.employee_id,
        assigned_by=assigned_by.employee_id if assigned_by else None,
        title=title,
        due_date=due_date,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def session_factory_for(db: Session):
    """Relay session factory bound to the test session."""
    @contextmanager
    def _factory():
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise

    return _factory
