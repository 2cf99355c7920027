from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.session import get_db
from app.models.employee import Employee, EmployeeRole
from app.schemas.employee import DepartmentPeerOut, EmployeeOut

router = APIRouter(prefix="/employees", tags=["employees"])


def display_role(e: Employee) -> str | None:
    # Clients render the department as the role for non-managers
    if e.role == EmployeeRole.MANAGER:
        return "Manager"
    return e.department


def employee_to_out(e: Employee) -> EmployeeOut:
    return EmployeeOut(
        id=e.employee_id,
        name=e.name,
        email=e.email,
        department=e.department,
        phone_number=e.phone_number,
        photo_url=e.photo_url,
        role=display_role(e),
    )


def peer_to_out(e: Employee) -> DepartmentPeerOut:
    return DepartmentPeerOut(
        employee_id=e.employee_id,
        name=e.name,
        manager_id=e.manager_id,
        department=e.department,
        phone_number=e.phone_number,
        photo_url=e.photo_url,
    )


@router.get("", response_model=list[EmployeeOut])
def list_employees(db: Session = Depends(get_db)):
    """List the whole directory."""
    employees = db.query(Employee).order_by(Employee.employee_id.asc()).all()
    return [employee_to_out(e) for e in employees]


@router.get("/{email}", response_model=list[DepartmentPeerOut])
def list_department_peers(email: str, db: Session = Depends(get_db)):
    """
    List everyone in the same department as `email`, the employee included.

    Two round trips: resolve the department, then filter by it.
    """
    department = db.query(Employee.department).filter(Employee.email == email).one_or_none()
    if department is None:
        raise NotFoundError("Employee not found")
    if department[0] is None:
        # No department means no peers, not everyone else without one
        return []

    peers = (
        db.query(Employee)
        .filter(Employee.department == department[0])
        .order_by(Employee.employee_id.asc())
        .all()
    )
    return [peer_to_out(e) for e in peers]
