from fastapi import APIRouter, Depends

from app.core.security import get_current_employee
from app.models.employee import Employee
from app.schemas.employee import MeOut

router = APIRouter(tags=["auth"])


@router.get("/me", response_model=MeOut)
def me(current_employee: Employee = Depends(get_current_employee)):
    """Get the employee the bearer token was issued for"""
    return MeOut(
        employee_id=current_employee.employee_id,
        name=current_employee.name,
        email=current_employee.email,
        department=current_employee.department,
        manager_id=current_employee.manager_id,
        role=current_employee.role.value,
    )
