from pydantic import BaseModel


class EmployeeOut(BaseModel):
    """Directory row; role is "Manager" for managers, otherwise the department."""
    id: int
    name: str
    email: str
    department: str | None
    phone_number: str | None
    photo_url: str | None
    role: str | None


class DepartmentPeerOut(BaseModel):
    employee_id: int
    name: str
    manager_id: int | None
    department: str | None
    phone_number: str | None
    photo_url: str | None


class MeOut(BaseModel):
    employee_id: int
    name: str
    email: str
    department: str | None
    manager_id: int | None
    role: str
