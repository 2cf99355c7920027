from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, UnauthorizedError
from app.core.passwords import verify_password
from app.db.session import get_db
from app.models.employee import Employee

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(employee: Employee, now: datetime | None = None) -> str:
    """
    Stateless capability token: carries employee_id and manager_id and
    expires after JWT_EXPIRES_MINUTES. There is no server-side revocation.
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "employee_id": employee.employee_id,
        "manager_id": employee.manager_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.JWT_EXPIRES_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token")


def authenticate(db: Session, email: str, password: str) -> Employee:
    employee = db.query(Employee).filter(Employee.email == email).one_or_none()
    if not employee:
        raise NotFoundError("Employee not found")
    if not verify_password(password, employee.password):
        raise UnauthorizedError("Incorrect password")
    return employee


def get_current_employee(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Employee:
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")

    claims = decode_access_token(credentials.credentials)
    employee_id = claims.get("employee_id")
    employee = db.get(Employee, employee_id) if employee_id is not None else None
    if not employee:
        raise UnauthorizedError("Invalid token subject")
    return employee
