import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, UnauthorizedError
from app.core.security import authenticate, create_access_token
from app.db.session import get_db
from app.schemas.auth import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email + password for a signed token.

    Unknown email and wrong password both answer 400 so existing clients keep
    working; the message tells them apart.
    """
    try:
        employee = authenticate(db, payload.email, payload.password)
    except (NotFoundError, UnauthorizedError) as exc:
        logger.info("Rejected login for %s: %s", payload.email, exc.detail)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.detail)

    return LoginResponse(
        token=create_access_token(employee),
        email=employee.email,
        department=employee.department,
        employee_id=employee.employee_id,
        manager_id=employee.manager_id,
    )
