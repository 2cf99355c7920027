from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.message import Message
from app.schemas.message import MessageOut

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("", response_model=list[MessageOut])
def list_messages(db: Session = Depends(get_db)):
    """Full chat history, oldest first. Messages are only written by the relay."""
    messages = (
        db.query(Message)
        .order_by(Message.timestamp.asc(), Message.message_id.asc())
        .all()
    )
    return [MessageOut.model_validate(m, from_attributes=True) for m in messages]
