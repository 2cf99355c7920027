from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.session import get_db
from app.models.todo import Todo
from app.schemas.todo import TodoCreate, TodoOut, TodoUpdate

router = APIRouter(prefix="/api/todos", tags=["todos"])


def to_out(t: Todo) -> TodoOut:
    return TodoOut(
        todo_id=t.todo_id,
        user_id=t.user_id,
        title=t.title,
        description=t.description,
        is_completed=t.is_completed,
        created_at=t.created_at,
    )


@router.get("/{user_id}", response_model=list[TodoOut])
def list_todos(user_id: int, db: Session = Depends(get_db)):
    """List a user's todos, newest first."""
    todos = (
        db.query(Todo)
        .filter(Todo.user_id == user_id)
        .order_by(Todo.created_at.desc(), Todo.todo_id.desc())
        .all()
    )
    return [to_out(t) for t in todos]


@router.post("", response_model=TodoOut, status_code=status.HTTP_201_CREATED)
def create_todo(payload: TodoCreate, db: Session = Depends(get_db)):
    # Owner existence is left to the schema's foreign key
    todo = Todo(user_id=payload.user_id, title=payload.title, description=payload.description)
    db.add(todo)
    db.flush()
    db.refresh(todo)
    return to_out(todo)


@router.put("/{todo_id}", response_model=TodoOut)
def update_todo(todo_id: int, payload: TodoUpdate, db: Session = Depends(get_db)):
    """Only the completion flag is mutable."""
    todo = db.get(Todo, todo_id)
    if not todo:
        raise NotFoundError("Todo not found")

    todo.is_completed = payload.is_completed
    db.flush()
    return to_out(todo)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo(todo_id: int, db: Session = Depends(get_db)):
    # No existence check, so deleting twice is fine
    db.query(Todo).filter(Todo.todo_id == todo_id).delete(synchronize_session=False)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
