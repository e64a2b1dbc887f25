from typing import Optional

from pydantic import BaseModel
from pyselectx import create_action, to_immutable


# ====== Model Definition ======
class Todo(BaseModel):
    id: str
    message: str
    completed: bool = False


def _prepare_todo(todo_id: str, message: Optional[str] = None, completed: bool = False):
    if isinstance(todo_id, Todo):
        return to_immutable(todo_id)
    return to_immutable(Todo(id=todo_id, message=message or "", completed=completed))


# ====== Actions ======
add_todo = create_action("[Todos] Add Todo", _prepare_todo)
delete_todo = create_action("[Todos] Delete Todo", lambda todo_id: todo_id)
complete_todo = create_action("[Todos] Complete Todo", lambda todo_id: todo_id)
sort_todos = create_action("[Todos] Sort")
