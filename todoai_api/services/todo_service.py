"""
PURPOSE: CRUD handlers for todos - validate input, call the store, return API records
SRP and DRY check: Pass - Used by both the REST routes and the intent service, so a model-produced
intent gets exactly the same validation as a direct API call
"""
import logging
from typing import Any, List, Optional

from todoai.errors import ValidationError
from todoai_api.database import MAX_TODO_ID, TodoDatabaseService
from todoai_api.models import TodoResponse

logger = logging.getLogger(__name__)


def _require_task_text(task: Any, message: str) -> str:
    if not isinstance(task, str) or not task.strip():
        raise ValidationError(message)
    return task


def _is_storable_id(todo_id: int) -> bool:
    return -MAX_TODO_ID - 1 <= todo_id <= MAX_TODO_ID


class TodoService:
    def __init__(self, db_service: TodoDatabaseService):
        self.db_service = db_service

    def create(self, task: Any) -> TodoResponse:
        task = _require_task_text(task, "Task description is required")
        todo = self.db_service.insert_todo(task)
        logger.info("Created todo %d", todo.id)
        return TodoResponse.model_validate(todo)

    def list_todos(self) -> List[TodoResponse]:
        return [TodoResponse.model_validate(todo) for todo in self.db_service.list_todos()]

    def update(self, todo_id: int, done: Optional[bool] = None, task: Optional[str] = None) -> List[TodoResponse]:
        """
        Update done and/or task text. There is no existence check: an unknown id
        yields an empty list. With neither field given the todo is returned unchanged.
        """
        update_data: dict[str, Any] = {}
        if done is not None:
            update_data["done"] = done
        if task is not None:
            update_data["task"] = _require_task_text(task, "Task description must not be empty")
        if not _is_storable_id(todo_id):
            logger.info("Update id %d is outside the store range", todo_id)
            return []
        logger.info("Updating todo %d with %r", todo_id, update_data)
        todos = self.db_service.update_todo(todo_id, update_data)
        if not todos:
            logger.info("Update matched no todo with id %d", todo_id)
        return [TodoResponse.model_validate(todo) for todo in todos]

    def delete(self, todo_id: int) -> List[TodoResponse]:
        """Delete the todo. An unknown id is a successful no-op returning an empty list."""
        if not _is_storable_id(todo_id):
            logger.info("Delete id %d is outside the store range", todo_id)
            return []
        todos = self.db_service.delete_todo(todo_id)
        if todos:
            logger.info("Deleted todo %d", todo_id)
        else:
            logger.info("Delete matched no todo with id %d", todo_id)
        return [TodoResponse.model_validate(todo) for todo in todos]
