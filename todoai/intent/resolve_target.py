"""
Resolve the todo an update or delete intent refers to.

Priority is fixed: explicit id, then position, then a text fragment.
Position and text lookups fetch the current list on every call.
A fractional id or position is still a reference: it matches nothing
rather than falling through to the next rule.
"""
import logging
from typing import Callable, Optional, Protocol, Sequence, Union

from todoai.errors import NotFoundError, ValidationError
from todoai.intent.parsed_intent import ParsedIntent

logger = logging.getLogger(__name__)


class TodoLike(Protocol):
    id: int
    task: str


def index_for_position(position: int, length: int) -> Optional[int]:
    """
    Map a 1-based position to a list index. Zero and negative positions count from the end,
    so -1 is the last item. Returns None when the index falls outside the list.
    """
    index = position - 1 if position > 0 else length + position
    if index < 0 or index >= length:
        return None
    return index


def find_id_by_position(todos: Sequence[TodoLike], position: Union[int, float]) -> int:
    index = index_for_position(position, len(todos)) if isinstance(position, int) else None
    if index is None:
        raise NotFoundError(f"No task found at position {position}")
    return todos[index].id


def find_id_by_partial_task(todos: Sequence[TodoLike], fragment: str) -> int:
    """First todo whose task contains the fragment, compared case-insensitively."""
    needle = fragment.lower()
    for todo in todos:
        if needle in todo.task.lower():
            return todo.id
    raise NotFoundError(f'No task found matching "{fragment}"')


def resolve_target_id(parsed: ParsedIntent, fetch_todos: Callable[[], Sequence[TodoLike]]) -> int:
    if parsed.id is not None:
        if not isinstance(parsed.id, int):
            raise NotFoundError(f"No task found with id {parsed.id}")
        logger.debug("resolve_target_id, by id %d", parsed.id)
        return parsed.id

    if parsed.position is not None:
        todo_id = find_id_by_position(fetch_todos(), parsed.position)
        logger.debug("resolve_target_id, position %s is id %d", parsed.position, todo_id)
        return todo_id

    if parsed.task:
        todo_id = find_id_by_partial_task(fetch_todos(), parsed.task)
        logger.debug("resolve_target_id, text %r is id %d", parsed.task, todo_id)
        return todo_id

    raise ValidationError(f"Need either id, position, or task text for {parsed.intent}")
