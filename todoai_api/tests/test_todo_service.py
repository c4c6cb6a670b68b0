import pytest
from sqlalchemy import text

from todoai.errors import StoreError, ValidationError
from todoai_api.services.todo_service import TodoService


@pytest.mark.parametrize("task", ["", "   ", None, 42])
def test_create_rejects_empty_or_non_text_task(db_service, task):
    service = TodoService(db_service)
    with pytest.raises(ValidationError):
        service.create(task)
    assert service.list_todos() == []


def test_create_then_list_defaults_done_to_false(db_service):
    service = TodoService(db_service)

    created = service.create("Buy milk")
    todos = service.list_todos()

    assert created.id is not None
    assert [(todo.id, todo.task, todo.done) for todo in todos] == [(created.id, "Buy milk", False)]


def test_update_done_and_task(db_service, seed):
    milk, book = seed("Buy milk", "Read book")
    service = TodoService(db_service)

    updated = service.update(book.id, done=True, task="Read novel")

    assert len(updated) == 1
    assert updated[0].done is True
    assert updated[0].task == "Read novel"
    untouched = [todo for todo in service.list_todos() if todo.id == milk.id][0]
    assert untouched.done is False


def test_update_unknown_id_returns_empty_list(db_service):
    assert TodoService(db_service).update(999, done=True) == []


def test_update_with_empty_patch_returns_todo_unchanged(db_service, seed):
    (milk,) = seed("Buy milk")
    result = TodoService(db_service).update(milk.id)
    assert [(todo.id, todo.task, todo.done) for todo in result] == [(milk.id, "Buy milk", False)]


def test_update_rejects_empty_replacement_task(db_service, seed):
    (milk,) = seed("Buy milk")
    with pytest.raises(ValidationError):
        TodoService(db_service).update(milk.id, task="")


def test_delete_returns_deleted_todo(db_service, seed):
    milk, book = seed("Buy milk", "Read book")
    service = TodoService(db_service)

    deleted = service.delete(milk.id)

    assert [todo.task for todo in deleted] == ["Buy milk"]
    assert [todo.id for todo in service.list_todos()] == [book.id]


def test_delete_unknown_id_is_a_no_op(db_service, seed):
    seed("Buy milk")
    service = TodoService(db_service)
    assert service.delete(999) == []
    assert len(service.list_todos()) == 1


def test_store_failure_becomes_store_error(db_service):
    db_service.db.execute(text("DROP TABLE todos"))
    db_service.db.commit()

    with pytest.raises(StoreError):
        TodoService(db_service).list_todos()


def test_driver_overflow_becomes_store_error(db_service):
    with pytest.raises(StoreError):
        db_service.delete_todo(2**70)
