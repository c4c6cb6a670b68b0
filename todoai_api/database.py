"""
PURPOSE: Database model and connection for the TodoAI API - persistent storage for the todos table
SRP and DRY check: Pass - Single responsibility of the data persistence layer, every write goes through TodoDatabaseService
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List

from fastapi import Request
from sqlalchemy import Boolean, Column, DateTime, Integer, Text, create_engine
from sqlalchemy.engine import Engine, URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from todoai.errors import StoreError
from todoai_api.config import DatabaseSettings

logger = logging.getLogger(__name__)

Base = declarative_base()

# Integer primary keys are signed 64-bit in both SQLite and Postgres.
MAX_TODO_ID = 2**63 - 1


class Todo(Base):
    """A task with a completion flag"""
    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, index=True)
    task = Column(Text, nullable=False)
    done = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"Todo(id={self.id!r}, task={self.task!r}, done={self.done!r})"


def build_database_url(settings: DatabaseSettings) -> URL:
    """Parse the configured URL and inject the access key as its password when one is set."""
    url = make_url(settings.url)
    if settings.password:
        url = url.set(password=settings.password)
    return url


def create_database_engine(settings: DatabaseSettings) -> Engine:
    url = build_database_url(settings)
    if url.get_backend_name() == "sqlite":
        # SQLite timeout is in seconds, and sessions hop between the threadpool workers.
        engine_kwargs = {"connect_args": {"check_same_thread": False, "timeout": 10.0}}
    else:
        engine_kwargs = {
            "pool_pre_ping": True,
            "pool_recycle": 3600,
            "connect_args": {"connect_timeout": 10},
        }
    logger.info("Connecting to %s database at %s", url.get_backend_name(), url.render_as_string(hide_password=True))
    return create_engine(url, **engine_kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    # Deleted rows stay readable after commit, so delete can return what it removed.
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def create_tables(engine: Engine) -> None:
    """Create the todos table if it does not exist"""
    Base.metadata.create_all(bind=engine)


class TodoDatabaseService:
    """Store operations on the todos table. Backend failures are raised as StoreError."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_operation(self, operation: str) -> Iterator[None]:
        try:
            yield
        except (SQLAlchemyError, OverflowError) as e:
            self.db.rollback()
            logger.error("TodoDatabaseService.%s failed: %s", operation, e)
            raise StoreError(f"Database operation '{operation}' failed") from e

    def insert_todo(self, task: str) -> Todo:
        with self._store_operation("insert_todo"):
            todo = Todo(task=task, done=False)
            self.db.add(todo)
            self.db.commit()
            self.db.refresh(todo)
            return todo

    def list_todos(self) -> List[Todo]:
        with self._store_operation("list_todos"):
            return self.db.query(Todo).order_by(Todo.id).all()

    def update_todo(self, todo_id: int, update_data: dict) -> List[Todo]:
        """Apply update_data to the todo. An unknown id gives an empty list, an empty patch changes nothing."""
        with self._store_operation("update_todo"):
            todo = self.db.query(Todo).filter(Todo.id == todo_id).first()
            if todo is None:
                return []
            for key, value in update_data.items():
                setattr(todo, key, value)
            self.db.commit()
            self.db.refresh(todo)
            return [todo]

    def delete_todo(self, todo_id: int) -> List[Todo]:
        """Delete the todo and return it. Deleting an unknown id is a no-op returning an empty list."""
        with self._store_operation("delete_todo"):
            todo = self.db.query(Todo).filter(Todo.id == todo_id).first()
            if todo is None:
                return []
            self.db.delete(todo)
            self.db.commit()
            return [todo]


def get_database(request: Request) -> Iterator[TodoDatabaseService]:
    """Per-request TodoDatabaseService for dependency injection"""
    db = request.app.state.session_factory()
    try:
        yield TodoDatabaseService(db)
    finally:
        db.close()
