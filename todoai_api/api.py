"""
PURPOSE: FastAPI REST API for TodoAI - CRUD routes over the todos table and the natural-language /ai route
SRP and DRY check: Pass - Single responsibility of HTTP routing, delegates to TodoService and IntentService

PROMPT> python -m todoai_api.api
"""
import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from llama_index.core.llms.llm import LLM

from todoai.errors import TodoAIError
from todoai.llm_util.gemini_llm import GeminiLLM
from todoai_api.config import TodoAIConfig
from todoai_api.database import (
    TodoDatabaseService, create_database_engine, create_session_factory, create_tables, get_database,
)
from todoai_api.models import (
    AIPromptRequest, APIError, CreateTodoRequest, HealthResponse, TodoResponse, UpdateTodoRequest,
)
from todoai_api.services.intent_service import IntentService
from todoai_api.services.todo_service import TodoService

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Loaded once; every component below receives what it needs from here.
todoai_config = TodoAIConfig.load()

app = FastAPI(
    title="TodoAI API",
    description="CRUD over a todos table, plus a natural-language endpoint backed by Gemini",
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(todoai_config.cors_allow_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

engine = create_database_engine(todoai_config.database)
app.state.session_factory = create_session_factory(engine)
app.state.llm = GeminiLLM(
    api_key=todoai_config.gemini.api_key,
    model=todoai_config.gemini.model,
    timeout_seconds=todoai_config.gemini.timeout_seconds,
)

if app.state.llm.is_configured:
    logger.info("[OK] GEMINI_API_KEY: Available")
else:
    logger.warning("[MISSING] GEMINI_API_KEY: Not available, /ai requests will fail")


@app.on_event("startup")
def startup_event():
    """Create the todos table if needed"""
    create_tables(engine)
    logger.info("TodoAI API started")


@app.exception_handler(TodoAIError)
async def todoai_error_handler(request: Request, exc: TodoAIError):
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=APIError(error=exc.message).model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(status_code=400, content=APIError(error="; ".join(messages) or "Invalid request").model_dump())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=APIError(error="Internal server error").model_dump())


def get_todo_service(db: TodoDatabaseService = Depends(get_database)) -> TodoService:
    return TodoService(db)


def get_llm(request: Request) -> LLM:
    return request.app.state.llm


def get_intent_service(
    todo_service: TodoService = Depends(get_todo_service),
    llm: LLM = Depends(get_llm),
) -> IntentService:
    return IntentService(llm=llm, todo_service=todo_service)


@app.get("/health", response_model=HealthResponse)
def health_check(llm: LLM = Depends(get_llm)):
    """Health check endpoint"""
    return HealthResponse(version=API_VERSION, llm_configured=bool(getattr(llm, "is_configured", True)))


@app.post("/todos", response_model=TodoResponse, status_code=201)
def create_todo(request: CreateTodoRequest, todo_service: TodoService = Depends(get_todo_service)):
    """Create a new todo"""
    return todo_service.create(request.task)


@app.get("/todos", response_model=List[TodoResponse])
def list_todos(todo_service: TodoService = Depends(get_todo_service)):
    """List all todos in store order"""
    return todo_service.list_todos()


@app.put("/todos/{todo_id}", response_model=List[TodoResponse])
def update_todo(
    todo_id: int,
    request: Optional[UpdateTodoRequest] = None,
    todo_service: TodoService = Depends(get_todo_service),
):
    """Update done and/or task text. Returns the updated todo in a list, or an empty list for an unknown id."""
    request = request or UpdateTodoRequest()
    return todo_service.update(todo_id, done=request.done, task=request.task)


@app.delete("/todos/{todo_id}", response_model=List[TodoResponse])
def delete_todo(todo_id: int, todo_service: TodoService = Depends(get_todo_service)):
    """Delete a todo. Returns the deleted todo in a list, or an empty list for an unknown id."""
    return todo_service.delete(todo_id)


@app.post("/ai")
def handle_ai_prompt(request: AIPromptRequest, intent_service: IntentService = Depends(get_intent_service)):
    """Resolve a natural-language instruction to one CRUD operation and run it"""
    outcome = intent_service.handle_prompt(request.prompt)
    return JSONResponse(status_code=outcome.status_code, content=jsonable_encoder(outcome.payload))


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(
        level=todoai_config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=todoai_config.port)
