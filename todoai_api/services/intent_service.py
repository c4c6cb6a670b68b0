"""
PURPOSE: Natural-language front door - ask the model for a structured intent, resolve its target, run the CRUD handler
SRP and DRY check: Pass - Orchestration only; prompt, parsing and target resolution live in todoai.intent
"""
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from llama_index.core.llms.llm import LLM

from todoai.errors import TodoAIError, UpstreamError, ValidationError
from todoai.intent.intent_prompt import build_intent_prompt
from todoai.intent.parsed_intent import IntentEnum, ParsedIntent, parse_intent
from todoai.intent.resolve_target import resolve_target_id
from todoai_api.models import TodoResponse
from todoai_api.services.todo_service import TodoService

logger = logging.getLogger(__name__)


@dataclass
class IntentOutcome:
    """What the resolved CRUD handler produced, with the HTTP status it answers with."""
    intent: IntentEnum
    status_code: int
    payload: Union[TodoResponse, List[TodoResponse]]


class IntentService:
    def __init__(self, llm: LLM, todo_service: TodoService):
        self.llm = llm
        self.todo_service = todo_service

    def handle_prompt(self, prompt: Optional[Any]) -> IntentOutcome:
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValidationError("Prompt is required")
        raw_text = self._generate(build_intent_prompt(prompt))
        parsed = parse_intent(raw_text)
        logger.info("Model resolved prompt to %r", parsed.model_dump(by_alias=True, exclude_none=True))
        return self.dispatch(parsed)

    def _generate(self, prompt: str) -> str:
        try:
            response = self.llm.complete(prompt)
        except TodoAIError:
            raise
        except Exception as e:
            logger.error("IntentService._generate, LLM call failed: %s", e)
            raise UpstreamError("Failed to process AI request") from e
        text = response.text
        if not text or not text.strip():
            raise UpstreamError("No response from Gemini")
        return text

    def dispatch(self, parsed: ParsedIntent) -> IntentOutcome:
        intent = parsed.intent_enum
        if intent == IntentEnum.create:
            if not parsed.task or not parsed.task.strip():
                raise ValidationError("Task description required for create")
            return IntentOutcome(intent, 201, self.todo_service.create(parsed.task))

        if intent == IntentEnum.read:
            return IntentOutcome(intent, 200, self.todo_service.list_todos())

        if intent == IntentEnum.update:
            todo_id = resolve_target_id(parsed, self.todo_service.list_todos)
            todos = self.todo_service.update(todo_id, done=parsed.done, task=parsed.new_task or None)
            return IntentOutcome(intent, 200, todos)

        if intent == IntentEnum.delete:
            todo_id = resolve_target_id(parsed, self.todo_service.list_todos)
            return IntentOutcome(intent, 200, self.todo_service.delete(todo_id))

        logger.warning("Unknown intent from model: %r", parsed.intent)
        raise ValidationError("Unknown intent from AI")
