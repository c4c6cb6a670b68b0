"""
Structured intent returned by the model, and the parser that produces it.

Fields with the wrong JSON type are treated as absent, the same way a
missing field is. A string "3" is not an id.
"""
import json
import logging
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from todoai.errors import ParseError
from todoai.llm_util.json_fence import strip_json_fence

logger = logging.getLogger(__name__)


class IntentEnum(str, Enum):
    create = "create"
    read = "read"
    update = "update"
    delete = "delete"


def _as_number(value: Any) -> Optional[Union[int, float]]:
    # bool is a subclass of int, and true/false are never ids.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # Fractional values stay set; resolve_target rejects them.
        return int(value) if value.is_integer() else value
    return None


class ParsedIntent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    intent: Optional[str] = Field(None, description="One of create, read, update, delete")
    task: Optional[str] = Field(None, description="Task text for create, or a text fragment identifying the target")
    new_task: Optional[str] = Field(None, alias="newTask", description="Replacement task text for update")
    id: Optional[Union[int, float]] = Field(None, description="Exact id of the target todo")
    position: Optional[Union[int, float]] = Field(None, description="1-based position, negative counts from the end")
    done: Optional[bool] = Field(None, description="New completion state for update")

    @field_validator("id", "position", mode="before")
    @classmethod
    def _numbers_only(cls, value: Any) -> Optional[Union[int, float]]:
        return _as_number(value)

    @field_validator("intent", "task", "new_task", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("done", mode="before")
    @classmethod
    def _booleans_only(cls, value: Any) -> Optional[bool]:
        return value if isinstance(value, bool) else None

    @property
    def intent_enum(self) -> Optional[IntentEnum]:
        try:
            return IntentEnum(self.intent)
        except ValueError:
            return None


def parse_intent(raw_text: str) -> ParsedIntent:
    """Strip code fences from the model output and parse it into a ParsedIntent."""
    cleaned = strip_json_fence(raw_text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning("parse_intent, invalid JSON: %s", e)
        raise ParseError("Failed to parse Gemini response as JSON") from e
    if not isinstance(data, dict):
        logger.warning("parse_intent, expected a JSON object, got %s", type(data).__name__)
        raise ParseError("Gemini response is not a JSON object")
    return ParsedIntent.model_validate(data)
