"""
PURPOSE: Pydantic models for API request/response schemas - ensures type safety and validation
SRP and DRY check: Pass - Single responsibility of data validation, shared by the CRUD and /ai routes
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateTodoRequest(BaseModel):
    """Request to create a new todo"""
    task: str = Field(..., description="The task description")


class UpdateTodoRequest(BaseModel):
    """Request to update a todo. Omitted fields are left unchanged."""
    done: Optional[bool] = Field(None, description="New completion state")
    task: Optional[str] = Field(None, description="Replacement task description")


class AIPromptRequest(BaseModel):
    """Free-text instruction for the /ai endpoint"""
    prompt: Optional[str] = Field(None, description="Natural-language todo instruction, e.g. 'delete last task'")


class TodoResponse(BaseModel):
    """A todo as stored in the database"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Store-assigned identifier")
    task: str = Field(..., description="Task description")
    done: bool = Field(False, description="Whether the task is completed")
    created_at: Optional[datetime] = Field(None, description="When the todo was created")


class APIError(BaseModel):
    """Standard API error response"""
    error: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """API health check response"""
    status: str = Field("healthy", description="API status")
    version: str = Field(..., description="API version")
    llm_configured: bool = Field(..., description="Whether a Gemini API key is configured")
