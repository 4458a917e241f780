"""
Pydantic models for API request/response validation.

Invalid inputs fail closed with descriptive, field-level error messages.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from models.wellness_models import Gender, Language


class AssistantRequest(BaseModel):
    """
    Request to the wellness assistant.

    Attributes:
        text: The user's message. May be empty; the assistant always answers.
        language: Response language. Defaults to the configured language.
        user_id: Optional ID used to keep age/gender context between turns.
        known_age: Age already known to the caller.
        known_gender: Gender already known to the caller.
        medical_history: Previously stated medical history.
    """
    text: str = Field(default="", max_length=5000, description="User message to the assistant")
    language: Language | None = Field(default=None, description="Response language")
    user_id: str | None = Field(default=None, max_length=128, description="Session owner")
    known_age: int | None = Field(default=None, ge=0, le=120, description="Known age")
    known_gender: Gender = Field(default=Gender.UNKNOWN, description="Known gender")
    medical_history: list[str] = Field(default_factory=list, max_length=50, description="Medical history")

    @field_validator("text")
    @classmethod
    def clean_text(cls, v: str) -> str:
        return v.strip()


class BarcodeRequest(BaseModel):
    """Request to analyse a scanned food product."""
    barcode: str | None = Field(
        default=None,
        pattern=r"^\d{8,14}$",
        description="EAN/UPC digits; omitted for a sample scan"
    )
    language: Language | None = Field(default=None, description="Response language")


class WelcomeResponse(BaseModel):
    """Greeting and example prompts for a new conversation."""
    language: Language = Field(..., description="Language of the strings")
    welcome_message: str = Field(..., description="Welcome message")
    example_prompts: list[str] = Field(default_factory=list, description="Example prompts")
    disclaimer: str = Field(..., description="Localized disclaimer")


class SessionClearedResponse(BaseModel):
    user_id: str
    cleared: bool


class HealthStatus(str, Enum):
    """Possible health check statuses."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """
    Health check response.

    Attributes:
        status: Overall system health status.
        version: Application version.
        environment: Current deployment environment.
        timestamp: When the health check was performed.
        checks: Individual component health checks.
    """
    status: HealthStatus = Field(..., description="Overall health status")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    checks: dict[str, bool] = Field(default_factory=dict, description="Component health checks")


class ErrorResponse(BaseModel):
    """
    Standardized error response.

    Attributes:
        error: Error type/code.
        message: Human-readable error message.
        details: Additional error details, e.g. field-level validation errors.
        request_id: Request ID for tracing.
        timestamp: When the error occurred.
    """
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict | None = Field(default=None, description="Additional details")
    request_id: str | None = Field(default=None, description="Request ID for tracing")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")
