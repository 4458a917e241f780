"""
Pydantic models for user profiles.

Validation happens here, before anything touches the store, so a rejected
profile is never partially written.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

from models.wellness_models import Gender, HealthContext


class UserProfileCreate(BaseModel):
    """
    Request to register a new user profile.

    Attributes:
        name: Display name, required, at most 100 characters.
        email: Unique contact address, stored lower-cased.
        date_of_birth: Optional, may not be in the future.
        gender: Optional, one of male, female or other.
        health_goals: At most 10 entries.
        medical_conditions: At most 20 entries.
        medications: At most 50 entries.
    """
    name: str = Field(..., min_length=1, max_length=100, description="User name")
    email: EmailStr = Field(..., description="Email address")
    date_of_birth: date | None = Field(default=None, description="Date of birth")
    gender: Literal["male", "female", "other"] | None = Field(default=None, description="Gender")
    health_goals: list[str] = Field(default_factory=list, max_length=10, description="Health goals")
    medical_conditions: list[str] = Field(
        default_factory=list,
        max_length=20,
        description="Known medical conditions"
    )
    medications: list[str] = Field(default_factory=list, max_length=50, description="Current medications")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v):
        """Trim whitespace; a blank name counts as missing."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Name is required")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v):
        """Trim and lower-case; EmailStr checks the address itself."""
        if isinstance(v, str):
            v = v.strip().lower()
        return v

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: date | None) -> date | None:
        if v is not None and v > date.today():
            raise ValueError("Date of birth cannot be in the future")
        return v


class UserProfile(UserProfileCreate):
    """A stored user profile."""
    id: str = Field(..., description="User ID")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    def age_on(self, today: date | None = None) -> int | None:
        """Age in whole years, or None when no date of birth is known."""
        if self.date_of_birth is None:
            return None
        today = today or date.today()
        dob = self.date_of_birth
        return today.year - dob.year - ((today.month, today.day) < (dob.month, dob.day))

    def to_health_context(self, today: date | None = None) -> HealthContext:
        """Seed a session context from the stored profile."""
        age = self.age_on(today)
        return HealthContext(
            age=age if age is not None and age <= 120 else None,
            gender=Gender(self.gender) if self.gender else Gender.UNKNOWN,
            medical_history=frozenset(self.medical_conditions),
        )
