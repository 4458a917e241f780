"""
Pydantic models for the wellness inference pipeline.

This module defines the language tags, extracted facts, safety verdicts,
response components and the structured response returned for every turn.
All models are frozen: they are created once per turn and never mutated.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enumerations
# ============================================================================

class Language(str, Enum):
    """Supported conversation languages."""
    EN = "en"
    HI = "hi"
    GU = "gu"


DEFAULT_LANGUAGE = Language.EN


class Gender(str, Enum):
    """Gender as stated by the user; UNKNOWN when nothing was said."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNKNOWN = "unknown"


class SafetyLevel(str, Enum):
    """Three-point severity scale, ordered safe < caution < urgent."""
    SAFE = "safe"
    CAUTION = "caution"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _SAFETY_RANK[self]

    @classmethod
    def most_severe(cls, *levels: "SafetyLevel") -> "SafetyLevel":
        """Return the most severe of the given levels (SAFE when empty)."""
        return max(levels, key=lambda level: level.rank, default=cls.SAFE)


_SAFETY_RANK = {
    SafetyLevel.SAFE: 0,
    SafetyLevel.CAUTION: 1,
    SafetyLevel.URGENT: 2,
}


class Intent(str, Enum):
    """Coarse category of a user request."""
    MEDICAL = "medical"
    NUTRITION = "nutrition"
    FITNESS = "fitness"
    SCHEDULING = "scheduling"
    TRACKING = "tracking"


class Modifier(str, Enum):
    """Refinements of a request that select a template variant."""
    LOW_CARB = "low_carb"
    MORNING = "morning"
    BREAKFAST = "breakfast"
    BARCODE = "barcode"


class ComponentType(str, Enum):
    """Closed set of structured UI blocks."""
    MEAL_SUGGESTION = "meal_suggestion"
    WORKOUT_PLAN = "workout_plan"
    MEDICAL_ADVICE = "medical_advice"
    BARCODE_SCAN = "barcode_scan"
    APPOINTMENT_BOOKING = "appointment_booking"
    WELLNESS_TRACKING = "wellness_tracking"


class ResponseIntent(str, Enum):
    """Overall label of a structured response."""
    SYMPTOM_ASSESSMENT = "symptom_assessment"
    MULTI_INTENT = "multi_intent"
    EMERGENCY = "emergency"
    BARCODE_SCAN = "barcode_scan"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ============================================================================
# Input and context
# ============================================================================

class RawInput(BaseModel):
    """A single user message plus whatever the caller already knows."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Free-text user message")
    language: Language = Field(default=DEFAULT_LANGUAGE, description="Declared language")
    known_age: int | None = Field(default=None, ge=0, le=120, description="Age known from earlier turns")
    known_gender: Gender = Field(default=Gender.UNKNOWN, description="Gender known from earlier turns")
    medical_history: frozenset[str] = Field(
        default_factory=frozenset,
        description="Previously stated medical history"
    )


class HealthContext(BaseModel):
    """
    Session-scoped facts about one user.

    Age and gender are overwritten by newer values; medical history is
    accumulated. Never shared between users.
    """
    model_config = ConfigDict(frozen=True)

    age: int | None = Field(default=None, description="Most recently stated age")
    gender: Gender = Field(default=Gender.UNKNOWN, description="Most recently stated gender")
    medical_history: frozenset[str] = Field(
        default_factory=frozenset,
        description="Accumulated medical history"
    )

    @property
    def has_demographics(self) -> bool:
        return self.age is not None or self.gender != Gender.UNKNOWN


class ExtractedFacts(BaseModel):
    """Facts extracted from one message; language-independent identifiers only."""
    model_config = ConfigDict(frozen=True)

    age: int | None = Field(default=None, ge=0, description="Stated age, None when unknown")
    gender: Gender = Field(default=Gender.UNKNOWN, description="Stated gender")
    symptoms: frozenset[str] = Field(default_factory=frozenset, description="Canonical symptom ids")
    intents: frozenset[Intent] = Field(default_factory=frozenset, description="Detected intents")
    modifiers: frozenset[Modifier] = Field(default_factory=frozenset, description="Request refinements")
    duration_minutes: int | None = Field(default=None, description="Requested duration, e.g. workout")
    raw_text: str = Field(default="", description="Normalized message text")


# ============================================================================
# Safety
# ============================================================================

class EmergencyContact(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Service name")
    number: str = Field(..., description="Number to dial")
    description: str = Field(default="", description="When to use it")


class SafetyVerdict(BaseModel):
    """Outcome of the safety gate for one message."""
    model_config = ConfigDict(frozen=True)

    level: SafetyLevel = Field(default=SafetyLevel.SAFE, description="Most severe level matched")
    matched_patterns: tuple[str, ...] = Field(
        default=(),
        description="Pattern ids that fired, in evaluation order"
    )
    message: str | None = Field(default=None, description="Localized emergency message when urgent")
    contacts: tuple[EmergencyContact, ...] = Field(default=(), description="Emergency contacts when urgent")

    @property
    def is_urgent(self) -> bool:
        return self.level == SafetyLevel.URGENT


# ============================================================================
# Response components (tagged variant on `type`)
# ============================================================================

class Meal(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    category: Literal["breakfast", "lunch", "dinner", "snack"]
    calories: int
    prep_time: str
    difficulty: Literal["easy", "moderate", "advanced"]
    ingredients: tuple[str, ...]
    dietary_tags: tuple[str, ...] = ()
    allergens: tuple[str, ...] = ()


class Exercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    sets: int = 1
    reps: str
    instructions: tuple[str, ...] = ()


class NutritionBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    calories: int
    protein: int
    carbs: int
    fat: int
    fiber: int
    sugar: int
    sodium: int


class ProductInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    brand: str
    barcode: str
    is_healthy: bool
    health_score: int = Field(..., ge=1, le=10)
    nutrition: NutritionBreakdown
    recommendations: tuple[str, ...] = ()
    alternatives: tuple[str, ...] = ()


class AppointmentSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    doctor: str
    specialty: str
    location: str
    day_offset: int = Field(..., ge=1, description="Days from today; no absolute dates in static data")
    time: str
    duration_minutes: int


class TrackingMetric(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    target: str
    unit: str


class _ComponentBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    priority: Priority = Priority.MEDIUM
    actionable: bool = True


class MealSuggestionComponent(_ComponentBase):
    type: Literal[ComponentType.MEAL_SUGGESTION] = ComponentType.MEAL_SUGGESTION
    meals: tuple[Meal, ...] = Field(..., min_length=1)


class WorkoutPlanComponent(_ComponentBase):
    type: Literal[ComponentType.WORKOUT_PLAN] = ComponentType.WORKOUT_PLAN
    exercises: tuple[Exercise, ...] = Field(..., min_length=1)
    duration_minutes: int = Field(..., ge=1)
    difficulty: Literal["beginner", "intermediate", "advanced"] = "beginner"
    equipment: tuple[str, ...] = ("None",)
    calories_burned: int = Field(..., ge=0, description="Fixed per-minute estimate, not measured")


class MedicalAdviceComponent(_ComponentBase):
    type: Literal[ComponentType.MEDICAL_ADVICE] = ComponentType.MEDICAL_ADVICE
    conditions: tuple[str, ...] = Field(..., min_length=1)
    recommendations: tuple[str, ...] = Field(..., min_length=1)
    when_to_seek_help: str
    safety_level: SafetyLevel = SafetyLevel.SAFE


class BarcodeScanComponent(_ComponentBase):
    type: Literal[ComponentType.BARCODE_SCAN] = ComponentType.BARCODE_SCAN
    product: ProductInfo


class AppointmentBookingComponent(_ComponentBase):
    type: Literal[ComponentType.APPOINTMENT_BOOKING] = ComponentType.APPOINTMENT_BOOKING
    slots: tuple[AppointmentSlot, ...] = Field(..., min_length=1)


class WellnessTrackingComponent(_ComponentBase):
    type: Literal[ComponentType.WELLNESS_TRACKING] = ComponentType.WELLNESS_TRACKING
    metrics: tuple[TrackingMetric, ...] = Field(..., min_length=1)


ResponseComponent = Annotated[
    Union[
        MealSuggestionComponent,
        WorkoutPlanComponent,
        MedicalAdviceComponent,
        BarcodeScanComponent,
        AppointmentBookingComponent,
        WellnessTrackingComponent,
    ],
    Field(discriminator="type"),
]


# ============================================================================
# Structured response
# ============================================================================

class StructuredResponse(BaseModel):
    """The complete, immutable answer to one user turn."""
    model_config = ConfigDict(frozen=True)

    intent: ResponseIntent = Field(..., description="Overall response label")
    language: Language = Field(..., description="Language of every string in the payload")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Fixed per-rule display hint")
    safety_level: SafetyLevel = Field(..., description="Most severe level for this turn")
    components: tuple[ResponseComponent, ...] = Field(default=(), description="Structured UI blocks")
    conditions: tuple[str, ...] = Field(default=(), description="Possible conditions")
    advice: tuple[str, ...] = Field(default=(), description="Ordered advice")
    disclaimer: str = Field(..., min_length=1, description="Localized disclaimer")
    summary: str = Field(..., min_length=1, description="Human-readable summary")
    next_steps: tuple[str, ...] = Field(default=(), description="Deduplicated next steps")
    suggestions: tuple[str, ...] = Field(default=(), description="Follow-up suggestion prompts")
    emergency_contacts: tuple[EmergencyContact, ...] = Field(default=(), description="Set when urgent")
    matched_rule_id: str | None = Field(default=None, description="Winning symptom rule, if any")
