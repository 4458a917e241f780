"""
Pydantic models for the static inference rule tables.

Rules carry only language-independent data (symptom ids, safety level,
confidence). Their user-facing strings live in a separate localized table
keyed by rule id.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.wellness_models import Gender, Intent, Modifier, SafetyLevel


class AdviceVariant(BaseModel):
    """Extra advice inserted when the user's age or gender matches."""
    model_config = ConfigDict(frozen=True)

    variant_id: str = Field(..., description="Key of the localized variant text")
    min_age: int | None = Field(default=None, description="Applies when age is strictly greater")
    gender: Gender | None = Field(default=None, description="Applies when gender equals this value")
    position: int = Field(..., ge=0, description="Insert position in the advice list")

    def applies_to(self, age: int | None, gender: Gender) -> bool:
        if self.min_age is not None and (age is None or age <= self.min_age):
            return False
        if self.gender is not None and gender != self.gender:
            return False
        return True


class InferenceRule(BaseModel):
    """A symptom-set pattern mapped to a condition guess."""
    model_config = ConfigDict(frozen=True)

    rule_id: str = Field(..., description="Stable rule id, also the localization key")
    required_symptoms: frozenset[str] = Field(
        default_factory=frozenset,
        description="All of these must be present; empty means fallback"
    )
    safety_level: SafetyLevel = Field(..., description="Safety level attached to this guess")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Fixed display hint")
    variants: tuple[AdviceVariant, ...] = Field(default=(), description="Age/gender conditioned advice")

    @property
    def is_fallback(self) -> bool:
        return not self.required_symptoms

    def matches(self, symptoms: frozenset[str]) -> bool:
        return self.required_symptoms <= symptoms


class RuleText(BaseModel):
    """Localized strings for one rule in one language."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    conditions: tuple[str, ...] = Field(..., min_length=1)
    advice: tuple[str, ...] = Field(..., min_length=1)
    when_to_seek_help: str = Field(..., min_length=1)
    variants: tuple[tuple[str, str], ...] = Field(default=(), description="(variant_id, text) pairs")

    @field_validator("variants", mode="before")
    @classmethod
    def freeze_variants(cls, v):
        if isinstance(v, dict):
            return tuple(v.items())
        return v

    @property
    def variant_ids(self) -> frozenset[str]:
        return frozenset(variant_id for variant_id, _ in self.variants)

    def variant_text(self, variant_id: str) -> str:
        """Localized text of one advice variant; KeyError when this language lacks it."""
        for known_id, text in self.variants:
            if known_id == variant_id:
                return text
        raise KeyError(variant_id)


class MatchResult(BaseModel):
    """A winning rule with its strings resolved for one language and user."""
    model_config = ConfigDict(frozen=True)

    rule: InferenceRule
    title: str
    conditions: tuple[str, ...]
    advice: tuple[str, ...]
    when_to_seek_help: str
    applied_variants: tuple[str, ...] = ()
    localized: bool = Field(default=True, description="False when strings fell back to the default language")


class IntentRule(BaseModel):
    """
    Maps an intent (optionally narrowed by a modifier) to a component template.

    Used on the multi-intent path where several rules can fire in one turn.
    """
    model_config = ConfigDict(frozen=True)

    rule_id: str
    intent: Intent | None = Field(default=None, description="Intent that triggers this rule")
    modifier: Modifier | None = Field(default=None, description="Modifier that must also be present")
    excluded_modifiers: frozenset[Modifier] = Field(default_factory=frozenset)
    template: str = Field(..., description="Key into the component template registry")

    def matches(self, intents: frozenset[Intent], modifiers: frozenset[Modifier]) -> bool:
        if self.intent is not None and self.intent not in intents:
            return False
        if self.modifier is not None and self.modifier not in modifiers:
            return False
        if self.excluded_modifiers & modifiers:
            return False
        return self.intent is not None or self.modifier is not None
