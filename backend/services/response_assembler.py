"""
Response Assembler for the wellness assistant.

Formats matched rule output into an immutable StructuredResponse. Every
response carries a localized disclaimer, a summary, next steps and
follow-up suggestions; components are only included when complete.
"""

from typing import Iterable

from config.logging_config import get_logger
from models.rule_models import MatchResult
from models.wellness_models import (
    BarcodeScanComponent,
    ComponentType,
    ExtractedFacts,
    HealthContext,
    Language,
    MedicalAdviceComponent,
    ResponseComponent,
    ResponseIntent,
    SafetyLevel,
    SafetyVerdict,
    StructuredResponse,
)
from services.component_templates import SAMPLE_PRODUCT, build_component, template_summary
from services.translations import component_next_steps, component_suggestions, translate

logger = get_logger(__name__)


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    """Drop repeats, keeping the first occurrence of each item."""
    return tuple(dict.fromkeys(items))


class ResponseAssembler:
    """Build structured responses for the single, multi, emergency and barcode paths."""

    MULTI_INTENT_CONFIDENCE = 0.95
    BARCODE_CONFIDENCE = 0.98
    EMERGENCY_CONFIDENCE = 1.0

    def assemble_single(
        self,
        match: MatchResult,
        facts: ExtractedFacts,
        verdict: SafetyVerdict,
        language: Language,
        context: HealthContext | None = None,
    ) -> StructuredResponse:
        """Wrap one matched symptom rule into a medical_advice response."""
        component = build_component("medical", facts, language, match)
        suggestions = list(translate("assessment_suggestions", language))
        if context is None or not context.has_demographics:
            suggestions.append(translate("share_demographics", language))

        return StructuredResponse(
            intent=ResponseIntent.SYMPTOM_ASSESSMENT,
            language=language,
            confidence=match.rule.confidence,
            safety_level=SafetyLevel.most_severe(verdict.level, match.rule.safety_level),
            components=(component,),
            conditions=match.conditions,
            advice=match.advice,
            disclaimer=translate("disclaimer", language),
            summary=translate("assessment_summary", language).format(conditions=", ".join(match.conditions)),
            next_steps=translate("assessment_next_steps", language),
            suggestions=_dedupe(suggestions),
            matched_rule_id=match.rule.rule_id,
        )

    def assemble_multi(
        self,
        parts: list[tuple[str, ResponseComponent]],
        verdict: SafetyVerdict,
        language: Language,
        match: MatchResult | None = None,
    ) -> StructuredResponse:
        """
        Aggregate one component per matched intent.

        Args:
            parts: (template name, component) pairs in intent rule order
            verdict: Non-urgent safety verdict for the turn
            language: Response language
            match: Symptom rule match backing the medical component, if any

        Raises:
            ValueError: If no component survived template building
        """
        if not parts:
            raise ValueError("assemble_multi needs at least one component")

        components = tuple(component for _, component in parts)
        summary = " ".join(template_summary(template, language) for template, _ in parts)

        next_steps = _dedupe(
            step for c in components for step in component_next_steps(c.type, language)
        )
        suggestions = _dedupe(
            s for c in components for s in component_suggestions(c.type, language)
        )
        levels = [c.safety_level for c in components if isinstance(c, MedicalAdviceComponent)]
        has_medical = bool(levels)

        return StructuredResponse(
            intent=ResponseIntent.MULTI_INTENT,
            language=language,
            confidence=self.MULTI_INTENT_CONFIDENCE,
            safety_level=SafetyLevel.most_severe(verdict.level, *levels),
            components=components,
            conditions=match.conditions if match and has_medical else (),
            advice=match.advice if match and has_medical else (),
            disclaimer=translate("disclaimer", language),
            summary=summary or translate("multi_default_summary", language),
            next_steps=next_steps,
            suggestions=suggestions,
            matched_rule_id=match.rule.rule_id if match and has_medical else None,
        )

    def assemble_emergency(self, verdict: SafetyVerdict, language: Language) -> StructuredResponse:
        """Fixed urgent payload: no components, no conditions, no advice."""
        number = verdict.contacts[0].number if verdict.contacts else ""
        message = verdict.message or translate("emergency_message", language).format(number=number)
        return StructuredResponse(
            intent=ResponseIntent.EMERGENCY,
            language=language,
            confidence=self.EMERGENCY_CONFIDENCE,
            safety_level=SafetyLevel.URGENT,
            disclaimer=translate("disclaimer", language),
            summary=message,
            next_steps=tuple(step.format(number=number) for step in translate("emergency_actions", language)),
            suggestions=translate("emergency_suggestions", language),
            emergency_contacts=verdict.contacts,
        )

    def assemble_barcode(
        self,
        language: Language,
        barcode: str | None = None,
        verdict: SafetyVerdict | None = None,
    ) -> StructuredResponse:
        """Product analysis from the static sample product."""
        product = SAMPLE_PRODUCT
        if barcode:
            product = product.model_copy(update={"barcode": barcode})

        component = BarcodeScanComponent(
            title=translate("template.barcode.title", language),
            description=translate("template.barcode.description", language),
            product=product,
        )
        return StructuredResponse(
            intent=ResponseIntent.BARCODE_SCAN,
            language=language,
            confidence=self.BARCODE_CONFIDENCE,
            safety_level=verdict.level if verdict else SafetyLevel.SAFE,
            components=(component,),
            disclaimer=translate("disclaimer", language),
            summary=translate("barcode_summary", language),
            next_steps=component_next_steps(ComponentType.BARCODE_SCAN, language),
            suggestions=component_suggestions(ComponentType.BARCODE_SCAN, language),
        )


_assembler_instance: ResponseAssembler | None = None


def get_response_assembler() -> ResponseAssembler:
    """Get the singleton response assembler instance."""
    global _assembler_instance
    if _assembler_instance is None:
        _assembler_instance = ResponseAssembler()
    return _assembler_instance
