"""
Wellness Engine.

Main orchestrator of the per-turn pipeline:
1. Fact extraction (keyword lexicon)
2. Context merge (age/gender/history from earlier turns)
3. Safety gate - URGENT short-circuits everything below
4. Rule table: single symptom rule, or several intent rules
5. Response assembly

Every step is deterministic and synchronous; identical input and context
produce an identical response.
"""

from typing import NamedTuple

from config.logging_config import get_logger
from models.wellness_models import (
    HealthContext,
    Language,
    RawInput,
    StructuredResponse,
)
from services.component_templates import build_component
from services.fact_extractor import FactExtractor, context_from_input, get_fact_extractor, merge_context
from services.response_assembler import ResponseAssembler, get_response_assembler
from services.rule_matcher import RuleMatcher, get_rule_matcher
from services.rule_table import is_multi_intent
from services.safety_classifier import SafetyClassifier, get_safety_classifier

logger = get_logger(__name__)


class EngineResult(NamedTuple):
    """Response for the turn plus the updated session context."""
    response: StructuredResponse
    context: HealthContext


class WellnessEngine:
    """Deterministic wellness assistant pipeline."""

    def __init__(
        self,
        extractor: FactExtractor | None = None,
        classifier: SafetyClassifier | None = None,
        matcher: RuleMatcher | None = None,
        assembler: ResponseAssembler | None = None,
    ):
        self.extractor = extractor or get_fact_extractor()
        self.classifier = classifier or get_safety_classifier()
        self.matcher = matcher or get_rule_matcher()
        self.assembler = assembler or get_response_assembler()

        logger.info("Wellness engine initialized")

    def respond(self, raw: RawInput, context: HealthContext | None = None) -> EngineResult:
        """
        Process one user turn.

        Args:
            raw: The user message and any caller-supplied known facts
            context: Session context from earlier turns, if any

        Returns:
            EngineResult with the structured response and the merged context
        """
        language = raw.language

        # Phase 1: Extract facts and merge into the session context
        facts = self.extractor.extract(raw)
        context = merge_context(context_from_input(raw, context), facts)

        # Phase 2: Safety gate (ALWAYS before any rule)
        verdict = self.classifier.classify(raw.text, facts, language)
        if verdict.is_urgent:
            logger.warning("Returning emergency response", patterns=list(verdict.matched_patterns))
            return EngineResult(self.assembler.assemble_emergency(verdict, language), context)

        # Phase 3: Rule table
        if not is_multi_intent(facts.intents, facts.modifiers):
            match = self.matcher.match(facts, context, language)
            response = self.assembler.assemble_single(match, facts, verdict, language, context)
            return EngineResult(response, context)

        intent_rules = self.matcher.match_intents(facts)
        if [rule.template for rule in intent_rules] == ["barcode"]:
            return EngineResult(self.assembler.assemble_barcode(language, verdict=verdict), context)

        match = None
        parts = []
        for rule in intent_rules:
            if rule.template == "medical":
                match = self.matcher.match(facts, context, language)
            component = build_component(rule.template, facts, language, match)
            if component is not None:
                parts.append((rule.template, component))

        if not parts:
            # Nothing usable on the multi path; generic advice is the floor
            logger.info("No intent components built, falling back to symptom rules")
            match = self.matcher.match(facts, context, language)
            response = self.assembler.assemble_single(match, facts, verdict, language, context)
            return EngineResult(response, context)

        logger.info(
            "Multi-intent response assembled",
            templates=[template for template, _ in parts],
            modifiers=sorted(m.value for m in facts.modifiers),
        )
        response = self.assembler.assemble_multi(parts, verdict, language, match)
        return EngineResult(response, context)

    def scan_barcode(self, barcode: str | None, language: Language) -> StructuredResponse:
        """Product analysis for an explicit barcode scan request."""
        return self.assembler.assemble_barcode(language, barcode=barcode)


_engine_instance: WellnessEngine | None = None


def get_wellness_engine() -> WellnessEngine:
    """Get the singleton wellness engine instance."""
    global _engine_instance
    if _engine_instance is None:
        _engine_instance = WellnessEngine()
    return _engine_instance
