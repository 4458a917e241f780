"""Tests for structured response assembly."""

import pytest

from models.wellness_models import (
    ComponentType,
    ExtractedFacts,
    HealthContext,
    Language,
    ResponseIntent,
    SafetyLevel,
    SafetyVerdict,
)
from services.component_templates import SAMPLE_PRODUCT, build_component
from services.response_assembler import _dedupe

SAFE = SafetyVerdict()


def test_dedupe_keeps_first_occurrence():
    assert _dedupe(["a", "b", "a", "c", "b"]) == ("a", "b", "c")


class TestSinglePath:
    def test_symptom_assessment_fields(self, matcher, assembler):
        facts = ExtractedFacts(symptoms=frozenset({"fever", "cough"}))
        match = matcher.match(facts)
        response = assembler.assemble_single(match, facts, SAFE, Language.EN, HealthContext(age=28))

        assert response.intent == ResponseIntent.SYMPTOM_ASSESSMENT
        assert response.matched_rule_id == "viral_infection"
        assert response.confidence == 0.85
        assert response.safety_level == SafetyLevel.CAUTION
        assert [c.type for c in response.components] == [ComponentType.MEDICAL_ADVICE]
        assert response.advice == match.advice
        assert "Common Cold" in response.summary
        assert "Share your age and gender for more personalized advice" not in response.suggestions

    def test_asks_for_demographics_when_unknown(self, matcher, assembler):
        facts = ExtractedFacts()
        response = assembler.assemble_single(matcher.match(facts), facts, SAFE, Language.EN)
        assert response.suggestions[-1] == "Share your age and gender for more personalized advice"

    def test_verdict_can_raise_safety_level(self, matcher, assembler):
        facts = ExtractedFacts()
        verdict = SafetyVerdict(level=SafetyLevel.CAUTION, matched_patterns=("pregnancy",))
        response = assembler.assemble_single(matcher.match(facts), facts, verdict, Language.EN)
        assert response.matched_rule_id == "general_wellness"
        assert response.safety_level == SafetyLevel.CAUTION


class TestMultiPath:
    def test_meal_and_barcode_dedupe_suggestions(self, assembler):
        facts = ExtractedFacts()
        parts = [
            (template, build_component(template, facts, Language.EN))
            for template in ("meal_general", "barcode")
        ]
        response = assembler.assemble_multi(parts, SAFE, Language.EN)

        assert response.intent == ResponseIntent.MULTI_INTENT
        assert response.confidence == 0.95
        assert response.suggestions.count("Find alternatives") == 1
        assert response.suggestions == (
            "Add to meal plan",
            "Find alternatives",
            "View nutrition details",
        )
        assert response.conditions == ()
        assert response.matched_rule_id is None

    def test_shared_next_steps_appear_once(self, assembler):
        facts = ExtractedFacts()
        parts = [
            (template, build_component(template, facts, Language.EN))
            for template in ("workout_general", "tracking")
        ]
        response = assembler.assemble_multi(parts, SAFE, Language.EN)
        assert response.next_steps.count("Track your progress") == 1

    def test_medical_component_sets_conditions(self, matcher, assembler):
        facts = ExtractedFacts(symptoms=frozenset({"fever"}))
        match = matcher.match(facts)
        parts = [
            ("medical", build_component("medical", facts, Language.EN, match)),
            ("meal_general", build_component("meal_general", facts, Language.EN)),
        ]
        response = assembler.assemble_multi(parts, SAFE, Language.EN, match)
        assert response.safety_level == SafetyLevel.CAUTION
        assert response.conditions == match.conditions
        assert response.matched_rule_id == "fever"

    def test_empty_parts_raise(self, assembler):
        with pytest.raises(ValueError):
            assembler.assemble_multi([], SAFE, Language.EN)


class TestEmergencyAndBarcode:
    def test_emergency_payload(self, classifier, assembler):
        verdict = classifier.classify("heart attack", language=Language.GU)
        response = assembler.assemble_emergency(verdict, Language.GU)

        assert response.intent == ResponseIntent.EMERGENCY
        assert response.safety_level == SafetyLevel.URGENT
        assert response.confidence == 1.0
        assert response.components == ()
        assert response.advice == ()
        assert response.matched_rule_id is None
        assert response.emergency_contacts[0].number == "108"
        assert "108" in response.next_steps[0]
        assert response.disclaimer

    def test_barcode_uses_sample_product(self, assembler):
        response = assembler.assemble_barcode(Language.EN)
        assert response.intent == ResponseIntent.BARCODE_SCAN
        assert response.confidence == 0.98
        assert response.components[0].product == SAMPLE_PRODUCT

    def test_barcode_echoes_scanned_code(self, assembler):
        response = assembler.assemble_barcode(Language.HI, barcode="8901234567890")
        product = response.components[0].product
        assert product.barcode == "8901234567890"
        assert product.name == SAMPLE_PRODUCT.name
        assert SAMPLE_PRODUCT.barcode == "1234567890123"
