"""Tests for symptom rule matching and the rule catalog."""

from types import MappingProxyType

import pytest

from models.rule_models import InferenceRule
from models.wellness_models import (
    ExtractedFacts,
    Gender,
    HealthContext,
    Intent,
    Language,
    Modifier,
    SafetyLevel,
)
from services import rule_table
from services.rule_matcher import RuleMatcher
from services.rule_table import (
    ELDER_VARIANT,
    FALLBACK_RULE_ID,
    FEMALE_HORMONAL_VARIANT,
    RuleCatalogError,
    is_multi_intent,
    validate_rule_catalog,
)


def symptoms(*ids: str) -> ExtractedFacts:
    return ExtractedFacts(symptoms=frozenset(ids))


class TestSymptomMatching:
    def test_first_matching_rule_wins(self, matcher):
        result = matcher.match(symptoms("fever", "cough", "headache"))
        assert result.rule.rule_id == "viral_infection"

    def test_more_specific_rule_beats_single_symptom(self, matcher):
        assert matcher.match(symptoms("fever", "cough")).rule.rule_id == "viral_infection"
        assert matcher.match(symptoms("fever")).rule.rule_id == "fever"

    def test_headache_rules(self, matcher):
        assert matcher.match(symptoms("headache", "nausea")).rule.rule_id == "headache_nausea"
        assert matcher.match(symptoms("headache", "dizziness")).rule.rule_id == "headache_dizziness"

    @pytest.mark.parametrize("ids", [(), ("cough",), ("fatigue", "sore_throat")])
    def test_unmatched_symptoms_use_fallback(self, matcher, ids):
        result = matcher.match(symptoms(*ids))
        assert result.rule.rule_id == FALLBACK_RULE_ID
        assert result.rule.safety_level == SafetyLevel.SAFE
        assert result.advice

    def test_viral_infection_strings(self, matcher):
        result = matcher.match(symptoms("fever", "cough"))
        assert result.rule.confidence == 0.85
        assert result.conditions == (
            "Viral Infection (Common Cold/Flu)",
            "Common Cold",
            "Flu (Influenza)",
            "Viral Upper Respiratory Infection",
        )
        assert len(result.advice) == 7
        assert result.localized


class TestAdviceVariants:
    def test_elder_advice_inserted_at_position_six(self, matcher):
        result = matcher.match(symptoms("fever", "cough"), HealthContext(age=70))
        assert len(result.advice) == 8
        assert result.advice[6].startswith("Due to your age (65+)")
        assert result.applied_variants == (ELDER_VARIANT,)

    @pytest.mark.parametrize("age", [None, 30, 60, 65])
    def test_elder_advice_only_above_65(self, matcher, age):
        result = matcher.match(symptoms("fever", "cough"), HealthContext(age=age))
        assert len(result.advice) == 7
        assert result.applied_variants == ()

    def test_age_from_facts_when_no_context(self, matcher):
        facts = ExtractedFacts(age=80, symptoms=frozenset({"fever"}))
        result = matcher.match(facts)
        assert result.advice[3].startswith("Due to your age (65+)")

    def test_female_hormonal_advice(self, matcher):
        context = HealthContext(age=25, gender=Gender.FEMALE)
        result = matcher.match(symptoms("headache", "nausea"), context)
        assert result.applied_variants == (FEMALE_HORMONAL_VARIANT,)
        assert result.advice[6].startswith("For women:")

    def test_no_female_advice_for_male(self, matcher):
        result = matcher.match(symptoms("headache", "nausea"), HealthContext(gender=Gender.MALE))
        assert result.applied_variants == ()
        assert len(result.advice) == 7

    def test_variant_text_follows_language(self, matcher):
        result = matcher.match(symptoms("fever", "cough"), HealthContext(age=70), Language.HI)
        assert result.advice[6].startswith("आपकी उम्र (65+)")


class TestLocalization:
    @pytest.mark.parametrize("language,title", [
        (Language.EN, "Viral Infection (Common Cold/Flu)"),
        (Language.HI, "वायरल संक्रमण (सामान्य सर्दी/फ्लू)"),
        (Language.GU, "વાયરલ ચેપ (સામાન્ય શરદી/ફ્લૂ)"),
    ])
    def test_titles_per_language(self, matcher, language, title):
        result = matcher.match(symptoms("fever", "cough"), language=language)
        assert result.title == title
        assert result.rule.rule_id == "viral_infection"

    def test_missing_language_falls_back_to_english(self, matcher, monkeypatch):
        texts = dict(rule_table.RULE_TEXTS)
        texts["fever"] = MappingProxyType({Language.EN: rule_table.RULE_TEXTS["fever"][Language.EN]})
        monkeypatch.setattr(rule_table, "RULE_TEXTS", MappingProxyType(texts))

        result = matcher.match(symptoms("fever"), language=Language.GU)
        assert result.title == "Fever Management"
        assert not result.localized


class TestIntentRules:
    def test_low_carb_lunch_and_workout(self, matcher):
        facts = ExtractedFacts(
            intents=frozenset({Intent.MEDICAL, Intent.NUTRITION, Intent.FITNESS}),
            modifiers=frozenset({Modifier.LOW_CARB}),
        )
        assert [r.template for r in matcher.match_intents(facts)] == [
            "medical", "meal_low_carb", "workout_general",
        ]

    def test_breakfast_replaces_general_meal(self, matcher):
        facts = ExtractedFacts(
            intents=frozenset({Intent.NUTRITION}),
            modifiers=frozenset({Modifier.BREAKFAST}),
        )
        assert [r.template for r in matcher.match_intents(facts)] == ["breakfast"]

    def test_barcode_suppresses_meal_templates(self, matcher):
        facts = ExtractedFacts(
            intents=frozenset({Intent.NUTRITION}),
            modifiers=frozenset({Modifier.BARCODE}),
        )
        assert [r.template for r in matcher.match_intents(facts)] == ["barcode"]

    def test_morning_workout(self, matcher):
        facts = ExtractedFacts(
            intents=frozenset({Intent.FITNESS}),
            modifiers=frozenset({Modifier.MORNING}),
        )
        assert [r.template for r in matcher.match_intents(facts)] == ["workout_morning"]

    def test_multi_intent_triggers(self):
        assert not is_multi_intent(frozenset({Intent.MEDICAL}), frozenset())
        assert not is_multi_intent(frozenset(), frozenset({Modifier.MORNING}))
        assert is_multi_intent(frozenset({Intent.MEDICAL, Intent.TRACKING}), frozenset())
        assert is_multi_intent(frozenset(), frozenset({Modifier.BARCODE}))


class TestRuleCatalog:
    def test_catalog_is_complete(self):
        assert validate_rule_catalog() == []

    def test_strict_mode_raises_on_missing_language(self, monkeypatch):
        texts = dict(rule_table.RULE_TEXTS)
        texts["fever"] = MappingProxyType({Language.EN: rule_table.RULE_TEXTS["fever"][Language.EN]})
        monkeypatch.setattr(rule_table, "RULE_TEXTS", MappingProxyType(texts))

        problems = validate_rule_catalog()
        assert "rule fever missing language hi" in problems
        with pytest.raises(RuleCatalogError):
            validate_rule_catalog(strict=True)

    def test_variant_texts_are_read_only(self):
        text = rule_table.RULE_TEXTS["viral_infection"][Language.EN]
        assert isinstance(text.variants, tuple)
        assert ELDER_VARIANT in text.variant_ids
        with pytest.raises(TypeError):
            text.variants[0] = (ELDER_VARIANT, "changed")
        with pytest.raises(KeyError):
            text.variant_text("no_such_variant")

    def test_matcher_requires_fallback_rule(self):
        rules = (
            InferenceRule(
                rule_id="fever",
                required_symptoms=frozenset({"fever"}),
                safety_level=SafetyLevel.CAUTION,
                confidence=0.7,
            ),
        )
        with pytest.raises(ValueError):
            RuleMatcher(rules=rules)
