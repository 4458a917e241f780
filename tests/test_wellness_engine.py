"""End-to-end tests for the per-turn wellness pipeline."""

import pytest

from models.wellness_models import (
    ComponentType,
    Gender,
    HealthContext,
    Language,
    RawInput,
    ResponseIntent,
    SafetyLevel,
)
from services.component_templates import CALORIES_PER_MINUTE, DEFAULT_WORKOUT_MINUTES
from services.rule_table import RULE_TEXTS
from services.wellness_engine import WellnessEngine

EMERGENCY_NUMBERS = {Language.EN: "911", Language.HI: "102", Language.GU: "108"}


class TestEmergencyOverride:
    @pytest.mark.parametrize("text", [
        "severe chest pain and can't breathe",
        "fever, cough and chest pain",
        "I want a low-carb lunch but I think I'm having a heart attack",
        "मुझे बुखार है और सीने में दर्द है",
        "તાવ અને શ્વાસ લેવામાં તકલીફ",
    ])
    @pytest.mark.parametrize("language", list(Language))
    def test_emergency_beats_everything(self, ask, text, language):
        response = ask(text, language)
        assert response.intent == ResponseIntent.EMERGENCY
        assert response.safety_level == SafetyLevel.URGENT
        assert response.components == ()
        assert response.advice == ()
        assert response.conditions == ()
        assert response.emergency_contacts[0].number == EMERGENCY_NUMBERS[language]
        assert response.disclaimer

    def test_combination_from_extracted_symptoms(self, ask):
        response = ask("chest discomfort and shortness of breath")
        assert response.safety_level == SafetyLevel.URGENT


class TestFallback:
    @pytest.mark.parametrize("text", ["", "hello there", "qwerty 12345"])
    def test_unrecognized_input_gets_generic_advice(self, ask, text):
        response = ask(text)
        assert response.intent == ResponseIntent.SYMPTOM_ASSESSMENT
        assert response.matched_rule_id == "general_wellness"
        assert response.safety_level == SafetyLevel.SAFE
        assert "General Wellness Concern" in response.conditions
        assert response.advice
        assert response.summary
        assert response.disclaimer


class TestViralInfection:
    @pytest.mark.parametrize("text,language", [
        ("fever and cough", Language.EN),
        ("मुझे बुखार और खांसी है", Language.HI),
        ("મને તાવ અને ખાંસી છે", Language.GU),
    ])
    def test_same_rule_in_every_language(self, ask, text, language):
        response = ask(text, language)
        english = ask("fever and cough")

        assert response.matched_rule_id == "viral_infection"
        assert response.language == language
        assert response.safety_level == SafetyLevel.CAUTION
        assert response.confidence == english.confidence
        expected = RULE_TEXTS["viral_infection"][language]
        assert response.conditions == expected.conditions
        assert response.advice == expected.advice
        assert len(response.conditions) == len(english.conditions) == 4
        assert len(response.advice) == len(english.advice) == 7

    def test_end_to_end_example(self, ask):
        response = ask("I'm a 28-year-old male with fever and cough for 3 days")
        assert "Viral Infection (Common Cold/Flu)" in response.conditions
        assert response.safety_level == SafetyLevel.CAUTION
        assert response.advice
        assert response.disclaimer
        assert response.components[0].type == ComponentType.MEDICAL_ADVICE
        assert "Share your age and gender for more personalized advice" not in response.suggestions

    def test_asks_for_demographics_when_unknown(self, ask):
        response = ask("fever and cough")
        assert "Share your age and gender for more personalized advice" in response.suggestions


class TestIdempotence:
    @pytest.mark.parametrize("text,language", [
        ("I'm a 28-year-old male with fever and cough for 3 days", Language.EN),
        ("I have a mild fever, want a low-carb lunch, and a home workout", Language.EN),
        ("severe chest pain and can't breathe", Language.HI),
        ("scan this barcode", Language.GU),
    ])
    def test_identical_input_gives_identical_output(self, engine, text, language):
        raw = RawInput(text=text, language=language)
        first = engine.respond(raw).response.model_dump_json()
        second = WellnessEngine().respond(raw).response.model_dump_json()
        assert first == second


class TestContext:
    def test_elder_variant_from_age_in_text(self, ask):
        response = ask("I am 70 years old with fever and cough")
        assert any(a.startswith("Due to your age (65+)") for a in response.advice)

    @pytest.mark.parametrize("age", [None, 40, 64])
    def test_elder_variant_absent_for_younger_users(self, ask, age):
        response = ask("fever and cough", known_age=age)
        assert not any(a.startswith("Due to your age (65+)") for a in response.advice)

    def test_age_carries_across_turns(self, engine):
        first = engine.respond(RawInput(text="I'm 72 years old"))
        assert first.context.age == 72

        second = engine.respond(RawInput(text="now I have fever and cough"), first.context)
        assert second.context.age == 72
        assert any(a.startswith("Due to your age (65+)") for a in second.response.advice)

    def test_known_gender_selects_female_variant(self, ask):
        response = ask("headache and nausea", known_gender=Gender.FEMALE)
        assert response.matched_rule_id == "headache_nausea"
        assert any(a.startswith("For women:") for a in response.advice)

    def test_seeded_context_is_used(self, ask):
        response = ask("headache and nausea", context=HealthContext(gender=Gender.FEMALE))
        assert any(a.startswith("For women:") for a in response.advice)


class TestMultiIntent:
    def test_meal_and_workout(self, ask):
        response = ask("Suggest a healthy meal and a workout")
        assert response.intent == ResponseIntent.MULTI_INTENT
        assert [c.type for c in response.components] == [
            ComponentType.MEAL_SUGGESTION,
            ComponentType.WORKOUT_PLAN,
        ]
        assert "meal" in response.summary
        assert "workout" in response.summary

    def test_fever_with_lunch_and_workout(self, ask):
        response = ask("I have a mild fever, want a low-carb lunch, and a home workout")
        assert [c.type for c in response.components] == [
            ComponentType.MEDICAL_ADVICE,
            ComponentType.MEAL_SUGGESTION,
            ComponentType.WORKOUT_PLAN,
        ]
        assert response.safety_level == SafetyLevel.CAUTION
        assert response.matched_rule_id == "fever"
        assert response.components[1].title == "Low-Carb Lunch Options"
        assert len(response.next_steps) == len(set(response.next_steps))
        assert len(response.suggestions) == len(set(response.suggestions))

    def test_workout_duration_sets_calories(self, ask):
        response = ask("give me a 20 minute workout")
        workout = response.components[0]
        assert workout.type == ComponentType.WORKOUT_PLAN
        assert workout.duration_minutes == 20
        assert workout.calories_burned == 20 * CALORIES_PER_MINUTE

    def test_default_workout_duration(self, ask):
        workout = ask("a morning workout please").components[0]
        assert workout.duration_minutes == DEFAULT_WORKOUT_MINUTES
        assert workout.calories_burned == DEFAULT_WORKOUT_MINUTES * CALORIES_PER_MINUTE

    def test_localized_component_strings(self, ask):
        english = ask("meal and workout")
        hindi = ask("meal and workout", Language.HI)
        assert hindi.language == Language.HI
        assert [c.type for c in hindi.components] == [c.type for c in english.components]
        assert hindi.summary != english.summary
        assert hindi.disclaimer != english.disclaimer

    def test_appointment_and_tracking(self, ask):
        response = ask("book an appointment and help me track my period")
        assert [c.type for c in response.components] == [
            ComponentType.APPOINTMENT_BOOKING,
            ComponentType.WELLNESS_TRACKING,
        ]


class TestBarcode:
    def test_barcode_text_gives_scan_response(self, ask):
        response = ask("scan this barcode")
        assert response.intent == ResponseIntent.BARCODE_SCAN
        assert response.components[0].type == ComponentType.BARCODE_SCAN

    def test_barcode_with_another_intent_is_multi(self, ask):
        response = ask("scan this barcode and plan a workout")
        assert response.intent == ResponseIntent.MULTI_INTENT
        assert [c.type for c in response.components] == [
            ComponentType.WORKOUT_PLAN,
            ComponentType.BARCODE_SCAN,
        ]

    def test_explicit_scan(self, engine):
        response = engine.scan_barcode("12345678", Language.EN)
        assert response.components[0].product.barcode == "12345678"
