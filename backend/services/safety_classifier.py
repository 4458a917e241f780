"""
Safety Classifier for the wellness assistant.

Deterministic, stateless safety gate that runs BEFORE any rule evaluation.
Any emergency match yields URGENT and suppresses all domain advice for the
turn; caution matches only raise the level of the eventual response.
"""

from types import MappingProxyType
from typing import Mapping

from config.logging_config import get_logger
from models.wellness_models import (
    EmergencyContact,
    ExtractedFacts,
    Language,
    SafetyLevel,
    SafetyVerdict,
)
from services.lexicon import normalize_text
from services.translations import translate

logger = get_logger(__name__)


def _phrases(*values: str) -> tuple[str, ...]:
    return tuple(normalize_text(v) for v in values)


class SafetyClassifier:
    """Fail-closed keyword safety checks across every supported language."""

    # Standalone high-risk phrases, matched regardless of the declared language
    EMERGENCY_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType({
        "chest_pain": _phrases(
            "chest pain", "सीने में दर्द", "छाती में दर्द", "છાતીમાં દુખાવો",
        ),
        "heart_attack": _phrases(
            "heart attack", "दिल का दौरा", "हार्ट अटैक", "હાર્ટ એટેક", "હૃદયરોગનો હુમલો",
        ),
        "breathing_difficulty": _phrases(
            "can't breathe", "cant breathe", "cannot breathe", "can not breathe",
            "difficulty breathing", "trouble breathing", "not breathing",
            "सांस नहीं आ रही", "सांस लेने में तकलीफ", "सांस लेने में दिक्कत",
            "શ્વાસ લેવામાં તકલીફ", "શ્વાસ નથી આવતો",
        ),
        "heavy_bleeding": _phrases(
            "bleeding heavily", "heavy bleeding", "severe bleeding", "won't stop bleeding",
            "बहुत खून बह", "ज्यादा खून बह",
            "ખૂબ લોહી વહી", "વધુ પડતું લોહી",
        ),
        "loss_of_consciousness": _phrases(
            "unconscious", "passed out", "fainted", "unresponsive",
            "बेहोश",
            "બેભાન",
        ),
        "suicidal_ideation": _phrases(
            "suicidal", "suicide", "kill myself", "want to die", "end my life", "self-harm", "self harm",
            "आत्महत्या", "खुद को मार", "मरना चाहता", "मरना चाहती",
            "આત્મહત્યા", "મરવા માંગ",
        ),
        "severe_pain": _phrases(
            "severe pain", "unbearable pain",
            "गंभीर दर्द", "असहनीय दर्द",
            "ગંભીર દુખાવો", "અસહ્ય દુખાવો",
        ),
    })

    # Symptom combinations that are urgent even when no phrase matched
    EMERGENCY_COMBINATIONS: Mapping[str, frozenset[str]] = MappingProxyType({
        "chest_pain_with_breathlessness": frozenset({"chest_pain", "shortness_of_breath"}),
    })

    CAUTION_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType({
        "high_fever": _phrases(
            "high fever", "very high temperature",
            "तेज बुखार", "बहुत बुखार",
            "ઊંચો તાવ", "તીવ્ર તાવ", "વધુ તાવ",
        ),
        "severe_headache": _phrases(
            "severe headache", "worst headache",
            "तेज सिरदर्द", "गंभीर सिरदर्द",
            "તીવ્ર માથાનો દુખાવો", "ગંભીર માથાનો દુખાવો",
        ),
        "pregnancy": _phrases(
            "pregnant", "pregnancy",
            "गर्भवती", "गर्भावस्था",
            "ગર્ભવતી", "ગર્ભાવસ્થા",
        ),
    })

    # Single symptoms that warrant caution on their own
    CAUTION_SYMPTOMS: frozenset[str] = frozenset({"chest_pain", "shortness_of_breath"})

    EMERGENCY_CONTACTS: Mapping[Language, tuple[EmergencyContact, ...]] = MappingProxyType({
        Language.EN: (
            EmergencyContact(name="Emergency Services", number="911", description="Life-threatening emergencies"),
            EmergencyContact(name="Suicide & Crisis Lifeline", number="988", description="Crisis support"),
            EmergencyContact(name="Poison Control", number="1-800-222-1222", description="Poison emergencies"),
        ),
        Language.HI: (
            EmergencyContact(name="एम्बुलेंस", number="102", description="चिकित्सा आपातकाल"),
            EmergencyContact(name="राष्ट्रीय आपातकालीन नंबर", number="112", description="सभी आपात स्थितियां"),
        ),
        Language.GU: (
            EmergencyContact(name="એમ્બ્યુલન્સ", number="108", description="તબીબી આપત્કાલ"),
            EmergencyContact(name="રાષ્ટ્રીય આપત્કાલીન નંબર", number="112", description="તમામ આપત્કાલીન સ્થિતિઓ"),
        ),
    })

    CRISIS_CONTACTS: Mapping[Language, EmergencyContact] = MappingProxyType({
        Language.EN: EmergencyContact(name="Suicide & Crisis Lifeline", number="988", description="Crisis support"),
        Language.HI: EmergencyContact(name="टेली-मानस", number="14416", description="मानसिक स्वास्थ्य संकट सहायता"),
        Language.GU: EmergencyContact(name="ટેલી-માનસ", number="14416", description="માનસિક આરોગ્ય સંકટ સહાય"),
    })

    def classify(
        self,
        text: str,
        facts: ExtractedFacts | None = None,
        language: Language = Language.EN,
    ) -> SafetyVerdict:
        """
        Classify one message.

        Args:
            text: Raw or normalized message text
            facts: Extracted facts, used for symptom combinations
            language: Language of the emergency message and contacts

        Returns:
            SafetyVerdict with the most severe level matched
        """
        normalized = normalize_text(text)
        symptoms = facts.symptoms if facts else frozenset()

        urgent = [
            pattern_id for pattern_id, phrases in self.EMERGENCY_PATTERNS.items()
            if any(p in normalized for p in phrases)
        ]
        urgent += [
            combo_id for combo_id, required in self.EMERGENCY_COMBINATIONS.items()
            if required <= symptoms
        ]

        if urgent:
            logger.warning("Safety gate matched emergency", patterns=urgent, language=language.value)
            return self._urgent_verdict(urgent, language)

        caution = [
            pattern_id for pattern_id, phrases in self.CAUTION_PATTERNS.items()
            if any(p in normalized for p in phrases)
        ]
        caution += sorted(self.CAUTION_SYMPTOMS & symptoms)

        if caution:
            logger.info("Safety gate matched caution", patterns=caution)
            return SafetyVerdict(level=SafetyLevel.CAUTION, matched_patterns=tuple(caution))

        return SafetyVerdict(level=SafetyLevel.SAFE)

    def _urgent_verdict(self, matched: list[str], language: Language) -> SafetyVerdict:
        contacts = self.contacts_for(language, crisis="suicidal_ideation" in matched)
        return SafetyVerdict(
            level=SafetyLevel.URGENT,
            matched_patterns=tuple(matched),
            message=translate("emergency_message", language).format(number=contacts[0].number),
            contacts=contacts,
        )

    def contacts_for(self, language: Language, crisis: bool = False) -> tuple[EmergencyContact, ...]:
        """Locale contacts, with the crisis line first-after-emergency when requested."""
        contacts = self.EMERGENCY_CONTACTS.get(language, self.EMERGENCY_CONTACTS[Language.EN])
        if crisis:
            crisis_line = self.CRISIS_CONTACTS.get(language, self.CRISIS_CONTACTS[Language.EN])
            if crisis_line not in contacts:
                contacts = (contacts[0], crisis_line, *contacts[1:])
        return contacts


_classifier_instance: SafetyClassifier | None = None


def get_safety_classifier() -> SafetyClassifier:
    """Get the singleton safety classifier instance."""
    global _classifier_instance
    if _classifier_instance is None:
        _classifier_instance = SafetyClassifier()
    return _classifier_instance
