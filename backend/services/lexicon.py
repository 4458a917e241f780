"""
Multilingual lexicon for the wellness assistant.

Provides:
- Text normalization shared by every matcher
- Canonical symptom ids with English, Hindi and Gujarati surface forms
- Intent and modifier keywords
- Age, gender and duration patterns

Matching is deliberately plain substring search over normalized text so
that the same lexicon works for all three scripts.
"""

import re
import unicodedata
from types import MappingProxyType
from typing import Mapping

from models.wellness_models import Gender, Intent, Modifier


def normalize_text(text: str | None) -> str:
    """NFC-normalize, lower-case, straighten apostrophes and collapse whitespace."""
    if not text:
        return ""
    cleaned = unicodedata.normalize("NFC", text)
    cleaned = cleaned.replace("’", "'").replace("‘", "'").lower()
    return " ".join(cleaned.split())


def _freeze(table: dict) -> Mapping:
    return MappingProxyType({key: tuple(normalize_text(v) for v in values) for key, values in table.items()})


# Canonical symptom id -> surface forms in every supported language
SYMPTOM_TERMS: Mapping[str, tuple[str, ...]] = _freeze({
    "fever": [
        "fever", "feverish", "high temperature",
        "बुखार", "ज्वर",
        "બુખાર", "તાવ",
    ],
    "cough": [
        "cough",
        "खांसी", "खाँसी",
        "ખાંસી", "ઉધરસ",
    ],
    "fatigue": [
        "fatigue", "tired", "exhausted",
        "थकान", "थकावट",
        "થાક",
    ],
    "headache": [
        "headache", "head ache", "head hurts",
        "सिरदर्द", "सिर दर्द", "सिर में दर्द",
        "માથાનો દુખાવો", "માથું દુખે",
    ],
    "nausea": [
        "nausea", "nauseous", "vomit", "throwing up", "morning sickness",
        "मतली", "उल्टी", "जी मिचला",
        "ઉબકા", "ઉલટી",
    ],
    "dizziness": [
        "dizzy", "dizziness", "lightheaded", "light-headed",
        "चक्कर",
        "ચક્કર",
    ],
    "chest_pain": [
        "chest pain", "chest discomfort", "chest tightness",
        "सीने में दर्द", "छाती में दर्द",
        "છાતીમાં દુખાવો", "છાતીમાં અસ્વસ્થતા",
    ],
    "shortness_of_breath": [
        "shortness of breath", "short of breath", "breathless",
        "सांस फूलना", "सांस फूल",
        "શ્વાસ ચડ",
    ],
    "sore_throat": [
        "sore throat", "throat pain",
        "गले में खराश", "गले में दर्द",
        "ગળામાં દુખાવો", "ગળામાં ખરાશ",
    ],
})

# Words that signal a medical request without naming a known symptom
MEDICAL_TERMS: tuple[str, ...] = tuple(normalize_text(term) for term in (
    "sick", "unwell", "pain", "feeling ill", "symptom",
    "बीमार", "दर्द", "लक्षण",
    "બીમાર", "દુખાવો", "લક્ષણ",
))

INTENT_TERMS: Mapping[Intent, tuple[str, ...]] = _freeze({
    Intent.NUTRITION: [
        "meal", "lunch", "dinner", "food", "diet", "recipe", "nutrition", "snack", "breakfast",
        "भोजन", "खाना", "लंच", "आहार", "नाश्ता", "डिनर",
        "ભોજન", "ખોરાક", "લંચ", "આહાર", "નાસ્તો",
    ],
    Intent.FITNESS: [
        "workout", "exercise", "fitness", "yoga", "training",
        "वर्कआउट", "व्यायाम", "कसरत", "योग",
        "વર્કઆઉટ", "વ્યાયામ", "કસરત", "યોગ",
    ],
    Intent.SCHEDULING: [
        "appointment", "schedule", "book a doctor", "consultation",
        "अपॉइंटमेंट", "नियुक्ति",
        "અપોઇન્ટમેન્ટ", "નિમણૂક",
    ],
    Intent.TRACKING: [
        "track", "period", "menstrual", "log my", "health insights",
        "ट्रैक", "पीरियड", "मासिक धर्म",
        "ટ્રેક", "પીરિયડ", "માસિક",
    ],
})

MODIFIER_TERMS: Mapping[Modifier, tuple[str, ...]] = _freeze({
    Modifier.LOW_CARB: [
        "low-carb", "low carb",
        "कम कार्ब",
        "ઓછા કાર્બ",
    ],
    Modifier.MORNING: [
        "morning",
        "सुबह",
        "સવાર",
    ],
    Modifier.BREAKFAST: [
        "breakfast", "morning meal",
        "नाश्ता",
        "નાસ્તો",
    ],
    Modifier.BARCODE: [
        "barcode", "bar code", "scan",
        "बारकोड", "स्कैन",
        "બારકોડ", "સ્કેન",
    ],
})

# Latin-script gender words are matched on word boundaries; the others by substring
_LATIN_GENDER_TERMS: dict[str, Gender] = {
    "female": Gender.FEMALE,
    "woman": Gender.FEMALE,
    "women": Gender.FEMALE,
    "girl": Gender.FEMALE,
    "lady": Gender.FEMALE,
    "male": Gender.MALE,
    "man": Gender.MALE,
    "men": Gender.MALE,
    "boy": Gender.MALE,
    "gentleman": Gender.MALE,
    "non-binary": Gender.OTHER,
    "nonbinary": Gender.OTHER,
}
_INDIC_GENDER_TERMS: dict[str, Gender] = {
    "महिला": Gender.FEMALE,
    "औरत": Gender.FEMALE,
    "स्त्री": Gender.FEMALE,
    "लड़की": Gender.FEMALE,
    "पुरुष": Gender.MALE,
    "आदमी": Gender.MALE,
    "लड़का": Gender.MALE,
    "મહિલા": Gender.FEMALE,
    "સ્ત્રી": Gender.FEMALE,
    "છોકરી": Gender.FEMALE,
    "પુરુષ": Gender.MALE,
    "છોકરો": Gender.MALE,
}
_INDIC_GENDER_TERMS = {normalize_text(word): gender for word, gender in _INDIC_GENDER_TERMS.items()}
GENDER_TERMS: Mapping[str, Gender] = MappingProxyType({**_LATIN_GENDER_TERMS, **_INDIC_GENDER_TERMS})


def _alternation(words) -> str:
    # Longest first so that e.g. "women" is preferred over "men"
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


GENDER_PATTERN = re.compile(
    rf"\b(?:{_alternation(_LATIN_GENDER_TERMS)})\b|(?:{_alternation(_INDIC_GENDER_TERMS)})"
)

AGE_PATTERN = re.compile(
    r"(?<!\d)(\d{1,3})\s*-?\s*(?:years?\b|yrs?\b|yo\b|y/o|साल|वर्ष|વર્ષ)"
)

DURATION_PATTERN = re.compile(
    r"(?<!\d)(\d{1,3})\s*-?\s*(?:min(?:ute)?s?\b|मिनट|મિનિટ)"
)


def find_terms(text: str, terms: Mapping) -> frozenset:
    """Return the keys of `terms` with at least one surface form in `text`."""
    return frozenset(key for key, forms in terms.items() if any(form in text for form in forms))
