"""
Fact Extractor for the wellness assistant.

Scans a free-text message for age, gender, symptom, intent and modifier
keywords in English, Hindi and Gujarati. Pure function of the text and the
static lexicon; never raises for malformed input.
"""

from config.logging_config import get_logger
from models.wellness_models import (
    ExtractedFacts,
    Gender,
    HealthContext,
    Intent,
    RawInput,
)
from services.lexicon import (
    AGE_PATTERN,
    DURATION_PATTERN,
    GENDER_PATTERN,
    GENDER_TERMS,
    INTENT_TERMS,
    MEDICAL_TERMS,
    MODIFIER_TERMS,
    SYMPTOM_TERMS,
    find_terms,
    normalize_text,
)

logger = get_logger(__name__)


class FactExtractor:
    """
    Extract structured facts from a message using the static lexicon.

    Architecture:
    1. Normalize text (case, apostrophes, whitespace, Unicode form)
    2. Regex search for age, gender and duration (first match wins)
    3. Substring search for symptom, intent and modifier keywords,
       recording canonical ids so downstream rules are language-agnostic
    """

    # Anything outside this range is treated as an unknown age
    MIN_AGE = 0
    MAX_AGE = 120

    def extract(self, raw: RawInput) -> ExtractedFacts:
        """Extract facts from one message. Unknown fields stay empty."""
        text = normalize_text(raw.text)

        symptoms = find_terms(text, SYMPTOM_TERMS)
        intents = set(find_terms(text, INTENT_TERMS))
        if symptoms or any(term in text for term in MEDICAL_TERMS):
            intents.add(Intent.MEDICAL)

        facts = ExtractedFacts(
            age=self._extract_age(text),
            gender=self._extract_gender(text),
            symptoms=symptoms,
            intents=frozenset(intents),
            modifiers=find_terms(text, MODIFIER_TERMS),
            duration_minutes=self._extract_duration(text),
            raw_text=text,
        )

        logger.debug(
            "Extracted facts",
            language=raw.language.value,
            age=facts.age,
            gender=facts.gender.value,
            symptoms=sorted(facts.symptoms),
            intents=sorted(i.value for i in facts.intents),
        )
        return facts

    def _extract_age(self, text: str) -> int | None:
        match = AGE_PATTERN.search(text)
        if not match:
            return None
        age = int(match.group(1))
        if age < self.MIN_AGE or age > self.MAX_AGE:
            logger.info("Ignoring implausible age", age=age)
            return None
        return age

    def _extract_gender(self, text: str) -> Gender:
        match = GENDER_PATTERN.search(text)
        if not match:
            return Gender.UNKNOWN
        return GENDER_TERMS[match.group(0)]

    def _extract_duration(self, text: str) -> int | None:
        match = DURATION_PATTERN.search(text)
        if not match:
            return None
        minutes = int(match.group(1))
        return minutes or None


def merge_context(context: HealthContext | None, facts: ExtractedFacts) -> HealthContext:
    """
    Merge newly extracted facts into a user's health context.

    Rules:
    - New explicit age/gender values override old values
    - Unknown values never override known ones
    - Medical history is carried over unchanged
    """
    context = context or HealthContext()
    return HealthContext(
        age=facts.age if facts.age is not None else context.age,
        gender=facts.gender if facts.gender != Gender.UNKNOWN else context.gender,
        medical_history=context.medical_history,
    )


def context_from_input(raw: RawInput, context: HealthContext | None = None) -> HealthContext:
    """Fold the caller-supplied known facts of a RawInput into a context."""
    context = context or HealthContext()
    return HealthContext(
        age=raw.known_age if raw.known_age is not None else context.age,
        gender=raw.known_gender if raw.known_gender != Gender.UNKNOWN else context.gender,
        medical_history=context.medical_history | raw.medical_history,
    )


_extractor_instance: FactExtractor | None = None


def get_fact_extractor() -> FactExtractor:
    """Get the singleton fact extractor instance."""
    global _extractor_instance
    if _extractor_instance is None:
        _extractor_instance = FactExtractor()
    return _extractor_instance
