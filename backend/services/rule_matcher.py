"""
Rule Matcher for the wellness assistant.

Provides deterministic matching of extracted facts against the static
symptom and intent rule tables. Only reached when the safety gate did not
return URGENT.
"""

from config.logging_config import get_logger
from models.rule_models import InferenceRule, IntentRule, MatchResult
from models.wellness_models import ExtractedFacts, HealthContext, Language
from services.rule_table import INFERENCE_RULES, INTENT_RULES, get_rule_text

logger = get_logger(__name__)


class RuleMatcher:
    """
    Deterministic rule matching engine.

    Symptom rules are tried top to bottom; the first rule whose required
    symptom set is a subset of the extracted symptoms wins. The final rule
    has an empty pattern and therefore always matches.
    """

    def __init__(
        self,
        rules: tuple[InferenceRule, ...] | None = None,
        intent_rules: tuple[IntentRule, ...] | None = None,
    ):
        """
        Initialize the matcher.

        Args:
            rules: Ordered symptom rules. If None, uses the static table.
            intent_rules: Ordered intent rules. If None, uses the static table.
        """
        self._rules = rules if rules is not None else INFERENCE_RULES
        self._intent_rules = intent_rules if intent_rules is not None else INTENT_RULES

        if not self._rules or not self._rules[-1].is_fallback:
            raise ValueError("Rule table must end with a fallback rule")

        logger.debug("Rule matcher initialized", rule_count=len(self._rules))

    def match(
        self,
        facts: ExtractedFacts,
        context: HealthContext | None = None,
        language: Language = Language.EN,
    ) -> MatchResult:
        """
        Find the winning symptom rule and resolve its strings.

        Age/gender come from the merged context when given, so that facts
        stated in earlier turns still select advice variants.
        """
        rule = next(r for r in self._rules if r.matches(facts.symptoms))

        age = context.age if context else facts.age
        gender = context.gender if context else facts.gender

        text, localized = get_rule_text(rule.rule_id, language)

        advice = list(text.advice)
        applied: list[str] = []
        for variant in rule.variants:
            if variant.applies_to(age, gender):
                advice.insert(min(variant.position, len(advice)), text.variant_text(variant.variant_id))
                applied.append(variant.variant_id)

        logger.info(
            "Rule matching complete",
            rule_id=rule.rule_id,
            symptoms=sorted(facts.symptoms),
            variants=applied,
            language=language.value,
        )

        return MatchResult(
            rule=rule,
            title=text.title,
            conditions=text.conditions,
            advice=tuple(advice),
            when_to_seek_help=text.when_to_seek_help,
            applied_variants=tuple(applied),
            localized=localized,
        )

    def match_intents(self, facts: ExtractedFacts) -> list[IntentRule]:
        """Return every intent rule that fires for these facts, in table order."""
        matched = [r for r in self._intent_rules if r.matches(facts.intents, facts.modifiers)]
        logger.debug("Intent rules matched", rules=[r.rule_id for r in matched])
        return matched


_matcher_instance: RuleMatcher | None = None


def get_rule_matcher() -> RuleMatcher:
    """Get the singleton rule matcher instance."""
    global _matcher_instance
    if _matcher_instance is None:
        _matcher_instance = RuleMatcher()
    return _matcher_instance
