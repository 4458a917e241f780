"""
Static inference and intent rule tables.

Symptom rules are ordered most specific first and end with a fallback rule
that has an empty pattern. Their strings live in RULE_TEXTS keyed by rule
id and language so that the rules themselves stay language-agnostic.
"""

from types import MappingProxyType
from typing import Mapping

from config.logging_config import get_logger
from models.rule_models import AdviceVariant, InferenceRule, IntentRule, RuleText
from models.wellness_models import Gender, Intent, Language, Modifier, SafetyLevel
from services.translations import missing_translations

logger = get_logger(__name__)

EN, HI, GU = Language.EN, Language.HI, Language.GU

FALLBACK_RULE_ID = "general_wellness"


class RuleCatalogError(Exception):
    """Raised in strict mode when the rule catalog is incomplete."""


# ============================================================================
# Symptom rules
# ============================================================================

ELDER_VARIANT = "elder_caution"
FEMALE_HORMONAL_VARIANT = "female_hormonal"

INFERENCE_RULES: tuple[InferenceRule, ...] = (
    InferenceRule(
        rule_id="viral_infection",
        required_symptoms=frozenset({"fever", "cough"}),
        safety_level=SafetyLevel.CAUTION,
        confidence=0.85,
        variants=(AdviceVariant(variant_id=ELDER_VARIANT, min_age=65, position=6),),
    ),
    InferenceRule(
        rule_id="headache_nausea",
        required_symptoms=frozenset({"headache", "nausea"}),
        safety_level=SafetyLevel.CAUTION,
        confidence=0.80,
        variants=(AdviceVariant(variant_id=FEMALE_HORMONAL_VARIANT, gender=Gender.FEMALE, position=6),),
    ),
    InferenceRule(
        rule_id="headache_dizziness",
        required_symptoms=frozenset({"headache", "dizziness"}),
        safety_level=SafetyLevel.SAFE,
        confidence=0.75,
    ),
    InferenceRule(
        rule_id="fever",
        required_symptoms=frozenset({"fever"}),
        safety_level=SafetyLevel.CAUTION,
        confidence=0.70,
        variants=(AdviceVariant(variant_id=ELDER_VARIANT, min_age=65, position=3),),
    ),
    InferenceRule(
        rule_id=FALLBACK_RULE_ID,
        safety_level=SafetyLevel.SAFE,
        confidence=0.60,
    ),
)

_ELDER_TEXT = {
    EN: "Due to your age (65+), monitor symptoms closely and consider early medical consultation",
    HI: "आपकी उम्र (65+) के कारण, लक्षणों पर बारीकी से नजर रखें और जल्दी चिकित्सा सलाह लें",
    GU: "તમારી ઉંમર (65+)ના કારણે, લક્ષણો પર નજીકથી ધ્યાન રાખો અને વહેલી તબીબી સલાહ લો",
}

RULE_TEXTS: Mapping[str, Mapping[Language, RuleText]] = MappingProxyType({
    "viral_infection": MappingProxyType({
        EN: RuleText(
            title="Viral Infection (Common Cold/Flu)",
            conditions=(
                "Viral Infection (Common Cold/Flu)",
                "Common Cold",
                "Flu (Influenza)",
                "Viral Upper Respiratory Infection",
            ),
            advice=(
                "Rest for at least 7-8 hours daily and avoid strenuous activities",
                "Drink warm fluids like herbal tea, warm water with honey and lemon (8-10 glasses daily)",
                "Take paracetamol 500mg every 6 hours for fever (if no allergies)",
                "Use steam inhalation 2-3 times daily for congestion relief",
                "Gargle with warm salt water (1 tsp salt in 1 cup water) 3 times daily",
                "If fever exceeds 102°F (38.9°C) for more than 3 days or breathing difficulty occurs, "
                "consult a doctor immediately",
                "Maintain isolation to prevent spreading infection to others",
            ),
            when_to_seek_help="If fever persists more than 3 days or exceeds 103°F",
            variants={ELDER_VARIANT: _ELDER_TEXT[EN]},
        ),
        HI: RuleText(
            title="वायरल संक्रमण (सामान्य सर्दी/फ्लू)",
            conditions=(
                "वायरल संक्रमण (सामान्य सर्दी/फ्लू)",
                "सामान्य सर्दी",
                "फ्लू (इन्फ्लूएंजा)",
                "वायरल श्वसन संक्रमण",
            ),
            advice=(
                "दैनिक 7-8 घंटे आराम करें और कठिन गतिविधियों से बचें",
                "गर्म तरल पदार्थ जैसे हर्बल चाय, शहद-नींबू के साथ गर्म पानी पिएं (दैनिक 8-10 गिलास)",
                "बुखार के लिए पेरासिटामोल 500mg हर 6 घंटे में लें (यदि कोई एलर्जी नहीं है)",
                "कफ से राहत के लिए दिन में 2-3 बार भाप लें",
                "दिन में 3 बार गर्म नमक के पानी से गरारे करें (1 चम्मच नमक 1 कप पानी में)",
                "यदि बुखार 3 दिनों से अधिक 102°F (38.9°C) से ऊपर रहे या सांस लेने में तकलीफ हो "
                "तो तुरंत डॉक्टर से मिलें",
                "संक्रमण फैलने से रोकने के लिए अलगाव बनाए रखें",
            ),
            when_to_seek_help="यदि बुखार 3 दिनों से अधिक रहे या 103°F से ऊपर जाए",
            variants={ELDER_VARIANT: _ELDER_TEXT[HI]},
        ),
        GU: RuleText(
            title="વાયરલ ચેપ (સામાન્ય શરદી/ફ્લૂ)",
            conditions=(
                "વાયરલ ચેપ (સામાન્ય શરદી/ફ્લૂ)",
                "સામાન્ય શરદી",
                "ફ્લૂ (ઇન્ફ્લુએન્ઝા)",
                "વાયરલ શ્વસન ચેપ",
            ),
            advice=(
                "દૈનિક 7-8 કલાક આરામ કરો અને કઠિન પ્રવૃત્તિઓ ટાળો",
                "હર્બલ ટી, મધ-લીંબુ સાથે ગરમ પાણી જેવા ગરમ પ્રવાહી પીઓ (દૈનિક 8-10 ગ્લાસ)",
                "તાવ માટે પેરાસિટામોલ 500mg દર 6 કલાકે લો (જો કોઈ એલર્જી નથી)",
                "કફથી રાહત માટે દિવસમાં 2-3 વાર વરાળ લો",
                "દિવસમાં 3 વાર ગરમ મીઠાના પાણીથી કોગળા કરો (1 ચમચી મીઠું 1 કપ પાણીમાં)",
                "જો તાવ 3 દિવસથી વધુ 102°F (38.9°C)થી વધુ રહે અથવા શ્વાસ લેવામાં મુશ્કેલી થાય "
                "તો તાત્કાલિક ડૉક્ટરને મળો",
                "ચેપ ફેલાવવાથી રોકવા માટે એકલતા જાળવો",
            ),
            when_to_seek_help="જો તાવ 3 દિવસથી વધુ રહે અથવા 103°Fથી વધી જાય",
            variants={ELDER_VARIANT: _ELDER_TEXT[GU]},
        ),
    }),
    "headache_nausea": MappingProxyType({
        EN: RuleText(
            title="Headache with Nausea",
            conditions=("Tension Headache", "Migraine", "Dehydration"),
            advice=(
                "Rest in a dark, quiet room for 30-60 minutes",
                "Apply cold compress on forehead for 15-20 minutes",
                "Drink plenty of water (at least 8-10 glasses daily) to prevent dehydration",
                "Take paracetamol 500mg or ibuprofen 400mg (if no allergies or stomach issues)",
                "Avoid bright lights, loud noises, and strong smells",
                "If headache is severe, persistent (>24 hours), or accompanied by vision changes, "
                "seek medical attention",
                "Avoid skipping meals and maintain regular sleep schedule",
            ),
            when_to_seek_help="If headache is severe, lasts more than 24 hours, or comes with vision changes",
            variants={
                FEMALE_HORMONAL_VARIANT: "For women: headaches can be related to hormonal changes - "
                                         "track patterns with your menstrual cycle",
            },
        ),
        HI: RuleText(
            title="मतली के साथ सिरदर्द",
            conditions=("तनाव सिरदर्द", "माइग्रेन", "निर्जलीकरण"),
            advice=(
                "30-60 मिनट के लिए अंधेरे, शांत कमरे में आराम करें",
                "माथे पर 15-20 मिनट के लिए ठंडी सिकाई करें",
                "निर्जलीकरण से बचने के लिए भरपूर पानी पिएं (दैनिक कम से कम 8-10 गिलास)",
                "पेरासिटामोल 500mg या इबुप्रोफेन 400mg लें (यदि कोई एलर्जी या पेट की समस्या नहीं है)",
                "तेज रोशनी, तेज आवाज और तेज गंध से बचें",
                "यदि सिरदर्द गंभीर है, लगातार (>24 घंटे) है, या आंखों की रोशनी में बदलाव के साथ है, "
                "तो चिकित्सा सहायता लें",
                "भोजन न छोड़ें और नियमित नींद का समय बनाए रखें",
            ),
            when_to_seek_help="यदि सिरदर्द गंभीर हो, 24 घंटे से अधिक रहे, या दृष्टि में बदलाव हो",
            variants={
                FEMALE_HORMONAL_VARIANT: "महिलाओं के लिए: सिरदर्द हार्मोनल बदलाव से संबंधित हो सकता है - "
                                         "मासिक धर्म चक्र के साथ पैटर्न ट्रैक करें",
            },
        ),
        GU: RuleText(
            title="ઉબકા સાથે માથાનો દુખાવો",
            conditions=("તણાવ માથાનો દુખાવો", "માઇગ્રેન", "ડિહાઇડ્રેશન"),
            advice=(
                "30-60 મિનિટ માટે અંધારા, શાંત રૂમમાં આરામ કરો",
                "કપાળ પર 15-20 મિનિટ માટે ઠંડો શેક કરો",
                "ડિહાઇડ્રેશન ટાળવા માટે ભરપૂર પાણી પીઓ (દૈનિક ઓછામાં ઓછા 8-10 ગ્લાસ)",
                "પેરાસિટામોલ 500mg અથવા આઇબુપ્રોફેન 400mg લો (જો કોઈ એલર્જી અથવા પેટની સમસ્યા નથી)",
                "તીવ્ર પ્રકાશ, મોટો અવાજ અને તીવ્ર ગંધ ટાળો",
                "જો માથાનો દુખાવો ગંભીર છે, સતત છે (>24 કલાક), અથવા દ્રષ્ટિ બદલાવ સાથે છે, "
                "તો તબીબી મદદ લો",
                "ભોજન ન છોડો અને નિયમિત ઊંઘનું સમયપત્રક જાળવો",
            ),
            when_to_seek_help="જો માથાનો દુખાવો ગંભીર હોય, 24 કલાકથી વધુ રહે, અથવા દ્રષ્ટિમાં ફેરફાર થાય",
            variants={
                FEMALE_HORMONAL_VARIANT: "સ્ત્રીઓ માટે: માથાનો દુખાવો હોર્મોનલ ફેરફારો સાથે સંબંધિત હોઈ શકે છે - "
                                         "માસિક ચક્ર સાથે પેટર્ન ટ્રેક કરો",
            },
        ),
    }),
    "headache_dizziness": MappingProxyType({
        EN: RuleText(
            title="Possible Migraine or Tension Headache",
            conditions=("Possible Migraine or Tension Headache", "Dehydration"),
            advice=(
                "Rest in a dark, quiet room",
                "Apply cold compress to forehead",
                "Stay hydrated",
                "Consider over-the-counter pain relief",
            ),
            when_to_seek_help="If headache is severe or persistent",
        ),
        HI: RuleText(
            title="संभावित माइग्रेन या तनाव सिरदर्द",
            conditions=("संभावित माइग्रेन या तनाव सिरदर्द", "निर्जलीकरण"),
            advice=(
                "अंधेरे, शांत कमरे में आराम करें",
                "माथे पर ठंडी सिकाई करें",
                "हाइड्रेटेड रहें",
                "बिना पर्चे की दर्द निवारक दवा पर विचार करें",
            ),
            when_to_seek_help="यदि सिरदर्द गंभीर या लगातार हो",
        ),
        GU: RuleText(
            title="સંભવિત માઇગ્રેન અથવા તણાવ માથાનો દુખાવો",
            conditions=("સંભવિત માઇગ્રેન અથવા તણાવ માથાનો દુખાવો", "ડિહાઇડ્રેશન"),
            advice=(
                "અંધારા, શાંત રૂમમાં આરામ કરો",
                "કપાળ પર ઠંડો શેક કરો",
                "હાઇડ્રેટેડ રહો",
                "પ્રિસ્ક્રિપ્શન વિનાની પીડા રાહત દવા વિશે વિચારો",
            ),
            when_to_seek_help="જો માથાનો દુખાવો ગંભીર અથવા સતત હોય",
        ),
    }),
    "fever": MappingProxyType({
        EN: RuleText(
            title="Fever Management",
            conditions=("Mild Fever", "Viral Fever"),
            advice=(
                "Rest and stay hydrated",
                "Take over-the-counter fever reducers if needed",
                "Monitor temperature every 4 hours",
                "Seek medical attention if fever persists >3 days",
            ),
            when_to_seek_help="If fever exceeds 103°F or persists >3 days",
            variants={ELDER_VARIANT: _ELDER_TEXT[EN]},
        ),
        HI: RuleText(
            title="बुखार प्रबंधन",
            conditions=("हल्का बुखार", "वायरल बुखार"),
            advice=(
                "आराम करें और हाइड्रेटेड रहें",
                "जरूरत हो तो बिना पर्चे की बुखार कम करने वाली दवा लें",
                "हर 4 घंटे में तापमान जांचें",
                "यदि बुखार 3 दिनों से अधिक रहे तो चिकित्सा सहायता लें",
            ),
            when_to_seek_help="यदि बुखार 103°F से ऊपर जाए या 3 दिनों से अधिक रहे",
            variants={ELDER_VARIANT: _ELDER_TEXT[HI]},
        ),
        GU: RuleText(
            title="તાવ વ્યવસ્થાપન",
            conditions=("હળવો તાવ", "વાયરલ તાવ"),
            advice=(
                "આરામ કરો અને હાઇડ્રેટેડ રહો",
                "જરૂર હોય તો પ્રિસ્ક્રિપ્શન વિનાની તાવ ઘટાડવાની દવા લો",
                "દર 4 કલાકે તાપમાન તપાસો",
                "જો તાવ 3 દિવસથી વધુ રહે તો તબીબી મદદ લો",
            ),
            when_to_seek_help="જો તાવ 103°Fથી વધી જાય અથવા 3 દિવસથી વધુ રહે",
            variants={ELDER_VARIANT: _ELDER_TEXT[GU]},
        ),
    }),
    FALLBACK_RULE_ID: MappingProxyType({
        EN: RuleText(
            title="General Wellness Guidance",
            conditions=("General Wellness Concern", "Stress-related Symptoms", "Lifestyle-related Issue"),
            advice=(
                "Maintain regular sleep schedule (7-8 hours daily)",
                "Follow a balanced diet with fresh fruits and vegetables",
                "Stay hydrated with 8-10 glasses of water daily",
                "Practice stress management techniques like deep breathing or meditation",
                "Monitor your symptoms and keep a health diary",
                "If symptoms persist or worsen, consult a healthcare professional",
                "Regular exercise (30 minutes daily) can improve overall health",
            ),
            when_to_seek_help="If symptoms worsen or persist",
        ),
        HI: RuleText(
            title="सामान्य कल्याण मार्गदर्शन",
            conditions=("सामान्य स्वास्थ्य चिंता", "तनाव संबंधी लक्षण", "जीवनशैली संबंधी समस्या"),
            advice=(
                "नियमित नींद का समय बनाए रखें (दैनिक 7-8 घंटे)",
                "ताजे फल और सब्जियों के साथ संतुलित आहार लें",
                "दैनिक 8-10 गिलास पानी के साथ हाइड्रेटेड रहें",
                "गहरी सांस या ध्यान जैसी तनाव प्रबंधन तकनीकों का अभ्यास करें",
                "अपने लक्षणों पर नजर रखें और स्वास्थ्य डायरी रखें",
                "यदि लक्षण बने रहते हैं या बिगड़ते हैं, तो स्वास्थ्य पेशेवर से सलाह लें",
                "नियमित व्यायाम (दैनिक 30 मिनट) समग्र स्वास्थ्य में सुधार कर सकता है",
            ),
            when_to_seek_help="यदि लक्षण बिगड़ें या बने रहें",
        ),
        GU: RuleText(
            title="સામાન્ય કલ્યાણ માર્ગદર્શન",
            conditions=("સામાન્ય કલ્યાણ ચિંતા", "તણાવ સંબંધિત લક્ષણો", "જીવનશૈલી સંબંધિત સમસ્યા"),
            advice=(
                "નિયમિત ઊંઘનું સમયપત્રક જાળવો (દૈનિક 7-8 કલાક)",
                "તાજા ફળો અને શાકભાજી સાથે સંતુલિત આહાર લો",
                "દૈનિક 8-10 ગ્લાસ પાણી સાથે હાઇડ્રેટેડ રહો",
                "ઊંડા શ્વાસ અથવા ધ્યાન જેવી તણાવ વ્યવસ્થાપન તકનીકોનો અભ્યાસ કરો",
                "તમારા લક્ષણો પર નજર રાખો અને આરોગ્ય ડાયરી રાખો",
                "જો લક્ષણો ચાલુ રહે અથવા બગડે, તો આરોગ્ય વ્યાવસાયિકની સલાહ લો",
                "નિયમિત કસરત (દૈનિક 30 મિનિટ) એકંદર આરોગ્યમાં સુધારો કરી શકે છે",
            ),
            when_to_seek_help="જો લક્ષણો બગડે અથવા ચાલુ રહે",
        ),
    }),
})


# ============================================================================
# Intent rules (multi-intent path)
# ============================================================================

INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(rule_id="medical", intent=Intent.MEDICAL, template="medical"),
    IntentRule(
        rule_id="meal_low_carb",
        intent=Intent.NUTRITION,
        modifier=Modifier.LOW_CARB,
        excluded_modifiers=frozenset({Modifier.BREAKFAST, Modifier.BARCODE}),
        template="meal_low_carb",
    ),
    IntentRule(
        rule_id="meal_general",
        intent=Intent.NUTRITION,
        excluded_modifiers=frozenset({Modifier.LOW_CARB, Modifier.BREAKFAST, Modifier.BARCODE}),
        template="meal_general",
    ),
    IntentRule(rule_id="workout_morning", intent=Intent.FITNESS, modifier=Modifier.MORNING, template="workout_morning"),
    IntentRule(
        rule_id="workout_general",
        intent=Intent.FITNESS,
        excluded_modifiers=frozenset({Modifier.MORNING}),
        template="workout_general",
    ),
    IntentRule(
        rule_id="breakfast",
        modifier=Modifier.BREAKFAST,
        excluded_modifiers=frozenset({Modifier.BARCODE}),
        template="breakfast",
    ),
    IntentRule(rule_id="barcode", modifier=Modifier.BARCODE, template="barcode"),
    IntentRule(rule_id="appointment", intent=Intent.SCHEDULING, template="appointment"),
    IntentRule(rule_id="tracking", intent=Intent.TRACKING, template="tracking"),
)

# Intents that send a turn down the multi-intent path
MULTI_INTENT_TRIGGERS: frozenset[Intent] = frozenset({
    Intent.NUTRITION,
    Intent.FITNESS,
    Intent.SCHEDULING,
    Intent.TRACKING,
})


def is_multi_intent(intents: frozenset[Intent], modifiers: frozenset[Modifier]) -> bool:
    """Multi-intent when any non-medical intent or a barcode request is present."""
    return bool(intents & MULTI_INTENT_TRIGGERS) or Modifier.BARCODE in modifiers


def get_rule_text(rule_id: str, language: Language) -> tuple[RuleText, bool]:
    """
    Return the localized text for a rule and whether it is in the requested language.

    Missing languages fall back to English with a warning.
    """
    texts = RULE_TEXTS[rule_id]
    if language in texts:
        return texts[language], True
    logger.warning("Missing rule translation, using default language", rule_id=rule_id, language=language.value)
    return texts[EN], False


# ============================================================================
# Catalog validation
# ============================================================================

def validate_rule_catalog(strict: bool = False) -> list[str]:
    """
    Check that every rule has text in every language and the table is well formed.

    Args:
        strict: Raise RuleCatalogError instead of only logging problems

    Returns:
        List of problem descriptions (empty when the catalog is complete)
    """
    problems: list[str] = []

    fallbacks = [rule for rule in INFERENCE_RULES if rule.is_fallback]
    if len(fallbacks) != 1 or not INFERENCE_RULES[-1].is_fallback:
        problems.append("exactly one fallback rule must exist and it must be last")

    sizes = [len(rule.required_symptoms) for rule in INFERENCE_RULES]
    if sizes != sorted(sizes, reverse=True):
        problems.append("symptom rules must be ordered most specific first")

    for rule in INFERENCE_RULES:
        texts = RULE_TEXTS.get(rule.rule_id)
        if texts is None:
            problems.append(f"rule {rule.rule_id} has no texts")
            continue
        for language in Language:
            text = texts.get(language)
            if text is None:
                problems.append(f"rule {rule.rule_id} missing language {language.value}")
                continue
            for variant in rule.variants:
                if variant.variant_id not in text.variant_ids:
                    problems.append(
                        f"rule {rule.rule_id} missing variant {variant.variant_id} in {language.value}"
                    )

    for key, language in missing_translations():
        problems.append(f"message {key} missing language {language.value}")

    if problems:
        if strict:
            raise RuleCatalogError("; ".join(problems))
        for problem in problems:
            logger.warning("Rule catalog incomplete", problem=problem)
    else:
        logger.info("Rule catalog validated", rules=len(INFERENCE_RULES), intent_rules=len(INTENT_RULES))

    return problems
