"""
Localized user-facing strings that are not tied to a specific rule.

Every entry maps a message key to one string (or tuple of strings) per
language. Lookups fall back to English when a language is missing; the
fallback is logged so gaps are visible without failing the request.
"""

from types import MappingProxyType
from typing import Mapping

from config.logging_config import get_logger
from models.wellness_models import DEFAULT_LANGUAGE, ComponentType, Language

logger = get_logger(__name__)

EN, HI, GU = Language.EN, Language.HI, Language.GU

Translation = Mapping[Language, str | tuple[str, ...]]


def _freeze(table: dict) -> Mapping[str, Translation]:
    return MappingProxyType({
        key: MappingProxyType({
            lang: tuple(value) if isinstance(value, list) else value
            for lang, value in by_language.items()
        })
        for key, by_language in table.items()
    })


MESSAGES: Mapping[str, Translation] = _freeze({
    "disclaimer": {
        EN: "⚠ This is AI-based wellness guidance, not a substitute for a licensed professional. "
            "Please consult a certified doctor for confirmation.",
        HI: "⚠ यह AI-आधारित कल्याण मार्गदर्शन है, किसी लाइसेंस प्राप्त पेशेवर का विकल्प नहीं। "
            "कृपया पुष्टि के लिए प्रमाणित डॉक्टर से सलाह लें।",
        GU: "⚠ આ AI-આધારિત કલ્યાણ માર્ગદર્શન છે, લાયસન્સ ધરાવતા વ્યાવસાયિકનો વિકલ્પ નથી. "
            "કૃપા કરીને પુષ્ટિ માટે પ્રમાણિત ડૉક્ટર સાથે સલાહ લો.",
    },
    "emergency_message": {
        EN: "🚨 URGENT MEDICAL EMERGENCY 🚨 Based on your symptoms, this requires immediate "
            "medical attention. Call emergency services ({number}) right now.",
        HI: "🚨 तत्काल चिकित्सा आपातकाल 🚨 आपके लक्षणों के आधार पर, इसके लिए तुरंत चिकित्सा "
            "सहायता की आवश्यकता है। आपातकालीन सेवाओं ({number}) को अभी कॉल करें।",
        GU: "🚨 તાત્કાલિક તબીબી આપત્કાલ 🚨 તમારા લક્ષણોના આધારે, આને તાત્કાલિક તબીબી મદદની "
            "જરૂર છે. આપત્તિ સેવાઓ ({number}) ને હમણાં જ કૉલ કરો.",
    },
    "emergency_actions": {
        EN: [
            "Call emergency services ({number}) RIGHT NOW",
            "Go to the nearest emergency room immediately",
            "Do not drive yourself - call an ambulance or have someone drive you",
        ],
        HI: [
            "आपातकालीन सेवाओं ({number}) को अभी कॉल करें",
            "तुरंत निकटतम आपातकालीन कक्ष में जाएं",
            "खुद गाड़ी न चलाएं - एम्बुलेंस बुलाएं या किसी को चलाने को कहें",
        ],
        GU: [
            "આપત્તિ સેવાઓ ({number}) ને હમણાં જ કૉલ કરો",
            "તાત્કાલિક નજીકના આપત્તિ વિભાગમાં જાઓ",
            "પોતે ગાડી ન ચલાવો - એમ્બ્યુલન્સ બોલાવો અથવા કોઈને ચલાવવા કહો",
        ],
    },
    "emergency_suggestions": {
        EN: ["Call emergency services now"],
        HI: ["अभी आपातकालीन सेवाओं को कॉल करें"],
        GU: ["હમણાં જ આપત્તિ સેવાઓને કૉલ કરો"],
    },
    "assessment_summary": {
        EN: "Based on your symptoms, possible conditions include: {conditions}.",
        HI: "आपके लक्षणों के आधार पर संभावित स्थितियां: {conditions}।",
        GU: "તમારા લક્ષણોના આધારે સંભવિત સ્થિતિઓ: {conditions}.",
    },
    "assessment_next_steps": {
        EN: [
            "Monitor your symptoms closely",
            "Follow the recommended care instructions",
            "Seek medical help if your symptoms get worse",
        ],
        HI: [
            "अपने लक्षणों पर बारीकी से नजर रखें",
            "बताए गए देखभाल निर्देशों का पालन करें",
            "यदि लक्षण बिगड़ें तो चिकित्सा सहायता लें",
        ],
        GU: [
            "તમારા લક્ષણો પર નજીકથી ધ્યાન રાખો",
            "ભલામણ કરેલી સંભાળ સૂચનાઓનું પાલન કરો",
            "જો લક્ષણો બગડે તો તબીબી મદદ લો",
        ],
    },
    "assessment_suggestions": {
        EN: [
            "Monitor symptoms closely",
            "Follow the advice given",
            "Consult doctor if symptoms worsen",
            "Ask for clarification",
        ],
        HI: [
            "लक्षणों पर बारीकी से नजर रखें",
            "दी गई सलाह का पालन करें",
            "यदि लक्षण बिगड़ें तो डॉक्टर से मिलें",
            "स्पष्टीकरण मांगें",
        ],
        GU: [
            "લક્ષણો પર નજીકથી ધ્યાન રાખો",
            "આપેલ સલાહનું પાલન કરો",
            "જો લક્ષણો બગડે તો ડૉક્ટરને મળો",
            "સ્પષ્ટીકરણ માંગો",
        ],
    },
    "share_demographics": {
        EN: "Share your age and gender for more personalized advice",
        HI: "अधिक व्यक्तिगत सलाह के लिए अपनी उम्र और लिंग बताएं",
        GU: "વધુ વ્યક્તિગત સલાહ માટે તમારી ઉંમર અને લિંગ જણાવો",
    },
    "multi_default_summary": {
        EN: "I've provided comprehensive guidance based on your request.",
        HI: "मैंने आपके अनुरोध के आधार पर व्यापक मार्गदर्शन दिया है।",
        GU: "મેં તમારી વિનંતીના આધારે વ્યાપક માર્ગદર્શન આપ્યું છે.",
    },
    "medical_description": {
        EN: "Guidance for managing your symptoms",
        HI: "आपके लक्षणों के प्रबंधन के लिए मार्गदर्शन",
        GU: "તમારા લક્ષણોના સંચાલન માટે માર્ગદર્શન",
    },
    "barcode_summary": {
        EN: "This is a healthy snack option with good nutritional value and a good balance of nutrients.",
        HI: "यह अच्छे पोषण मूल्य और संतुलित पोषक तत्वों वाला एक स्वस्थ स्नैक विकल्प है।",
        GU: "આ સારા પોષણ મૂલ્ય અને સંતુલિત પોષક તત્વો ધરાવતો આરોગ્યપ્રદ નાસ્તાનો વિકલ્પ છે.",
    },

    # Component templates: title, description and the summary sentence
    "template.medical.summary": {
        EN: "I've provided guidance for managing your symptoms.",
        HI: "मैंने आपके लक्षणों के प्रबंधन के लिए मार्गदर्शन दिया है।",
        GU: "મેં તમારા લક્ષણોના સંચાલન માટે માર્ગદર્શન આપ્યું છે.",
    },
    "template.meal_general.title": {
        EN: "Healthy Meal Suggestions",
        HI: "स्वस्थ भोजन सुझाव",
        GU: "આરોગ્યપ્રદ ભોજન સૂચનો",
    },
    "template.meal_general.description": {
        EN: "Nutritious meal recommendations",
        HI: "पौष्टिक भोजन की सिफारिशें",
        GU: "પૌષ્ટિક ભોજનની ભલામણો",
    },
    "template.meal_general.summary": {
        EN: "I've suggested healthy meal options.",
        HI: "मैंने स्वस्थ भोजन विकल्प सुझाए हैं।",
        GU: "મેં આરોગ્યપ્રદ ભોજન વિકલ્પો સૂચવ્યા છે.",
    },
    "template.meal_low_carb.title": {
        EN: "Low-Carb Lunch Options",
        HI: "कम कार्ब लंच विकल्प",
        GU: "ઓછા કાર્બ લંચ વિકલ્પો",
    },
    "template.meal_low_carb.description": {
        EN: "Healthy low-carb lunch suggestions",
        HI: "स्वस्थ कम कार्ब लंच सुझाव",
        GU: "આરોગ્યપ્રદ ઓછા કાર્બ લંચ સૂચનો",
    },
    "template.meal_low_carb.summary": {
        EN: "I've suggested healthy low-carb meal options.",
        HI: "मैंने स्वस्थ कम कार्ब भोजन विकल्प सुझाए हैं।",
        GU: "મેં આરોગ્યપ્રદ ઓછા કાર્બ ભોજન વિકલ્પો સૂચવ્યા છે.",
    },
    "template.breakfast.title": {
        EN: "Energizing Breakfast Options",
        HI: "ऊर्जा देने वाले नाश्ते के विकल्प",
        GU: "ઊર્જા આપતા નાસ્તાના વિકલ્પો",
    },
    "template.breakfast.description": {
        EN: "Breakfast ideas to fuel your morning",
        HI: "आपकी सुबह को ऊर्जा देने के लिए नाश्ते के विचार",
        GU: "તમારી સવારને ઊર્જા આપવા માટે નાસ્તાના વિચારો",
    },
    "template.breakfast.summary": {
        EN: "I've suggested energizing breakfast meal options.",
        HI: "मैंने ऊर्जा देने वाले नाश्ते के विकल्प सुझाए हैं।",
        GU: "મેં ઊર્જા આપતા નાસ્તાના વિકલ્પો સૂચવ્યા છે.",
    },
    "template.workout_general.title": {
        EN: "{minutes}-Minute Home Workout",
        HI: "{minutes} मिनट का घरेलू वर्कआउट",
        GU: "{minutes} મિનિટનો ઘરેલુ વર્કઆઉટ",
    },
    "template.workout_general.description": {
        EN: "Effective home workout routine",
        HI: "प्रभावी घरेलू वर्कआउट दिनचर्या",
        GU: "અસરકારક ઘરેલુ વર્કઆઉટ દિનચર્યા",
    },
    "template.workout_general.summary": {
        EN: "I've created a workout plan for you.",
        HI: "मैंने आपके लिए एक वर्कआउट योजना बनाई है।",
        GU: "મેં તમારા માટે વર્કઆઉટ યોજના બનાવી છે.",
    },
    "template.workout_morning.title": {
        EN: "{minutes}-Minute Morning Energy Workout",
        HI: "{minutes} मिनट का सुबह का ऊर्जा वर्कआउट",
        GU: "{minutes} મિનિટનો સવારનો ઊર્જા વર્કઆઉટ",
    },
    "template.workout_morning.description": {
        EN: "Quick morning routine to boost energy",
        HI: "ऊर्जा बढ़ाने के लिए सुबह की त्वरित दिनचर्या",
        GU: "ઊર્જા વધારવા માટે સવારની ઝડપી દિનચર્યા",
    },
    "template.workout_morning.summary": {
        EN: "I've created a morning workout plan for you.",
        HI: "मैंने आपके लिए सुबह की वर्कआउट योजना बनाई है।",
        GU: "મેં તમારા માટે સવારની વર્કઆઉટ યોજના બનાવી છે.",
    },
    "template.barcode.title": {
        EN: "Food Product Analysis",
        HI: "खाद्य उत्पाद विश्लेषण",
        GU: "ખાદ્ય ઉત્પાદન વિશ્લેષણ",
    },
    "template.barcode.description": {
        EN: "Nutritional analysis of scanned product",
        HI: "स्कैन किए गए उत्पाद का पोषण विश्लेषण",
        GU: "સ્કેન કરેલા ઉત્પાદનનું પોષણ વિશ્લેષણ",
    },
    "template.barcode.summary": {
        EN: "I've analysed the nutrition of the scanned product.",
        HI: "मैंने स्कैन किए गए उत्पाद के पोषण का विश्लेषण किया है।",
        GU: "મેં સ્કેન કરેલા ઉત્પાદનના પોષણનું વિશ્લેષણ કર્યું છે.",
    },
    "template.appointment.title": {
        EN: "Book a Doctor Appointment",
        HI: "डॉक्टर का अपॉइंटमेंट बुक करें",
        GU: "ડૉક્ટરની અપોઇન્ટમેન્ટ બુક કરો",
    },
    "template.appointment.description": {
        EN: "Available consultation slots",
        HI: "उपलब्ध परामर्श स्लॉट",
        GU: "ઉપલબ્ધ પરામર્શ સ્લોટ",
    },
    "template.appointment.summary": {
        EN: "I've found available appointment slots.",
        HI: "मैंने उपलब्ध अपॉइंटमेंट स्लॉट ढूंढे हैं।",
        GU: "મેં ઉપલબ્ધ અપોઇન્ટમેન્ટ સ્લોટ શોધ્યા છે.",
    },
    "template.tracking.title": {
        EN: "Wellness Tracking",
        HI: "कल्याण ट्रैकिंग",
        GU: "કલ્યાણ ટ્રેકિંગ",
    },
    "template.tracking.description": {
        EN: "Daily targets to track your progress",
        HI: "आपकी प्रगति ट्रैक करने के लिए दैनिक लक्ष्य",
        GU: "તમારી પ્રગતિ ટ્રેક કરવા માટે દૈનિક લક્ષ્યો",
    },
    "template.tracking.summary": {
        EN: "I've set up wellness tracking targets for you.",
        HI: "मैंने आपके लिए कल्याण ट्रैकिंग लक्ष्य तय किए हैं।",
        GU: "મેં તમારા માટે કલ્યાણ ટ્રેકિંગ લક્ષ્યો નક્કી કર્યા છે.",
    },

    # Per component type next steps and follow-up suggestions
    "next_steps.medical_advice": {
        EN: ["Monitor your symptoms closely", "Follow the recommended care instructions"],
        HI: ["अपने लक्षणों पर बारीकी से नजर रखें", "बताए गए देखभाल निर्देशों का पालन करें"],
        GU: ["તમારા લક્ષણો પર નજીકથી ધ્યાન રાખો", "ભલામણ કરેલી સંભાળ સૂચનાઓનું પાલન કરો"],
    },
    "next_steps.meal_suggestion": {
        EN: ["Choose one of the suggested meals", "Gather the required ingredients"],
        HI: ["सुझाए गए भोजन में से एक चुनें", "आवश्यक सामग्री इकट्ठा करें"],
        GU: ["સૂચવેલા ભોજનમાંથી એક પસંદ કરો", "જરૂરી સામગ્રી એકત્ર કરો"],
    },
    "next_steps.workout_plan": {
        EN: ["Complete the suggested workout", "Track your progress"],
        HI: ["सुझाया गया वर्कआउट पूरा करें", "अपनी प्रगति ट्रैक करें"],
        GU: ["સૂચવેલ વર્કઆઉટ પૂર્ણ કરો", "તમારી પ્રગતિ ટ્રેક કરો"],
    },
    "next_steps.barcode_scan": {
        EN: ["Compare with the suggested alternatives", "Watch your portion size"],
        HI: ["सुझाए गए विकल्पों से तुलना करें", "अपने हिस्से के आकार पर ध्यान दें"],
        GU: ["સૂચવેલા વિકલ્પો સાથે સરખામણી કરો", "તમારા ભાગના કદ પર ધ્યાન આપો"],
    },
    "next_steps.appointment_booking": {
        EN: ["Pick a convenient time slot", "Prepare a list of your symptoms and questions"],
        HI: ["सुविधाजनक समय स्लॉट चुनें", "अपने लक्षणों और प्रश्नों की सूची तैयार करें"],
        GU: ["અનુકૂળ સમય સ્લોટ પસંદ કરો", "તમારા લક્ષણો અને પ્રશ્નોની યાદી તૈયાર કરો"],
    },
    "next_steps.wellness_tracking": {
        EN: ["Log your data every day", "Track your progress"],
        HI: ["हर दिन अपना डेटा दर्ज करें", "अपनी प्रगति ट्रैक करें"],
        GU: ["દરરોજ તમારો ડેટા નોંધો", "તમારી પ્રગતિ ટ્રેક કરો"],
    },
    "suggestions.medical_advice": {
        EN: ["Schedule a doctor visit", "Track symptoms"],
        HI: ["डॉक्टर से मिलने का समय तय करें", "लक्षण ट्रैक करें"],
        GU: ["ડૉક્ટરની મુલાકાત નક્કી કરો", "લક્ષણો ટ્રેક કરો"],
    },
    "suggestions.meal_suggestion": {
        EN: ["Add to meal plan", "Find alternatives"],
        HI: ["भोजन योजना में जोड़ें", "विकल्प खोजें"],
        GU: ["ભોજન યોજનામાં ઉમેરો", "વિકલ્પો શોધો"],
    },
    "suggestions.workout_plan": {
        EN: ["Start workout", "Modify difficulty"],
        HI: ["वर्कआउट शुरू करें", "कठिनाई बदलें"],
        GU: ["વર્કઆઉટ શરૂ કરો", "મુશ્કેલી બદલો"],
    },
    "suggestions.barcode_scan": {
        EN: ["Find alternatives", "View nutrition details", "Add to meal plan"],
        HI: ["विकल्प खोजें", "पोषण विवरण देखें", "भोजन योजना में जोड़ें"],
        GU: ["વિકલ્પો શોધો", "પોષણ વિગતો જુઓ", "ભોજન યોજનામાં ઉમેરો"],
    },
    "suggestions.appointment_booking": {
        EN: ["Confirm appointment", "See more doctors"],
        HI: ["अपॉइंटमेंट की पुष्टि करें", "और डॉक्टर देखें"],
        GU: ["અપોઇન્ટમેન્ટની પુષ્ટિ કરો", "વધુ ડૉક્ટરો જુઓ"],
    },
    "suggestions.wellness_tracking": {
        EN: ["Track my period", "Get health insights"],
        HI: ["मेरा पीरियड ट्रैक करें", "स्वास्थ्य अंतर्दृष्टि प्राप्त करें"],
        GU: ["મારો પીરિયડ ટ્રેક કરો", "આરોગ્ય અંતર્દૃષ્ટિ મેળવો"],
    },

    # Welcome screen
    "welcome": {
        EN: "Hello! I'm your WellnessWave AI assistant 🌊✨ I can help with diet & nutrition, "
            "fitness & exercise, medical assistance, doctor appointments, and wellness tracking. "
            "I support English, Hindi (हिन्दी), and Gujarati (ગુજરાતી). "
            "How can I help you feel your best today?",
        HI: "नमस्ते! मैं आपका वेलनेसवेव AI असिस्टेंट हूं 🌊✨ मैं आहार और पोषण, फिटनेस और व्यायाम, "
            "चिकित्सा सहायता, डॉक्टर की नियुक्ति और कल्याण ट्रैकिंग में मदद कर सकता हूं। "
            "मैं अंग्रेजी, हिन्दी और गुजराती भाषाओं का समर्थन करता हूं। "
            "आज आपको सबसे अच्छा महसूस कराने में मैं कैसे मदद कर सकता हूं?",
        GU: "નમસ્તે! હું તમારો વેલનેસવેવ AI સહાયક છું 🌊✨ હું આહાર અને પોષણ, ફિટનેસ અને વ્યાયામ, "
            "તબીબી સહાય, ડૉક્ટરની નિમણૂક અને કલ્યાણ ટ્રેકિંગમાં મદદ કરી શકું છું. "
            "હું અંગ્રેજી, હિન્દી અને ગુજરાતી ભાષાઓનો સમર્થન કરું છું. "
            "આજે તમને શ્રેષ્ઠ લાગવામાં હું કેવી રીતે મદદ કરી શકું?",
    },
    "welcome_prompts": {
        EN: [
            "I'm a 28-year-old male with fever and cough for 3 days",
            "25-year-old female, headache and nausea, no medical history",
            "I have a mild fever, want a low-carb lunch, and a home workout",
            "Scan this food barcode and tell me if it's healthy",
            "I want a 15-min morning workout and a breakfast for energy",
            "Track my period",
            "Schedule an appointment",
        ],
        HI: [
            "मैं 28 साल का पुरुष हूं, 3 दिन से बुखार और खांसी है",
            "25 साल की महिला, सिरदर्द और मतली, कोई चिकित्सा इतिहास नहीं",
            "मुझे बुखार है, कम कार्ब वाला लंच चाहिए, और घर पर वर्कआउट",
            "इस खाद्य बारकोड को स्कैन करें और बताएं कि यह स्वस्थ है",
            "मुझे 15 मिनट का सुबह का वर्कआउट और ऊर्जा के लिए नाश्ता चाहिए",
            "मेरा पीरियड ट्रैक करें",
            "अपॉइंटमेंट शेड्यूल करें",
        ],
        GU: [
            "હું 28 વર્ષનો પુરુષ છું, 3 દિવસથી બુખાર અને ખાંસી છે",
            "25 વર્ષની મહિલા, માથાનો દુખાવો અને ઉબકા, કોઈ તબીબી ઇતિહાસ નથી",
            "મને થોડો બુખાર છે, ઓછા કાર્બની લંચ જોઈએ, અને ઘરે વર્કઆઉટ",
            "આ ખોરાક બારકોડ સ્કેન કરો અને કહો કે તે આરોગ્યકર છે",
            "મને 15 મિનિટનો સવારનો વર્કઆઉટ અને ઊર્જા માટે નાસ્તો જોઈએ",
            "મારો પીરિયડ ટ્રેક કરો",
            "અપોઇન્ટમેન્ટ શેડ્યૂલ કરો",
        ],
    },
})


def translate(key: str, language: Language):
    """
    Look up a message in the requested language.

    Falls back to English when the language entry is missing. Raises
    KeyError for unknown keys, which is a programming error.
    """
    entry = MESSAGES[key]
    if language in entry:
        return entry[language]
    logger.warning("Missing translation, using default language", key=key, language=language.value)
    return entry[DEFAULT_LANGUAGE]


def missing_translations() -> list[tuple[str, Language]]:
    """List (key, language) pairs that would fall back to English."""
    return [
        (key, language)
        for key, entry in MESSAGES.items()
        for language in Language
        if language not in entry
    ]


def component_next_steps(component_type: ComponentType, language: Language) -> tuple[str, ...]:
    return translate(f"next_steps.{component_type.value}", language)


def component_suggestions(component_type: ComponentType, language: Language) -> tuple[str, ...]:
    return translate(f"suggestions.{component_type.value}", language)


def _check_component_coverage() -> None:
    for component_type in ComponentType:
        for prefix in ("next_steps", "suggestions"):
            if f"{prefix}.{component_type.value}" not in MESSAGES:
                raise RuntimeError(f"No {prefix} defined for component type {component_type.value}")


_check_component_coverage()
