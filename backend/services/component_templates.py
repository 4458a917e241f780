"""
Static component templates for the multi-intent path.

Every template turns extracted facts into exactly one ResponseComponent
built from fixed example data. A builder returns None when it cannot
produce a complete component; the caller then omits that intent.
"""

from types import MappingProxyType
from typing import Callable, Mapping

from config.logging_config import get_logger
from models.rule_models import MatchResult
from models.wellness_models import (
    AppointmentBookingComponent,
    AppointmentSlot,
    BarcodeScanComponent,
    Exercise,
    ExtractedFacts,
    Language,
    Meal,
    MealSuggestionComponent,
    MedicalAdviceComponent,
    NutritionBreakdown,
    Priority,
    ProductInfo,
    ResponseComponent,
    TrackingMetric,
    WellnessTrackingComponent,
    WorkoutPlanComponent,
)
from services.rule_table import INTENT_RULES
from services.translations import translate

logger = get_logger(__name__)

DEFAULT_WORKOUT_MINUTES = 15
CALORIES_PER_MINUTE = 8


# ============================================================================
# Static data
# ============================================================================

LOW_CARB_MEALS: tuple[Meal, ...] = (
    Meal(
        name="Grilled Chicken Salad",
        description="Fresh mixed greens with grilled chicken and avocado",
        category="lunch",
        calories=320,
        prep_time="15 min",
        difficulty="easy",
        ingredients=("chicken breast", "mixed greens", "avocado", "olive oil", "lemon"),
        dietary_tags=("low-carb", "high-protein", "gluten-free"),
    ),
    Meal(
        name="Cauliflower Rice Bowl",
        description="Cauliflower rice with broccoli and almonds",
        category="lunch",
        calories=280,
        prep_time="20 min",
        difficulty="easy",
        ingredients=("cauliflower rice", "broccoli", "almonds", "lemon", "olive oil"),
        dietary_tags=("low-carb", "vegetarian", "gluten-free"),
        allergens=("nuts",),
    ),
)

BREAKFAST_MEALS: tuple[Meal, ...] = (
    Meal(
        name="Protein Oatmeal Bowl",
        description="Energizing oatmeal with protein powder and toppings",
        category="breakfast",
        calories=350,
        prep_time="10 min",
        difficulty="easy",
        ingredients=("oats", "protein powder", "banana", "almonds", "honey"),
        dietary_tags=("high-protein", "fiber-rich", "energy-boosting"),
        allergens=("nuts",),
    ),
    Meal(
        name="Green Smoothie Bowl",
        description="Nutrient-packed smoothie bowl with fresh toppings",
        category="breakfast",
        calories=280,
        prep_time="5 min",
        difficulty="easy",
        ingredients=("spinach", "banana", "mango", "protein powder", "coconut milk"),
        dietary_tags=("vegetarian", "vitamin-rich", "quick-prep"),
    ),
)

GENERAL_MEALS: tuple[Meal, ...] = (
    Meal(
        name="Mediterranean Quinoa Bowl",
        description="Nutritious quinoa bowl with Mediterranean flavors",
        category="lunch",
        calories=420,
        prep_time="25 min",
        difficulty="moderate",
        ingredients=("quinoa", "cherry tomatoes", "cucumber", "feta cheese", "olives", "olive oil"),
        dietary_tags=("vegetarian", "mediterranean", "balanced"),
        allergens=("dairy",),
    ),
)

MORNING_EXERCISES: tuple[Exercise, ...] = (
    Exercise(
        name="Sun Salutations",
        reps="3 minutes",
        instructions=(
            "Start in mountain pose",
            "Reach arms up and back",
            "Fold forward to touch toes",
            "Step back to plank",
            "Lower to cobra pose",
            "Return to downward dog",
            "Step forward and rise up",
        ),
    ),
    Exercise(
        name="High Knees",
        reps="2 minutes",
        instructions=(
            "Stand tall with feet hip-width apart",
            "Lift knees up to hip level",
            "Pump arms naturally",
            "Maintain quick pace",
        ),
    ),
    Exercise(
        name="Bodyweight Squats",
        reps="2 minutes",
        instructions=(
            "Stand with feet shoulder-width apart",
            "Lower down as if sitting in chair",
            "Keep chest up and core engaged",
            "Return to standing position",
        ),
    ),
)

GENERAL_EXERCISES: tuple[Exercise, ...] = (
    Exercise(
        name="Jumping Jacks",
        reps="1 minute",
        instructions=(
            "Start standing",
            "Jump feet apart while raising arms",
            "Return to start position",
            "Maintain steady rhythm",
        ),
    ),
    Exercise(
        name="Push-ups",
        reps="1 minute",
        instructions=(
            "Start in plank position",
            "Lower chest to ground",
            "Push back up to start",
            "Keep core engaged",
        ),
    ),
    Exercise(
        name="Mountain Climbers",
        reps="1 minute",
        instructions=(
            "Start in plank position",
            "Alternate bringing knees to chest",
            "Maintain plank position",
            "Keep core tight",
        ),
    ),
)

SAMPLE_PRODUCT = ProductInfo(
    name="Organic Granola Bars",
    brand="Nature's Valley",
    barcode="1234567890123",
    is_healthy=True,
    health_score=7,
    nutrition=NutritionBreakdown(
        calories=190, protein=4, carbs=29, fat=7, fiber=3, sugar=12, sodium=140,
    ),
    recommendations=(
        "Good source of fiber",
        "Contains natural sugars",
        "Moderate portion size recommended",
    ),
    alternatives=(
        "Homemade granola bars",
        "Mixed nuts and dried fruit",
        "Greek yogurt with berries",
    ),
)

APPOINTMENT_SLOTS: tuple[AppointmentSlot, ...] = (
    AppointmentSlot(
        doctor="Dr. Emily Chen",
        specialty="General Medicine",
        location="City Health Clinic",
        day_offset=1,
        time="11:00",
        duration_minutes=30,
    ),
    AppointmentSlot(
        doctor="Dr. Sarah Wilson",
        specialty="Gynecology",
        location="Downtown Medical Center",
        day_offset=2,
        time="14:00",
        duration_minutes=30,
    ),
    AppointmentSlot(
        doctor="Dr. Michael Rodriguez",
        specialty="Dermatology",
        location="Skin Care Institute",
        day_offset=3,
        time="09:30",
        duration_minutes=30,
    ),
)

TRACKING_METRICS: tuple[TrackingMetric, ...] = (
    TrackingMetric(name="Water intake", target="8-10", unit="glasses/day"),
    TrackingMetric(name="Sleep", target="7-8", unit="hours/night"),
    TrackingMetric(name="Activity", target="30", unit="minutes/day"),
    TrackingMetric(name="Cycle length", target="28", unit="days"),
)


# ============================================================================
# Builders
# ============================================================================

def _text(template: str, field: str, language: Language, **values) -> str:
    value = translate(f"template.{template}.{field}", language)
    return value.format(**values) if values else value


def template_summary(template: str, language: Language) -> str:
    """Localized one-sentence summary for a template's component."""
    return _text(template, "summary", language)


def _medical(facts: ExtractedFacts, language: Language, match: MatchResult | None) -> ResponseComponent | None:
    if match is None:
        return None
    return MedicalAdviceComponent(
        title=match.title,
        description=translate("medical_description", language),
        priority=Priority.HIGH,
        conditions=match.conditions,
        recommendations=match.advice,
        when_to_seek_help=match.when_to_seek_help,
        safety_level=match.rule.safety_level,
    )


def _meals(template: str, meals: tuple[Meal, ...]):
    def build(facts: ExtractedFacts, language: Language, match: MatchResult | None) -> ResponseComponent | None:
        if not meals:
            return None
        return MealSuggestionComponent(
            title=_text(template, "title", language),
            description=_text(template, "description", language),
            meals=meals,
        )
    return build


def _workout(template: str, exercises: tuple[Exercise, ...]):
    def build(facts: ExtractedFacts, language: Language, match: MatchResult | None) -> ResponseComponent | None:
        if not exercises:
            return None
        minutes = facts.duration_minutes or DEFAULT_WORKOUT_MINUTES
        return WorkoutPlanComponent(
            title=_text(template, "title", language, minutes=minutes),
            description=_text(template, "description", language),
            priority=Priority.HIGH,
            exercises=exercises,
            duration_minutes=minutes,
            calories_burned=minutes * CALORIES_PER_MINUTE,
        )
    return build


def _barcode(facts: ExtractedFacts, language: Language, match: MatchResult | None) -> ResponseComponent | None:
    return BarcodeScanComponent(
        title=_text("barcode", "title", language),
        description=_text("barcode", "description", language),
        product=SAMPLE_PRODUCT,
    )


def _appointment(facts: ExtractedFacts, language: Language, match: MatchResult | None) -> ResponseComponent | None:
    if not APPOINTMENT_SLOTS:
        return None
    return AppointmentBookingComponent(
        title=_text("appointment", "title", language),
        description=_text("appointment", "description", language),
        slots=APPOINTMENT_SLOTS,
    )


def _tracking(facts: ExtractedFacts, language: Language, match: MatchResult | None) -> ResponseComponent | None:
    if not TRACKING_METRICS:
        return None
    return WellnessTrackingComponent(
        title=_text("tracking", "title", language),
        description=_text("tracking", "description", language),
        priority=Priority.LOW,
        metrics=TRACKING_METRICS,
    )


TemplateBuilder = Callable[[ExtractedFacts, Language, MatchResult | None], ResponseComponent | None]

TEMPLATES: Mapping[str, TemplateBuilder] = MappingProxyType({
    "medical": _medical,
    "meal_low_carb": _meals("meal_low_carb", LOW_CARB_MEALS),
    "meal_general": _meals("meal_general", GENERAL_MEALS),
    "breakfast": _meals("breakfast", BREAKFAST_MEALS),
    "workout_morning": _workout("workout_morning", MORNING_EXERCISES),
    "workout_general": _workout("workout_general", GENERAL_EXERCISES),
    "barcode": _barcode,
    "appointment": _appointment,
    "tracking": _tracking,
})


def build_component(
    template: str,
    facts: ExtractedFacts,
    language: Language,
    match: MatchResult | None = None,
) -> ResponseComponent | None:
    """Build one component, or None when the template has nothing to offer."""
    component = TEMPLATES[template](facts, language, match)
    if component is None:
        logger.info("Template unavailable, omitting component", template=template)
    return component


def _check_registry() -> None:
    missing = {rule.template for rule in INTENT_RULES} - set(TEMPLATES)
    if missing:
        raise RuntimeError(f"Intent rules reference unknown templates: {sorted(missing)}")


_check_registry()
