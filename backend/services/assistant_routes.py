"""
HTTP routes for the wellness assistant.

Thin layer over WellnessEngine: resolves the response language, loads and
saves the per-user session context, and returns the structured response.
"""

from fastapi import APIRouter, Depends

from config.config import Settings, get_settings
from config.logging_config import get_logger
from database.user_repository import UserRepository, get_user_repository
from models.api_models import (
    AssistantRequest,
    BarcodeRequest,
    SessionClearedResponse,
    WelcomeResponse,
)
from models.wellness_models import HealthContext, Language, RawInput, StructuredResponse
from services.session_store import SessionStore, get_session_store
from services.translations import translate
from services.wellness_engine import WellnessEngine, get_wellness_engine

router = APIRouter(prefix="/api/assistant", tags=["Assistant"])
logger = get_logger(__name__)


def resolve_language(requested: Language | None, settings: Settings) -> Language:
    return requested or Language(settings.default_language)


def load_context(user_id: str, sessions: SessionStore, users: UserRepository) -> HealthContext | None:
    """Live session context, else one seeded from a stored profile."""
    context = sessions.get(user_id)
    if context is not None:
        return context
    profile = users.find(user_id)
    if profile is None:
        return None
    logger.info("Session seeded from profile", user_id=user_id)
    return profile.to_health_context()


@router.post("/respond", response_model=StructuredResponse)
async def respond(
    request: AssistantRequest,
    settings: Settings = Depends(get_settings),
    engine: WellnessEngine = Depends(get_wellness_engine),
    sessions: SessionStore = Depends(get_session_store),
    users: UserRepository = Depends(get_user_repository),
) -> StructuredResponse:
    """
    Answer one user message.

    Unrecognized input gets generic wellness advice; emergencies get the
    fixed urgent payload with local emergency numbers.

    Example messages:
    - "I'm a 28-year-old male with fever and cough for 3 days"
    - "I have a mild fever, want a low-carb lunch, and a home workout"
    - "मुझे बुखार और खांसी है"
    """
    language = resolve_language(request.language, settings)
    logger.info("Assistant request", language=language.value, message_preview=request.text[:100])

    # No await between load and save, so turns for one user cannot interleave
    context = load_context(request.user_id, sessions, users) if request.user_id else None
    result = engine.respond(
        RawInput(
            text=request.text,
            language=language,
            known_age=request.known_age,
            known_gender=request.known_gender,
            medical_history=frozenset(request.medical_history),
        ),
        context,
    )
    if request.user_id:
        sessions.save(request.user_id, result.context)

    return result.response


@router.post("/barcode", response_model=StructuredResponse)
async def scan_barcode(
    request: BarcodeRequest,
    settings: Settings = Depends(get_settings),
    engine: WellnessEngine = Depends(get_wellness_engine),
) -> StructuredResponse:
    """Nutrition analysis for a scanned product (static sample data)."""
    language = resolve_language(request.language, settings)
    logger.info("Barcode scan", barcode=request.barcode, language=language.value)
    return engine.scan_barcode(request.barcode, language)


@router.get("/welcome", response_model=WelcomeResponse)
async def welcome(
    language: Language | None = None,
    settings: Settings = Depends(get_settings),
) -> WelcomeResponse:
    language = resolve_language(language, settings)
    return WelcomeResponse(
        language=language,
        welcome_message=translate("welcome", language),
        example_prompts=list(translate("welcome_prompts", language)),
        disclaimer=translate("disclaimer", language),
    )


@router.delete("/sessions/{user_id}", response_model=SessionClearedResponse)
async def clear_session(
    user_id: str,
    sessions: SessionStore = Depends(get_session_store),
) -> SessionClearedResponse:
    """Forget the age, gender and history collected for a user."""
    cleared = sessions.clear_session(user_id)
    logger.info("Session cleared", user_id=user_id, existed=cleared)
    return SessionClearedResponse(user_id=user_id, cleared=cleared)
