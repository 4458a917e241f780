"""Shared fixtures for the wellness assistant tests."""

import pytest
from fastapi.testclient import TestClient

from database.user_repository import InMemoryUserRepository, get_user_repository
from models.wellness_models import Language, RawInput
from services.fact_extractor import FactExtractor
from services.response_assembler import ResponseAssembler
from services.rule_matcher import RuleMatcher
from services.safety_classifier import SafetyClassifier
from services.session_store import SessionStore, get_session_store
from services.wellness_engine import WellnessEngine


@pytest.fixture
def extractor() -> FactExtractor:
    return FactExtractor()


@pytest.fixture
def classifier() -> SafetyClassifier:
    return SafetyClassifier()


@pytest.fixture
def matcher() -> RuleMatcher:
    return RuleMatcher()


@pytest.fixture
def assembler() -> ResponseAssembler:
    return ResponseAssembler()


@pytest.fixture
def engine(extractor, classifier, matcher, assembler) -> WellnessEngine:
    return WellnessEngine(extractor, classifier, matcher, assembler)


@pytest.fixture
def ask(engine):
    """Run one turn through the engine and return the response."""
    def _ask(text: str, language: Language = Language.EN, context=None, **known):
        return engine.respond(RawInput(text=text, language=language, **known), context).response
    return _ask


@pytest.fixture
def client():
    from main import app

    sessions = SessionStore()
    users = InMemoryUserRepository()
    app.dependency_overrides[get_session_store] = lambda: sessions
    app.dependency_overrides[get_user_repository] = lambda: users
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
