"""Tests for user profile validation."""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from models.user_models import UserProfile, UserProfileCreate
from models.wellness_models import Gender


def _profile(**overrides) -> UserProfile:
    now = datetime.now(timezone.utc)
    data = {"name": "Asha", "email": "asha@example.com", **overrides}
    return UserProfile(id="u1", created_at=now, updated_at=now, **data)


class TestUserProfileCreate:
    def test_email_is_normalized(self):
        profile = UserProfileCreate(name="  Asha ", email="  Asha@Example.COM ")
        assert profile.name == "Asha"
        assert profile.email == "asha@example.com"

    @pytest.mark.parametrize(
        "email",
        ["not-an-email", "a@b", "a b@c.com", "a@b@c.com", "x@@y.io", "<script>@a.b", "a@b..c"],
    )
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValidationError, match="valid email address"):
            UserProfileCreate(name="Asha", email=email)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Name is required"):
            UserProfileCreate(name="   ", email="asha@example.com")

    def test_future_date_of_birth_rejected(self):
        with pytest.raises(ValidationError, match="future"):
            UserProfileCreate(
                name="Asha",
                email="asha@example.com",
                date_of_birth=date.today() + timedelta(days=1),
            )

    def test_list_limits(self):
        with pytest.raises(ValidationError):
            UserProfileCreate(name="Asha", email="asha@example.com", health_goals=["g"] * 11)
        with pytest.raises(ValidationError):
            UserProfileCreate(name="Asha", email="asha@example.com", medical_conditions=["c"] * 21)

    def test_unknown_gender_rejected(self):
        with pytest.raises(ValidationError):
            UserProfileCreate(name="Asha", email="asha@example.com", gender="unknown")


class TestProfileContext:
    def test_age_on_birthday_boundary(self):
        profile = _profile(date_of_birth=date(1990, 6, 15))
        assert profile.age_on(date(2020, 6, 14)) == 29
        assert profile.age_on(date(2020, 6, 15)) == 30

    def test_health_context_from_profile(self):
        profile = _profile(
            date_of_birth=date(1950, 1, 1),
            gender="female",
            medical_conditions=["asthma"],
        )
        context = profile.to_health_context(today=date(2024, 1, 1))
        assert context.age == 74
        assert context.gender == Gender.FEMALE
        assert context.medical_history == {"asthma"}

    def test_empty_profile_gives_empty_context(self):
        context = _profile().to_health_context()
        assert context.age is None
        assert context.gender == Gender.UNKNOWN
        assert not context.has_demographics
