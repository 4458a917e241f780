"""API tests using the FastAPI test client."""

import pytest


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "operational"
        assert data["languages"] == ["en", "hi", "gu"]

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"] == {"api": True, "rule_catalog_complete": True, "user_store": True}

    def test_request_id_header(self, client):
        response = client.get("/health")
        assert response.headers["X-Request-ID"]
        assert "X-Processing-Time-Ms" in response.headers


class TestRespond:
    def test_symptom_assessment(self, client):
        response = client.post("/api/assistant/respond", json={
            "text": "I'm a 28-year-old male with fever and cough for 3 days",
            "language": "en",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["intent"] == "symptom_assessment"
        assert data["safety_level"] == "caution"
        assert "Viral Infection (Common Cold/Flu)" in data["conditions"]
        assert data["advice"]
        assert data["disclaimer"]
        assert data["components"][0]["type"] == "medical_advice"

    @pytest.mark.parametrize("language,number", [("en", "911"), ("hi", "102"), ("gu", "108")])
    def test_emergency(self, client, language, number):
        response = client.post("/api/assistant/respond", json={
            "text": "severe chest pain and can't breathe",
            "language": language,
        })
        data = response.json()
        assert data["intent"] == "emergency"
        assert data["safety_level"] == "urgent"
        assert data["components"] == []
        assert data["emergency_contacts"][0]["number"] == number

    def test_default_language(self, client):
        data = client.post("/api/assistant/respond", json={"text": "fever"}).json()
        assert data["language"] == "en"

    def test_empty_body_gets_fallback(self, client):
        data = client.post("/api/assistant/respond", json={}).json()
        assert data["matched_rule_id"] == "general_wellness"
        assert data["safety_level"] == "safe"

    def test_invalid_language_rejected(self, client):
        response = client.post("/api/assistant/respond", json={"text": "fever", "language": "fr"})
        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["details"]["fields"][0]["field"] == "language"

    def test_multi_intent(self, client):
        data = client.post("/api/assistant/respond", json={
            "text": "Suggest a healthy meal and a workout",
        }).json()
        assert data["intent"] == "multi_intent"
        assert [c["type"] for c in data["components"]] == ["meal_suggestion", "workout_plan"]


class TestSessions:
    def test_context_persists_between_turns(self, client):
        client.post("/api/assistant/respond", json={"text": "I'm 70 years old", "user_id": "u-1"})
        data = client.post("/api/assistant/respond", json={
            "text": "fever and cough",
            "user_id": "u-1",
        }).json()
        assert any(a.startswith("Due to your age (65+)") for a in data["advice"])

    def test_sessions_are_per_user(self, client):
        client.post("/api/assistant/respond", json={"text": "I'm 70 years old", "user_id": "u-1"})
        data = client.post("/api/assistant/respond", json={
            "text": "fever and cough",
            "user_id": "u-2",
        }).json()
        assert not any(a.startswith("Due to your age (65+)") for a in data["advice"])

    def test_clear_session(self, client):
        client.post("/api/assistant/respond", json={"text": "I'm 70 years old", "user_id": "u-1"})

        response = client.delete("/api/assistant/sessions/u-1")
        assert response.json() == {"user_id": "u-1", "cleared": True}

        data = client.post("/api/assistant/respond", json={
            "text": "fever and cough",
            "user_id": "u-1",
        }).json()
        assert not any(a.startswith("Due to your age (65+)") for a in data["advice"])

    def test_clear_missing_session(self, client):
        assert client.delete("/api/assistant/sessions/nobody").json()["cleared"] is False


class TestBarcodeAndWelcome:
    def test_barcode_scan(self, client):
        response = client.post("/api/assistant/barcode", json={"barcode": "8901234567890"})
        assert response.status_code == 200
        data = response.json()
        assert data["intent"] == "barcode_scan"
        assert data["components"][0]["product"]["barcode"] == "8901234567890"

    def test_sample_barcode_scan(self, client):
        data = client.post("/api/assistant/barcode", json={}).json()
        assert data["components"][0]["product"]["barcode"] == "1234567890123"

    def test_malformed_barcode_rejected(self, client):
        response = client.post("/api/assistant/barcode", json={"barcode": "abc"})
        assert response.status_code == 422

    def test_welcome_in_hindi(self, client):
        response = client.get("/api/assistant/welcome", params={"language": "hi"})
        assert response.status_code == 200
        data = response.json()
        assert data["language"] == "hi"
        assert data["welcome_message"]
        assert data["example_prompts"]
        assert data["disclaimer"].startswith("⚠")


class TestUsers:
    def _register(self, client, **overrides):
        payload = {"name": "Asha Patel", "email": "asha@example.com", **overrides}
        return client.post("/api/users/register", json=payload)

    def test_register_and_get(self, client):
        response = self._register(client, gender="female")
        assert response.status_code == 201
        user = response.json()
        assert user["email"] == "asha@example.com"

        fetched = client.get(f"/api/users/{user['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Asha Patel"

    def test_duplicate_email(self, client):
        self._register(client)
        response = self._register(client, email="ASHA@example.com")
        assert response.status_code == 409
        assert response.json()["error"] == "HTTP_409"

    def test_validation_errors_are_per_field(self, client):
        response = self._register(client, name="", email="nope")
        assert response.status_code == 422
        fields = {f["field"] for f in response.json()["details"]["fields"]}
        assert fields == {"name", "email"}

    def test_unknown_user(self, client):
        response = client.get("/api/users/does-not-exist")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_profile_seeds_session(self, client):
        user = self._register(client, gender="female").json()
        data = client.post("/api/assistant/respond", json={
            "text": "headache and nausea",
            "user_id": user["id"],
        }).json()
        assert data["matched_rule_id"] == "headache_nausea"
        assert any(a.startswith("For women:") for a in data["advice"])
