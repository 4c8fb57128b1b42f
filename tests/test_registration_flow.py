"""End-to-end tests for the registration wizard pages"""

import json
import logging

from yc_registration.backends.redis_store import REGISTRATIONS_KEY

logger = logging.getLogger(__name__)

ADULT_PERSONAL = {
    "first_name": "Ann",
    "last_name": "Smith",
    "email": "ann@example.com",
    "phone": "555-0100",
    "date_of_birth": "1990-05-17",
    "gender": "female",
    "corps_name": "Central Corps",
}

# Born 2015, a minor for years to come
MINOR_PERSONAL = {**ADULT_PERSONAL, "first_name": "Tim", "date_of_birth": "2015-01-01"}

GUARDIAN = {
    "guardian_first_name": "Mary",
    "guardian_last_name": "Smith",
    "guardian_email": "mary@example.com",
    "guardian_phone": "555-0111",
    "guardian_relationship": "parent",
}

EMERGENCY = {
    "emergency_name": "Bob Smith",
    "emergency_phone": "555-0199",
    "emergency_relationship": "Brother",
}

MEDICAL = {"medical_conditions": "", "medications": "", "allergies": "Peanuts"}


def post_step(client, data: dict, action: str = "next"):
    response = client.post(
        "/register", data={**data, "action": action}, follow_redirects=False
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/register"
    return client.get("/register")


def stored_registrations(fake_redis) -> list:
    blob = fake_redis.store.get(REGISTRATIONS_KEY)
    return json.loads(blob) if blob else []


class TestLandingPage:
    def test_landing_page(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "YC2025" in response.text
        assert 'href="/register"' in response.text

    def test_unknown_page_renders_not_found(self, client):
        response = client.get("/no-such-page")

        assert response.status_code == 404
        assert "Oops! Page not found" in response.text


class TestRegistrationWizard:
    """Walks the wizard through the web form"""

    def test_first_visit_shows_personal_step(self, client):
        response = client.get("/register")

        assert response.status_code == 200
        assert "Personal Information" in response.text
        assert 'data-status="active"' in response.text

    def test_incomplete_step_shows_errors(self, client):
        response = post_step(client, {"first_name": "Ann"})

        assert "Personal Information" in response.text
        assert "Please fill all required fields" in response.text
        assert 'class="error"' in response.text
        # Entered values are kept
        assert 'value="Ann"' in response.text

    def test_adult_registration_end_to_end(self, client, fake_redis):
        response = post_step(client, ADULT_PERSONAL)
        assert "Emergency Contact" in response.text
        assert "Guardian Information" not in response.text

        response = post_step(client, EMERGENCY)
        assert "Medical Information" in response.text

        response = post_step(client, MEDICAL)
        assert "Review &amp; Submit" in response.text
        assert "ann@example.com" in response.text

        response = client.post(
            "/register",
            data={"action": "submit", "agreed_to_terms": "true", "photo_video_consent": "yes"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/confirmation"

        confirmation = client.get("/confirmation")
        assert "Registration Complete!" in confirmation.text
        assert "Registration Successful!" in confirmation.text

        stored = stored_registrations(fake_redis)
        assert len(stored) == 1
        assert stored[0]["firstName"] == "Ann"
        assert stored[0]["isUnder18"] is False
        assert stored[0]["guardianFirstName"] is None
        assert stored[0]["allergies"] == "Peanuts"
        assert stored[0]["id"] in confirmation.text

        # A new visit starts a fresh wizard
        response = client.get("/register")
        assert "Personal Information" in response.text
        assert 'value="Ann"' not in response.text

    def test_minor_registration_includes_guardian(self, client, fake_redis):
        response = post_step(client, MINOR_PERSONAL)
        assert "Guardian Information" in response.text

        response = post_step(client, {"guardian_first_name": "Mary"})
        assert "Guardian Information" in response.text
        assert "Please fill all required fields" in response.text

        response = post_step(client, GUARDIAN)
        assert "Emergency Contact" in response.text

        post_step(client, EMERGENCY)
        post_step(client, MEDICAL)
        response = client.post(
            "/register",
            data={"action": "submit", "agreed_to_terms": "true"},
            follow_redirects=False,
        )
        assert response.headers["location"] == "/confirmation"

        stored = stored_registrations(fake_redis)
        assert stored[0]["isUnder18"] is True
        assert stored[0]["guardianEmail"] == "mary@example.com"
        assert stored[0]["guardianRelationship"] == "parent"

    def test_back_skips_guardian_for_adults(self, client):
        post_step(client, ADULT_PERSONAL)

        response = post_step(client, {}, action="back")

        assert "Personal Information" in response.text
        assert 'value="ann@example.com"' in response.text

    def test_submit_without_terms_is_rejected(self, client, fake_redis):
        post_step(client, ADULT_PERSONAL)
        post_step(client, EMERGENCY)
        post_step(client, MEDICAL)

        response = post_step(client, {}, action="submit")

        assert "Review &amp; Submit" in response.text
        assert "Please fill all required fields" in response.text
        assert stored_registrations(fake_redis) == []

    def test_submit_from_wrong_step_is_ignored(self, client, fake_redis):
        response = post_step(client, ADULT_PERSONAL, action="submit")

        assert "Action not available" in response.text
        assert "Personal Information" in response.text
        assert stored_registrations(fake_redis) == []

    def test_storage_outage_shows_error_page(self, client, fake_redis):
        fake_redis.available = False

        response = client.get("/register")

        assert response.status_code == 503
        assert "Service temporarily unavailable" in response.text

    def test_wizards_are_isolated_per_session(self, client, fake_redis):
        from fastapi.testclient import TestClient

        from yc_registration.main import app

        post_step(client, ADULT_PERSONAL)

        with TestClient(app) as other_client:
            response = other_client.get("/register")

        assert "Personal Information" in response.text
        assert 'value="Ann"' not in response.text


class TestSubmitRecovery:
    """Submissions that fail after the review step was reached"""

    def test_impossible_birth_date_returns_to_personal_step(self, client, fake_redis):
        post_step(client, {**ADULT_PERSONAL, "date_of_birth": "1990-02-30"})
        post_step(client, EMERGENCY)
        post_step(client, MEDICAL)

        response = post_step(client, {"agreed_to_terms": "true"}, action="submit")

        assert "Personal Information" in response.text
        assert 'value="1990-02-30"' in response.text
        assert 'class="error"' in response.text
        assert "Please fill all required fields" in response.text
        assert stored_registrations(fake_redis) == []

    def test_store_and_state_writes_failing_on_submit(self, client, fake_redis):
        post_step(client, ADULT_PERSONAL)
        post_step(client, EMERGENCY)
        post_step(client, MEDICAL)
        fake_redis.failing_commands = {"set", "setex"}

        response = client.post(
            "/register",
            data={"action": "submit", "agreed_to_terms": "true"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/register"

        fake_redis.failing_commands = set()
        page = client.get("/register")
        assert page.status_code == 200
        assert "Review &amp; Submit" in page.text
        assert "Registration could not be saved" in page.text
        assert stored_registrations(fake_redis) == []
