"""Input validation tests.

conftest.py sets the in-memory store and disables rate limiting before
importing the app, so we don't need to repeat that here.
"""
import pytest

RESULTS_URL = "/api/compatibility-results"


class TestCompatibilityValidation:
    @pytest.mark.parametrize(
        "payload",
        [
            {"partner2_name": "Fatima"},
            {"partner1_name": "Ahmed"},
            {},
        ],
    )
    def test_missing_name_rejected(self, client, payload):
        resp = client.post(RESULTS_URL, json=payload)
        assert resp.status_code == 400

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_name_rejected(self, client, name):
        resp = client.post(RESULTS_URL, json={"partner1_name": name, "partner2_name": "Fatima"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["details"]["errors"][0]["field"] == "partner1_name"

    def test_name_too_long_rejected(self, client):
        resp = client.post(RESULTS_URL, json={"partner1_name": "A" * 201, "partner2_name": "Fatima"})
        assert resp.status_code == 400

    def test_non_string_name_rejected(self, client):
        resp = client.post(RESULTS_URL, json={"partner1_name": 123, "partner2_name": "Fatima"})
        assert resp.status_code == 400

    def test_invalid_body_does_not_store(self, client):
        client.post(RESULTS_URL, json={"partner1_name": "", "partner2_name": ""})
        assert client.get(RESULTS_URL).json() == []

    def test_unparseable_date_accepted_without_life_path(self, client):
        resp = client.post(
            RESULTS_URL,
            json={"partner1_name": "A", "partner2_name": "D", "partner1_date_of_birth": "sometime", "partner2_date_of_birth": "2000-01-01"},
        )
        assert resp.status_code == 201
        assert resp.json()["life_path_compatibility_score"] is None

    def test_calculate_validates_too(self, client):
        resp = client.post("/api/compatibility/calculate", json={"partner1_name": " ", "partner2_name": "D"})
        assert resp.status_code == 400

    def test_non_integer_id_rejected(self, client):
        assert client.get(f"{RESULTS_URL}/abc").status_code == 400
