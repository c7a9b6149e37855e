"""Integration tests for the /api compatibility router."""
import pytest

from abjadmatch.dependencies import get_store
from abjadmatch.errors import StorageError
from abjadmatch.main import app
from abjadmatch.storage import MemoryCompatibilityStore

RESULTS_URL = "/api/compatibility-results"
VALID_PAYLOAD = {
    "partner1_name": "Ahmed",
    "partner1_date_of_birth": "1990-07-14",
    "partner1_birth_time": "08:30",
    "partner2_name": "Fatima",
    "partner2_date_of_birth": "2000-01-01",
}


class FailingStore(MemoryCompatibilityStore):
    def create(self, computation):
        raise StorageError("store")

    def list(self):
        raise StorageError("fetch")

    def clear(self):
        raise StorageError("clear")


@pytest.fixture()
def failing_client(client):
    app.dependency_overrides[get_store] = FailingStore
    try:
        yield client
    finally:
        app.dependency_overrides.clear()


def test_create_returns_stored_record(client):
    resp = client.post(RESULTS_URL, json=VALID_PAYLOAD)
    assert resp.status_code == 201
    data = resp.json()
    assert data["id"] == 1
    assert "created_at" in data
    # Ahmed: A1 H8 M40 E10 D4 = 63 → 9 → Water; Fatima: 532 → 1 → Fire
    assert data["partner1_abjad_value"] == 63
    assert data["partner1_digital_root"] == 9
    assert data["partner1_element"] == "Water"
    assert data["partner2_abjad_value"] == 532
    assert data["partner2_element"] == "Fire"
    assert data["name_compatibility_score"] == 60
    # life paths 4 and 4 → 100; 60*0.6 + 100*0.4 = 76
    assert data["life_path_compatibility_score"] == 100
    assert data["overall_compatibility_score"] == 76
    assert data["compatibility_level"] == "Compatible"
    assert data["partner1_birth_time"] == "08:30"
    assert data["partner2_birth_time"] is None
    assert data["insights"]
    assert data["marriage_advice"]


def test_create_without_dates_uses_name_score(client):
    resp = client.post(RESULTS_URL, json={"partner1_name": "A", "partner2_name": "D"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["life_path_compatibility_score"] is None
    assert data["overall_compatibility_score"] == data["name_compatibility_score"] == 90
    assert data["compatibility_level"] == "Highly Compatible"


def test_create_strips_blank_optional_fields(client):
    resp = client.post(
        RESULTS_URL,
        json={"partner1_name": " A ", "partner2_name": "D", "partner1_date_of_birth": "  "},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["partner1_name"] == "A"
    assert data["partner1_date_of_birth"] is None


def test_list_newest_first(client):
    for name in ("A", "B", "D"):
        assert client.post(RESULTS_URL, json={"partner1_name": name, "partner2_name": "AB"}).status_code == 201
    resp = client.get(RESULTS_URL)
    assert resp.status_code == 200
    data = resp.json()
    assert [r["id"] for r in data] == [3, 2, 1]
    assert [r["partner1_name"] for r in data] == ["D", "B", "A"]


def test_delete_clears_all(client):
    for _ in range(2):
        client.post(RESULTS_URL, json=VALID_PAYLOAD)
    resp = client.delete(RESULTS_URL)
    assert resp.status_code == 200
    assert resp.json() == {"message": "All compatibility results cleared", "removed": 2}
    assert client.get(RESULTS_URL).json() == []


def test_get_single_result(client):
    created = client.post(RESULTS_URL, json=VALID_PAYLOAD).json()
    resp = client.get(f"{RESULTS_URL}/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


def test_get_unknown_result_is_404(client):
    resp = client.get(f"{RESULTS_URL}/42")
    assert resp.status_code == 404
    assert resp.json()["code"] == "NOT_FOUND"


def test_share_result(client):
    created = client.post(RESULTS_URL, json=VALID_PAYLOAD).json()
    resp = client.get(f"{RESULTS_URL}/{created['id']}/share")
    assert resp.status_code == 200
    data = resp.json()
    assert "Ahmed & Fatima: 76% Compatible" in data["text"]
    assert data["links"]["whatsapp"].startswith("https://wa.me/?text=")
    assert data["links"]["twitter"].startswith("https://twitter.com/intent/tweet?text=")
    assert data["links"]["facebook"].startswith("https://www.facebook.com/sharer/sharer.php?u=")
    assert data["links"]["email"].startswith("mailto:?subject=Muslim%20Compatibility%20Results&body=")


def test_share_unknown_result_is_404(client):
    assert client.get(f"{RESULTS_URL}/7/share").status_code == 404


def test_calculate_does_not_store(client):
    resp = client.post("/api/compatibility/calculate", json=VALID_PAYLOAD)
    assert resp.status_code == 200
    data = resp.json()
    assert data["overall_compatibility_score"] == 76
    assert "id" not in data
    assert client.get(RESULTS_URL).json() == []


def test_elements_table(client):
    resp = client.get("/api/elements")
    assert resp.status_code == 200
    data = resp.json()
    assert [e["digit"] for e in data] == list(range(10))
    assert data[0]["name"] == "Earth"
    assert {e["name"] for e in data} == {"Fire", "Air", "Water", "Earth"}


def test_list_storage_failure_is_500(failing_client):
    resp = failing_client.get(RESULTS_URL)
    assert resp.status_code == 500
    assert resp.json()["code"] == "STORAGE_ERROR"
    assert resp.json()["message"] == "Failed to fetch compatibility results"


def test_create_storage_failure_is_500(failing_client):
    resp = failing_client.post(RESULTS_URL, json=VALID_PAYLOAD)
    assert resp.status_code == 500
    assert resp.json()["code"] == "STORAGE_ERROR"


def test_clear_storage_failure_is_500(failing_client):
    assert failing_client.delete(RESULTS_URL).status_code == 500


def test_sql_backed_reads_keep_created_at(client, sql_store):
    app.dependency_overrides[get_store] = lambda: sql_store
    try:
        created = client.post(RESULTS_URL, json=VALID_PAYLOAD).json()
        fetched = client.get(f"{RESULTS_URL}/{created['id']}").json()
        listed = client.get(RESULTS_URL).json()
    finally:
        app.dependency_overrides.clear()
    assert fetched["created_at"] == created["created_at"]
    assert listed[0]["created_at"] == created["created_at"]
