# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the Treating Calendar Service HTTP API.
Date-sensitive requests pin ``reference_date`` instead of reading the wall clock.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from main import app

from treating_calendar.core.config import settings
from treating_calendar.services.notification_client import NotificationClient

client = TestClient(app)

TEAM = "breakfast-club"
BASE = f"/api/v1/teams/{TEAM}"
WEDNESDAY = "2025-12-31"


def add_person(name, reference_date=WEDNESDAY, team=TEAM):
    response = client.post(
        f"/api/v1/teams/{team}/people",
        params={"reference_date": reference_date},
        json={"name": name, "email": f"{name.lower()}@example.com"},
    )
    assert response.status_code == 201, response.text
    return response.json()


def person_id(name):
    people = client.get(f"{BASE}/people").json()
    return next(p["id"] for p in people if p["name"] == name)


@pytest.fixture
def roster():
    """Alice, Bob and Carol; Alice treats on Thursday 2026-01-01."""
    for name in ("Alice", "Bob", "Carol"):
        add_person(name)
    return {name: person_id(name) for name in ("Alice", "Bob", "Carol")}


# ============================================
# Health & Metrics
# ============================================
class TestHealth:
    def test_health_returns_ok_status(self):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == settings.SERVICE_NAME
        assert data["version"] == settings.SERVICE_VERSION

    def test_readiness(self):
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["database"] is True

    def test_metrics_endpoint(self):
        client.get("/api/v1/teams")
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "treating_requests_total" in response.text

    def test_request_id_is_generated(self):
        response = client.get("/health")
        assert response.headers.get("X-Request-ID")

    def test_request_id_is_propagated(self):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"


# ============================================
# Teams
# ============================================
class TestTeams:
    def test_put_creates_team(self):
        response = client.put(BASE, json={"team_name": "Breakfast Club"})
        assert response.status_code == 200
        data = response.json()
        assert data["team_name"] == "Breakfast Club"
        assert data["sort_type"] == "byName"
        assert data["host_notifications_enabled"] is False

    def test_get_team(self):
        client.put(BASE, json={"team_name": "Breakfast Club"})
        response = client.get(BASE)
        assert response.status_code == 200
        assert response.json()["team_id"] == TEAM

    def test_get_unknown_team(self):
        response = client.get("/api/v1/teams/ghost")
        assert response.status_code == 404
        assert response.json()["detail"]["reason"] == "team_not_found"

    def test_list_teams(self):
        client.put(BASE, json={"team_name": "Breakfast Club"})
        client.put("/api/v1/teams/lunch", json={"team_name": "Lunch"})
        ids = {t["team_id"] for t in client.get("/api/v1/teams").json()}
        assert ids == {TEAM, "lunch"}

    def test_partial_update_keeps_name(self):
        client.put(BASE, json={"team_name": "Breakfast Club"})
        response = client.put(BASE, json={"host_notifications_enabled": True})
        data = response.json()
        assert data["team_name"] == "Breakfast Club"
        assert data["host_notifications_enabled"] is True

    def test_changing_sort_type_regenerates(self, roster):
        before = client.get(f"{BASE}/schedule").json()
        response = client.put(
            BASE, params={"reference_date": WEDNESDAY}, json={"sort_type": "random"}
        )
        assert response.json()["sort_type"] == "random"
        after = client.get(f"{BASE}/schedule").json()
        assert len(after) == len(before)
        assert [a["date"] for a in after] == [a["date"] for a in before]

    def test_invalid_sort_type(self):
        response = client.put(BASE, json={"sort_type": "byAge"})
        assert response.status_code == 422


# ============================================
# People
# ============================================
class TestPeople:
    def test_add_person_returns_schedule(self):
        data = add_person("Alice")
        assert data["person"]["name"] == "Alice"
        assert data["person"]["host_offset"] == 0
        assert len(data["assignments"]) == settings.SCHEDULE_WINDOW_WEEKS
        assert data["assignments"][0]["date"] == "2026-01-01"
        assert {a["person_id"] for a in data["assignments"]} == {data["person"]["id"]}

    def test_add_person_registers_team(self):
        add_person("Alice")
        assert client.get(BASE).status_code == 200

    def test_newcomer_joins_at_minimum_fairness(self, roster):
        client.post(f"{BASE}/schedule/refresh", params={"reference_date": "2026-01-09"})
        data = add_person("Dave", reference_date="2026-01-09")
        # Alice and Bob have hosted once, Carol not yet
        assert data["person"]["host_offset"] == 0
        assert data["person"]["fairness_value"] == 0

    def test_blank_name_rejected(self):
        response = client.post(f"{BASE}/people", json={"name": "   ", "email": "a@example.com"})
        assert response.status_code == 422

    def test_missing_email_rejected(self):
        response = client.post(f"{BASE}/people", json={"name": "Alice"})
        assert response.status_code == 422

    def test_list_people_sorted_by_name(self, roster):
        names = [p["name"] for p in client.get(f"{BASE}/people").json()]
        assert names == ["Alice", "Bob", "Carol"]

    def test_get_person(self, roster):
        response = client.get(f"{BASE}/people/{roster['Bob']}")
        assert response.status_code == 200
        assert response.json()["email"] == "bob@example.com"

    def test_get_unknown_person(self, roster):
        response = client.get(f"{BASE}/people/nobody")
        assert response.status_code == 404
        assert response.json()["detail"]["reason"] == "person_not_found"

    def test_remove_person(self, roster):
        response = client.delete(
            f"{BASE}/people/{roster['Alice']}", params={"reference_date": WEDNESDAY}
        )
        assert response.status_code == 200
        hosts = {a["person_id"] for a in response.json()["assignments"]}
        assert hosts == {roster["Bob"], roster["Carol"]}

    def test_remove_unknown_person(self, roster):
        response = client.delete(f"{BASE}/people/nobody", params={"reference_date": WEDNESDAY})
        assert response.status_code == 404

    def test_future_count_drops_after_occurrence(self, roster):
        url = f"{BASE}/people/{roster['Alice']}/future-count"
        before = client.get(url, params={"reference_date": WEDNESDAY}).json()
        after = client.get(url, params={"reference_date": "2026-01-02"}).json()
        assert before["future_assignments"] == after["future_assignments"] + 1
        assert after["reference_date"] == "2026-01-02"

    def test_future_count_on_occurrence_day_excludes_it(self, roster):
        url = f"{BASE}/people/{roster['Alice']}/future-count"
        before = client.get(url, params={"reference_date": WEDNESDAY}).json()
        on_day = client.get(url, params={"reference_date": "2026-01-01"}).json()
        assert on_day["future_assignments"] == before["future_assignments"] - 1
        detail = client.get(
            f"{BASE}/schedule/2026-01-01", params={"reference_date": "2026-01-01"}
        ).json()
        assert detail["is_past"] is True

    def test_regenerate_on_occurrence_day_keeps_host(self, roster):
        params = {"reference_date": "2026-01-01"}
        first = client.post(f"{BASE}/schedule/generate", params=params).json()
        second = client.post(f"{BASE}/schedule/generate", params=params).json()
        assert first["assignments"] == second["assignments"]
        assert second["assignments"][0]["person_id"] == roster["Alice"]


# ============================================
# Schedule generation & queries
# ============================================
class TestSchedule:
    def test_generate_with_window(self, roster):
        response = client.post(
            f"{BASE}/schedule/generate",
            params={"reference_date": WEDNESDAY},
            json={"window_size": 3},
        )
        assert response.status_code == 200
        hosts = [a["person_id"] for a in response.json()["assignments"]]
        assert hosts == [roster["Alice"], roster["Bob"], roster["Carol"]]

    def test_generate_without_body(self, roster):
        response = client.post(f"{BASE}/schedule/generate", params={"reference_date": WEDNESDAY})
        assert response.status_code == 200
        assert response.json()["replaced"] == settings.SCHEDULE_WINDOW_WEEKS

    def test_generate_switches_sort_type(self, roster):
        response = client.post(
            f"{BASE}/schedule/generate",
            params={"reference_date": WEDNESDAY},
            json={"sort_type": "byAddOrder", "window_size": 3},
        )
        assert response.status_code == 200
        assert client.get(BASE).json()["sort_type"] == "byAddOrder"

    def test_generate_invalid_window(self, roster):
        response = client.post(f"{BASE}/schedule/generate", json={"window_size": 0})
        assert response.status_code == 422

    def test_generate_empty_team(self):
        response = client.post(
            "/api/v1/teams/empty/schedule/generate", params={"reference_date": WEDNESDAY}
        )
        assert response.status_code == 200
        assert response.json()["assignments"] == []

    def test_list_schedule_range(self, roster):
        response = client.get(
            f"{BASE}/schedule", params={"start": "2026-01-01", "end": "2026-01-15"}
        )
        assert [a["date"] for a in response.json()] == ["2026-01-01", "2026-01-08", "2026-01-15"]

    def test_get_assignment_detail(self, roster):
        response = client.get(
            f"{BASE}/schedule/2026-01-01", params={"reference_date": WEDNESDAY}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_past"] is False
        assert data["person"]["name"] == "Alice"

    def test_assignment_is_past_after_reference(self, roster):
        response = client.get(
            f"{BASE}/schedule/2026-01-01", params={"reference_date": "2026-01-02"}
        )
        assert response.json()["is_past"] is True

    def test_get_assignment_unknown_date(self, roster):
        response = client.get(f"{BASE}/schedule/2026-01-02")
        assert response.status_code == 404
        assert response.json()["detail"]["reason"] == "date_not_found"

    def test_next_host(self, roster):
        response = client.get(f"{BASE}/schedule/next", params={"reference_date": "2026-01-02"})
        data = response.json()
        assert data["assignment"]["date"] == "2026-01-08"
        assert data["person"]["name"] == "Bob"

    def test_next_host_without_schedule(self):
        response = client.get("/api/v1/teams/empty/schedule/next")
        assert response.status_code == 200
        assert response.json()["assignment"] is None

    def test_refresh_updates_hosting_counts(self, roster):
        response = client.post(
            f"{BASE}/schedule/refresh", params={"reference_date": "2026-01-09"}
        )
        assert response.status_code == 200
        counts = {p["name"]: p["hosting_count"] for p in response.json()}
        assert counts == {"Alice": 1, "Bob": 1, "Carol": 0}
        schedule = client.get(f"{BASE}/schedule", params={"end": "2026-01-15"}).json()
        assert [a["completed"] for a in schedule] == [True, True, False]


# ============================================
# Swaps
# ============================================
class TestSwap:
    def swap(self, date_a, date_b, reference_date=WEDNESDAY):
        return client.post(
            f"{BASE}/schedule/swap",
            params={"reference_date": reference_date},
            json={"date_a": date_a, "date_b": date_b},
        )

    def test_swap_future_dates(self, roster):
        response = self.swap("2026-01-08", "2026-01-15")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "swapped"
        assert [a["person_id"] for a in data["assignments"]] == [roster["Carol"], roster["Bob"]]
        stored = client.get(f"{BASE}/schedule/2026-01-08").json()
        assert stored["person_id"] == roster["Carol"]

    def test_swap_past_date_conflicts(self, roster):
        response = self.swap("2026-01-01", "2026-01-15", reference_date="2026-01-02")
        assert response.status_code == 409
        assert response.json()["detail"]["reason"] == "past_assignment"
        stored = client.get(f"{BASE}/schedule/2026-01-15").json()
        assert stored["person_id"] == roster["Carol"]

    def test_swap_missing_date(self, roster):
        response = self.swap("2026-01-08", "2026-01-09")
        assert response.status_code == 404
        assert response.json()["detail"]["reason"] == "date_not_found"

    def test_swap_same_date(self, roster):
        response = self.swap("2026-01-08", "2026-01-08")
        assert response.status_code == 400
        assert response.json()["detail"]["reason"] == "same_date"

    def test_swap_bad_payload(self, roster):
        response = client.post(f"{BASE}/schedule/swap", json={"date_a": "soon"})
        assert response.status_code == 422


# ============================================
# Reminders
# ============================================
class TestReminders:
    def enable(self, **toggles):
        client.put(BASE, json={"team_name": "Breakfast Club", **toggles})

    def test_weekly_reminders_sent(self, roster):
        self.enable(host_notifications_enabled=True, team_notifications_enabled=True)
        with patch.object(NotificationClient, "send", return_value=True) as mock_send:
            response = client.post(
                f"{BASE}/reminders/weekly", params={"reference_date": WEDNESDAY}
            )
        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2026-01-01"
        assert data["host"] == "Alice"
        assert data["host_notified"] is True
        assert data["recipients"] == 3
        assert mock_send.call_count == 4
        stored = client.get(f"{BASE}/schedule/2026-01-01").json()
        assert stored["host_notified"] is True

    def test_test_mode_leaves_flags(self, roster):
        self.enable(host_notifications_enabled=True)
        with patch.object(NotificationClient, "send", return_value=True):
            client.post(
                f"{BASE}/reminders/weekly",
                params={"reference_date": WEDNESDAY},
                json={"test_mode": True},
            )
        stored = client.get(f"{BASE}/schedule/2026-01-01").json()
        assert stored["host_notified"] is False

    def test_disabled_team_skipped(self, roster):
        with patch.object(NotificationClient, "send", return_value=True) as mock_send:
            response = client.post(
                f"{BASE}/reminders/weekly", params={"reference_date": WEDNESDAY}
            )
        assert response.json()["skipped"] == "notifications_disabled"
        mock_send.assert_not_called()

    def test_unknown_team(self):
        response = client.post("/api/v1/teams/ghost/reminders/weekly")
        assert response.status_code == 404
