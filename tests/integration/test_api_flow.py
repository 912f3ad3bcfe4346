"""
End-to-end API tests: check-in adaptation, proposals, plans, coach
requests and settings, against an in-memory SQLite database.
"""

import datetime

import pytest
from fastapi import HTTPException
from sqlmodel import Session

from app.db.session import engine
from app.schemas.plan import StructuredPlan
from app.schemas.proposal import ProposalDecision
from app.services.proposal_service import ProposalService

FATIGUED_CHECKIN = {
    "sleep_duration_hrs": 4.0,
    "sleep_quality": 1,
    "physical_fatigue": 5,
    "muscle_soreness": "SEVERE",
    "mental_readiness": 1,
    "motivation": 1,
    "stress_level": 5,
}

FRESH_CHECKIN = {
    "sleep_duration_hrs": 8.5,
    "sleep_quality": 5,
    "physical_fatigue": 1,
    "muscle_soreness": "NONE",
    "mental_readiness": 5,
    "motivation": 5,
    "stress_level": 1,
}


# ======================================================================
# Helpers
# ======================================================================


def _checkin(client, headers, date, body=FATIGUED_CHECKIN):
    response = client.post(f"/api/v1/checkins/{date.isoformat()}", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def _workout(client, headers, workout_id):
    response = client.get(f"/api/v1/workouts/{workout_id}", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def _decide(client, headers, proposal_id, decision):
    return client.post(
        f"/api/v1/proposals/{proposal_id}/decide", json={"decision": decision}, headers=headers,
    )


# ======================================================================
# Check-in
# ======================================================================


class TestCheckIn:
    """Check-ins adapt unlocked workouts and propose changes to locked ones."""

    def test_unlocked_workout_changed_directly(self, client, make_user, make_workout, today):
        user_id = make_user(plan_rigidity="FLEXIBLE_WEEK")
        headers = {"X-User-Id": str(user_id)}
        workout_id = make_workout(user_id, today)

        result = _checkin(client, headers, today)

        assert result["outcome"] == "applied"
        assert result["locked"] is False
        assert result["decision"]["action"] == "REST"
        assert result["applied_patch_id"] is not None
        workout = _workout(client, headers, workout_id)
        assert workout["type"] == "rest"
        assert workout["duration_min"] == 0
        assert workout["ai_generated"] is True
        assert workout["source"] == "checkin"

    def test_locked_workout_gets_proposal(self, client, headers, user_id, make_workout, today):
        workout_id = make_workout(user_id, today)

        result = _checkin(client, headers, today)

        assert result["outcome"] == "proposed"
        assert result["locked"] is True
        assert result["proposal_id"] is not None
        assert _workout(client, headers, workout_id)["type"] == "run"

    def test_pending_proposal_reused(self, client, headers, user_id, make_workout, today):
        workout_id = make_workout(user_id, today)
        first = _checkin(client, headers, today)
        second = _checkin(client, headers, today)

        assert second["outcome"] == "none"
        assert second["proposal_id"] == first["proposal_id"]
        proposals = client.get("/api/v1/proposals", params={"workout_id": workout_id}, headers=headers)
        assert len(proposals.json()) == 1

    def test_good_day_keeps_plan(self, client, headers, user_id, make_workout, today):
        workout_id = make_workout(user_id, today)
        result = _checkin(client, headers, today, FRESH_CHECKIN)

        assert result["decision"]["action"] == "PROCEED"
        assert result["outcome"] == "none"
        assert result["workout_id"] == workout_id
        assert "because" in result["decision"]["text"]

    def test_no_workout(self, client, headers, today):
        result = _checkin(client, headers, today)
        assert result["decision"] is None
        assert result["outcome"] == "none"
        assert result["readiness"]["score"] == 0
        assert len(result["top_factors"]) == 5

    def test_past_day_rejected(self, client, headers, user_id, make_workout, today):
        date = today - datetime.timedelta(days=3)
        workout_id = make_workout(user_id, date)

        response = client.post(f"/api/v1/checkins/{date.isoformat()}", json=FATIGUED_CHECKIN, headers=headers)

        assert response.status_code == 409
        assert "in the past" in response.json()["detail"]
        workout = _workout(client, headers, workout_id)
        assert workout["type"] == "run"
        assert workout["duration_min"] == 50
        assert workout["ai_generated"] is False
        readiness = client.get(f"/api/v1/readiness/{date.isoformat()}", headers=headers).json()
        assert readiness["score"] is None

    def test_future_day_rejected(self, client, headers, user_id, make_workout, today):
        date = today + datetime.timedelta(days=5)
        workout_id = make_workout(user_id, date)

        response = client.post(f"/api/v1/checkins/{date.isoformat()}", json=FATIGUED_CHECKIN, headers=headers)

        assert response.status_code == 400
        assert _workout(client, headers, workout_id)["type"] == "run"

    def test_invalid_body(self, client, headers, today):
        body = dict(FATIGUED_CHECKIN, sleep_quality=9)
        response = client.post(f"/api/v1/checkins/{today.isoformat()}", json=body, headers=headers)
        assert response.status_code == 422

    def test_unknown_user(self, client, today):
        response = client.post(
            f"/api/v1/checkins/{today.isoformat()}", json=FATIGUED_CHECKIN, headers={"X-User-Id": "999"},
        )
        assert response.status_code == 404

    def test_missing_user_header(self, client, today):
        response = client.post(f"/api/v1/checkins/{today.isoformat()}", json=FATIGUED_CHECKIN)
        assert response.status_code == 422


class TestReadiness:

    def test_no_data(self, client, headers, today):
        response = client.get(f"/api/v1/readiness/{today.isoformat()}", headers=headers)
        assert response.status_code == 200
        body = response.json()
        assert body["score"] is None
        assert body["missing"] == ["checkin"]

    def test_after_checkin(self, client, headers, today):
        _checkin(client, headers, today, FRESH_CHECKIN)
        body = client.get(f"/api/v1/readiness/{today.isoformat()}", headers=headers).json()
        assert body["score"] == 100
        assert body["status"] == "OPTIMAL"
        assert body["source"] == "checkin"


# ======================================================================
# Proposals
# ======================================================================


class TestProposalLifecycle:

    @pytest.fixture
    def proposal(self, client, headers, user_id, make_workout, today):
        workout_id = make_workout(user_id, today)
        result = _checkin(client, headers, today)
        return workout_id, result["proposal_id"]

    def test_listed(self, client, headers, proposal):
        workout_id, proposal_id = proposal
        body = client.get("/api/v1/proposals", params={"workout_id": workout_id}, headers=headers).json()
        assert body[0]["id"] == proposal_id
        assert body[0]["status"] == "PENDING"
        assert body[0]["source_type"] == "DAILY_CHECKIN"
        assert body[0]["changes"]["type"] == "rest"
        assert body[0]["before"]["type"] == "run"
        assert body[0]["summary"].startswith("Rest day: Tempo run")

    def test_accept_then_undo(self, client, headers, proposal):
        workout_id, proposal_id = proposal

        accepted = _decide(client, headers, proposal_id, "ACCEPT")
        assert accepted.status_code == 200
        assert accepted.json()["status"] == "APPLIED"
        assert _workout(client, headers, workout_id)["type"] == "rest"

        undone = client.post(f"/api/v1/proposals/{proposal_id}/undo", headers=headers)
        assert undone.status_code == 200
        assert undone.json() == {"reverted": True, "status": "UNDONE"}

        workout = _workout(client, headers, workout_id)
        assert workout["type"] == "run"
        assert workout["title"] == "Tempo run"
        assert workout["duration_min"] == 50
        assert workout["ai_generated"] is False
        assert workout["description_md"] is None

    def test_decline(self, client, headers, proposal):
        workout_id, proposal_id = proposal
        declined = _decide(client, headers, proposal_id, "DECLINE")
        assert declined.json() == {"applied": False, "status": "DECLINED", "applied_patch_id": None}
        assert _workout(client, headers, workout_id)["type"] == "run"

    def test_decide_twice_conflicts(self, client, headers, proposal):
        _, proposal_id = proposal
        _decide(client, headers, proposal_id, "ACCEPT")
        again = _decide(client, headers, proposal_id, "DECLINE")
        assert again.status_code == 409
        assert again.json()["detail"] == "Proposal already decided"

    def test_undo_twice_conflicts(self, client, headers, proposal):
        _, proposal_id = proposal
        _decide(client, headers, proposal_id, "ACCEPT")
        client.post(f"/api/v1/proposals/{proposal_id}/undo", headers=headers)
        again = client.post(f"/api/v1/proposals/{proposal_id}/undo", headers=headers)
        assert again.status_code == 409

    def test_undo_pending_conflicts(self, client, headers, proposal):
        _, proposal_id = proposal
        response = client.post(f"/api/v1/proposals/{proposal_id}/undo", headers=headers)
        assert response.status_code == 409

    def test_second_pending_proposal_conflicts(self, client, headers, proposal):
        workout_id, _ = proposal
        plan = client.post(f"/api/v1/workouts/{workout_id}/plan/generate", headers=headers).json()["planned"]
        response = client.post(
            f"/api/v1/workouts/{workout_id}/plan/apply", json={"plan": plan}, headers=headers,
        )
        assert response.status_code == 409

    def test_other_users_proposal_hidden(self, client, make_user, proposal):
        _, proposal_id = proposal
        stranger = {"X-User-Id": str(make_user(email="other@example.com"))}
        assert _decide(client, stranger, proposal_id, "ACCEPT").status_code == 404

    def test_unknown_proposal(self, client, headers):
        assert _decide(client, headers, 12345, "ACCEPT").status_code == 404

    def test_accept_after_day_passed(self, client, headers, user_id, proposal, today):
        workout_id, proposal_id = proposal
        tomorrow = today + datetime.timedelta(days=1)

        with Session(engine) as session:
            service = ProposalService(session, today=lambda: tomorrow)
            with pytest.raises(HTTPException) as exc_info:
                service.decide(user_id, proposal_id, ProposalDecision.ACCEPT)

        assert exc_info.value.status_code == 409
        assert _workout(client, headers, workout_id)["type"] == "run"
        body = client.get("/api/v1/proposals", params={"workout_id": workout_id}, headers=headers).json()
        assert body[0]["status"] == "PENDING"

    def test_decline_after_day_passed(self, user_id, proposal, today):
        _, proposal_id = proposal
        tomorrow = today + datetime.timedelta(days=1)

        with Session(engine) as session:
            result = ProposalService(session, today=lambda: tomorrow).decide(
                user_id, proposal_id, ProposalDecision.DECLINE,
            )

        assert result.status == "DECLINED"

    def test_undo_after_day_passed(self, client, headers, user_id, proposal, today):
        workout_id, proposal_id = proposal
        _decide(client, headers, proposal_id, "ACCEPT")
        tomorrow = today + datetime.timedelta(days=1)

        with Session(engine) as session:
            service = ProposalService(session, today=lambda: tomorrow)
            with pytest.raises(HTTPException) as exc_info:
                service.undo(user_id, proposal_id)

        assert exc_info.value.status_code == 409
        assert _workout(client, headers, workout_id)["type"] == "rest"


# ======================================================================
# Workouts and plans
# ======================================================================


class TestWorkoutPlans:

    def test_create_and_get(self, client, headers, today):
        response = client.post(
            "/api/v1/workouts",
            json={"date": today.isoformat(), "title": "Long ride", "type": "bike", "duration_min": 120},
            headers=headers,
        )
        assert response.status_code == 201
        workout = _workout(client, headers, response.json()["id"])
        assert workout["title"] == "Long ride"
        assert workout["planned"] is True

    def test_get_other_users_workout(self, client, make_user, make_workout, today):
        owner = make_user()
        workout_id = make_workout(owner, today)
        stranger = {"X-User-Id": str(make_user(email="other@example.com"))}
        assert client.get(f"/api/v1/workouts/{workout_id}", headers=stranger).status_code == 404

    def test_generate_exact_swim(self, client, headers, user_id, make_workout, today):
        workout_id = make_workout(user_id, today, title="Steady swim", type="swim", duration_min=60)
        response = client.post(
            f"/api/v1/workouts/{workout_id}/plan/generate", json={"target_meters": 3000}, headers=headers,
        )
        assert response.status_code == 200
        options = response.json()
        assert StructuredPlan.model_validate(options["planned"]).total_meters == 3000
        assert options["adjusted"] is None

    def test_generate_adjusted_after_bad_checkin(self, client, headers, user_id, make_workout, today):
        _checkin(client, headers, today)
        workout_id = make_workout(user_id, today, title="Steady swim", type="swim", duration_min=60)
        options = client.post(f"/api/v1/workouts/{workout_id}/plan/generate", headers=headers).json()
        assert options["adjusted"] is not None
        assert "readiness 0/100" in options["reason"]

    def test_apply_unlocked(self, client, headers, user_id, make_workout, today):
        workout_id = make_workout(user_id, today + datetime.timedelta(days=5))
        plan = client.post(f"/api/v1/workouts/{workout_id}/plan/generate", headers=headers).json()["planned"]

        response = client.post(
            f"/api/v1/workouts/{workout_id}/plan/apply", json={"plan": plan}, headers=headers,
        )

        assert response.json()["outcome"] == "applied"
        workout = _workout(client, headers, workout_id)
        assert workout["description_md"].startswith("## Objective")
        assert workout["prescription_json"]["sections"][0]["type"] == "warmup"
        assert workout["source"] == "coach"
        assert workout["ai_confidence"] == 85

    def test_apply_locked_proposes(self, client, headers, user_id, make_workout, today):
        workout_id = make_workout(user_id, today)
        plan = client.post(f"/api/v1/workouts/{workout_id}/plan/generate", headers=headers).json()["planned"]

        result = client.post(
            f"/api/v1/workouts/{workout_id}/plan/apply",
            json={"plan": plan, "adjusted": False},
            headers=headers,
        ).json()

        assert result["outcome"] == "proposed"
        proposals = client.get("/api/v1/proposals", params={"workout_id": workout_id}, headers=headers).json()
        assert proposals[0]["source_type"] == "COACH"
        assert proposals[0]["summary"] == f"Planned coach plan for {today.isoformat()}: Tempo run"

    def test_apply_past_workout_rejected(self, client, headers, user_id, make_workout, today):
        workout_id = make_workout(user_id, today - datetime.timedelta(days=1))
        plan = client.post(f"/api/v1/workouts/{workout_id}/plan/generate", headers=headers).json()["planned"]

        response = client.post(
            f"/api/v1/workouts/{workout_id}/plan/apply", json={"plan": plan}, headers=headers,
        )

        assert response.status_code == 409
        workout = _workout(client, headers, workout_id)
        assert workout["description_md"] is None
        assert workout["source"] != "coach"
        proposals = client.get("/api/v1/proposals", params={"workout_id": workout_id}, headers=headers).json()
        assert proposals == []


# ======================================================================
# Coach
# ======================================================================


class TestCoachIntent:

    def test_swim_added_to_calendar(self, client, headers, today):
        response = client.post(
            "/api/v1/coach/intent",
            json={"message": "3000m swim tomorrow, add it to my calendar"},
            headers=headers,
        )
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["check"]["valid"] is True
        assert body["total_meters"] == 3000
        assert body["intent"]["mode"] == "add_to_calendar"

        workout = _workout(client, headers, body["workout_id"])
        assert workout["type"] == "swim"
        assert workout["date"] == (today + datetime.timedelta(days=1)).isoformat()
        assert workout["source"] == "coach"

    def test_generate_only(self, client, headers):
        body = client.post(
            "/api/v1/coach/intent", json={"message": "give me a 45 min tempo run"}, headers=headers,
        ).json()
        assert body["workout_id"] is None
        assert body["intent"]["sport"] == "RUN"
        assert body["plan_text"].startswith("## Objective")

    def test_past_date_rejected(self, client, headers):
        response = client.post(
            "/api/v1/coach/intent",
            json={"message": "2000m swim on 2020-01-06, add it to my calendar"},
            headers=headers,
        )
        assert response.status_code == 409
        assert "2020-01-06" in response.json()["detail"]

    def test_unsupported_locale(self, client, headers):
        response = client.post(
            "/api/v1/coach/intent", json={"message": "nadar 2000m", "locale": "es"}, headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported locale 'es'"


# ======================================================================
# Settings
# ======================================================================


class TestSettings:

    def test_default_rigidity(self, client, headers, today):
        body = client.get("/api/v1/settings/rigidity", headers=headers).json()
        assert body["rigidity"] == "LOCKED_1_DAY"
        assert body["locked_until"] == (today + datetime.timedelta(days=1)).isoformat()

    def test_set_rigidity(self, client, headers, user_id, make_workout, today):
        response = client.put(
            "/api/v1/settings/rigidity", json={"rigidity": "FLEXIBLE_WEEK"}, headers=headers,
        )
        assert response.json() == {"rigidity": "FLEXIBLE_WEEK", "locked_until": None}

        make_workout(user_id, today)
        assert _checkin(client, headers, today)["outcome"] == "applied"

    def test_invalid_rigidity(self, client, headers):
        response = client.put("/api/v1/settings/rigidity", json={"rigidity": "LOCKED_WEEK"}, headers=headers)
        assert response.status_code == 422

    def test_benchmarks_replace(self, client, headers):
        assert client.get("/api/v1/settings/benchmarks", headers=headers).json()["ftp"] is None

        first = client.put(
            "/api/v1/settings/benchmarks",
            json={"run_10k_time_sec": "45:00", "ftp": 250},
            headers=headers,
        ).json()
        assert first["run_10k_time_sec"] == 2700
        assert first["ftp"] == 250

        second = client.put("/api/v1/settings/benchmarks", json={"ftp": 200}, headers=headers).json()
        assert second["ftp"] == 200
        assert second["run_10k_time_sec"] is None

    def test_swim_pr_fills_400m_time(self, client, headers, user_id, make_workout, today):
        body = client.put(
            "/api/v1/settings/benchmarks", json={"swim_pr": "400m in 6:20"}, headers=headers,
        ).json()
        assert body["swim_400_time_sec"] == 380
        assert "swim_pr" not in body

        workout_id = make_workout(user_id, today + datetime.timedelta(days=3), title="Steady swim", type="swim")
        options = client.post(f"/api/v1/workouts/{workout_id}/plan/generate", headers=headers).json()
        assert options["targets_used"]["swim_easy"] == "1:50–2:00/100m"

    def test_swim_pr_other_distance_gives_css(self, client, headers):
        body = client.put(
            "/api/v1/settings/benchmarks", json={"swim_pr": "1500m in 24:00"}, headers=headers,
        ).json()
        assert body["swim_css_sec_per_100"] == 96.0
        assert body["swim_400_time_sec"] is None

    def test_explicit_swim_field_wins(self, client, headers):
        body = client.put(
            "/api/v1/settings/benchmarks",
            json={"swim_400_time_sec": "6:00", "swim_pr": "400m in 6:20"},
            headers=headers,
        ).json()
        assert body["swim_400_time_sec"] == 360

    def test_unreadable_swim_pr(self, client, headers):
        response = client.put(
            "/api/v1/settings/benchmarks", json={"swim_pr": "pretty quick"}, headers=headers,
        )
        assert response.status_code == 400
        assert client.get("/api/v1/settings/benchmarks", headers=headers).json()["swim_400_time_sec"] is None

    def test_benchmarks_drive_targets(self, client, headers, user_id, make_workout, today):
        client.put("/api/v1/settings/benchmarks", json={"run_10k_time_sec": "45:00"}, headers=headers)
        workout_id = make_workout(user_id, today + datetime.timedelta(days=3), title="Easy run")
        options = client.post(f"/api/v1/workouts/{workout_id}/plan/generate", headers=headers).json()
        assert options["targets_used"]["run_pace"] == "5:15–5:45/km"
