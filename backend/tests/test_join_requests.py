import uuid
from concurrent.futures import ThreadPoolExecutor

from fastapi.testclient import TestClient

from collabx.core.exceptions import CapacityExceeded, InvalidState
from collabx.core.settings import settings
from collabx.db import SessionLocal
from collabx.services import join_request_service, roster_service

from .utils import auth_headers, create_project, decide, submit_join_request, team_user_ids


def test_submit_scores_against_required_skills(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner, skills_have=["React"], skills_need=["Node.js"])

    body = submit_join_request(
        client, auth_headers("dev", name="Dev One"), project["id"], skills=["react", "Figma"], message="  hi  "
    )

    assert body["status"] == "pending"
    assert body["match_percentage"] == 50
    assert body["match_band"] == "medium"
    assert body["user"] == {"id": "dev", "name": "Dev One"}
    assert body["project_id"] == project["id"]
    assert body["message"] == "hi"
    assert body["needs_resync"] is False
    assert body["decided_at"] is None


def test_submit_with_invalid_role_writes_nothing(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)

    resp = client.post(
        f"/api/projects/{project['id']}/join-requests",
        json={"role": "designer", "skills": ["React"]},
        headers=auth_headers("dev"),
    )
    assert resp.status_code == 422
    assert resp.json()["field"] == "role"

    listed = client.get(f"/api/projects/{project['id']}/join-requests", headers=owner)
    assert listed.status_code == 200
    assert listed.json() == []


def test_submit_without_skills_is_rejected(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)

    resp = client.post(
        f"/api/projects/{project['id']}/join-requests",
        json={"role": "learner", "skills": ["  "]},
        headers=auth_headers("dev"),
    )
    assert resp.status_code == 422
    assert resp.json()["field"] == "skills"


def test_submit_requires_authentication(client: TestClient):
    project = create_project(client, auth_headers("owner"))
    resp = client.post(
        f"/api/projects/{project['id']}/join-requests",
        json={"role": "developer", "skills": ["React"]},
    )
    assert resp.status_code == 401


def test_submit_to_unknown_project_is_not_found(client: TestClient):
    resp = client.post(
        f"/api/projects/{uuid.uuid4()}/join-requests",
        json={"role": "developer", "skills": ["React"]},
        headers=auth_headers("dev"),
    )
    assert resp.status_code == 404


def test_duplicate_pending_request_conflicts(client: TestClient):
    project = create_project(client, auth_headers("owner"))
    dev = auth_headers("dev")
    first = submit_join_request(client, dev, project["id"])

    resp = client.post(
        f"/api/projects/{project['id']}/join-requests",
        json={"role": "developer", "skills": ["React"]},
        headers=dev,
    )
    assert resp.status_code == 409
    assert resp.json()["request_id"] == first["id"]


def test_member_cannot_request_to_join_again(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)

    resp = client.post(
        f"/api/projects/{project['id']}/join-requests",
        json={"role": "developer", "skills": ["React"]},
        headers=owner,
    )
    assert resp.status_code == 409


def test_can_reapply_after_rejection(client: TestClient):
    owner = auth_headers("owner")
    dev = auth_headers("dev")
    project = create_project(client, owner)
    first = submit_join_request(client, dev, project["id"])
    assert decide(client, owner, first["id"], "rejected").status_code == 200

    second = submit_join_request(client, dev, project["id"], skills=["React", "Node.js"])
    assert second["id"] != first["id"]
    assert second["match_percentage"] == 100


def test_submit_merges_candidate_profile(client: TestClient):
    project = create_project(client, auth_headers("owner"))
    dev = auth_headers("dev", name="Dev One", email="dev@mvgr.edu.in")
    submit_join_request(client, dev, project["id"], skills=["React", "Go"], role="learner")

    profile = client.get("/api/me/profile", headers=dev).json()
    assert profile["skills"] == ["React", "Go"]
    assert profile["role"] == "learner"
    assert profile["email"] == "dev@mvgr.edu.in"


def test_accept_adds_candidate_to_team(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)
    jr = submit_join_request(client, auth_headers("dev", name="Dev One"), project["id"])

    resp = decide(client, owner, jr["id"], "accepted")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "accepted"
    assert body["decided_at"] is not None

    team = client.get(f"/api/projects/{project['id']}/team", headers=owner).json()
    added = [m for m in team if m["user_id"] == "dev"]
    assert len(added) == 1
    assert added[0]["user_name"] == "Dev One"
    assert added[0]["role"] == "developer"

    detail = client.get(f"/api/projects/{project['id']}").json()
    assert detail["current_members"] == 2
    assert detail["current_members"] == len(detail["team"])


def test_reject_leaves_team_unchanged(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)
    jr = submit_join_request(client, auth_headers("dev"), project["id"])

    resp = decide(client, owner, jr["id"], "rejected")
    assert resp.status_code == 200
    assert resp.json()["status"] == "rejected"
    assert team_user_ids(client, owner, project["id"]) == ["owner"]


def test_decided_request_cannot_be_decided_again(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)
    jr = submit_join_request(client, auth_headers("dev"), project["id"])
    assert decide(client, owner, jr["id"], "accepted").status_code == 200

    again = decide(client, owner, jr["id"], "rejected")
    assert again.status_code == 409
    assert again.json()["status"] == "accepted"

    same = decide(client, owner, jr["id"], "accepted")
    assert same.status_code == 409
    assert team_user_ids(client, owner, project["id"]).count("dev") == 1


def test_decision_outcome_must_be_terminal(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)
    jr = submit_join_request(client, auth_headers("dev"), project["id"])

    assert decide(client, owner, jr["id"], "pending").status_code == 409
    assert decide(client, owner, jr["id"], "maybe").status_code == 422


def test_only_owner_or_admin_can_decide(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)
    jr = submit_join_request(client, auth_headers("dev"), project["id"])

    assert decide(client, auth_headers("stranger"), jr["id"], "accepted").status_code == 403
    assert decide(client, auth_headers("dev"), jr["id"], "accepted").status_code == 403

    admin_resp = decide(client, auth_headers("admin", admin=True), jr["id"], "accepted")
    assert admin_resp.status_code == 200


def test_decide_unknown_request_is_not_found(client: TestClient):
    owner = auth_headers("owner")
    assert decide(client, owner, str(uuid.uuid4()), "accepted").status_code == 404
    assert decide(client, owner, "not-a-uuid", "accepted").status_code == 404


def test_owner_list_sorted_by_match_then_recency(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(
        client, owner, skills_have=["Python", "React"], skills_need=["FastAPI", "SQL"]
    )
    low = submit_join_request(client, auth_headers("low"), project["id"], skills=["Python"])
    high = submit_join_request(
        client, auth_headers("high"), project["id"], skills=["Python", "React", "FastAPI"]
    )
    mid = submit_join_request(client, auth_headers("mid"), project["id"], skills=["Python", "React"])

    by_match = client.get(f"/api/projects/{project['id']}/join-requests", headers=owner).json()
    assert [r["id"] for r in by_match] == [high["id"], mid["id"], low["id"]]
    assert [r["match_percentage"] for r in by_match] == [75, 50, 25]

    by_recent = client.get(
        f"/api/projects/{project['id']}/join-requests", params={"sort": "recent"}, headers=owner
    ).json()
    assert [r["id"] for r in by_recent] == [mid["id"], high["id"], low["id"]]

    bad_sort = client.get(
        f"/api/projects/{project['id']}/join-requests", params={"sort": "name"}, headers=owner
    )
    assert bad_sort.status_code == 422


def test_owner_list_filters_by_status(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)
    first = submit_join_request(client, auth_headers("a"), project["id"])
    submit_join_request(client, auth_headers("b"), project["id"])
    decide(client, owner, first["id"], "rejected")

    pending = client.get(
        f"/api/projects/{project['id']}/join-requests", params={"status": "pending"}, headers=owner
    ).json()
    assert [r["user_id"] for r in pending] == ["b"]


def test_non_owner_cannot_list_project_requests(client: TestClient):
    project = create_project(client, auth_headers("owner"))
    resp = client.get(f"/api/projects/{project['id']}/join-requests", headers=auth_headers("dev"))
    assert resp.status_code == 403


def test_list_my_requests(client: TestClient):
    owner = auth_headers("owner")
    dev = auth_headers("dev")
    first = create_project(client, owner, title="First")
    second = create_project(client, owner, title="Second")
    submit_join_request(client, dev, first["id"])
    submit_join_request(client, dev, second["id"])
    submit_join_request(client, auth_headers("other"), first["id"])

    mine = client.get("/api/join-requests/mine", headers=dev)
    assert mine.status_code == 200
    body = mine.json()
    assert {r["project_id"] for r in body} == {first["id"], second["id"]}
    assert all(r["user_id"] == "dev" for r in body)


def test_request_visible_to_requester_and_owner_only(client: TestClient):
    owner = auth_headers("owner")
    dev = auth_headers("dev")
    project = create_project(client, owner)
    jr = submit_join_request(client, dev, project["id"])

    assert client.get(f"/api/join-requests/{jr['id']}", headers=dev).status_code == 200
    assert client.get(f"/api/join-requests/{jr['id']}", headers=owner).status_code == 200
    assert client.get(f"/api/join-requests/{jr['id']}", headers=auth_headers("x")).status_code == 403


def test_concurrent_decisions_resolve_exactly_once(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)
    jr = submit_join_request(client, auth_headers("dev"), project["id"])

    def _decide(outcome: str):
        session = SessionLocal()
        try:
            join_request_service.decide(session, jr["id"], outcome, decided_by="owner")
            return outcome
        except InvalidState:
            return None
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(_decide, ["accepted", "rejected"]))

    winners = [r for r in results if r is not None]
    assert len(winners) == 1

    detail = client.get(f"/api/join-requests/{jr['id']}", headers=owner).json()
    assert detail["status"] == winners[0]
    members = team_user_ids(client, owner, project["id"])
    assert members.count("dev") == (1 if winners[0] == "accepted" else 0)


def test_roster_failure_after_accept_flags_request_for_resync(client: TestClient, monkeypatch):
    owner = auth_headers("owner")
    project = create_project(client, owner)
    jr = submit_join_request(client, auth_headers("dev"), project["id"])

    def _unavailable(*args, **kwargs):
        raise RuntimeError("roster store unavailable")

    monkeypatch.setattr(roster_service, "stage_member", _unavailable)
    resp = decide(client, owner, jr["id"], "accepted")
    assert resp.status_code == 500
    body = resp.json()
    assert body["needs_resync"] is True
    assert body["request_id"] == jr["id"]
    monkeypatch.undo()

    detail = client.get(f"/api/join-requests/{jr['id']}", headers=owner).json()
    assert detail["status"] == "accepted"
    assert detail["needs_resync"] is True
    assert "dev" not in team_user_ids(client, owner, project["id"])

    resynced = client.post(f"/api/join-requests/{jr['id']}/resync", headers=owner)
    assert resynced.status_code == 200
    assert resynced.json()["needs_resync"] is False
    assert team_user_ids(client, owner, project["id"]).count("dev") == 1

    # Repeating the repair is harmless
    again = client.post(f"/api/join-requests/{jr['id']}/resync", headers=owner)
    assert again.status_code == 200
    assert team_user_ids(client, owner, project["id"]).count("dev") == 1


def test_resync_requires_accepted_request(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner)
    jr = submit_join_request(client, auth_headers("dev"), project["id"])

    assert client.post(f"/api/join-requests/{jr['id']}/resync", headers=owner).status_code == 409
    assert (
        client.post(f"/api/join-requests/{jr['id']}/resync", headers=auth_headers("dev")).status_code
        == 403
    )


def test_team_size_is_advisory_by_default(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner, team_size=1)
    jr = submit_join_request(client, auth_headers("dev"), project["id"])

    assert decide(client, owner, jr["id"], "accepted").status_code == 200
    detail = client.get(f"/api/projects/{project['id']}").json()
    assert detail["current_members"] == 2


def test_full_team_blocks_accept_when_capacity_enforced(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "enforce_team_capacity", True)
    owner = auth_headers("owner")
    project = create_project(client, owner, team_size=1)
    jr = submit_join_request(client, auth_headers("dev"), project["id"])

    resp = decide(client, owner, jr["id"], "accepted")
    assert resp.status_code == 409
    assert resp.json()["team_size"] == 1

    detail = client.get(f"/api/join-requests/{jr['id']}", headers=owner).json()
    assert detail["status"] == "pending"
    assert detail["needs_resync"] is False
    assert decide(client, owner, jr["id"], "rejected").status_code == 200


def test_concurrent_accepts_never_overfill_enforced_team(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "enforce_team_capacity", True)
    owner = auth_headers("owner")
    project = create_project(client, owner, team_size=2)
    requests = [
        submit_join_request(client, auth_headers(f"dev-{i}"), project["id"])["id"] for i in range(4)
    ]

    def _accept(request_id: str):
        session = SessionLocal()
        try:
            join_request_service.decide(session, request_id, "accepted", decided_by="owner")
            return "accepted"
        except CapacityExceeded:
            return "full"
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(_accept, requests))

    assert results.count("accepted") == 1
    assert results.count("full") == 3

    detail = client.get(f"/api/projects/{project['id']}").json()
    assert detail["current_members"] == 2
    assert len(team_user_ids(client, owner, project["id"])) == 2

    statuses = [client.get(f"/api/join-requests/{rid}", headers=owner).json() for rid in requests]
    assert sorted(s["status"] for s in statuses) == ["accepted", "pending", "pending", "pending"]
    assert not any(s["needs_resync"] for s in statuses)


def test_concurrent_accepts_of_different_requests_both_join(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(client, owner, add_me_to_team=False)
    first = submit_join_request(client, auth_headers("dev-a"), project["id"])
    second = submit_join_request(client, auth_headers("dev-b"), project["id"])

    def _accept(request_id: str):
        session = SessionLocal()
        try:
            return join_request_service.decide(session, request_id, "accepted", decided_by="owner").status
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(_accept, [first["id"], second["id"]]))

    assert results == ["accepted", "accepted"]
    detail = client.get(f"/api/projects/{project['id']}").json()
    members = team_user_ids(client, owner, project["id"])
    assert sorted(members) == ["dev-a", "dev-b"]
    assert detail["current_members"] == len(members) == 2


def test_accept_half_matching_candidate_into_empty_team(client: TestClient):
    owner = auth_headers("owner")
    project = create_project(
        client,
        owner,
        skills_required=["Python", "NLP", "React", "FastAPI"],
        add_me_to_team=False,
    )
    assert project["current_members"] == 0

    jr = submit_join_request(client, auth_headers("dev"), project["id"], skills=["python", "react"])
    assert jr["match_percentage"] == 50

    assert decide(client, owner, jr["id"], "accepted").status_code == 200
    detail = client.get(f"/api/projects/{project['id']}").json()
    assert detail["current_members"] == 1
    assert team_user_ids(client, owner, project["id"]) == ["dev"]


def test_submissions_are_rate_limited(client: TestClient):
    project = create_project(client, auth_headers("owner"))
    for i in range(10):
        submit_join_request(client, auth_headers(f"dev-{i}"), project["id"])

    resp = client.post(
        f"/api/projects/{project['id']}/join-requests",
        json={"role": "developer", "skills": ["React"]},
        headers=auth_headers("dev-late"),
    )
    assert resp.status_code == 429
