from fastapi.testclient import TestClient

from collabx.core.security import create_access_token


def auth_headers(uid: str, name: str | None = None, email: str | None = None, admin: bool = False) -> dict:
    claims = {"sub": uid, "name": name or uid.title(), "email": email or f"{uid}@mvgr.edu.in"}
    if admin:
        claims["admin"] = True
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


def create_project(client: TestClient, headers: dict, **overrides) -> dict:
    payload = {
        "title": "Campus Marketplace",
        "description": "Buy and sell used textbooks on campus",
        "domain": "web",
        "difficulty": "medium",
        "skills_have": ["React"],
        "skills_need": ["Node.js"],
        "team_size": 4,
    }
    payload.update(overrides)
    resp = client.post("/api/projects", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def submit_join_request(
    client: TestClient,
    headers: dict,
    project_id: str,
    skills: list[str] | None = None,
    role: str = "developer",
    message: str | None = None,
) -> dict:
    payload = {"role": role, "skills": skills if skills is not None else ["React"], "message": message}
    resp = client.post(f"/api/projects/{project_id}/join-requests", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def decide(client: TestClient, headers: dict, request_id: str, outcome: str):
    return client.post(
        f"/api/join-requests/{request_id}/decision", json={"outcome": outcome}, headers=headers
    )


def team_user_ids(client: TestClient, headers: dict, project_id: str) -> list[str]:
    resp = client.get(f"/api/projects/{project_id}/team", headers=headers)
    assert resp.status_code == 200, resp.text
    return [m["user_id"] for m in resp.json()]
