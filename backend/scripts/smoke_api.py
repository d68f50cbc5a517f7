"""
Smoke-check a running CollabX backend against the demo seed.

Walks the join-request lifecycle end to end: browse projects, submit a
request as a fresh candidate, accept it as the project owner and confirm the
roster and member count moved together. Tokens are minted locally, so the
server must share this process's JWT_SECRET.

    python scripts/reset_db.py && uvicorn collabx.main:app &
    python scripts/smoke_api.py --base-url http://127.0.0.1:8000
"""

import argparse
import json
import sys
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from collabx.core.security import create_access_token  # noqa: E402

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


@dataclass
class SmokeResult:
    name: str
    status: int
    ok: bool
    detail: str = ""


def _token_for(uid: str, name: str) -> str:
    return create_access_token({"sub": uid, "name": name, "email": f"{uid}@smoke.local"})


def _request(
    path: str,
    method: str = "GET",
    payload: Optional[Dict[str, Any]] = None,
    token: Optional[str] = None,
    base_url: str = DEFAULT_BASE_URL,
):
    url = f"{base_url.rstrip('/')}{path}"
    data = None
    headers = {}
    if payload is not None:
        data = json.dumps(payload).encode("utf-8")
        headers["Content-Type"] = "application/json"
    if token:
        headers["Authorization"] = f"Bearer {token}"

    req = urllib.request.Request(url, data=data, method=method, headers=headers)
    try:
        with urllib.request.urlopen(req, timeout=5) as resp:
            body = resp.read().decode("utf-8")
            return resp.status, body
    except urllib.error.HTTPError as exc:
        body = exc.read().decode("utf-8") if hasattr(exc, "read") else ""
        return exc.code, body
    except Exception as exc:  # noqa: BLE001
        return 0, str(exc)


def _parse_json(body: str) -> Any:
    try:
        return json.loads(body)
    except ValueError:
        return None


def _print_results(checks: list[SmokeResult]) -> int:
    failures = [c for c in checks if not c.ok]
    for check in checks:
        status_str = "OK" if check.ok else "FAIL"
        print(f"[{status_str}] {check.name} -> {check.status} {check.detail}")

    if failures:
        print(f"FAIL ({len(failures)}/{len(checks)}) smoke checks failed")
        return 1

    print(f"PASS ({len(checks)}) smoke checks passed")
    return 0


def run_smoke(base_url: str = DEFAULT_BASE_URL) -> int:
    checks: list[SmokeResult] = []

    def add_check(name: str, status: int, ok: bool, detail: str) -> None:
        checks.append(SmokeResult(name=name, status=status, ok=ok, detail=detail))

    status, body = _request("/health", base_url=base_url)
    add_check("GET /health", status, status == 200, "ok" if status == 200 else body)
    if status != 200:
        return _print_results(checks)

    status, body = _request("/api/projects", base_url=base_url)
    listing = _parse_json(body)
    items = listing.get("items") if isinstance(listing, dict) else None
    ok_list = status == 200 and isinstance(items, list) and bool(items)
    add_check(
        "GET /api/projects",
        status,
        ok_list,
        "no projects returned; seed demo data first" if not ok_list else f"items={len(items)}",
    )
    if not ok_list:
        return _print_results(checks)

    project = items[0]
    project_id = project["id"]
    members_before = project.get("current_members")
    owner_token = _token_for(project["created_by"], project.get("owner_name") or "Owner")
    candidate_uid = f"smoke-{int(time.time())}"
    candidate_token = _token_for(candidate_uid, "Smoke Candidate")

    status, body = _request(
        f"/api/projects/{project_id}/join-requests",
        method="POST",
        payload={"role": "developer", "skills": project.get("skills_required", [])[:1] or ["Python"]},
        token=candidate_token,
        base_url=base_url,
    )
    submitted = _parse_json(body)
    request_id = submitted.get("id") if isinstance(submitted, dict) else None
    ok_submit = status == 201 and request_id is not None
    add_check(
        f"POST /api/projects/{project_id}/join-requests",
        status,
        ok_submit,
        body if not ok_submit else f"id={request_id} match={submitted.get('match_percentage')}",
    )
    if not ok_submit:
        return _print_results(checks)

    status, body = _request(
        f"/api/join-requests/{request_id}/decision",
        method="POST",
        payload={"outcome": "accepted"},
        token=owner_token,
        base_url=base_url,
    )
    decided = _parse_json(body)
    ok_decide = status == 200 and isinstance(decided, dict) and decided.get("status") == "accepted"
    add_check(
        f"POST /api/join-requests/{request_id}/decision",
        status,
        ok_decide,
        body if not ok_decide else "accepted",
    )
    if not ok_decide:
        return _print_results(checks)

    status, body = _request(f"/api/projects/{project_id}/team", token=owner_token, base_url=base_url)
    team = _parse_json(body)
    on_team = isinstance(team, list) and any(m.get("user_id") == candidate_uid for m in team)
    add_check(f"GET /api/projects/{project_id}/team", status, status == 200 and on_team, f"members={len(team or [])}")

    status, body = _request(f"/api/projects/{project_id}", base_url=base_url)
    detail = _parse_json(body)
    members_after = detail.get("current_members") if isinstance(detail, dict) else None
    add_check(
        "current_members increased",
        status,
        members_after == (members_before or 0) + 1,
        f"before={members_before}, after={members_after}",
    )

    return _print_results(checks)


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke-check a running CollabX backend.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    args = parser.parse_args()
    sys.exit(run_smoke(args.base_url))


if __name__ == "__main__":
    main()
