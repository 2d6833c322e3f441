import sys
from datetime import datetime, timezone

import pytest
from jose import jwt
from starlette.requests import Request
from starlette.responses import Response

from app.core.config import JWT_ACCESS_SECRET_KEY, JWT_ALGORITHM
from app.core.exceptions import AppException
from app.core.security import create_access_token, decode_access_token
from app.middleware.request_logging import access_record
from app.models.enums.complaint_status import ComplaintStatus
from app.schemas.auth.auth_schemas import SessionUser
from app.scripts import issue_admin_token
from app.services.support.complaint_service import build_status_update, parse_status
from app.utils.check_roles import ensure_role


def test_health_check(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["environment"] == "development"


def test_malformed_body_uses_error_envelope(client, collection, admin_headers):
    oid = collection.insert(status="Pending")

    resp = client.put(
        f"/complaints/{oid}",
        content=b"{not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )

    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert body["error_code"] == "VALIDATION_ERROR"
    assert collection.writes == []


def test_unknown_route_is_not_found_envelope(client):
    resp = client.get("/nope")

    assert resp.status_code == 404
    assert resp.json()["error_code"] == "NOT_FOUND"


# -------------------------
# TOKENS / GUARD
# -------------------------

def test_token_round_trip_claims():
    payload = decode_access_token(create_access_token("42", "admin", username="ops"))

    assert payload["sub"] == "42"
    assert payload["role"] == "admin"
    assert payload["username"] == "ops"


def test_refresh_token_type_rejected():
    token = jwt.encode(
        {"sub": "42", "role": "admin", "type": "refresh"},
        JWT_ACCESS_SECRET_KEY,
        algorithm=JWT_ALGORITHM,
    )

    with pytest.raises(AppException) as exc:
        decode_access_token(token)
    assert exc.value.status_code == 401


def test_token_without_role_claim_rejected(client, collection):
    oid = collection.insert(status="Pending")
    token = jwt.encode(
        {"sub": "42", "type": "access"}, JWT_ACCESS_SECRET_KEY, algorithm=JWT_ALGORITHM
    )

    resp = client.delete(f"/complaints/{oid}", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert oid in collection.docs


def test_ensure_role():
    admin = SessionUser(id="1", role="admin")

    assert ensure_role(admin, ["admin"]) is admin
    with pytest.raises(AppException):
        ensure_role(None, ["admin"])
    with pytest.raises(AppException):
        ensure_role(SessionUser(id="2", role="support"), ["admin"])


# -------------------------
# STATUS RULES
# -------------------------

@pytest.mark.parametrize("value", [s.value for s in ComplaintStatus])
def test_parse_status_accepts_allowed(value):
    assert parse_status(value).value == value


@pytest.mark.parametrize("value", [None, "", "Open", " Pending"])
def test_parse_status_rejects_others(value):
    with pytest.raises(AppException) as exc:
        parse_status(value)
    assert exc.value.status_code == 400


def test_build_status_update():
    now = datetime(2025, 5, 1, tzinfo=timezone.utc)
    admin = SessionUser(id="a1", role="admin")

    resolved = build_status_update(ComplaintStatus.RESOLVED, "ok", admin, now)
    pending = build_status_update(ComplaintStatus.PENDING, None, admin, now)

    assert resolved == {
        "status": "Resolved",
        "adminNotes": "ok",
        "resolvedAt": now,
        "resolvedBy": "a1",
        "updatedAt": now,
    }
    assert pending["resolvedAt"] is None
    assert pending["adminNotes"] == ""


@pytest.mark.parametrize("value", [1, True, ["Resolved"], {"status": "Resolved"}])
def test_parse_status_rejects_non_strings(value):
    with pytest.raises(AppException) as exc:
        parse_status(value)
    assert exc.value.status_code == 400


# -------------------------
# ACCESS LOG
# -------------------------

def _request(path_params=None):
    return Request(
        {
            "type": "http",
            "method": "PUT",
            "path": "/complaints/abc",
            "query_string": b"",
            "headers": [],
            "client": ("10.0.0.1", 5000),
            "path_params": path_params or {},
        }
    )


def test_access_record_includes_complaint_and_user():
    request = _request({"complaint_id": "abc"})
    request.state.user = SessionUser(id="a1", role="admin")

    record = access_record(request, Response(status_code=200), 12.3456)

    assert record["complaint_id"] == "abc"
    assert record["user_id"] == "a1"
    assert record["client_addr"] == "10.0.0.1"
    assert record["status_code"] == 200
    assert record["process_time_ms"] == 12.35


def test_access_record_anonymous_without_path_params():
    record = access_record(_request(), Response(status_code=401), 1.0)

    assert record["complaint_id"] == "-"
    assert record["user_id"] == "anonymous"


# -------------------------
# OPERATOR SCRIPT
# -------------------------

def test_issue_admin_token_prints_admin_token(monkeypatch, capsys):
    monkeypatch.setattr(
        sys, "argv", ["issue_admin_token", "admin-9", "--username", "ops"]
    )

    issue_admin_token.main()

    payload = decode_access_token(capsys.readouterr().out.strip())
    assert payload["sub"] == "admin-9"
    assert payload["role"] == "admin"
    assert payload["username"] == "ops"
