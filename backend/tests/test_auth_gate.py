# backend/tests/test_auth_gate.py
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.api.deps import extract_bearer_token
from app.core.errors import MissingToken
from app.core.security import create_access_token

PROTECTED = [
    ("get", "/allHoldings", None),
    ("get", "/allPositions", None),
    ("post", "/newOrder", {"name": "INFY", "qty": 1, "price": 1, "mode": "BUY"}),
]

NO_TOKEN = {"success": False, "message": "No token, authorization denied"}
BAD_TOKEN = {"success": False, "message": "Token is not valid"}


def _call(client, method, path, body, headers=None):
    if method == "post":
        return client.post(path, json=body, headers=headers or {})
    return client.get(path, headers=headers or {})


@pytest.mark.parametrize("method,path,body", PROTECTED)
def test_no_header_is_missing_token(client, fake_db, method, path, body):
    r = _call(client, method, path, body)
    assert r.status_code == 401
    assert r.json() == NO_TOKEN
    assert r.headers["www-authenticate"] == "Bearer"
    assert fake_db.all_calls == []


@pytest.mark.parametrize("header", ["Bearer", "Bearer ", "Token abc.def.ghi", "abc.def.ghi", "Basic dXNlcjpwdw=="])
def test_malformed_header_is_missing_token(client, fake_db, header):
    r = client.get("/allHoldings", headers={"Authorization": header})
    assert r.status_code == 401
    assert r.json() == NO_TOKEN
    assert fake_db.all_calls == []


@pytest.mark.parametrize("method,path,body", PROTECTED)
def test_garbage_token_is_invalid(client, fake_db, method, path, body):
    r = _call(client, method, path, body, {"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json() == BAD_TOKEN
    assert fake_db.all_calls == []


def test_expired_token_is_invalid(client, fake_db):
    issued = datetime.now(timezone.utc) - timedelta(days=8)
    token = create_access_token("64f1a2b3c4d5e67890ab12cd", "a@x.com", now=issued)
    r = client.get("/allHoldings", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json() == BAD_TOKEN
    assert fake_db.all_calls == []


def test_gate_runs_before_body_parsing(client, fake_db):
    r = client.post("/newOrder", content=b"{bad", headers={"Content-Type": "application/json"})
    assert r.status_code == 401
    assert r.json() == NO_TOKEN

    r = client.post("/newOrder", content=b"{bad", headers={"Content-Type": "application/json",
                                                          "Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json() == BAD_TOKEN
    assert fake_db.all_calls == []


def test_tampered_token_is_invalid(client, auth_header):
    token = auth_header["Authorization"].split(" ", 1)[1]
    header, payload, signature = token.split(".")
    other = create_access_token("000000000000000000000000", "evil@x.com")
    forged = ".".join([header, other.split(".")[1], signature])
    r = client.get("/allHoldings", headers={"Authorization": f"Bearer {forged}"})
    assert r.status_code == 401
    assert r.json() == BAD_TOKEN


def test_scheme_is_case_insensitive(client, auth_header):
    token = auth_header["Authorization"].split(" ", 1)[1]
    r = client.get("/allHoldings", headers={"Authorization": f"bearer {token}"})
    assert r.status_code == 200


def test_token_needs_no_stored_session(client, fake_db):
    # the gate trusts the signature alone; no user lookup happens
    token = create_access_token("64f1a2b3c4d5e67890ab12cd", "nobody@x.com")
    r = client.get("/allPositions", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert "users" not in {name for name, c in fake_db.collections.items() if c.calls}


class TestExtractBearerToken:
    def test_returns_token(self):
        creds = HTTPAuthorizationCredentials(scheme="Bearer", credentials="abc")
        assert extract_bearer_token(creds) == "abc"

    def test_none_is_missing(self):
        with pytest.raises(MissingToken):
            extract_bearer_token(None)

    def test_blank_is_missing(self):
        with pytest.raises(MissingToken):
            extract_bearer_token(HTTPAuthorizationCredentials(scheme="Bearer", credentials="  "))
