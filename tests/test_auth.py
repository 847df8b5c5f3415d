import asyncio
import base64
import json
import time
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.x509.oid import NameOID
from fastapi import HTTPException

from clinicdesk import auth

PROJECT_ID = "clinic-test"
KEY_ID = "key-1"


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


@pytest.fixture(scope="module")
def signing_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def google_keys(monkeypatch, signing_key):
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "securetoken")])
    now = datetime.now(timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(signing_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
        .sign(signing_key, hashes.SHA256())
    )
    pem = certificate.public_bytes(serialization.Encoding.PEM).decode()
    monkeypatch.setattr(auth, "FIREBASE_PROJECT_ID", PROJECT_ID)
    monkeypatch.setattr(auth, "_cached_keys", {KEY_ID: pem})


def make_token(signing_key, **claim_overrides) -> str:
    now = int(time.time())
    claims = {
        "sub": "owner-42",
        "aud": PROJECT_ID,
        "iss": f"https://securetoken.google.com/{PROJECT_ID}",
        "iat": now,
        "exp": now + 3600,
    }
    claims.update(claim_overrides)
    header = _b64(json.dumps({"alg": "RS256", "kid": KEY_ID}).encode())
    payload = _b64(json.dumps(claims).encode())
    signature = signing_key.sign(f"{header}.{payload}".encode(), padding.PKCS1v15(), hashes.SHA256())
    return f"{header}.{payload}.{_b64(signature)}"


def verify(token: str) -> dict:
    return asyncio.run(auth.verify_firebase_token(token))


def test_valid_token_returns_claims(google_keys, signing_key):
    assert verify(make_token(signing_key))["sub"] == "owner-42"


def test_expired_token_is_flagged(google_keys, signing_key):
    with pytest.raises(HTTPException) as exc:
        verify(make_token(signing_key, exp=int(time.time()) - 10))

    assert exc.value.status_code == 401
    assert exc.value.headers == {"X-Token-Expired": "true"}


def test_wrong_audience_is_rejected(google_keys, signing_key):
    with pytest.raises(HTTPException) as exc:
        verify(make_token(signing_key, aud="someone-else"))

    assert exc.value.detail == "Invalid token audience"


def test_tampered_payload_fails_signature_check(google_keys, signing_key):
    header, _, signature = make_token(signing_key).split(".")
    forged = _b64(json.dumps({"sub": "intruder", "aud": PROJECT_ID}).encode())

    with pytest.raises(HTTPException) as exc:
        verify(f"{header}.{forged}.{signature}")

    assert exc.value.detail == "Invalid token signature"


def test_malformed_token_is_rejected(google_keys):
    with pytest.raises(HTTPException) as exc:
        verify("not-a-jwt")

    assert exc.value.status_code == 401


def test_bearer_token_authenticates_sql_owner(guest_client, google_keys, signing_key):
    response = guest_client.get(
        "/clients",
        headers={"X-Guest-Session": "false", "Authorization": f"Bearer {make_token(signing_key)}"},
    )

    assert response.status_code == 200
    assert response.json() == []


def test_token_for_guest_id_is_refused(guest_client, google_keys, signing_key):
    response = guest_client.get(
        "/clients",
        headers={"X-Guest-Session": "false", "Authorization": f"Bearer {make_token(signing_key, sub='guest')}"},
    )

    assert response.status_code == 401
