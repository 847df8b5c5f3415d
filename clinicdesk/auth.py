import base64
import json
import logging
import time
from typing import Optional

import httpx
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.x509 import load_pem_x509_certificate
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import FIREBASE_PROJECT_ID, GUEST_MODE_ENABLED, GUEST_OWNER_ID

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = (
    "https://www.googleapis.com/robot/v1/metadata/x509/securetoken@system.gserviceaccount.com"
)
GUEST_HEADER = "X-Guest-Session"

security = HTTPBearer(auto_error=False)

# Cache for Google's public keys
_cached_keys = None


async def get_google_public_keys(refresh: bool = False) -> Optional[dict]:
    """Fetch Google's public keys for Firebase token verification"""
    global _cached_keys
    if _cached_keys and not refresh:
        return _cached_keys

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(GOOGLE_CERTS_URL)
        if response.status_code == 200:
            _cached_keys = response.json()
            logger.info(f"✅ Fetched {len(_cached_keys)} Google public keys")
            return _cached_keys
        logger.error(f"❌ Failed to fetch Google public keys: HTTP {response.status_code}")
    except httpx.HTTPError as e:
        logger.error(f"❌ Error fetching Google public keys: {e}")
    return None


def _b64decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


async def verify_firebase_token(token: str) -> dict:
    """
    Verify a Firebase ID token and return its claims.

    The RS256 signature is checked against Google's published certificates,
    then audience, issuer, expiry and issued-at claims are validated.
    """
    if not FIREBASE_PROJECT_ID:
        logger.error("❌ FIREBASE_PROJECT_ID not configured")
        raise HTTPException(status_code=500, detail="Firebase not configured")

    parts = token.split(".")
    if len(parts) != 3:
        raise HTTPException(status_code=401, detail="Invalid token format. Expected a valid JWT token.")
    header_b64, payload_b64, signature_b64 = parts

    try:
        header = json.loads(_b64decode(header_b64))
        claims = json.loads(_b64decode(payload_b64))
        signature = _b64decode(signature_b64)
    except ValueError as e:
        logger.error(f"❌ Failed to decode token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token encoding") from e

    if header.get("alg") != "RS256":
        raise HTTPException(status_code=401, detail="Invalid token algorithm")
    kid = header.get("kid")
    if not kid:
        raise HTTPException(status_code=401, detail="Token missing key ID")

    public_keys = await get_google_public_keys()
    if not public_keys or kid not in public_keys:
        logger.warning(f"⚠️ Key ID {kid} not found in public keys, refreshing")
        public_keys = await get_google_public_keys(refresh=True)
        if not public_keys or kid not in public_keys:
            raise HTTPException(status_code=401, detail="Unable to verify token signature")

    public_key = load_pem_x509_certificate(public_keys[kid].encode(), default_backend()).public_key()
    try:
        public_key.verify(
            signature, f"{header_b64}.{payload_b64}".encode(), padding.PKCS1v15(), hashes.SHA256()
        )
    except Exception as e:
        logger.error(f"❌ Token signature verification failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid token signature") from e

    if claims.get("aud") != FIREBASE_PROJECT_ID:
        raise HTTPException(status_code=401, detail="Invalid token audience")
    if claims.get("iss") != f"https://securetoken.google.com/{FIREBASE_PROJECT_ID}":
        raise HTTPException(status_code=401, detail="Invalid token issuer")

    now = time.time()
    if claims.get("exp", 0) < now:
        raise HTTPException(
            status_code=401,
            detail="Token has expired. Please refresh your session.",
            headers={"X-Token-Expired": "true"},
        )
    # Allow 60 seconds clock skew
    if claims.get("iat", 0) > now + 60:
        raise HTTPException(status_code=401, detail="Invalid token")

    return claims


async def get_current_owner(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Resolve the owner id used to partition every CRUD call.

    Guest sessions (header `X-Guest-Session: true`) map to the guest owner id
    when guest mode is enabled; otherwise a Firebase bearer token is required
    and its subject becomes the owner id.
    """
    if GUEST_MODE_ENABLED and request.headers.get(GUEST_HEADER, "").lower() == "true":
        return GUEST_OWNER_ID

    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    claims = await verify_firebase_token(credentials.credentials)

    # Firebase ID tokens use 'sub' as the user ID claim
    owner_id = claims.get("sub") or claims.get("user_id")
    if not owner_id:
        logger.error(f"❌ Token missing user ID claim. Available claims: {list(claims.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")
    if owner_id == GUEST_OWNER_ID:
        # A real account must never land on the shared guest partition
        raise HTTPException(status_code=401, detail="Invalid token claims")

    logger.debug(f"✅ Owner authenticated: {owner_id}")
    return owner_id
