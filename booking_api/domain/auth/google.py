"""
Google ID token verification.

Tokens are checked against Google's published x509 certificates: RS256
signature, audience (our OAuth client id), issuer and expiry.
"""

import base64
import json
import logging
import time
from typing import Any, Optional

import httpx
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.x509 import load_pem_x509_certificate
from fastapi import Request

from ...config import GOOGLE_CERTS_URL, GOOGLE_CLIENT_ID
from ...exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")

# Allowed clock skew for iat/exp checks, in seconds
CLOCK_SKEW = 60


def _b64decode(segment: str) -> bytes:
    padding_len = 4 - len(segment) % 4
    return base64.urlsafe_b64decode(segment + ("=" * padding_len if padding_len != 4 else ""))


class GoogleTokenVerifier:
    """Verifies Google Sign-In ID tokens and returns their claims."""

    def __init__(self, client_id: Optional[str] = GOOGLE_CLIENT_ID, certs_url: str = GOOGLE_CERTS_URL):
        self.client_id = client_id
        self.certs_url = certs_url
        self._cached_keys: Optional[dict[str, str]] = None

    async def _fetch_public_keys(self, refresh: bool = False) -> Optional[dict[str, str]]:
        if self._cached_keys and not refresh:
            return self._cached_keys
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(self.certs_url)
            if response.status_code == 200:
                self._cached_keys = response.json()
                logger.info(f"✅ Fetched {len(self._cached_keys)} Google public keys")
                return self._cached_keys
            logger.error(f"❌ Failed to fetch Google public keys: HTTP {response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"❌ Error fetching Google public keys: {e}")
        return None

    async def verify(self, id_token: str) -> dict[str, Any]:
        """
        Verify ``id_token`` and return its decoded claims.

        Raises:
            UnauthorizedError: Any verification failure
        """
        if not self.client_id:
            logger.error("❌ GOOGLE_CLIENT_ID not configured")
            raise UnauthorizedError("Invalid Google id token")

        parts = id_token.split(".")
        if len(parts) != 3:
            raise UnauthorizedError("Invalid Google id token")
        header_b64, payload_b64, signature_b64 = parts

        try:
            header = json.loads(_b64decode(header_b64))
            payload = json.loads(_b64decode(payload_b64))
            signature = _b64decode(signature_b64)
        except (ValueError, TypeError) as e:
            logger.warning(f"Malformed Google id token: {e}")
            raise UnauthorizedError("Invalid Google id token") from e

        if not isinstance(header, dict) or not isinstance(payload, dict):
            raise UnauthorizedError("Invalid Google id token")

        kid = header.get("kid")
        if header.get("alg") != "RS256" or not kid:
            raise UnauthorizedError("Invalid Google id token")

        public_keys = await self._fetch_public_keys()
        if not public_keys or kid not in public_keys:
            logger.warning(f"⚠️ Key ID {kid} not found in public keys, refreshing")
            public_keys = await self._fetch_public_keys(refresh=True)
            if not public_keys or kid not in public_keys:
                raise UnauthorizedError("Invalid Google id token")

        cert = load_pem_x509_certificate(public_keys[kid].encode())
        try:
            cert.public_key().verify(
                signature,
                f"{header_b64}.{payload_b64}".encode(),
                padding.PKCS1v15(),
                hashes.SHA256(),
            )
        except InvalidSignature as e:
            logger.warning("❌ Google id token signature verification failed")
            raise UnauthorizedError("Invalid Google id token") from e

        now = time.time()
        if payload.get("aud") != self.client_id:
            raise UnauthorizedError("Invalid Google id token")
        if payload.get("iss") not in GOOGLE_ISSUERS:
            raise UnauthorizedError("Invalid Google id token")
        if payload.get("exp", 0) < now - CLOCK_SKEW:
            raise UnauthorizedError("Invalid Google id token")
        if not payload.get("sub"):
            raise UnauthorizedError("Invalid Google id token")

        return payload


def get_google_verifier(request: Request) -> GoogleTokenVerifier:
    """Dependency returning the application's verifier (keeps the key cache warm)."""
    return request.app.state.google_verifier
