"""Caller identity for write endpoints.

Provides a FastAPI dependency ``get_auth_user_id`` returning the UUID of the
authenticated user.

* With ``settings.auth_enabled`` an ``Authorization: Bearer <token>`` header
  is verified against the configured OIDC tenant. JWKS are fetched from
  ``https://<domain>/.well-known/jwks.json`` with httpx and cached; python-jose
  checks signature, audience and issuer.
* With auth disabled (local runs, tests) the ``X-User-Id`` header names the
  caller directly.

The ``sub`` claim is used as the user id when it is a UUID; other subjects are
mapped to a deterministic UUIDv5. Users are never auto-provisioned here, so a
caller without a local user row gets ``User Not Found`` from the service.
"""
from __future__ import annotations

import logging
import time
import uuid
import httpx
from functools import lru_cache
from typing import Any, Optional
from jose import jwt, JWTError
from fastapi import Depends, Header, HTTPException, status

from threadline.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class JWKSCache:
    def __init__(self, ttl_seconds: int) -> None:
        self._ttl = ttl_seconds
        self._expires_at = 0.0
        self._jwks: dict[str, Any] | None = None

    async def get(self, domain: str) -> dict[str, Any]:
        now = time.time()
        if self._jwks and now < self._expires_at:
            return self._jwks
        url = f"https://{domain}/.well-known/jwks.json"
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.get(url)
            if resp.status_code != 200:
                raise RuntimeError(f"Failed to fetch JWKS: {resp.status_code}")
            data = resp.json()
        self._jwks = data
        self._expires_at = now + self._ttl
        return data


@lru_cache
def _jwks_cache(ttl: int) -> JWKSCache:
    return JWKSCache(ttl)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _verify_token(token: str, settings: Settings) -> dict[str, Any]:
    domain = settings.auth0_host
    if not domain or not settings.auth0_api_audience:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Auth not configured")
    if token.count('.') != 2:
        raise _unauthorized("Malformed bearer token")
    jwks = await _jwks_cache(settings.auth_jwks_cache_ttl_seconds).get(domain)
    kid = jwt.get_unverified_header(token).get("kid")
    if not kid:
        raise _unauthorized("Missing kid header")
    key = next((k for k in jwks.get("keys", []) if k.get("kid") == kid), None)
    if not key:
        raise _unauthorized("Unknown kid")
    return jwt.decode(
        token,
        key,
        algorithms=settings.auth_algorithms,
        audience=settings.auth0_api_audience,
        issuer=settings.auth0_issuer,
    )


def subject_to_user_id(subject: str) -> uuid.UUID:
    """Map a token subject onto a local user id."""
    try:
        return uuid.UUID(subject)
    except ValueError:
        return uuid.uuid5(uuid.NAMESPACE_URL, f"auth0:{subject}")


async def get_auth_user_id(
    authorization: Optional[str] = Header(None),
    x_user_id: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> uuid.UUID:
    if not settings.auth_enabled:
        if not x_user_id:
            raise _unauthorized("Missing X-User-Id header")
        try:
            return uuid.UUID(x_user_id.strip())
        except ValueError:
            raise _unauthorized("Invalid X-User-Id header")

    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Missing bearer token")
    token = authorization[len("Bearer "):].strip()
    try:
        claims = await _verify_token(token, settings)
    except HTTPException:
        raise
    except (JWTError, httpx.HTTPError, RuntimeError) as e:
        logger.info("token verification failed", extra={"reason": str(e)})
        raise _unauthorized("Token verification failed") from e

    subject = claims.get("sub")
    if not subject:
        raise _unauthorized("Missing sub claim")
    return subject_to_user_id(subject)


__all__ = ["get_auth_user_id", "subject_to_user_id"]
