import logging
import threading
import time
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JOSEError
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from carhub.core.config import settings
from carhub.core.exceptions import (
    AuthConfigurationError,
    ExpiredTokenError,
    InvalidTokenError,
    InvalidTokenPayloadError,
)

logger = logging.getLogger(__name__)

# Security scheme for Swagger UI; missing credentials are reported by get_current_user
security = HTTPBearer(auto_error=False)

class TokenPayload(BaseModel):
    """Claims read from a verified ID token."""
    sub: Optional[str] = None
    email: Optional[str] = None
    exp: Optional[int] = None

class Identity(BaseModel):
    """The verified caller. Every store access is scoped by ``subject``."""
    subject: str
    email: Optional[str] = None


class GoogleCertsKeySource:
    """
    Fetches the identity provider's published signing keys (a JWKS document).

    Keys are kept for ``cache_seconds`` so a burst of requests does not
    refetch them every time. A token signed with a key id missing from the
    cached set triggers an early refetch, at most once per
    ``refetch_interval`` seconds, so rotated keys are picked up quickly.
    """

    def __init__(
        self,
        certs_url: str,
        cache_seconds: int = 3600,
        timeout: float = 10.0,
        refetch_interval: float = 60.0,
    ):
        self.certs_url = certs_url
        self.cache_seconds = cache_seconds
        self.timeout = timeout
        self.refetch_interval = refetch_interval
        self._keys: Optional[Dict[str, Any]] = None
        self._fetched_at = 0.0
        self._lock = threading.Lock()

    def _knows(self, kid: str) -> bool:
        return any(key.get("kid") == kid for key in (self._keys or {}).get("keys", []))

    def __call__(self, kid: Optional[str] = None) -> Dict[str, Any]:
        with self._lock:
            age = time.monotonic() - self._fetched_at
            expired = self._keys is None or age > self.cache_seconds
            rotated = kid is not None and not self._knows(kid) and age >= self.refetch_interval
            if expired or rotated:
                logger.info(f"Fetching signing keys from {self.certs_url}")
                response = httpx.get(self.certs_url, timeout=self.timeout)
                response.raise_for_status()
                self._keys = response.json()
                self._fetched_at = time.monotonic()
            return self._keys


class TokenVerifier:
    """
    Verifies bearer ID tokens: signature, audience, issuer and expiry.

    ``key_source`` is called with the token header's ``kid`` (or None) and
    returns whatever ``jose.jwt.decode`` accepts as a key: a shared secret
    for HS256 or a JWKS dict for RS256.
    """

    def __init__(
        self,
        key_source: Callable[[Optional[str]], Union[str, Dict[str, Any]]],
        algorithms: List[str],
        audience: Optional[str] = None,
        issuers: Optional[List[str]] = None,
    ):
        self.key_source = key_source
        self.algorithms = algorithms
        self.audience = audience
        self.issuers = issuers

    def verify(self, token: str) -> Identity:
        try:
            kid = jwt.get_unverified_header(token).get("kid")
            payload = jwt.decode(
                token,
                self.key_source(kid),
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuers,
                options={
                    "require_exp": True,
                    "require_aud": self.audience is not None,
                    "require_iss": bool(self.issuers),
                },
            )
        except ExpiredSignatureError as e:
            raise ExpiredTokenError() from e
        except JOSEError as e:
            raise InvalidTokenError(str(e)) from e
        except httpx.HTTPError as e:
            logger.error(f"Could not fetch signing keys: {e}")
            raise InvalidTokenError("signing keys unavailable") from e

        token_data = TokenPayload(**payload)
        if not token_data.sub:
            raise InvalidTokenPayloadError()
        return Identity(subject=token_data.sub, email=token_data.email)


def build_token_verifier(config=settings) -> TokenVerifier:
    """Build the verifier described by the settings."""
    if config.AUTH_MODE == "local":
        return TokenVerifier(
            key_source=lambda kid: config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            audience=config.GOOGLE_CLIENT_ID,
        )

    if not config.GOOGLE_CLIENT_ID:
        raise AuthConfigurationError("GOOGLE_CLIENT_ID is not configured")
    return TokenVerifier(
        key_source=GoogleCertsKeySource(
            config.GOOGLE_CERTS_URL,
            cache_seconds=config.GOOGLE_CERTS_CACHE_SECONDS,
        ),
        algorithms=["RS256"],
        audience=config.GOOGLE_CLIENT_ID,
        issuers=config.GOOGLE_ISSUERS,
    )


@lru_cache()
def _process_verifier() -> TokenVerifier:
    return build_token_verifier(settings)


def get_token_verifier() -> TokenVerifier:
    """Dependency returning the process-wide verifier."""
    try:
        return _process_verifier()
    except AuthConfigurationError as e:
        logger.error(f"Authentication cannot proceed: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error: Authentication service misconfigured.",
        )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Unauthorized: {detail}",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Identity:
    """Dependency to get the verified caller from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Missing or invalid Authorization header.")

    try:
        return verifier.verify(credentials.credentials)
    except ExpiredTokenError:
        raise _unauthorized("Token expired.")
    except InvalidTokenPayloadError:
        raise _unauthorized("Invalid token payload.")
    except InvalidTokenError as e:
        logger.warning(f"Token verification failed: {e.details}")
        raise _unauthorized("Token verification failed.")


def create_access_token(
    subject: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    config=settings,
) -> str:
    """Sign an HS256 token the local verifier accepts. Development and tests only."""
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode: Dict[str, Any] = {"sub": subject, "exp": expire}
    if email:
        to_encode["email"] = email
    if config.GOOGLE_CLIENT_ID:
        to_encode["aud"] = config.GOOGLE_CLIENT_ID
    return jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)
