"""Kyivstar OAuth2 Token Manager with caching and auto-refresh."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx
from pydantic import BaseModel

from kyivstar_adwisor.encoding import basic_auth_header, form_encode
from kyivstar_adwisor.errors import AuthError
from kyivstar_adwisor.models import AuthErrorPayload

logger = logging.getLogger(__name__)

KYIVSTAR_TOKEN_URL = "https://api-gateway.kyivstar.ua/idp/oauth2/token"
DEFAULT_TIMEOUT = 30.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenResponse(BaseModel):
    """OAuth2 token response from the Kyivstar identity provider."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: float


class TokenState(BaseModel):
    """Cached bearer token and the instant it stops being valid."""

    access_token: Optional[str] = None
    expires_at: Optional[datetime] = None

    def is_valid(self, now: datetime) -> bool:
        """Check if a token is cached and not yet expired at ``now``."""
        if self.access_token is None or self.expires_at is None:
            return False
        return now < self.expires_at


def decode_auth_error(response: httpx.Response) -> AuthError:
    """Map a failed token response to an :class:`AuthError`.

    Args:
        response: Non-success response from the token endpoint

    Returns:
        AuthError carrying the upstream description and status code
    """
    try:
        payload = AuthErrorPayload.model_validate(response.json())
    except ValueError:
        return AuthError("Authentication failed", 500)
    return AuthError(payload.message, payload.status_code or response.status_code)


class TokenManager:
    """Manages Kyivstar OAuth2 tokens with caching and auto-refresh.

    Features:
    - Token caching in memory for the lifetime of the instance
    - Automatic refresh once the reported lifetime has elapsed
    - Single-flight refresh: concurrent callers share one token request
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize TokenManager.

        Args:
            client_id: Kyivstar OAuth2 client ID
            client_secret: Kyivstar OAuth2 client secret
            timeout: Request timeout (seconds) when no http_client is given
            http_client: Shared HTTP client, owned and closed by the caller
        """
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._http_client = http_client
        self._state = TokenState()
        self._refresh_lock = asyncio.Lock()

    @property
    def state(self) -> TokenState:
        """Snapshot of the cached token state."""
        return self._state.model_copy()

    @property
    def has_valid_token(self) -> bool:
        """Check if a valid (non-expired) token is cached."""
        return self._state.is_valid(_utcnow())

    async def get_token(self) -> str:
        """Get a valid access token, authenticating if necessary.

        Returns:
            Valid access token string

        Raises:
            AuthError: If a token cannot be obtained
        """
        if self._state.is_valid(_utcnow()):
            return self._state.access_token

        async with self._refresh_lock:
            # Double-check after acquiring lock
            if self._state.is_valid(_utcnow()):
                return self._state.access_token

            return await self._exchange()

    async def authenticate(self) -> str:
        """Perform the client-credentials exchange and cache the token.

        Always contacts the token endpoint, even while a valid token is cached.

        Returns:
            New access token string

        Raises:
            AuthError: If the token endpoint rejects the request or is unreachable
            ConfigurationError: If the credentials cannot be encoded
        """
        async with self._refresh_lock:
            return await self._exchange()

    async def _exchange(self) -> str:
        token_response = await self._fetch_token()
        self._state = TokenState(
            access_token=token_response.access_token,
            expires_at=_utcnow() + timedelta(seconds=token_response.expires_in),
        )
        logger.info(
            "Token obtained successfully, expires in %ds", token_response.expires_in
        )
        return token_response.access_token

    async def _fetch_token(self) -> TokenResponse:
        """Fetch a new token from the Kyivstar identity provider.

        Returns:
            TokenResponse with new token

        Raises:
            AuthError: On rejection, network errors or malformed responses
        """
        headers = {
            "Authorization": basic_auth_header(self._client_id, self._client_secret),
            "Content-Type": "application/x-www-form-urlencoded",
        }
        body = form_encode({"grant_type": "client_credentials"})

        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    KYIVSTAR_TOKEN_URL, headers=headers, content=body
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(
                        KYIVSTAR_TOKEN_URL, headers=headers, content=body
                    )
        except httpx.RequestError as e:
            raise AuthError(type(e).__name__, 500)

        if not response.is_success:
            error = decode_auth_error(response)
            logger.warning("Token request rejected: %s", error)
            raise error

        try:
            return TokenResponse.model_validate(response.json())
        except ValueError:
            raise AuthError("Authentication failed", 500)

    def invalidate(self) -> None:
        """Invalidate the cached token (e.g., after receiving 401)."""
        self._state = TokenState()
        logger.info("Token invalidated")
