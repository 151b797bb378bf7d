"""Kyivstar messaging gateway client (SMS and Viber)."""

import logging
import sys
from typing import Any, Literal, Optional

import httpx

from kyivstar_adwisor.config import Settings
from kyivstar_adwisor.errors import ApiError, ConfigurationError
from kyivstar_adwisor.models import (
    DEFAULT_MAX_SEGMENTS,
    DEFAULT_MESSAGE_TTL_SEC,
    ApiErrorPayload,
    ClientConfig,
    MessageRequest,
)
from kyivstar_adwisor.oauth import DEFAULT_TIMEOUT, TokenManager

logger = logging.getLogger(__name__)

KYIVSTAR_API_BASE = "https://api-gateway.kyivstar.ua/rest/v1"
KYIVSTAR_SANDBOX_API_BASE = "https://api-gateway.kyivstar.ua/sandbox/rest/v1"

MIN_PYTHON_VERSION = (3, 10)

HttpMethod = Literal["GET", "POST"]


def _check_runtime() -> None:
    if sys.version_info[:2] < MIN_PYTHON_VERSION:
        raise ConfigurationError(
            "KyivstarClient requires Python %d.%d or higher." % MIN_PYTHON_VERSION
        )


def decode_api_error(response: httpx.Response) -> ApiError:
    """Map a failed resource response to an :class:`ApiError`.

    Args:
        response: Non-success response from the resource API

    Returns:
        ApiError carrying ``errorMsg`` and ``errorCode`` (or the HTTP status)
    """
    try:
        payload = ApiErrorPayload.model_validate(response.json())
    except ValueError:
        return ApiError("Unknown error", response.status_code)
    return ApiError(
        payload.error_msg or "Unknown error",
        payload.error_code or response.status_code,
    )


class KyivstarClient:
    """HTTP client for the Kyivstar messaging gateway.

    Handles authentication via TokenManager and provides methods
    for sending and tracking SMS and Viber messages.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        use_sandbox: bool = False,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize KyivstarClient.

        Args:
            client_id: Kyivstar OAuth2 client ID
            client_secret: Kyivstar OAuth2 client secret
            use_sandbox: Send resource calls to the sandbox environment
            timeout: Request timeout (seconds) when no http_client is given
            http_client: Shared HTTP client, owned and closed by the caller

        Raises:
            ConfigurationError: If the interpreter is too old
        """
        _check_runtime()
        self._config = ClientConfig(
            client_id=client_id,
            client_secret=client_secret,
            use_sandbox=use_sandbox,
        )
        self._timeout = timeout
        self._http_client = http_client
        self._token_manager = TokenManager(
            client_id=client_id,
            client_secret=client_secret,
            timeout=timeout,
            http_client=http_client,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: Optional[httpx.AsyncClient] = None
    ) -> "KyivstarClient":
        """Create a client from loaded :class:`Settings`."""
        return cls(
            settings.client_id,
            settings.client_secret,
            settings.use_sandbox,
            timeout=settings.timeout,
            http_client=http_client,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def token_manager(self) -> TokenManager:
        return self._token_manager

    @property
    def base_url(self) -> str:
        if self._config.use_sandbox:
            return KYIVSTAR_SANDBOX_API_BASE
        return KYIVSTAR_API_BASE

    async def request(
        self,
        method: HttpMethod,
        path: str,
        body: Optional[dict] = None,
    ) -> Any:
        """Make an authenticated request to the gateway.

        Args:
            method: HTTP method (GET or POST)
            path: API path relative to the base URL
            body: JSON body, omitted when None

        Returns:
            Parsed JSON response, unchanged

        Raises:
            AuthError: If a token cannot be obtained
            ApiError: On rejection, network errors or malformed responses
        """
        token = await self._token_manager.get_token()
        url = f"{self.base_url}{path}"
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

        logger.debug("%s %s", method, url)
        try:
            if self._http_client is not None:
                response = await self._http_client.request(
                    method, url, headers=headers, json=body
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(
                        method, url, headers=headers, json=body
                    )
        except httpx.RequestError as e:
            raise ApiError(type(e).__name__, 500)

        if response.status_code == 401:
            self._token_manager.invalidate()

        if not response.is_success:
            raise decode_api_error(response)

        try:
            return response.json()
        except ValueError:
            raise ApiError("Invalid JSON response", response.status_code)

    async def send_sms(
        self,
        sender: str,
        to: str,
        text: str,
        max_segments: int = DEFAULT_MAX_SEGMENTS,
        message_ttl_sec: int = DEFAULT_MESSAGE_TTL_SEC,
    ) -> dict:
        """Send an SMS.

        POST /sms

        Args:
            sender: Alpha name the message is sent from
            to: Recipient phone number
            text: Message text
            max_segments: Maximum number of SMS segments
            message_ttl_sec: Delivery attempt lifetime in seconds

        Returns:
            Upstream payload: ``reqId``, ``msgId``, ``reservedSmsSegments``
        """
        message = MessageRequest(
            sender=sender,
            to=to,
            text=text,
            max_segments=max_segments,
            message_ttl_sec=message_ttl_sec,
        )
        return await self.request("POST", "/sms", message.to_payload())

    async def check_sms(self, msg_id: str) -> dict:
        """Get SMS delivery status.

        GET /sms/{msg_id}

        Returns:
            Upstream payload: ``reqId``, ``msgId``, ``status``, ``date``
        """
        return await self.request("GET", f"/sms/{msg_id}")

    async def send_viber(
        self,
        sender: str,
        to: str,
        text: str,
        max_segments: int = DEFAULT_MAX_SEGMENTS,
        message_ttl_sec: int = DEFAULT_MESSAGE_TTL_SEC,
    ) -> dict:
        """Send a transactional Viber message.

        POST /viber/transaction

        Returns:
            Upstream payload: ``reqId``, ``msgId``, ``reservedSmsSegments``
        """
        message = MessageRequest(
            sender=sender,
            to=to,
            text=text,
            max_segments=max_segments,
            message_ttl_sec=message_ttl_sec,
        )
        return await self.request("POST", "/viber/transaction", message.to_payload())

    async def check_viber(self, msg_id: str) -> dict:
        """Get Viber message delivery status.

        GET /viber/status/{msg_id}
        """
        return await self.request("GET", f"/viber/status/{msg_id}")
