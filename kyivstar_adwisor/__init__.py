# Kyivstar messaging gateway client

from kyivstar_adwisor.client import (
    KYIVSTAR_API_BASE,
    KYIVSTAR_SANDBOX_API_BASE,
    KyivstarClient,
)
from kyivstar_adwisor.config import Settings, get_settings
from kyivstar_adwisor.errors import (
    ApiError,
    AuthError,
    ConfigurationError,
    KyivstarError,
)
from kyivstar_adwisor.models import (
    ClientConfig,
    MessageRequest,
    SendResult,
    StatusResult,
)
from kyivstar_adwisor.oauth import (
    KYIVSTAR_TOKEN_URL,
    TokenManager,
    TokenState,
)

__all__ = [
    "KYIVSTAR_API_BASE",
    "KYIVSTAR_SANDBOX_API_BASE",
    "KYIVSTAR_TOKEN_URL",
    "KyivstarClient",
    "Settings",
    "get_settings",
    "KyivstarError",
    "ConfigurationError",
    "AuthError",
    "ApiError",
    "ClientConfig",
    "MessageRequest",
    "SendResult",
    "StatusResult",
    "TokenManager",
    "TokenState",
]
