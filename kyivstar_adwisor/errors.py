"""Exception types raised by the Kyivstar gateway client."""


class KyivstarError(Exception):
    """Base exception for every client failure.

    Attributes:
        message: Human-readable description of the failure.
        code: Upstream error code or HTTP status (0 for local failures).
    """

    def __init__(self, message: str, code: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigurationError(KyivstarError):
    """Raised when the client cannot run in the current environment."""

    pass


class AuthError(KyivstarError):
    """Raised when an access token cannot be obtained."""

    pass


class ApiError(KyivstarError):
    """Raised when a gateway resource call fails."""

    pass
