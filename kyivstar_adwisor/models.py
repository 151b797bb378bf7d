"""Pydantic models for Kyivstar gateway payloads."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_SEGMENTS = 1
DEFAULT_MESSAGE_TTL_SEC = 86_400


class ClientConfig(BaseModel):
    """Credentials and environment selection for a client instance."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    use_sandbox: bool = False


class MessageRequest(BaseModel):
    """Body of an SMS or Viber send request."""

    model_config = ConfigDict(populate_by_name=True)

    sender: str = Field(alias="from")
    to: str
    text: str
    max_segments: int = Field(default=DEFAULT_MAX_SEGMENTS, alias="maxSegments")
    message_ttl_sec: int = Field(
        default=DEFAULT_MESSAGE_TTL_SEC, alias="messageTtlSec"
    )

    def to_payload(self) -> dict:
        """Serialize using the gateway field names."""
        return self.model_dump(by_alias=True)


class SendResult(BaseModel):
    """Result of sending an SMS or Viber message."""

    model_config = ConfigDict(populate_by_name=True)

    req_id: str = Field(alias="reqId")
    msg_id: str = Field(alias="msgId")
    reserved_sms_segments: int = Field(alias="reservedSmsSegments")


class StatusResult(BaseModel):
    """Delivery status of a previously sent message."""

    model_config = ConfigDict(populate_by_name=True)

    req_id: str = Field(alias="reqId")
    msg_id: str = Field(alias="msgId")
    status: str  # "delivered" | "accepted" | etc.
    date: str


class AuthErrorPayload(BaseModel):
    """Error body returned by the OAuth2 token endpoint."""

    error: Any = None  # not read; any shape accepted
    error_description: Optional[str] = None
    error_verbose: Optional[str] = None
    error_hint: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def message(self) -> str:
        """First non-empty description field."""
        return (
            self.error_description
            or self.error_verbose
            or self.error_hint
            or "Unknown error"
        )


class ApiErrorPayload(BaseModel):
    """Error body returned by the resource API."""

    model_config = ConfigDict(populate_by_name=True)

    req_id: Any = Field(default=None, alias="reqId")
    error_code: Optional[int] = Field(default=None, alias="errorCode")
    error_msg: Optional[str] = Field(default=None, alias="errorMsg")
