"""Encoders for the OAuth2 token request."""

import base64
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import quote

from kyivstar_adwisor.errors import ConfigurationError

# Characters left unescaped by JavaScript's encodeURIComponent
_SAFE_CHARS = "-_.!~*'()"


def basic_auth_header(client_id: str, client_secret: str) -> str:
    """Build an HTTP Basic ``Authorization`` header value.

    Args:
        client_id: OAuth2 client ID
        client_secret: OAuth2 client secret

    Returns:
        ``"Basic <base64(client_id:client_secret)>"``

    Raises:
        ConfigurationError: If the credentials are not encodable as UTF-8
    """
    try:
        raw = f"{client_id}:{client_secret}".encode("utf-8")
    except UnicodeEncodeError as e:
        raise ConfigurationError(f"Credentials are not valid UTF-8: {e.reason}")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def _quote(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        value = int(value)
    return quote(str(value), safe=_SAFE_CHARS)


def form_encode(data: Mapping[str, Any], prefix: Optional[str] = None) -> str:
    """Serialize a nested mapping as ``application/x-www-form-urlencoded``.

    ``None`` values are skipped, nested mappings become ``outer[inner]=v``
    and sequences become repeated ``key[]=v`` pairs.

    Args:
        data: Mapping to encode, iterated in insertion order
        prefix: Key prefix used for nested mappings

    Returns:
        Encoded form body
    """
    pairs: list[str] = []

    for key, value in data.items():
        full_key = f"{prefix}[{_quote(key)}]" if prefix else _quote(key)

        if value is None:
            continue
        if isinstance(value, Mapping):
            nested = form_encode(value, full_key)
            if nested:
                pairs.append(nested)
        elif isinstance(value, (list, tuple)):
            for item in value:
                pairs.append(f"{full_key}[]={_quote(item)}")
        else:
            pairs.append(f"{full_key}={_quote(value)}")

    return "&".join(pairs)
