"""Encoding of key/value maps into application/x-www-form-urlencoded payloads."""

from typing import Mapping, Optional
from urllib.parse import quote

from network_manager.core.logging import get_logger

logger = get_logger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Alphanumerics are always kept by quote(); "~" is not in the form set.
_SAFE_CHARACTERS = "-._* "


def _escape(value: str) -> str:
    escaped = quote(value, safe=_SAFE_CHARACTERS, encoding="utf-8", errors="strict")
    return escaped.replace("~", "%7E").replace(" ", "+")


def encode_form(parameters: Mapping[str, str]) -> Optional[bytes]:
    """
    Encode parameters as a classic HTML form body.

    Values are percent-escaped and spaces become ``+``. Keys are emitted as is.

    Returns:
        UTF-8 bytes, or None when there is nothing to send or a value
        cannot be represented
    """
    if not parameters:
        return None

    try:
        pairs = [f"{key}={_escape(str(value))}" for key, value in parameters.items()]
        return "&".join(pairs).encode("utf-8")
    except UnicodeEncodeError as e:
        logger.debug(f"Form encoding failed: {e}")
        return None
