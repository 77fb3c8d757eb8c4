"""
Structured decoding of JSON payloads into arbitrary Python types.

Backed by pydantic, so targets may be BaseModel subclasses, dataclasses,
TypedDicts or plain containers such as ``dict[str, int]``.
"""

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError


@lru_cache(maxsize=256)
def _adapter_for(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


class StructuredDecoder:
    """Decode bytes into a target type, raising on malformed input."""

    def decode(self, body: bytes, target: Any) -> Any:
        """
        Decode a JSON body.

        Args:
            body: Raw JSON payload
            target: Type to validate the payload against

        Returns:
            Instance of target

        Raises:
            ValidationError: If the payload is not valid JSON or does not
                match target
        """
        return _adapter_for(target).validate_json(body)
