from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional


class APIErrorModel(BaseModel):
    """Common JSON error envelope; unknown fields are kept in ``extra``."""

    model_config = ConfigDict(extra="allow")

    message: str
    code: Optional[str] = None
    details: Optional[Dict[str, Any]] = Field(default=None)
