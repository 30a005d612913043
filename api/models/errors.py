"""
Error response models.

Every failed request answers with ``{"error": <message>, "code": <code>}``.
"""

from pydantic import BaseModel
from typing import Optional

from shared.exceptions import WalletlinkError


class ErrorResponse(BaseModel):
    """Error body returned for any WalletlinkError."""

    error: str
    code: Optional[str] = None

    @classmethod
    def from_error(cls, exc: WalletlinkError) -> "ErrorResponse":
        return cls(error=exc.message, code=exc.code)
