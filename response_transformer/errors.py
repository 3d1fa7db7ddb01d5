# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Standard error codes for the response transformer.

Errors carry a machine-readable code, a human-readable message, optional
details and a remediation suggestion. The web layer renders them as:

```json
{
  "error": {
    "code": "TRANSFORMER_NOT_FOUND",
    "message": "No transformer available for 'Article'",
    "details": {"type_key": "Article"},
    "suggestion": "Register a transformer for this type before returning it"
  }
}
```
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TransformerErrorCode(str, Enum):
    """Standard transformer error codes.

    Each code maps to a specific HTTP status and has a default suggestion.
    """

    # 400 Bad Request
    INVALID_EMBEDS = "INVALID_EMBEDS"

    # 500 Internal Server Error
    DEPENDENCY_NOT_RESOLVABLE = "DEPENDENCY_NOT_RESOLVABLE"
    TRANSFORMER_NOT_FOUND = "TRANSFORMER_NOT_FOUND"
    INVALID_TRANSFORMER = "INVALID_TRANSFORMER"
    INVALID_TYPE_KEY = "INVALID_TYPE_KEY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_CODE_TO_HTTP_STATUS: dict[TransformerErrorCode, int] = {
    TransformerErrorCode.INVALID_EMBEDS: 400,
    TransformerErrorCode.DEPENDENCY_NOT_RESOLVABLE: 500,
    TransformerErrorCode.TRANSFORMER_NOT_FOUND: 500,
    TransformerErrorCode.INVALID_TRANSFORMER: 500,
    TransformerErrorCode.INVALID_TYPE_KEY: 500,
    TransformerErrorCode.INTERNAL_ERROR: 500,
}


ERROR_CODE_SUGGESTIONS: dict[TransformerErrorCode, str] = {
    TransformerErrorCode.INVALID_EMBEDS: "Check the embeds query parameter against the available includes",
    TransformerErrorCode.DEPENDENCY_NOT_RESOLVABLE: "Bind the dependency in the container before the first transform",
    TransformerErrorCode.TRANSFORMER_NOT_FOUND: "Register a transformer for this type before returning it",
    TransformerErrorCode.INVALID_TRANSFORMER: "Register a transformer class, a factory, or a callable",
    TransformerErrorCode.INVALID_TYPE_KEY: "Register with a string key, a scalar sentinel, or a class",
    TransformerErrorCode.INTERNAL_ERROR: "Retry the request; if persistent, contact support",
}


class TransformerErrorDetail(BaseModel):
    """Standard error response body."""

    code: str = Field(
        ...,
        description="Machine-readable error code (e.g., 'TRANSFORMER_NOT_FOUND')",
        examples=["TRANSFORMER_NOT_FOUND", "DEPENDENCY_NOT_RESOLVABLE"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["No transformer available for 'Article'"],
    )
    details: dict[str, Any] | None = Field(
        None,
        description="Additional context for debugging",
        examples=[{"type_key": "Article"}],
    )
    suggestion: str | None = Field(
        None,
        description="Remediation hint",
    )


class TransformerErrorResponse(BaseModel):
    """Wrapper for error responses."""

    error: TransformerErrorDetail


class TransformerError(Exception):
    """Base exception for transformer errors.

    Usage:
        raise TransformerError(
            code=TransformerErrorCode.INVALID_TRANSFORMER,
            message="Transformer for 'Article' is not callable",
            details={"type_key": "Article"},
        )
    """

    def __init__(
        self,
        code: TransformerErrorCode | str,
        message: str,
        details: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        self.code = code if isinstance(code, TransformerErrorCode) else TransformerErrorCode(code)
        self.message = message
        self.details = details
        self.suggestion = suggestion or ERROR_CODE_SUGGESTIONS.get(self.code)
        super().__init__(message)

    @property
    def http_status(self) -> int:
        """Get HTTP status code for this error."""
        return ERROR_CODE_TO_HTTP_STATUS.get(self.code, 500)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
                "suggestion": self.suggestion,
            }
        }

    def to_response(self) -> TransformerErrorResponse:
        """Convert to Pydantic response model."""
        return TransformerErrorResponse(
            error=TransformerErrorDetail(
                code=self.code.value,
                message=self.message,
                details=self.details,
                suggestion=self.suggestion,
            )
        )


# =============================================================================
# Specific Error Classes
# =============================================================================


class NotResolvableError(TransformerError):
    """Raised by the container when no binding exists for a dependency."""

    def __init__(self, abstract: Any, message: str | None = None):
        name = getattr(abstract, "__name__", str(abstract))
        super().__init__(
            code=TransformerErrorCode.DEPENDENCY_NOT_RESOLVABLE,
            message=message or f"Dependency '{name}' is not resolvable",
            details={"dependency": name},
        )
        self.abstract = abstract


class TransformerNotFoundError(TransformerError):
    """Raised when the engine must transform data without a transformer."""

    def __init__(self, type_key: Any, message: str | None = None):
        super().__init__(
            code=TransformerErrorCode.TRANSFORMER_NOT_FOUND,
            message=message or f"No transformer available for '{type_key}'",
            details={"type_key": str(type_key)},
        )
        self.type_key = type_key


class InvalidTransformerError(TransformerError):
    """Raised when a rule or transformer has an unusable shape."""

    def __init__(self, transformer: Any, message: str | None = None):
        kind = type(transformer).__name__
        super().__init__(
            code=TransformerErrorCode.INVALID_TRANSFORMER,
            message=message or f"Cannot use object of type '{kind}' as a transformer",
            details={"transformer_type": kind},
        )



class InvalidTypeKeyError(TransformerError):
    """Raised when a transformer is registered under an unhashable key."""

    def __init__(self, type_key: Any, message: str | None = None):
        kind = type(type_key).__name__
        super().__init__(
            code=TransformerErrorCode.INVALID_TYPE_KEY,
            message=message or f"Type key of type '{kind}' is not hashable",
            details={"key_type": kind},
        )
