"""
Custom exceptions for the ID verification service.

The extraction and comparison core never raises; these are used at the
boundaries (upload validation, OCR, workflow transitions).
"""

from typing import Any, Dict, Optional


class IdVerifyError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(IdVerifyError):
    """Invalid or missing configuration."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details=details)


class UploadRejectedError(IdVerifyError):
    """Upload refused before OCR runs."""


class InvalidMediaTypeError(UploadRejectedError):
    def __init__(self, content_type: Optional[str]):
        super().__init__(
            "Please select an image file.",
            details={"content_type": content_type},
        )


class PayloadTooLargeError(UploadRejectedError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Please select an image smaller than {limit // (1024 * 1024)}MB.",
            details={"size": size, "limit": limit},
        )


class ImageTooLargeError(UploadRejectedError):
    """Image declares more pixels than Pillow will safely decode."""

    def __init__(self, reason: str):
        super().__init__(
            "Image dimensions are too large. Please upload a smaller photo.",
            details={"reason": reason},
        )


class RecognitionError(IdVerifyError):
    """The OCR engine failed to produce text."""

    def __init__(self, message: str, engine: Optional[str] = None):
        details = {"engine": engine} if engine else None
        super().__init__(message, details=details)


class WorkflowStateError(IdVerifyError):
    """An action was attempted in the wrong workflow step."""

    def __init__(self, action: str, step: str):
        super().__init__(
            f"Cannot {action} while in the '{step}' step",
            details={"action": action, "step": step},
        )
