"""Custom exception classes."""


class RecipeAIException(Exception):
    """Base exception for RecipeAI application."""

    pass


class ValidationError(RecipeAIException):
    """Raised when input validation fails."""

    pass


class GeminiError(RecipeAIException):
    """Raised when Gemini API call fails or returns no usable output."""

    pass


class ExtractionError(RecipeAIException):
    """Raised when no JSON payload can be recovered from a model reply."""

    pass


class ImageProcessingError(RecipeAIException):
    """Raised when image processing fails."""

    pass


class DevicePermissionError(RecipeAIException):
    """Raised when a speech or camera device is unavailable or denied."""

    pass
