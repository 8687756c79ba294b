"""Core custom exceptions for the application."""


class DrafterError(Exception):
    """Base exception for report drafting errors."""


class ConfigurationError(DrafterError):
    """Exception for configuration-related errors (e.g., missing templates, invalid settings)."""


class InvalidRequestError(DrafterError):
    """Exception for generation requests that cannot be served as submitted."""


class PromptTooLargeError(DrafterError):
    """Raised when the assembled instruction exceeds the configured size limit."""
