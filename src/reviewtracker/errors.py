"""Custom exception types for the review tracker."""


class ReviewTrackerError(Exception):
    """Base exception for all recoverable review tracker errors."""


class ConfigurationError(ReviewTrackerError):
    """Raised when runtime configuration values are missing or invalid."""


class ApiError(ReviewTrackerError):
    """Raised when the review tracking API fails or returns an unexpected response."""


class InvalidInputError(ReviewTrackerError):
    """Raised when a review document or event sequence is malformed."""
