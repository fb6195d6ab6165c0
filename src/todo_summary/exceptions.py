"""Custom exceptions for Todo Summary Assistant."""


class TodoSummaryError(Exception):
    """Base exception for all Todo Summary errors."""


class TaskValidationError(TodoSummaryError):
    """Raised when task input is invalid (e.g. empty text after trimming)."""


class TaskNotFoundError(TodoSummaryError):
    """Raised when a task id or position does not match any task."""


class ConfigurationError(TodoSummaryError):
    """Raised when a required setting is missing or an override is invalid."""


class StoreError(TodoSummaryError):
    """Raised when the task store fails to read or write."""


class NotificationError(TodoSummaryError):
    """Raised when a webhook notification cannot be delivered."""


class SummaryGenerationError(TodoSummaryError):
    """Raised when the text-generation service fails or returns nothing."""
