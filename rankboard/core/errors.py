"""
Failure taxonomy for an analysis run.

All three kinds reach the user as one message category; the subclass is
kept for logs and diagnostics.
"""

GENERIC_USER_MESSAGE = (
    "An error occurred during analysis. Check that the images are legible "
    "and that the API settings are correct."
)


class AnalysisError(Exception):
    """Base class for every failure an analysis run can end with."""

    user_message = GENERIC_USER_MESSAGE


class ValidationError(AnalysisError):
    """Slot contents do not satisfy the preconditions; no request was sent."""

    def __init__(self, message: str):
        super().__init__(message)
        self.user_message = message


class RemoteExtractionError(AnalysisError):
    """Transport failure after all retries, or a success response without text."""


class MalformedResponseError(AnalysisError):
    """The response text could not be parsed as a JSON object."""
