"""
Error taxonomy for the easyVerein sync.

SyncStepError subclasses end the current sync step (an entity, or one day of
events). RecordError subclasses only skip the record being processed.
"""


class EasyVereinError(Exception):
    """Base class for all sync errors."""


class SyncStepError(EasyVereinError):
    """A request-level failure; the current entity or day cannot continue."""


class TransportError(SyncStepError):
    """Connection, timeout or TLS failure before a response was received."""


class RateLimitExceeded(SyncStepError):
    """The API kept answering 429 after the retry budget was spent."""

    def __init__(self, attempts):
        self.attempts = attempts
        super().__init__(f"Failed after {attempts} attempts due to rate limiting")


class TokenRefreshFailed(SyncStepError):
    """The refresh endpoint did not hand out a new token."""


class ApiRequestFailed(SyncStepError):
    """The API answered with a status code we don't handle."""

    def __init__(self, status_code, body, url=None):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"API request failed with status code {status_code}, Response: {body}")


class RecordError(EasyVereinError):
    """A single record could not be processed; the run continues."""


class MappingError(RecordError):
    """The record is missing a required field or has one we can't parse."""


class PersistenceError(RecordError):
    """The upsert failed and its transaction was rolled back."""
