"""Application errors.

Each error carries the HTTP status the API answers with, so blueprints can
turn any of them into ``{"error": message}`` without a lookup table.
"""


class LexAidError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ServiceUnavailableError(LexAidError):
    """A backing service (database, AI backend) is not configured or reachable."""
    status_code = 503


class ValidationError(LexAidError):
    status_code = 400


class NotFoundError(LexAidError):
    status_code = 404


class AIServiceError(LexAidError):
    """The generative-AI backend failed or returned an unusable response."""
    status_code = 502


class PaymentError(LexAidError):
    status_code = 402
