"""
Domain exceptions for the screening engine.

Oracle errors are retryable and never leave partial state behind.
Validation errors are raised before any oracle call is made.
"""


class ScreeningError(Exception):
    """Base exception for screening engine errors."""
    pass


class OracleError(ScreeningError):
    """Base for failures of the external intelligence service."""

    retryable = True

    def __init__(self, message: str, task: str = "unknown"):
        super().__init__(message)
        self.task = task


class OracleUnavailableError(OracleError):
    """Raised when the oracle cannot be reached or answers with a service error."""
    pass


class MalformedResponseError(OracleError):
    """Raised when oracle output cannot be decoded into the expected shape."""

    def __init__(self, message: str, task: str = "unknown", raw_text: str = ""):
        super().__init__(message, task)
        self.raw_text = raw_text


class ScoreGenerationError(OracleError):
    """Raised when a candidate could not be scored against a job."""
    pass


class TailoringError(OracleError):
    """Raised when a tailoring suggestion could not be produced."""
    pass


class ReportGenerationError(OracleError):
    """Raised when a pipeline report could not be produced."""
    pass


class ParseError(OracleError):
    """Raised when a job description or resume could not be parsed."""
    pass


class ValidationError(ScreeningError):
    """Raised when input is rejected before any oracle call."""
    pass


class NotFoundError(ScreeningError):
    """Raised when a job, candidate or user id is unknown."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class AuthenticationError(ScreeningError):
    """Raised when no valid principal is available."""
    pass


class TrialExpiredError(ScreeningError):
    """Raised when a free-tier principal's evaluation period is over."""
    pass
