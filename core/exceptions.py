"""
Console exceptions.

Custom exception classes for validation and remote API failures.

Validation errors are raised before any network call is made and are
surfaced to the operator as warnings. API errors wrap transport and HTTP
status failures; the action that triggered them leaves prior state intact.
"""


class ConsoleError(Exception):
    """Base exception for HR console errors."""
    pass


class ConsoleValidationError(ConsoleError):
    """Raised when an action is rejected client side, before any request."""
    pass


class FilterRequiredError(ConsoleValidationError):
    """
    Raised when a mandatory filter has not been selected.

    Examples:
        - Exporting a salary sheet without a reporting month
        - Searching the salary sheet without a reporting month
    """

    def __init__(self, message: str, filter_name: str | None = None) -> None:
        self.filter_name = filter_name
        super().__init__(message)


class LeaveTransitionError(ConsoleValidationError):
    """Raised when a leave request is not in a state that allows the action."""

    def __init__(self, message: str, leave_id: str | None = None) -> None:
        self.leave_id = leave_id
        super().__init__(message)


class EmptySelectionError(LeaveTransitionError):
    """Raised when a partial grant is submitted with no dates selected."""
    pass


class ApiError(ConsoleError):
    """Base exception for remote API failures."""
    pass


class ApiConnectionError(ApiError):
    """Raised when the remote API cannot be reached."""
    pass


class ApiResponseError(ApiError):
    """
    Raised when the remote API answers with an error status.

    Carries the HTTP status code and the server supplied message, if any.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
