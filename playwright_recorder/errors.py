"""Exceptions raised by the recorder."""


class RecorderError(Exception):
    """Base exception for recorder errors."""

    pass


class SessionAlreadyActiveError(RecorderError):
    """Raised when starting a session while another one is running."""

    def __init__(self, message: str = "Recording already in progress, end it first"):
        super().__init__(message)


class MissingUrlError(RecorderError):
    """Raised when a session is started without a page URL."""

    def __init__(self, message: str = "Please provide a page URL to start recording"):
        super().__init__(message)


class NoActiveSessionError(RecorderError):
    """Raised when stopping while no session is running."""

    def __init__(self, message: str = "No recording in progress to stop"):
        super().__init__(message)


class TemplateError(RecorderError):
    """Raised when the code template cannot be loaded."""

    pass


class EventFileError(RecorderError):
    """Raised when a saved event log does not hold a list of event objects."""

    pass
