"""
Log service exceptions

Each error carries the HTTP status it maps to, so the endpoint layer can
render it without knowing the individual subclasses.
"""


class LogServiceError(Exception):
    """Base class for caller-visible log service failures"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LogValidationError(LogServiceError):
    """Malformed or incomplete caller input"""

    status_code = 400


class LogPersistenceError(LogServiceError):
    """The collection could not be written back to the store"""

    status_code = 500
