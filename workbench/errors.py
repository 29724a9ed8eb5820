"""
errors.py — Typed failures raised by the services.
Routes translate these into HTTP responses; nothing below the routes
catches them.
"""


class WorkbenchError(Exception):
    """Base class for every failure a caller is expected to handle."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WorkbenchError):
    """Rejected input: negative hours, empty names, bad ranges, illegal transitions."""

    status_code = 422


class NotFound(WorkbenchError):
    status_code = 404

    def __init__(self, kind: str, ident):
        super().__init__(f"{kind} {ident} not found")
        self.kind = kind
        self.ident = ident


class StoreUnavailable(WorkbenchError):
    """The database could not serve the request. Never retried here."""

    status_code = 503
