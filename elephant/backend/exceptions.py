class BackendError(Exception):
    """
    A non-2xx answer (or no answer at all) from the backend API.

    ``status`` is the HTTP status code, or None when the request never got a
    response. ``payload`` is the parsed JSON body when there was one,
    otherwise the raw text.
    """

    def __init__(self, message, status=None, payload=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload


class BackendAuthError(BackendError):
    """HTTP 401: the admin session is missing or expired."""


class BackendNotFound(BackendError):
    """HTTP 404."""


class BackendUnavailable(BackendError):
    """Transport failure: connection refused, DNS, timeout, bad JSON."""
