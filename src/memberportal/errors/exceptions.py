"""Portal error taxonomy.

Each subclass fixes its machine-readable ``code`` and HTTP ``status_code``;
handlers in :mod:`memberportal.errors.handlers` render them into the
``ErrorResponse`` envelope.
"""


class PortalError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, details=None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(PortalError):
    """Request body, path identifier or profile patch rejected."""

    code = "VALIDATION_ERROR"
    status_code = 400


class AuthenticationError(PortalError):
    """No valid session, or the session is not linked to a member."""

    code = "AUTHENTICATION_ERROR"
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class AuthorizationError(PortalError):
    """Valid session but not the author, not on the committee, or not an admin."""

    code = "AUTHORIZATION_ERROR"
    status_code = 403

    def __init__(self, message: str = "Not permitted"):
        super().__init__(message)


class NotFoundError(PortalError):
    """Deal, comment or member row absent; soft-deleted comments count as absent."""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str, resource_id):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} '{resource_id}' not found")


class UpstreamError(PortalError):
    """Record store call failed, timed out or is not configured."""

    code = "UPSTREAM_ERROR"
    status_code = 502

    def __init__(self, message: str = "Record store request failed", details=None):
        super().__init__(message, details)
