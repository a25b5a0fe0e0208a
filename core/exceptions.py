"""
Error taxonomy shared by the service modules.

Views turn these into form messages (dashboard, auth) or a generic 404
(public routes); they never reach the user as raw storage errors.
"""


class WhoMeError(Exception):
    """Base class carrying a user-facing message."""
    default_message = 'Something went wrong'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(WhoMeError):
    """Bad input shape or charset. Nothing was written."""
    default_message = 'Invalid input'


class ConflictError(WhoMeError):
    """A uniqueness rule was violated (vanity path, domain, username, email)."""
    default_message = 'Already taken'


class NotFoundError(WhoMeError):
    default_message = 'Not found'


class AuthError(WhoMeError):
    """Bad credentials or an invalid, expired or used token."""
    default_message = 'Not authorized'


class ExternalServiceError(WhoMeError):
    """The session store failed. Logged by callers, never fatal."""
    default_message = 'External service failure'
