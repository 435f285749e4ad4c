"""
Exceptions raised by the auth-code strategy and its OAuth2 client.

Strategy code never lets these escape authenticate(); they are carried on the
AuthResult so the host framework decides the HTTP status.
"""


class AuthCodeError(Exception):
    """Base class for errors raised by this package."""


class OAuth2ClientError(AuthCodeError):
    """The OAuth2 client failed to exchange a code or fetch a protected resource."""

    def __init__(self, message: str, status_code: int | None = None, data=None):
        """status_code and data describe the HTTP response, when there was one."""
        super().__init__(message)
        self.status_code = status_code
        self.data = data


class InternalOAuthError(AuthCodeError):
    """Wraps a client failure that happened after the token exchange succeeded."""

    def __init__(self, message: str, oauth_error: Exception | None = None):
        """oauth_error is the underlying client failure."""
        super().__init__(message)
        self.message = message
        self.oauth_error = oauth_error

    def __str__(self) -> str:
        """Message followed by the cause, if any."""
        if self.oauth_error is None:
            return self.message
        return f"{self.message}: {self.oauth_error}"
