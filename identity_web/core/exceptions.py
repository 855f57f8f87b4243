"""
Custom exceptions for the Identity Web service.
Provides specific error types for different failure scenarios.
"""


class IdentityWebException(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class AuthenticationException(IdentityWebException):
    """Raised by the security context when credentials are rejected."""
    pass


class RegistrationException(IdentityWebException):
    """Raised when an identity cannot be registered."""
    pass


class DuplicateIdentityException(RegistrationException):
    """Raised when the requested username is already registered."""
    pass


class IdentityStoreException(IdentityWebException):
    """Raised when an identity store operation fails."""
    pass
