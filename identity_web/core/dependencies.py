"""
Dependency injection container for FastAPI.
Provides singleton-like behavior for services and repositories, and a
fresh security context per request.
"""
from functools import lru_cache
from fastapi import Depends, Request
from identity_web.core import config
from identity_web.core.security_context import CookieSecurityContext
from identity_web.repositories.identity_repository import IdentityRepository
from identity_web.repositories.dynamo_identity_repository import DynamoIdentityRepository
from identity_web.services.auth_service import IdentityAuthenticator
from identity_web.services.identity_gateway import IdentityGateway
from identity_web.services.identity_service import IdentityService
from identity_web.services.validation_service import Validator


@lru_cache()
def get_identity_repository() -> IdentityRepository:
    """Get IdentityRepository singleton instance."""
    return DynamoIdentityRepository()


@lru_cache()
def get_identity_service() -> IdentityService:
    """Get IdentityService singleton instance with injected repository."""
    return IdentityService(identity_repository=get_identity_repository())


@lru_cache()
def get_identity_authenticator() -> IdentityAuthenticator:
    """Get IdentityAuthenticator singleton instance with injected repository."""
    return IdentityAuthenticator(identity_repository=get_identity_repository())


@lru_cache()
def get_validator() -> Validator:
    """Get Validator singleton instance."""
    return Validator()


@lru_cache()
def get_identity_gateway() -> IdentityGateway:
    """Get IdentityGateway singleton instance with injected dependencies."""
    return IdentityGateway(
        identity_service=get_identity_service(),
        validator=get_validator()
    )


def get_security_context(
    request: Request,
    authenticator: IdentityAuthenticator = Depends(get_identity_authenticator)
) -> CookieSecurityContext:
    """Build the security context for the current request from its session cookie."""
    return CookieSecurityContext(
        authenticator=authenticator,
        session_cookie=request.cookies.get(config.settings.session_cookie_name)
    )
