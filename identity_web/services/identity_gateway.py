"""
Identity gateway.
Maps login, registration, logout and unauthorized requests to view or
redirect outcomes, delegating side effects to the security context and
the identity service.
"""
import logging
from typing import Optional, Union
from identity_web.core import config
from identity_web.core.exceptions import AuthenticationException
from identity_web.core.security_context import IdentitySecurityContext
from identity_web.models.credentials import CredentialToken
from identity_web.models.dto.identity_dto import LoginRequest, RegistrationRequest
from identity_web.models.outcome import RedirectOutcome, ViewOutcome
from identity_web.services.identity_service import IdentityService
from identity_web.services.validation_service import Validator

logger = logging.getLogger(__name__)

LOGIN_VIEW = "identity/login"
REGISTRATION_VIEW = "identity/registration"
REGISTERED_VIEW = "identity/register"
UNAUTHORIZED_VIEW = "identity/unauthorized"
HOME_VIEW = "home"
INDEX_PATH = "/index"

Outcome = Union[ViewOutcome, RedirectOutcome]


class IdentityGateway:
    """Stateless glue between identity routes and their collaborators."""
    
    def __init__(
        self,
        identity_service: IdentityService,
        validator: Optional[Validator] = None,
        remember_me: Optional[bool] = None
    ):
        self.identity_service = identity_service
        self.validator = validator or Validator()
        self.remember_me = remember_me
    
    def show_login(self) -> ViewOutcome:
        """Show the login form."""
        logger.debug("enter into login")
        return ViewOutcome(LOGIN_VIEW, {"login_form": LoginRequest()})
    
    def show_registration(self) -> ViewOutcome:
        """Show the registration form."""
        logger.info("Entering Registration")
        return ViewOutcome(REGISTRATION_VIEW, {"registration": RegistrationRequest()})
    
    def logout(self, security_context: IdentitySecurityContext) -> ViewOutcome:
        """End the caller's session, if any, and show the home view."""
        logger.debug("enter into logout")
        security_context.logout()
        return ViewOutcome(HOME_VIEW)
    
    def unauthorized(self, security_context: IdentitySecurityContext) -> ViewOutcome:
        """Clear any partial session and show the unauthorized view."""
        logger.debug("enter into unauthorized")
        security_context.logout()
        return ViewOutcome(UNAUTHORIZED_VIEW)
    
    def register(self, registration: RegistrationRequest) -> ViewOutcome:
        """
        Handle a submitted registration form.
        
        Invalid forms are shown again with the entered values. Failures from
        the identity service are not caught here and reach the exception
        handlers as typed RegistrationExceptions.
        """
        logger.info("Entering Register")
        
        errors = self.validator.validate(registration)
        if errors:
            return ViewOutcome(REGISTRATION_VIEW, {
                "registration": registration,
                "errors": _sorted_errors(errors)
            })
        
        identity = self.identity_service.register_identity(registration)
        
        return ViewOutcome(REGISTERED_VIEW, {
            "registration": registration,
            "identity": identity
        })
    
    def authenticate(self, login_form: LoginRequest, security_context: IdentitySecurityContext) -> Outcome:
        """
        Handle a submitted login form.
        
        One login attempt is made; its result is then read back from
        ``security_context.is_authenticated()``, which decides the outcome.
        """
        logger.info("Entering Authenticate")
        
        errors = self.validator.validate(login_form)
        if errors:
            return ViewOutcome(LOGIN_VIEW, {
                "login_form": login_form,
                "errors": _sorted_errors(errors)
            })
        
        token = CredentialToken(
            username=login_form.username,
            passphrase=login_form.passphrase,
            remember_me=self._remember_me()
        )
        
        try:
            security_context.login(token)
            logger.info("AUTH SUCCESS")
        except AuthenticationException as e:
            logger.info("AUTH MSSG: %s", e.message)
        
        if security_context.is_authenticated():
            return RedirectOutcome(INDEX_PATH)
        
        return ViewOutcome(LOGIN_VIEW, {"login_form": login_form})
    
    def _remember_me(self) -> bool:
        if self.remember_me is not None:
            return self.remember_me
        return config.settings.remember_me


def _sorted_errors(errors):
    return sorted(errors, key=lambda error: (error.field, error.message))
