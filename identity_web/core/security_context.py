"""
Per-request security context.
Owns the authentication state of one caller for the duration of one request.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from fastapi import Response
from identity_web.core import config
from identity_web.core.exceptions import AuthenticationException
from identity_web.models.credentials import CredentialToken
from identity_web.services.auth_service import IdentityAuthenticator, create_session_token, decode_session_token

logger = logging.getLogger(__name__)


class IdentitySecurityContext(ABC):
    """Contract the identity gateway consumes for login, logout and session state."""
    
    @abstractmethod
    def current_session(self) -> Optional[str]:
        """Principal of the current session, or None."""
        pass
    
    @abstractmethod
    def login(self, token: CredentialToken) -> None:
        """Authenticate the token. Raises AuthenticationException when credentials are invalid."""
        pass
    
    @abstractmethod
    def logout(self) -> None:
        """Clear identifying state. Safe when no session exists."""
        pass
    
    @abstractmethod
    def is_authenticated(self) -> bool:
        """Whether the current session is authenticated."""
        pass


class CookieSecurityContext(IdentitySecurityContext):
    """
    Security context backed by a signed session cookie.
    
    The principal is read from the request cookie when the context is built.
    Login and logout only schedule cookie changes; ``commit`` writes them
    onto the outgoing response.
    """
    
    def __init__(self, authenticator: IdentityAuthenticator, session_cookie: Optional[str] = None):
        self.authenticator = authenticator
        self._principal = decode_session_token(session_cookie) if session_cookie else None
        self._pending: List[Tuple[str, Optional[str], bool]] = []
    
    def current_session(self) -> Optional[str]:
        return self._principal
    
    def login(self, token: CredentialToken) -> None:
        outcome = self.authenticator.authenticate(token)
        
        if not outcome.authenticated:
            # a rejected attempt ends any session the request arrived with
            self._principal = None
            self._pending.append(("delete", None, False))
            raise AuthenticationException(outcome.reason or "Authentication failed")
        
        self._principal = token.username
        session_token = create_session_token(token.username, token.remember_me)
        self._pending.append(("set", session_token, token.remember_me))
    
    def logout(self) -> None:
        if self._principal is not None:
            logger.debug("Ending session for %s", self._principal)
        self._principal = None
        self._pending.append(("delete", None, False))
    
    def is_authenticated(self) -> bool:
        return self._principal is not None
    
    def commit(self, response: Response) -> Response:
        """Apply scheduled cookie changes to the response."""
        settings = config.settings
        for action, value, remember_me in self._pending:
            if action == "set":
                response.set_cookie(
                    key=settings.session_cookie_name,
                    value=value,
                    max_age=settings.session_max_age_seconds if remember_me else None,
                    httponly=True,
                    secure=settings.session_cookie_secure,
                    samesite="lax"
                )
            else:
                response.delete_cookie(
                    key=settings.session_cookie_name,
                    httponly=True,
                    secure=settings.session_cookie_secure,
                    samesite="lax"
                )
        self._pending.clear()
        return response
