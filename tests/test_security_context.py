"""
Tests for the cookie-backed security context.
"""
from datetime import datetime, timedelta
from unittest.mock import Mock
import jwt
import pytest
from fastapi import Response
from identity_web.core import config
from identity_web.core.exceptions import AuthenticationException
from identity_web.core.security_context import CookieSecurityContext
from identity_web.models.credentials import AuthenticationOutcome, CredentialToken
from identity_web.models.dto.identity_dto import LoginRequest
from identity_web.services.auth_service import create_session_token, decode_session_token
from identity_web.services.identity_gateway import IdentityGateway


class TestCookieSecurityContext:
    """Test suite for CookieSecurityContext."""
    
    @pytest.fixture
    def authenticator(self):
        authenticator = Mock()
        authenticator.authenticate.return_value = AuthenticationOutcome.success()
        return authenticator
    
    def _set_cookie_header(self, context):
        response = context.commit(Response())
        return response.headers.get("set-cookie")
    
    def test_no_cookie_means_no_session(self, authenticator):
        context = CookieSecurityContext(authenticator)
        
        assert context.current_session() is None
        assert context.is_authenticated() is False
    
    def test_valid_cookie_restores_session(self, authenticator):
        context = CookieSecurityContext(authenticator, session_cookie=create_session_token("alice"))
        
        assert context.current_session() == "alice"
        assert context.is_authenticated() is True
    
    def test_tampered_cookie_is_ignored(self, authenticator):
        token = create_session_token("alice")
        
        context = CookieSecurityContext(authenticator, session_cookie=token[:-4] + "abcd")
        
        assert context.is_authenticated() is False
    
    def test_expired_cookie_is_ignored(self, authenticator):
        payload = {
            "sub": "alice",
            "exp": datetime.utcnow() - timedelta(minutes=1),
            "iat": datetime.utcnow() - timedelta(hours=1)
        }
        token = jwt.encode(payload, config.settings.jwt_secret, algorithm=config.settings.jwt_algorithm)
        
        context = CookieSecurityContext(authenticator, session_cookie=token)
        
        assert context.is_authenticated() is False
    
    def test_login_success(self, authenticator):
        context = CookieSecurityContext(authenticator)
        token = CredentialToken("alice", "password123", remember_me=False)
        
        context.login(token)
        
        authenticator.authenticate.assert_called_once_with(token)
        assert context.is_authenticated() is True
        assert context.current_session() == "alice"
    
    def test_login_remember_me_sets_persistent_cookie(self, authenticator):
        context = CookieSecurityContext(authenticator)
        context.login(CredentialToken("alice", "password123", remember_me=True))
        
        header = self._set_cookie_header(context)
        
        assert header.startswith(f"{config.settings.session_cookie_name}=")
        assert f"Max-Age={config.settings.session_max_age_seconds}" in header
        assert "HttpOnly" in header
        cookie_value = header.split(";")[0].split("=", 1)[1]
        assert decode_session_token(cookie_value) == "alice"
    
    def test_login_without_remember_me_sets_session_cookie(self, authenticator):
        context = CookieSecurityContext(authenticator)
        context.login(CredentialToken("alice", "password123", remember_me=False))
        
        header = self._set_cookie_header(context)
        
        assert header.startswith(f"{config.settings.session_cookie_name}=")
        assert "Max-Age" not in header
    
    def test_login_failure_raises(self, authenticator):
        authenticator.authenticate.return_value = AuthenticationOutcome.failed("Invalid username or passphrase")
        context = CookieSecurityContext(authenticator)
        
        with pytest.raises(AuthenticationException) as exc_info:
            context.login(CredentialToken("alice", "wrong"))
        
        assert exc_info.value.message == "Invalid username or passphrase"
        assert context.is_authenticated() is False
        assert "Max-Age=0" in self._set_cookie_header(context)
    
    def test_failed_login_ends_existing_session(self, authenticator):
        """A rejected attempt on a live session leaves no session behind, in the response or after it."""
        authenticator.authenticate.return_value = AuthenticationOutcome.failed("bad")
        context = CookieSecurityContext(authenticator, session_cookie=create_session_token("alice", True))
        gateway = IdentityGateway(identity_service=Mock())
        
        outcome = gateway.authenticate(LoginRequest(username="mallory", passphrase="x"), context)
        
        assert outcome.view_name == "identity/login"
        assert context.is_authenticated() is False
        header = self._set_cookie_header(context)
        assert header.startswith(f'{config.settings.session_cookie_name}=""')
        assert "Max-Age=0" in header
        cookie_value = header.split(";")[0].split("=", 1)[1].strip('"')
        next_request = CookieSecurityContext(authenticator, session_cookie=cookie_value)
        assert next_request.is_authenticated() is False
    
    def test_logout_clears_session(self, authenticator):
        context = CookieSecurityContext(authenticator, session_cookie=create_session_token("alice"))
        
        context.logout()
        
        assert context.is_authenticated() is False
        header = self._set_cookie_header(context)
        assert header.startswith(f'{config.settings.session_cookie_name}=""')
        assert "Max-Age=0" in header
    
    def test_logout_without_session(self, authenticator):
        """Logout is safe when nobody is logged in."""
        context = CookieSecurityContext(authenticator)
        
        context.logout()
        context.logout()
        
        assert context.is_authenticated() is False
    
    def test_commit_clears_pending_changes(self, authenticator):
        context = CookieSecurityContext(authenticator)
        context.logout()
        context.commit(Response())
        
        assert self._set_cookie_header(context) is None
