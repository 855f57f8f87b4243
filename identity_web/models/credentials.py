"""
Credential token and authentication outcome.
Both live for a single login attempt and are never persisted.
"""
from typing import Optional


class CredentialToken:
    """Username and passphrase submitted for verification."""
    
    def __init__(self, username: str, passphrase: str, remember_me: bool = False):
        self.username = username
        self.passphrase = passphrase
        self.remember_me = remember_me
    
    def __repr__(self):
        # passphrase omitted
        return f"CredentialToken(username={self.username}, remember_me={self.remember_me})"


class AuthenticationOutcome:
    """Result of verifying a credential token."""
    
    def __init__(self, authenticated: bool, reason: Optional[str] = None):
        self.authenticated = authenticated
        self.reason = reason
    
    @classmethod
    def success(cls) -> "AuthenticationOutcome":
        return cls(authenticated=True)
    
    @classmethod
    def failed(cls, reason: str) -> "AuthenticationOutcome":
        return cls(authenticated=False, reason=reason)
    
    def __repr__(self):
        if self.authenticated:
            return "AuthenticationOutcome(Authenticated)"
        return f"AuthenticationOutcome(Failed: {self.reason})"
