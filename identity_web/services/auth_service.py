"""
Authentication service: passphrase hashing, credential verification
and session token management.
"""
import logging
import jwt
import bcrypt
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Optional
from identity_web.core import config
from identity_web.models.credentials import AuthenticationOutcome, CredentialToken
from identity_web.repositories.identity_repository import IdentityRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or passphrase"


@lru_cache(maxsize=4)
def _unknown_identity_hash(rounds: int) -> str:
    """Fixed hash checked for unknown usernames, at the same cost as real ones."""
    return bcrypt.hashpw(b"unknown-identity", bcrypt.gensalt(rounds=rounds)).decode('utf-8')


def hash_passphrase(plain_passphrase: str) -> str:
    """
    Hash a passphrase with bcrypt.
    
    Args:
        plain_passphrase: The plain text passphrase
        
    Returns:
        bcrypt hash as a UTF-8 string
    """
    salt = bcrypt.gensalt(rounds=config.settings.bcrypt_rounds)
    return bcrypt.hashpw(plain_passphrase.encode('utf-8'), salt).decode('utf-8')


def verify_passphrase(plain_passphrase: str, passphrase_hash: str) -> bool:
    """
    Verify a plain passphrase against a bcrypt hash.
    
    Args:
        plain_passphrase: The plain text passphrase to verify
        passphrase_hash: The bcrypt hash from the identity store
        
    Returns:
        True if passphrase matches, False otherwise
    """
    return bcrypt.checkpw(plain_passphrase.encode('utf-8'), passphrase_hash.encode('utf-8'))


def create_session_token(username: str, remember_me: bool = False) -> str:
    """
    Generate a signed session token for an authenticated identity.
    
    Remembered sessions live for ``remember_me_days``; others for
    ``session_expiration_hours``.
    """
    now = datetime.utcnow()
    if remember_me:
        expiration = now + timedelta(days=config.settings.remember_me_days)
    else:
        expiration = now + timedelta(hours=config.settings.session_expiration_hours)
    
    payload = {
        "sub": username,
        "exp": expiration,
        "iat": now,
        "remember_me": remember_me
    }
    
    return jwt.encode(payload, config.settings.jwt_secret, algorithm=config.settings.jwt_algorithm)


def decode_session_token(token: str) -> Optional[str]:
    """
    Decode a session token.
    
    Returns:
        Username carried by the token, or None if it is expired, tampered or malformed
    """
    try:
        payload = jwt.decode(token, config.settings.jwt_secret, algorithms=[config.settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.debug("Session token expired")
        return None
    except jwt.InvalidTokenError:
        logger.debug("Session token invalid")
        return None
    
    username = payload.get('sub')
    return username or None


class IdentityAuthenticator:
    """Verifies credential tokens against the identity store."""
    
    def __init__(self, identity_repository: IdentityRepository):
        self.identity_repository = identity_repository
    
    def authenticate(self, token: CredentialToken) -> AuthenticationOutcome:
        """
        Verify a credential token.
        
        Unknown usernames and wrong passphrases produce the same failure
        reason and both pay for one bcrypt check.
        """
        identity = self.identity_repository.find_by_username(token.username)
        
        if identity is None:
            verify_passphrase(token.passphrase, _unknown_identity_hash(config.settings.bcrypt_rounds))
            return AuthenticationOutcome.failed(INVALID_CREDENTIALS)
        
        if not verify_passphrase(token.passphrase, identity.passphrase_hash):
            return AuthenticationOutcome.failed(INVALID_CREDENTIALS)
        
        return AuthenticationOutcome.success()
