"""
Domain model for the Identity entity.
Storage-agnostic representation of a registered user.
"""
from datetime import datetime
from typing import Optional


class Identity:
    """Domain model representing a registered identity."""
    
    def __init__(
        self,
        identity_id: str,
        username: str,
        email: str,
        passphrase_hash: str,
        created_at: Optional[datetime] = None
    ):
        self.identity_id = identity_id
        self.username = username
        self.email = email
        self.passphrase_hash = passphrase_hash
        self.created_at = created_at or datetime.utcnow()
    
    def __repr__(self):
        return f"Identity(identity_id={self.identity_id}, username={self.username})"
