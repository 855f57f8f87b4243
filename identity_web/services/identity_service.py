"""
Identity Service for registration business logic.
Creates identities and persists them through the identity repository.
"""
import logging
import uuid
from datetime import datetime
from identity_web.core.exceptions import DuplicateIdentityException, IdentityStoreException, RegistrationException
from identity_web.models.dto.identity_dto import RegistrationRequest
from identity_web.models.identity import Identity
from identity_web.repositories.identity_repository import IdentityRepository
from identity_web.services.auth_service import hash_passphrase

logger = logging.getLogger(__name__)


class IdentityService:
    """Service for identity registration and lookup."""
    
    def __init__(self, identity_repository: IdentityRepository):
        self.identity_repository = identity_repository
    
    def register_identity(self, registration: RegistrationRequest) -> Identity:
        """
        Register a new identity.
        
        Args:
            registration: Validated registration form
            
        Returns:
            The persisted Identity
            
        Raises:
            DuplicateIdentityException: If the username is already registered
            RegistrationException: If the identity could not be stored
        """
        if self.identity_repository.find_by_username(registration.username) is not None:
            raise DuplicateIdentityException(f"Identity '{registration.username}' already exists")
        
        identity = Identity(
            identity_id=str(uuid.uuid4()),
            username=registration.username,
            email=registration.email,
            passphrase_hash=hash_passphrase(registration.passphrase),
            created_at=datetime.utcnow()
        )
        
        try:
            self.identity_repository.save(identity)
        except DuplicateIdentityException:
            raise
        except IdentityStoreException as e:
            raise RegistrationException(f"Failed to register identity: {e.message}") from e
        
        logger.info("Registered identity %s", identity.identity_id)
        return identity
