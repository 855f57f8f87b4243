"""
DynamoDB Repository for identity storage.
Identities are keyed by username; a conditional write keeps usernames unique.
"""
from datetime import datetime
from typing import Optional
import boto3
from botocore.exceptions import ClientError
from identity_web.core import config
from identity_web.core.exceptions import DuplicateIdentityException, IdentityStoreException
from identity_web.models.identity import Identity
from identity_web.repositories.identity_repository import IdentityRepository


class DynamoIdentityRepository(IdentityRepository):
    """Repository for identity DynamoDB operations."""
    
    def __init__(self):
        self.dynamodb = boto3.resource('dynamodb', region_name=config.settings.aws_region)
        self.table = self.dynamodb.Table(config.settings.identities_table_name)
    
    def save(self, identity: Identity) -> None:
        """
        Save a new identity to DynamoDB.
        
        Args:
            identity: Identity domain model
            
        Raises:
            DuplicateIdentityException: If the username is already taken
            IdentityStoreException: If save operation fails
        """
        try:
            item = {
                'username': identity.username,
                'identity_id': identity.identity_id,
                'email': identity.email,
                'passphrase_hash': identity.passphrase_hash,
                'created_at': identity.created_at.isoformat()
            }
            
            self.table.put_item(
                Item=item,
                ConditionExpression='attribute_not_exists(username)'
            )
            
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == 'ConditionalCheckFailedException':
                raise DuplicateIdentityException(
                    f"Identity '{identity.username}' already exists"
                ) from e
            raise IdentityStoreException(f"Failed to save identity: {str(e)}") from e
        except Exception as e:
            raise IdentityStoreException(f"Unexpected error saving identity: {str(e)}") from e
    
    def find_by_username(self, username: str) -> Optional[Identity]:
        """
        Retrieve identity by username.
        
        Args:
            username: Username to look up
            
        Returns:
            Identity object or None if not found
            
        Raises:
            IdentityStoreException: If query fails
        """
        try:
            response = self.table.get_item(Key={'username': username})
            
            if 'Item' not in response:
                return None
            
            return self._item_to_identity(response['Item'])
            
        except ClientError as e:
            raise IdentityStoreException(f"Failed to get identity: {str(e)}") from e
        except Exception as e:
            raise IdentityStoreException(f"Unexpected error getting identity: {str(e)}") from e
    
    def _item_to_identity(self, item: dict) -> Identity:
        """Convert DynamoDB item to Identity domain model."""
        return Identity(
            identity_id=item['identity_id'],
            username=item['username'],
            email=item['email'],
            passphrase_hash=item['passphrase_hash'],
            created_at=datetime.fromisoformat(item['created_at'])
        )
