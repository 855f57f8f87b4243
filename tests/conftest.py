"""
Shared test fixtures and utilities.
"""
import os

# Cheap bcrypt cost for tests; read when settings are built
os.environ.setdefault('BCRYPT_ROUNDS', '4')

import pytest
import boto3
from identity_web.core import config


IDENTITIES_TABLE = 'Identities-test'


def create_identities_table():
    """Create the identities table inside an active moto mock."""
    dynamodb = boto3.resource('dynamodb', region_name='us-east-1')
    return dynamodb.create_table(
        TableName=IDENTITIES_TABLE,
        KeySchema=[{'AttributeName': 'username', 'KeyType': 'HASH'}],
        AttributeDefinitions=[{'AttributeName': 'username', 'AttributeType': 'S'}],
        BillingMode='PAY_PER_REQUEST'
    )


def clear_dependency_cache():
    from identity_web.core import dependencies
    dependencies.get_identity_repository.cache_clear()
    dependencies.get_identity_service.cache_clear()
    dependencies.get_identity_authenticator.cache_clear()
    dependencies.get_validator.cache_clear()
    dependencies.get_identity_gateway.cache_clear()


@pytest.fixture
def aws_environment():
    """Mock AWS credentials and point settings at the test table."""
    os.environ['AWS_ACCESS_KEY_ID'] = 'testing'
    os.environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
    os.environ['AWS_SECURITY_TOKEN'] = 'testing'
    os.environ['AWS_SESSION_TOKEN'] = 'testing'
    os.environ['AWS_REGION'] = 'us-east-1'
    os.environ['IDENTITIES_TABLE_NAME'] = IDENTITIES_TABLE
    os.environ['ENVIRONMENT'] = 'test'
    config.settings = config.Settings()
    clear_dependency_cache()
    
    yield
    
    for key in ['IDENTITIES_TABLE_NAME', 'ENVIRONMENT']:
        if key in os.environ:
            del os.environ[key]
    config.settings = config.Settings()
    clear_dependency_cache()


@pytest.fixture
def create_table():
    """Return a helper that creates the identities table; call it inside a moto mock."""
    return create_identities_table
