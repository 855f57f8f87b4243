"""
Session secret lookup in AWS Systems Manager Parameter Store.
Each environment keeps its signing secret under /identity-web/<environment>/session-secret.
"""
import boto3
from functools import lru_cache

SESSION_SECRET_PARAMETER = "/identity-web/{environment}/session-secret"


@lru_cache(maxsize=4)
def get_session_secret(environment: str, region: str = "us-east-1") -> str:
    """
    Fetch the session signing secret for an environment, once per process.
    
    Raises:
        botocore.exceptions.ClientError: If the parameter is missing or unreadable
    """
    ssm = boto3.client('ssm', region_name=region)
    response = ssm.get_parameter(
        Name=SESSION_SECRET_PARAMETER.format(environment=environment),
        WithDecryption=True
    )
    return response['Parameter']['Value']
