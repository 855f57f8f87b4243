"""
Core configuration for the Identity Web service.
Manages environment variables, session policy and AWS service settings.
"""
import logging
import os
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""
    
    # AWS Configuration
    aws_region: str = os.getenv("AWS_REGION", "us-east-1")
    identities_table_name: str = os.getenv("IDENTITIES_TABLE_NAME", "")
    
    # API Configuration
    api_title: str = os.getenv("API_TITLE", "Identity Web")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    
    # Session policy
    # true: the session cookie survives browser restarts; false: browser session only
    remember_me: bool = os.getenv("REMEMBER_ME", "true").lower() in ("1", "true", "yes", "on")
    remember_me_days: int = int(os.getenv("REMEMBER_ME_DAYS", "14"))
    session_expiration_hours: int = int(os.getenv("SESSION_EXPIRATION_HOURS", "8"))
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "identity_session")
    session_cookie_secure: bool = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in ("1", "true", "yes", "on")
    
    # Session token signing
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    use_parameter_store: bool = os.getenv("USE_PARAMETER_STORE", "false").lower() in ("1", "true", "yes", "on")
    
    # Passphrase hashing
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    
    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    
    @property
    def jwt_secret(self) -> str:
        """Get session signing secret from Parameter Store, or the local fallback."""
        fallback = os.getenv("JWT_SECRET", "dev-secret-change-in-production")
        if not self.use_parameter_store:
            return fallback
        try:
            from identity_web.core.parameter_store import get_session_secret
            return get_session_secret(self.environment, self.aws_region)
        except Exception as e:
            logger.warning("Using fallback session secret. Error: %s", e)
            return fallback
    
    @property
    def session_max_age_seconds(self) -> int:
        """Lifetime of a remembered session cookie."""
        return self.remember_me_days * 24 * 60 * 60
    
    # Environment
    environment: str = os.getenv("ENVIRONMENT", "dev")
    
    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
